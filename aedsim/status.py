"""Device and patient status values shared across the simulator."""

from __future__ import annotations

from enum import Enum, auto

DISPLAY_SIZE = 700
SHOCK_BATTERY_COST = 10
"""Battery percentage used up by one shock."""
MINIMUM_BATTERY = 40
"""Lowest battery percentage that passes the self-test."""
MAX_BATTERY = 100


class UnitStatus(Enum):
    OK = auto()
    FAILED = auto()
    DEFAULT = auto()


class PadsAttachment(Enum):
    NOT_ATTACHED = auto()
    ATTACHED = auto()


class PatientStatus(Enum):
    VT = auto()
    VF = auto()
    PEA = auto()
    ASYSTOLE = auto()
    DEFAULT = auto()


class EndOfProgramStatus(Enum):
    EMS_ARRIVES = auto()
    CPR_REVIVES_PATIENT = auto()
    SHOCK_REVIVES_PATIENT = auto()
    PATIENT_DIES = auto()
    DEFAULT = auto()


def clamp_battery(value: int) -> int:
    """Limit a battery level to the range 0..MAX_BATTERY."""
    return max(min(value, MAX_BATTERY), 0)