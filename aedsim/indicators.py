"""Lights and displays on the device face."""

from __future__ import annotations

from enum import Enum

from .clock import Scheduler, Timer
from .status import UnitStatus

LIGHT_FLASH_INTERVAL_MS = 500


class StepLight:
    """An illustrated step that flashes while its state is active."""

    def __init__(self, scheduler: Scheduler, image_name: str, state_name: str) -> None:
        self.image_name = image_name
        self.state_name = state_name
        self.illuminated = False
        self._timer = Timer(scheduler, self._toggle)

    @property
    def image(self) -> str:
        return f"{self.image_name}_{'on' if self.illuminated else 'off'}.png"

    @property
    def flashing(self) -> bool:
        return self._timer.active

    def turn_on(self) -> None:
        self.illuminated = True
        self._timer.start(LIGHT_FLASH_INTERVAL_MS)

    def turn_off(self) -> None:
        self.illuminated = False
        self._timer.stop()

    def handle_state_changed(self, state_name: str) -> None:
        if state_name == self.state_name:
            self.turn_on()
        else:
            self.turn_off()

    def _toggle(self) -> None:
        self.illuminated = not self.illuminated
        self._timer.start(LIGHT_FLASH_INTERVAL_MS)


class ShockIndicator:
    """The shock button's light, which flashes when a shock is advised."""

    ON_DURATION_MS = 500
    OFF_DURATION_MS = 500

    def __init__(self, scheduler: Scheduler) -> None:
        self.illuminated = False
        self._timer = Timer(scheduler, self._toggle)

    @property
    def image(self) -> str:
        return f"shock_indicator_{'on' if self.illuminated else 'off'}.png"

    @property
    def flashing(self) -> bool:
        return self._timer.active

    def start_flashing(self) -> None:
        self._toggle()

    def stop_flashing(self) -> None:
        self._timer.stop()
        self.illuminated = False

    def _toggle(self) -> None:
        self.illuminated = not self.illuminated
        self._timer.start(self.ON_DURATION_MS if self.illuminated else self.OFF_DURATION_MS)


class StatusLamp(Enum):
    OFF = "status_indicator_off.png"
    FAILED = "status_indicator_failed.png"
    PASSED = "status_indicator_passed.png"


def status_lamp(battery: int, unit_status: UnitStatus) -> StatusLamp:
    """The lamp to show for a battery level and self-test result."""
    if battery <= 0:
        return StatusLamp.FAILED
    if unit_status is UnitStatus.FAILED:
        return StatusLamp.FAILED
    if unit_status is UnitStatus.OK:
        return StatusLamp.PASSED
    return StatusLamp.OFF


class ChestCompressionMeter:
    """Meter showing compression depth for the selected patient type."""

    PATIENT_TYPES = ("adult", "child", "infant")
    COMPRESSION_TYPES = ("default", "shallow", "good", "deep")

    def __init__(self) -> None:
        self._patient_type_index = 0
        self._compression_type_index = 0
        self.visible = False

    @property
    def patient_type_index(self) -> int:
        return self._patient_type_index

    @patient_type_index.setter
    def patient_type_index(self, index: int) -> None:
        self._patient_type_index = self._checked(index, self.PATIENT_TYPES, "patient type")

    @property
    def compression_type_index(self) -> int:
        return self._compression_type_index

    @compression_type_index.setter
    def compression_type_index(self, index: int) -> None:
        self._compression_type_index = self._checked(
            index, self.COMPRESSION_TYPES, "compression type"
        )

    def image_name(self) -> str:
        patient = self.PATIENT_TYPES[self._patient_type_index]
        compression = self.COMPRESSION_TYPES[self._compression_type_index]
        return f"{patient}_meter_{compression}.png"

    @staticmethod
    def _checked(index: int, options: tuple[str, ...], what: str) -> int:
        if not 0 <= index < len(options):
            raise IndexError(f"{what} index out of range: {index}")
        return index