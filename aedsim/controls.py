"""Simulation controls: the events a trainer feeds into the device."""

from __future__ import annotations

from typing import Callable, Sequence

from .device import AED
from .ecg import Waveform
from .states import BaseState, PoweredOffState
from .status import (
    MAX_BATTERY,
    EndOfProgramStatus,
    PadsAttachment,
    PatientStatus,
    clamp_battery,
)

PATIENT_STATUS_OPTIONS = (
    "Select Patient Status",
    "Pulseless Ventricular Tachycardia (Shock Given)",
    "Ventricular Fibrillation (Shock Given)",
    "Asystole (Shock Not Given)",
    "Pulseless Electrical Activity (Shock Not Given)",
)
_PATIENT_STATUSES = (
    PatientStatus.DEFAULT,
    PatientStatus.VT,
    PatientStatus.VF,
    PatientStatus.ASYSTOLE,
    PatientStatus.PEA,
)

PATIENT_TYPE_OPTIONS = ("Adult", "Child", "Infant")

PAD_ATTACHMENT_OPTIONS = ("Not attached", "Attached")
_PAD_ATTACHMENTS = (PadsAttachment.NOT_ATTACHED, PadsAttachment.ATTACHED)

END_PROGRAM_OPTIONS = (
    "Select End Program",
    "Emergency Services' arrives",
    "CPR regenerates the heart beat",
    "The shock revives the patient",
    "Patient Dies",
)
_END_STATUSES = (
    EndOfProgramStatus.DEFAULT,
    EndOfProgramStatus.EMS_ARRIVES,
    EndOfProgramStatus.CPR_REVIVES_PATIENT,
    EndOfProgramStatus.SHOCK_REVIVES_PATIENT,
    EndOfProgramStatus.PATIENT_DIES,
)


def electrodes_label(installed: bool) -> str:
    """Text describing whether the electrodes are installed."""
    return f"Electrodes Installed: {'true' if installed else 'false'}"


class _Choice:
    """A drop-down selection that reports only actual changes."""

    def __init__(self, options: Sequence[str], on_change: Callable[[int], None]) -> None:
        self.options = tuple(options)
        self.index = 0
        self._on_change = on_change

    def select(self, index: int) -> None:
        if not 0 <= index < len(self.options):
            raise IndexError(f"option index out of range: {index}")
        if index == self.index:
            return
        self.index = index
        self._on_change(index)


class ControlPanel:
    """The trainer's controls for patient condition, battery, pads and outcome."""

    def __init__(self, aed: AED) -> None:
        self.aed = aed
        self._patient_status = _Choice(PATIENT_STATUS_OPTIONS, self._patient_status_changed)
        self._patient_type = _Choice(PATIENT_TYPE_OPTIONS, self._patient_type_changed)
        self._pad_attachment = _Choice(PAD_ATTACHMENT_OPTIONS, self._pad_attachment_changed)
        self._end_program = _Choice(END_PROGRAM_OPTIONS, self._end_program_changed)
        self.battery_setting = MAX_BATTERY
        self.electrodes_text = electrodes_label(aed.electrodes_installed)

        aed.electrodes_installed_changed.connect(self._electrodes_changed)
        aed.state_changed.connect(self._state_changed)

    @property
    def patient_status_index(self) -> int:
        return self._patient_status.index

    @property
    def patient_type_index(self) -> int:
        return self._patient_type.index

    @property
    def pad_attachment_index(self) -> int:
        return self._pad_attachment.index

    @property
    def end_program_index(self) -> int:
        return self._end_program.index

    def select_patient_status(self, index: int) -> None:
        self._patient_status.select(index)

    def select_patient_type(self, index: int) -> None:
        self._patient_type.select(index)

    def select_pad_attachment(self, index: int) -> None:
        self._pad_attachment.select(index)

    def update_battery(self, level: int) -> None:
        """Set the battery level; an empty battery switches the device off."""
        self.battery_setting = clamp_battery(level)
        self.aed.battery = self.battery_setting
        if self.battery_setting <= 0:
            self.aed.change_state(PoweredOffState(self.aed))

    def recharge_batteries(self) -> None:
        self.aed.recharge_batteries()

    def toggle_electrodes(self) -> None:
        self.aed.toggle_electrodes_installed()

    def select_end_program(self, index: int) -> None:
        self._end_program.select(index)

    def reset_end_program(self) -> None:
        """Clear the chosen outcome."""
        self._end_program.select(0)

    def _patient_status_changed(self, index: int) -> None:
        self.aed.patient_status = _PATIENT_STATUSES[index]

    def _patient_type_changed(self, index: int) -> None:
        self.aed.chest_compression_meter.patient_type_index = index

    def _pad_attachment_changed(self, index: int) -> None:
        self.aed.pads_attachment = _PAD_ATTACHMENTS[index]

    def _end_program_changed(self, index: int) -> None:
        aed = self.aed
        status = _END_STATUSES[index]
        if status is EndOfProgramStatus.EMS_ARRIVES:
            aed.play_message("EMS has arrived. AED powering off")
            aed.change_state(PoweredOffState(aed))
        elif status is EndOfProgramStatus.PATIENT_DIES:
            aed.patient_status = PatientStatus.ASYSTOLE
            aed.play_message("Patient has died")
            if aed.is_performing_cpr() or aed.is_analyzing():
                aed.show_waveform(Waveform.ASYSTOLE)
        aed.end_of_program_status = status

    def _electrodes_changed(self, installed: bool) -> None:
        self.electrodes_text = electrodes_label(installed)

    def _state_changed(self, state: BaseState) -> None:
        if state.name == PoweredOffState.name:
            self.reset_end_program()