"""The automated external defibrillator: device state, controls and display."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from .clock import ElapsedClock, Scheduler
from .ecg import ECGTrace, Waveform
from .indicators import (
    ChestCompressionMeter,
    ShockIndicator,
    StatusLamp,
    StepLight,
    status_lamp,
)
from .states import (
    AnalyzingState,
    BaseState,
    ElectrodesNotInstalledState,
    PerformCPRState,
    PoweredOffState,
    state_for_name,
)
from .status import (
    MAX_BATTERY,
    MINIMUM_BATTERY,
    EndOfProgramStatus,
    PadsAttachment,
    PatientStatus,
    UnitStatus,
    clamp_battery,
)

log = logging.getLogger(__name__)

_POWERED_OFF = PoweredOffState.name

_STEP_LIGHTS = (
    ("01_check_responsiveness", "CheckResponsivenessState"),
    ("02_call_emergency", "CallForHelpState"),
    ("03_attach_pads", "AttachDefibrillatorPadsState"),
    ("04_dont_touch_patient", "AnalyzingState"),
    ("05_start_cpr", "PerformCPRState"),
)

_RESTORABLE = frozenset(
    {
        "SelfTestState",
        "CheckResponsivenessState",
        "CallForHelpState",
        "AttachDefibrillatorPadsState",
        "AnalyzingState",
        "PerformCPRState",
    }
)


class _Signal:
    """A list of callbacks notified together."""

    def __init__(self) -> None:
        self._listeners: list[Callable[..., None]] = []

    def connect(self, callback: Callable[..., None]) -> None:
        self._listeners.append(callback)

    def emit(self, *args: object) -> None:
        for callback in list(self._listeners):
            callback(*args)


class AED:
    """The simulated device, which the current state drives."""

    def __init__(
        self,
        scheduler: Scheduler | None = None,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.scheduler = scheduler if scheduler is not None else Scheduler()
        self._clock = clock

        self.state_changed = _Signal()
        self.unit_status_changed = _Signal()
        self.battery_changed = _Signal()
        self.electrodes_installed_changed = _Signal()
        self.pads_attachment_changed = _Signal()

        self._unit_status = UnitStatus.DEFAULT
        self._battery = MAX_BATTERY
        self.electrodes_installed = True
        self._pads_attachment = PadsAttachment.NOT_ATTACHED
        self.patient_status = PatientStatus.DEFAULT
        self.end_of_program_status = EndOfProgramStatus.DEFAULT
        self.shock_count = 0
        self.shock_button_pressed = False
        self.last_state: str | None = None

        self.console: list[str] = []
        self.messages: list[str] = []

        self.ecg = ECGTrace()
        self.chest_compression_meter = ChestCompressionMeter()
        self.shock_indicator = ShockIndicator(self.scheduler)
        self.elapsed_clock = ElapsedClock(self.scheduler)
        self.step_lights = [
            StepLight(self.scheduler, image, state_name)
            for image, state_name in _STEP_LIGHTS
        ]
        for light in self.step_lights:
            self.state_changed.connect(
                lambda state, light=light: light.handle_state_changed(state.name)
            )

        self._state: BaseState = PoweredOffState(self)
        self._state.execute()

    @property
    def state(self) -> BaseState:
        return self._state

    @property
    def unit_status(self) -> UnitStatus:
        return self._unit_status

    @unit_status.setter
    def unit_status(self, status: UnitStatus) -> None:
        self._unit_status = status
        self.unit_status_changed.emit(status)

    @property
    def battery(self) -> int:
        return self._battery

    @battery.setter
    def battery(self, value: int) -> None:
        self._battery = clamp_battery(value)
        self.battery_changed.emit(self._battery)

    @property
    def pads_attachment(self) -> PadsAttachment:
        return self._pads_attachment

    @pads_attachment.setter
    def pads_attachment(self, attachment: PadsAttachment) -> None:
        self._pads_attachment = attachment
        self.pads_attachment_changed.emit(attachment)

    @property
    def battery_label(self) -> str:
        return f"Battery Level: {self._battery}%"

    @property
    def shock_count_label(self) -> str:
        return f"Shocks: {self.shock_count}"

    @property
    def status_lamp(self) -> StatusLamp:
        return status_lamp(self._battery, self._unit_status)

    def change_state(self, new_state: BaseState) -> None:
        """Leave the current state and enter ``new_state``, unless it is the same."""
        if new_state.name == self._state.name:
            return
        if self._state.name != _POWERED_OFF:
            self.last_state = self._state.name
        log.debug("change_state called with %s", new_state.name)
        self._state.dispose()
        self._state = new_state
        new_state.initialize()
        self.state_changed.emit(new_state)

    def play_message(self, message: str) -> None:
        """Print a spoken prompt to the console with the time of day."""
        stamp = self._clock().strftime("%H:%M:%S")
        self.console.append(f"[{stamp}]: {message}")
        self.messages.append(message)

    def has_sufficient_battery(self) -> bool:
        return self._battery >= MINIMUM_BATTERY

    def toggle_electrodes_installed(self) -> None:
        self.electrodes_installed = not self.electrodes_installed
        if self.electrodes_installed:
            self.restore_state()
        elif self._state.name != _POWERED_OFF:
            self.change_state(ElectrodesNotInstalledState(self))
        self.electrodes_installed_changed.emit(self.electrodes_installed)

    def recharge_batteries(self) -> None:
        self.battery = MAX_BATTERY
        self.change_state(PoweredOffState(self))

    def show_waveform(self, waveform: Waveform) -> None:
        self.ecg.show(waveform)

    def reset_ecg(self) -> None:
        self.ecg.reset()

    def start_shock_flashing(self) -> None:
        self.shock_indicator.start_flashing()

    def stop_shock_flashing(self) -> None:
        self.shock_indicator.stop_flashing()

    def press_shock_button(self) -> None:
        self.shock_button_pressed = True

    def clear_shock_button(self) -> None:
        self.shock_button_pressed = False

    def update_shock_count(self) -> None:
        """Count a shock, or zero the count while powered off."""
        if self._state.name == _POWERED_OFF:
            self.shock_count = 0
        else:
            self.shock_count += 1

    def start_timer(self) -> None:
        self.elapsed_clock.start()

    def stop_timer(self) -> None:
        self.elapsed_clock.reset()

    def is_performing_cpr(self) -> bool:
        return isinstance(self._state, PerformCPRState)

    def is_analyzing(self) -> bool:
        return isinstance(self._state, AnalyzingState)

    def restore_state(self) -> None:
        """Return to the state the device was in before an error interrupted it."""
        if self.last_state in _RESTORABLE:
            self.change_state(state_for_name(self.last_state, self))

    def toggle_power(self) -> None:
        """Press the power button."""
        self._state.toggle_power()