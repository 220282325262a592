"""The AED's operating states and the transitions between them."""

from __future__ import annotations

import logging
from typing import ClassVar, Protocol

from .clock import Scheduler, Timer
from .ecg import Waveform
from .indicators import ChestCompressionMeter
from .status import (
    SHOCK_BATTERY_COST,
    EndOfProgramStatus,
    PadsAttachment,
    PatientStatus,
    UnitStatus,
)
from .steps import StepCounter

log = logging.getLogger(__name__)


class StateContext(Protocol):
    """What a state needs from the device it runs on."""

    scheduler: Scheduler
    battery: int
    unit_status: UnitStatus
    electrodes_installed: bool
    pads_attachment: PadsAttachment
    patient_status: PatientStatus
    end_of_program_status: EndOfProgramStatus
    shock_button_pressed: bool
    chest_compression_meter: ChestCompressionMeter

    def change_state(self, new_state: BaseState) -> None: ...

    def play_message(self, message: str) -> None: ...

    def has_sufficient_battery(self) -> bool: ...

    def show_waveform(self, waveform: Waveform) -> None: ...

    def reset_ecg(self) -> None: ...

    def start_shock_flashing(self) -> None: ...

    def stop_shock_flashing(self) -> None: ...

    def clear_shock_button(self) -> None: ...

    def update_shock_count(self) -> None: ...

    def start_timer(self) -> None: ...

    def stop_timer(self) -> None: ...


class BaseState:
    """A state of the AED. Subclasses set ``name`` and override the hooks."""

    name: ClassVar[str] = "BaseState"
    SPEECH_DELAY_MS = 2000

    def __init__(self, context: StateContext) -> None:
        if type(self) is BaseState:
            raise TypeError("BaseState is abstract; use one of its subclasses")
        self.context = context
        self._timer = Timer(context.scheduler, self.execute)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def initialize(self) -> None:
        """Called once when the device enters this state."""

    def execute(self) -> None:
        """Called each time the state's timer expires."""

    def toggle_power(self) -> None:
        """The power button switches the device off."""
        self.context.change_state(PoweredOffState(self.context))

    def dispose(self) -> None:
        """Called when the device leaves this state; stops its timer."""
        self._timer.stop()


class _SteppedState(BaseState):
    """A state that runs through numbered steps."""

    def __init__(self, context: StateContext) -> None:
        super().__init__(context)
        self._steps = StepCounter()

    @property
    def step(self) -> int:
        return self._steps.step

    @step.setter
    def step(self, value: int) -> None:
        self._steps.step = value


class PoweredOffState(BaseState):
    """The device is off; it beeps while the battery is low."""

    name = "PoweredOffState"
    BEEP_INTERVAL_MS = 2000

    def initialize(self) -> None:
        ctx = self.context
        ctx.play_message("Powering off.")
        ctx.unit_status = UnitStatus.DEFAULT
        ctx.stop_timer()
        ctx.update_shock_count()
        ctx.reset_ecg()
        ctx.stop_shock_flashing()
        self.execute()

    def execute(self) -> None:
        if not self.context.has_sufficient_battery():
            self.context.play_message("*Beep*")
        self._timer.start(self.BEEP_INTERVAL_MS)

    def toggle_power(self) -> None:
        if self.context.battery > 0:
            self.context.start_timer()
            self.context.change_state(SelfTestState(self.context))


class SelfTestState(_SteppedState):
    """Checks battery and electrodes before guiding the rescuer."""

    name = "SelfTestState"
    SELF_TEST_DURATION_MS = 3000

    def initialize(self) -> None:
        self._timer.start(self.SELF_TEST_DURATION_MS)

    def execute(self) -> None:
        ctx = self.context
        step = self.step
        if step == 0:
            if not ctx.has_sufficient_battery():
                ctx.unit_status = UnitStatus.FAILED
                ctx.change_state(LowBatteryState(ctx))
                return
            if not ctx.electrodes_installed:
                ctx.unit_status = UnitStatus.FAILED
                ctx.change_state(ElectrodesNotInstalledState(ctx))
                return
            ctx.unit_status = UnitStatus.OK
            ctx.play_message("Automatic defibrillator unit OK.")
            self._timer.start(self.SPEECH_DELAY_MS)
        elif step == 1:
            ctx.play_message("Stay calm.")
            self._timer.start(self.SPEECH_DELAY_MS)
        elif step == 2:
            ctx.change_state(CheckResponsivenessState(ctx))
            return
        self._steps.next_step()


class CheckResponsivenessState(BaseState):
    name = "CheckResponsivenessState"
    DURATION_MS = 5000

    def initialize(self) -> None:
        self.context.play_message("Check responsiveness.")
        self._timer.start(self.DURATION_MS)

    def execute(self) -> None:
        self.context.change_state(CallForHelpState(self.context))


class CallForHelpState(BaseState):
    name = "CallForHelpState"
    DURATION_MS = 5000

    def initialize(self) -> None:
        self.context.play_message("Call for help.")
        self._timer.start(self.DURATION_MS)

    def execute(self) -> None:
        self.context.change_state(AttachDefibrillatorPadsState(self.context))


class AttachDefibrillatorPadsState(BaseState):
    """Waits until the pads are on the patient's chest."""

    name = "AttachDefibrillatorPadsState"
    POLL_INTERVAL_MS = 2000

    def initialize(self) -> None:
        self.context.play_message("Attach defib pads to patient's bare chest.")
        self._timer.start(self.POLL_INTERVAL_MS)

    def execute(self) -> None:
        if self.context.pads_attachment is not PadsAttachment.ATTACHED:
            self._timer.start(self.POLL_INTERVAL_MS)
            return
        self.context.change_state(AnalyzingState(self.context))


_WAVEFORMS = {
    PatientStatus.VT: Waveform.VT,
    PatientStatus.VF: Waveform.VF,
    PatientStatus.PEA: Waveform.PEA,
    PatientStatus.ASYSTOLE: Waveform.ASYSTOLE,
}

_NON_SHOCKABLE = (PatientStatus.PEA, PatientStatus.ASYSTOLE)


class AnalyzingState(_SteppedState):
    """Analyses the heart rhythm and delivers a shock when one is advised."""

    name = "AnalyzingState"
    ANALYZING_STATE_DURATION_MS = 5000
    POLL_INTERVAL_MS = 100
    AFTER_SHOCK_MS = 3000
    BEFORE_CPR_MS = 1000

    def initialize(self) -> None:
        self.context.play_message("Don't touch patient. Analyzing")
        self._timer.start(self.ANALYZING_STATE_DURATION_MS)

    def execute(self) -> None:
        ctx = self.context
        step = self.step
        if step == 0:
            self._timer.start(self.POLL_INTERVAL_MS)
            if ctx.patient_status is PatientStatus.DEFAULT:
                log.debug("Select Patient Status")
                return
        elif step == 1:
            if not self._advise_shock():
                return
        elif step == 2:
            ctx.clear_shock_button()
            ctx.play_message("Press Shock Indicator Button")
            self._timer.start(self.ANALYZING_STATE_DURATION_MS)
        elif step == 3:
            if ctx.patient_status is PatientStatus.ASYSTOLE:
                self.step = 1
                self._timer.start(self.POLL_INTERVAL_MS)
                return
            if not ctx.shock_button_pressed:
                self._timer.start(self.POLL_INTERVAL_MS)
                return
            ctx.clear_shock_button()
            ctx.play_message("Shock will be delivered in three, two, one ....")
            self._timer.start(self.ANALYZING_STATE_DURATION_MS)
        elif step == 4:
            ctx.play_message("Shock delivered")
            ctx.battery = ctx.battery - SHOCK_BATTERY_COST
            ctx.update_shock_count()
            if ctx.end_of_program_status is EndOfProgramStatus.SHOCK_REVIVES_PATIENT:
                ctx.show_waveform(Waveform.PEA)
                ctx.play_message("Shock Revived Patient. AED Shutting Off")
            self._timer.start(self.AFTER_SHOCK_MS)
        elif step == 5:
            if ctx.end_of_program_status is EndOfProgramStatus.SHOCK_REVIVES_PATIENT:
                ctx.change_state(PoweredOffState(ctx))
                return
            if ctx.battery == 0:
                ctx.play_message("Battery Reached 0.")
                ctx.change_state(PoweredOffState(ctx))
                return
            if not ctx.has_sufficient_battery():
                ctx.change_state(LowBatteryState(ctx))
                return
            self._timer.start(self.BEFORE_CPR_MS)
        elif step == 6:
            ctx.stop_shock_flashing()
            ctx.change_state(PerformCPRState(ctx))
            return
        self._steps.next_step()

    def _advise_shock(self) -> bool:
        """Show the rhythm and prepare a shock; False if none will follow."""
        ctx = self.context
        status = ctx.patient_status
        waveform = _WAVEFORMS.get(status)
        if waveform is not None:
            ctx.show_waveform(waveform)
        if status in _NON_SHOCKABLE:
            ctx.play_message("No Shock Is Advised")
            ctx.change_state(PerformCPRState(ctx))
            return False
        if ctx.battery >= SHOCK_BATTERY_COST:
            ctx.start_shock_flashing()
            ctx.play_message("Give STAND CLEAR Warning. DO NOT touch patient")
            self._timer.start(self.ANALYZING_STATE_DURATION_MS)
            return True
        ctx.play_message("Not enough battery to perform shock")
        return False


class PerformCPRState(_SteppedState):
    """Coaches the rescuer through a round of chest compressions."""

    name = "PerformCPRState"
    COACHING_INTERVAL_MS = 2000
    GOOD_DEPTH_MS = 5000
    REVIVED_MS = 3000
    CHECK_MS = 10

    def initialize(self) -> None:
        ctx = self.context
        ctx.play_message("Perform CPR.")
        ctx.play_message("2 breaths for every 30 compressions.")
        meter = ctx.chest_compression_meter
        meter.compression_type_index = 0
        meter.visible = True
        self._timer.start(self.COACHING_INTERVAL_MS)

    def execute(self) -> None:
        ctx = self.context
        meter = ctx.chest_compression_meter
        step = self.step
        revived = ctx.end_of_program_status is EndOfProgramStatus.CPR_REVIVES_PATIENT
        if step == 0:
            ctx.play_message("Compression too deep. Reduce force.")
            meter.compression_type_index = 3
            self._timer.start(self.COACHING_INTERVAL_MS)
        elif step == 1:
            ctx.play_message("Compression too shallow. Press harder.")
            meter.compression_type_index = 1
            self._timer.start(self.COACHING_INTERVAL_MS)
        elif step == 2:
            ctx.play_message("Good compression depth. Keep going.")
            meter.compression_type_index = 2
            self._timer.start(self.GOOD_DEPTH_MS)
        elif step == 3:
            if revived:
                ctx.show_waveform(Waveform.PEA)
                ctx.play_message("CPR Revived Patient. AED Shutting Off")
                self._timer.start(self.REVIVED_MS)
            else:
                self._timer.start(self.CHECK_MS)
        elif step == 4:
            if revived:
                ctx.change_state(PoweredOffState(ctx))
                return
            self._timer.start(self.CHECK_MS)
        elif step == 5:
            ctx.play_message("Stop CPR.")
            meter.visible = False
            ctx.change_state(AnalyzingState(ctx))
            return
        self._steps.next_step()

    def dispose(self) -> None:
        self.context.chest_compression_meter.visible = False
        super().dispose()


class ElectrodesNotInstalledState(BaseState):
    name = "ElectrodesNotInstalledState"

    def initialize(self) -> None:
        self.context.play_message("Attach electrode pads.")
        self.context.reset_ecg()


class LowBatteryState(BaseState):
    name = "LowBatteryState"

    def initialize(self) -> None:
        self.context.play_message("Change batteries.")


_STATES: dict[str, type[BaseState]] = {
    cls.name: cls
    for cls in (
        PoweredOffState,
        SelfTestState,
        CheckResponsivenessState,
        CallForHelpState,
        AttachDefibrillatorPadsState,
        AnalyzingState,
        PerformCPRState,
        ElectrodesNotInstalledState,
        LowBatteryState,
    )
}


def state_for_name(name: str, context: StateContext) -> BaseState:
    """Create a new state of the class with the given name."""
    try:
        cls = _STATES[name]
    except KeyError:
        raise ValueError(f"unknown state: {name!r}") from None
    return cls(context)