import pytest

from aedsim.clock import Scheduler
from aedsim.indicators import (
    LIGHT_FLASH_INTERVAL_MS,
    ChestCompressionMeter,
    ShockIndicator,
    StatusLamp,
    StepLight,
    status_lamp,
)
from aedsim.status import UnitStatus


@pytest.fixture
def scheduler():
    return Scheduler()


def test_step_light_flashes(scheduler):
    light = StepLight(scheduler, "03_attach_pads", "AttachDefibrillatorPadsState")
    light.turn_on()
    assert light.illuminated
    assert light.image == "03_attach_pads_on.png"
    scheduler.advance(LIGHT_FLASH_INTERVAL_MS)
    assert not light.illuminated
    scheduler.advance(LIGHT_FLASH_INTERVAL_MS)
    assert light.illuminated


def test_step_light_turn_off(scheduler):
    light = StepLight(scheduler, "02_call_emergency", "CallForHelpState")
    light.turn_on()
    light.turn_off()
    scheduler.advance(LIGHT_FLASH_INTERVAL_MS * 4)
    assert not light.illuminated
    assert light.image == "02_call_emergency_off.png"
    assert scheduler.pending == 0


def test_step_light_follows_state(scheduler):
    light = StepLight(scheduler, "05_start_cpr", "PerformCPRState")
    light.handle_state_changed("PerformCPRState")
    assert light.flashing
    light.handle_state_changed("AnalyzingState")
    assert not light.flashing
    assert not light.illuminated


def test_shock_indicator_flashing(scheduler):
    indicator = ShockIndicator(scheduler)
    indicator.start_flashing()
    assert indicator.illuminated
    assert indicator.image == "shock_indicator_on.png"
    scheduler.advance(ShockIndicator.ON_DURATION_MS)
    assert not indicator.illuminated
    scheduler.advance(ShockIndicator.OFF_DURATION_MS)
    assert indicator.illuminated


def test_shock_indicator_stop(scheduler):
    indicator = ShockIndicator(scheduler)
    indicator.start_flashing()
    indicator.stop_flashing()
    scheduler.advance(5000)
    assert not indicator.illuminated
    assert not indicator.flashing
    assert indicator.image == "shock_indicator_off.png"


@pytest.mark.parametrize("unit_status", list(UnitStatus))
def test_dead_battery_always_fails(unit_status):
    assert status_lamp(0, unit_status) is StatusLamp.FAILED


@pytest.mark.parametrize(
    "unit_status, lamp",
    [
        (UnitStatus.OK, StatusLamp.PASSED),
        (UnitStatus.FAILED, StatusLamp.FAILED),
        (UnitStatus.DEFAULT, StatusLamp.OFF),
    ],
)
def test_status_lamp_follows_unit_status(unit_status, lamp):
    assert status_lamp(80, unit_status) is lamp


def test_status_lamp_images():
    assert status_lamp(100, UnitStatus.OK).value == "status_indicator_passed.png"
    assert status_lamp(0, UnitStatus.OK).value == "status_indicator_failed.png"
    assert status_lamp(100, UnitStatus.DEFAULT).value == "status_indicator_off.png"


def test_meter_default_image():
    meter = ChestCompressionMeter()
    assert meter.image_name() == "adult_meter_default.png"
    assert not meter.visible


def test_meter_every_combination_distinct():
    meter = ChestCompressionMeter()
    names = set()
    for p in range(len(meter.PATIENT_TYPES)):
        for c in range(len(meter.COMPRESSION_TYPES)):
            meter.patient_type_index = p
            meter.compression_type_index = c
            name = meter.image_name()
            assert name.startswith(meter.PATIENT_TYPES[p])
            assert name.endswith(meter.COMPRESSION_TYPES[c] + ".png")
            names.add(name)
    assert len(names) == len(meter.PATIENT_TYPES) * len(meter.COMPRESSION_TYPES)


def test_meter_index_out_of_range():
    meter = ChestCompressionMeter()
    with pytest.raises(IndexError):
        meter.patient_type_index = 3
    with pytest.raises(IndexError):
        meter.compression_type_index = -1
    assert meter.image_name() == "adult_meter_default.png"