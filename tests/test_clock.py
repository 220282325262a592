import pytest

from aedsim.clock import ElapsedClock, Scheduler, Timer, format_elapsed


def test_scheduler_runs_callbacks_in_due_order():
    scheduler = Scheduler()
    fired = []
    scheduler.call_later(300, lambda: fired.append("late"))
    scheduler.call_later(100, lambda: fired.append("early"))
    assert scheduler.advance(50) == 0
    assert scheduler.advance(300) == 2
    assert fired == ["early", "late"]
    assert scheduler.now == 350


def test_scheduler_cancel():
    scheduler = Scheduler()
    fired = []
    handle = scheduler.call_later(10, lambda: fired.append(1))
    scheduler.cancel(handle)
    scheduler.advance(100)
    assert fired == []
    assert scheduler.pending == 0


def test_scheduler_runs_callbacks_scheduled_during_advance():
    scheduler = Scheduler()
    times = []

    def first():
        times.append(scheduler.now)
        scheduler.call_later(20, lambda: times.append(scheduler.now))

    scheduler.call_later(10, first)
    assert scheduler.advance(100) == 2
    assert times == [10, 30]
    assert scheduler.pending == 0


def test_scheduler_rejects_negative_values():
    scheduler = Scheduler()
    with pytest.raises(ValueError):
        scheduler.advance(-1)
    with pytest.raises(ValueError):
        scheduler.call_later(-5, lambda: None)


def test_single_shot_timer_fires_once():
    scheduler = Scheduler()
    fired = []
    timer = Timer(scheduler, lambda: fired.append(scheduler.now))
    timer.start(500)
    assert timer.active
    scheduler.advance(2000)
    assert fired == [500]
    assert not timer.active


def test_restarting_timer_discards_pending_expiry():
    scheduler = Scheduler()
    fired = []
    timer = Timer(scheduler, lambda: fired.append(scheduler.now))
    timer.start(500)
    scheduler.advance(400)
    timer.start(500)
    scheduler.advance(1000)
    assert fired == [900]


def test_stopped_timer_does_not_fire():
    scheduler = Scheduler()
    fired = []
    timer = Timer(scheduler, lambda: fired.append(1))
    timer.start(100)
    timer.stop()
    scheduler.advance(1000)
    assert fired == []
    assert not timer.active


def test_repeating_timer():
    scheduler = Scheduler()
    fired = []
    timer = Timer(scheduler, lambda: fired.append(scheduler.now), single_shot=False)
    timer.start(100)
    scheduler.advance(350)
    assert fired == [100, 200, 300]
    assert timer.active
    with pytest.raises(ValueError):
        timer.start(0)


def test_format_elapsed_zero():
    assert format_elapsed(0) == "00:00:00"


def test_format_elapsed_components():
    assert format_elapsed(3_661_999) == "01:01:01"


def test_format_elapsed_negative():
    with pytest.raises(ValueError):
        format_elapsed(-1)


def test_elapsed_clock_initial_text():
    clock = ElapsedClock(Scheduler())
    assert clock.text == "Elapsed Time: 00:00:00"
    assert clock.elapsed_ms == 0


def test_elapsed_clock_updates_each_second():
    scheduler = Scheduler()
    clock = ElapsedClock(scheduler)
    clock.start()
    scheduler.advance(2500)
    assert clock.elapsed_ms == 2500
    assert clock.text == "Elapsed Time: " + format_elapsed(2000)
    assert clock.running


def test_elapsed_clock_reset_stops_and_zeroes():
    scheduler = Scheduler()
    clock = ElapsedClock(scheduler)
    clock.start()
    scheduler.advance(5000)
    clock.reset()
    assert clock.text == "Elapsed Time: 00:00:00"
    assert not clock.running
    scheduler.advance(5000)
    assert clock.text == "Elapsed Time: 00:00:00"