import pytest

from aedsim.ecg import REPEATS, ECGTrace, Waveform, waveform_samples


@pytest.mark.parametrize("waveform", list(Waveform))
def test_show_repeats_cycle(waveform):
    trace = ECGTrace()
    trace.show(waveform)
    samples = waveform_samples(waveform)
    assert trace.y_values == samples * REPEATS
    assert trace.x_values == tuple(range(len(samples) * REPEATS))
    assert trace.waveform is waveform


@pytest.mark.parametrize("waveform", list(Waveform))
def test_cycles_fit_time_axis(waveform):
    trace = ECGTrace()
    trace.show(waveform)
    assert len(trace.x_values) == ECGTrace.X_RANGE[1]


def test_asystole_is_flat():
    assert set(waveform_samples(Waveform.ASYSTOLE)) == {0}


def test_vf_alternates():
    samples = waveform_samples(Waveform.VF)
    assert set(samples) == {-2, 2}
    assert all(a == -b for a, b in zip(samples, samples[1:]))


def test_pea_peak():
    assert max(waveform_samples(Waveform.PEA)) == 10


def test_samples_stay_in_y_range():
    low, high = ECGTrace.Y_RANGE
    for waveform in Waveform:
        assert all(low <= v <= high for v in waveform_samples(waveform))


def test_reset_clears_trace():
    trace = ECGTrace()
    trace.show(Waveform.VT)
    trace.reset()
    assert trace.points == []
    assert trace.waveform is None


def test_show_accepts_value_string():
    trace = ECGTrace()
    trace.show("vf")
    assert trace.waveform is Waveform.VF


def test_unknown_waveform():
    with pytest.raises(ValueError):
        waveform_samples("sinus")