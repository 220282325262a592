"""ECG rhythm waveforms and the trace that displays them."""

from __future__ import annotations

from enum import Enum


class Waveform(Enum):
    PEA = "pea"
    ASYSTOLE = "asystole"
    VT = "vt"
    VF = "vf"


REPEATS = 3

_SAMPLES: dict[Waveform, tuple[float, ...]] = {
    Waveform.PEA: (0, 0, 0, 0, 0, 0, 0, 1, -1, 10, -1, 0, 0, 1, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    Waveform.ASYSTOLE: (0,) * 24,
    Waveform.VT: (
        -2, 2, -1, 1, -1, 1, -1, 1, 0.5, -0.5, -1, 1,
        0.5, -0.5, -2, 2, -1, 1, -1, 1, -1, 1, 0.5, -0.5,
    ),
    Waveform.VF: (-2, 2) * 12,
}


def waveform_samples(waveform: Waveform | str) -> tuple[float, ...]:
    """Return one cycle of amplitude samples for a rhythm."""
    return _SAMPLES[Waveform(waveform)]


class ECGTrace:
    """The ECG display: the selected rhythm repeated across the time axis."""

    TITLE = "ECG Waveform"
    X_LABEL = "Time"
    Y_LABEL = "Amplitude"
    X_RANGE = (0, 72)
    Y_RANGE = (-2, 12)

    def __init__(self) -> None:
        self.waveform: Waveform | None = None
        self.x_values: tuple[int, ...] = ()
        self.y_values: tuple[float, ...] = ()

    @property
    def points(self) -> list[tuple[int, float]]:
        return list(zip(self.x_values, self.y_values))

    def show(self, waveform: Waveform | str) -> None:
        self.waveform = Waveform(waveform)
        self._plot(waveform_samples(self.waveform))

    def reset(self) -> None:
        self.waveform = None
        self._plot(())

    def _plot(self, samples: tuple[float, ...]) -> None:
        self.y_values = tuple(samples) * REPEATS
        self.x_values = tuple(range(len(self.y_values)))