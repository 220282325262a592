"""Step counter for states that run through several timed steps."""

from __future__ import annotations


class StepCounter:
    """Tracks the current step of a multi-step state; never goes below zero."""

    def __init__(self) -> None:
        self._step = 0

    @property
    def step(self) -> int:
        return self._step

    @step.setter
    def step(self, value: int) -> None:
        self._step = max(value, 0)

    def next_step(self) -> None:
        """Advance to the following step."""
        self._step += 1