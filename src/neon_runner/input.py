"""Reduce press/release events to the two per-frame input signals.

Any source (keyboard, mouse, touch, an agent) calls ``press``/``release``;
the run controller polls ``sample`` once per frame. The press edge is
consumed by sampling, so one physical press yields exactly one edge.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class InputSignals:
    """Input for one frame."""
    pressed_edge: bool = False  # True on the single frame a press began
    held: bool = False  # True while any press is active


class InputLatch:
    """Latches press edges between frames."""

    def __init__(self) -> None:
        self._held = False
        self._pressed = False

    @property
    def held(self) -> bool:
        return self._held

    def press(self) -> None:
        # Key auto-repeat re-sends presses while held; only the first counts.
        if not self._held:
            self._pressed = True
        self._held = True

    def release(self) -> None:
        self._held = False

    def set_held(self, held: bool) -> None:
        """Level-triggered feed: derive the edge from a held/not-held sample."""
        if held:
            self.press()
        else:
            self.release()

    def sample(self) -> InputSignals:
        """Read and consume this frame's signals."""
        signals = InputSignals(pressed_edge=self._pressed, held=self._held)
        self._pressed = False
        return signals

    def clear(self) -> None:
        self._pressed = False
        self._held = False
