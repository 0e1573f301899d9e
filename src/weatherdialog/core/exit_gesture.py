"""Timed multi-press gesture that ends the summary."""

import logging

from weatherdialog.models import ExitSequence

logger = logging.getLogger(__name__)


class ExitGestureTracker:
    """
    Counts presses of the exit button inside a sliding start window.

    The first press anchors the window. A press arriving more than
    ``window_ms`` after the anchor starts a new sequence instead of counting.
    Completion is only reported on release, so the transition happens when
    the last press is let go.
    """

    def __init__(self, required_presses: int = 4, window_ms: float = 3000):
        self.required_presses = required_presses
        self.window_ms = window_ms
        self.sequence = ExitSequence()

    @property
    def completed(self) -> bool:
        return self.sequence.press_count >= self.required_presses

    def press(self, now_ms: float) -> int:
        """
        Record a press.

        Returns:
            Press count of the current sequence
        """
        seq = self.sequence
        if seq.press_count == 0 or seq.window_start is None:
            seq.window_start = now_ms
            seq.press_count = 1
        elif now_ms - seq.window_start > self.window_ms:
            logger.warning(
                f"Too slow! Resetting. Press the exit button {self.required_presses} "
                f"times within {self.window_ms / 1000:g} seconds."
            )
            seq.window_start = now_ms
            seq.press_count = 1
        else:
            seq.press_count += 1

        elapsed = now_ms - seq.window_start
        logger.info(f"Exit press {seq.press_count}/{self.required_presses} ({elapsed / 1000:.1f}s elapsed)")
        if self.completed:
            logger.info(f"Exit gesture complete in {elapsed / 1000:.1f} seconds")
        return seq.press_count

    def release(self) -> bool:
        """True when the release ends a completed sequence."""
        return self.completed

    def reset(self) -> None:
        self.sequence.reset()
