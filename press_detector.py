"""
press_detector.py — Classify pointer samples into presses.

Presses detected:
  • "tap"         — button released before LONG_PRESS_SECONDS
  • "long_press"  — button held for LONG_PRESS_SECONDS (fires while held,
                    or on release if nothing polled in between)
  • "none"        — nothing to report this sample

The host feeds one sample per frame (or per mouse event) with the current
button state and a monotonic timestamp. A long press is reported exactly
once per hold, and the release that ends it is not also a tap.
"""

from typing import Optional

from utils import LONG_PRESS_SECONDS


class PressDetector:
    """Temporal press classifier operating on (is_down, timestamp) samples."""

    def __init__(self, long_press_seconds: float = LONG_PRESS_SECONDS):
        self.long_press_seconds = long_press_seconds

        # Time the current hold started, None while released
        self._down_since: Optional[float] = None
        self._long_fired: bool = False

    # ── Public API ────────────────────────────────────────────────────────

    @property
    def pressed(self) -> bool:
        return self._down_since is not None

    def update(self, is_down: bool, now: float) -> str:
        """Classify the press given the button state at time *now*."""
        if is_down:
            if self._down_since is None:
                self._down_since = now
                self._long_fired = False
            return self._check_long(now)

        if self._down_since is None:
            return "none"

        # Release: a long hold nobody polled still counts as a long press
        if self._long_fired:
            press = "none"
        elif self._held_long_enough(now):
            press = "long_press"
        else:
            press = "tap"
        self.reset()
        return press

    def poll(self, now: float) -> str:
        """Re-check a hold in progress without a new button event."""
        if self._down_since is None:
            return "none"
        return self._check_long(now)

    def reset(self):
        """Forget any hold in progress (e.g. the window lost focus)."""
        self._down_since = None
        self._long_fired = False

    # ── Helpers ───────────────────────────────────────────────────────────

    def _check_long(self, now: float) -> str:
        if not self._long_fired and self._held_long_enough(now):
            self._long_fired = True
            return "long_press"
        return "none"

    def _held_long_enough(self, now: float) -> bool:
        return now - self._down_since >= self.long_press_seconds
