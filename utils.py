"""
utils.py — Shared constants, math helpers, and smoothing utilities.

This module is the foundation layer: every other module imports from here.
"""

import collections

# ─── Window names (used by cv2.imshow / cv2.namedWindow) ──────────────────────
LEMONADE_WINDOW = "Lemonade"

# ─── Canvas ───────────────────────────────────────────────────────────────────
CANVAS_W = 480
CANVAS_H = 640
BACKGROUND_COLOR = (245, 245, 245)   # BGR
SPRITE_SIZE = 320                    # Generated sprites are square
SPRITE_DIR = "assets"

# ─── Performance ──────────────────────────────────────────────────────────────
TARGET_FPS = 30
FPS_SMOOTH_WINDOW = 30           # Frames averaged for the FPS readout

# ─── Lemon sizes ──────────────────────────────────────────────────────────────
LEMON_MIN_SIZE = 2               # Fewest squeezes a lemon can need
LEMON_MAX_SIZE = 4               # Most squeezes a lemon can need
NO_LEMON = -1                    # Sentinel for both counters

# ─── Input timing ─────────────────────────────────────────────────────────────
LONG_PRESS_SECONDS = 0.5         # Hold this long to peek instead of tap
SNACKBAR_SECONDS = 2.0           # How long a peek notification stays up
SNACKBAR_FADE = 0.25             # Fraction of the duration spent fading out

# ─── Diagnostics ──────────────────────────────────────────────────────────────
DIAGNOSTIC_HISTORY = 16          # Most recent diagnostics kept by the FSM
DEBUG = False                    # Print [FSM] transition traces


# ═══════════════════════════════════════════════════════════════════════════════
#  Math helpers
# ═══════════════════════════════════════════════════════════════════════════════

def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation from *a* to *b* by factor *t* ∈ [0, 1]."""
    return a + (b - a) * t


def clamp(val: float, lo: float, hi: float) -> float:
    """Clamp *val* to the range [lo, hi]."""
    return max(lo, min(hi, val))


# ═══════════════════════════════════════════════════════════════════════════════
#  Moving average filter
# ═══════════════════════════════════════════════════════════════════════════════

class MovingAverage:
    """Simple moving-average filter backed by a fixed-size deque.

    Usage:
        smoother = MovingAverage(window=30)
        smooth_val = smoother.update(raw_val)
    """

    def __init__(self, window: int = FPS_SMOOTH_WINDOW):
        self._buf: collections.deque = collections.deque(maxlen=window)

    def update(self, value: float) -> float:
        """Push *value* and return the current average."""
        self._buf.append(value)
        return sum(self._buf) / len(self._buf)

    def reset(self):
        """Clear the buffer."""
        self._buf.clear()
