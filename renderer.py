"""
renderer.py — Renders the lemonade scene onto the window canvas.

Responsibilities:
  • Load one RGBA sprite per image directive (transparent PNGs).
  • Alpha-blend the sprite for the current stage onto the canvas.
  • Draw the caption under the sprite.
  • Draw the peek snackbar while it is visible.
  • Draw an optional debug overlay (stage, counters, FPS).

The renderer never changes the session; it only reads the controller.
"""

import os
from typing import Optional

import cv2
import numpy as np

from lemonade_controller import LemonadeController
from state_machine import IMAGES
from utils import (
    lerp, clamp,
    CANVAS_W, CANVAS_H, BACKGROUND_COLOR,
    SNACKBAR_SECONDS, SNACKBAR_FADE,
)


class Snackbar:
    """A short-lived notification strip with a fade-out at the end."""

    def __init__(self, duration: float = SNACKBAR_SECONDS):
        self.duration = duration
        self.text: Optional[str] = None
        self._shown_at: float = 0.0

    def show(self, text: str, now: float):
        self.text = text
        self._shown_at = now

    def opacity(self, now: float) -> float:
        """1.0 while fully visible, fading to 0.0 at the end of the duration."""
        if self.text is None:
            return 0.0
        elapsed = now - self._shown_at
        if elapsed >= self.duration:
            self.text = None
            return 0.0
        fade_start = self.duration * (1.0 - SNACKBAR_FADE)
        if elapsed <= fade_start:
            return 1.0
        t = clamp((elapsed - fade_start) / (self.duration - fade_start), 0.0, 1.0)
        return lerp(1.0, 0.0, t)


class LemonadeRenderer:
    """Loads the stage sprites and composites the scene each frame."""

    def __init__(self, sprite_dir: str, canvas_size: tuple[int, int] = (CANVAS_W, CANVAS_H)):
        """
        Parameters
        ----------
        sprite_dir : str
            Directory holding one ``<image>.png`` per image directive.
        canvas_size : tuple[int, int]
            (width, height) of the window canvas.
        """
        self.canvas_w, self.canvas_h = canvas_size
        self._sprites: dict[str, np.ndarray] = {
            name: self._load(os.path.join(sprite_dir, f"{name}.png")) for name in IMAGES
        }

    @staticmethod
    def _load(path: str) -> np.ndarray:
        # Load with alpha channel (BGRA)
        raw = cv2.imread(path, cv2.IMREAD_UNCHANGED)
        if raw is None:
            raise FileNotFoundError(f"Cannot load sprite: {path}")

        # Ensure 4 channels
        if raw.ndim == 2:
            raw = cv2.cvtColor(raw, cv2.COLOR_GRAY2BGR)
        if raw.shape[2] == 3:
            # No alpha — add a fully opaque channel
            alpha = np.full((*raw.shape[:2], 1), 255, dtype=raw.dtype)
            raw = np.concatenate([raw, alpha], axis=2)
        return raw

    def blank_canvas(self) -> np.ndarray:
        canvas = np.zeros((self.canvas_h, self.canvas_w, 3), dtype=np.uint8)
        canvas[:] = BACKGROUND_COLOR
        return canvas

    # ── Main rendering method ─────────────────────────────────────────────

    def render(
        self,
        canvas: np.ndarray,
        ctrl: LemonadeController,
        snackbar: "Snackbar | None" = None,
        now: float = 0.0,
        debug: bool = False,
        fps: float = 0.0,
    ) -> np.ndarray:
        """Draw the current stage of *ctrl* on *canvas*.

        Parameters
        ----------
        canvas : np.ndarray
            BGR image of the window background.
        ctrl : LemonadeController
            Current session (stage, counters, display directive).
        snackbar : Snackbar | None
            Notification to overlay, if any.
        now : float
            Current time, used for the snackbar fade.
        debug : bool
            Whether to draw state/debug text.
        fps : float
            Current FPS for the debug overlay.

        Returns
        -------
        np.ndarray
            The canvas with the scene composited onto it.
        """
        display = ctrl.display

        # ── Sprite, centred in the upper part of the canvas ───────────
        sprite = self._sprites.get(display.image) if display.image else None
        if sprite is not None:
            self._draw_sprite(canvas, sprite, self.canvas_w // 2, int(self.canvas_h * 0.42))

        # ── Caption ───────────────────────────────────────────────────
        self._draw_centered_text(canvas, display.caption, int(self.canvas_h * 0.82))

        # ── Snackbar ──────────────────────────────────────────────────
        if snackbar is not None:
            opacity = snackbar.opacity(now)
            if opacity > 0.0:
                self._draw_snackbar(canvas, snackbar.text, opacity)

        # ── Debug overlay ─────────────────────────────────────────────
        if debug:
            self._draw_debug(canvas, ctrl, fps)

        return canvas

    def _draw_sprite(self, canvas: np.ndarray, sprite: np.ndarray, cx: int, cy: int):
        h, w = sprite.shape[:2]

        # Shrink the sprite if the canvas is too small for it
        scale = min(1.0, self.canvas_w * 0.8 / w, self.canvas_h * 0.6 / h)
        if scale < 1.0:
            w, h = max(1, int(w * scale)), max(1, int(h * scale))
            sprite = cv2.resize(sprite, (w, h), interpolation=cv2.INTER_AREA)

        x1 = max(0, cx - w // 2)
        y1 = max(0, cy - h // 2)
        x2 = min(self.canvas_w, x1 + w)
        y2 = min(self.canvas_h, y1 + h)
        if x1 < x2 and y1 < y2:
            self._alpha_blend(canvas, sprite[: y2 - y1, : x2 - x1], y1, y2, x1, x2)

    # ── Alpha blending ────────────────────────────────────────────────────

    @staticmethod
    def _alpha_blend(
        canvas: np.ndarray,
        patch: np.ndarray,
        y1: int, y2: int,
        x1: int, x2: int,
    ):
        """Composite *patch* (BGRA) onto *canvas* (BGR) at [y1:y2, x1:x2].

        Uses the alpha channel of the patch for per-pixel transparency.
        """
        alpha = patch[:, :, 3:4].astype(np.float32) / 255.0
        fg = patch[:, :, :3].astype(np.float32)
        bg = canvas[y1:y2, x1:x2].astype(np.float32)

        blended = fg * alpha + bg * (1.0 - alpha)
        canvas[y1:y2, x1:x2] = blended.astype(np.uint8)

    # ── Text ──────────────────────────────────────────────────────────────

    def _draw_centered_text(
        self,
        canvas: np.ndarray,
        text: str,
        y: int,
        color=(40, 40, 40),
        scale: float = 0.8,
    ):
        font = cv2.FONT_HERSHEY_SIMPLEX
        (tw, _), _ = cv2.getTextSize(text, font, scale, 2)
        x = max(0, (self.canvas_w - tw) // 2)
        cv2.putText(canvas, text, (x, y), font, scale, color, 2, cv2.LINE_AA)

    def _draw_snackbar(self, canvas: np.ndarray, text: str, opacity: float):
        bar_h = 56
        y1 = self.canvas_h - bar_h
        overlay = canvas.copy()
        cv2.rectangle(overlay, (0, y1), (self.canvas_w, self.canvas_h), (50, 50, 50), -1)
        font = cv2.FONT_HERSHEY_SIMPLEX
        cv2.putText(overlay, text, (16, y1 + 36), font, 0.65, (240, 240, 240), 1, cv2.LINE_AA)
        cv2.addWeighted(overlay, opacity, canvas, 1.0 - opacity, 0, dst=canvas)

    # ── Debug text ────────────────────────────────────────────────────────

    @staticmethod
    def _draw_debug(canvas: np.ndarray, ctrl: LemonadeController, fps: float):
        """Draw state information at the top-left of the canvas."""
        font  = cv2.FONT_HERSHEY_SIMPLEX
        color = (90, 90, 90)
        state = ctrl.state
        lines = [
            f"Stage:   {state.stage.name}",
            f"Lemon:   {state.lemon_size}",
            f"Squeeze: {state.squeeze_count}",
            f"FPS:     {fps:.1f}",
        ]
        for i, line in enumerate(lines):
            y = 25 + i * 22
            # Shadow for readability
            cv2.putText(canvas, line, (11, y + 1), font, 0.5, (255, 255, 255), 2, cv2.LINE_AA)
            cv2.putText(canvas, line, (10, y), font, 0.5, color, 1, cv2.LINE_AA)
