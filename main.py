"""
main.py — Entry point for the lemonade sample.

Interaction (in the Lemonade window):
  • Click the image to move on: pick a lemon, squeeze it, drink it, start again.
  • Press and hold the image to peek at how many times the lemon was squeezed.
  • Press S to simulate the app being suspended and resumed.
  • Press D to toggle the debug overlay.

Press ESC or close the window to quit.
"""

import sys
import os
import time
import cv2

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from utils import (
    LEMONADE_WINDOW, CANVAS_W, CANVAS_H, SPRITE_DIR,
    FPS_SMOOTH_WINDOW, TARGET_FPS, MovingAverage,
)
from generate_sprites import generate_sprites
from lemon_tree import LemonTree
from lemonade_controller import LemonadeController
from press_detector import PressDetector
from renderer import LemonadeRenderer, Snackbar
from state_machine import IMAGES


class PointerEvents:
    """Collects left-button changes reported by the OpenCV mouse callback."""

    def __init__(self):
        self.pending: list[tuple[bool, float]] = []

    def __call__(self, event, x, y, flags, param):
        if event == cv2.EVENT_LBUTTONDOWN:
            self.pending.append((True, time.monotonic()))
        elif event == cv2.EVENT_LBUTTONUP:
            self.pending.append((False, time.monotonic()))

    def drain(self) -> list[tuple[bool, float]]:
        events, self.pending = self.pending, []
        return events


def _suspend_and_resume(ctrl: LemonadeController, tree: LemonTree) -> LemonadeController:
    """Throw the controller away and rebuild it from a snapshot."""
    snapshot = ctrl.save_state()
    print(f"[INFO] Suspending with snapshot {snapshot}")
    resumed = LemonadeController(tree)
    resumed.restore_state(snapshot)
    print(f"[INFO] Resumed at stage: {resumed.stage.value}")
    return resumed


def _handle_press(press: str, ctrl: LemonadeController, snackbar: Snackbar, now: float):
    if press == "tap":
        ctrl.on_primary_activate()
    elif press == "long_press":
        if ctrl.on_secondary_activate():
            snackbar.show(ctrl.take_notification(), now)


def main():
    # ── Locate sprites ────────────────────────────────────────────────
    project_dir = os.path.dirname(os.path.abspath(__file__))
    sprite_dir = os.path.join(project_dir, SPRITE_DIR)
    if not all(os.path.isfile(os.path.join(sprite_dir, f"{name}.png")) for name in IMAGES):
        print(f"[INFO] Sprites missing, generating them in {sprite_dir}")
        generate_sprites(sprite_dir)

    try:
        renderer = LemonadeRenderer(sprite_dir, (CANVAS_W, CANVAS_H))
    except FileNotFoundError as exc:
        print(f"[ERROR] {exc}")
        sys.exit(1)

    # ── Initialise components ─────────────────────────────────────────
    tree     = LemonTree()
    ctrl     = LemonadeController(tree)
    detector = PressDetector()
    snackbar = Snackbar()
    pointer  = PointerEvents()

    cv2.namedWindow(LEMONADE_WINDOW, cv2.WINDOW_AUTOSIZE)
    cv2.setMouseCallback(LEMONADE_WINDOW, pointer)

    print("[INFO] System ready.")
    print("       Click the image to make lemonade.")
    print("       Press and hold to peek at the squeeze count.")
    print("       S: suspend/resume   D: debug overlay   ESC: quit.")

    # ── FPS tracking ──────────────────────────────────────────────────
    fps_smoother = MovingAverage(window=FPS_SMOOTH_WINDOW)
    fps = 0.0
    prev_time = time.perf_counter()
    debug = False
    frame_delay_ms = max(1, 1000 // TARGET_FPS)

    # ══════════════════════════════════════════════════════════════════
    #  MAIN LOOP
    # ══════════════════════════════════════════════════════════════════
    while True:
        now = time.monotonic()

        # ── 1. Pointer input → presses ────────────────────────────────
        for is_down, stamp in pointer.drain():
            _handle_press(detector.update(is_down, stamp), ctrl, snackbar, stamp)
        _handle_press(detector.poll(now), ctrl, snackbar, now)

        # ── 2. Render ─────────────────────────────────────────────────
        canvas = renderer.blank_canvas()
        canvas = renderer.render(canvas, ctrl, snackbar, now, debug=debug, fps=fps)
        cv2.imshow(LEMONADE_WINDOW, canvas)

        # ── 3. FPS ────────────────────────────────────────────────────
        tick = time.perf_counter()
        frame_time = fps_smoother.update(tick - prev_time)
        fps = 1.0 / frame_time if frame_time > 0 else 0.0
        prev_time = tick

        # ── 4. Keys & exit conditions ─────────────────────────────────
        key = cv2.waitKey(frame_delay_ms) & 0xFF
        if key == 27:
            break
        if key in (ord("s"), ord("S")):
            detector.reset()
            ctrl = _suspend_and_resume(ctrl, tree)
        elif key in (ord("d"), ord("D")):
            debug = not debug
        if cv2.getWindowProperty(LEMONADE_WINDOW, cv2.WND_PROP_VISIBLE) < 1:
            break

    # ── Cleanup ───────────────────────────────────────────────────────
    print("[INFO] Shutting down...")
    cv2.destroyAllWindows()


if __name__ == "__main__":
    main()
