"""
generate_sprites.py — Creates the procedural lemonade sprites (RGBA PNGs) using OpenCV.

Run this script once to generate assets/*.png if you don't have them.
One sprite per stage, named after the image directive the state machine
returns:

    lemon_tree     — a small tree with lemons
    lemon_squeeze  — a single lemon
    lemon_drink    — a full glass of lemonade
    lemon_restart  — an empty glass
"""

import os

import cv2
import numpy as np

from utils import SPRITE_SIZE, SPRITE_DIR

# BGRA colours
LEMON_YELLOW = (40, 220, 250, 255)
LEMON_LIGHT  = (140, 245, 255, 255)
LEAF_GREEN   = (50, 160, 60, 255)
TRUNK_BROWN  = (30, 70, 110, 255)
GLASS_EDGE   = (180, 170, 160, 255)
GLASS_FILL   = (235, 230, 225, 90)
LEMONADE     = (90, 230, 250, 230)


def _canvas(size: int) -> np.ndarray:
    return np.zeros((size, size, 4), dtype=np.uint8)  # BGRA, fully transparent


def _lemon(img: np.ndarray, center: tuple[int, int], radius: int):
    """A lemon: yellow ellipse with pointed tips and a highlight."""
    cx, cy = center
    axes = (radius, int(radius * 0.72))
    cv2.ellipse(img, (cx, cy), axes, 0, 0, 360, LEMON_YELLOW, -1, cv2.LINE_AA)
    tip = max(2, radius // 6)
    cv2.circle(img, (cx - radius, cy), tip, LEMON_YELLOW, -1, cv2.LINE_AA)
    cv2.circle(img, (cx + radius, cy), tip, LEMON_YELLOW, -1, cv2.LINE_AA)
    cv2.ellipse(img, (cx - radius // 3, cy - radius // 3), (radius // 3, radius // 6),
                -20, 0, 360, LEMON_LIGHT, -1, cv2.LINE_AA)


def draw_tree(size: int = SPRITE_SIZE) -> np.ndarray:
    img = _canvas(size)
    cx = size // 2

    # ── Trunk ─────────────────────────────────────────────────────────
    cv2.rectangle(img, (cx - size // 16, size // 2), (cx + size // 16, size - 10),
                  TRUNK_BROWN, -1, cv2.LINE_AA)

    # ── Canopy (overlapping circles) ──────────────────────────────────
    r = size // 5
    for dx, dy in [(-r, 0), (r, 0), (0, -r // 2), (0, r // 2)]:
        cv2.circle(img, (cx + dx, size // 3 + dy), r, LEAF_GREEN, -1, cv2.LINE_AA)

    # ── Hanging lemons ────────────────────────────────────────────────
    for dx, dy in [(-r, r // 2), (r // 2, -r // 3), (r, r // 2)]:
        _lemon(img, (cx + dx, size // 3 + dy), size // 14)
    return img


def draw_squeeze(size: int = SPRITE_SIZE) -> np.ndarray:
    img = _canvas(size)
    _lemon(img, (size // 2, size // 2), size // 3)

    # Leaf at the stem end
    stem = (size // 2 + size // 3, size // 2 - size // 12)
    leaf_pts = np.array([
        [stem[0] - 10, stem[1]],
        [stem[0] + 20, stem[1] - 30],
        [stem[0] + 30, stem[1] - 10],
    ], dtype=np.int32)
    cv2.fillPoly(img, [leaf_pts], LEAF_GREEN, cv2.LINE_AA)
    return img


def _glass(img: np.ndarray, fill: bool):
    size = img.shape[0]
    top, bottom = size // 6, size - size // 10
    half_top, half_bottom = size // 4, size // 5
    cx = size // 2
    outline = np.array([
        [cx - half_top, top],
        [cx + half_top, top],
        [cx + half_bottom, bottom],
        [cx - half_bottom, bottom],
    ], dtype=np.int32)

    cv2.fillPoly(img, [outline], GLASS_FILL, cv2.LINE_AA)
    if fill:
        level = top + (bottom - top) // 5
        # Width of the glass at the liquid level, by linear interpolation
        t = (level - top) / (bottom - top)
        half_level = int(half_top + (half_bottom - half_top) * t)
        liquid = np.array([
            [cx - half_level, level],
            [cx + half_level, level],
            [cx + half_bottom, bottom],
            [cx - half_bottom, bottom],
        ], dtype=np.int32)
        cv2.fillPoly(img, [liquid], LEMONADE, cv2.LINE_AA)
        # Lemon slice on the rim
        cv2.circle(img, (cx + half_top, top), size // 10, LEMON_YELLOW, -1, cv2.LINE_AA)
        cv2.circle(img, (cx + half_top, top), size // 14, LEMON_LIGHT, -1, cv2.LINE_AA)
    cv2.polylines(img, [outline], True, GLASS_EDGE, 4, cv2.LINE_AA)


def draw_drink(size: int = SPRITE_SIZE) -> np.ndarray:
    img = _canvas(size)
    _glass(img, fill=True)
    return img


def draw_restart(size: int = SPRITE_SIZE) -> np.ndarray:
    img = _canvas(size)
    _glass(img, fill=False)
    return img


SPRITES = {
    "lemon_tree":    draw_tree,
    "lemon_squeeze": draw_squeeze,
    "lemon_drink":   draw_drink,
    "lemon_restart": draw_restart,
}


def generate_sprites(output_dir: str, size: int = SPRITE_SIZE) -> dict[str, str]:
    """Draw every sprite into *output_dir*. Returns name → path."""
    os.makedirs(output_dir, exist_ok=True)
    paths = {}
    for name, draw in SPRITES.items():
        path = os.path.join(output_dir, f"{name}.png")
        cv2.imwrite(path, draw(size))
        paths[name] = path
        print(f"[generate_sprites] Saved {size}x{size} RGBA {name} → {path}")
    return paths


if __name__ == "__main__":
    script_dir = os.path.dirname(os.path.abspath(__file__))
    generate_sprites(os.path.join(script_dir, SPRITE_DIR))
