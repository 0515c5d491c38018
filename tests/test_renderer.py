import numpy as np
import pytest

from generate_sprites import SPRITES, generate_sprites
from lemon_tree import ScriptedLemonTree
from lemonade_controller import LemonadeController
from renderer import LemonadeRenderer, Snackbar
from state_machine import IMAGES, SessionState, Stage


@pytest.fixture(scope="module")
def sprite_dir(tmp_path_factory):
    out = tmp_path_factory.mktemp("assets")
    generate_sprites(str(out), size=96)
    return str(out)


def test_generator_covers_every_image_directive(sprite_dir):
    assert set(SPRITES) == set(IMAGES)


def test_missing_sprite_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        LemonadeRenderer(str(tmp_path))


@pytest.mark.parametrize("stage", list(Stage))
def test_render_every_stage(sprite_dir, stage):
    renderer = LemonadeRenderer(sprite_dir, (200, 300))
    ctrl = LemonadeController(ScriptedLemonTree([2]), SessionState(stage=stage))

    blank = renderer.blank_canvas()
    canvas = renderer.render(renderer.blank_canvas(), ctrl, debug=True, fps=30.0)

    assert canvas.shape == (300, 200, 3)
    assert canvas.dtype == np.uint8
    assert not np.array_equal(canvas, blank)


def test_sprite_is_drawn_for_regular_stage(sprite_dir):
    renderer = LemonadeRenderer(sprite_dir, (200, 300))
    ctrl = LemonadeController(ScriptedLemonTree([2]))
    canvas = renderer.render(renderer.blank_canvas(), ctrl)

    # Sprite region differs from the plain background
    centre = canvas[100:150, 80:120]
    assert not np.all(centre == renderer.blank_canvas()[100:150, 80:120])


def test_snackbar_is_drawn_then_expires(sprite_dir):
    renderer = LemonadeRenderer(sprite_dir, (200, 300))
    ctrl = LemonadeController(ScriptedLemonTree([2]))
    snackbar = Snackbar(duration=1.0)
    snackbar.show("Squeeze count: 0, keep going!", now=0.0)

    without = renderer.render(renderer.blank_canvas(), ctrl)
    shown = renderer.render(renderer.blank_canvas(), ctrl, snackbar, now=0.1)
    assert not np.array_equal(shown[-56:], without[-56:])

    expired = renderer.render(renderer.blank_canvas(), ctrl, snackbar, now=1.5)
    assert np.array_equal(expired, without)
    assert snackbar.text is None


def test_snackbar_fades_out():
    snackbar = Snackbar(duration=2.0)
    assert snackbar.opacity(0.0) == 0.0
    snackbar.show("hi", now=0.0)
    assert snackbar.opacity(1.0) == 1.0
    assert 0.0 < snackbar.opacity(1.75) < 1.0
    assert snackbar.opacity(2.0) == 0.0


def test_debug_overlay_with_raw_stage_state(sprite_dir):
    renderer = LemonadeRenderer(sprite_dir, (200, 300))
    raw = SessionState(stage="drink", lemon_size=0, squeeze_count=2)
    ctrl = LemonadeController(ScriptedLemonTree([2]), raw)
    canvas = renderer.render(renderer.blank_canvas(), ctrl, debug=True)
    assert canvas.shape == (300, 200, 3)
