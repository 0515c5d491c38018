from lemon_tree import ScriptedLemonTree
from lemonade_controller import Frame, LemonadeController
from state_machine import SessionState, Stage, UNKNOWN_CAPTION


def _controller(*sizes):
    return LemonadeController(ScriptedLemonTree(sizes or (3,)))


def test_starts_at_select():
    ctrl = _controller()
    assert ctrl.state == SessionState()
    assert ctrl.frame() == Frame(Stage.SELECT, "lemon_tree", "Click to select a lemon!")


def test_primary_activate_returns_frame_to_render():
    ctrl = _controller(2)
    assert ctrl.on_primary_activate() == Frame(
        Stage.SQUEEZE, "lemon_squeeze", "Click to juice the lemon!"
    )
    ctrl.on_primary_activate()
    assert ctrl.on_primary_activate().stage is Stage.DRINK
    assert ctrl.on_primary_activate() == Frame(
        Stage.RESTART, "lemon_restart", "Click to start again!"
    )


def test_secondary_activate_only_while_squeezing():
    ctrl = _controller(3)
    assert ctrl.on_secondary_activate() is False
    assert ctrl.notification is None

    ctrl.on_primary_activate()
    ctrl.on_primary_activate()
    ctrl.on_primary_activate()
    before = ctrl.state

    assert ctrl.on_secondary_activate() is True
    assert ctrl.state == before
    assert ctrl.take_notification() == "Squeeze count: 2, keep going!"
    assert ctrl.take_notification() is None


def test_secondary_activate_while_drinking_is_suppressed():
    ctrl = _controller(2)
    for _ in range(3):
        ctrl.on_primary_activate()
    assert ctrl.stage is Stage.DRINK
    assert ctrl.on_secondary_activate() is False


def test_suspend_and_resume_through_snapshot():
    ctrl = _controller(4)
    ctrl.on_primary_activate()
    ctrl.on_primary_activate()
    snapshot = ctrl.save_state()
    assert snapshot == {"stage": "squeeze", "lemonSize": 3, "squeezeCount": 1}

    resumed = _controller(4)
    resumed.restore_state(snapshot)
    assert resumed.state == ctrl.state
    assert resumed.frame() == ctrl.frame()


def test_restore_replaces_session_and_clears_notification():
    ctrl = _controller(3)
    ctrl.on_primary_activate()
    ctrl.on_secondary_activate()

    ctrl.restore_state({"stage": "drink", "lemonSize": 0, "squeezeCount": 3})
    assert ctrl.state == SessionState(Stage.DRINK, 0, 3)
    assert ctrl.notification is None


def test_corrupted_snapshot_shows_diagnostic_then_heals(capsys):
    ctrl = _controller(2)
    ctrl.restore_state({"stage": "???", "lemonSize": 2, "squeezeCount": 0})

    assert ctrl.frame() == Frame(Stage.UNKNOWN, None, UNKNOWN_CAPTION)
    assert ctrl.on_primary_activate().stage is Stage.SELECT
    assert "[ERROR]" in capsys.readouterr().out


def test_rendering_frames_does_not_repeat_diagnostic():
    ctrl = LemonadeController(state=SessionState(stage=Stage.UNKNOWN))
    for _ in range(5):
        ctrl.frame()
    assert len(ctrl.fsm.diagnostics) == 1


def test_raw_stage_state_renders_as_enum():
    raw = SessionState(stage="squeeze", lemon_size=2, squeeze_count=1)
    ctrl = LemonadeController(ScriptedLemonTree([3]), raw)
    assert ctrl.stage is Stage.SQUEEZE
    assert ctrl.frame() == Frame(Stage.SQUEEZE, "lemon_squeeze", "Click to juice the lemon!")
    assert ctrl.save_state() == {"stage": "squeeze", "lemonSize": 2, "squeezeCount": 1}
