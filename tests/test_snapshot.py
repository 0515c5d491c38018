import pytest

from lemon_tree import ScriptedLemonTree
from snapshot import from_snapshot, to_snapshot
from state_machine import LemonadeStateMachine, SessionState, Stage


def test_snapshot_record_shape():
    record = to_snapshot(SessionState(Stage.SQUEEZE, 2, 1))
    assert record == {"stage": "squeeze", "lemonSize": 2, "squeezeCount": 1}


def test_every_reachable_state_round_trips():
    fsm = LemonadeStateMachine(ScriptedLemonTree([2, 3, 4]))
    state = SessionState()
    seen = {state}
    for _ in range(40):
        state = fsm.advance(state)
        seen.add(state)

    for state in seen:
        assert from_snapshot(to_snapshot(state)) == state


@pytest.mark.parametrize("record", [None, {}])
def test_empty_snapshot_is_fresh_session(record):
    assert from_snapshot(record) == SessionState(Stage.SELECT, -1, -1)


def test_missing_fields_default():
    assert from_snapshot({"stage": "drink"}) == SessionState(Stage.DRINK, -1, -1)
    assert from_snapshot({"lemonSize": 3}) == SessionState(Stage.SELECT, 3, -1)


def test_unknown_fields_are_ignored():
    record = {"stage": "restart", "lemonSize": -1, "squeezeCount": 4, "colour": "yellow"}
    assert from_snapshot(record) == SessionState(Stage.RESTART, -1, 4)


@pytest.mark.parametrize("value", ["3", 2.5, None, True])
def test_malformed_counters_default(value):
    state = from_snapshot({"stage": "squeeze", "lemonSize": value, "squeezeCount": value})
    assert (state.lemon_size, state.squeeze_count) == (-1, -1)


def test_unrecognised_stage_restores_as_unknown_and_heals(capsys):
    state = from_snapshot({"stage": "juggle", "lemonSize": 2, "squeezeCount": 0})
    assert state.stage is Stage.UNKNOWN
    assert "juggle" in capsys.readouterr().out

    healed = LemonadeStateMachine(ScriptedLemonTree([2])).advance(state)
    assert healed.stage is Stage.SELECT


def test_raw_stage_state_round_trips():
    state = SessionState(stage="squeeze", lemon_size=2, squeeze_count=1)
    assert from_snapshot(to_snapshot(state)) == state
    assert from_snapshot(to_snapshot(state)).stage is Stage.SQUEEZE
