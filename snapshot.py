"""
snapshot.py — Convert a SessionState to and from the host's snapshot record.

The record is a flat dict:

    {"stage": "squeeze", "lemonSize": 2, "squeezeCount": 1}

Key names and stage spellings are the compatibility surface and must not
change. Restoring is forgiving: missing or malformed fields fall back to
the defaults of a fresh session, and a stage spelling we do not recognise
is kept as UNKNOWN so the machine can heal on the next tap.
"""

from typing import Any, Mapping

from state_machine import SessionState, Stage
from utils import NO_LEMON

STAGE_KEY = "stage"
LEMON_SIZE_KEY = "lemonSize"
SQUEEZE_COUNT_KEY = "squeezeCount"


def to_snapshot(state: SessionState) -> dict[str, Any]:
    """Serialise *state* into a snapshot record."""
    return {
        STAGE_KEY: Stage.parse(state.stage).value,
        LEMON_SIZE_KEY: state.lemon_size,
        SQUEEZE_COUNT_KEY: state.squeeze_count,
    }


def from_snapshot(record: "Mapping[str, Any] | None") -> SessionState:
    """Rebuild a SessionState from *record*, defaulting anything unusable."""
    if not record:
        return SessionState()

    stage = Stage.SELECT
    if STAGE_KEY in record:
        stage = Stage.parse(record[STAGE_KEY])
        if stage is Stage.UNKNOWN:
            print(f"[ERROR] Snapshot holds unknown stage {record[STAGE_KEY]!r}")

    return SessionState(
        stage=stage,
        lemon_size=_int_field(record, LEMON_SIZE_KEY),
        squeeze_count=_int_field(record, SQUEEZE_COUNT_KEY),
    )


def _int_field(record: Mapping[str, Any], key: str) -> int:
    value = record.get(key, NO_LEMON)
    # bool is an int subclass but never a valid counter
    if isinstance(value, bool) or not isinstance(value, int):
        return NO_LEMON
    return value
