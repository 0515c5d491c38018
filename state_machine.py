"""
state_machine.py — Finite State Machine for making lemonade.

Stages:
    SELECT   → Lemon tree; tapping picks a lemon of random size.
    SQUEEZE  → Lemon in hand; each tap squeezes it once.
    DRINK    → Glass of lemonade; tapping drinks it.
    RESTART  → Empty glass; tapping starts over.
    UNKNOWN  → Defensive catch-all for corrupted state. Never entered by
               ``advance``; the next tap heals back to SELECT.

The machine never mutates a ``SessionState`` in place: every operation
takes the current value and returns a new one. Nothing here raises to
the caller.
"""

import collections
import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from lemon_tree import LemonSource, LemonTree
import utils
from utils import NO_LEMON, DIAGNOSTIC_HISTORY


class Stage(Enum):
    SELECT  = "select"
    SQUEEZE = "squeeze"
    DRINK   = "drink"
    RESTART = "restart"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value) -> "Stage":
        """Map *value* onto a regular stage, or UNKNOWN if it is not one."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True, slots=True)
class SessionState:
    """Everything the session needs to survive a suspend/resume."""
    stage:         Stage = Stage.SELECT
    lemon_size:    int = NO_LEMON
    squeeze_count: int = NO_LEMON

    def __post_init__(self):
        # Raw spellings from callers or snapshots always end up as a Stage
        object.__setattr__(self, "stage", Stage.parse(self.stage))


@dataclass(frozen=True, slots=True)
class Display:
    """What the host should show: a sprite name and a caption."""
    image:   Optional[str]
    caption: str


UNKNOWN_CAPTION = "An unknown state was entered!"

_DISPLAY: dict[Stage, Display] = {
    Stage.SELECT:  Display("lemon_tree",    "Click to select a lemon!"),
    Stage.SQUEEZE: Display("lemon_squeeze", "Click to juice the lemon!"),
    Stage.DRINK:   Display("lemon_drink",   "Click to drink your lemonade!"),
    Stage.RESTART: Display("lemon_restart", "Click to start again!"),
    Stage.UNKNOWN: Display(None,            UNKNOWN_CAPTION),
}

# Every sprite the host must be able to load
IMAGES: tuple[str, ...] = tuple(d.image for d in _DISPLAY.values() if d.image)


# ─── Transition table ─────────────────────────────────────────────────────────
# Key = current stage, Value = set of stages ``advance`` may move to.
_TRANSITIONS: dict[Stage, frozenset[Stage]] = {
    Stage.SELECT:  frozenset({Stage.SQUEEZE}),
    Stage.SQUEEZE: frozenset({Stage.SQUEEZE, Stage.DRINK}),
    Stage.DRINK:   frozenset({Stage.RESTART}),
    Stage.RESTART: frozenset({Stage.SELECT}),
    Stage.UNKNOWN: frozenset({Stage.SELECT}),
}


def next_stages(stage: Stage) -> frozenset[Stage]:
    """Stages reachable from *stage* with a single ``advance``."""
    return _TRANSITIONS[Stage.parse(stage)]


class LemonadeStateMachine:
    """Drives a ``SessionState`` through select → squeeze → drink → restart."""

    def __init__(self, lemon_source: "LemonSource | None" = None):
        self.lemon_source: LemonSource = lemon_source or LemonTree()
        self.diagnostics: collections.deque[str] = collections.deque(
            maxlen=DIAGNOSTIC_HISTORY
        )
        self._actions: dict[Stage, Callable[[SessionState], SessionState]] = {
            Stage.SELECT:  self._select,
            Stage.SQUEEZE: self._squeeze,
            Stage.DRINK:   self._drink,
            Stage.RESTART: self._restart,
            Stage.UNKNOWN: self._unknown,
        }

    # ── Public API ────────────────────────────────────────────────────────

    def advance(self, current: SessionState) -> SessionState:
        """Apply one tap to *current* and return the resulting state."""
        stage = Stage.parse(current.stage)
        new = self._actions[stage](current)
        if utils.DEBUG:
            print(f"[FSM] {stage.name} → {new.stage.name} "
                  f"(lemon_size={new.lemon_size}, squeeze_count={new.squeeze_count})")
        return new

    def display_for(self, stage: Stage) -> Display:
        """Sprite and caption for *stage*. Read-only."""
        stage = Stage.parse(stage)
        if stage is Stage.UNKNOWN:
            print(f"[ERROR] {UNKNOWN_CAPTION}")
        return _DISPLAY[stage]

    @staticmethod
    def peek(current: SessionState) -> Optional[int]:
        """Squeezes so far, but only while a lemon is being squeezed."""
        if Stage.parse(current.stage) is Stage.SQUEEZE:
            return current.squeeze_count
        return None

    # ── Stage actions ─────────────────────────────────────────────────────

    def _select(self, current: SessionState) -> SessionState:
        # A fresh lemon is unsqueezed
        return dataclasses.replace(
            current,
            stage=Stage.SQUEEZE,
            lemon_size=self.lemon_source.pick(),
            squeeze_count=0,
        )

    def _squeeze(self, current: SessionState) -> SessionState:
        lemon_size = current.lemon_size - 1
        if utils.DEBUG:
            print(f"[FSM] Squeeze! {lemon_size} squeezes left to juice this lemon")
        return dataclasses.replace(
            current,
            stage=Stage.DRINK if lemon_size <= 0 else Stage.SQUEEZE,
            lemon_size=max(lemon_size, 0),
            squeeze_count=current.squeeze_count + 1,
        )

    def _drink(self, current: SessionState) -> SessionState:
        # squeeze_count is left stale until the next pick overwrites it
        return dataclasses.replace(current, stage=Stage.RESTART, lemon_size=NO_LEMON)

    def _restart(self, current: SessionState) -> SessionState:
        return dataclasses.replace(current, stage=Stage.SELECT)

    def _unknown(self, current: SessionState) -> SessionState:
        self._diagnose(f"Got into an unknown state somehow! ({current.stage!r})")
        return dataclasses.replace(current, stage=Stage.SELECT)

    # ── Diagnostics ───────────────────────────────────────────────────────

    def record_diagnostic(self, message: str):
        self.diagnostics.append(message)

    def _diagnose(self, message: str):
        print(f"[ERROR] {message}")
        self.record_diagnostic(message)

    def __repr__(self) -> str:
        return f"LemonadeStateMachine(lemon_source={self.lemon_source!r})"
