"""
lemonade_controller.py — Host boundary around the state machine and the
session state. Pointer handling lives in press_detector.py and main.py.

The controller owns:
  • The LemonadeStateMachine
  • The one SessionState of the running session
  • The pending peek notification (shown by the host as a snackbar)

The host calls ``on_primary_activate()`` for a tap and
``on_secondary_activate()`` for a long press, and uses
``save_state()`` / ``restore_state()`` around a suspend.
"""

from typing import Any, Mapping, NamedTuple, Optional

from lemon_tree import LemonSource
from snapshot import from_snapshot, to_snapshot
from state_machine import (
    UNKNOWN_CAPTION, Display, LemonadeStateMachine, SessionState, Stage,
)

SQUEEZE_COUNT_TEXT = "Squeeze count: {count}, keep going!"


class Frame(NamedTuple):
    """What the host renders after a tap."""
    stage:   Stage
    image:   Optional[str]
    caption: str


class LemonadeController:
    """Owns the session and routes host events into the FSM."""

    def __init__(
        self,
        lemon_source: "LemonSource | None" = None,
        state: "SessionState | None" = None,
    ):
        self.fsm = LemonadeStateMachine(lemon_source)
        self._set_state(state if state is not None else SessionState())

        # Text of the last successful peek, cleared by the host once shown
        self.notification: Optional[str] = None

    # ── Convenience ───────────────────────────────────────────────────────

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def stage(self) -> Stage:
        return self._state.stage

    @property
    def display(self) -> Display:
        return self._display

    def frame(self) -> Frame:
        display = self.display
        return Frame(self._state.stage, display.image, display.caption)

    # ── Input events ──────────────────────────────────────────────────────

    def on_primary_activate(self) -> Frame:
        """Tap: advance the FSM and return what to render next."""
        self._set_state(self.fsm.advance(self._state))
        print(f"[INFO] Current stage: {self._state.stage.value}")
        return self.frame()

    def on_secondary_activate(self) -> bool:
        """Long press: peek at the squeeze count.

        Returns True when a notification should be shown, i.e. only while
        squeezing. The state is never changed.
        """
        count = self.fsm.peek(self._state)
        if count is None:
            return False
        self.notification = SQUEEZE_COUNT_TEXT.format(count=count)
        return True

    def take_notification(self) -> Optional[str]:
        """Return the pending notification and clear it."""
        text, self.notification = self.notification, None
        return text

    # ── Suspend / resume ──────────────────────────────────────────────────

    def save_state(self) -> dict[str, Any]:
        return to_snapshot(self._state)

    def restore_state(self, record: "Mapping[str, Any] | None"):
        """Replace the whole session with the one in *record*."""
        self._set_state(from_snapshot(record))
        self.notification = None

    def _set_state(self, state: SessionState):
        # Display is cached, so an UNKNOWN session is recorded once per change
        self._state = state
        self._display = self.fsm.display_for(state.stage)
        if state.stage is Stage.UNKNOWN:
            self.fsm.record_diagnostic(UNKNOWN_CAPTION)
