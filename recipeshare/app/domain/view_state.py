# recipeshare/app/domain/view_state.py
"""
Per-view UI state as a small finite-state machine.

A view moves IDLE -> LOADING -> READY | ERRORED, and READY <-> EDITING for
forms. In-flight mutations are tracked as independent busy flags; an
action that is already busy cannot be started again until it finishes.
All transitions are pure functions returning a new ViewState.
"""
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterator, Optional

from recipeshare.app.domain.errors import ActionInFlightError

logger = logging.getLogger(__name__)


class ViewPhase(str, Enum):
    IDLE = "IDLE"
    LOADING = "LOADING"
    READY = "READY"
    EDITING = "EDITING"
    ERRORED = "ERRORED"


class ViewAction(str, Enum):
    SAVING = "saving"
    DELETING = "deleting"
    SUBMITTING_COMMENT = "submittingComment"
    TOGGLING_LIKE = "togglingLike"


@dataclass(frozen=True)
class ViewState:
    phase: ViewPhase = ViewPhase.IDLE
    data: Any = None
    draft: Any = None
    error: Optional[str] = None
    busy: frozenset[ViewAction] = field(default_factory=frozenset)

    def is_busy(self, action: ViewAction) -> bool:
        return action in self.busy


def start_loading(state: ViewState) -> ViewState:
    return replace(state, phase=ViewPhase.LOADING, error=None)


def load_succeeded(state: ViewState, data: Any) -> ViewState:
    return replace(state, phase=ViewPhase.READY, data=data, error=None)


def load_failed(state: ViewState, message: str) -> ViewState:
    return replace(state, phase=ViewPhase.ERRORED, error=message)


def begin_editing(state: ViewState, draft: Any) -> ViewState:
    if state.phase is not ViewPhase.READY:
        raise ValueError(f"Cannot edit from phase {state.phase.value}")
    return replace(state, phase=ViewPhase.EDITING, draft=draft, error=None)


def cancel_editing(state: ViewState) -> ViewState:
    if state.phase is not ViewPhase.EDITING:
        return state
    return replace(state, phase=ViewPhase.READY, draft=None, error=None)


def begin_action(state: ViewState, action: ViewAction) -> ViewState:
    """Set the busy flag for action; errors from the previous action are cleared."""
    if action in state.busy:
        raise ActionInFlightError(action.value, "view")
    return replace(state, busy=state.busy | {action}, error=None)


def finish_action(state: ViewState, action: ViewAction, error: Optional[str] = None) -> ViewState:
    return replace(state, busy=state.busy - {action}, error=error)


class ViewStateStore:
    """
    Holds one ViewState per view key.

    Every read-modify-write goes through a single lock, so checking and
    setting a busy flag is atomic even when two requests race.
    """

    def __init__(self) -> None:
        self._states: dict[str, ViewState] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> ViewState:
        with self._lock:
            return self._states.get(key, ViewState())

    def _claim(self, key: str, action: ViewAction) -> None:
        with self._lock:
            current = self._states.get(key, ViewState())
            try:
                self._states[key] = begin_action(current, action)
            except ActionInFlightError:
                raise ActionInFlightError(action.value, key) from None

    def _release(self, key: str, action: ViewAction, error: Optional[str]) -> None:
        with self._lock:
            current = self._states.get(key, ViewState())
            updated = finish_action(current, action, error)
            # errors are view-local; only in-flight flags outlive the request
            if updated.busy:
                self._states[key] = replace(updated, error=None)
            else:
                self._states.pop(key, None)

    @contextmanager
    def action(self, key: str, action: ViewAction) -> Iterator[None]:
        self._claim(key, action)
        error: Optional[str] = None
        try:
            yield
        except Exception as exc:
            error = str(exc)
            raise
        finally:
            self._release(key, action, error)
            if error:
                logger.debug("Action %s on %s finished with error: %s", action.value, key, error)
