"""
Finite state machine for the booking-request workflow.

Five states, walked strictly in order: a request can only be submitted after
a date and then a time have been chosen, and only reaches SUBMITTED through
SUBMITTING. Any trigger without an explicit transition is rejected.

Usage:
    sm = BookingStateMachine()
    sm.transition(TransitionTrigger.DATE_CHOSEN)
    assert sm.current_state == WorkflowState.SELECTING_TIME
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class WorkflowState(str, Enum):
    """All possible states of one booking-request session."""
    SELECTING_DATE = "selecting_date"
    SELECTING_TIME = "selecting_time"
    CONFIRMING = "confirming"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"


class TransitionTrigger(str, Enum):
    """Events that cause state transitions."""
    DATE_CHOSEN = "date_chosen"
    TIME_CHOSEN = "time_chosen"
    BACK = "back"
    SUBMIT = "submit"
    SUBMIT_SUCCEEDED = "submit_succeeded"
    SUBMIT_FAILED = "submit_failed"


@dataclass
class Transition:
    """A single valid state transition."""
    from_state: WorkflowState
    to_state: WorkflowState
    trigger: TransitionTrigger


@dataclass
class StateEntry:
    """Recorded history entry for a state visit."""
    state: WorkflowState
    entered_at: datetime
    trigger: Optional[TransitionTrigger] = None


class InvalidTransitionError(Exception):
    """Raised when a transition is not valid from the current state."""


class BookingStateMachine:
    """
    Deterministic state machine controlling the booking-request steps.

    Every transition must be explicitly defined. Attempts to skip a step
    are rejected with an error listing the triggers allowed from the
    current state.
    """

    TRANSITIONS: list[Transition] = [
        # --- Date ---
        Transition(WorkflowState.SELECTING_DATE, WorkflowState.SELECTING_TIME,
                   TransitionTrigger.DATE_CHOSEN),

        # --- Time ---
        Transition(WorkflowState.SELECTING_TIME, WorkflowState.CONFIRMING,
                   TransitionTrigger.TIME_CHOSEN),
        Transition(WorkflowState.SELECTING_TIME, WorkflowState.SELECTING_DATE,
                   TransitionTrigger.BACK),

        # --- Confirmation gate ---
        Transition(WorkflowState.CONFIRMING, WorkflowState.SELECTING_TIME,
                   TransitionTrigger.BACK),
        Transition(WorkflowState.CONFIRMING, WorkflowState.SUBMITTING,
                   TransitionTrigger.SUBMIT),

        # --- Submission result ---
        Transition(WorkflowState.SUBMITTING, WorkflowState.SUBMITTED,
                   TransitionTrigger.SUBMIT_SUCCEEDED),
        Transition(WorkflowState.SUBMITTING, WorkflowState.CONFIRMING,
                   TransitionTrigger.SUBMIT_FAILED),
    ]

    def __init__(self) -> None:
        self._current_state = WorkflowState.SELECTING_DATE
        self._history: list[StateEntry] = [
            StateEntry(state=WorkflowState.SELECTING_DATE, entered_at=datetime.now(timezone.utc))
        ]
        self._failure_count: int = 0

    @property
    def current_state(self) -> WorkflowState:
        return self._current_state

    @property
    def failure_count(self) -> int:
        return self._failure_count

    def transition(self, trigger: TransitionTrigger) -> WorkflowState:
        """
        Execute a state transition.

        Args:
            trigger: The event triggering the transition.

        Returns:
            The new workflow state.

        Raises:
            InvalidTransitionError: If no valid transition exists.
        """
        for t in self.TRANSITIONS:
            if t.from_state == self._current_state and t.trigger == trigger:
                old_state = self._current_state
                self._current_state = t.to_state

                self._history.append(StateEntry(
                    state=self._current_state,
                    entered_at=datetime.now(timezone.utc),
                    trigger=trigger,
                ))

                if trigger == TransitionTrigger.SUBMIT_FAILED:
                    self._failure_count += 1

                logger.debug(
                    "State transition: %s -> %s (trigger: %s)",
                    old_state.value, self._current_state.value, trigger.value,
                )
                return self._current_state

        valid = [t.value for t in self.get_valid_triggers()]
        raise InvalidTransitionError(
            f"No valid transition from '{self._current_state.value}' "
            f"with trigger '{trigger.value}'. Valid triggers: {valid}"
        )

    def get_valid_triggers(self) -> list[TransitionTrigger]:
        """Return all triggers valid from the current state."""
        return [t.trigger for t in self.TRANSITIONS if t.from_state == self._current_state]

    def get_history(self) -> list[StateEntry]:
        """Return the full state transition history."""
        return list(self._history)

    def get_state_trace(self) -> list[str]:
        """Return ordered list of state names visited."""
        return [entry.state.value for entry in self._history]

    def is_terminal(self) -> bool:
        """Check if the request has been submitted."""
        return self._current_state == WorkflowState.SUBMITTED

    def reset(self) -> None:
        """Start over from a fresh SELECTING_DATE with empty history."""
        self._current_state = WorkflowState.SELECTING_DATE
        self._history = [
            StateEntry(state=WorkflowState.SELECTING_DATE, entered_at=datetime.now(timezone.utc))
        ]
        self._failure_count = 0
