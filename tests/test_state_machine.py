"""Tests for the booking-request state machine."""

import pytest

from studio_booking.scheduling.state_machine import (
    BookingStateMachine,
    InvalidTransitionError,
    TransitionTrigger,
    WorkflowState,
)


def _to_confirming(sm: BookingStateMachine) -> None:
    sm.transition(TransitionTrigger.DATE_CHOSEN)
    sm.transition(TransitionTrigger.TIME_CHOSEN)


class TestInitialState:
    def test_starts_in_selecting_date(self, state_machine):
        assert state_machine.current_state == WorkflowState.SELECTING_DATE

    def test_initial_history_has_one_entry(self, state_machine):
        assert len(state_machine.get_history()) == 1

    def test_initial_failure_count_is_zero(self, state_machine):
        assert state_machine.failure_count == 0

    def test_not_terminal_at_start(self, state_machine):
        assert not state_machine.is_terminal()

    def test_only_date_choice_allowed(self, state_machine):
        assert state_machine.get_valid_triggers() == [TransitionTrigger.DATE_CHOSEN]


class TestForwardFlow:
    def test_date_chosen_to_selecting_time(self, state_machine):
        new = state_machine.transition(TransitionTrigger.DATE_CHOSEN)
        assert new == WorkflowState.SELECTING_TIME

    def test_time_chosen_to_confirming(self, state_machine):
        state_machine.transition(TransitionTrigger.DATE_CHOSEN)
        new = state_machine.transition(TransitionTrigger.TIME_CHOSEN)
        assert new == WorkflowState.CONFIRMING

    def test_submit_to_submitting(self, state_machine):
        _to_confirming(state_machine)
        assert state_machine.transition(TransitionTrigger.SUBMIT) == WorkflowState.SUBMITTING

    def test_success_is_terminal(self, state_machine):
        _to_confirming(state_machine)
        state_machine.transition(TransitionTrigger.SUBMIT)
        new = state_machine.transition(TransitionTrigger.SUBMIT_SUCCEEDED)
        assert new == WorkflowState.SUBMITTED
        assert state_machine.is_terminal()
        assert state_machine.get_valid_triggers() == []

    def test_failure_returns_to_confirming(self, state_machine):
        _to_confirming(state_machine)
        state_machine.transition(TransitionTrigger.SUBMIT)
        new = state_machine.transition(TransitionTrigger.SUBMIT_FAILED)
        assert new == WorkflowState.CONFIRMING
        assert state_machine.failure_count == 1


class TestBackNavigation:
    def test_back_from_time_to_date(self, state_machine):
        state_machine.transition(TransitionTrigger.DATE_CHOSEN)
        assert state_machine.transition(TransitionTrigger.BACK) == WorkflowState.SELECTING_DATE

    def test_back_from_confirming_to_time(self, state_machine):
        _to_confirming(state_machine)
        assert state_machine.transition(TransitionTrigger.BACK) == WorkflowState.SELECTING_TIME

    def test_no_back_from_selecting_date(self, state_machine):
        with pytest.raises(InvalidTransitionError):
            state_machine.transition(TransitionTrigger.BACK)

    def test_no_back_while_submitting(self, state_machine):
        _to_confirming(state_machine)
        state_machine.transition(TransitionTrigger.SUBMIT)
        with pytest.raises(InvalidTransitionError):
            state_machine.transition(TransitionTrigger.BACK)


class TestInvalidTransitions:
    def test_cannot_skip_time_selection(self, state_machine):
        state_machine.transition(TransitionTrigger.DATE_CHOSEN)
        with pytest.raises(InvalidTransitionError):
            state_machine.transition(TransitionTrigger.SUBMIT)

    def test_cannot_submit_from_start(self, state_machine):
        with pytest.raises(InvalidTransitionError):
            state_machine.transition(TransitionTrigger.SUBMIT)

    def test_cannot_succeed_without_submitting(self, state_machine):
        _to_confirming(state_machine)
        with pytest.raises(InvalidTransitionError):
            state_machine.transition(TransitionTrigger.SUBMIT_SUCCEEDED)

    def test_cannot_submit_twice(self, state_machine):
        _to_confirming(state_machine)
        state_machine.transition(TransitionTrigger.SUBMIT)
        with pytest.raises(InvalidTransitionError):
            state_machine.transition(TransitionTrigger.SUBMIT)

    def test_error_lists_valid_triggers(self, state_machine):
        with pytest.raises(InvalidTransitionError, match="date_chosen"):
            state_machine.transition(TransitionTrigger.TIME_CHOSEN)

    def test_rejected_trigger_leaves_state_unchanged(self, state_machine):
        with pytest.raises(InvalidTransitionError):
            state_machine.transition(TransitionTrigger.SUBMIT)
        assert state_machine.current_state == WorkflowState.SELECTING_DATE
        assert len(state_machine.get_history()) == 1

    def test_every_state_rejects_undefined_triggers(self):
        for state in WorkflowState:
            defined = {t.trigger for t in BookingStateMachine.TRANSITIONS if t.from_state == state}
            for trigger in TransitionTrigger:
                if trigger in defined:
                    continue
                sm = BookingStateMachine()
                sm._current_state = state
                with pytest.raises(InvalidTransitionError):
                    sm.transition(trigger)


class TestHistory:
    def test_state_trace(self, state_machine):
        _to_confirming(state_machine)
        state_machine.transition(TransitionTrigger.SUBMIT)
        state_machine.transition(TransitionTrigger.SUBMIT_SUCCEEDED)
        assert state_machine.get_state_trace() == [
            "selecting_date", "selecting_time", "confirming", "submitting", "submitted",
        ]

    def test_history_records_triggers(self, state_machine):
        state_machine.transition(TransitionTrigger.DATE_CHOSEN)
        history = state_machine.get_history()
        assert history[0].trigger is None
        assert history[1].trigger == TransitionTrigger.DATE_CHOSEN

    def test_history_is_a_copy(self, state_machine):
        state_machine.get_history().clear()
        assert len(state_machine.get_history()) == 1

    def test_reset(self, state_machine):
        _to_confirming(state_machine)
        state_machine.transition(TransitionTrigger.SUBMIT)
        state_machine.transition(TransitionTrigger.SUBMIT_FAILED)
        state_machine.reset()
        assert state_machine.current_state == WorkflowState.SELECTING_DATE
        assert state_machine.failure_count == 0
        assert state_machine.get_state_trace() == ["selecting_date"]
