"""
Unit tests для LifecycleStateMachine

Coverage:
- GOALS_NOT_SET → ACTIVE (одноразово)
- ACTIVE ⇄ LOCKED
- No-op переходы
- История переходов
"""

import pytest

from src.core.domain.lifecycle import CurveState
from src.core.errors import GoalsAlreadySetError, GoalsNotSetError
from src.lifecycle.state_machine import LifecycleAction, LifecycleStateMachine


@pytest.fixture
def machine():
    return LifecycleStateMachine()


class TestLifecycleStateMachine:
    def test_set_goals_activates(self, machine):
        result = machine.evaluate_transition(CurveState.GOALS_NOT_SET, LifecycleAction.SET_GOALS)
        assert result.new_state == CurveState.ACTIVE
        assert result.transition_occurred
        assert result.transition_reason == "goals_set"

    @pytest.mark.parametrize("state", [CurveState.ACTIVE, CurveState.LOCKED])
    def test_set_goals_is_one_time(self, machine, state):
        with pytest.raises(GoalsAlreadySetError):
            machine.evaluate_transition(state, LifecycleAction.SET_GOALS)

    @pytest.mark.parametrize("action", [LifecycleAction.LOCK, LifecycleAction.UNLOCK])
    def test_lock_requires_goals(self, machine, action):
        with pytest.raises(GoalsNotSetError):
            machine.evaluate_transition(CurveState.GOALS_NOT_SET, action)

    def test_lock(self, machine):
        result = machine.evaluate_transition(CurveState.ACTIVE, LifecycleAction.LOCK)
        assert result.new_state == CurveState.LOCKED
        assert result.transition_reason == "locked_by_owner"

    def test_unlock(self, machine):
        result = machine.evaluate_transition(CurveState.LOCKED, LifecycleAction.UNLOCK)
        assert result.new_state == CurveState.ACTIVE
        assert result.transition_reason == "unlocked_by_owner"

    def test_lock_when_locked_is_noop(self, machine):
        result = machine.evaluate_transition(CurveState.LOCKED, LifecycleAction.LOCK)
        assert not result.transition_occurred
        assert result.new_state == CurveState.LOCKED
        assert result.transition_reason == "already_locked"

    def test_unlock_when_active_is_noop(self, machine):
        result = machine.evaluate_transition(CurveState.ACTIVE, LifecycleAction.UNLOCK)
        assert not result.transition_occurred
        assert result.transition_reason == "already_active"

    def test_history_records_only_transitions(self, machine):
        activate = machine.evaluate_transition(CurveState.GOALS_NOT_SET, LifecycleAction.SET_GOALS)
        machine.record(activate)
        noop = machine.evaluate_transition(CurveState.ACTIVE, LifecycleAction.UNLOCK)
        machine.record(noop)
        lock = machine.evaluate_transition(CurveState.ACTIVE, LifecycleAction.LOCK)
        machine.record(lock)

        assert machine.transition_history == [
            (CurveState.GOALS_NOT_SET, CurveState.ACTIVE, "goals_set"),
            (CurveState.ACTIVE, CurveState.LOCKED, "locked_by_owner"),
        ]

    def test_evaluate_does_not_record(self, machine):
        machine.evaluate_transition(CurveState.GOALS_NOT_SET, LifecycleAction.SET_GOALS)
        assert machine.transition_history == []
