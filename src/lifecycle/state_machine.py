"""Lifecycle State Machine — управление состояниями bonding curve.

Состояния:
- GOALS_NOT_SET: кривая не инициализирована (virtual_k == 0)
- ACTIVE: депозиты и выводы разрешены
- LOCKED: мутирующие операции заблокированы, котировки доступны

Переходы:
- SET_GOALS: GOALS_NOT_SET → ACTIVE (одноразовый)
- LOCK:      ACTIVE → LOCKED
- UNLOCK:    LOCKED → ACTIVE
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List

from src.core.domain.lifecycle import CurveState
from src.core.errors import GoalsAlreadySetError, GoalsNotSetError, InvalidTransitionError

logger = logging.getLogger(__name__)


class LifecycleAction(str, Enum):
    """Действие, запрашивающее переход."""

    SET_GOALS = "SET_GOALS"
    LOCK = "LOCK"
    UNLOCK = "UNLOCK"


@dataclass(frozen=True)
class LifecycleTransitionResult:
    """Результат перехода lifecycle состояния."""

    new_state: CurveState
    previous_state: CurveState

    # Диагностика
    transition_occurred: bool
    transition_reason: str

    # Для отладки
    details: str


class LifecycleStateMachine:
    """Lifecycle State Machine.

    State machine stateless по отношению к текущему состоянию: его хранит
    контроллер, что позволяет откатывать переход вместе с остальным
    агрегатом. Сама машина хранит только историю переходов для диагностики.
    """

    def __init__(self):
        # История переходов: (previous, new, reason)
        self._transition_history: List[tuple[CurveState, CurveState, str]] = []

    @property
    def transition_history(self) -> List[tuple[CurveState, CurveState, str]]:
        return list(self._transition_history)

    def evaluate_transition(
        self,
        current_state: CurveState,
        action: LifecycleAction,
    ) -> LifecycleTransitionResult:
        """Оценка перехода.

        Args:
            current_state: текущее состояние кривой
            action: запрошенное действие

        Returns:
            LifecycleTransitionResult с новым состоянием

        Raises:
            GoalsAlreadySetError: SET_GOALS вне GOALS_NOT_SET
            GoalsNotSetError: LOCK/UNLOCK до инициализации
        """
        # 1. SET_GOALS: одноразовый
        if action == LifecycleAction.SET_GOALS:
            if current_state != CurveState.GOALS_NOT_SET:
                raise GoalsAlreadySetError()

            return self._create_result(
                new_state=CurveState.ACTIVE,
                previous_state=current_state,
                transition_occurred=True,
                transition_reason="goals_set",
                details="Curve parameters derived, GOALS_NOT_SET → ACTIVE"
            )

        # 2. LOCK/UNLOCK требуют заданных goals
        if current_state == CurveState.GOALS_NOT_SET:
            raise GoalsNotSetError()

        if action == LifecycleAction.LOCK:
            if current_state == CurveState.LOCKED:
                return self._create_result(
                    new_state=current_state,
                    previous_state=current_state,
                    transition_occurred=False,
                    transition_reason="already_locked",
                    details="LOCK in LOCKED: no transition"
                )

            return self._create_result(
                new_state=CurveState.LOCKED,
                previous_state=current_state,
                transition_occurred=True,
                transition_reason="locked_by_owner",
                details="ACTIVE → LOCKED"
            )

        if action == LifecycleAction.UNLOCK:
            if current_state == CurveState.ACTIVE:
                return self._create_result(
                    new_state=current_state,
                    previous_state=current_state,
                    transition_occurred=False,
                    transition_reason="already_active",
                    details="UNLOCK in ACTIVE: no transition"
                )

            return self._create_result(
                new_state=CurveState.ACTIVE,
                previous_state=current_state,
                transition_occurred=True,
                transition_reason="unlocked_by_owner",
                details="LOCKED → ACTIVE"
            )

        raise InvalidTransitionError(f"Unknown action {action!r} in state {current_state.value}")

    def record(self, result: LifecycleTransitionResult) -> None:
        """Запись подтверждённого перехода в историю (после commit)."""
        if not result.transition_occurred:
            return
        self._transition_history.append(
            (result.previous_state, result.new_state, result.transition_reason)
        )
        logger.info(
            "lifecycle transition %s -> %s (%s)",
            result.previous_state.value,
            result.new_state.value,
            result.transition_reason,
        )

    def _create_result(
        self,
        new_state: CurveState,
        previous_state: CurveState,
        transition_occurred: bool,
        transition_reason: str,
        details: str
    ) -> LifecycleTransitionResult:
        """Создание результата перехода."""
        return LifecycleTransitionResult(
            new_state=new_state,
            previous_state=previous_state,
            transition_occurred=transition_occurred,
            transition_reason=transition_reason,
            details=details
        )
