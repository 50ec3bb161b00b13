"""GATE 0: Lifecycle (goals set, not locked)

- Первый gate в цепочке мутирующих операций
- Блокирует вход при:
  * GOALS_NOT_SET (virtual_k == 0, set_goals ещё не вызывался)
  * LOCKED (owner заморозил депозиты и выводы)

Re-entrancy проверяется структурно (ReentrancyGuard контроллера) до
запуска цепочки и gate не является.
"""

from dataclasses import dataclass

from src.core.domain.lifecycle import CurveState


@dataclass(frozen=True)
class Gate00Result:
    """Результат GATE 0."""

    entry_allowed: bool
    block_reason: str

    # Входные параметры для диагностики
    curve_state: CurveState

    # Детали
    details: str


class Gate00Lifecycle:
    """GATE 0: Lifecycle.

    Порядок проверок:
    1. GOALS_NOT_SET → блокировка
    2. LOCKED → блокировка
    """

    def evaluate(self, curve_state: CurveState) -> Gate00Result:
        """Оценка GATE 0.

        Args:
            curve_state: текущее состояние кривой

        Returns:
            Gate00Result с решением о допуске
        """
        if curve_state == CurveState.GOALS_NOT_SET:
            return Gate00Result(
                entry_allowed=False,
                block_reason="goals_not_set",
                curve_state=curve_state,
                details="Curve not initialized: call set_goals first"
            )

        if curve_state == CurveState.LOCKED:
            return Gate00Result(
                entry_allowed=False,
                block_reason="locked",
                curve_state=curve_state,
                details="Contract locked by owner: mutating operations blocked"
            )

        return Gate00Result(
            entry_allowed=True,
            block_reason="",
            curve_state=curve_state,
            details=f"PASS: curve_state={curve_state.value}"
        )
