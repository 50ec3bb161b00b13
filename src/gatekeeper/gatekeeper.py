"""Gatekeeper — цепочка гейтов перед каждой мутирующей операцией.

Порядок фиксирован, первая блокировка выигрывает:
    GATE 0 Lifecycle → GATE 1 Pause → GATE 2 Vault Approval → GATE 3 Amount

evaluate() возвращает диагностику без исключений; enforce() переводит
первую block_reason в соответствующий тип ошибки.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

from src.core.domain.lifecycle import CurveState
from src.core.errors import (
    CurveEngineError,
    GoalsNotSetError,
    InvalidTransitionError,
    LockedError,
    PausedError,
    VaultNotApprovedError,
    ZeroAmountError,
)
from src.gatekeeper.gates import (
    Gate00Lifecycle,
    Gate01Pause,
    Gate02VaultApproval,
    Gate03AmountValidation,
)

logger = logging.getLogger(__name__)


# block_reason → фабрика ошибки (аргумент: имя суммы для ZeroAmountError)
_BLOCK_ERRORS: Dict[str, Callable[[str], CurveEngineError]] = {
    "goals_not_set": lambda _: GoalsNotSetError(),
    "locked": lambda _: LockedError(),
    "paused": lambda _: PausedError(),
    "vault_not_approved": lambda _: VaultNotApprovedError(),
    "zero_amount": ZeroAmountError,
}


@dataclass(frozen=True)
class GateChainResult:
    """Результат прохождения цепочки гейтов."""

    entry_allowed: bool
    block_reason: str

    # Имя гейта, заблокировавшего вход ("" при PASS)
    blocked_at: str

    # Результаты всех выполненных гейтов (до первой блокировки включительно)
    gate_results: Tuple[object, ...]

    details: str


class Gatekeeper:
    """Последовательное выполнение GATE 0..3."""

    def __init__(self):
        self.gate00 = Gate00Lifecycle()
        self.gate01 = Gate01Pause()
        self.gate02 = Gate02VaultApproval()
        self.gate03 = Gate03AmountValidation()

    def evaluate(
        self,
        curve_state: CurveState,
        paused: bool,
        vault_approval_initialized: bool,
        amount: int,
        amount_name: str = "amount",
    ) -> GateChainResult:
        """Прогон цепочки до первой блокировки.

        Args:
            curve_state: состояние lifecycle
            paused: флаг внешнего Pauser
            vault_approval_initialized: флаг одобрения vault
            amount: сумма операции
            amount_name: имя параметра суммы

        Returns:
            GateChainResult
        """
        checks = (
            ("GATE_00", lambda: self.gate00.evaluate(curve_state)),
            ("GATE_01", lambda: self.gate01.evaluate(paused)),
            ("GATE_02", lambda: self.gate02.evaluate(vault_approval_initialized)),
            ("GATE_03", lambda: self.gate03.evaluate(amount, amount_name)),
        )

        results = []
        for gate_name, check in checks:
            result = check()
            results.append(result)
            if not result.entry_allowed:
                logger.debug("%s blocked: %s", gate_name, result.block_reason)
                return GateChainResult(
                    entry_allowed=False,
                    block_reason=result.block_reason,
                    blocked_at=gate_name,
                    gate_results=tuple(results),
                    details=f"{gate_name} blocked: {result.details}"
                )

        logger.debug("gate chain passed for %s=%d", amount_name, amount)
        return GateChainResult(
            entry_allowed=True,
            block_reason="",
            blocked_at="",
            gate_results=tuple(results),
            details="PASS: all gates"
        )

    def enforce(
        self,
        curve_state: CurveState,
        paused: bool,
        vault_approval_initialized: bool,
        amount: int,
        amount_name: str = "amount",
    ) -> GateChainResult:
        """evaluate() + исключение при блокировке.

        Raises:
            GoalsNotSetError, LockedError, PausedError, VaultNotApprovedError,
            ZeroAmountError: по первой block_reason
        """
        result = self.evaluate(
            curve_state, paused, vault_approval_initialized, amount, amount_name
        )
        if result.entry_allowed:
            return result

        factory = _BLOCK_ERRORS.get(result.block_reason)
        if factory is None:
            raise InvalidTransitionError(f"unmapped block reason {result.block_reason!r}")
        raise factory(amount_name)
