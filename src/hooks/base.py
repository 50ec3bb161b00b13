"""Hook Pipeline — pluggable корректировка котировок buy/sell.

Контракт:
- hook вызывается синхронно после базовой котировки и до commit
- buy:  final = base_bonding + delta; выплата = final * (1000 - fee) // 1000
- sell: delta корректирует effective количество claim token, выплата funding
        token масштабируется на (1000 - fee) / 1000
- любое исключение hook прерывает всю операцию (HookCallError)
- результат вне домена (fee > 1000, отрицательная сумма) → HookResultError

NoOpHook (fee=0, delta=0) — безопасный default.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable

from pydantic import ValidationError as PydanticValidationError

from src.core.domain.hook_result import NEUTRAL_HOOK_RESULT, HookResult
from src.core.errors import CurveEngineError, HookCallError, HookResultError
from src.core.math.fixed_point import scale_by_hook_fee

logger = logging.getLogger(__name__)


# =============================================================================
# CAPABILITY
# =============================================================================


class BondingCurveHook(ABC):
    """Capability, вызываемая на каждом депозите и выводе."""

    @abstractmethod
    def buy(self, buyer: str, base_bonding_token: int, base_input_token: int) -> HookResult:
        """Корректировка депозита."""

    @abstractmethod
    def sell(self, seller: str, base_bonding_token: int, base_input_token: int) -> HookResult:
        """Корректировка вывода."""


class NoOpHook(BondingCurveHook):
    """Hook без эффекта: fee=0, delta=0."""

    def buy(self, buyer: str, base_bonding_token: int, base_input_token: int) -> HookResult:
        return NEUTRAL_HOOK_RESULT

    def sell(self, seller: str, base_bonding_token: int, base_input_token: int) -> HookResult:
        return NEUTRAL_HOOK_RESULT


# =============================================================================
# PIPELINE
# =============================================================================


@dataclass(frozen=True)
class BuyAdjustment:
    """Результат применения hook к депозиту."""

    base_bonding_tokens: int
    bonding_tokens_out: int
    hook_result: HookResult


@dataclass(frozen=True)
class SellAdjustment:
    """Результат применения hook к выводу."""

    base_input_tokens: int
    adjusted_bonding_tokens: int
    input_tokens_out: int
    hook_result: HookResult


class HookPipeline:
    """Вызов hook и применение (fee, delta) к базовым котировкам."""

    def __init__(self, hook: BondingCurveHook | None = None):
        self._hook = hook or NoOpHook()

    @property
    def hook(self) -> BondingCurveHook:
        return self._hook

    def set_hook(self, hook: BondingCurveHook | None) -> BondingCurveHook:
        """Замена hook; None восстанавливает NoOpHook. Возвращает предыдущий."""
        previous = self._hook
        self._hook = hook or NoOpHook()
        return previous

    def run_buy(self, buyer: str, base_bonding_tokens: int, input_amount: int) -> BuyAdjustment:
        """Вызов hook.buy и вычисление итогового количества claim token.

        Raises:
            HookCallError: hook выбросил исключение
            HookResultError: результат вне домена
        """
        result = self._invoke("buy", self._hook.buy, buyer, base_bonding_tokens, input_amount)

        adjusted = base_bonding_tokens + result.delta_bonding_token
        if adjusted < 0:
            raise HookResultError(
                f"buy delta {result.delta_bonding_token} makes bonding output negative "
                f"(base {base_bonding_tokens})"
            )

        out = scale_by_hook_fee(adjusted, result.fee)
        logger.debug(
            "hook buy: base=%d delta=%d fee=%d -> out=%d",
            base_bonding_tokens,
            result.delta_bonding_token,
            result.fee,
            out,
        )
        return BuyAdjustment(
            base_bonding_tokens=base_bonding_tokens,
            bonding_tokens_out=out,
            hook_result=result,
        )

    def run_sell(
        self,
        seller: str,
        bonding_token_amount: int,
        effective_bonding_tokens: int,
        base_input_tokens: int,
        requote: Callable[[int], int],
    ) -> SellAdjustment:
        """Вызов hook.sell и вычисление итоговой выплаты funding token.

        Args:
            seller: адрес продавца
            bonding_token_amount: полное сжигаемое количество claim token
            effective_bonding_tokens: количество после withdrawal fee
            base_input_tokens: базовая котировка для effective количества
            requote: котировка вывода для скорректированного effective количества

        Raises:
            HookCallError: hook выбросил исключение
            HookResultError: результат вне домена
        """
        result = self._invoke(
            "sell", self._hook.sell, seller, bonding_token_amount, base_input_tokens
        )

        adjusted_bonding = effective_bonding_tokens + result.delta_bonding_token
        if adjusted_bonding < 0:
            raise HookResultError(
                f"sell delta {result.delta_bonding_token} makes bonding amount negative "
                f"(effective {effective_bonding_tokens})"
            )

        if result.delta_bonding_token == 0:
            gross = base_input_tokens
        else:
            gross = requote(adjusted_bonding)

        out = scale_by_hook_fee(gross, result.fee)
        logger.debug(
            "hook sell: base=%d delta=%d fee=%d -> out=%d",
            base_input_tokens,
            result.delta_bonding_token,
            result.fee,
            out,
        )
        return SellAdjustment(
            base_input_tokens=base_input_tokens,
            adjusted_bonding_tokens=adjusted_bonding,
            input_tokens_out=out,
            hook_result=result,
        )

    @staticmethod
    def _invoke(side: str, call: Callable[..., HookResult], *args) -> HookResult:
        try:
            result = call(*args)
        except CurveEngineError:
            # Ошибки движка (в т.ч. ReentrancyError) пробрасываются как есть
            raise
        except PydanticValidationError as exc:
            raise HookResultError(f"hook {side} returned invalid result: {exc}") from exc
        except Exception as exc:
            raise HookCallError(side, exc) from exc

        if not isinstance(result, HookResult):
            raise HookResultError(
                f"hook {side} must return HookResult, got {type(result).__name__}"
            )
        return result
