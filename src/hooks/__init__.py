"""Hooks — pluggable корректировка котировок buy/sell.

- BondingCurveHook: capability
- NoOpHook: безопасный default
- EarlySellPenaltyHook: reference реализация штрафа за ранний вывод
- HookPipeline: применение (fee, delta) к базовым котировкам
"""

from .base import (
    BondingCurveHook,
    BuyAdjustment,
    HookPipeline,
    NoOpHook,
    SellAdjustment,
)
from .early_sell_penalty import (
    MAX_PENALTY_FEE,
    SECONDS_PER_HOUR,
    EarlySellPenaltyHook,
    PenaltyConfig,
)

__all__ = [
    "BondingCurveHook",
    "BuyAdjustment",
    "HookPipeline",
    "NoOpHook",
    "SellAdjustment",
    "MAX_PENALTY_FEE",
    "SECONDS_PER_HOUR",
    "EarlySellPenaltyHook",
    "PenaltyConfig",
]
