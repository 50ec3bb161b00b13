"""Gatekeeper — цепочка гейтов допуска для add/remove liquidity.

- 4 gates с фиксированным порядком
- Первая блокировка выигрывает и отображается в типизированную ошибку
"""

from .gatekeeper import GateChainResult, Gatekeeper
from .gates import (
    Gate00Lifecycle,
    Gate00Result,
    Gate01Pause,
    Gate01Result,
    Gate02Result,
    Gate02VaultApproval,
    Gate03AmountValidation,
    Gate03Result,
)

__all__ = [
    "Gatekeeper",
    "GateChainResult",
    "Gate00Lifecycle",
    "Gate00Result",
    "Gate01Pause",
    "Gate01Result",
    "Gate02VaultApproval",
    "Gate02Result",
    "Gate03AmountValidation",
    "Gate03Result",
]
