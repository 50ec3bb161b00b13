"""Controller — оркестрация bonding curve.

- LiquidityController: owner-only конфигурация, add/remove liquidity, запросы
- AtomicScope / ReentrancyGuard: all-or-nothing и nonReentrant
- Collaborator интерфейсы: ClaimToken, FundingToken, Vault, Pauser, Transactional
"""

from .collaborators import ClaimToken, FundingToken, Pauser, Transactional, Vault
from .liquidity_controller import ControllerConfig, LiquidityController
from .transaction import AtomicScope, ReentrancyGuard

__all__ = [
    "LiquidityController",
    "ControllerConfig",
    "AtomicScope",
    "ReentrancyGuard",
    "ClaimToken",
    "FundingToken",
    "Pauser",
    "Transactional",
    "Vault",
]
