"""
Domain models and value objects.

Contains the bonding curve state entities: VirtualReserves, Goals,
HookResult, lifecycle flags and controller events.
"""

from src.core.domain.events import (
    CollaboratorUpdated,
    CurveEvent,
    FeeCollected,
    GoalsSet,
    HookUpdated,
    LiquidityAdded,
    LiquidityRemoved,
    LockStateChanged,
    OwnershipTransferred,
    VaultApprovalChanged,
    WithdrawalFeeUpdated,
)
from src.core.domain.hook_result import NEUTRAL_HOOK_RESULT, HookResult
from src.core.domain.lifecycle import CurveState, LifecycleState, WithdrawalFeeConfig
from src.core.domain.reserves import Goals, VirtualPair, VirtualReserves

__all__ = [
    # Reserves
    "VirtualReserves",
    "VirtualPair",
    "Goals",
    # Hooks
    "HookResult",
    "NEUTRAL_HOOK_RESULT",
    # Lifecycle
    "CurveState",
    "LifecycleState",
    "WithdrawalFeeConfig",
    # Events
    "CurveEvent",
    "GoalsSet",
    "LiquidityAdded",
    "LiquidityRemoved",
    "FeeCollected",
    "WithdrawalFeeUpdated",
    "HookUpdated",
    "LockStateChanged",
    "VaultApprovalChanged",
    "CollaboratorUpdated",
    "OwnershipTransferred",
]
