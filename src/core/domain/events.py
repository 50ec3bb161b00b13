"""
Events — журнал событий контроллера

События добавляются в журнал только после успешного commit операции;
при откате журнал восстанавливается вместе с остальным состоянием.
"""

from dataclasses import asdict, dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class CurveEvent:
    """Базовый класс событий."""

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        return {"event": self.name, **asdict(self)}


@dataclass(frozen=True)
class GoalsSet(CurveEvent):
    funding_goal: int
    desired_average_price: int
    alpha: int
    beta: int
    virtual_k: int
    virtual_l: int


@dataclass(frozen=True)
class LiquidityAdded(CurveEvent):
    user: str
    input_amount: int
    bonding_tokens_out: int
    hook_fee: int
    delta_bonding_token: int


@dataclass(frozen=True)
class LiquidityRemoved(CurveEvent):
    user: str
    bonding_token_amount: int
    input_tokens_out: int
    hook_fee: int
    delta_bonding_token: int


@dataclass(frozen=True)
class FeeCollected(CurveEvent):
    """Withdrawal fee, удержанная в виде уменьшенной выплаты."""

    user: str
    fee_basis_points: int
    bonding_token_amount: int
    fee_amount: int


@dataclass(frozen=True)
class WithdrawalFeeUpdated(CurveEvent):
    old_fee_basis_points: int
    new_fee_basis_points: int


@dataclass(frozen=True)
class HookUpdated(CurveEvent):
    hook: str


@dataclass(frozen=True)
class LockStateChanged(CurveEvent):
    locked: bool


@dataclass(frozen=True)
class VaultApprovalChanged(CurveEvent):
    initialized: bool


@dataclass(frozen=True)
class CollaboratorUpdated(CurveEvent):
    role: str
    address: Optional[str]


@dataclass(frozen=True)
class OwnershipTransferred(CurveEvent):
    previous_owner: str
    new_owner: str
