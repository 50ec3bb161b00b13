"""
Lifecycle — состояние жизненного цикла и конфигурация withdrawal fee

Immutable Pydantic модели.
"""

from enum import Enum

from pydantic import BaseModel, Field

from src.core.math.fixed_point import BPS_DENOMINATOR


# =============================================================================
# ENUMS
# =============================================================================


class CurveState(str, Enum):
    """Состояние кривой: GOALS_NOT_SET → ACTIVE ⇄ LOCKED."""

    GOALS_NOT_SET = "GOALS_NOT_SET"
    ACTIVE = "ACTIVE"
    LOCKED = "LOCKED"


# =============================================================================
# MODELS
# =============================================================================


class LifecycleState(BaseModel):
    """
    Флаги lifecycle guard.

    paused здесь отсутствует: им владеет внешний Pauser.
    """

    curve_state: CurveState = Field(
        default=CurveState.GOALS_NOT_SET, description="Состояние state machine"
    )
    vault_approval_initialized: bool = Field(
        default=False, description="Vault получил allowance на funding token"
    )

    model_config = {"frozen": True}

    @property
    def locked(self) -> bool:
        return self.curve_state == CurveState.LOCKED


class WithdrawalFeeConfig(BaseModel):
    """Withdrawal fee в basis points, [0, 10000]."""

    fee_basis_points: int = Field(
        default=0, ge=0, le=BPS_DENOMINATOR, description="Fee (basis points)"
    )

    model_config = {"frozen": True}
