"""
VirtualReserves / Goals — модели состояния виртуальной пары

Immutable Pydantic модели. Каждая мутация движка порождает новый экземпляр
через model_copy, поэтому снапшот для отката — это просто ссылка на
предыдущий объект.

Полная совместимость с JSON Schema (contracts/schema/engine_state.json).
"""

from typing import NamedTuple

from pydantic import BaseModel, Field, model_validator

from src.core.math.curve_math import SEED_INPUT


# =============================================================================
# VIRTUAL RESERVES
# =============================================================================


class VirtualReserves(BaseModel):
    """
    Виртуальные резервы bonding curve.

    Инварианты модели (проверяются при создании):
    - alpha == beta
    - alpha == beta == 0  <=>  virtual_k == 0 (goals не заданы)

    Инвариант кривой K == (x + alpha) * (L + beta) проверяет движок, так как
    он требует толерантности.
    """

    virtual_input_tokens: int = Field(
        default=0, ge=0, description="Накопленные чистые депозиты funding token"
    )
    virtual_l: int = Field(default=0, ge=0, description="Виртуальный резерв claim token")
    alpha: int = Field(default=0, ge=0, description="Смещение input reserve")
    beta: int = Field(default=0, ge=0, description="Смещение bonding reserve")
    virtual_k: int = Field(default=0, ge=0, description="Константа инварианта")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_offsets(self) -> "VirtualReserves":
        if self.alpha != self.beta:
            raise ValueError(f"alpha {self.alpha} must equal beta {self.beta}")

        if (self.virtual_k == 0) != (self.alpha == 0):
            raise ValueError(
                "alpha/beta must be zero exactly when virtual_k is zero, "
                f"got alpha={self.alpha}, virtual_k={self.virtual_k}"
            )
        return self

    @property
    def is_initialized(self) -> bool:
        return self.virtual_k > 0

    @property
    def input_reserve(self) -> int:
        """X = virtual_input_tokens + alpha."""
        return self.virtual_input_tokens + self.alpha

    @property
    def bonding_reserve(self) -> int:
        """Y = virtual_l + beta."""
        return self.virtual_l + self.beta


class VirtualPair(NamedTuple):
    """Ответ get_virtual_pair: полные виртуальные резервы и K."""

    input_reserve: int
    bonding_reserve: int
    virtual_k: int


# =============================================================================
# GOALS
# =============================================================================


class Goals(BaseModel):
    """
    Цели запуска, заданные один раз через GoalConfigurator.

    initial_virtual_l — снапшот L0, нужен для реализованной средней цены.
    """

    funding_goal: int = Field(..., gt=0, description="Целевой объём сбора")
    seed_input: int = Field(default=SEED_INPUT, description="Начальный резерв (zero-seed)")
    desired_average_price: int = Field(
        ..., gt=0, description="Целевая средняя цена (1e18 fixed point)"
    )
    initial_virtual_l: int = Field(..., ge=0, description="L0 на момент set_goals")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_seed(self) -> "Goals":
        if self.seed_input != SEED_INPUT:
            raise ValueError(f"seed_input must be {SEED_INPUT} (zero-seed)")
        if self.funding_goal <= self.seed_input:
            raise ValueError("funding_goal must be greater than seed_input")
        return self
