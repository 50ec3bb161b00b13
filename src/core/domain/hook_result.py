"""
HookResult — результат вызова bonding curve hook

Transient модель: создаётся на каждый buy/sell и никогда не сохраняется.
"""

from pydantic import BaseModel, Field

from src.core.math.fixed_point import HOOK_FEE_DENOMINATOR


class HookResult(BaseModel):
    """
    Корректировка котировки от hook.

    fee — промилле (0..1000, шаг 0.1%) от ноги, выплачиваемой вызывающему.
    delta_bonding_token — знаковая поправка к количеству claim token.
    """

    fee: int = Field(default=0, ge=0, le=HOOK_FEE_DENOMINATOR, description="Fee (0.1%)")
    delta_bonding_token: int = Field(default=0, description="Поправка claim token")

    model_config = {"frozen": True}

    @property
    def is_neutral(self) -> bool:
        return self.fee == 0 and self.delta_bonding_token == 0


NEUTRAL_HOOK_RESULT = HookResult()
