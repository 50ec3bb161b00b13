"""Early Sell Penalty Hook — линейно убывающий штраф за ранний вывод.

Поведение:
- buy (пока штраф активен) записывает last_buy_timestamp покупателя
- sell (пока штраф активен):
    * покупатель никогда не покупал → fee = 1000 (максимум)
    * иначе fee = 1000 - hours_elapsed * decline_rate_per_hour, clamp к 0
    * hours_elapsed >= max_duration_hours → fee = 0
- штраф неактивен → (0, 0) для обеих сторон

Конфигурационный инвариант:
    decline_rate_per_hour * max_duration_hours >= 1000
гарантирует, что fee достигает нуля.

Hook участвует в атомарности контроллера: checkpoint/rollback восстанавливает
таблицу last_buy_timestamp, если операция откатилась после hook.buy.
"""

import logging
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Final, Optional

from jsonschema import ValidationError

from src.core.contracts.validators import validate_penalty_config
from src.core.domain.hook_result import NEUTRAL_HOOK_RESULT, HookResult
from src.core.errors import AuthorizationError, PenaltyConfigError
from src.core.math.fixed_point import HOOK_FEE_DENOMINATOR
from src.hooks.base import BondingCurveHook

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

SECONDS_PER_HOUR: Final[int] = 3600

# Максимальный штраф (100%)
MAX_PENALTY_FEE: Final[int] = HOOK_FEE_DENOMINATOR


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class PenaltyConfig:
    """Конфигурация early-sell penalty.

    Defaults: 1% (10 промилле) в час на протяжении 100 часов.
    """

    decline_rate_per_hour: int = 10
    max_duration_hours: int = 100

    def __post_init__(self):
        if self.decline_rate_per_hour <= 0:
            raise PenaltyConfigError(
                f"decline_rate_per_hour must be positive, got {self.decline_rate_per_hour}"
            )
        if self.decline_rate_per_hour > MAX_PENALTY_FEE:
            raise PenaltyConfigError(
                f"decline_rate_per_hour must be <= {MAX_PENALTY_FEE}, "
                f"got {self.decline_rate_per_hour}"
            )
        if self.max_duration_hours <= 0:
            raise PenaltyConfigError(
                f"max_duration_hours must be positive, got {self.max_duration_hours}"
            )
        if self.decline_rate_per_hour * self.max_duration_hours < MAX_PENALTY_FEE:
            raise PenaltyConfigError(
                f"decline_rate_per_hour * max_duration_hours must be >= {MAX_PENALTY_FEE}, "
                f"got {self.decline_rate_per_hour} * {self.max_duration_hours}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PenaltyConfig":
        """Загрузка из dict с проверкой JSON Schema (penalty_config.json)."""
        try:
            validate_penalty_config(data)
        except ValidationError as exc:
            raise PenaltyConfigError(f"invalid penalty config: {exc.message}") from exc
        return cls(
            decline_rate_per_hour=data["decline_rate_per_hour"],
            max_duration_hours=data["max_duration_hours"],
        )


def _system_clock() -> int:
    return int(time.time())


# =============================================================================
# HOOK
# =============================================================================


class EarlySellPenaltyHook(BondingCurveHook):
    """Reference hook: штраф за вывод вскоре после покупки."""

    def __init__(
        self,
        owner: str,
        config: Optional[PenaltyConfig] = None,
        clock: Optional[Callable[[], int]] = None,
        penalty_active: bool = True,
    ):
        """
        Args:
            owner: адрес владельца (может менять параметры)
            config: параметры штрафа (default PenaltyConfig())
            clock: источник времени в секундах (default time.time)
            penalty_active: начальное состояние штрафа
        """
        self.owner = owner
        self._config = config or PenaltyConfig()
        self._clock = clock or _system_clock
        self._penalty_active = penalty_active
        self._last_buy_timestamp: Dict[str, int] = {}

    # --- configuration -------------------------------------------------------

    @property
    def config(self) -> PenaltyConfig:
        return self._config

    @property
    def penalty_active(self) -> bool:
        return self._penalty_active

    def set_penalty_parameters(
        self, sender: str, decline_rate_per_hour: int, max_duration_hours: int
    ) -> None:
        self._require_owner(sender, "set penalty parameters")
        self._config = PenaltyConfig(
            decline_rate_per_hour=decline_rate_per_hour,
            max_duration_hours=max_duration_hours,
        )
        logger.info(
            "penalty parameters updated: rate=%d/h duration=%dh",
            decline_rate_per_hour,
            max_duration_hours,
        )

    def set_penalty_active(self, sender: str, active: bool) -> None:
        self._require_owner(sender, "toggle penalty")
        self._penalty_active = active
        logger.info("penalty active=%s", active)

    # --- capability ----------------------------------------------------------

    def buy(self, buyer: str, base_bonding_token: int, base_input_token: int) -> HookResult:
        if self._penalty_active:
            self._last_buy_timestamp[buyer] = self._clock()
        return NEUTRAL_HOOK_RESULT

    def sell(self, seller: str, base_bonding_token: int, base_input_token: int) -> HookResult:
        fee = self.calculate_penalty_fee(seller)
        if fee == 0:
            return NEUTRAL_HOOK_RESULT
        return HookResult(fee=fee, delta_bonding_token=0)

    # --- queries -------------------------------------------------------------

    def last_buy_timestamp(self, user: str) -> Optional[int]:
        return self._last_buy_timestamp.get(user)

    def get_hours_since_last_buy(self, user: str) -> Optional[int]:
        """Целые часы с последней покупки; None если покупок не было."""
        timestamp = self._last_buy_timestamp.get(user)
        if timestamp is None:
            return None
        return max(self._clock() - timestamp, 0) // SECONDS_PER_HOUR

    def calculate_penalty_fee(self, user: str) -> int:
        """Текущий штраф пользователя в промилле (0..1000)."""
        if not self._penalty_active:
            return 0

        hours_elapsed = self.get_hours_since_last_buy(user)
        if hours_elapsed is None:
            return MAX_PENALTY_FEE

        if hours_elapsed >= self._config.max_duration_hours:
            return 0

        decline = hours_elapsed * self._config.decline_rate_per_hour
        return max(MAX_PENALTY_FEE - decline, 0)

    # --- transactional -------------------------------------------------------

    def checkpoint(self) -> Dict[str, int]:
        return dict(self._last_buy_timestamp)

    def rollback(self, token: Dict[str, int]) -> None:
        self._last_buy_timestamp = dict(token)

    def _require_owner(self, sender: str, action: str) -> None:
        if sender != self.owner:
            raise AuthorizationError(sender, action)
