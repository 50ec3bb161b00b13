"""WithdrawalFeeModule — owner-configurable fee на вывод (basis points).

Fee не переводится отдельно: он реализуется как уменьшенное количество
claim token, которое видит кривая при котировке вывода. Полная сумма
claim token при этом сжигается.

Модуль не касается виртуальных резервов.
"""

import logging

from src.core.domain.lifecycle import WithdrawalFeeConfig
from src.core.errors import FeeOutOfRangeError
from src.core.math.fixed_point import (
    BPS_DENOMINATOR,
    apply_basis_points_reduction,
    basis_points_of,
    is_int_value,
)

logger = logging.getLogger(__name__)


class WithdrawalFeeModule:
    """Конфигурация withdrawal fee и её применение к сумме вывода."""

    def __init__(self, config: WithdrawalFeeConfig | None = None):
        self._config = config or WithdrawalFeeConfig()

    @property
    def config(self) -> WithdrawalFeeConfig:
        return self._config

    @property
    def fee_basis_points(self) -> int:
        return self._config.fee_basis_points

    def set_fee(self, basis_points: int) -> WithdrawalFeeConfig:
        """Установка fee.

        Raises:
            FeeOutOfRangeError: basis_points не int или вне [0, 10000]
        """
        if not is_int_value(basis_points) or not 0 <= basis_points <= BPS_DENOMINATOR:
            raise FeeOutOfRangeError(basis_points, BPS_DENOMINATOR)

        previous = self._config
        self._config = WithdrawalFeeConfig(fee_basis_points=basis_points)
        logger.debug(
            "withdrawal fee %d -> %d bps", previous.fee_basis_points, basis_points
        )
        return previous

    def restore(self, config: WithdrawalFeeConfig) -> None:
        self._config = config

    def fee_amount(self, bonding_token_amount: int) -> int:
        """floor(amount * fee_bps / 10000)."""
        return basis_points_of(bonding_token_amount, self.fee_basis_points)

    def effective_bonding_tokens(self, bonding_token_amount: int) -> int:
        """amount - fee_amount(amount)."""
        return apply_basis_points_reduction(bonding_token_amount, self.fee_basis_points)
