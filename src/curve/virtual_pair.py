"""VirtualPairEngine — виртуальные резервы, инвариант, котировки и цены.

Движок владеет VirtualReserves и Goals. Котировки и цены — чистые чтения;
мутации строятся как новые VirtualReserves (apply_deposit/apply_withdrawal)
и устанавливаются только через commit, который проверяет инвариант.

Инвариант (после каждой мутации):
    virtual_k == (virtual_input_tokens + alpha) * (virtual_l + beta)
в пределах invariant_tolerance. Нарушение — баг реализации
(InvariantViolation), а не ошибка пользователя.
"""

import logging
from typing import Optional

from src.core.domain.reserves import Goals, VirtualPair, VirtualReserves
from src.core.errors import (
    CurveCapacityError,
    GoalsAlreadySetError,
    GoalsNotSetError,
    InsufficientReservesError,
    InvariantViolation,
    ZeroAmountError,
)
from src.core.math.curve_math import (
    average_price,
    bonding_out_for_input,
    bonding_reserve_for,
    input_out_for_bonding,
    invariant_product,
    invariant_tolerance,
    marginal_price,
    max_input_for_capacity,
)
from src.core.math.fixed_point import (
    apply_basis_points_reduction,
    is_within_tolerance,
    validate_uint,
)
from src.curve.goal_configurator import GoalConfiguration

logger = logging.getLogger(__name__)


class VirtualPairEngine:
    """Virtual-pair constant product engine."""

    def __init__(self):
        self._reserves = VirtualReserves()
        self._goals: Optional[Goals] = None

    # =========================================================================
    # STATE
    # =========================================================================

    @property
    def reserves(self) -> VirtualReserves:
        return self._reserves

    @property
    def goals(self) -> Optional[Goals]:
        return self._goals

    @property
    def is_initialized(self) -> bool:
        return self._reserves.is_initialized

    def require_initialized(self) -> None:
        if not self._reserves.is_initialized:
            raise GoalsNotSetError()

    def initialize(self, configuration: GoalConfiguration) -> None:
        """Установка параметров кривой (одноразово).

        Raises:
            GoalsAlreadySetError: кривая уже инициализирована
            InvariantViolation: конфигурация не удовлетворяет инварианту
        """
        if self.is_initialized:
            raise GoalsAlreadySetError()

        self.check_invariant(configuration.reserves)
        self._reserves = configuration.reserves
        self._goals = configuration.goals

    def snapshot(self) -> tuple[VirtualReserves, Optional[Goals]]:
        return self._reserves, self._goals

    def restore(self, snapshot: tuple[VirtualReserves, Optional[Goals]]) -> None:
        self._reserves, self._goals = snapshot

    # =========================================================================
    # QUOTES
    # =========================================================================

    def quote_add_liquidity(self, input_amount: int) -> int:
        """Claim tokens за input_amount funding tokens (до hook).

        bonding_out = (L + beta) - K // (x + alpha + input_amount)

        Raises:
            GoalsNotSetError: virtual_k == 0
            ZeroAmountError: input_amount == 0
            CurveCapacityError: депозит выкупает резерв claim token целиком
        """
        validate_uint(input_amount, "input_amount")
        self.require_initialized()
        if input_amount == 0:
            raise ZeroAmountError("input_amount")

        reserves = self._reserves
        max_input = max_input_for_capacity(
            reserves.input_reserve, reserves.virtual_k, reserves.beta
        )
        if input_amount > max_input:
            raise CurveCapacityError(input_amount, max(max_input, 0))

        bonding_out = bonding_out_for_input(
            reserves.input_reserve,
            reserves.bonding_reserve,
            reserves.virtual_k,
            input_amount,
        )
        logger.debug("quote add: input=%d -> bonding_out=%d", input_amount, bonding_out)
        return bonding_out

    def quote_remove_liquidity(self, bonding_token_amount: int, fee_basis_points: int = 0) -> int:
        """Funding tokens за bonding_token_amount claim tokens (до hook).

        effective = amount - amount * fee_bps // 10000
        input_out = (x + alpha) - K // (L + beta + effective)

        При fee_basis_points == 10000 effective == 0 и результат 0.
        """
        validate_uint(bonding_token_amount, "bonding_token_amount")
        effective = apply_basis_points_reduction(bonding_token_amount, fee_basis_points)
        return self.quote_remove_effective(effective)

    def quote_remove_effective(self, effective_bonding_tokens: int) -> int:
        """Котировка вывода для уже уменьшенного на fee количества."""
        self.require_initialized()
        reserves = self._reserves
        input_out = input_out_for_bonding(
            reserves.input_reserve,
            reserves.bonding_reserve,
            reserves.virtual_k,
            effective_bonding_tokens,
        )
        logger.debug(
            "quote remove: effective=%d -> input_out=%d",
            effective_bonding_tokens,
            input_out,
        )
        return input_out

    # =========================================================================
    # PRICES / VIEWS
    # =========================================================================

    def get_current_marginal_price(self) -> int:
        """(x + alpha)² * 1e18 // K."""
        self.require_initialized()
        return marginal_price(self._reserves.input_reserve, self._reserves.virtual_k)

    def get_initial_marginal_price(self) -> int:
        """Маргинальная цена при x == seed_input == 0."""
        self.require_initialized()
        return marginal_price(self._reserves.alpha, self._reserves.virtual_k)

    def get_final_marginal_price(self) -> int:
        """Маргинальная цена в точке x == funding_goal."""
        self.require_initialized()
        goals = self._goals
        return marginal_price(
            goals.funding_goal + goals.seed_input + self._reserves.alpha,
            self._reserves.virtual_k,
        )

    def get_average_price(self) -> int:
        """Реализованная средняя цена: total_raised * 1e18 // tokens_sold.

        До первой продажи claim token возвращает начальную маргинальную цену.
        """
        self.require_initialized()
        tokens_sold = self._goals.initial_virtual_l - self._reserves.virtual_l
        if tokens_sold <= 0:
            return self.get_initial_marginal_price()
        return average_price(self.get_total_raised(), tokens_sold)

    def get_total_raised(self) -> int:
        seed_input = self._goals.seed_input if self._goals is not None else 0
        return self._reserves.virtual_input_tokens - seed_input

    def get_virtual_pair(self) -> VirtualPair:
        reserves = self._reserves
        return VirtualPair(
            input_reserve=reserves.input_reserve,
            bonding_reserve=reserves.bonding_reserve,
            virtual_k=reserves.virtual_k,
        )

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def apply_deposit(self, input_amount: int) -> VirtualReserves:
        """Новые резервы после депозита: x += input_amount, L из инварианта."""
        self.require_initialized()
        return self._rebalanced(self._reserves.virtual_input_tokens + input_amount)

    def apply_withdrawal(self, input_tokens_out: int) -> VirtualReserves:
        """Новые резервы после вывода: x -= input_tokens_out, L из инварианта.

        Raises:
            InsufficientReservesError: выплата больше virtual_input_tokens
        """
        self.require_initialized()
        available = self._reserves.virtual_input_tokens
        if input_tokens_out > available:
            raise InsufficientReservesError(input_tokens_out, available)
        return self._rebalanced(available - input_tokens_out)

    def commit(self, reserves: VirtualReserves) -> None:
        """Установка новых резервов после проверки инварианта."""
        self.check_invariant(reserves)
        self._reserves = reserves

    def _rebalanced(self, virtual_input_tokens: int) -> VirtualReserves:
        reserves = self._reserves
        input_reserve = virtual_input_tokens + reserves.alpha
        bonding_reserve = bonding_reserve_for(input_reserve, reserves.virtual_k)
        if bonding_reserve < reserves.beta:
            raise CurveCapacityError(
                virtual_input_tokens - reserves.virtual_input_tokens,
                max_input_for_capacity(
                    reserves.input_reserve, reserves.virtual_k, reserves.beta
                ),
            )
        return reserves.model_copy(
            update={
                "virtual_input_tokens": virtual_input_tokens,
                "virtual_l": bonding_reserve - reserves.beta,
            }
        )

    # =========================================================================
    # INVARIANT
    # =========================================================================

    @staticmethod
    def check_invariant(reserves: VirtualReserves) -> None:
        """Проверка K == (x + alpha) * (L + beta) в пределах толерантности.

        Raises:
            InvariantViolation: дрейф за пределами толерантности
        """
        if not reserves.is_initialized:
            return

        actual = invariant_product(reserves.input_reserve, reserves.bonding_reserve)
        tolerance = invariant_tolerance(reserves.virtual_k, reserves.input_reserve)
        if not is_within_tolerance(reserves.virtual_k, actual, tolerance):
            logger.error(
                "invariant violation: K=%d product=%d tolerance=%d",
                reserves.virtual_k,
                actual,
                tolerance,
            )
            raise InvariantViolation(reserves.virtual_k, actual, tolerance)
