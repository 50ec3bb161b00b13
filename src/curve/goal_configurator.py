"""GoalConfigurator — одноразовый вывод параметров кривой из goals.

Входы:
- funding_goal: целевой объём сбора funding token (> seed_input == 0)
- desired_average_price: целевая средняя цена, [sqrt(0.75), 1) * 1e18

Выход: GoalConfiguration — Goals + начальные VirtualReserves. Установка в
движок выполняется VirtualPairEngine.initialize, повторная установка
запрещена.
"""

import logging
from dataclasses import dataclass

from src.core.domain.reserves import Goals, VirtualReserves
from src.core.math.curve_math import CurveParameters, derive_curve_parameters
from src.core.math.fixed_point import validate_uint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GoalConfiguration:
    """Результат GoalConfigurator."""

    goals: Goals
    reserves: VirtualReserves
    parameters: CurveParameters


class GoalConfigurator:
    """Вывод alpha/beta/K/L0 из funding goal и целевой средней цены."""

    def configure(self, funding_goal: int, desired_average_price: int) -> GoalConfiguration:
        """Построение конфигурации кривой.

        Args:
            funding_goal: целевой объём сбора
            desired_average_price: целевая средняя цена (1e18)

        Returns:
            GoalConfiguration

        Raises:
            FundingGoalError: funding_goal <= seed_input
            PriceOutOfRangeError: цена вне [866025403784438647, 1e18)
        """
        validate_uint(funding_goal, "funding_goal")
        validate_uint(desired_average_price, "desired_average_price")

        parameters = derive_curve_parameters(funding_goal, desired_average_price)

        reserves = VirtualReserves(
            virtual_input_tokens=0,
            virtual_l=parameters.virtual_l,
            alpha=parameters.alpha,
            beta=parameters.beta,
            virtual_k=parameters.virtual_k,
        )
        goals = Goals(
            funding_goal=funding_goal,
            desired_average_price=desired_average_price,
            initial_virtual_l=parameters.virtual_l,
        )

        logger.debug(
            "derived curve parameters: alpha=%d virtual_k=%d virtual_l=%d P0=%d",
            parameters.alpha,
            parameters.virtual_k,
            parameters.virtual_l,
            parameters.initial_marginal_price,
        )
        return GoalConfiguration(goals=goals, reserves=reserves, parameters=parameters)
