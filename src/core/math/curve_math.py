"""
Curve Math — Virtual-Pair Constant Product Formulas

Чистые функции без состояния для virtual-pair bonding curve.

Обозначения:
    x      = virtual_input_tokens (накопленные чистые депозиты funding token)
    L      = virtual_l (виртуальный резерв claim token)
    X      = x + alpha   (input reserve)
    Y      = L + beta    (bonding reserve)
    K      = virtual_k

ФОРМУЛЫ:
    alpha = beta = p_avg * G / (1 - p_avg)
    P0    = p_avg² / 1e18                 (только при zero-seed: x0 == 0)
    K     = alpha² * 1e18 / P0
    L0    = K / alpha - beta

    bonding_out = Y - K / (X + dx)
    input_out   = X - K / (Y + dy)
    P(X)        = X² * 1e18 / K

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. K == X * Y в пределах invariant_tolerance(K, X)
2. Y всегда выводится из инварианта: Y = K // X
3. Все деления floor, поэтому каждая котировка округляется в пользу пула
"""

from typing import Final, NamedTuple

from src.core.errors import FundingGoalError, PriceOutOfRangeError
from src.core.math.fixed_point import WAD, floor_div, mul_div, wad_div, wad_mul

# =============================================================================
# ПАРАМЕТРЫ GOALS
# =============================================================================

# ceil(sqrt(0.75) * 1e18): нижняя граница desired_average_price (включительно)
MIN_DESIRED_AVERAGE_PRICE: Final[int] = 866025403784438647

# Верхняя граница desired_average_price (исключительно)
MAX_DESIRED_AVERAGE_PRICE_EXCLUSIVE: Final[int] = WAD

# Zero-seed: начальный реальный резерв funding token всегда ровно 0
SEED_INPUT: Final[int] = 0


class CurveParameters(NamedTuple):
    """Константы кривой, выведенные один раз из goals."""

    alpha: int
    beta: int
    virtual_k: int
    virtual_l: int
    initial_marginal_price: int


# =============================================================================
# ВЫВОД ПАРАМЕТРОВ
# =============================================================================


def validate_goals(funding_goal: int, desired_average_price: int) -> None:
    """
    Проверка предусловий set_goals.

    Raises:
        FundingGoalError: Если funding_goal <= SEED_INPUT
        PriceOutOfRangeError: Если цена вне [MIN, 1e18)
    """
    if funding_goal <= SEED_INPUT:
        raise FundingGoalError(funding_goal, SEED_INPUT)

    if not (
        MIN_DESIRED_AVERAGE_PRICE
        <= desired_average_price
        < MAX_DESIRED_AVERAGE_PRICE_EXCLUSIVE
    ):
        raise PriceOutOfRangeError(
            desired_average_price,
            MIN_DESIRED_AVERAGE_PRICE,
            MAX_DESIRED_AVERAGE_PRICE_EXCLUSIVE,
        )


def derive_curve_parameters(
    funding_goal: int, desired_average_price: int
) -> CurveParameters:
    """
    Вывод alpha, beta, K и L0 из funding goal и целевой средней цены.

    P0 = p_avg² корректна только потому, что zero-seed делает начальный
    резерв funding token ровно нулевым.

    Args:
        funding_goal: Целевой объём сбора funding token
        desired_average_price: Целевая средняя цена (1e18 fixed point)

    Returns:
        CurveParameters

    Examples:
        >>> p = derive_curve_parameters(1000 * 10**18, 9 * 10**17)
        >>> p.alpha == p.beta == 9000 * 10**18
        True
        >>> p.virtual_k == 10**44
        True
    """
    validate_goals(funding_goal, desired_average_price)

    alpha = mul_div(desired_average_price, funding_goal, WAD - desired_average_price)
    beta = alpha

    initial_marginal_price = wad_mul(desired_average_price, desired_average_price)
    virtual_k = wad_div(alpha * alpha, initial_marginal_price)
    virtual_l = floor_div(virtual_k, alpha) - beta

    return CurveParameters(
        alpha=alpha,
        beta=beta,
        virtual_k=virtual_k,
        virtual_l=virtual_l,
        initial_marginal_price=initial_marginal_price,
    )


# =============================================================================
# СВОП-ФОРМУЛЫ
# =============================================================================


def bonding_reserve_for(input_reserve: int, virtual_k: int) -> int:
    """Y = K // X — bonding reserve, удовлетворяющий инварианту."""
    return floor_div(virtual_k, input_reserve)


def bonding_out_for_input(
    input_reserve: int, bonding_reserve: int, virtual_k: int, input_amount: int
) -> int:
    """
    Claim tokens за input_amount funding tokens.

    bonding_out = Y - K // (X + dx)
    """
    return bonding_reserve - floor_div(virtual_k, input_reserve + input_amount)


def input_out_for_bonding(
    input_reserve: int, bonding_reserve: int, virtual_k: int, bonding_amount: int
) -> int:
    """
    Funding tokens за bonding_amount claim tokens.

    input_out = X - K // (Y + dy), ограничено снизу нулём: Y = K // X
    округлён вниз, поэтому для крошечных dy формула может уйти в минус.
    """
    if bonding_amount == 0:
        return 0
    out = input_reserve - floor_div(virtual_k, bonding_reserve + bonding_amount)
    return max(out, 0)


def max_input_for_capacity(input_reserve: int, virtual_k: int, beta: int) -> int:
    """
    Максимальный депозит, после которого virtual_l остаётся >= 0.

    K // (X + dx) >= beta  <=>  X + dx <= K // beta
    """
    return floor_div(virtual_k, beta) - input_reserve


# =============================================================================
# ЦЕНЫ
# =============================================================================


def marginal_price(input_reserve: int, virtual_k: int) -> int:
    """P = X² * 1e18 / K (funding tokens за один claim token, 1e18)."""
    return wad_div(input_reserve * input_reserve, virtual_k)


def average_price(total_raised: int, tokens_sold: int) -> int:
    """Реализованная средняя цена: raised * 1e18 / sold."""
    return wad_div(total_raised, tokens_sold)


# =============================================================================
# ИНВАРИАНТ
# =============================================================================


def invariant_product(input_reserve: int, bonding_reserve: int) -> int:
    return input_reserve * bonding_reserve


def invariant_tolerance(virtual_k: int, input_reserve: int) -> int:
    """
    Допустимое отклонение X * Y от K.

    Базовая толерантность K // 1e18. Floor в Y = K // X даёт ошибку строго
    меньше X, поэтому для goals в единицах меньше 1e18 толерантность не
    опускается ниже X.
    """
    return max(floor_div(virtual_k, WAD), input_reserve)
