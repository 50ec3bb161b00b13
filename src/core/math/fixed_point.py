"""
Fixed Point — Integer Math Primitives (1e18 scale)

Модуль обеспечивает детерминированную целочисленную арифметику для
bonding curve:
- WAD-масштаб (1e18) для цен и долей
- Деление с округлением вниз (floor)
- Масштабирование долей в basis points и в промилле (hook fee)
- Проверка близости с абсолютной толерантностью
- Валидация диапазонов для uint-подобных значений

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Никаких float: все вычисления на int, результат воспроизводим побитово
2. Деление на ноль никогда не происходит молча (ValueError)
3. Округление всегда явное: только floor, направление выбирается порядком операций
"""

from typing import Final

from src.core.errors import InvalidAmountError

# =============================================================================
# МАСШТАБЫ
# =============================================================================

# Fixed-point масштаб для цен (1.0 == WAD)
WAD: Final[int] = 10**18

# Знаменатель basis points (100% == 10000)
BPS_DENOMINATOR: Final[int] = 10_000

# Знаменатель hook fee (гранулярность 0.1%, 100% == 1000)
HOOK_FEE_DENOMINATOR: Final[int] = 1_000

# Верхняя граница uint256 (для валидации внешних входов)
UINT256_MAX: Final[int] = 2**256 - 1


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


def floor_div(numerator: int, denominator: int) -> int:
    """
    Целочисленное деление с округлением вниз (toward zero для n >= 0).

    Raises:
        ValueError: Если denominator == 0
    """
    if denominator == 0:
        raise ValueError("division by zero")
    return numerator // denominator


def mul_div(a: int, b: int, denominator: int) -> int:
    """
    floor(a * b / denominator) без промежуточного округления.

    Python int неограничен, поэтому переполнения нет: порядок операций
    фиксирован только ради точности.
    """
    return floor_div(a * b, denominator)


def wad_mul(a: int, b: int) -> int:
    """a * b / WAD с округлением вниз."""
    return mul_div(a, b, WAD)


def wad_div(a: int, b: int) -> int:
    """a * WAD / b с округлением вниз."""
    return mul_div(a, WAD, b)


# =============================================================================
# ДОЛИ
# =============================================================================


def apply_basis_points_reduction(amount: int, basis_points: int) -> int:
    """
    amount - floor(amount * bps / 10000).

    Fee округляется вниз, поэтому остаток округляется вверх в пользу
    пользователя; при bps == 10000 результат ровно 0.

    Examples:
        >>> apply_basis_points_reduction(1000, 0)
        1000
        >>> apply_basis_points_reduction(1000, 250)
        975
        >>> apply_basis_points_reduction(1, 1)
        1
        >>> apply_basis_points_reduction(1000, 10000)
        0
    """
    return amount - basis_points_of(amount, basis_points)


def basis_points_of(amount: int, basis_points: int) -> int:
    """floor(amount * bps / 10000)."""
    return mul_div(amount, basis_points, BPS_DENOMINATOR)


def scale_by_hook_fee(amount: int, fee: int) -> int:
    """
    amount * (1000 - fee) / 1000 с округлением вниз.

    Examples:
        >>> scale_by_hook_fee(1000, 0)
        1000
        >>> scale_by_hook_fee(1000, 25)
        975
        >>> scale_by_hook_fee(1000, 1000)
        0
    """
    return mul_div(amount, HOOK_FEE_DENOMINATOR - fee, HOOK_FEE_DENOMINATOR)


# =============================================================================
# СРАВНЕНИЯ
# =============================================================================


def abs_diff(a: int, b: int) -> int:
    return a - b if a >= b else b - a


def is_within_tolerance(expected: int, actual: int, tolerance: int) -> bool:
    """
    Проверка |expected - actual| <= tolerance.

    Examples:
        >>> is_within_tolerance(100, 99, 1)
        True
        >>> is_within_tolerance(100, 98, 1)
        False
    """
    if tolerance < 0:
        raise ValueError(f"tolerance must be non-negative, got {tolerance}")
    return abs_diff(expected, actual) <= tolerance


def relative_error_wad(expected: int, actual: int) -> int:
    """
    Относительная ошибка |expected - actual| / expected в масштабе WAD.

    Используется тестами и диагностикой для сравнения цен (1e-16 == 100).
    """
    if expected == 0:
        raise ValueError("expected must be non-zero")
    return mul_div(abs_diff(expected, actual), WAD, abs(expected))


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_uint(value: int, name: str) -> None:
    """
    Валидация, что значение — int в диапазоне uint256.

    bool явно отвергается: True/False не являются суммами.

    Raises:
        InvalidAmountError: value не int, value < 0 или value > UINT256_MAX
    """
    if not is_int_value(value):
        raise InvalidAmountError(name, value, "must be an int")

    if value < 0:
        raise InvalidAmountError(name, value, "must be non-negative")

    if value > UINT256_MAX:
        raise InvalidAmountError(name, value, "exceeds uint256 range")


def is_int_value(value: object) -> bool:
    """int, но не bool."""
    return isinstance(value, int) and not isinstance(value, bool)

