"""
Unit tests для fixed-point примитивов (src/core/math/fixed_point.py)

Coverage:
- floor деление и деление на ноль
- basis points и hook fee масштабирование
- толерантность и относительная ошибка
- валидация uint256
"""

import pytest

from src.core.errors import InvalidAmountError, ValidationError
from src.core.math.fixed_point import (
    BPS_DENOMINATOR,
    HOOK_FEE_DENOMINATOR,
    UINT256_MAX,
    WAD,
    abs_diff,
    apply_basis_points_reduction,
    basis_points_of,
    floor_div,
    is_int_value,
    is_within_tolerance,
    mul_div,
    relative_error_wad,
    scale_by_hook_fee,
    validate_uint,
    wad_div,
    wad_mul,
)


# =============================================================================
# DIVISION
# =============================================================================


class TestDivision:
    def test_floor_div_rounds_down(self):
        assert floor_div(7, 2) == 3
        assert floor_div(8, 2) == 4
        assert floor_div(1, 3) == 0

    def test_floor_div_by_zero_raises(self):
        with pytest.raises(ValueError, match="division by zero"):
            floor_div(1, 0)

    def test_mul_div_keeps_precision(self):
        """Умножение до деления: без промежуточной потери точности."""
        assert mul_div(10**30, 3, 10**30) == 3
        assert mul_div(2, 3, 4) == 1

    def test_wad_mul_and_div(self):
        assert wad_mul(9 * 10**17, 9 * 10**17) == 81 * 10**16
        assert wad_div(WAD, 2 * WAD) == 5 * 10**17

    def test_large_values_do_not_overflow(self):
        assert mul_div(UINT256_MAX, UINT256_MAX, UINT256_MAX) == UINT256_MAX


# =============================================================================
# FEES
# =============================================================================


class TestBasisPoints:
    def test_zero_fee_is_identity(self):
        assert apply_basis_points_reduction(12345, 0) == 12345

    def test_full_fee_is_zero(self):
        assert apply_basis_points_reduction(12345, BPS_DENOMINATOR) == 0

    def test_fee_rounds_down(self):
        """1 bps от 1 — это 0: остаток округляется в пользу пользователя."""
        assert basis_points_of(1, 1) == 0
        assert apply_basis_points_reduction(1, 1) == 1

    def test_partial_fee(self):
        assert basis_points_of(1000, 250) == 25
        assert apply_basis_points_reduction(1000, 250) == 975


class TestHookFeeScaling:
    def test_zero_fee(self):
        assert scale_by_hook_fee(1000, 0) == 1000

    def test_full_fee(self):
        assert scale_by_hook_fee(1000, HOOK_FEE_DENOMINATOR) == 0

    def test_partial_fee_rounds_down(self):
        assert scale_by_hook_fee(1001, 500) == 500


# =============================================================================
# COMPARISONS
# =============================================================================


class TestTolerance:
    def test_abs_diff_symmetric(self):
        assert abs_diff(5, 3) == abs_diff(3, 5) == 2

    def test_within_tolerance(self):
        assert is_within_tolerance(100, 99, 1)
        assert not is_within_tolerance(100, 98, 1)

    def test_negative_tolerance_rejected(self):
        with pytest.raises(ValueError):
            is_within_tolerance(1, 1, -1)

    def test_relative_error_wad(self):
        assert relative_error_wad(WAD, WAD) == 0
        assert relative_error_wad(100, 99) == WAD // 100

    def test_relative_error_zero_expected(self):
        with pytest.raises(ValueError):
            relative_error_wad(0, 1)


# =============================================================================
# VALIDATION
# =============================================================================


class TestValidateUint:
    def test_accepts_bounds(self):
        validate_uint(0, "x")
        validate_uint(UINT256_MAX, "x")

    @pytest.mark.parametrize("value", [1.0, "1", None])
    def test_rejects_non_int(self, value):
        with pytest.raises(InvalidAmountError, match="must be an int"):
            validate_uint(value, "x")

    def test_rejects_bool(self):
        with pytest.raises(InvalidAmountError):
            validate_uint(True, "x")

    def test_rejects_negative(self):
        with pytest.raises(InvalidAmountError, match="non-negative") as exc_info:
            validate_uint(-1, "x")
        assert exc_info.value.name == "x"
        assert exc_info.value.value == -1

    def test_rejects_overflow(self):
        with pytest.raises(InvalidAmountError, match="uint256"):
            validate_uint(UINT256_MAX + 1, "x")

    def test_is_validation_error(self):
        with pytest.raises(ValidationError):
            validate_uint(-1, "x")

    @pytest.mark.parametrize("value,expected", [(0, True), (-3, True), (True, False), (1.0, False)])
    def test_is_int_value(self, value, expected):
        assert is_int_value(value) is expected
