"""
Core math modules для bonding curve движка

Целочисленная fixed-point арифметика (1e18) и чистые формулы
virtual-pair кривой.
"""

# Fixed-point primitives
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

# Curve formulas
from src.core.math.curve_math import (
    MAX_DESIRED_AVERAGE_PRICE_EXCLUSIVE,
    MIN_DESIRED_AVERAGE_PRICE,
    SEED_INPUT,
    CurveParameters,
    average_price,
    bonding_out_for_input,
    bonding_reserve_for,
    derive_curve_parameters,
    input_out_for_bonding,
    invariant_product,
    invariant_tolerance,
    marginal_price,
    max_input_for_capacity,
    validate_goals,
)

__all__ = [
    # Fixed-point: Constants
    "WAD",
    "BPS_DENOMINATOR",
    "HOOK_FEE_DENOMINATOR",
    "UINT256_MAX",
    # Fixed-point: Division
    "floor_div",
    "mul_div",
    "wad_mul",
    "wad_div",
    # Fixed-point: Fees
    "apply_basis_points_reduction",
    "basis_points_of",
    "scale_by_hook_fee",
    # Fixed-point: Comparisons
    "abs_diff",
    "is_within_tolerance",
    "relative_error_wad",
    # Fixed-point: Validation
    "is_int_value",
    "validate_uint",
    # Curve: Constants
    "MIN_DESIRED_AVERAGE_PRICE",
    "MAX_DESIRED_AVERAGE_PRICE_EXCLUSIVE",
    "SEED_INPUT",
    # Curve: Types
    "CurveParameters",
    # Curve: Functions
    "validate_goals",
    "derive_curve_parameters",
    "bonding_reserve_for",
    "bonding_out_for_input",
    "input_out_for_bonding",
    "max_input_for_capacity",
    "marginal_price",
    "average_price",
    "invariant_product",
    "invariant_tolerance",
]
