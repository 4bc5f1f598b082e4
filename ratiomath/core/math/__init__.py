"""
Core math modules для ratiomath

Точная рациональная арифметика, десятичный фасад и элементарные функции.
"""

# Numerical Safeguards
from ratiomath.core.math.numerical_safeguards import (
    # Exceptions
    ConvergenceError,
    InvalidArgumentError,
    UnsupportedOperationError,
    # Integer primitives
    is_decimal_denominator,
    pow10,
    reduce_pair,
    round_half_away,
    truncate_div,
    # Validation
    validate_digits,
)

# Literals
from ratiomath.core.math.literals import FractionParseError, parse_literal

# Fraction
from ratiomath.core.math.fraction import Fraction, FractionKind

# Elementary Functions
from ratiomath.core.math.elementary import (
    SERIES_GUARD_DIGITS,
    SERIES_TERM_CAP_FACTOR,
    SQRT_GUARD_DIGITS,
    quantize,
)

# DecimalValue
from ratiomath.core.math.decimal_value import DecimalValue

__all__ = [
    # Numerical Safeguards — Exceptions
    "ConvergenceError",
    "InvalidArgumentError",
    "UnsupportedOperationError",
    # Numerical Safeguards — Integer primitives
    "is_decimal_denominator",
    "pow10",
    "reduce_pair",
    "round_half_away",
    "truncate_div",
    # Numerical Safeguards — Validation
    "validate_digits",
    # Literals
    "FractionParseError",
    "parse_literal",
    # Fraction
    "Fraction",
    "FractionKind",
    # Elementary Functions — Constants
    "SERIES_GUARD_DIGITS",
    "SERIES_TERM_CAP_FACTOR",
    "SQRT_GUARD_DIGITS",
    # Elementary Functions — Functions
    "quantize",
    # DecimalValue
    "DecimalValue",
]
