"""
ratiomath — exact fractions and terminating decimals

Fraction: точная дробь произвольной точности с NaN и ±Infinity.
DecimalValue: конечная десятичная дробь с элементарными функциями
(sqrt, exp, ln, pow, sin, cos, tan, asin, acos, atan) под digit budget.
"""

from ratiomath.core.math import (
    ConvergenceError,
    DecimalValue,
    Fraction,
    FractionKind,
    FractionParseError,
    InvalidArgumentError,
    UnsupportedOperationError,
)
from ratiomath.core.domain import (
    PrecisionContext,
    get_precision_context,
    local_precision,
    set_precision,
)
from ratiomath.config import RatiomathSettings, get_settings
from ratiomath.logging_config import configure_logging, get_logger

__version__ = "0.1.0"

__all__ = [
    # Values
    "Fraction",
    "FractionKind",
    "DecimalValue",
    # Exceptions
    "ConvergenceError",
    "FractionParseError",
    "InvalidArgumentError",
    "UnsupportedOperationError",
    # Precision
    "PrecisionContext",
    "get_precision_context",
    "local_precision",
    "set_precision",
    # Configuration & logging
    "RatiomathSettings",
    "get_settings",
    "configure_logging",
    "get_logger",
]
