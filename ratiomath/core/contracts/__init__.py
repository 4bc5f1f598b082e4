"""
Contract Validation Module

Валидация JSON контрактов ratiomath.
"""

from .validators import (
    ContractValidator,
    DecimalValueValidator,
    FractionLiteralValidator,
    PrecisionContextValidator,
    SchemaLoader,
    validate_decimal_value,
    validate_fraction_literal,
    validate_precision_context,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "DecimalValueValidator",
    "FractionLiteralValidator",
    "PrecisionContextValidator",
    # Functions
    "validate_decimal_value",
    "validate_fraction_literal",
    "validate_precision_context",
]
