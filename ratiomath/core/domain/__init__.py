"""
Domain models and value objects.

Contains the digit budget (PrecisionContext) and the process-wide default.
"""

from ratiomath.core.domain.precision import (
    PrecisionContext,
    get_precision_context,
    local_precision,
    resolve_context,
    set_precision,
)

__all__ = [
    "PrecisionContext",
    "get_precision_context",
    "local_precision",
    "resolve_context",
    "set_precision",
]
