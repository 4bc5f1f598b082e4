"""
PrecisionContext — Digit Budget

Неизменяемый контекст точности для элементарных функций DecimalValue.

Процессный контекст по умолчанию инициализируется из настроек
(RATIOMATH_DIGIT_BUDGET, default 50) и заменяется целиком через
set_precision(). Каждая элементарная функция читает контекст один раз на
входе и передаёт digits дальше явно: уже начатое вычисление не видит
последующих изменений.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from pydantic import BaseModel, Field

from ratiomath.config import get_settings
from ratiomath.core.contracts.validators import validate_precision_context
from ratiomath.core.math.numerical_safeguards import validate_digits
from ratiomath.logging_config import get_logger

logger = get_logger(__name__)


# =============================================================================
# MODEL
# =============================================================================


class PrecisionContext(BaseModel):
    """
    Digit budget: количество десятичных знаков, до которых округляются
    приближённые результаты и к которым сходятся итерационные методы.
    """

    digits: int = Field(..., ge=1, description="Количество десятичных знаков")

    model_config = {"frozen": True}

    def with_digits(self, digits: int) -> "PrecisionContext":
        """Новый контекст с другим digit budget."""
        return PrecisionContext(digits=digits)

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "PrecisionContext":
        """
        Контекст из JSON payload (контракт precision_context.json).

        Raises:
            jsonschema.ValidationError: Payload нарушает контракт
        """
        validate_precision_context(payload)
        return cls(**payload)

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump()


# =============================================================================
# PROCESS DEFAULT
# =============================================================================

_default_context: PrecisionContext = PrecisionContext(digits=get_settings().digit_budget)


def get_precision_context() -> PrecisionContext:
    """Текущий контекст по умолчанию."""
    return _default_context


def set_precision(digits: int) -> PrecisionContext:
    """
    Заменить контекст по умолчанию.

    Args:
        digits: Новый digit budget (>= 1)

    Returns:
        Новый контекст по умолчанию

    Raises:
        InvalidArgumentError: Если digits < 1 или не int
    """
    global _default_context

    validate_digits(digits)
    previous = _default_context
    _default_context = previous.with_digits(digits)

    logger.info("precision_changed", previous=previous.digits, digits=digits)
    return _default_context


def resolve_context(context: Optional[PrecisionContext] = None) -> PrecisionContext:
    """Явный контекст или (если None) текущий контекст по умолчанию."""
    if context is None:
        return _default_context
    return context


@contextmanager
def local_precision(digits: int) -> Iterator[PrecisionContext]:
    """
    Временно заменить контекст по умолчанию.

    Examples:
        >>> with local_precision(10):
        ...     DecimalValue(2).sqrt()
        DecimalValue('1.4142135624')
    """
    previous = get_precision_context()
    context = set_precision(digits)
    try:
        yield context
    finally:
        set_precision(previous.digits)
