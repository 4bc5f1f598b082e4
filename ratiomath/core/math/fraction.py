"""
Fraction — Exact Rational Arithmetic

Точная дробь произвольной точности поверх встроенного int.

Представление (tagged union):
- FINITE: denominator > 0, gcd(|numerator|, denominator) == 1, ноль = (0, 1)
- NAN: (0, 0)
- POSITIVE_INFINITY: (1, 0)
- NEGATIVE_INFINITY: (-1, 0)

Арифметика тотальна: деление на ноль не бросает исключений, а даёт
NaN или бесконечность со знаком. Для двух FINITE операндов работает
быстрый путь (перекрёстное умножение + gcd) без ветвления по
специальным значениям.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Любой результат находится в канонической форме
2. Экземпляры неизменяемы и хешируемы
3. Целая дробь равна соответствующему int и имеет тот же hash
4. compare_to с NaN всегда возвращает 0 (в обе стороны)
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Optional

from ratiomath.core.contracts.validators import validate_fraction_literal
from ratiomath.core.math.literals import FractionParseError, parse_literal
from ratiomath.core.math.numerical_safeguards import (
    UnsupportedOperationError,
    is_decimal_denominator,
    reduce_pair,
    round_half_away,
    truncate_div,
)
from ratiomath.logging_config import get_logger

logger = get_logger(__name__)


# =============================================================================
# KIND
# =============================================================================


class FractionKind(str, Enum):
    """Вид значения дроби."""

    FINITE = "FINITE"
    NAN = "NAN"
    POSITIVE_INFINITY = "POSITIVE_INFINITY"
    NEGATIVE_INFINITY = "NEGATIVE_INFINITY"


_SPECIAL_NUMERATORS = {
    FractionKind.NAN: 0,
    FractionKind.POSITIVE_INFINITY: 1,
    FractionKind.NEGATIVE_INFINITY: -1,
}

_SPECIAL_NAMES = {
    FractionKind.NAN: "NaN",
    FractionKind.POSITIVE_INFINITY: "Infinity",
    FractionKind.NEGATIVE_INFINITY: "-Infinity",
}

_SPECIAL_REPRS = {
    FractionKind.NAN: "Fraction.NAN",
    FractionKind.POSITIVE_INFINITY: "Fraction.POSITIVE_INFINITY",
    FractionKind.NEGATIVE_INFINITY: "Fraction.NEGATIVE_INFINITY",
}


# =============================================================================
# FRACTION
# =============================================================================


class Fraction:
    """
    Точная дробь с поддержкой NaN и ±Infinity.

    Конструктор: Fraction(numerator=0, denominator=1). Каждый аргумент может
    быть int, float, str (литерал), Fraction или DecimalValue. Два аргумента
    означают numerator / denominator с правилами специальных значений.

    Examples:
        >>> Fraction(2, 4)
        Fraction(1, 2)
        >>> Fraction("2 3/4")
        Fraction(11, 4)
        >>> Fraction(1, 0)
        Fraction.POSITIVE_INFINITY
    """

    __slots__ = ("_numerator", "_denominator", "_kind")

    ZERO: Fraction
    ONE: Fraction
    NAN: Fraction
    POSITIVE_INFINITY: Fraction
    NEGATIVE_INFINITY: Fraction

    def __new__(cls, numerator: Any = 0, denominator: Any = None) -> Fraction:
        if denominator is None:
            return _coerce_argument(numerator)

        if _is_int(numerator) and _is_int(denominator):
            return _from_pair(numerator, denominator)

        return _coerce_argument(numerator).divide(_coerce_argument(denominator))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> tuple[Any, ...]:
        return (_restore, (self._numerator, self._denominator, self._kind.value))

    # -------------------------------------------------------------------------
    # Alternate constructors
    # -------------------------------------------------------------------------

    @classmethod
    def from_int(cls, value: int) -> Fraction:
        """Дробь value/1."""
        if not _is_int(value):
            raise TypeError(f"from_int expects an int, got {type(value).__name__}")
        return _make(value, 1)

    @classmethod
    def from_float(cls, value: float) -> Fraction:
        """
        Дробь из float через repr().

        Десятичная запись repr() сохраняется точно: from_float(0.1) == 1/10.
        NaN и ±inf отображаются в специальные значения.
        """
        if math.isnan(value):
            return NAN
        if math.isinf(value):
            return POSITIVE_INFINITY if value > 0 else NEGATIVE_INFINITY
        return cls.parse(repr(float(value)))

    @classmethod
    def mixed(cls, whole: int, numerator: int, denominator: int) -> Fraction:
        """
        Смешанная дробь whole numerator/denominator.

        Знак определяется целой частью: mixed(-2, 3, 4) == -11/4.

        Examples:
            >>> Fraction.mixed(2, 3, 4)
            Fraction(11, 4)
        """
        magnitude = abs(whole) * denominator + numerator
        if whole < 0:
            magnitude = -magnitude
        return _from_pair(magnitude, denominator)

    @classmethod
    def parse(cls, source: str) -> Fraction:
        """
        Разобрать литерал дроби.

        Raises:
            FractionParseError: Если строка не соответствует грамматике
        """
        numerator, denominator = parse_literal(source)
        return _from_pair(numerator, denominator)

    @classmethod
    def try_parse(cls, source: str) -> Optional[Fraction]:
        """Разобрать литерал или вернуть None."""
        try:
            return cls.parse(source)
        except FractionParseError:
            return None

    @classmethod
    def parse_or_nan(cls, source: str) -> Fraction:
        """Разобрать литерал или вернуть NaN."""
        try:
            return cls.parse(source)
        except FractionParseError:
            logger.debug("fraction_parse_fallback", source=source)
            return NAN

    @classmethod
    def from_json(cls, value: str) -> Fraction:
        """
        Дробь из JSON-строки.

        Строка проверяется по контракту fraction_literal.json.

        Raises:
            jsonschema.ValidationError: Если строка нарушает контракт
        """
        validate_fraction_literal(value)
        return cls.parse(value)

    # -------------------------------------------------------------------------
    # Accessors & predicates
    # -------------------------------------------------------------------------

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    @property
    def kind(self) -> FractionKind:
        return self._kind

    @property
    def is_nan(self) -> bool:
        return self._kind is FractionKind.NAN

    @property
    def is_infinite(self) -> bool:
        return self._kind is FractionKind.POSITIVE_INFINITY or self._kind is FractionKind.NEGATIVE_INFINITY

    @property
    def is_positive_infinity(self) -> bool:
        return self._kind is FractionKind.POSITIVE_INFINITY

    @property
    def is_negative_infinity(self) -> bool:
        return self._kind is FractionKind.NEGATIVE_INFINITY

    @property
    def is_finite(self) -> bool:
        return self._kind is FractionKind.FINITE

    @property
    def is_zero(self) -> bool:
        return self._kind is FractionKind.FINITE and self._numerator == 0

    @property
    def is_integer(self) -> bool:
        return self._kind is FractionKind.FINITE and self._denominator == 1

    @property
    def is_whole(self) -> bool:
        """Конечная дробь без дробной части."""
        return self.is_integer

    @property
    def is_proper(self) -> bool:
        """Правильная дробь: |numerator| < denominator."""
        return self._kind is FractionKind.FINITE and abs(self._numerator) < self._denominator

    @property
    def is_improper(self) -> bool:
        """Неправильная дробь: |numerator| >= denominator."""
        return self._kind is FractionKind.FINITE and abs(self._numerator) >= self._denominator

    @property
    def is_negative(self) -> bool:
        return self._numerator < 0

    @property
    def has_finite_precision(self) -> bool:
        """Конечная дробь с конечной десятичной записью (denominator = 2^a * 5^b)."""
        return self._kind is FractionKind.FINITE and is_decimal_denominator(self._denominator)

    @property
    def sign(self) -> int:
        """-1, 0 или 1. Для NaN возвращает 0."""
        if self._numerator > 0:
            return 1
        if self._numerator < 0:
            return -1
        return 0

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def add(self, other: Fraction) -> Fraction:
        if self._kind is FractionKind.FINITE and other._kind is FractionKind.FINITE:
            return _from_finite(
                self._numerator * other._denominator + other._numerator * self._denominator,
                self._denominator * other._denominator,
            )
        return _add_special(self, other)

    def subtract(self, other: Fraction) -> Fraction:
        if self._kind is FractionKind.FINITE and other._kind is FractionKind.FINITE:
            return _from_finite(
                self._numerator * other._denominator - other._numerator * self._denominator,
                self._denominator * other._denominator,
            )
        return _subtract_special(self, other)

    def multiply(self, other: Fraction) -> Fraction:
        if self._kind is FractionKind.FINITE and other._kind is FractionKind.FINITE:
            return _from_finite(
                self._numerator * other._numerator,
                self._denominator * other._denominator,
            )
        return _multiply_special(self, other)

    def divide(self, other: Fraction) -> Fraction:
        if self._kind is FractionKind.FINITE and other._kind is FractionKind.FINITE and other._numerator != 0:
            return _from_finite(
                self._numerator * other._denominator,
                self._denominator * other._numerator,
            )
        return _divide_special(self, other)

    def modulo(self, other: Fraction) -> Fraction:
        """
        Остаток a - trunc(a / b) * b.

        NaN, если любой операнд NaN, a бесконечно или b == 0.
        Для конечного a и бесконечного b возвращает a.
        """
        if self.is_nan or other.is_nan or self.is_infinite or other.is_zero:
            return NAN
        if other.is_infinite:
            return self
        quotient = truncate_div(
            self._numerator * other._denominator,
            self._denominator * other._numerator,
        )
        return self.subtract(_make(quotient, 1).multiply(other))

    def remainder(self, other: Fraction) -> Fraction:
        """Остаток с усечением к нулю (знак совпадает со знаком делимого)."""
        return self.modulo(_coerce_argument(other))

    def truncating_divide(self, other: Fraction) -> int:
        """
        trunc(a / b) как int.

        Raises:
            UnsupportedOperationError: Если a / b не является конечным
        """
        return self.divide(other).truncate()

    def negate(self) -> Fraction:
        if self._kind is FractionKind.FINITE:
            return _make(-self._numerator, self._denominator)
        if self._kind is FractionKind.POSITIVE_INFINITY:
            return NEGATIVE_INFINITY
        if self._kind is FractionKind.NEGATIVE_INFINITY:
            return POSITIVE_INFINITY
        return NAN

    def inverse(self) -> Fraction:
        """Обратная дробь 1 / self (1/0 = +Infinity)."""
        return ONE.divide(self)

    def square(self) -> Fraction:
        return self.multiply(self)

    def cube(self) -> Fraction:
        return self.multiply(self).multiply(self)

    def pow(self, exponent: int) -> Fraction:
        """
        Возведение в целую степень.

        Правила:
        - NaN ** n = NaN
        - x ** 0 = 1
        - inf ** n (n > 0) = бесконечность (знак по чётности), inf ** n (n < 0) = 0
        - отрицательная степень сначала обращает дробь

        Examples:
            >>> Fraction(2, 3).pow(2)
            Fraction(4, 9)
            >>> Fraction(2).pow(-3)
            Fraction(1, 8)
        """
        if not _is_int(exponent):
            raise TypeError(f"exponent must be an int, got {type(exponent).__name__}")

        if self.is_nan:
            return NAN
        if exponent == 0:
            return ONE
        if self.is_infinite:
            if exponent < 0:
                return ZERO
            if self.is_negative_infinity and exponent % 2 == 1:
                return NEGATIVE_INFINITY
            return POSITIVE_INFINITY
        if exponent < 0:
            return self.inverse().pow(-exponent)

        return _from_finite(self._numerator**exponent, self._denominator**exponent)

    def clamp(self, lower: Any, upper: Any) -> Fraction:
        """Ограничить значение диапазоном [lower, upper]."""
        lower_bound = _coerce_argument(lower)
        upper_bound = _coerce_argument(upper)
        if self.compare_to(lower_bound) < 0:
            return lower_bound
        if self.compare_to(upper_bound) > 0:
            return upper_bound
        return self

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def compare_to(self, other: Any) -> int:
        """
        Сравнить с другим значением: -1, 0 или 1.

        +Infinity больше любого значения, -Infinity меньше любого.
        Любое сравнение с NaN возвращает 0.
        """
        other = _coerce_argument(other)

        if self.is_nan or other.is_nan:
            return 0
        if self._kind is FractionKind.FINITE and other._kind is FractionKind.FINITE:
            left = self._numerator * other._denominator
            right = other._numerator * self._denominator
            return (left > right) - (left < right)
        if self._kind is other._kind:
            return 0
        if self.is_positive_infinity or other.is_negative_infinity:
            return 1
        return -1

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Fraction):
            return (
                self._kind is other._kind
                and self._numerator == other._numerator
                and self._denominator == other._denominator
            )
        if _is_int(other):
            return self._kind is FractionKind.FINITE and self._denominator == 1 and self._numerator == other
        return NotImplemented

    def __hash__(self) -> int:
        if self._kind is not FractionKind.FINITE:
            return hash(self._kind)
        if self._denominator == 1:
            return hash(self._numerator)
        return hash((self._numerator, self._denominator))

    def __lt__(self, other: Any) -> bool:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return self.compare_to(operand) < 0

    def __le__(self, other: Any) -> bool:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return self.compare_to(operand) <= 0

    def __gt__(self, other: Any) -> bool:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return self.compare_to(operand) > 0

    def __ge__(self, other: Any) -> bool:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return self.compare_to(operand) >= 0

    # -------------------------------------------------------------------------
    # Rounding & conversion
    # -------------------------------------------------------------------------

    def _require_finite(self, operation: str) -> None:
        if self._kind is not FractionKind.FINITE:
            raise UnsupportedOperationError(f"Cannot {operation} {self}")

    def truncate(self) -> int:
        """Целая часть с усечением к нулю."""
        self._require_finite("truncate")
        return truncate_div(self._numerator, self._denominator)

    def round(self) -> int:
        """Ближайшее целое, половина округляется от нуля."""
        self._require_finite("round")
        return round_half_away(self._numerator, self._denominator)

    def floor(self) -> int:
        self._require_finite("floor")
        return self._numerator // self._denominator

    def ceil(self) -> int:
        self._require_finite("ceil")
        return -(-self._numerator // self._denominator)

    def to_float(self) -> float:
        """
        Преобразовать в float.

        Специальные значения дают nan/±inf. Результат за пределами
        диапазона float насыщается до ±inf.
        """
        if self._kind is FractionKind.NAN:
            return math.nan
        if self._kind is FractionKind.POSITIVE_INFINITY:
            return math.inf
        if self._kind is FractionKind.NEGATIVE_INFINITY:
            return -math.inf
        try:
            return self._numerator / self._denominator
        except OverflowError:
            return math.inf if self._numerator > 0 else -math.inf

    def to_int(self) -> int:
        return self.truncate()

    def to_json(self) -> str:
        return str(self)

    def to_mixed_string(self) -> str:
        """
        Смешанная запись: "2 3/4" для 11/4, "-2 3/4" для -11/4.

        Правильные дроби, целые и специальные значения выводятся как str().
        """
        if self._kind is not FractionKind.FINITE or not self.is_improper or self._denominator == 1:
            return str(self)
        whole, rest = divmod(abs(self._numerator), self._denominator)
        prefix = "-" if self._numerator < 0 else ""
        return f"{prefix}{whole} {rest}/{self._denominator}"

    def __trunc__(self) -> int:
        return self.truncate()

    def __floor__(self) -> int:
        return self.floor()

    def __ceil__(self) -> int:
        return self.ceil()

    def __round__(self, ndigits: Optional[int] = None) -> Any:
        if ndigits is None:
            return self.round()
        self._require_finite("round")
        scale = 10 ** abs(ndigits)
        if ndigits >= 0:
            return _from_pair(round_half_away(self._numerator * scale, self._denominator), scale)
        return _make(round_half_away(self._numerator, self._denominator * scale) * scale, 1)

    def __int__(self) -> int:
        return self.truncate()

    def __float__(self) -> float:
        return self.to_float()

    def __bool__(self) -> bool:
        return not self.is_zero

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    def __neg__(self) -> Fraction:
        return self.negate()

    def __pos__(self) -> Fraction:
        return self

    def __abs__(self) -> Fraction:
        if self._numerator < 0:
            return self.negate()
        return self

    def __add__(self, other: Any) -> Fraction:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return self.add(operand)

    def __radd__(self, other: Any) -> Fraction:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return operand.add(self)

    def __sub__(self, other: Any) -> Fraction:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return self.subtract(operand)

    def __rsub__(self, other: Any) -> Fraction:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return operand.subtract(self)

    def __mul__(self, other: Any) -> Fraction:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return self.multiply(operand)

    def __rmul__(self, other: Any) -> Fraction:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return operand.multiply(self)

    def __truediv__(self, other: Any) -> Fraction:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return self.divide(operand)

    def __rtruediv__(self, other: Any) -> Fraction:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return operand.divide(self)

    def __mod__(self, other: Any) -> Fraction:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return self.modulo(operand)

    def __rmod__(self, other: Any) -> Fraction:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return operand.modulo(self)

    def __floordiv__(self, other: Any) -> int:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return self.truncating_divide(operand)

    def __rfloordiv__(self, other: Any) -> int:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return operand.truncating_divide(self)

    def __pow__(self, exponent: Any) -> Fraction:
        if not _is_int(exponent):
            return NotImplemented
        return self.pow(exponent)

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        if self._kind is not FractionKind.FINITE:
            return _SPECIAL_NAMES[self._kind]
        if self._denominator == 1:
            return str(self._numerator)
        return f"{self._numerator}/{self._denominator}"

    def __repr__(self) -> str:
        if self._kind is not FractionKind.FINITE:
            return _SPECIAL_REPRS[self._kind]
        return f"Fraction({self._numerator}, {self._denominator})"


# =============================================================================
# CONSTRUCTION HELPERS
# =============================================================================


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _make(numerator: int, denominator: int, kind: FractionKind = FractionKind.FINITE) -> Fraction:
    """Создать экземпляр без нормализации (пара уже каноническая)."""
    instance = object.__new__(Fraction)
    object.__setattr__(instance, "_numerator", numerator)
    object.__setattr__(instance, "_denominator", denominator)
    object.__setattr__(instance, "_kind", kind)
    return instance


def _restore(numerator: int, denominator: int, kind: str) -> Fraction:
    return _make(numerator, denominator, FractionKind(kind))


def _from_finite(numerator: int, denominator: int) -> Fraction:
    """Каноническая конечная дробь (знаменатель != 0, любого знака)."""
    return _make(*reduce_pair(numerator, denominator))


def _from_pair(numerator: int, denominator: int) -> Fraction:
    """numerator / denominator по правилам специальных значений."""
    if denominator == 0:
        if numerator == 0:
            return NAN
        return POSITIVE_INFINITY if numerator > 0 else NEGATIVE_INFINITY
    return _from_finite(numerator, denominator)


def _coerce_operand(value: Any) -> Optional[Fraction]:
    """Привести операнд арифметики к Fraction; None для неподдерживаемых типов."""
    if isinstance(value, Fraction):
        return value
    if _is_int(value):
        return _make(value, 1)
    if isinstance(value, float):
        return Fraction.from_float(value)
    to_fraction = getattr(value, "to_fraction", None)
    if to_fraction is not None and not isinstance(value, type):
        return to_fraction()
    return None


def _coerce_argument(value: Any) -> Fraction:
    """Привести аргумент конструктора к Fraction."""
    if isinstance(value, str):
        return Fraction.parse(value)
    operand = _coerce_operand(value)
    if operand is None:
        raise TypeError(f"Cannot convert {type(value).__name__} to Fraction")
    return operand


# =============================================================================
# SLOW PATH (специальные значения)
# =============================================================================


def _add_special(left: Fraction, right: Fraction) -> Fraction:
    if left.is_nan or right.is_nan:
        return NAN
    if left.is_infinite and right.is_infinite:
        return left if left._kind is right._kind else NAN
    return left if left.is_infinite else right


def _subtract_special(left: Fraction, right: Fraction) -> Fraction:
    if left.is_nan or right.is_nan:
        return NAN
    if left.is_infinite:
        if right._kind is left._kind:
            return NAN
        return left
    return right.negate()


def _multiply_special(left: Fraction, right: Fraction) -> Fraction:
    if left.is_nan or right.is_nan:
        return NAN
    if left.is_zero or right.is_zero:
        return NAN
    return POSITIVE_INFINITY if left.sign * right.sign > 0 else NEGATIVE_INFINITY


def _divide_special(left: Fraction, right: Fraction) -> Fraction:
    if left.is_nan or right.is_nan:
        return NAN
    if right.is_zero:
        if left.is_zero:
            return NAN
        return POSITIVE_INFINITY if left.sign > 0 else NEGATIVE_INFINITY
    if left.is_infinite:
        if right.is_infinite:
            return NAN
        return POSITIVE_INFINITY if left.sign * right.sign > 0 else NEGATIVE_INFINITY
    # конечное / бесконечное
    return ZERO


# =============================================================================
# CONSTANTS
# =============================================================================

ZERO: Fraction = _make(0, 1)
ONE: Fraction = _make(1, 1)
NAN: Fraction = _make(_SPECIAL_NUMERATORS[FractionKind.NAN], 0, FractionKind.NAN)
POSITIVE_INFINITY: Fraction = _make(
    _SPECIAL_NUMERATORS[FractionKind.POSITIVE_INFINITY], 0, FractionKind.POSITIVE_INFINITY
)
NEGATIVE_INFINITY: Fraction = _make(
    _SPECIAL_NUMERATORS[FractionKind.NEGATIVE_INFINITY], 0, FractionKind.NEGATIVE_INFINITY
)

Fraction.ZERO = ZERO
Fraction.ONE = ONE
Fraction.NAN = NAN
Fraction.POSITIVE_INFINITY = POSITIVE_INFINITY
Fraction.NEGATIVE_INFINITY = NEGATIVE_INFINITY
