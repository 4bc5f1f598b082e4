"""
DecimalValue — Terminating Decimal Facade

Десятичное число поверх Fraction с конечной десятичной записью
(сокращённый знаменатель имеет вид 2^a * 5^b).

- +, -, *, % точны
- / точен, если частное конечно, иначе округляется до digit budget
- sqrt, exp, ln, pow, sin, cos, tan, asin, acos, atan округляются до
  digit budget контекста (PrecisionContext)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Конструктор отклоняет NaN, ±Infinity и незавершающиеся дроби (1/3)
2. Приближения появляются только через from_fraction() и элементарные функции
3. Контекст точности читается один раз на входе элементарной функции
"""

from __future__ import annotations

import math
from typing import Any, Optional

from ratiomath.core.contracts.validators import validate_decimal_value
from ratiomath.core.domain.precision import PrecisionContext, resolve_context
from ratiomath.core.math import elementary
from ratiomath.core.math.fraction import Fraction
from ratiomath.core.math.numerical_safeguards import (
    InvalidArgumentError,
    is_power_of_two,
    pow10,
    round_half_away,
    validate_digits,
)

# Границы int64 для is_exact_int
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

# Целые до 2^53 точно представимы в float
_FLOAT_EXACT_LIMIT = 2**53

_TEN = Fraction(10)


class DecimalValue:
    """
    Десятичное число с конечной записью.

    Examples:
        >>> DecimalValue("1.5") + DecimalValue("2.25")
        DecimalValue('3.75')
        >>> DecimalValue(1) / DecimalValue(8)
        DecimalValue('0.125')
        >>> DecimalValue("1/3")
        Traceback (most recent call last):
        ...
        ratiomath.core.math.numerical_safeguards.InvalidArgumentError: 1/3 has no finite decimal representation
    """

    __slots__ = ("_fraction",)

    ZERO: DecimalValue
    ONE: DecimalValue
    TEN: DecimalValue

    def __init__(self, value: Any) -> None:
        if isinstance(value, DecimalValue):
            fraction = value._fraction
        elif isinstance(value, Fraction):
            fraction = value
        elif isinstance(value, bool):
            raise TypeError("Cannot convert bool to DecimalValue")
        elif isinstance(value, int):
            fraction = Fraction.from_int(value)
        elif isinstance(value, float):
            if not math.isfinite(value):
                raise InvalidArgumentError(f"DecimalValue requires a finite float, got {value}")
            fraction = Fraction.from_float(value)
        elif isinstance(value, str):
            fraction = Fraction.parse(value)
        else:
            raise TypeError(f"Cannot convert {type(value).__name__} to DecimalValue")

        if not fraction.has_finite_precision:
            raise InvalidArgumentError(f"{fraction} has no finite decimal representation")

        object.__setattr__(self, "_fraction", fraction)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("DecimalValue is immutable")

    def __reduce__(self) -> tuple[Any, ...]:
        return (DecimalValue, (self._fraction,))

    @classmethod
    def _from_trusted(cls, fraction: Fraction) -> DecimalValue:
        """Обернуть дробь, заведомо имеющую конечную десятичную запись."""
        instance = object.__new__(cls)
        object.__setattr__(instance, "_fraction", fraction)
        return instance

    # =========================================================================
    # CONSTRUCTORS
    # =========================================================================

    @classmethod
    def from_int(cls, value: int) -> DecimalValue:
        return cls._from_trusted(Fraction.from_int(value))

    @classmethod
    def parse(cls, source: str) -> DecimalValue:
        """
        Разобрать десятичный литерал.

        Raises:
            FractionParseError: Некорректный литерал (включая пустую строку)
            InvalidArgumentError: Литерал задаёт незавершающуюся дробь
        """
        return cls(Fraction.parse(source))

    @classmethod
    def from_fraction(cls, fraction: Fraction, digits: Optional[int] = None) -> DecimalValue:
        """
        Десятичное приближение дроби.

        Конечная десятичная дробь оборачивается точно, остальные
        округляются (half away from zero) до digits знаков.

        Args:
            fraction: Конечная дробь
            digits: Количество знаков (default: digit budget контекста)

        Raises:
            InvalidArgumentError: Если fraction является NaN или ±Infinity
        """
        if not fraction.is_finite:
            raise InvalidArgumentError(f"{fraction} has no finite decimal representation")
        if fraction.has_finite_precision:
            return cls._from_trusted(fraction)

        if digits is None:
            digits = resolve_context().digits
        validate_digits(digits)
        return cls._from_trusted(elementary.quantize(fraction, digits))

    @classmethod
    def from_json(cls, value: str) -> DecimalValue:
        """
        DecimalValue из JSON-строки (контракт decimal_value.json).

        Raises:
            jsonschema.ValidationError: Строка нарушает контракт
        """
        validate_decimal_value(value)
        return cls.parse(value)

    @classmethod
    def pi(cls, context: Optional[PrecisionContext] = None) -> DecimalValue:
        """Число pi с digit budget контекста."""
        digits = resolve_context(context).digits
        return cls._from_trusted(elementary.pi(digits))

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def scale(self) -> int:
        """Количество знаков после десятичной точки."""
        places = 0
        value = self._fraction
        while not value.is_integer:
            value = value * _TEN
            places += 1
        return places

    @property
    def precision(self) -> int:
        """Количество значащих цифр: scale + цифры целой части."""
        return self.scale + len(str(abs(self._fraction.truncate())))

    @property
    def is_integer(self) -> bool:
        return self._fraction.is_integer

    @property
    def is_zero(self) -> bool:
        return self._fraction.is_zero

    @property
    def is_negative(self) -> bool:
        return self._fraction.is_negative

    @property
    def is_exact_int(self) -> bool:
        """Целое в диапазоне int64."""
        return self.is_integer and _INT64_MIN <= self._fraction.numerator <= _INT64_MAX

    @property
    def is_exact_float(self) -> bool:
        """Точно представимо во float: |numerator| <= 2^53, знаменатель - степень двойки."""
        return (
            is_power_of_two(self._fraction.denominator)
            and abs(self._fraction.numerator) <= _FLOAT_EXACT_LIMIT
        )

    @property
    def sign(self) -> int:
        return self._fraction.sign

    @property
    def inverse(self) -> Fraction:
        """Точное обратное значение (может не иметь конечной записи)."""
        return self._fraction.inverse()

    def is_power_of_ten(self) -> bool:
        """1, 10, 100, ...: положительное целое вида 10^k."""
        if not self.is_integer or self._fraction.sign <= 0:
            return False
        text = str(self._fraction.numerator)
        return text[0] == "1" and text[1:].strip("0") == ""

    # =========================================================================
    # CONVERSION
    # =========================================================================

    def to_fraction(self) -> Fraction:
        return self._fraction

    def to_int(self) -> int:
        return self._fraction.truncate()

    def to_float(self) -> float:
        return self._fraction.to_float()

    def to_json(self) -> str:
        return str(self)

    def __int__(self) -> int:
        return self.to_int()

    def __float__(self) -> float:
        return self.to_float()

    def __bool__(self) -> bool:
        return not self.is_zero

    # =========================================================================
    # ARITHMETIC
    # =========================================================================

    @staticmethod
    def _coerce(value: Any) -> Optional[DecimalValue]:
        if isinstance(value, DecimalValue):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return DecimalValue.from_int(value)
        return None

    def __add__(self, other: Any) -> DecimalValue:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return DecimalValue._from_trusted(self._fraction + operand._fraction)

    def __radd__(self, other: Any) -> DecimalValue:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return DecimalValue._from_trusted(operand._fraction + self._fraction)

    def __sub__(self, other: Any) -> DecimalValue:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return DecimalValue._from_trusted(self._fraction - operand._fraction)

    def __rsub__(self, other: Any) -> DecimalValue:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return DecimalValue._from_trusted(operand._fraction - self._fraction)

    def __mul__(self, other: Any) -> DecimalValue:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return DecimalValue._from_trusted(self._fraction * operand._fraction)

    def __rmul__(self, other: Any) -> DecimalValue:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return DecimalValue._from_trusted(operand._fraction * self._fraction)

    def divide(self, other: Any, context: Optional[PrecisionContext] = None) -> DecimalValue:
        """
        Деление: точное, если частное конечно, иначе округлённое до digit budget.

        Raises:
            InvalidArgumentError: Деление на ноль
        """
        operand = self._coerce(other)
        if operand is None:
            raise TypeError(f"Cannot divide DecimalValue by {type(other).__name__}")
        if operand.is_zero:
            raise InvalidArgumentError("Division by zero")
        quotient = self._fraction / operand._fraction
        if quotient.has_finite_precision:
            return DecimalValue._from_trusted(quotient)
        return DecimalValue.from_fraction(quotient, resolve_context(context).digits)

    def __truediv__(self, other: Any) -> DecimalValue:
        if self._coerce(other) is None:
            return NotImplemented
        return self.divide(other)

    def __rtruediv__(self, other: Any) -> DecimalValue:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return operand.divide(self)

    def __floordiv__(self, other: Any) -> int:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        if operand.is_zero:
            raise InvalidArgumentError("Division by zero")
        return self._fraction // operand._fraction

    def __rfloordiv__(self, other: Any) -> int:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return operand.__floordiv__(self)

    def __mod__(self, other: Any) -> DecimalValue:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        if operand.is_zero:
            raise InvalidArgumentError("Modulo by zero")
        return DecimalValue._from_trusted(self._fraction % operand._fraction)

    def __rmod__(self, other: Any) -> DecimalValue:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return operand.__mod__(self)

    def remainder(self, other: Any) -> DecimalValue:
        """Остаток a - trunc(a / b) * b (знак делимого)."""
        operand = self._coerce(other)
        if operand is None:
            raise TypeError(f"Cannot take remainder of DecimalValue by {type(other).__name__}")
        if operand.is_zero:
            raise InvalidArgumentError("Modulo by zero")
        return DecimalValue._from_trusted(self._fraction.remainder(operand._fraction))

    def __neg__(self) -> DecimalValue:
        return DecimalValue._from_trusted(-self._fraction)

    def __pos__(self) -> DecimalValue:
        return self

    def __abs__(self) -> DecimalValue:
        return DecimalValue._from_trusted(abs(self._fraction))

    def shift(self, places: int) -> DecimalValue:
        """Умножить на 10^places (places может быть отрицательным)."""
        return DecimalValue._from_trusted(self._fraction * _TEN.pow(places))

    def clamp(self, lower: Any, upper: Any) -> DecimalValue:
        lower_bound = self._coerce(lower)
        upper_bound = self._coerce(upper)
        if lower_bound is None or upper_bound is None:
            raise TypeError("clamp bounds must be DecimalValue or int")
        return DecimalValue._from_trusted(self._fraction.clamp(lower_bound._fraction, upper_bound._fraction))

    # =========================================================================
    # COMPARISON
    # =========================================================================

    def compare_to(self, other: Any) -> int:
        operand = self._coerce(other)
        if operand is None:
            raise TypeError(f"Cannot compare DecimalValue with {type(other).__name__}")
        return self._fraction.compare_to(operand._fraction)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Fraction):
            return self._fraction == other
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self._fraction == operand._fraction

    def __hash__(self) -> int:
        return hash(self._fraction)

    def __lt__(self, other: Any) -> bool:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self._fraction < operand._fraction

    def __le__(self, other: Any) -> bool:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self._fraction <= operand._fraction

    def __gt__(self, other: Any) -> bool:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self._fraction > operand._fraction

    def __ge__(self, other: Any) -> bool:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self._fraction >= operand._fraction

    # =========================================================================
    # ELEMENTARY FUNCTIONS
    # =========================================================================

    def sqrt(self, context: Optional[PrecisionContext] = None) -> DecimalValue:
        """
        Квадратный корень.

        Raises:
            InvalidArgumentError: Для отрицательного значения

        Examples:
            >>> DecimalValue(2).sqrt(PrecisionContext(digits=10))
            DecimalValue('1.4142135624')
        """
        digits = resolve_context(context).digits
        return DecimalValue._from_trusted(elementary.sqrt(self._fraction, digits))

    def exp(self, context: Optional[PrecisionContext] = None) -> DecimalValue:
        digits = resolve_context(context).digits
        return DecimalValue._from_trusted(elementary.exp(self._fraction, digits))

    def ln(self, context: Optional[PrecisionContext] = None) -> DecimalValue:
        """
        Натуральный логарифм.

        Raises:
            InvalidArgumentError: Для значения <= 0
        """
        digits = resolve_context(context).digits
        return DecimalValue._from_trusted(elementary.ln(self._fraction, digits))

    def pow(self, exponent: Any, context: Optional[PrecisionContext] = None) -> DecimalValue:
        """
        Возведение в степень.

        - int или целый DecimalValue/Fraction: точный square-and-multiply
          (результат округляется, если не имеет конечной записи)
        - иной DecimalValue/Fraction: exp(exponent * ln(self))

        Raises:
            InvalidArgumentError: 0 ** 0, 0 ** отрицательное, неподдерживаемый
                тип показателя, нецелая степень неположительного основания

        Examples:
            >>> DecimalValue(8).pow(-2)
            DecimalValue('0.015625')
        """
        digits = resolve_context(context).digits

        if isinstance(exponent, bool):
            raise InvalidArgumentError("Unsupported exponent type: bool")
        if isinstance(exponent, int):
            exponent_fraction = Fraction.from_int(exponent)
        elif isinstance(exponent, DecimalValue):
            exponent_fraction = exponent._fraction
        elif isinstance(exponent, Fraction) and exponent.is_finite:
            exponent_fraction = exponent
        else:
            raise InvalidArgumentError(f"Unsupported exponent: {exponent!r}")

        if self.is_zero:
            if exponent_fraction.is_zero:
                raise InvalidArgumentError("0 ** 0 is undefined")
            if exponent_fraction.is_negative:
                raise InvalidArgumentError("0 raised to a negative power has no finite value")
            return DecimalValue.ZERO

        if exponent_fraction.is_zero:
            return DecimalValue.ONE

        if exponent_fraction.is_integer:
            result = elementary.integer_power(self._fraction, exponent_fraction.numerator)
            return DecimalValue.from_fraction(result, digits)

        return DecimalValue._from_trusted(elementary.power(self._fraction, exponent_fraction, digits))

    def __pow__(self, exponent: Any) -> DecimalValue:
        if not isinstance(exponent, (int, DecimalValue, Fraction)):
            return NotImplemented
        return self.pow(exponent)

    def sin(self, context: Optional[PrecisionContext] = None) -> DecimalValue:
        digits = resolve_context(context).digits
        return DecimalValue._from_trusted(elementary.sin(self._fraction, digits))

    def cos(self, context: Optional[PrecisionContext] = None) -> DecimalValue:
        digits = resolve_context(context).digits
        return DecimalValue._from_trusted(elementary.cos(self._fraction, digits))

    def tan(self, context: Optional[PrecisionContext] = None) -> DecimalValue:
        """
        Тангенс.

        Raises:
            InvalidArgumentError: Если косинус округляется до нуля
        """
        digits = resolve_context(context).digits
        return DecimalValue._from_trusted(elementary.tan(self._fraction, digits))

    def asin(self, context: Optional[PrecisionContext] = None) -> DecimalValue:
        digits = resolve_context(context).digits
        return DecimalValue._from_trusted(elementary.asin(self._fraction, digits))

    def acos(self, context: Optional[PrecisionContext] = None) -> DecimalValue:
        digits = resolve_context(context).digits
        return DecimalValue._from_trusted(elementary.acos(self._fraction, digits))

    def atan(self, context: Optional[PrecisionContext] = None) -> DecimalValue:
        digits = resolve_context(context).digits
        return DecimalValue._from_trusted(elementary.atan(self._fraction, digits))

    # =========================================================================
    # ROUNDING
    # =========================================================================

    def _apply_at_scale(self, scale: int, operation: str) -> DecimalValue:
        factor = _TEN.pow(scale)
        scaled = self._fraction * factor
        integral = getattr(scaled, operation)()
        return DecimalValue._from_trusted(Fraction(integral) / factor)

    def floor(self, scale: int = 0) -> DecimalValue:
        return self._apply_at_scale(scale, "floor")

    def ceil(self, scale: int = 0) -> DecimalValue:
        return self._apply_at_scale(scale, "ceil")

    def round(self, scale: int = 0) -> DecimalValue:
        """Округление half away from zero до scale знаков."""
        return self._apply_at_scale(scale, "round")

    def truncate(self, scale: int = 0) -> DecimalValue:
        return self._apply_at_scale(scale, "truncate")

    def __trunc__(self) -> int:
        return self._fraction.truncate()

    def __floor__(self) -> int:
        return self._fraction.floor()

    def __ceil__(self) -> int:
        return self._fraction.ceil()

    def __round__(self, ndigits: Optional[int] = None) -> Any:
        if ndigits is None:
            return self._fraction.round()
        return self.round(scale=ndigits)

    # =========================================================================
    # FORMATTING
    # =========================================================================

    def to_string_as_fixed(self, fraction_digits: int) -> str:
        """
        Запись с fraction_digits знаками после точки (half away from zero).

        Examples:
            >>> DecimalValue("3.14159").to_string_as_fixed(2)
            '3.14'
            >>> DecimalValue("-0.001").to_string_as_fixed(2)
            '0.00'
        """
        if fraction_digits < 0:
            raise InvalidArgumentError(f"fraction_digits must be non-negative, got {fraction_digits}")

        scaled = round_half_away(self._fraction.numerator * pow10(fraction_digits), self._fraction.denominator)
        prefix = "-" if scaled < 0 else ""
        text = str(abs(scaled))
        if fraction_digits == 0:
            return prefix + text

        text = text.rjust(fraction_digits + 1, "0")
        return f"{prefix}{text[:-fraction_digits]}.{text[-fraction_digits:]}"

    def to_string_as_exponential(self, fraction_digits: int = 0) -> str:
        """
        Экспоненциальная запись "[-]d.ddde±X" (показатель без ведущих нулей).

        Examples:
            >>> DecimalValue("12.34").to_string_as_exponential(3)
            '1.234e+1'
            >>> DecimalValue("0.00012").to_string_as_exponential(1)
            '1.2e-4'
        """
        if fraction_digits < 0:
            raise InvalidArgumentError(f"fraction_digits must be non-negative, got {fraction_digits}")

        negative = self.is_negative
        value = abs(self._fraction)
        exponent = 0
        if not value.is_zero:
            while value < 1:
                value = value * _TEN
                exponent -= 1
            while value >= _TEN:
                value = value / _TEN
                exponent += 1

        mantissa = DecimalValue._from_trusted(value).round(scale=fraction_digits)
        if mantissa == DecimalValue.TEN:
            mantissa = DecimalValue.ONE
            exponent += 1

        sign = "+" if exponent >= 0 else ""
        prefix = "-" if negative else ""
        return f"{prefix}{mantissa.to_string_as_fixed(fraction_digits)}e{sign}{exponent}"

    def to_string_as_precision(self, precision: int) -> str:
        """
        Запись с precision значащими цифрами.

        Examples:
            >>> DecimalValue("12.34").to_string_as_precision(3)
            '12.3'
            >>> DecimalValue(0).to_string_as_precision(4)
            '0.000'
        """
        if precision < 1:
            raise InvalidArgumentError(f"precision must be >= 1, got {precision}")

        if self.is_zero:
            if precision == 1:
                return "0"
            return "0." + "0" * (precision - 1)

        limit = _TEN.pow(precision)
        magnitude = abs(self._fraction)
        shift = Fraction.ONE
        pad = 0
        while magnitude * shift < limit:
            pad += 1
            shift = shift * _TEN
        while magnitude * shift >= limit:
            pad -= 1
            shift = shift / _TEN

        rounded = (self._fraction * shift).round()
        if abs(rounded) == pow10(precision):
            # перенос в новый разряд: 9.996 -> 10.0, а не 10.00
            pad -= 1
            shift = shift / _TEN
            rounded = (self._fraction * shift).round()

        value = DecimalValue._from_trusted(Fraction(rounded) / shift)
        if pad <= 0:
            return str(value)
        return value.to_string_as_fixed(pad)

    def __str__(self) -> str:
        if self._fraction.is_integer:
            return str(self._fraction.numerator)
        return self.to_string_as_fixed(self.scale)

    def __repr__(self) -> str:
        return f"DecimalValue('{self}')"


DecimalValue.ZERO = DecimalValue.from_int(0)
DecimalValue.ONE = DecimalValue.from_int(1)
DecimalValue.TEN = DecimalValue.from_int(10)
