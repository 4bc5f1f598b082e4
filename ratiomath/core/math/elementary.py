"""
Elementary Functions — Series & Iterations over Exact Fractions

Элементарные функции над конечными Fraction с явным digit budget:
- sqrt: Newton–Raphson
- exp: ряд Тейлора, суммируемый методом binary splitting
- ln: редукция в [1, 2) + ряд atanh, ln 2 кэшируется по digits
- sin / cos: знакочередующиеся ряды Тейлора с проверкой неподвижной точки
- atan: редукция аргумента до |x| <= 1/2 + ряд, asin / acos через atan
- pi: формула Мэчина, кэшируется по digits

Все функции чистые: digits передаётся явно, результат округляется
(half away from zero) до digits десятичных знаков.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Промежуточные значения всегда конечные десятичные дроби (квантуются)
2. Каждый ряд ограничен SERIES_TERM_CAP_FACTOR * digits членами (иначе ConvergenceError)
3. Аргументы вне области определения отклоняются InvalidArgumentError
"""

import math
from functools import lru_cache
from typing import Final

from ratiomath.core.math.fraction import ONE, ZERO, Fraction
from ratiomath.core.math.numerical_safeguards import (
    ConvergenceError,
    InvalidArgumentError,
    pow10,
    round_half_away,
    validate_digits,
)
from ratiomath.logging_config import get_logger

logger = get_logger(__name__)


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Дополнительные знаки для частных в итерации Ньютона (sqrt)
SQRT_GUARD_DIGITS: Final[int] = 10

# Дополнительные знаки для рядов (exp, ln, atan, pi)
SERIES_GUARD_DIGITS: Final[int] = 5

# Предел числа членов ряда: digits * SERIES_TERM_CAP_FACTOR
SERIES_TERM_CAP_FACTOR: Final[int] = 100

# Редукция atan выполняется, пока |x| > ATAN_REDUCTION_BOUND
ATAN_REDUCTION_BOUND: Final[Fraction] = Fraction(1, 2)

# Аргументы sin / cos с |x| > ANGLE_REDUCTION_BOUND приводятся в [-pi, pi]
ANGLE_REDUCTION_BOUND: Final[Fraction] = Fraction(4)

TWO: Final[Fraction] = Fraction(2)


# =============================================================================
# КВАНТОВАНИЕ
# =============================================================================


def quantize(value: Fraction, places: int) -> Fraction:
    """
    Округлить конечную дробь до places десятичных знаков (half away from zero).

    Examples:
        >>> quantize(Fraction(1, 3), 4)
        Fraction(3333, 10000)
        >>> quantize(Fraction(-2, 3), 2)
        Fraction(-67, 100)
    """
    if value.denominator == 1:
        return value
    scale = pow10(places)
    return Fraction(round_half_away(value.numerator * scale, value.denominator), scale)


def _tolerance(places: int) -> Fraction:
    return Fraction(1, pow10(places))


def _series_cap(digits: int) -> int:
    return digits * SERIES_TERM_CAP_FACTOR


def _series_cap_exceeded(function: str, digits: int, terms: int) -> ConvergenceError:
    logger.warning("series_cap_reached", function=function, digits=digits, terms=terms)
    return ConvergenceError(f"{function} series did not converge within {terms} terms at {digits} digits")


def _require_finite(value: Fraction, function: str) -> None:
    if not value.is_finite:
        raise InvalidArgumentError(f"{function} requires a finite argument, got {value}")


def _integer_digits(value: Fraction) -> int:
    """Количество цифр целой части |value|."""
    return len(str(abs(value.truncate())))


# =============================================================================
# INTEGER POWER
# =============================================================================


def integer_power(base: Fraction, exponent: int) -> Fraction:
    """
    Точная целая степень методом square-and-multiply.

    Отрицательная степень обращает основание.

    Raises:
        InvalidArgumentError: Если base == 0 и exponent < 0
    """
    if exponent < 0:
        if base.is_zero:
            raise InvalidArgumentError("zero cannot be raised to a negative power")
        base = base.inverse()
        exponent = -exponent

    result = ONE
    while exponent:
        if exponent & 1:
            result = result * base
        exponent >>= 1
        if exponent:
            base = base * base
    return result


# =============================================================================
# SQUARE ROOT
# =============================================================================


def sqrt(value: Fraction, digits: int) -> Fraction:
    """
    Квадратный корень методом Ньютона–Рафсона.

    Старт g = x / 2, итерация g <- (g + x / g) / 2, частные квантуются до
    digits + SQRT_GUARD_DIGITS знаков. Остановка при |g_new - g| < 10^-digits.

    Args:
        value: x >= 0
        digits: Digit budget

    Returns:
        sqrt(x), округлённый до digits знаков

    Raises:
        InvalidArgumentError: Если x < 0

    Examples:
        >>> sqrt(Fraction(2), 10) == Fraction("1.4142135624")
        True
    """
    validate_digits(digits)
    _require_finite(value, "sqrt")
    if value.is_negative:
        raise InvalidArgumentError(f"sqrt requires a non-negative argument, got {value}")
    if value.is_zero or value == ONE:
        return value

    work = digits + SQRT_GUARD_DIGITS
    tolerance = _tolerance(digits)

    guess = value / TWO
    while True:
        updated = quantize((guess + quantize(value / guess, work)) / TWO, work)
        if abs(updated - guess) < tolerance:
            guess = updated
            break
        guess = updated

    return quantize(guess, digits)


# =============================================================================
# EXPONENTIAL
# =============================================================================


def exp_series_terms(magnitude: float, digits: int) -> int:
    """
    Число членов ряда e^x для |x| = magnitude.

    Наименьшее N > 2|x|, для которого |x|^N / N! < 10^-(digits + guard).
    Оценка ведётся в логарифмах, без больших чисел.
    """
    if magnitude == 0:
        return 1

    target = -(digits + SERIES_GUARD_DIGITS)
    log_magnitude = math.log10(magnitude)

    terms = 0
    log_term = 0.0
    while terms <= 2 * magnitude or log_term >= target:
        terms += 1
        log_term += log_magnitude - math.log10(terms)
    return terms


def _exp_split(p: int, q: int, a: int, b: int) -> tuple[int, int, int]:
    """
    Binary splitting для sum_{n=a+1}^{b} prod_{k=a+1}^{n} p / (q * k).

    Returns:
        (P, Q, T), где P = p^(b-a), Q = prod q * k, сумма = T / Q
    """
    if b - a == 1:
        return p, q * b, p

    mid = (a + b) // 2
    p_left, q_left, t_left = _exp_split(p, q, a, mid)
    p_right, q_right, t_right = _exp_split(p, q, mid, b)
    return p_left * p_right, q_left * q_right, t_left * q_right + p_left * t_right


def exp(value: Fraction, digits: int) -> Fraction:
    """
    Экспонента e^x рядом Тейлора с binary splitting.

    Args:
        value: Конечный x
        digits: Digit budget

    Returns:
        e^x, округлённый до digits знаков

    Raises:
        InvalidArgumentError: Если |x| не помещается в float (результат не
            представим)
    """
    validate_digits(digits)
    _require_finite(value, "exp")
    if value.is_zero:
        return ONE

    magnitude = abs(value.to_float())
    if math.isinf(magnitude):
        raise InvalidArgumentError(f"exp argument is too large: {value}")

    terms = exp_series_terms(magnitude, digits)
    _, q_total, t_total = _exp_split(value.numerator, value.denominator, 0, terms)
    return quantize(Fraction(q_total + t_total, q_total), digits)


# =============================================================================
# NATURAL LOGARITHM
# =============================================================================


def _atanh_series(t: Fraction, places: int, function: str) -> Fraction:
    """2 * (t + t^3/3 + t^5/5 + ...) с квантованием до places знаков."""
    t = quantize(t, places)
    t_squared = quantize(t * t, places)
    limit = _tolerance(places)
    cap = _series_cap(places)

    total = ZERO
    power = t
    n = 1
    while True:
        term = quantize(power / n, places)
        if abs(term) < limit:
            break
        total += term
        power = quantize(power * t_squared, places)
        n += 2
        if n > cap:
            raise _series_cap_exceeded(function, places, n)

    return total * TWO


@lru_cache(maxsize=32)
def ln2(digits: int) -> Fraction:
    """
    ln 2 рядом atanh при t = 1/3, кэшируется по digits.
    """
    validate_digits(digits)
    series = _atanh_series(Fraction(1, 3), digits + SERIES_GUARD_DIGITS, "ln2")
    return quantize(series, digits)


def ln(value: Fraction, digits: int) -> Fraction:
    """
    Натуральный логарифм.

    1. Редукция x = m * 2^k, m в [1, 2)
    2. ln m = 2 * atanh((m - 1) / (m + 1))
    3. ln x = ln m + k * ln 2

    Raises:
        InvalidArgumentError: Если x <= 0
    """
    validate_digits(digits)
    _require_finite(value, "ln")
    if value.sign <= 0:
        raise InvalidArgumentError(f"ln requires a positive argument, got {value}")
    if value == ONE:
        return ZERO

    mantissa = value
    exponent = 0
    while mantissa >= TWO:
        mantissa = mantissa / TWO
        exponent += 1
    while mantissa < ONE:
        mantissa = mantissa * TWO
        exponent -= 1

    work = digits + SERIES_GUARD_DIGITS
    result = _atanh_series((mantissa - ONE) / (mantissa + ONE), work, "ln")
    if exponent:
        result += ln2(work) * exponent

    return quantize(result, digits)


def power(base: Fraction, exponent: Fraction, digits: int) -> Fraction:
    """
    base^exponent = exp(exponent * ln(base)) для нецелых показателей.

    Погрешность ln(base) умножается на exponent и на величину результата,
    поэтому ln считается с запасом: цифры целой части exponent плюс
    оценка количества цифр целой части результата.

    Raises:
        InvalidArgumentError: Если base <= 0
    """
    validate_digits(digits)
    estimate = exponent * ln(base, SERIES_GUARD_DIGITS)
    result_digits = max(estimate.ceil(), 0) // 2 + 1
    work = digits + SERIES_GUARD_DIGITS + result_digits + _integer_digits(exponent)
    return exp(quantize(exponent * ln(base, work), work), digits)


# =============================================================================
# TRIGONOMETRY
# =============================================================================


def _alternating_series(first: Fraction, x_squared: Fraction, offset: int, digits: int, function: str) -> Fraction:
    """
    Сумма first - first*x^2/((o+1)(o+2)) + ... до неподвижной точки.

    offset = 1 для sin (x, x^3/3!, ...), offset = 0 для cos (1, x^2/2!, ...).
    """
    cap = _series_cap(digits)
    term = first
    total = quantize(first, digits)
    k = offset
    while True:
        term = -term * x_squared / ((k + 1) * (k + 2))
        k += 2
        updated = total + quantize(term, digits)
        if updated == total:
            break
        total = updated
        if k > cap:
            raise _series_cap_exceeded(function, digits, k)
    return total


def _reduce_angle(value: Fraction, places: int) -> Fraction:
    """
    x - k * 2pi, k = round(x / 2pi): результат в [-pi, pi].

    pi берётся с запасом в количество цифр целой части x, так что
    погрешность k * 2pi остаётся ниже 10^-places.
    """
    if abs(value) <= ANGLE_REDUCTION_BOUND:
        return value
    two_pi = pi(places + _integer_digits(value) + 1) * TWO
    turns = (value / two_pi).round()
    return quantize(value - two_pi * turns, places)


def sin(value: Fraction, digits: int) -> Fraction:
    """Синус рядом Тейлора x - x^3/3! + x^5/5! - ... после редукции по 2pi."""
    validate_digits(digits)
    _require_finite(value, "sin")
    if value.is_zero:
        return ZERO
    reduced = _reduce_angle(value, digits + SERIES_GUARD_DIGITS)
    return quantize(_alternating_series(reduced, reduced * reduced, 1, digits, "sin"), digits)


def cos(value: Fraction, digits: int) -> Fraction:
    """Косинус рядом Тейлора 1 - x^2/2! + x^4/4! - ... после редукции по 2pi."""
    validate_digits(digits)
    _require_finite(value, "cos")
    if value.is_zero:
        return ONE
    reduced = _reduce_angle(value, digits + SERIES_GUARD_DIGITS)
    return quantize(_alternating_series(ONE, reduced * reduced, 0, digits, "cos"), digits)



def tan(value: Fraction, digits: int) -> Fraction:
    """
    Тангенс sin(x) / cos(x).

    Raises:
        InvalidArgumentError: Если cos(x) округляется до нуля
    """
    validate_digits(digits)
    work = digits + SERIES_GUARD_DIGITS
    cosine = cos(value, work)
    if cosine.is_zero:
        raise InvalidArgumentError(f"tan is undefined at {value}: cosine rounds to zero")
    return quantize(sin(value, work) / cosine, digits)


def _atan_series(value: Fraction, places: int) -> Fraction:
    """x - x^3/3 + x^5/5 - ... для |x| <= 1/2."""
    x_squared = quantize(value * value, places)
    limit = _tolerance(places)
    cap = _series_cap(places)

    total = ZERO
    power = quantize(value, places)
    n = 1
    negative = False
    while True:
        term = quantize(power / n, places)
        if abs(term) < limit:
            break
        total = total - term if negative else total + term
        power = quantize(power * x_squared, places)
        negative = not negative
        n += 2
        if n > cap:
            raise _series_cap_exceeded("atan", places, n)
    return total


def atan(value: Fraction, digits: int) -> Fraction:
    """
    Арктангенс.

    Редукция atan(x) = 2 * atan(x / (1 + sqrt(1 + x^2))) до |x| <= 1/2,
    затем знакочередующийся ряд.
    """
    validate_digits(digits)
    _require_finite(value, "atan")
    if value.is_zero:
        return ZERO

    work = digits + SERIES_GUARD_DIGITS
    reduced = value
    doublings = 0
    while abs(reduced) > ATAN_REDUCTION_BOUND:
        root = sqrt(ONE + reduced * reduced, work)
        reduced = quantize(reduced / (ONE + root), work)
        doublings += 1

    return quantize(_atan_series(reduced, work) * (1 << doublings), digits)


@lru_cache(maxsize=32)
def pi(digits: int) -> Fraction:
    """
    Число pi по формуле Мэчина: 16 * atan(1/5) - 4 * atan(1/239).
    Кэшируется по digits.
    """
    validate_digits(digits)
    work = digits + SERIES_GUARD_DIGITS
    result = _atan_series(Fraction(1, 5), work) * 16 - _atan_series(Fraction(1, 239), work) * 4
    return quantize(result, digits)


def asin(value: Fraction, digits: int) -> Fraction:
    """
    Арксинус asin(x) = atan(x / sqrt(1 - x^2)), asin(±1) = ±pi/2.

    Raises:
        InvalidArgumentError: Если |x| > 1
    """
    validate_digits(digits)
    _require_finite(value, "asin")
    if abs(value) > ONE:
        raise InvalidArgumentError(f"asin requires an argument in [-1, 1], got {value}")

    work = digits + SERIES_GUARD_DIGITS
    if abs(value) == ONE:
        return quantize(pi(work) / TWO * value.sign, digits)

    root = sqrt(ONE - value * value, work)
    return quantize(atan(quantize(value / root, work), work), digits)


def acos(value: Fraction, digits: int) -> Fraction:
    """
    Арккосинус acos(x) = pi/2 - asin(x).

    Raises:
        InvalidArgumentError: Если |x| > 1
    """
    validate_digits(digits)
    _require_finite(value, "acos")
    if abs(value) > ONE:
        raise InvalidArgumentError(f"acos requires an argument in [-1, 1], got {value}")

    work = digits + SERIES_GUARD_DIGITS
    return quantize(pi(work) / TWO - asin(value, work), digits)
