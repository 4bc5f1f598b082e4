"""
Numerical Safeguards — Integer Primitives

Модуль содержит целочисленные примитивы, на которых построены Fraction,
элементарные функции и DecimalValue:
- Сокращение пары numerator/denominator по gcd с фиксацией знака
- Деление с усечением к нулю (truncate) и округление half away from zero
- Проверка конечной десятичной точности (denominator = 2^a * 5^b)
- Валидация digit budget

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все функции работают только с int (без float) и детерминированы
2. Округление всегда симметрично относительно нуля
3. Некорректные аргументы отклоняются InvalidArgumentError, а не молча
"""

import math
from functools import lru_cache
from typing import Final

# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvalidArgumentError(ValueError):
    """
    Аргумент вне области определения операции.

    Примеры: sqrt отрицательного числа, ln неположительного числа,
    digit budget < 1, DecimalValue из незавершающейся дроби.
    """

    pass


class UnsupportedOperationError(ArithmeticError):
    """
    Операция не определена для специального значения (NaN, ±Infinity).

    Например, truncate() или floor() бесконечности.
    """

    pass


class ConvergenceError(ArithmeticError):
    """
    Итерационный метод не сошёлся за допустимое число шагов.

    Ряд, достигший предела digits * SERIES_TERM_CAP_FACTOR членов,
    не возвращает частичную сумму.
    """

    pass


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Минимально допустимый digit budget
MIN_DIGITS: Final[int] = 1

# Размер кэша степеней десяти
POW10_CACHE_SIZE: Final[int] = 512


# =============================================================================
# ЦЕЛОЧИСЛЕННАЯ АРИФМЕТИКА
# =============================================================================


@lru_cache(maxsize=POW10_CACHE_SIZE)
def pow10(exponent: int) -> int:
    """
    10 в неотрицательной степени (с кэшированием).

    Args:
        exponent: Показатель степени (>= 0)

    Returns:
        10 ** exponent

    Raises:
        InvalidArgumentError: Если exponent < 0
    """
    if exponent < 0:
        raise InvalidArgumentError(f"exponent must be non-negative, got {exponent}")
    return 10**exponent


def reduce_pair(numerator: int, denominator: int) -> tuple[int, int]:
    """
    Привести пару к канонической форме.

    Знаменатель становится положительным, пара сокращается по gcd.
    Ноль всегда представляется как (0, 1).

    Args:
        numerator: Числитель
        denominator: Знаменатель (!= 0)

    Returns:
        Каноническая пара (numerator, denominator)

    Raises:
        InvalidArgumentError: Если denominator == 0

    Examples:
        >>> reduce_pair(2, 4)
        (1, 2)
        >>> reduce_pair(3, -6)
        (-1, 2)
        >>> reduce_pair(0, -7)
        (0, 1)
    """
    if denominator == 0:
        raise InvalidArgumentError("denominator must be non-zero for a finite pair")

    if denominator < 0:
        numerator = -numerator
        denominator = -denominator

    divisor = math.gcd(numerator, denominator)
    if divisor != 1:
        numerator //= divisor
        denominator //= divisor

    return numerator, denominator


def truncate_div(numerator: int, denominator: int) -> int:
    """
    Целочисленное деление с усечением к нулю.

    В отличие от оператора //, который округляет к -inf.

    Examples:
        >>> truncate_div(7, 2)
        3
        >>> truncate_div(-7, 2)
        -3
    """
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


def round_half_away(numerator: int, denominator: int) -> int:
    """
    Округлить numerator/denominator до целого, половины от нуля.

    Использует удвоенный остаток: результат увеличивается по модулю,
    если 2 * remainder >= |denominator|.

    Args:
        numerator: Числитель
        denominator: Знаменатель (!= 0)

    Returns:
        Ближайшее целое (x.5 округляется от нуля)

    Examples:
        >>> round_half_away(5, 2)
        3
        >>> round_half_away(-5, 2)
        -3
        >>> round_half_away(7, 3)
        2
    """
    abs_num = abs(numerator)
    abs_den = abs(denominator)

    quotient, remainder = divmod(abs_num, abs_den)
    if remainder * 2 >= abs_den:
        quotient += 1

    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


def strip_factor(value: int, factor: int) -> int:
    """Удалить из value все множители factor."""
    while value % factor == 0:
        value //= factor
    return value


def is_decimal_denominator(denominator: int) -> bool:
    """
    Проверить, что знаменатель имеет вид 2^a * 5^b.

    Дробь с таким (сокращённым) знаменателем имеет конечную
    десятичную запись.

    Examples:
        >>> is_decimal_denominator(40)
        True
        >>> is_decimal_denominator(3)
        False
    """
    if denominator <= 0:
        return False
    return strip_factor(strip_factor(denominator, 2), 5) == 1


def is_power_of_two(value: int) -> bool:
    """Проверить, что value является степенью двойки (1, 2, 4, ...)."""
    return value > 0 and value & (value - 1) == 0


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_digits(digits: int, name: str = "digits") -> int:
    """
    Проверить digit budget.

    Args:
        digits: Количество десятичных знаков
        name: Имя параметра для сообщения об ошибке

    Returns:
        digits без изменений

    Raises:
        InvalidArgumentError: Если digits не int или digits < MIN_DIGITS
    """
    if isinstance(digits, bool) or not isinstance(digits, int):
        raise InvalidArgumentError(f"{name} must be an integer, got {type(digits).__name__}")
    if digits < MIN_DIGITS:
        raise InvalidArgumentError(f"{name} must be >= {MIN_DIGITS}, got {digits}")
    return digits
