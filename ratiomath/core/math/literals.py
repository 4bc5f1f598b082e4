"""
Fraction Literals — Parsing

Разбор текстовых литералов в пару (numerator, denominator).

Грамматика:
    [sign] ( whole " " num "/" den | num "/" den | digits | digits "." digits ) [exp]
    [sign] "." digits [exp]
    exp := ("e" | "E") [sign] digits

Специальные токены: "NaN", "Infinity", "+Infinity", "-Infinity".
Пробелы вокруг литерала не обрезаются.

Специальные значения возвращаются в кодировке с нулевым знаменателем:
NaN = (0, 0), +Infinity = (1, 0), -Infinity = (-1, 0).
"""

import re
from typing import Final

# =============================================================================
# EXCEPTIONS
# =============================================================================


class FractionParseError(ValueError):
    """
    Строка не соответствует грамматике литерала дроби.
    """

    pass


# =============================================================================
# ГРАММАТИКА
# =============================================================================

NAN_TOKEN: Final[str] = "NaN"
POSITIVE_INFINITY_TOKEN: Final[str] = "Infinity"
NEGATIVE_INFINITY_TOKEN: Final[str] = "-Infinity"

SPECIAL_TOKENS: Final[dict[str, tuple[int, int]]] = {
    NAN_TOKEN: (0, 0),
    POSITIVE_INFINITY_TOKEN: (1, 0),
    "+" + POSITIVE_INFINITY_TOKEN: (1, 0),
    NEGATIVE_INFINITY_TOKEN: (-1, 0),
}

# group 1: тело литерала, group 2: экспонента
LITERAL_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"[+-]?(\d+\s+\d+/\d+|\d+/\d+|\d+|\d*\.\d+)([eE][+-]?\d+)?",
    re.ASCII,
)


# =============================================================================
# PARSING
# =============================================================================


def _parse_body(body: str) -> tuple[int, int]:
    """Разобрать тело литерала без знака и экспоненты."""
    if "/" in body:
        head, den_text = body.split("/")
        parts = head.split()
        if len(parts) == 2:
            whole, num = int(parts[0]), int(parts[1])
            den = int(den_text)
            return whole * den + num, den
        return int(head), int(den_text)

    if "." in body:
        int_part, frac_part = body.split(".")
        return int(int_part + frac_part), 10 ** len(frac_part)

    return int(body), 1


def parse_literal(source: str) -> tuple[int, int]:
    """
    Разобрать литерал дроби.

    Числитель и знаменатель не сокращаются: нормализацию выполняет
    конструктор Fraction. Знаменатель может быть нулевым ("1/0", "0/0").

    Args:
        source: Текстовый литерал

    Returns:
        Пара (numerator, denominator)

    Raises:
        FractionParseError: Если source не соответствует грамматике

    Examples:
        >>> parse_literal("2 3/4")
        (11, 4)
        >>> parse_literal("-1.25")
        (-125, 100)
        >>> parse_literal("1.5e2")
        (1500, 10)
        >>> parse_literal("Infinity")
        (1, 0)
    """
    if not isinstance(source, str):
        raise FractionParseError(f"fraction literal must be a string, got {type(source).__name__}")

    special = SPECIAL_TOKENS.get(source)
    if special is not None:
        return special

    match = LITERAL_PATTERN.fullmatch(source)
    if match is None:
        raise FractionParseError(f"Invalid fraction literal: {source!r}")

    body = match.group(1)
    exponent_text = match.group(2)

    numerator, denominator = _parse_body(body)

    if source.startswith("-"):
        numerator = -numerator

    if exponent_text:
        exponent = int(exponent_text[1:])
        if exponent > 0:
            numerator *= 10**exponent
        elif exponent < 0:
            denominator *= 10 ** (-exponent)

    return numerator, denominator
