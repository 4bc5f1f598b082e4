"""
Тесты для модуля Fraction

Проверяет:
1. Каноническую форму и кодировку специальных значений
2. Конструирование из int, float, str, Fraction, DecimalValue
3. Арифметику (быстрый путь) и алгебру специальных значений (медленный путь)
4. Сравнение (включая compare_to с NaN == 0) и хеширование
5. Округление, преобразования, предикаты
6. Целую степень
7. Разбор литералов и round-trip через str()
"""

import math
import pickle

import jsonschema
import pytest

from ratiomath.core.math.decimal_value import DecimalValue
from ratiomath.core.math.fraction import Fraction, FractionKind
from ratiomath.core.math.literals import FractionParseError
from ratiomath.core.math.numerical_safeguards import UnsupportedOperationError

NAN = Fraction.NAN
POS_INF = Fraction.POSITIVE_INFINITY
NEG_INF = Fraction.NEGATIVE_INFINITY


def assert_canonical(value: Fraction) -> None:
    """Конечная дробь: denominator > 0 и gcd == 1"""
    assert value.kind is FractionKind.FINITE
    assert value.denominator > 0
    assert math.gcd(value.numerator, value.denominator) == 1


# =============================================================================
# ТЕСТЫ КОНСТРУИРОВАНИЯ
# =============================================================================


class TestConstruction:
    """Тесты для конструктора и нормализации"""

    def test_scenario_reduces_two_fourths(self) -> None:
        """Fraction(2, 4) -> 1/2"""
        value = Fraction(2, 4)
        assert value.numerator == 1
        assert value.denominator == 2

    def test_negative_denominator_normalized(self) -> None:
        """Знак переносится в числитель"""
        value = Fraction(3, -6)
        assert (value.numerator, value.denominator) == (-1, 2)

    def test_zero_is_canonical(self) -> None:
        """Ноль хранится как (0, 1)"""
        value = Fraction(0, -5)
        assert (value.numerator, value.denominator) == (0, 1)
        assert value == Fraction.ZERO

    def test_default_is_zero(self) -> None:
        """Fraction() == 0"""
        assert Fraction() == Fraction.ZERO

    def test_special_values_from_zero_denominator(self) -> None:
        """n/0 даёт бесконечность со знаком n, 0/0 даёт NaN"""
        assert Fraction(1, 0) is POS_INF
        assert Fraction(-3, 0) is NEG_INF
        assert Fraction(0, 0) is NAN

    def test_special_value_encoding(self) -> None:
        """NaN = (0, 0), +inf = (1, 0), -inf = (-1, 0)"""
        assert (NAN.numerator, NAN.denominator) == (0, 0)
        assert (POS_INF.numerator, POS_INF.denominator) == (1, 0)
        assert (NEG_INF.numerator, NEG_INF.denominator) == (-1, 0)

    def test_kinds(self) -> None:
        """Tagged union: вид значения"""
        assert Fraction(1, 2).kind is FractionKind.FINITE
        assert NAN.kind is FractionKind.NAN
        assert POS_INF.kind is FractionKind.POSITIVE_INFINITY
        assert NEG_INF.kind is FractionKind.NEGATIVE_INFINITY

    def test_from_string(self) -> None:
        """Аргумент-строка разбирается как литерал"""
        assert Fraction("2 3/4") == Fraction(11, 4)
        assert Fraction("-1.25") == Fraction(-5, 4)

    def test_two_strings_divide(self) -> None:
        """Два аргумента означают numerator / denominator"""
        assert Fraction("1/2", "1/3") == Fraction(3, 2)

    def test_two_arguments_with_special_values(self) -> None:
        """Деление в конструкторе по правилам специальных значений"""
        assert Fraction(5, POS_INF) == Fraction.ZERO
        assert Fraction(POS_INF, POS_INF).is_nan
        assert Fraction(NEG_INF, 2) is NEG_INF

    def test_from_float_uses_repr(self) -> None:
        """float разбирается через repr(): 0.1 == 1/10"""
        assert Fraction(0.1) == Fraction(1, 10)
        assert Fraction.from_float(1e20) == Fraction(10**20)
        assert Fraction.from_float(-2.5e-3) == Fraction(-1, 400)

    def test_from_float_special(self) -> None:
        """nan и ±inf отображаются в специальные значения"""
        assert Fraction(float("nan")) is NAN
        assert Fraction(float("inf")) is POS_INF
        assert Fraction(float("-inf")) is NEG_INF

    def test_from_fraction_returns_same(self) -> None:
        """Fraction(Fraction) возвращает тот же объект"""
        value = Fraction(1, 3)
        assert Fraction(value) is value

    def test_from_decimal_value_unwraps(self) -> None:
        """Fraction(DecimalValue) разворачивает дробь"""
        assert Fraction(DecimalValue("1.5")) == Fraction(3, 2)

    def test_from_int(self) -> None:
        """from_int"""
        assert Fraction.from_int(10**30).numerator == 10**30
        with pytest.raises(TypeError):
            Fraction.from_int(1.5)  # type: ignore[arg-type]

    def test_mixed(self) -> None:
        """Смешанная дробь; знак определяется целой частью"""
        assert Fraction.mixed(2, 3, 4) == Fraction(11, 4)
        assert Fraction.mixed(-2, 3, 4) == Fraction(-11, 4)
        assert Fraction.mixed(0, 3, 6) == Fraction(1, 2)

    def test_bool_rejected(self) -> None:
        """bool не принимается"""
        with pytest.raises(TypeError):
            Fraction(True)
        with pytest.raises(TypeError):
            Fraction(1, True)

    def test_unsupported_type_rejected(self) -> None:
        """Прочие типы -> TypeError"""
        with pytest.raises(TypeError, match="Cannot convert list to Fraction"):
            Fraction([1, 2])

    def test_canonical_form_of_results(self) -> None:
        """Каждый конечный результат канонический"""
        a = Fraction(6, -4)
        b = Fraction(10, 15)
        for value in (a, b, a + b, a - b, a * b, a / b, a % b, -a, abs(a), a.pow(3), a.inverse()):
            assert_canonical(value)


class TestImmutability:
    """Тесты неизменяемости"""

    def test_attribute_assignment_rejected(self) -> None:
        """Присваивание атрибутов запрещено"""
        value = Fraction(1, 2)
        with pytest.raises(AttributeError):
            value._numerator = 5  # type: ignore[misc]
        with pytest.raises(AttributeError):
            value.extra = 1  # type: ignore[attr-defined]

    def test_pickle_round_trip(self) -> None:
        """Сериализация pickle сохраняет значение"""
        for value in (Fraction(-7, 3), Fraction.ZERO, NAN, POS_INF, NEG_INF):
            assert pickle.loads(pickle.dumps(value)) == value


# =============================================================================
# ТЕСТЫ АРИФМЕТИКИ
# =============================================================================


class TestArithmetic:
    """Тесты для арифметики конечных значений"""

    def test_add(self) -> None:
        """Сложение"""
        assert Fraction(1, 2) + Fraction(1, 3) == Fraction(5, 6)

    def test_subtract(self) -> None:
        """Вычитание"""
        assert Fraction(1, 2) - Fraction(1, 3) == Fraction(1, 6)

    def test_multiply(self) -> None:
        """Умножение"""
        assert Fraction(2, 3) * Fraction(3, 4) == Fraction(1, 2)

    def test_divide(self) -> None:
        """Деление"""
        assert Fraction(1, 2) / Fraction(1, 4) == 2
        assert Fraction(1, 2) / Fraction(-1, 4) == -2

    def test_divide_by_negative_keeps_positive_denominator(self) -> None:
        """Знак отрицательного делителя переносится в числитель"""
        quotient = Fraction(1, 2) / Fraction(-1, 3)
        assert quotient.numerator == -3
        assert quotient.denominator == 2
        assert str(quotient) == "-3/2"
        assert quotient == Fraction(-3, 2)
        assert quotient < 0
        assert Fraction.parse(str(quotient)) == quotient
        assert (Fraction(-1, 2) / Fraction(-1, 3)).denominator == 2

    def test_modulo_truncates_toward_zero(self) -> None:
        """a % b = a - trunc(a / b) * b (знак делимого)"""
        assert Fraction(7, 2) % 2 == Fraction(3, 2)
        assert Fraction(-7, 2) % 2 == Fraction(-3, 2)
        assert Fraction(7, 2) % -2 == Fraction(3, 2)

    def test_floordiv_truncates_toward_zero(self) -> None:
        """// возвращает int, усечённый к нулю"""
        assert Fraction(7, 2) // 2 == 1
        assert Fraction(-7, 2) // 2 == -1
        assert isinstance(Fraction(9, 2) // Fraction(1, 2), int)

    def test_floordiv_by_zero_raises(self) -> None:
        """// с бесконечным частным -> UnsupportedOperationError"""
        with pytest.raises(UnsupportedOperationError):
            Fraction(7, 2) // 0

    def test_reflected_int_operands(self) -> None:
        """Отражённые операции с int"""
        half = Fraction(1, 2)
        assert 1 + half == Fraction(3, 2)
        assert 1 - half == half
        assert 3 * half == Fraction(3, 2)
        assert 1 / Fraction(2) == half
        assert 7 % Fraction(2) == 1
        assert 7 // Fraction(2) == 3

    def test_float_operands(self) -> None:
        """float-операнды переводятся через repr()"""
        assert Fraction(1, 2) + 0.25 == Fraction(3, 4)
        assert 0.5 + Fraction(1, 2) == 1

    def test_decimal_value_operand_gives_fraction(self) -> None:
        """Смешанная арифметика с DecimalValue даёт Fraction"""
        result = Fraction(1, 3) + DecimalValue("0.5")
        assert isinstance(result, Fraction)
        assert result == Fraction(5, 6)

    def test_unsupported_operand(self) -> None:
        """Неподдерживаемый операнд -> TypeError"""
        with pytest.raises(TypeError):
            Fraction(1, 2) + "1"  # type: ignore[operator]

    def test_negation_and_abs(self) -> None:
        """Унарный минус и abs"""
        assert -Fraction(1, 2) == Fraction(-1, 2)
        assert abs(Fraction(-1, 2)) == Fraction(1, 2)
        assert +Fraction(1, 2) == Fraction(1, 2)
        assert -POS_INF is NEG_INF
        assert -NEG_INF is POS_INF
        assert (-NAN).is_nan
        assert abs(NEG_INF) is POS_INF

    def test_inverse(self) -> None:
        """Обратная дробь; 1/0 = +Infinity"""
        assert Fraction(2, 3).inverse() == Fraction(3, 2)
        assert Fraction(-2).inverse() == Fraction(-1, 2)
        assert Fraction.ZERO.inverse() is POS_INF
        assert POS_INF.inverse() == Fraction.ZERO

    def test_square_and_cube(self) -> None:
        """square и cube"""
        assert Fraction(-2, 3).square() == Fraction(4, 9)
        assert Fraction(-2, 3).cube() == Fraction(-8, 27)

    def test_remainder(self) -> None:
        """remainder совпадает с % и принимает литералы"""
        assert Fraction(7, 2).remainder(2) == Fraction(3, 2)
        assert Fraction(-7, 2).remainder("2") == Fraction(-3, 2)

    def test_clamp(self) -> None:
        """clamp ограничивает диапазон"""
        assert Fraction(5).clamp(0, 3) == 3
        assert Fraction(-1).clamp(0, 3) == 0
        assert Fraction(1, 2).clamp(0, 3) == Fraction(1, 2)
        assert NAN.clamp(0, 3).is_nan

    def test_huge_operands(self) -> None:
        """Произвольная точность"""
        big = Fraction(10**100 + 1, 3)
        assert (big - big) == Fraction.ZERO
        assert (big * 3).numerator == 10**100 + 1


class TestSpecialValueAlgebra:
    """Тесты для алгебры специальных значений"""

    def test_nan_absorbs(self) -> None:
        """NaN + x = NaN для любых операций"""
        for other in (Fraction(1), Fraction.ZERO, POS_INF, NEG_INF, NAN):
            assert (NAN + other).is_nan
            assert (other - NAN).is_nan
            assert (NAN * other).is_nan
            assert (other / NAN).is_nan
            assert (NAN % other).is_nan

    def test_scenario_infinity_plus_negative_infinity(self) -> None:
        """+inf + -inf = NaN"""
        assert (POS_INF + NEG_INF).is_nan

    def test_same_sign_infinities_add(self) -> None:
        """Бесконечности одного знака складываются"""
        assert POS_INF + POS_INF is POS_INF
        assert NEG_INF + NEG_INF is NEG_INF
        assert POS_INF + 5 is POS_INF
        assert 5 + NEG_INF is NEG_INF

    def test_subtraction(self) -> None:
        """inf - inf = NaN, finite - inf = -inf"""
        assert (POS_INF - POS_INF).is_nan
        assert (NEG_INF - NEG_INF).is_nan
        assert POS_INF - NEG_INF is POS_INF
        assert Fraction(1) - POS_INF is NEG_INF
        assert Fraction(1) - NEG_INF is POS_INF
        assert POS_INF - 1 is POS_INF

    def test_multiplication(self) -> None:
        """0 * inf = NaN, иначе бесконечность со знаком произведения"""
        assert (Fraction.ZERO * POS_INF).is_nan
        assert (NEG_INF * 0).is_nan
        assert Fraction(-2) * POS_INF is NEG_INF
        assert NEG_INF * NEG_INF is POS_INF

    def test_division_by_zero(self) -> None:
        """x / 0 = sign(x) * inf, 0 / 0 = NaN"""
        assert Fraction(3) / 0 is POS_INF
        assert Fraction(-3) / 0 is NEG_INF
        assert (Fraction.ZERO / 0).is_nan
        assert POS_INF / 0 is POS_INF

    def test_division_with_infinities(self) -> None:
        """inf / inf = NaN, finite / inf = 0, inf / finite = inf со знаком"""
        assert (POS_INF / NEG_INF).is_nan
        assert Fraction(5) / POS_INF == Fraction.ZERO
        assert POS_INF / -2 is NEG_INF
        assert NEG_INF / -2 is POS_INF

    def test_modulo_special(self) -> None:
        """% с бесконечностями и нулём"""
        assert (POS_INF % 2).is_nan
        assert (Fraction(3) % 0).is_nan
        assert Fraction(3) % POS_INF == 3

    def test_arithmetic_never_raises_on_zero(self) -> None:
        """Арифметика Fraction не бросает исключений при делении на ноль"""
        values = (Fraction(0), Fraction(1), Fraction(-1, 2), NAN, POS_INF, NEG_INF)
        for left in values:
            for right in values:
                left + right
                left - right
                left * right
                left / right
                left % right


# =============================================================================
# ТЕСТЫ СРАВНЕНИЯ
# =============================================================================


class TestComparison:
    """Тесты для compare_to, операторов сравнения и hash"""

    def test_compare_finite(self) -> None:
        """Перекрёстное умножение"""
        assert Fraction(1, 2).compare_to(Fraction(1, 3)) == 1
        assert Fraction(1, 3).compare_to(Fraction(1, 2)) == -1
        assert Fraction(2, 4).compare_to(Fraction(1, 2)) == 0

    def test_compare_accepts_literals(self) -> None:
        """compare_to принимает int и строки"""
        assert Fraction(1, 2).compare_to("0.5") == 0
        assert Fraction(1, 2).compare_to(1) == -1

    def test_infinities_order(self) -> None:
        """+inf наибольшее, -inf наименьшее"""
        assert POS_INF.compare_to(10**100) == 1
        assert NEG_INF.compare_to(-(10**100)) == -1
        assert Fraction(5).compare_to(POS_INF) == -1
        assert POS_INF.compare_to(POS_INF) == 0
        assert NEG_INF.compare_to(POS_INF) == -1

    def test_scenario_compare_with_nan_is_zero(self) -> None:
        """compare_to с NaN возвращает 0 в обе стороны"""
        one = Fraction(1)
        assert one.compare_to(NAN) == 0
        assert NAN.compare_to(one) == 0
        assert NAN.compare_to(POS_INF) == 0

    def test_ordering_operators_follow_compare_to(self) -> None:
        """Операторы сравнения определены через compare_to (включая NaN)"""
        assert Fraction(1, 3) < Fraction(1, 2)
        assert Fraction(1, 2) >= Fraction(1, 2)
        assert Fraction(1, 2) > 0
        assert NEG_INF < 0 < POS_INF
        assert not (NAN < 1)
        assert NAN <= 1
        assert NAN >= 1

    def test_equality_is_structural(self) -> None:
        """== структурное: NaN равен NaN"""
        assert Fraction(1, 2) == Fraction(2, 4)
        assert NAN == Fraction(0, 0)
        assert POS_INF != NEG_INF
        assert Fraction(1, 2) != Fraction(1, 3)

    def test_equals_and_hashes_like_int(self) -> None:
        """Целая дробь равна int и имеет тот же hash"""
        assert Fraction(4, 2) == 2
        assert hash(Fraction(4, 2)) == hash(2)
        assert Fraction(1, 2) != 0

    def test_usable_in_sets(self) -> None:
        """Hash согласован с равенством"""
        values = {Fraction(1, 2), Fraction(2, 4), Fraction(3), 3, NAN, Fraction(0, 0)}
        assert len(values) == 3


# =============================================================================
# ТЕСТЫ ОКРУГЛЕНИЯ И ПРЕОБРАЗОВАНИЙ
# =============================================================================


class TestRounding:
    """Тесты для truncate, round, floor, ceil"""

    def test_truncate(self) -> None:
        """Усечение к нулю"""
        assert Fraction(7, 2).truncate() == 3
        assert Fraction(-7, 2).truncate() == -3
        assert math.trunc(Fraction(-7, 2)) == -3
        assert int(Fraction(-7, 2)) == -3
        assert Fraction(-7, 2).to_int() == -3

    def test_round_half_away_from_zero(self) -> None:
        """Половина округляется от нуля"""
        assert Fraction(5, 2).round() == 3
        assert Fraction(-5, 2).round() == -3
        assert Fraction(7, 3).round() == 2
        assert round(Fraction(7, 2)) == 4

    def test_round_with_ndigits(self) -> None:
        """round(x, n) возвращает Fraction"""
        assert round(Fraction(1, 3), 2) == Fraction(33, 100)
        assert round(Fraction(1250), -2) == 1300

    def test_floor_and_ceil(self) -> None:
        """floor и ceil"""
        assert Fraction(-7, 2).floor() == -4
        assert Fraction(-7, 2).ceil() == -3
        assert math.floor(Fraction(7, 2)) == 3
        assert math.ceil(Fraction(7, 2)) == 4
        assert Fraction(4).floor() == Fraction(4).ceil() == 4

    def test_non_finite_raises(self) -> None:
        """Специальные значения нельзя округлить до int"""
        for value in (NAN, POS_INF, NEG_INF):
            with pytest.raises(UnsupportedOperationError, match="Cannot"):
                value.truncate()
            with pytest.raises(UnsupportedOperationError):
                value.round()
            with pytest.raises(UnsupportedOperationError):
                value.floor()
            with pytest.raises(UnsupportedOperationError):
                value.ceil()


class TestConversion:
    """Тесты для to_float и bool"""

    def test_to_float(self) -> None:
        """Прямое деление"""
        assert Fraction(1, 4).to_float() == 0.25
        assert float(Fraction(-3, 2)) == -1.5

    def test_to_float_special(self) -> None:
        """Специальные значения"""
        assert math.isnan(NAN.to_float())
        assert POS_INF.to_float() == math.inf
        assert NEG_INF.to_float() == -math.inf

    def test_to_float_saturates(self) -> None:
        """Результат вне диапазона float насыщается до ±inf"""
        assert Fraction(10**400).to_float() == math.inf
        assert Fraction(-(10**400)).to_float() == -math.inf
        assert Fraction(1, 10**400).to_float() == 0.0

    def test_to_float_huge_operands(self) -> None:
        """Большие числитель и знаменатель с умеренным частным"""
        assert Fraction(10**400 + 1, 2 * 10**400).to_float() == pytest.approx(0.5)

    def test_bool(self) -> None:
        """Ноль ложен, NaN истинен"""
        assert not Fraction.ZERO
        assert Fraction(1, 2)
        assert NAN


class TestPredicates:
    """Тесты для предикатов"""

    def test_special_predicates(self) -> None:
        """is_nan, is_infinite, is_finite"""
        assert NAN.is_nan and not NAN.is_finite and not NAN.is_infinite
        assert POS_INF.is_infinite and POS_INF.is_positive_infinity
        assert NEG_INF.is_infinite and NEG_INF.is_negative_infinity
        assert Fraction(1, 2).is_finite

    def test_integer_and_whole(self) -> None:
        """is_integer и is_whole"""
        assert Fraction(4, 2).is_integer
        assert Fraction(4, 2).is_whole
        assert not Fraction(1, 2).is_integer
        assert not POS_INF.is_integer

    def test_proper_and_improper(self) -> None:
        """Правильная / неправильная дробь"""
        assert Fraction(3, 4).is_proper
        assert Fraction(-3, 4).is_proper
        assert Fraction(5, 4).is_improper
        assert not NAN.is_proper and not NAN.is_improper

    def test_sign_and_negative(self) -> None:
        """sign: NaN даёт 0"""
        assert Fraction(-1, 2).sign == -1
        assert Fraction.ZERO.sign == 0
        assert NAN.sign == 0
        assert NEG_INF.sign == -1
        assert NEG_INF.is_negative
        assert not NAN.is_negative

    def test_has_finite_precision(self) -> None:
        """Знаменатель вида 2^a * 5^b"""
        assert Fraction(3, 40).has_finite_precision
        assert Fraction(7).has_finite_precision
        assert not Fraction(1, 3).has_finite_precision
        assert not NAN.has_finite_precision
        assert not POS_INF.has_finite_precision


# =============================================================================
# ТЕСТЫ СТЕПЕНИ
# =============================================================================


class TestPow:
    """Тесты для целой степени"""

    def test_positive_exponent(self) -> None:
        """Числитель и знаменатель возводятся напрямую"""
        assert Fraction(2, 3) ** 2 == Fraction(4, 9)
        assert Fraction(2, 3).pow(3) == Fraction(8, 27)

    def test_negative_exponent_inverts(self) -> None:
        """Отрицательная степень обращает дробь"""
        assert Fraction(2) ** -3 == Fraction(1, 8)
        assert Fraction(-2, 3) ** -1 == Fraction(-3, 2)

    def test_zero_exponent(self) -> None:
        """x ** 0 = 1"""
        assert Fraction(5) ** 0 == 1
        assert POS_INF ** 0 == 1

    def test_nan_stays_nan(self) -> None:
        """NaN ** n = NaN (включая n = 0)"""
        assert (NAN ** 0).is_nan
        assert (NAN ** 3).is_nan

    def test_infinity_powers(self) -> None:
        """inf ** n: знак по чётности, отрицательная степень даёт 0"""
        assert POS_INF ** 2 is POS_INF
        assert NEG_INF ** 3 is NEG_INF
        assert NEG_INF ** 2 is POS_INF
        assert POS_INF ** -1 == 0

    def test_zero_to_negative_power(self) -> None:
        """0 ** -1 = +Infinity"""
        assert Fraction.ZERO ** -1 is POS_INF

    def test_equals_repeated_multiplication(self) -> None:
        """pow(x, n) совпадает с многократным умножением"""
        base = Fraction(-3, 5)
        product = Fraction.ONE
        for _ in range(7):
            product = product * base
        assert base ** 7 == product

    def test_non_int_exponent_unsupported(self) -> None:
        """Нецелый показатель -> TypeError"""
        with pytest.raises(TypeError):
            Fraction(2) ** Fraction(1, 2)  # type: ignore[operator]
        with pytest.raises(TypeError):
            Fraction(2).pow(0.5)  # type: ignore[arg-type]


# =============================================================================
# ТЕСТЫ РАЗБОРА И ВЫВОДА
# =============================================================================


class TestParsing:
    """Тесты для parse, try_parse, parse_or_nan"""

    def test_scenario_mixed_literal(self) -> None:
        """parse("2 3/4") -> 11/4"""
        assert Fraction.parse("2 3/4") == Fraction(11, 4)

    def test_literals(self) -> None:
        """Все формы грамматики"""
        assert Fraction.parse("3/6") == Fraction(1, 2)
        assert Fraction.parse("-.5") == Fraction(-1, 2)
        assert Fraction.parse("1.5e2") == 150
        assert Fraction.parse("5e-3") == Fraction(1, 200)
        assert Fraction.parse("1/0") is POS_INF
        assert Fraction.parse("-Infinity") is NEG_INF
        assert Fraction.parse("NaN") is NAN

    def test_malformed_raises(self) -> None:
        """Некорректный литерал -> FractionParseError"""
        with pytest.raises(FractionParseError):
            Fraction.parse("1/2/3")
        with pytest.raises(FractionParseError):
            Fraction(" 1/2")

    def test_try_parse(self) -> None:
        """try_parse возвращает None"""
        assert Fraction.try_parse("x") is None
        assert Fraction.try_parse("1/2") == Fraction(1, 2)

    def test_parse_or_nan(self) -> None:
        """parse_or_nan возвращает NaN"""
        assert Fraction.parse_or_nan("x") is NAN
        assert Fraction.parse_or_nan("2") == 2

    @pytest.mark.parametrize(
        "value",
        [Fraction(1, 2), Fraction(-11, 4), Fraction(0), Fraction(10**40, 7), Fraction(-5)],
    )
    def test_round_trip(self, value: Fraction) -> None:
        """parse(str(f)) == f"""
        assert Fraction.parse(str(value)) == value
        assert Fraction.parse(value.to_mixed_string()) == value

    def test_special_round_trip(self) -> None:
        """Специальные значения также проходят round-trip"""
        for value in (NAN, POS_INF, NEG_INF):
            assert Fraction.parse(str(value)) is value


class TestRendering:
    """Тесты для str, repr, to_mixed_string, JSON"""

    def test_str(self) -> None:
        """n, n/d и специальные токены"""
        assert str(Fraction(1, 2)) == "1/2"
        assert str(Fraction(-3)) == "-3"
        assert str(NAN) == "NaN"
        assert str(POS_INF) == "Infinity"
        assert str(NEG_INF) == "-Infinity"

    def test_repr(self) -> None:
        """repr"""
        assert repr(Fraction(1, 2)) == "Fraction(1, 2)"
        assert repr(NAN) == "Fraction.NAN"
        assert repr(NEG_INF) == "Fraction.NEGATIVE_INFINITY"

    def test_mixed_string(self) -> None:
        """Смешанная запись"""
        assert Fraction(11, 4).to_mixed_string() == "2 3/4"
        assert Fraction(-11, 4).to_mixed_string() == "-2 3/4"
        assert Fraction(3, 4).to_mixed_string() == "3/4"
        assert Fraction(4).to_mixed_string() == "4"
        assert NAN.to_mixed_string() == "NaN"

    def test_json_round_trip(self) -> None:
        """to_json / from_json"""
        value = Fraction(-11, 4)
        assert value.to_json() == "-11/4"
        assert Fraction.from_json(value.to_json()) == value
        assert Fraction.from_json("2 3/4") == Fraction(11, 4)
        assert Fraction.from_json("Infinity") is POS_INF

    def test_from_json_violating_contract(self) -> None:
        """Нарушение контракта -> jsonschema.ValidationError"""
        with pytest.raises(jsonschema.ValidationError):
            Fraction.from_json("abc")
        with pytest.raises(jsonschema.ValidationError):
            Fraction.from_json(5)  # type: ignore[arg-type]
