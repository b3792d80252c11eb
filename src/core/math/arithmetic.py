"""
Arithmetic — алгоритмы Operation Engine над DecimalValue

Чистые функции без состояния. Каждая возвращает новую DecimalValue или
поднимает CalculationError конкретного вида:

- add / subtract / multiply — точные, ошибок нет
- divide — DivisionByZero; частное округляется ROUND_HALF_EVEN до
  DIVISION_PRECISION значащих цифр (конечные дроби короче порога точны)
- modulus — DivisionByZero; остаток усекающего деления, знак делимого
- power — InvalidExponent для дробного, отрицательного или слишком большого
  показателя; результат точный
- square_root — NegativeRadicand; главный корень, округлённый до
  SQRT_PRECISION значащих цифр; ComputationError если нарушено
  пост-условие целочисленного корня

ФОРМУЛЫ:
    a = u_a × 10^(-s_a), b = u_b × 10^(-s_b)
    a / b = (u_a / u_b) × 10^(s_b - s_a)
    a mod b = a - trunc(a / b) × b
    sqrt(a) = isqrt(u_a × 10^(2t - s_a)) × 10^(-t)
"""

import math

from src.core.domain.decimal_value import ONE, ZERO, DecimalValue
from src.core.errors import (
    ComputationError,
    DivisionByZero,
    InvalidExponent,
    NegativeRadicand,
)
from src.core.precision import (
    DIVISION_PRECISION,
    MAX_EXPONENT,
    SQRT_PRECISION,
    digit_count,
    round_half_even_int,
)


# =============================================================================
# ТОЧНЫЕ ОПЕРАЦИИ
# =============================================================================


def add(first: DecimalValue, second: DecimalValue) -> DecimalValue:
    return first.add(second)


def subtract(first: DecimalValue, second: DecimalValue) -> DecimalValue:
    return first.subtract(second)


def multiply(first: DecimalValue, second: DecimalValue) -> DecimalValue:
    return first.multiply(second)


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


def divide(
    dividend: DecimalValue,
    divisor: DecimalValue,
    precision: int = DIVISION_PRECISION,
) -> DecimalValue:
    """
    Десятичное деление с фиксированной точностью.

    Частное округляется ROUND_HALF_EVEN до precision значащих цифр,
    затем незначащие нули дробной части удаляются.

    Args:
        dividend: Делимое
        divisor: Делитель
        precision: Значащие цифры частного (default: DIVISION_PRECISION)

    Returns:
        Частное

    Raises:
        DivisionByZero: Если divisor == 0

    Examples:
        >>> divide(DecimalValue.parse("1"), DecimalValue.parse("4"))
        DecimalValue('0.25')
        >>> divide(DecimalValue.parse("1"), DecimalValue.parse("3"), precision=5)
        DecimalValue('0.33333')
    """
    if divisor.is_zero():
        raise DivisionByZero(f"{dividend} / {divisor}")
    if precision <= 0:
        raise ValueError(f"precision must be positive, got {precision}")

    if dividend.is_zero():
        return ZERO

    numerator, denominator = dividend.magnitude, divisor.magnitude

    # exponent: 10^exponent <= numerator / denominator < 10^(exponent + 1)
    exponent = digit_count(numerator) - digit_count(denominator)
    if numerator * 10 ** max(0, -exponent) < denominator * 10 ** max(0, exponent):
        exponent -= 1

    # Сдвиг, при котором целая часть частного содержит ровно precision цифр
    shift = precision - 1 - exponent
    if shift >= 0:
        quotient = round_half_even_int(numerator * 10**shift, denominator)
    else:
        quotient = round_half_even_int(numerator, denominator * 10 ** (-shift))

    scale = shift + dividend.scale - divisor.scale
    if scale < 0:
        quotient *= 10 ** (-scale)
        scale = 0

    if dividend.sign != divisor.sign:
        quotient = -quotient
    return DecimalValue(quotient, scale).normalize()


def modulus(dividend: DecimalValue, divisor: DecimalValue) -> DecimalValue:
    """
    Остаток усекающего деления: a - trunc(a / b) × b.

    Знак остатка совпадает со знаком делимого; результат точный,
    scale = max(scale операндов).

    Raises:
        DivisionByZero: Если divisor == 0

    Examples:
        >>> modulus(DecimalValue.parse("7"), DecimalValue.parse("3"))
        DecimalValue('1')
        >>> modulus(DecimalValue.parse("-7"), DecimalValue.parse("3"))
        DecimalValue('-1')
        >>> modulus(DecimalValue.parse("5.5"), DecimalValue.parse("2"))
        DecimalValue('1.5')
    """
    if divisor.is_zero():
        raise DivisionByZero(f"{dividend} % {divisor}")

    scale = max(dividend.scale, divisor.scale)
    left = dividend.magnitude * 10 ** (scale - dividend.scale)
    right = divisor.magnitude * 10 ** (scale - divisor.scale)

    remainder = left % right
    if dividend.is_negative():
        remainder = -remainder
    return DecimalValue(remainder, scale)


# =============================================================================
# СТЕПЕНЬ
# =============================================================================


def coerce_exponent(exponent: DecimalValue, max_exponent: int = MAX_EXPONENT) -> int:
    """
    Показатель степени → неотрицательный int.

    Дробные и отрицательные показатели отклоняются явно, без тихого
    приведения к нулю.

    Args:
        exponent: Показатель (допускаются нули в дробной части: 3.00)
        max_exponent: Верхняя граница показателя

    Returns:
        Показатель как int в диапазоне [0, max_exponent]

    Raises:
        InvalidExponent: Если показатель дробный, отрицательный или > max_exponent
    """
    if not exponent.is_integer():
        raise InvalidExponent(f"fractional exponent {exponent}")

    value = exponent.to_int()
    if value < 0:
        raise InvalidExponent(f"negative exponent {value}")
    if value > max_exponent:
        raise InvalidExponent(f"exponent {value} exceeds limit {max_exponent}")
    return value


def power(
    base: DecimalValue,
    exponent: DecimalValue,
    max_exponent: int = MAX_EXPONENT,
) -> DecimalValue:
    """
    Точное возведение в неотрицательную целую степень.

    (u × 10^-s)^e = u^e × 10^(-s×e); int.__pow__ использует возведение
    в квадрат. power(x, 0) == 1 для любого x, включая 0.

    Raises:
        InvalidExponent: См. coerce_exponent

    Examples:
        >>> power(DecimalValue.parse("2"), DecimalValue.parse("10"))
        DecimalValue('1024')
        >>> power(DecimalValue.parse("0"), DecimalValue.parse("0"))
        DecimalValue('1')
    """
    value = coerce_exponent(exponent, max_exponent)
    if value == 0:
        return ONE
    return DecimalValue(base.unscaled**value, base.scale * value)


# =============================================================================
# КВАДРАТНЫЙ КОРЕНЬ
# =============================================================================


def square_root(radicand: DecimalValue, precision: int = SQRT_PRECISION) -> DecimalValue:
    """
    Главный (неотрицательный) квадратный корень.

    Алгоритм: выбрать scale результата t так, чтобы 2t - s >= 0 и целый
    корень содержал не меньше precision + 1 цифр, вычислить
    r = isqrt(u × 10^(2t - s)), затем округлить r × 10^-t до precision
    значащих цифр. Если r² != N, отброшенный остаток учитывается как
    sticky-разряд, поэтому округление корректно и для иррациональных корней.

    Args:
        radicand: Подкоренное значение
        precision: Значащие цифры результата (default: SQRT_PRECISION)

    Raises:
        NegativeRadicand: Если radicand < 0
        ComputationError: Если целочисленный корень не удовлетворяет r² <= N < (r+1)²

    Examples:
        >>> square_root(DecimalValue.parse("4"))
        DecimalValue('2')
        >>> square_root(DecimalValue.parse("0.25"))
        DecimalValue('0.5')
    """
    if radicand.is_negative():
        raise NegativeRadicand(f"sqrt({radicand})")
    if precision <= 0:
        raise ValueError(f"precision must be positive, got {precision}")

    if radicand.is_zero():
        return ZERO

    unscaled, scale = radicand.unscaled, radicand.scale
    wanted = 2 * (precision + 1) - digit_count(unscaled) + scale
    result_scale = max(-(-scale // 2), -(-wanted // 2))

    scaled = unscaled * 10 ** (2 * result_scale - scale)
    try:
        root = math.isqrt(scaled)
    except ValueError as e:
        raise ComputationError(f"isqrt failed for {radicand}: {e}") from e

    if not (root * root <= scaled < (root + 1) * (root + 1)):
        raise ComputationError(f"isqrt did not converge for {radicand}")

    exact = root * root == scaled
    rounded = DecimalValue(root, result_scale).round_significant(precision, sticky=not exact)
    return rounded.normalize()
