"""
Precision — политика точности и целочисленные примитивы

Модуль фиксирует политику точности для неточных операций и содержит
целочисленные примитивы, на которых построена DecimalValue:
- Округление рационального числа до целого (ROUND_HALF_EVEN)
- Подсчёт десятичных цифр произвольно большого int
- Преобразование int <-> строка цифр без лимита int_max_str_digits

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Add/Subtract/Multiply/Modulus/Power точны (округление не применяется)
2. Divide и SquareRoot округляются ROUND_HALF_EVEN до фиксированного числа
   значащих цифр; точные результаты короче этого порога не искажаются
3. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# ПОЛИТИКА ТОЧНОСТИ
# =============================================================================

# Значащие цифры частного при делении (1/3 → 0.333...3, 100 цифр)
DIVISION_PRECISION: Final[int] = 100

# Значащие цифры квадратного корня
SQRT_PRECISION: Final[int] = 100

# Максимальный показатель степени для Power (ограничивает время вычисления)
MAX_EXPONENT: Final[int] = 10_000

# Размер блока цифр для преобразований int <-> str
# Должен быть меньше sys.get_int_max_str_digits() (по умолчанию 4300)
DIGIT_CHUNK: Final[int] = 1000

_LOG10_2: Final[float] = math.log10(2)


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


def round_half_even_int(numerator: int, denominator: int, sticky: bool = False) -> int:
    """
    Округление неотрицательной дроби numerator/denominator до целого.

    Режим ROUND_HALF_EVEN: ровно половина округляется к чётному.

    Args:
        numerator: Числитель (>= 0)
        denominator: Знаменатель (> 0)
        sticky: True если истинное значение строго больше numerator/denominator
            (отброшенные при усечении ненулевые разряды). Тогда "ровно половина"
            на самом деле больше половины и округляется вверх.

    Returns:
        Округлённое целое

    Raises:
        ValueError: Если numerator < 0 или denominator <= 0

    Examples:
        >>> round_half_even_int(5, 2)
        2
        >>> round_half_even_int(7, 2)
        4
        >>> round_half_even_int(5, 2, sticky=True)
        3
    """
    if denominator <= 0:
        raise ValueError(f"denominator must be positive, got {denominator}")
    if numerator < 0:
        raise ValueError(f"numerator must be non-negative, got {numerator}")

    quotient, remainder = divmod(numerator, denominator)
    twice = 2 * remainder

    if twice > denominator:
        return quotient + 1
    if twice == denominator:
        if sticky or quotient % 2 == 1:
            return quotient + 1
        return quotient
    return quotient


# =============================================================================
# ДЕСЯТИЧНЫЕ ЦИФРЫ
# =============================================================================


def digit_count(value: int) -> int:
    """
    Количество десятичных цифр abs(value). Для 0 возвращает 1.

    Examples:
        >>> digit_count(0)
        1
        >>> digit_count(-999)
        3
        >>> digit_count(1000)
        4
    """
    magnitude = abs(value)
    if magnitude < 10:
        return 1

    # Оценка по bit_length может ошибаться на единицу в любую сторону
    digits = int(magnitude.bit_length() * _LOG10_2)
    while 10**digits <= magnitude:
        digits += 1
    while digits > 1 and 10 ** (digits - 1) > magnitude:
        digits -= 1
    return digits


def int_to_digits(value: int) -> str:
    """
    Строка десятичных цифр неотрицательного int произвольной длины.

    str(int) ограничен sys.get_int_max_str_digits(); большие значения
    разбиваются пополам рекурсивно.

    Raises:
        ValueError: Если value < 0
    """
    if value < 0:
        raise ValueError(f"value must be non-negative, got {value}")

    if value < 10**DIGIT_CHUNK:
        return str(value)

    low_digits = digit_count(value) // 2
    high, low = divmod(value, 10**low_digits)
    return int_to_digits(high) + int_to_digits(low).rjust(low_digits, "0")


def digits_to_int(digits: str) -> int:
    """
    int из строки ASCII-цифр произвольной длины.

    Raises:
        ValueError: Если строка пустая или содержит не-цифры
    """
    if not digits or not (digits.isascii() and digits.isdigit()):
        raise ValueError(f"expected ASCII digits, got {digits!r}")

    if len(digits) <= DIGIT_CHUNK:
        return int(digits)

    split = len(digits) // 2
    high, low = digits[:split], digits[split:]
    return digits_to_int(high) * 10 ** len(low) + digits_to_int(low)
