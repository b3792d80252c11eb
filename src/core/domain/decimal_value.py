"""
DecimalValue — точное десятичное число произвольной точности

Immutable value object: (sign, magnitude, scale), где
    value = sign × magnitude × 10^(-scale)

- magnitude: неотрицательный int произвольной длины
- scale: количество цифр после десятичной точки (scale >= 0)

Хранится как знаковый unscaled int (sign × magnitude) + scale.
Пара (unscaled, scale) не обязана быть в несократимой форме: 1.50 и 1.5
различаются представлением, но равны численно.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. scale >= 0
2. Равенство, порядок и hash — по численному значению (1.50 == 1.5)
3. Add/Subtract/Multiply точны: scale результата >= max(scale операндов)
4. parse() — единственная граница ввода; при любом некорректном вводе
   поднимается только ParseError
"""

import functools
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Final, Union

from src.core.errors import ParseError
from src.core.precision import (
    digit_count,
    digits_to_int,
    int_to_digits,
    round_half_even_int,
)

# [+-] цифры [. [цифры]] | [+-] . цифры
_DECIMAL_LITERAL: Final[re.Pattern[str]] = re.compile(
    r"(?P<sign>[+-]?)(?:(?P<int>[0-9]+)(?:\.(?P<frac>[0-9]*))?|\.(?P<frac_only>[0-9]+))",
    re.ASCII,
)


# =============================================================================
# DECIMAL VALUE
# =============================================================================


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class DecimalValue:
    """
    Точное десятичное число.

    Attributes:
        unscaled: Знаковое целое (sign × magnitude)
        scale: Количество цифр после точки (>= 0)

    Examples:
        >>> DecimalValue.parse("-1.50")
        DecimalValue('-1.50')
        >>> DecimalValue.parse("1.50") == DecimalValue.parse("1.5")
        True
    """

    unscaled: int
    scale: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.unscaled, int) or isinstance(self.unscaled, bool):
            raise TypeError(f"unscaled must be int, got {type(self.unscaled).__name__}")
        if not isinstance(self.scale, int) or isinstance(self.scale, bool):
            raise TypeError(f"scale must be int, got {type(self.scale).__name__}")
        if self.scale < 0:
            raise ValueError(f"scale must be non-negative, got {self.scale}")

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> "DecimalValue":
        """
        Разбор десятичного литерала.

        Допускается: необязательный знак +/-, цифры, не более одной точки,
        хотя бы одна цифра. Пробелы не обрезаются (это делает вызывающий код).

        Args:
            text: Строка вида "12", "-0.5", "+.25", "3."

        Returns:
            DecimalValue со scale равным числу цифр после точки

        Raises:
            ParseError: Если строка не является корректным литералом
        """
        if not isinstance(text, str):
            raise ParseError(f"expected str, got {type(text).__name__}")

        match = _DECIMAL_LITERAL.fullmatch(text)
        if match is None:
            raise ParseError(f"not a decimal literal: {text!r}")

        integer_part = match.group("int") or ""
        fraction_part = match.group("frac") or match.group("frac_only") or ""

        magnitude = digits_to_int(integer_part + fraction_part)
        unscaled = -magnitude if match.group("sign") == "-" else magnitude
        return cls(unscaled, len(fraction_part))

    @classmethod
    def from_int(cls, value: int) -> "DecimalValue":
        """DecimalValue из целого (scale = 0)."""
        return cls(value, 0)

    # -------------------------------------------------------------------------
    # Свойства
    # -------------------------------------------------------------------------

    @property
    def sign(self) -> int:
        """-1, 0 или 1"""
        return (self.unscaled > 0) - (self.unscaled < 0)

    @property
    def magnitude(self) -> int:
        return abs(self.unscaled)

    def is_zero(self) -> bool:
        return self.unscaled == 0

    def is_negative(self) -> bool:
        return self.unscaled < 0

    def is_positive(self) -> bool:
        return self.unscaled > 0

    def is_integer(self) -> bool:
        """True если дробная часть равна нулю (3.00 — целое)."""
        return self.unscaled % 10**self.scale == 0

    def adjusted_exponent(self) -> int:
        """
        Показатель старшей значащей цифры: 10^adjusted <= |value| < 10^(adjusted+1).

        Для нуля возвращает 0.

        Examples:
            >>> DecimalValue.parse("123.4").adjusted_exponent()
            2
            >>> DecimalValue.parse("0.025").adjusted_exponent()
            -2
        """
        if self.unscaled == 0:
            return 0
        return digit_count(self.unscaled) - 1 - self.scale

    # -------------------------------------------------------------------------
    # Точная арифметика
    # -------------------------------------------------------------------------

    def _aligned(self, other: "DecimalValue") -> tuple[int, int, int]:
        """Привести оба unscaled к общему scale = max(scale)."""
        scale = max(self.scale, other.scale)
        left = self.unscaled * 10 ** (scale - self.scale)
        right = other.unscaled * 10 ** (scale - other.scale)
        return left, right, scale

    def add(self, other: "DecimalValue") -> "DecimalValue":
        left, right, scale = self._aligned(other)
        return DecimalValue(left + right, scale)

    def subtract(self, other: "DecimalValue") -> "DecimalValue":
        left, right, scale = self._aligned(other)
        return DecimalValue(left - right, scale)

    def multiply(self, other: "DecimalValue") -> "DecimalValue":
        # scale произведения = сумма scale, т.е. не меньше max(scale)
        return DecimalValue(self.unscaled * other.unscaled, self.scale + other.scale)

    def negate(self) -> "DecimalValue":
        return DecimalValue(-self.unscaled, self.scale)

    def abs(self) -> "DecimalValue":
        return DecimalValue(abs(self.unscaled), self.scale)

    # -------------------------------------------------------------------------
    # Нормализация и округление
    # -------------------------------------------------------------------------

    def normalize(self) -> "DecimalValue":
        """
        Удалить незначащие нули в конце дробной части.

        Examples:
            >>> DecimalValue.parse("2.500").normalize()
            DecimalValue('2.5')
            >>> DecimalValue.parse("100").normalize()
            DecimalValue('100')
        """
        unscaled, scale = self.unscaled, self.scale
        if unscaled == 0:
            return DecimalValue(0, 0)

        while scale > 0:
            quotient, remainder = divmod(unscaled, 10)
            if remainder != 0:
                break
            unscaled, scale = quotient, scale - 1
        return DecimalValue(unscaled, scale)

    def round_significant(self, digits: int, sticky: bool = False) -> "DecimalValue":
        """
        Округление до digits значащих цифр (ROUND_HALF_EVEN).

        Значения, у которых значащих цифр не больше digits, возвращаются как есть.
        Отбрасываемые разряды целой части заменяются нулями (scale не уходит ниже 0).

        Args:
            digits: Количество значащих цифр (> 0)
            sticky: True если истинное значение по модулю строго больше
                представленного (см. round_half_even_int)

        Raises:
            ValueError: Если digits <= 0
        """
        if digits <= 0:
            raise ValueError(f"digits must be positive, got {digits}")

        magnitude = self.magnitude
        excess = digit_count(magnitude) - digits
        if magnitude == 0 or excess <= 0:
            return self

        rounded = round_half_even_int(magnitude, 10**excess, sticky=sticky)
        scale = self.scale - excess
        if scale < 0:
            rounded *= 10 ** (-scale)
            scale = 0
        return DecimalValue(-rounded if self.unscaled < 0 else rounded, scale)

    # -------------------------------------------------------------------------
    # Преобразования
    # -------------------------------------------------------------------------

    def to_int(self) -> int:
        """
        Целое значение.

        Raises:
            ValueError: Если у значения есть ненулевая дробная часть
        """
        if not self.is_integer():
            raise ValueError(f"{self} is not an integral value")
        quotient = self.magnitude // 10**self.scale
        return -quotient if self.unscaled < 0 else quotient

    def to_decimal(self) -> Decimal:
        """Точное представление в decimal.Decimal (с тем же scale)."""
        return Decimal(str(self))

    def __str__(self) -> str:
        digits = int_to_digits(self.magnitude)
        if self.scale > 0:
            digits = digits.rjust(self.scale + 1, "0")
            digits = f"{digits[:-self.scale]}.{digits[-self.scale:]}"
        return f"-{digits}" if self.unscaled < 0 else digits

    def __repr__(self) -> str:
        return f"DecimalValue('{self}')"

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def compare(self, other: "DecimalValue") -> int:
        """
        Сравнение по численному значению.

        Returns:
            -1 если self < other, 0 если равны, 1 если self > other
        """
        left, right, _ = self._aligned(other)
        return (left > right) - (left < right)

    def __eq__(self, other: object) -> bool:
        coerced = _coerce(other)
        if coerced is None:
            return NotImplemented
        return self.compare(coerced) == 0

    def __lt__(self, other: object) -> bool:
        coerced = _coerce(other)
        if coerced is None:
            return NotImplemented
        return self.compare(coerced) < 0

    def __hash__(self) -> int:
        normalized = self.normalize()
        # Целые значения хешируются как int: DecimalValue(1) == 1
        if normalized.scale == 0:
            return hash(normalized.unscaled)
        return hash((normalized.unscaled, normalized.scale))

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> "DecimalValue":
        coerced = _coerce(other)
        if coerced is None:
            return NotImplemented
        return self.add(coerced)

    __radd__ = __add__

    def __sub__(self, other: object) -> "DecimalValue":
        coerced = _coerce(other)
        if coerced is None:
            return NotImplemented
        return self.subtract(coerced)

    def __rsub__(self, other: object) -> "DecimalValue":
        coerced = _coerce(other)
        if coerced is None:
            return NotImplemented
        return coerced.subtract(self)

    def __mul__(self, other: object) -> "DecimalValue":
        coerced = _coerce(other)
        if coerced is None:
            return NotImplemented
        return self.multiply(coerced)

    __rmul__ = __mul__

    def __neg__(self) -> "DecimalValue":
        return self.negate()

    def __abs__(self) -> "DecimalValue":
        return self.abs()


def _coerce(value: object) -> Union[DecimalValue, None]:
    """DecimalValue или int → DecimalValue; всё остальное → None."""
    if isinstance(value, DecimalValue):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return DecimalValue(value, 0)
    return None


ZERO: Final[DecimalValue] = DecimalValue(0)
ONE: Final[DecimalValue] = DecimalValue(1)
