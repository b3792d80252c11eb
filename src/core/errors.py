"""
Errors — таксономия ошибок калькулятора

Каждый вид ошибки (ErrorKind) имеет одно фиксированное сообщение для пользователя.
Уточнения для отдельных операций — в src.core.domain.calculation.failure_message.

Политика распространения:
- ParseError поднимается на границе ввода (DecimalValue.parse) и обрабатывается
  вызывающим кодом (Interaction Loop повторяет запрос ввода)
- CalculationError и наследники поднимаются чистыми функциями арифметики
  и перехватываются ровно в одном месте: CalculatorEngine.evaluate
- Ни одна арифметическая ошибка не завершает процесс
"""

from enum import Enum
from typing import Final


# =============================================================================
# ENUMS
# =============================================================================


class ErrorKind(str, Enum):
    """Вид ошибки (transport-independent)"""

    PARSE_ERROR = "parse_error"
    DIVISION_BY_ZERO = "division_by_zero"
    NEGATIVE_RADICAND = "negative_radicand"
    INVALID_EXPONENT = "invalid_exponent"
    COMPUTATION_ERROR = "computation_error"

    @property
    def message(self) -> str:
        """Фиксированное сообщение для пользователя"""
        return ERROR_MESSAGES[self]


ERROR_MESSAGES: Final[dict[ErrorKind, str]] = {
    ErrorKind.PARSE_ERROR: (
        "Invalid input. Please enter a valid number (either integer or floating point)."
    ),
    ErrorKind.DIVISION_BY_ZERO: "Error: Division by zero",
    ErrorKind.NEGATIVE_RADICAND: "Error: Cannot compute the square root of a negative number",
    ErrorKind.INVALID_EXPONENT: "Error: Exponent must be a non-negative integer",
    ErrorKind.COMPUTATION_ERROR: "Error: Unable to compute result",
}


# =============================================================================
# EXCEPTIONS
# =============================================================================


class CalculatorError(Exception):
    """
    Базовая ошибка калькулятора.

    Attributes:
        kind: вид ошибки (ErrorKind)
        detail: диагностическая информация (для логов, не для пользователя)
    """

    kind: ErrorKind = ErrorKind.COMPUTATION_ERROR

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__(f"{self.message} ({detail})" if detail else self.message)

    @property
    def message(self) -> str:
        return self.kind.message


class ParseError(CalculatorError, ValueError):
    """Строка не является корректным десятичным литералом."""

    kind = ErrorKind.PARSE_ERROR


class CalculationError(CalculatorError):
    """Базовая ошибка арифметической операции (recoverable)."""


class DivisionByZero(CalculationError):
    """Divide или Modulus с нулевым делителем."""

    kind = ErrorKind.DIVISION_BY_ZERO


class NegativeRadicand(CalculationError):
    """Квадратный корень из отрицательного числа."""

    kind = ErrorKind.NEGATIVE_RADICAND


class InvalidExponent(CalculationError):
    """Показатель степени дробный, отрицательный или слишком большой."""

    kind = ErrorKind.INVALID_EXPONENT


class ComputationError(CalculationError):
    """Алгоритм не смог вычислить результат (защитный случай)."""

    kind = ErrorKind.COMPUTATION_ERROR
