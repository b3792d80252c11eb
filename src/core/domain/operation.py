"""
Operation — селектор арифметической операции

Закрытое перечисление из семи вариантов без данных. Строится из кода меню
(1–7) и отбрасывается после использования.
"""

from enum import Enum
from typing import Final


# =============================================================================
# ENUMS
# =============================================================================


class Operation(str, Enum):
    """Арифметическая операция"""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    MODULUS = "modulus"
    POWER = "power"
    SQUARE_ROOT = "square_root"

    @classmethod
    def from_menu_code(cls, code: int) -> "Operation":
        """
        Операция по коду меню.

        Raises:
            ValueError: Если code вне диапазона 1–7
        """
        try:
            return _BY_MENU_CODE[code]
        except (KeyError, TypeError):
            raise ValueError(f"Unknown menu code: {code!r}") from None

    @property
    def menu_code(self) -> int:
        return _MENU_CODES[self]

    @property
    def arity(self) -> int:
        """Количество операндов: 1 для SQUARE_ROOT, иначе 2"""
        return 1 if self is Operation.SQUARE_ROOT else 2

    @property
    def label(self) -> str:
        """Название в меню"""
        return _LABELS[self]

    @property
    def result_prefix(self) -> str:
        """Префикс строки результата"""
        if self is Operation.SQUARE_ROOT:
            return "Square root result is:"
        return "Result is:"


_MENU_CODES: Final[dict[Operation, int]] = {
    operation: index for index, operation in enumerate(Operation, start=1)
}

_BY_MENU_CODE: Final[dict[int, Operation]] = {
    code: operation for operation, code in _MENU_CODES.items()
}

_LABELS: Final[dict[Operation, str]] = {
    Operation.ADD: "Add",
    Operation.SUBTRACT: "Subtract",
    Operation.MULTIPLY: "Multiply",
    Operation.DIVIDE: "Divide",
    Operation.MODULUS: "Modulus",
    Operation.POWER: "Power",
    Operation.SQUARE_ROOT: "Square Root",
}


def menu_text() -> str:
    """Строка меню: '1.) Add 2.) Subtract ... 7.) Square Root'"""
    return " ".join(f"{operation.menu_code}.) {operation.label}" for operation in Operation)
