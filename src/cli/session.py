"""Interactive Session — цикл меню калькулятора

Диалог:
1. Меню операций (коды 1–7)
2. Ввод операндов (повтор до корректного литерала)
3. Результат или сообщение об ошибке
4. Continue / Quit

Ввод и вывод инжектируются (read_line / write_line), поэтому сессия
тестируется без терминала. read_line возвращает None на конце ввода.
"""

import logging
import sys
from typing import Callable, Optional

import click

from src.calculator.engine import CalculatorEngine
from src.core.domain.calculation import CalculationResult
from src.core.domain.decimal_value import DecimalValue
from src.core.domain.operation import Operation, menu_text
from src.core.errors import ParseError

logger = logging.getLogger(__name__)

ReadLine = Callable[[], Optional[str]]
WriteLine = Callable[[str], None]


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InputClosed(Exception):
    """Поток ввода закончился до завершения диалога."""


# =============================================================================
# I/O
# =============================================================================


def read_stdin_line() -> Optional[str]:
    """Строка из stdin или None на EOF."""
    line = sys.stdin.readline()
    return line if line else None


def write_stdout_line(text: str) -> None:
    click.echo(text)


# =============================================================================
# SESSION
# =============================================================================


class InteractiveSession:
    """Интерактивная сессия калькулятора.

    Вызывает CalculatorEngine для каждой операции; арифметические ошибки
    выводятся как сообщения, и цикл продолжается.
    """

    MENU_PROMPT = "Please choose the desired operation:"
    INVALID_CHOICE = "Invalid input. Please enter a valid integer choice."
    INVALID_TRANSACTION = "Please choose a valid transaction!"
    CONTINUE_PROMPT = "Would you like to continue or quit?"
    CONTINUE_OPTIONS = "1.) Continue | 2.) Quit"
    INVALID_CONTINUE = "Invalid input, please enter 1 for Continue or 2 for Quit."

    def __init__(
        self,
        engine: CalculatorEngine | None = None,
        read_line: ReadLine | None = None,
        write_line: WriteLine | None = None,
    ):
        self.engine = engine or CalculatorEngine()
        self._read_line = read_line or read_stdin_line
        self._write_line = write_line or write_stdout_line

    def run(self) -> int:
        """Цикл до выбора Quit.

        Returns:
            Количество выполненных вычислений

        Raises:
            InputClosed: если ввод закончился раньше
        """
        completed = 0
        while True:
            result = self.run_once()
            if result is None:
                # Неверный код меню: сразу обратно в меню, без вопроса Continue/Quit
                continue

            completed += 1
            if not self.ask_continue():
                logger.debug("session finished after %d calculation(s)", completed)
                return completed

    def run_once(self) -> CalculationResult | None:
        """Одна итерация: меню → операнды → результат.

        Returns:
            Результат вычисления или None, если код меню вне 1–7
        """
        self._write(self.MENU_PROMPT)
        self._write(menu_text())

        code = self.read_choice()
        try:
            operation = Operation.from_menu_code(code)
        except ValueError:
            self._write(self.INVALID_TRANSACTION)
            return None

        operands = self.read_operands(operation)
        result = self.engine.compute(operation, operands)
        self._write(result.display_text())
        return result

    def read_operands(self, operation: Operation) -> tuple[DecimalValue, ...]:
        if operation.arity == 1:
            self._write("Please enter the number:")
            return (self.read_number(),)

        self._write("Please enter the first number:")
        first = self.read_number()
        self._write("Please enter the second number:")
        second = self.read_number()
        return (first, second)

    def read_number(self) -> DecimalValue:
        """Десятичное число; повтор до корректного ввода."""
        while True:
            line = self._next_line().strip()
            try:
                return DecimalValue.parse(line)
            except ParseError as e:
                logger.debug("rejected operand: %s", e.detail)
                self._write(e.message)

    def read_choice(self) -> int:
        """Целое число; повтор до корректного ввода."""
        while True:
            line = self._next_line().strip()
            try:
                return int(line)
            except ValueError:
                self._write(self.INVALID_CHOICE)

    def ask_continue(self) -> bool:
        """True для Continue (1), False для Quit (2)."""
        while True:
            self._write(self.CONTINUE_PROMPT)
            self._write(self.CONTINUE_OPTIONS)
            choice = self.read_choice()
            if choice == 1:
                return True
            if choice == 2:
                return False
            self._write(self.INVALID_CONTINUE)

    def _next_line(self) -> str:
        line = self._read_line()
        if line is None:
            raise InputClosed("input stream closed")
        return line

    def _write(self, text: str) -> None:
        self._write_line(text)
