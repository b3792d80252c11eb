"""Calculator Engine — диспетчеризация операций и восстановление после ошибок

Единственная точка, где арифметические ошибки (CalculationError)
превращаются в CalculationResult с фиксированным сообщением.

Поток:
    CalculationRequest → parse operands → dispatch(Operation) → format_result
    → CalculationResult.success / CalculationResult.failure

Интеграция:
- Алгоритмы: src.core.math.arithmetic (чистые функции)
- Форматирование: src.core.math.formatting
- Stateless: вызовы независимы, порядок не важен
"""

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from src.core.domain.calculation import CalculationRequest, CalculationResult
from src.core.domain.decimal_value import DecimalValue
from src.core.domain.operation import Operation
from src.core.errors import CalculationError
from src.core.math import arithmetic
from src.core.math.formatting import format_result
from src.core.precision import MAX_EXPONENT

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class EngineConfig:
    """Конфигурация CalculatorEngine.

    Точность Divide/SquareRoot фиксирована (src.core.precision) и здесь
    не настраивается.
    """

    # Верхняя граница показателя для Power
    max_exponent: int = MAX_EXPONENT

    def __post_init__(self) -> None:
        if self.max_exponent < 0:
            raise ValueError(f"max_exponent must be non-negative, got {self.max_exponent}")


# =============================================================================
# ENGINE
# =============================================================================


Algorithm = Callable[..., DecimalValue]


class CalculatorEngine:
    """Calculator Engine: Operation → алгоритм.

    Методы:
    1. apply — вычисление над DecimalValue, ошибки поднимаются
    2. evaluate — вычисление запроса, ошибки превращаются в failure-результат
    3. evaluate_text — разбор сырых строк + compute
    4. compute — вычисление разобранных операндов в CalculationResult
    """

    def __init__(self, config: EngineConfig | None = None):
        """Инициализация движка.

        Args:
            config: конфигурация (опционально, используется default)
        """
        self.config = config or EngineConfig()
        self._dispatch: dict[Operation, Algorithm] = {
            Operation.ADD: arithmetic.add,
            Operation.SUBTRACT: arithmetic.subtract,
            Operation.MULTIPLY: arithmetic.multiply,
            Operation.DIVIDE: arithmetic.divide,
            Operation.MODULUS: arithmetic.modulus,
            Operation.POWER: self._power,
            Operation.SQUARE_ROOT: arithmetic.square_root,
        }

    def apply(self, operation: Operation, operands: Sequence[DecimalValue]) -> DecimalValue:
        """Применить операцию к операндам.

        Args:
            operation: операция
            operands: 1 операнд для SQUARE_ROOT, 2 для остальных

        Returns:
            Результат операции

        Raises:
            ValueError: если количество операндов не совпадает с operation.arity
            CalculationError: DivisionByZero / NegativeRadicand / InvalidExponent /
                ComputationError
        """
        if len(operands) != operation.arity:
            raise ValueError(
                f"{operation.value} requires {operation.arity} operand(s), got {len(operands)}"
            )

        logger.debug("apply %s to %s", operation.value, ", ".join(map(str, operands)))
        return self._dispatch[operation](*operands)

    def evaluate(self, request: CalculationRequest) -> CalculationResult:
        """Вычислить запрос.

        Арифметические ошибки не поднимаются: результат содержит
        ErrorKind и фиксированное сообщение.

        Args:
            request: валидированный запрос

        Returns:
            CalculationResult (success или failure)
        """
        return self.compute(request.operation, request.decimal_operands())

    def evaluate_text(self, operation: Operation, *texts: str) -> CalculationResult:
        """Разобрать сырые строки операндов и вычислить.

        Raises:
            ParseError: если строка не является десятичным литералом
            ValueError: если количество операндов не совпадает с operation.arity
        """
        operands = tuple(DecimalValue.parse(text) for text in texts)
        return self.compute(operation, operands)

    def compute(
        self, operation: Operation, operands: Sequence[DecimalValue]
    ) -> CalculationResult:
        """Применить операцию к уже разобранным операндам и отформатировать результат.

        Raises:
            ValueError: если количество операндов не совпадает с operation.arity
        """
        try:
            value = self.apply(operation, operands)
        except CalculationError as e:
            logger.info("%s failed: %s (%s)", operation.value, e.kind.value, e.detail)
            return CalculationResult.failure(operation, e.kind)

        return CalculationResult.success(operation, format_result(value))

    def _power(self, base: DecimalValue, exponent: DecimalValue) -> DecimalValue:
        return arithmetic.power(base, exponent, max_exponent=self.config.max_exponent)
