"""
Calculation — модели запроса и результата на границе с Interaction Loop

Immutable Pydantic модели:
- CalculationRequest: операция + сырые строки операндов (уже без пробелов по краям)
- CalculationResult: успех (отформатированное значение) или ошибка (ErrorKind + сообщение)

Соответствуют схемам calculation_request / calculation_result (src.core.contracts).
"""

from typing import Final

from pydantic import BaseModel, Field, field_validator, model_validator

from src.core.domain.decimal_value import DecimalValue
from src.core.domain.operation import Operation
from src.core.errors import ErrorKind, ParseError

# Сообщения, уточнённые операцией; остальные пары берут ErrorKind.message
OPERATION_ERROR_MESSAGES: Final[dict[tuple[Operation, ErrorKind], str]] = {
    (Operation.MODULUS, ErrorKind.DIVISION_BY_ZERO): "Error: Division by zero in modulus",
    (Operation.SQUARE_ROOT, ErrorKind.COMPUTATION_ERROR): "Error: Unable to compute square root",
}


def failure_message(operation: Operation, kind: ErrorKind) -> str:
    """Сообщение об ошибке kind для операции operation"""
    return OPERATION_ERROR_MESSAGES.get((operation, kind), kind.message)


# =============================================================================
# REQUEST
# =============================================================================


class CalculationRequest(BaseModel):
    """
    Запрос на вычисление.

    Валидация:
    - каждый операнд — корректный десятичный литерал
    - количество операндов равно operation.arity
    """

    operation: Operation = Field(..., description="Операция")
    operands: tuple[str, ...] = Field(
        ..., min_length=1, max_length=2, description="Операнды (десятичные литералы)"
    )

    model_config = {"frozen": True}

    @field_validator("operands")
    @classmethod
    def validate_operands_are_decimals(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Проверка, что каждый операнд разбирается как DecimalValue"""
        for text in v:
            try:
                DecimalValue.parse(text)
            except ParseError as e:
                raise ValueError(f"operand {text!r} is not a decimal literal") from e
        return v

    @model_validator(mode="after")
    def validate_arity(self) -> "CalculationRequest":
        """Проверка количества операндов"""
        if len(self.operands) != self.operation.arity:
            raise ValueError(
                f"{self.operation.value} requires {self.operation.arity} operand(s), "
                f"got {len(self.operands)}"
            )
        return self

    @classmethod
    def from_menu_code(cls, code: int, *operands: str) -> "CalculationRequest":
        """
        Запрос по коду меню (1–7).

        Raises:
            ValueError: Если код меню неизвестен
            ValidationError: Если операнды некорректны
        """
        return cls(operation=Operation.from_menu_code(code), operands=operands)

    def decimal_operands(self) -> tuple[DecimalValue, ...]:
        return tuple(DecimalValue.parse(text) for text in self.operands)


# =============================================================================
# RESULT
# =============================================================================


class CalculationResult(BaseModel):
    """
    Результат вычисления: успех или ошибка, без частичных результатов.

    Инвариант: ok ⇔ value задано ⇔ error_kind не задан.
    """

    operation: Operation = Field(..., description="Операция")
    ok: bool = Field(..., description="Успех вычисления")
    value: str | None = Field(None, min_length=1, description="Каноническая строка результата")
    error_kind: ErrorKind | None = Field(None, description="Вид ошибки")
    message: str = Field(..., min_length=1, description="Текст для пользователя")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_outcome_consistency(self) -> "CalculationResult":
        """Успех несёт значение, ошибка — вид ошибки, но не оба сразу"""
        if self.ok and (self.value is None or self.error_kind is not None):
            raise ValueError("successful result must have value and no error_kind")
        if not self.ok and (self.value is not None or self.error_kind is None):
            raise ValueError("failed result must have error_kind and no value")
        return self

    @classmethod
    def success(cls, operation: Operation, value: str) -> "CalculationResult":
        return cls(
            operation=operation,
            ok=True,
            value=value,
            message=f"{operation.result_prefix} {value}",
        )

    @classmethod
    def failure(cls, operation: Operation, kind: ErrorKind) -> "CalculationResult":
        return cls(
            operation=operation,
            ok=False,
            error_kind=kind,
            message=failure_message(operation, kind),
        )

    def display_text(self) -> str:
        """Строка для вывода пользователю"""
        return self.message
