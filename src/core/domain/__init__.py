"""
Domain models and value objects.

Contains DecimalValue, the Operation selector and the calculation
request/result models exchanged with the interaction loop.
"""

from src.core.domain.calculation import CalculationRequest, CalculationResult
from src.core.domain.decimal_value import ONE, ZERO, DecimalValue
from src.core.domain.operation import Operation, menu_text

__all__ = [
    # Decimal value
    "DecimalValue",
    "ZERO",
    "ONE",
    # Operation selector
    "Operation",
    "menu_text",
    # Calculation models
    "CalculationRequest",
    "CalculationResult",
]
