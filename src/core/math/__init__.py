"""
Core math modules для precisecalc

Алгоритмы Operation Engine и форматирование результата поверх DecimalValue.
"""

# Arithmetic
from src.core.math.arithmetic import (
    add,
    coerce_exponent,
    divide,
    modulus,
    multiply,
    power,
    square_root,
    subtract,
)

# Result Formatter
from src.core.math.formatting import format_result

__all__ = [
    # Arithmetic — exact
    "add",
    "subtract",
    "multiply",
    "modulus",
    "power",
    "coerce_exponent",
    # Arithmetic — rounded
    "divide",
    "square_root",
    # Formatting
    "format_result",
]
