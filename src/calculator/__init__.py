"""Calculator — Operation Engine поверх core.

- CalculatorEngine: Operation → алгоритм, CalculationError → CalculationResult
- EngineConfig: конфигурация движка
"""

from .engine import CalculatorEngine, EngineConfig

__all__ = [
    "CalculatorEngine",
    "EngineConfig",
]
