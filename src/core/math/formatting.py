"""
Result Formatter — каноническое строковое представление результата

Правила:
- Обычная десятичная запись, без экспоненты
- Если есть точка: убрать нули в конце, затем саму точку, если после неё ничего не осталось
- Результат, равный нулю, всегда "0" (не "-0", не "0.0")
- Целые значения выводятся без точки

Форматтер никогда не поднимает исключений для корректной DecimalValue.
"""

from src.core.domain.decimal_value import DecimalValue


def format_result(value: DecimalValue) -> str:
    """
    Каноническая строка DecimalValue.

    Args:
        value: Результат операции

    Returns:
        Строка без незначащих нулей дробной части

    Examples:
        >>> format_result(DecimalValue.parse("2.50"))
        '2.5'
        >>> format_result(DecimalValue.parse("4.000"))
        '4'
        >>> format_result(DecimalValue.parse("-0.000"))
        '0'
    """
    text = str(value)

    if "." in text:
        # "0.000" → "0." → "0"; str() всегда выводит цифру перед точкой
        text = text.rstrip("0").rstrip(".")

    return text or "0"
