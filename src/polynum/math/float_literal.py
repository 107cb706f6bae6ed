"""
Float Literal — строгий разбор десятичных литералов

float() в Python принимает больше, чем литерал числа: пробелы по краям,
подчёркивания ("1_000"), полноширинные цифры Unicode. Для единообразного
разбора текста используется собственная грамматика:

    [+-]? ( digits [. digits?] | . digits ) ( [eE] [+-]? digits )?
    [+-]? ( inf | infinity | nan )            (без учёта регистра)

Два режима:
- parse_decimal: вся строка должна быть литералом
- scan_decimal: литерал в начале строки, возвращается остаток
"""

import re
from typing import Final

# =============================================================================
# ГРАММАТИКА
# =============================================================================

FLOAT_LITERAL_PATTERN: Final[str] = r"""
    [+-]?
    (?:
        (?:\d+(?:\.\d*)?|\.\d+)      # мантисса
        (?:[eE][+-]?\d+)?            # необязательная экспонента
      |
        (?:infinity|inf|nan)         # специальные значения
    )
"""

_FLOAT_LITERAL_RE = re.compile(FLOAT_LITERAL_PATTERN, re.VERBOSE | re.IGNORECASE | re.ASCII)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class DecimalParseError(ValueError):
    """Текст не является литералом float."""

    def __init__(self, text: str):
        self.text = text
        if text:
            message = f"invalid float literal: {text!r}"
        else:
            message = "cannot parse float from empty string"
        super().__init__(message)


# =============================================================================
# РАЗБОР
# =============================================================================


def parse_decimal(text: str) -> float:
    """
    Разбор строки целиком как float.

    Args:
        text: Исходная строка (пробелы по краям не допускаются)

    Returns:
        Разобранное значение

    Raises:
        DecimalParseError: Если строка не является литералом целиком

    Examples:
        >>> parse_decimal("3.14")
        3.14
        >>> parse_decimal("-1e3")
        -1000.0
        >>> parse_decimal(" 1")  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        DecimalParseError: invalid float literal: ' 1'
    """
    if _FLOAT_LITERAL_RE.fullmatch(text) is None:
        raise DecimalParseError(text)
    return float(text)


def scan_decimal(text: str) -> tuple[float, str]:
    """
    Разбор литерала float в начале строки.

    Args:
        text: Исходная строка

    Returns:
        (значение, неразобранный остаток)

    Raises:
        DecimalParseError: Если строка не начинается с литерала

    Examples:
        >>> scan_decimal("2.5 apples")
        (2.5, ' apples')
    """
    match = _FLOAT_LITERAL_RE.match(text)
    if match is None:
        raise DecimalParseError(text)
    return float(match.group(0)), text[match.end():]
