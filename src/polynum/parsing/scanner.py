"""
Number Scanner — грамматический разбор числа в начале текста

Предназначен для встраивания числовых литералов в структурированный текст:
возвращает разобранное число и неразобранный остаток.

Порядок грамматик (первый успех):
1. Дробь:             -?digits/digits          → Fraction
2. Стандартный вид:   mantissa MARKER exponent → StandardForm (маркер обязателен)
3. Float литерал                               → Decimal

Порядок отличается от Number.from_str() (там float проверяется первым):
"1e5" здесь StandardForm, а в from_str() — Decimal.

Числитель и знаменатель дроби должны помещаться в u32, иначе грамматика
дроби не срабатывает и разбор переходит к следующей.
"""

import logging
import re
from dataclasses import dataclass
from typing import Final, NamedTuple

from src.polynum.domain.number import Number
from src.polynum.math.float_literal import DecimalParseError, scan_decimal
from src.polynum.math.fraction import GenericFraction
from src.polynum.math.numerical_safeguards import U32_MAX
from src.polynum.math.standard_form import (
    EXPONENT_MARKERS,
    StandardFormParseError,
    scan_standard_form,
)

logger = logging.getLogger(__name__)

# =============================================================================
# ГРАММАТИКА
# =============================================================================

_FRACTION_GRAMMAR: Final = re.compile(
    r"(?P<negative>-)?(?P<numerator>\d+)/(?P<denominator>\d+)", re.ASCII
)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class NumberScanError(ValueError):
    """Ни одна грамматика не распознала число в начале текста."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"no number literal at the start of {text!r}")


# =============================================================================
# RESULT
# =============================================================================


class ScanResult(NamedTuple):
    """Результат сканирования: число и неразобранный остаток."""

    number: Number
    remainder: str


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class ScannerConfig:
    """Конфигурация сканера.

    Значения по умолчанию соответствуют scan_number().
    """

    # Маркеры экспоненты для грамматики стандартного вида
    exponent_markers: tuple[str, ...] = EXPONENT_MARKERS

    # Пропускать пробельные символы перед литералом
    skip_leading_whitespace: bool = False


# =============================================================================
# SCANNER
# =============================================================================


class NumberScanner:
    """Сканер числовых литералов: дробь → стандартный вид → float."""

    def __init__(self, config: ScannerConfig | None = None):
        """Инициализация сканера.

        Args:
            config: конфигурация (опционально, используется default)
        """
        self.config = config or ScannerConfig()

    def scan(self, text: str) -> ScanResult:
        """
        Разбор числа в начале текста.

        Args:
            text: Исходный текст

        Returns:
            ScanResult(number, remainder)

        Raises:
            NumberScanError: Если ни одна грамматика не подошла

        Examples:
            >>> NumberScanner().scan("2/3 cup")
            ScanResult(number=Number.fraction(GenericFraction('2/3')), remainder=' cup')
        """
        source = text.lstrip() if self.config.skip_leading_whitespace else text

        for grammar in (self._scan_fraction, self._scan_standard_form, self._scan_decimal):
            result = grammar(source)
            if result is not None:
                return result

        logger.debug("No number grammar matched %r", text)
        raise NumberScanError(text)

    def _scan_fraction(self, text: str) -> ScanResult | None:
        match = _FRACTION_GRAMMAR.match(text)
        if match is None:
            return None

        numerator = int(match.group("numerator"))
        denominator = int(match.group("denominator"))
        if numerator > U32_MAX or denominator > U32_MAX:
            return None

        if match.group("negative"):
            fraction = GenericFraction.new_neg(numerator, denominator)
        else:
            fraction = GenericFraction.new(numerator, denominator)
        return ScanResult(Number.fraction(fraction), text[match.end():])

    def _scan_standard_form(self, text: str) -> ScanResult | None:
        try:
            value, remainder = scan_standard_form(text, self.config.exponent_markers)
        except StandardFormParseError:
            return None
        return ScanResult(Number.standard_form(value), remainder)

    def _scan_decimal(self, text: str) -> ScanResult | None:
        try:
            value, remainder = scan_decimal(text)
        except DecimalParseError:
            return None
        return ScanResult(Number.decimal(value), remainder)


_DEFAULT_SCANNER = NumberScanner()


def scan_number(text: str) -> ScanResult:
    """
    Разбор числа в начале текста сканером по умолчанию.

    Examples:
        >>> scan_number("1*10^-9").number
        Number.standard_form(StandardForm(mantissa=1.0, exponent=-9))
        >>> scan_number("3.14")
        ScanResult(number=Number.decimal(3.14), remainder='')
    """
    return _DEFAULT_SCANNER.scan(text)
