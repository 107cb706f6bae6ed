"""
Ошибки ядра Number

- ParsingNumberError: текст не разобран ни одним из трёх представлений
- TotalOrderViolation: полный порядок запрошен для несравнимой пары (NaN)
"""

from typing import Any

from src.polynum.math.float_literal import DecimalParseError
from src.polynum.math.fraction import FractionParseError
from src.polynum.math.standard_form import StandardFormParseError


class ParsingNumberError(ValueError):
    """
    Агрегированная ошибка разбора.

    Хранит все три отказа (дробь, float, стандартный вид), чтобы вызывающий
    код мог выяснить, почему отвергнута каждая интерпретация.
    """

    def __init__(
        self,
        fraction: FractionParseError,
        double: DecimalParseError,
        standard_form: StandardFormParseError,
    ):
        self._fraction = fraction
        self._double = double
        self._standard_form = standard_form
        super().__init__(
            "Failed to parse the number:\n"
            f"fraction error: {fraction},\n"
            f"double error: {double},\n"
            f"standard form error: {standard_form}"
        )

    @property
    def fraction(self) -> FractionParseError:
        """Ошибка разбора дроби."""
        return self._fraction

    @property
    def double(self) -> DecimalParseError:
        """Ошибка разбора float."""
        return self._double

    @property
    def standardform(self) -> StandardFormParseError:
        """Ошибка разбора стандартного вида."""
        return self._standard_form


class TotalOrderViolation(Exception):
    """
    Нарушение контракта полного порядка.

    Number.cmp() определён через частичный порядок и не замкнут для NaN.
    Это ошибка программы, а не восстанавливаемая ситуация: вызывающий код
    обязан не передавать NaN в полное сравнение.
    """

    def __init__(self, lhs: Any, rhs: Any):
        self.lhs = lhs
        self.rhs = rhs
        super().__init__(f"total order is undefined for {lhs!r} and {rhs!r}")
