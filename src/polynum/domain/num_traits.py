"""
NumTraits — числовые "трейты" для Number

Отделяемый слой возможностей поверх ядра диспетчеризации:
- Нейтральные элементы: zero() = Decimal(0.0), one() = Decimal(1.0)
- Разбор с основанием (основание игнорируется, используется обычный разбор)
- Конверсия из int
- Знаковые операции: abs, abs_sub, signum, is_positive, is_negative
- Возведение в степень

Mixin не хранит состояния и опирается только на публичный интерфейс
класса-хозяина: kind, value, to_float(), конструкторы decimal/standard_form/
from_str и операторы сравнения/вычитания.

ПРАВИЛА ВОЗВЕДЕНИЯ В СТЕПЕНЬ:
    Decimal      ** Decimal       → Decimal
    StandardForm ** Decimal/SF    → StandardForm
    Decimal      ** StandardForm  → StandardForm
    любая пара с Fraction         → Decimal (дробь сводится к float numer/denom)
"""

from typing import Any

from src.polynum.domain.kind import NumberKind
from src.polynum.math.numerical_safeguards import (
    ieee_pow,
    is_negative,
    is_positive,
    to_f64,
)
from src.polynum.math.standard_form import StandardForm


class NumTraits:
    """
    Mixin числовых трейтов.

    Класс-хозяин обязан предоставить атрибуты kind/value и конструкторы
    decimal(), standard_form(), from_str().
    """

    # -------------------------------------------------------------------------
    # Нейтральные элементы
    # -------------------------------------------------------------------------

    @classmethod
    def zero(cls) -> Any:
        """Аддитивная единица: Decimal(0.0)."""
        return cls.decimal(0.0)

    @classmethod
    def one(cls) -> Any:
        """Мультипликативная единица: Decimal(1.0)."""
        return cls.decimal(1.0)

    def is_zero(self) -> bool:
        return self == 0.0

    def is_one(self) -> bool:
        return self == 1.0

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def from_str_radix(cls, text: str, radix: int) -> Any:
        """
        Разбор с основанием.

        Основание не используется: все три представления десятичные,
        поэтому разбор делегируется from_str().

        Raises:
            ParsingNumberError: Если текст не разобран
        """
        return cls.from_str(text)

    @classmethod
    def from_int(cls, value: int) -> Any:
        """Конверсия int → Decimal (с насыщением до ±inf)."""
        return cls.decimal(to_f64(value))

    # -------------------------------------------------------------------------
    # Знак
    # -------------------------------------------------------------------------

    def abs(self) -> Any:
        """Модуль в собственном представлении."""
        return type(self)(self.kind, abs(self.value))

    def __abs__(self) -> Any:
        return self.abs()

    def abs_sub(self, other: Any) -> Any:
        """
        Положительная разность: zero(), если self <= other, иначе self - other.
        """
        if self <= other:
            return self.zero()
        return self - other

    def signum(self) -> Any:
        """
        Знак как Decimal: 0.0, 1.0 или -1.0.

        Для значения без знака (NaN в любом представлении) → Decimal(NaN).
        """
        if self.is_zero():
            return self.zero()
        if self.is_positive():
            return self.one()
        if self.is_negative():
            return -self.one()
        return self.decimal(float("nan"))

    def is_positive(self) -> bool:
        """Строго больше нуля (ноль и NaN не положительны)."""
        if self.kind is NumberKind.DECIMAL:
            return is_positive(self.value)
        return self.value.is_positive()

    def is_negative(self) -> bool:
        """Строго меньше нуля (ноль и NaN не отрицательны)."""
        if self.kind is NumberKind.DECIMAL:
            return is_negative(self.value)
        return self.value.is_negative()

    # -------------------------------------------------------------------------
    # Степень
    # -------------------------------------------------------------------------

    def pow(self, exponent: Any) -> Any:
        """
        Возведение в степень.

        Args:
            exponent: Number или примитив (int/float, трактуется как Decimal)

        Returns:
            Number в представлении по правилам из описания модуля
        """
        if isinstance(exponent, (int, float)):
            exponent = self.decimal(exponent)
        if not isinstance(exponent, NumTraits):
            raise TypeError(f"unsupported exponent type: {type(exponent).__name__}")

        kinds = {self.kind, exponent.kind}
        result = ieee_pow(self.to_float(), exponent.to_float())

        # Дробь всегда сводится к float: результат теряет точность до Decimal
        if NumberKind.FRACTION in kinds or kinds == {NumberKind.DECIMAL}:
            return self.decimal(result)
        return self.standard_form(StandardForm.from_value(result))

    def __pow__(self, other: Any) -> Any:
        if not isinstance(other, (int, float, NumTraits)):
            return NotImplemented
        return self.pow(other)

    def __rpow__(self, other: Any) -> Any:
        if not isinstance(other, (int, float)):
            return NotImplemented
        return self.decimal(other).pow(self)
