"""
Numerical Safeguards — IEEE-754 примитивы для float

Python-операторы над float отклоняются от IEEE-754 в нескольких местах:
- x / 0.0 и x % 0.0 бросают ZeroDivisionError вместо inf/NaN
- float(int) бросает OverflowError для очень больших int
- math.pow бросает ValueError/OverflowError вместо NaN/inf
- hash(NaN) зависит от identity объекта (Python 3.10+)

Модуль даёт операции, которые ведут себя как машинная арифметика:
результат всегда float, исключения не пропагируют.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление и остаток никогда не бросают исключения (inf/NaN по IEEE)
2. Конверсия int → float насыщается до ±inf
3. Все NaN хешируются одинаково, -0.0 и 0.0 хешируются одинаково
4. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Хеш для всех NaN (любое фиксированное значение, не совпадающее с hash(0.0))
NAN_HASH: Final[int] = 0x7FF8_0000

# Границы unsigned 32-bit (числитель/знаменатель дроби)
U32_MAX: Final[int] = 2**32 - 1


# =============================================================================
# КОНВЕРСИЯ
# =============================================================================


def to_f64(value: int | float) -> float:
    """
    Насыщающая конверсия примитива в float.

    Args:
        value: int или float (bool принимается как int)

    Returns:
        float(value), либо ±inf если int не помещается в float

    Examples:
        >>> to_f64(3)
        3.0
        >>> to_f64(10**400)
        inf
    """
    try:
        return float(value)
    except OverflowError:
        return math.copysign(math.inf, value)


# =============================================================================
# IEEE-АРИФМЕТИКА
# =============================================================================


def ieee_divide(numerator: float, denominator: float) -> float:
    """
    Деление с семантикой IEEE-754.

    Args:
        numerator: Числитель
        denominator: Знаменатель

    Returns:
        numerator / denominator; при denominator == 0:
        - NaN если numerator равен 0 или NaN
        - ±inf со знаком numerator * sign(denominator)

    Examples:
        >>> ieee_divide(1.0, 0.0)
        inf
        >>> ieee_divide(1.0, -0.0)
        -inf
        >>> ieee_divide(0.0, 0.0)
        nan
    """
    if denominator != 0.0:
        return numerator / denominator

    if numerator == 0.0 or math.isnan(numerator):
        return math.nan

    # Знак нуля в знаменателе влияет на знак бесконечности
    sign = math.copysign(1.0, numerator) * math.copysign(1.0, denominator)
    return math.copysign(math.inf, sign)


def ieee_remainder(numerator: float, denominator: float) -> float:
    """
    Остаток от деления в семантике Python (знак делителя), без исключений.

    Для denominator == 0 возвращает NaN, как fmod в IEEE-754.
    Для ненулевого делителя совпадает с оператором % для float.

    Examples:
        >>> ieee_remainder(7.0, 3.0)
        1.0
        >>> ieee_remainder(-7.0, 3.0)
        2.0
        >>> ieee_remainder(7.0, 0.0)
        nan
    """
    if denominator == 0.0:
        return math.nan
    return numerator % denominator


def ieee_pow(base: float, exponent: float) -> float:
    """
    Возведение в степень в семантике C pow().

    math.pow бросает ValueError для отрицательного основания с дробной
    степенью и OverflowError при переполнении. Здесь вместо этого
    возвращаются NaN и ±inf соответственно.

    Args:
        base: Основание
        exponent: Показатель

    Returns:
        base ** exponent как float

    Examples:
        >>> ieee_pow(2.0, 10.0)
        1024.0
        >>> ieee_pow(-8.0, 0.5)
        nan
        >>> ieee_pow(10.0, 400.0)
        inf
    """
    base = float(base)
    exponent = float(exponent)
    odd_integer_exponent = (
        math.isfinite(exponent) and exponent.is_integer() and int(exponent) % 2 == 1
    )

    # pow(±0, y < 0) по C99 — полюс, math.pow здесь бросает ValueError
    if base == 0.0 and exponent < 0:
        if odd_integer_exponent:
            return math.copysign(math.inf, base)
        return math.inf

    try:
        return math.pow(base, exponent)
    except ValueError:
        return math.nan
    except OverflowError:
        # Отрицательное основание с нечётной целой степенью даёт -inf
        if base < 0 and odd_integer_exponent:
            return -math.inf
        return math.inf


# =============================================================================
# ЗНАК
# =============================================================================


def is_positive(value: float) -> bool:
    """
    Строго положительное значение.

    Ноль и NaN не являются положительными.
    """
    return value > 0.0


def is_negative(value: float) -> bool:
    """
    Строго отрицательное значение.

    Ноль (включая -0.0) и NaN не являются отрицательными.
    """
    return value < 0.0


def trailing_zeros(value: int) -> int:
    """
    Количество младших нулевых бит в неотрицательном int.

    Для 0 возвращает 32: ширина знаменателя дроби (u32).

    Examples:
        >>> trailing_zeros(8)
        3
        >>> trailing_zeros(12)
        2
        >>> trailing_zeros(7)
        0
    """
    if value < 0:
        raise ValueError(f"value must be non-negative, got {value}")
    if value == 0:
        return 32
    return (value & -value).bit_length() - 1


# =============================================================================
# ХЕШИРОВАНИЕ
# =============================================================================


def ordered_float_hash(value: float) -> int:
    """
    Хеш float, совместимый с равенством.

    hash(nan) в Python 3.10+ основан на id объекта, поэтому два NaN
    получают разные хеши. Здесь все NaN дают NAN_HASH. Для остальных
    значений результат совпадает с hash(value), а значит согласован с
    hash(int) и hash(fractions.Fraction) для равных значений.

    Examples:
        >>> ordered_float_hash(float("nan")) == ordered_float_hash(-float("nan"))
        True
        >>> ordered_float_hash(0.0) == ordered_float_hash(-0.0)
        True
    """
    if math.isnan(value):
        return NAN_HASH
    return hash(value)
