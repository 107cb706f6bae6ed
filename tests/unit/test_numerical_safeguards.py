"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. IEEE-деление и остаток без исключений
2. Возведение в степень с семантикой C pow()
3. Насыщающую конверсию int → float
4. Знаковые предикаты
5. Подсчёт младших нулевых бит
6. NaN-устойчивый hash
"""

import math
from fractions import Fraction

import pytest

from src.polynum.math.numerical_safeguards import (
    NAN_HASH,
    U32_MAX,
    ieee_divide,
    ieee_pow,
    ieee_remainder,
    is_negative,
    is_positive,
    ordered_float_hash,
    to_f64,
    trailing_zeros,
)

# =============================================================================
# ТЕСТЫ IEEE-ДЕЛЕНИЯ
# =============================================================================


class TestIeeeDivide:
    """Тесты для ieee_divide"""

    def test_regular_division(self) -> None:
        """Обычное деление совпадает с оператором /"""
        assert ieee_divide(10.0, 4.0) == 2.5
        assert ieee_divide(-9.0, 3.0) == -3.0

    def test_positive_over_zero_is_inf(self) -> None:
        """x / 0.0 при x > 0 → +inf"""
        assert ieee_divide(1.0, 0.0) == math.inf

    def test_negative_over_zero_is_minus_inf(self) -> None:
        """x / 0.0 при x < 0 → -inf"""
        assert ieee_divide(-1.0, 0.0) == -math.inf

    def test_signed_zero_denominator(self) -> None:
        """Знак нуля в знаменателе учитывается"""
        assert ieee_divide(1.0, -0.0) == -math.inf
        assert ieee_divide(-1.0, -0.0) == math.inf

    def test_zero_over_zero_is_nan(self) -> None:
        """0/0 → NaN"""
        assert math.isnan(ieee_divide(0.0, 0.0))

    def test_nan_over_zero_is_nan(self) -> None:
        """NaN/0 → NaN"""
        assert math.isnan(ieee_divide(math.nan, 0.0))


class TestIeeeRemainder:
    """Тесты для ieee_remainder"""

    @pytest.mark.parametrize(
        "a, b",
        [(7.0, 3.0), (-7.0, 3.0), (7.0, -3.0), (5.5, 2.0), (0.0, 1.0)],
    )
    def test_matches_python_modulo(self, a: float, b: float) -> None:
        """Для ненулевого делителя совпадает с %"""
        assert ieee_remainder(a, b) == a % b

    def test_remainder_by_zero_is_nan(self) -> None:
        """x % 0 → NaN вместо ZeroDivisionError"""
        assert math.isnan(ieee_remainder(7.0, 0.0))
        assert math.isnan(ieee_remainder(0.0, 0.0))


class TestIeeePow:
    """Тесты для ieee_pow"""

    def test_regular_power(self) -> None:
        assert ieee_pow(2.0, 10.0) == 1024.0
        assert ieee_pow(4.0, 0.5) == 2.0

    def test_negative_base_fractional_exponent_is_nan(self) -> None:
        """(-8) ** 0.5 → NaN вместо ValueError"""
        assert math.isnan(ieee_pow(-8.0, 0.5))

    def test_overflow_is_inf(self) -> None:
        """Переполнение → inf вместо OverflowError"""
        assert ieee_pow(10.0, 400.0) == math.inf

    def test_overflow_negative_odd_is_minus_inf(self) -> None:
        """Отрицательное основание, нечётная степень → -inf"""
        assert ieee_pow(-10.0, 401.0) == -math.inf
        assert ieee_pow(-10.0, 400.0) == math.inf

    def test_zero_base_negative_exponent_is_pole(self) -> None:
        """0 ** -1 → inf (полюс)"""
        assert ieee_pow(0.0, -1.0) == math.inf
        assert ieee_pow(-0.0, -1.0) == -math.inf
        assert ieee_pow(-0.0, -2.0) == math.inf

    def test_accepts_int_arguments(self) -> None:
        assert ieee_pow(2, 3) == 8.0


# =============================================================================
# ТЕСТЫ КОНВЕРСИИ
# =============================================================================


class TestToF64:
    """Тесты для to_f64"""

    def test_int_and_float(self) -> None:
        assert to_f64(3) == 3.0
        assert isinstance(to_f64(3), float)
        assert to_f64(2.5) == 2.5

    def test_bool_is_int(self) -> None:
        assert to_f64(True) == 1.0

    def test_huge_int_saturates(self) -> None:
        """int вне диапазона float → ±inf"""
        assert to_f64(10**400) == math.inf
        assert to_f64(-(10**400)) == -math.inf


# =============================================================================
# ТЕСТЫ ЗНАКА
# =============================================================================


class TestSignPredicates:
    """Тесты для is_positive / is_negative"""

    def test_positive(self) -> None:
        assert is_positive(1.0)
        assert is_positive(math.inf)
        assert not is_positive(-1.0)

    def test_negative(self) -> None:
        assert is_negative(-1.0)
        assert is_negative(-math.inf)
        assert not is_negative(1.0)

    def test_zero_has_no_sign(self) -> None:
        """Ноль (включая -0.0) ни положителен, ни отрицателен"""
        assert not is_positive(0.0)
        assert not is_negative(0.0)
        assert not is_negative(-0.0)

    def test_nan_has_no_sign(self) -> None:
        assert not is_positive(math.nan)
        assert not is_negative(math.nan)


# =============================================================================
# ТЕСТЫ TRAILING ZEROS
# =============================================================================


class TestTrailingZeros:
    """Тесты для trailing_zeros"""

    @pytest.mark.parametrize(
        "value, expected",
        [(1, 0), (2, 1), (3, 0), (8, 3), (12, 2), (1024, 10), (U32_MAX, 0)],
    )
    def test_counts_low_zero_bits(self, value: int, expected: int) -> None:
        assert trailing_zeros(value) == expected

    def test_zero_is_32(self) -> None:
        """Ноль: ширина u32"""
        assert trailing_zeros(0) == 32

    def test_negative_raises(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            trailing_zeros(-4)


# =============================================================================
# ТЕСТЫ HASH
# =============================================================================


class TestOrderedFloatHash:
    """Тесты для ordered_float_hash"""

    def test_all_nans_hash_equal(self) -> None:
        """Разные объекты NaN дают один hash"""
        assert ordered_float_hash(float("nan")) == ordered_float_hash(float("nan"))
        assert ordered_float_hash(math.nan) == NAN_HASH

    def test_signed_zeros_hash_equal(self) -> None:
        assert ordered_float_hash(0.0) == ordered_float_hash(-0.0)

    def test_consistent_with_numeric_tower(self) -> None:
        """Совпадает с hash() для int и Fraction равного значения"""
        assert ordered_float_hash(0.5) == hash(Fraction(1, 2))
        assert ordered_float_hash(3.0) == hash(3)
