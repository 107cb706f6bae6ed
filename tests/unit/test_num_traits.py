"""
Тесты для NumTraits — числовые трейты Number

Проверяет:
1. Нейтральные элементы zero()/one()
2. Знаковые операции во всех представлениях
3. Правила представления результата возведения в степень
"""

import math

import pytest

from src.polynum.domain.kind import NumberKind
from src.polynum.domain.number import Number
from src.polynum.math.fraction import GenericFraction
from src.polynum.math.standard_form import StandardForm


def dec(value):
    return Number.decimal(value)


def sf(mantissa, exponent=0):
    return Number.standard_form(StandardForm.new(mantissa, exponent))


def frac(numerator, denominator):
    return Number.fraction(GenericFraction.new(numerator, denominator))


def neg_frac(numerator, denominator):
    return Number.fraction(GenericFraction.new_neg(numerator, denominator))


# =============================================================================
# ТЕСТЫ: Нейтральные элементы
# =============================================================================


class TestIdentities:

    def test_zero_and_one_are_decimal(self):
        assert Number.zero() == dec(0.0)
        assert Number.zero().kind is NumberKind.DECIMAL
        assert Number.one() == dec(1.0)
        assert Number.one().kind is NumberKind.DECIMAL

    @pytest.mark.parametrize("value", [dec(0.0), dec(-0.0), frac(0, 5), sf(0.0)])
    def test_is_zero(self, value):
        assert value.is_zero()

    @pytest.mark.parametrize("value", [dec(1.0), frac(3, 3), sf(1.0)])
    def test_is_one(self, value):
        assert value.is_one()
        assert not value.is_zero()

    def test_additive_identity(self):
        for value in (dec(2.5), frac(2, 3), sf(1.5, 3)):
            assert value + Number.zero() == value

    def test_from_int(self):
        assert Number.from_int(5) == dec(5.0)
        assert Number.from_int(10**400).value == math.inf


# =============================================================================
# ТЕСТЫ: Знак
# =============================================================================


class TestSign:

    @pytest.mark.parametrize(
        "value, positive, negative",
        [
            (dec(2.0), True, False),
            (dec(-2.0), False, True),
            (dec(0.0), False, False),
            (dec(math.nan), False, False),
            (frac(1, 2), True, False),
            (neg_frac(1, 2), False, True),
            (frac(0, 1), False, False),
            (Number.fraction(GenericFraction.nan()), False, False),
            (Number.fraction(GenericFraction.neg_infinity()), False, True),
            (sf(3.0), True, False),
            (sf(-3.0), False, True),
            (sf(0.0), False, False),
        ],
    )
    def test_is_positive_is_negative(self, value, positive, negative):
        assert value.is_positive() is positive
        assert value.is_negative() is negative

    def test_abs_keeps_kind(self):
        assert dec(-2.0).abs() == dec(2.0)
        assert abs(neg_frac(1, 2)).value == GenericFraction.new(1, 2)
        assert abs(neg_frac(1, 2)).kind is NumberKind.FRACTION
        assert abs(sf(-3.0)).value == StandardForm.new(3.0)

    @pytest.mark.parametrize(
        "value, expected",
        [
            (dec(5.0), 1.0),
            (dec(-5.0), -1.0),
            (dec(0.0), 0.0),
            (frac(1, 2), 1.0),
            (neg_frac(1, 2), -1.0),
            (sf(-3.0, 4), -1.0),
            (sf(0.0), 0.0),
        ],
    )
    def test_signum(self, value, expected):
        result = value.signum()
        assert result.kind is NumberKind.DECIMAL
        assert result.value == expected

    def test_signum_of_nan(self):
        assert math.isnan(dec(math.nan).signum().value)
        assert math.isnan(Number.fraction(GenericFraction.nan()).signum().value)

    def test_abs_sub(self):
        assert dec(5.0).abs_sub(dec(3.0)) == dec(2.0)
        assert dec(3.0).abs_sub(dec(5.0)) == Number.zero()
        assert frac(3, 4).abs_sub(frac(1, 4)).value == GenericFraction.new(1, 2)


# =============================================================================
# ТЕСТЫ: Степень
# =============================================================================


class TestPow:

    def test_decimal_pow_decimal(self):
        result = dec(2.0) ** dec(10.0)
        assert result.kind is NumberKind.DECIMAL
        assert result.value == 1024.0

    def test_decimal_pow_primitive(self):
        assert dec(2.0) ** 3 == dec(8.0)
        assert dec(2.0).pow(0.5).value == pytest.approx(math.sqrt(2.0))

    def test_reflected_primitive_pow(self):
        result = 2 ** dec(3.0)
        assert result.kind is NumberKind.DECIMAL
        assert result.value == 8.0

    def test_standard_form_pow_decimal(self):
        result = sf(2.0) ** dec(3.0)
        assert result.kind is NumberKind.STANDARD_FORM
        assert result.value == StandardForm.new(8.0)

    def test_decimal_pow_standard_form(self):
        result = dec(10.0) ** sf(2.0)
        assert result.kind is NumberKind.STANDARD_FORM
        assert result.value == StandardForm(mantissa=1.0, exponent=2)

    def test_fraction_pow_decimal(self):
        result = frac(2, 1) ** dec(3.0)
        assert result.kind is NumberKind.DECIMAL
        assert result.value == 8.0

    def test_fraction_involved_is_decimal(self):
        assert (frac(1, 4) ** 0.5).kind is NumberKind.DECIMAL
        assert (frac(1, 4) ** 0.5).value == 0.5
        assert (dec(4.0) ** frac(1, 2)).value == 2.0
        assert (sf(3.0) ** frac(2, 1)).kind is NumberKind.DECIMAL

    def test_ieee_edge_cases(self):
        assert math.isnan((dec(-8.0) ** 0.5).value)
        assert (dec(0.0) ** -1).value == math.inf

    def test_unsupported_exponent(self):
        with pytest.raises(TypeError):
            dec(2.0) ** "2"
        with pytest.raises(TypeError, match="unsupported exponent"):
            dec(2.0).pow("2")
