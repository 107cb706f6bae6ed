"""
GenericFraction — рациональная дробь со специальными состояниями

Значение находится в одном из трёх состояний:
- RATIONAL(sign, numerator, denominator) — обычная несократимая дробь
- INFINITY(sign) — ±бесконечность (x/0 при x != 0)
- NAN — не число (0/0, inf - inf, ...)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Модуль дроби хранится как неотрицательный fractions.Fraction (всегда сокращён)
2. Ноль всегда имеет знак PLUS
3. Арифметика между RATIONAL точная
4. Любая операция со специальным состоянием вычисляется через float (IEEE)
   и результат поднимается обратно в GenericFraction
5. Разбор текста ограничивает числитель и знаменатель диапазоном u32
"""

import math
import operator
import re
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import Callable, Final

from src.polynum.math.numerical_safeguards import (
    U32_MAX,
    ieee_divide,
    ieee_pow,
    ieee_remainder,
    ordered_float_hash,
)

# =============================================================================
# ENUMS
# =============================================================================


class Sign(str, Enum):
    """Знак дроби"""

    PLUS = "+"
    MINUS = "-"

    def flip(self) -> "Sign":
        return Sign.MINUS if self is Sign.PLUS else Sign.PLUS


class FractionState(str, Enum):
    """Состояние дроби"""

    RATIONAL = "rational"
    INFINITY = "infinity"
    NAN = "nan"


# =============================================================================
# ГРАММАТИКА
# =============================================================================

_FRACTION_TEXT_RE: Final = re.compile(
    r"""
    (?P<sign>[+-])?
    (?:
        (?P<numerator>\d+)(?:/(?P<denominator>\d+))?     # n или n/d
      |
        (?P<whole>\d*)\.(?P<decimals>\d+)                 # десятичная запись
    )
    """,
    re.VERBOSE | re.ASCII,
)

_NAN_LITERALS: Final[frozenset[str]] = frozenset({"nan", "NaN", "NAN"})
_INFINITY_LITERALS: Final[frozenset[str]] = frozenset({"inf", "+inf", "infinity", "+infinity"})
_NEG_INFINITY_LITERALS: Final[frozenset[str]] = frozenset({"-inf", "-infinity"})


# =============================================================================
# EXCEPTIONS
# =============================================================================


class FractionParseErrorKind(str, Enum):
    """Причина отказа разбора дроби"""

    EMPTY = "empty"
    INVALID_FORMAT = "invalid_format"
    OVERFLOW = "overflow"


class FractionParseError(ValueError):
    """Текст не является дробью."""

    def __init__(self, text: str, kind: FractionParseErrorKind):
        self.text = text
        self.kind = kind
        super().__init__(f"cannot parse fraction from {text!r}: {kind.value}")


# =============================================================================
# GENERIC FRACTION
# =============================================================================


@dataclass(frozen=True, eq=False)
class GenericFraction:
    """
    Дробь со знаком и специальными состояниями.

    Экземпляры создаются через классовые конструкторы
    (new, new_neg, nan, infinity, neg_infinity, from_value, parse).
    """

    state: FractionState
    sign: Sign = Sign.PLUS
    magnitude: Fraction = Fraction(0)

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def new(cls, numerator: int, denominator: int) -> "GenericFraction":
        """
        Положительная дробь numerator/denominator.

        Examples:
            >>> str(GenericFraction.new(2, 4))
            '1/2'
            >>> GenericFraction.new(1, 0).is_infinite()
            True
            >>> GenericFraction.new(0, 0).is_nan()
            True
        """
        return cls._build(Sign.PLUS, numerator, denominator)

    @classmethod
    def new_neg(cls, numerator: int, denominator: int) -> "GenericFraction":
        """Отрицательная дробь -(numerator/denominator)."""
        return cls._build(Sign.MINUS, numerator, denominator)

    @classmethod
    def nan(cls) -> "GenericFraction":
        return cls(state=FractionState.NAN)

    @classmethod
    def infinity(cls) -> "GenericFraction":
        return cls(state=FractionState.INFINITY, sign=Sign.PLUS)

    @classmethod
    def neg_infinity(cls) -> "GenericFraction":
        return cls(state=FractionState.INFINITY, sign=Sign.MINUS)

    @classmethod
    def from_rational(cls, value: Fraction) -> "GenericFraction":
        """Обёртка знакового fractions.Fraction."""
        sign = Sign.MINUS if value < 0 else Sign.PLUS
        return cls(state=FractionState.RATIONAL, sign=sign, magnitude=abs(value))

    @classmethod
    def from_value(cls, value: int | float) -> "GenericFraction":
        """
        Конверсия примитива.

        int конвертируется точно. float читается через кратчайшую
        десятичную запись (repr), поэтому 0.1 → 1/10, а не 3602879701896397/2^55.
        NaN и ±inf переходят в специальные состояния.

        Examples:
            >>> str(GenericFraction.from_value(0.75))
            '3/4'
            >>> GenericFraction.from_value(float("-inf")) == GenericFraction.neg_infinity()
            True
        """
        if isinstance(value, int):
            return cls.from_rational(Fraction(value))
        if math.isnan(value):
            return cls.nan()
        if math.isinf(value):
            return cls.infinity() if value > 0 else cls.neg_infinity()
        return cls.from_rational(Fraction(repr(value)))

    @classmethod
    def parse(cls, text: str) -> "GenericFraction":
        """
        Разбор строки целиком.

        Допустимые формы: "n/d", "n", "d.ddd" (с необязательным знаком),
        "NaN", "inf", "-inf". Числитель и знаменатель должны помещаться в u32.

        Raises:
            FractionParseError: Если строка не является дробью
        """
        if not text:
            raise FractionParseError(text, FractionParseErrorKind.EMPTY)

        if text in _NAN_LITERALS:
            return cls.nan()
        if text in _INFINITY_LITERALS:
            return cls.infinity()
        if text in _NEG_INFINITY_LITERALS:
            return cls.neg_infinity()

        match = _FRACTION_TEXT_RE.fullmatch(text)
        if match is None:
            raise FractionParseError(text, FractionParseErrorKind.INVALID_FORMAT)

        if match.group("numerator") is not None:
            numerator = int(match.group("numerator"))
            denominator_text = match.group("denominator")
            denominator = int(denominator_text) if denominator_text is not None else 1
        else:
            decimals = match.group("decimals")
            numerator = int((match.group("whole") or "0") + decimals)
            denominator = 10 ** len(decimals)

        if numerator > U32_MAX or denominator > U32_MAX:
            raise FractionParseError(text, FractionParseErrorKind.OVERFLOW)

        if match.group("sign") == "-":
            return cls.new_neg(numerator, denominator)
        return cls.new(numerator, denominator)

    @classmethod
    def _build(cls, sign: Sign, numerator: int, denominator: int) -> "GenericFraction":
        if numerator < 0 or denominator < 0:
            raise ValueError(
                f"numerator and denominator must be non-negative, got {numerator}/{denominator}"
            )
        if denominator == 0:
            if numerator == 0:
                return cls.nan()
            return cls(state=FractionState.INFINITY, sign=sign)
        magnitude = Fraction(numerator, denominator)
        if magnitude == 0:
            sign = Sign.PLUS
        return cls(state=FractionState.RATIONAL, sign=sign, magnitude=magnitude)

    # -------------------------------------------------------------------------
    # Доступ к состоянию
    # -------------------------------------------------------------------------

    def is_rational(self) -> bool:
        return self.state is FractionState.RATIONAL

    def is_nan(self) -> bool:
        return self.state is FractionState.NAN

    def is_infinite(self) -> bool:
        return self.state is FractionState.INFINITY

    def numer(self) -> int | None:
        """Числитель (без знака); None для специальных состояний."""
        if not self.is_rational():
            return None
        return self.magnitude.numerator

    def denom(self) -> int | None:
        """Знаменатель; None для специальных состояний."""
        if not self.is_rational():
            return None
        return self.magnitude.denominator

    def signed_value(self) -> Fraction:
        """Знаковое рациональное значение (только для RATIONAL)."""
        if not self.is_rational():
            raise ValueError(f"{self.state.value} fraction has no rational value")
        return -self.magnitude if self.sign is Sign.MINUS else self.magnitude

    def to_float(self) -> float:
        """
        Значение как float: числитель / знаменатель.

        Деление int/int в Python корректно округляется даже для
        числителей, не помещающихся в float.
        """
        if self.is_nan():
            return math.nan
        if self.is_infinite():
            return -math.inf if self.sign is Sign.MINUS else math.inf
        value = self.magnitude.numerator / self.magnitude.denominator
        return -value if self.sign is Sign.MINUS else value

    def __float__(self) -> float:
        return self.to_float()

    def __str__(self) -> str:
        if self.is_nan():
            return "NaN"
        prefix = "-" if self.sign is Sign.MINUS else ""
        if self.is_infinite():
            return f"{prefix}inf"
        if self.magnitude.denominator == 1:
            return f"{prefix}{self.magnitude.numerator}"
        return f"{prefix}{self.magnitude.numerator}/{self.magnitude.denominator}"

    def __repr__(self) -> str:
        return f"GenericFraction({str(self)!r})"

    # -------------------------------------------------------------------------
    # Знак
    # -------------------------------------------------------------------------

    def is_positive(self) -> bool:
        if self.is_nan():
            return False
        if self.is_infinite():
            return self.sign is Sign.PLUS
        return self.sign is Sign.PLUS and self.magnitude != 0

    def is_negative(self) -> bool:
        return not self.is_nan() and self.sign is Sign.MINUS

    def __neg__(self) -> "GenericFraction":
        if self.is_nan() or (self.is_rational() and self.magnitude == 0):
            return self
        return GenericFraction(state=self.state, sign=self.sign.flip(), magnitude=self.magnitude)

    def __abs__(self) -> "GenericFraction":
        if self.is_nan():
            return self
        return GenericFraction(state=self.state, sign=Sign.PLUS, magnitude=self.magnitude)

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def __add__(self, other: "GenericFraction | int | float") -> "GenericFraction":
        return _apply(self, other, operator.add, operator.add)

    def __radd__(self, other: int | float) -> "GenericFraction":
        return _apply_reflected(self, other, operator.add, operator.add)

    def __sub__(self, other: "GenericFraction | int | float") -> "GenericFraction":
        return _apply(self, other, operator.sub, operator.sub)

    def __rsub__(self, other: int | float) -> "GenericFraction":
        return _apply_reflected(self, other, operator.sub, operator.sub)

    def __mul__(self, other: "GenericFraction | int | float") -> "GenericFraction":
        return _apply(self, other, operator.mul, operator.mul)

    def __rmul__(self, other: int | float) -> "GenericFraction":
        return _apply_reflected(self, other, operator.mul, operator.mul)

    def __truediv__(self, other: "GenericFraction | int | float") -> "GenericFraction":
        return _apply(self, other, _rational_divide, ieee_divide)

    def __rtruediv__(self, other: int | float) -> "GenericFraction":
        return _apply_reflected(self, other, _rational_divide, ieee_divide)

    def __mod__(self, other: "GenericFraction | int | float") -> "GenericFraction":
        return _apply(self, other, _rational_remainder, ieee_remainder)

    def __rmod__(self, other: int | float) -> "GenericFraction":
        return _apply_reflected(self, other, _rational_remainder, ieee_remainder)

    def __pow__(self, other: "GenericFraction | int | float") -> "GenericFraction":
        lifted = _coerce(other)
        if lifted is None:
            return NotImplemented
        return GenericFraction.from_value(ieee_pow(self.to_float(), lifted.to_float()))

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def partial_cmp(self, other: "GenericFraction") -> int | None:
        """
        Частичное сравнение.

        Returns:
            -1, 0, 1 или None, если одна из сторон NaN
        """
        if self.is_nan() or other.is_nan():
            return None
        if self.is_rational() and other.is_rational():
            lhs, rhs = self.signed_value(), other.signed_value()
        else:
            lhs, rhs = self.to_float(), other.to_float()
        if lhs < rhs:
            return -1
        if lhs > rhs:
            return 1
        return 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GenericFraction):
            return NotImplemented
        return self.partial_cmp(other) == 0

    def __hash__(self) -> int:
        return ordered_float_hash(self.to_float())

    def __lt__(self, other: "GenericFraction") -> bool:
        if not isinstance(other, GenericFraction):
            return NotImplemented
        return self.partial_cmp(other) == -1

    def __le__(self, other: "GenericFraction") -> bool:
        if not isinstance(other, GenericFraction):
            return NotImplemented
        return self.partial_cmp(other) in (-1, 0)

    def __gt__(self, other: "GenericFraction") -> bool:
        if not isinstance(other, GenericFraction):
            return NotImplemented
        return self.partial_cmp(other) == 1

    def __ge__(self, other: "GenericFraction") -> bool:
        if not isinstance(other, GenericFraction):
            return NotImplemented
        return self.partial_cmp(other) in (1, 0)


# =============================================================================
# ВНУТРЕННИЕ ФУНКЦИИ
# =============================================================================

RationalOp = Callable[[Fraction, Fraction], "Fraction | GenericFraction"]
FloatOp = Callable[[float, float], float]


def _coerce(value: object) -> GenericFraction | None:
    if isinstance(value, GenericFraction):
        return value
    if isinstance(value, (int, float)):
        return GenericFraction.from_value(value)
    return None


def _combine(
    lhs: GenericFraction,
    rhs: GenericFraction,
    rational_op: RationalOp,
    float_op: FloatOp,
) -> GenericFraction:
    if lhs.is_rational() and rhs.is_rational():
        result = rational_op(lhs.signed_value(), rhs.signed_value())
        if isinstance(result, GenericFraction):
            return result
        return GenericFraction.from_rational(result)
    return GenericFraction.from_value(float_op(lhs.to_float(), rhs.to_float()))


def _apply(
    lhs: GenericFraction,
    other: object,
    rational_op: RationalOp,
    float_op: FloatOp,
) -> GenericFraction:
    rhs = _coerce(other)
    if rhs is None:
        return NotImplemented
    return _combine(lhs, rhs, rational_op, float_op)


def _apply_reflected(
    rhs: GenericFraction,
    other: object,
    rational_op: RationalOp,
    float_op: FloatOp,
) -> GenericFraction:
    lhs = _coerce(other)
    if lhs is None:
        return NotImplemented
    return _combine(lhs, rhs, rational_op, float_op)


def _rational_divide(lhs: Fraction, rhs: Fraction) -> Fraction | GenericFraction:
    if rhs == 0:
        if lhs == 0:
            return GenericFraction.nan()
        return GenericFraction.infinity() if lhs > 0 else GenericFraction.neg_infinity()
    return lhs / rhs


def _rational_remainder(lhs: Fraction, rhs: Fraction) -> Fraction | GenericFraction:
    if rhs == 0:
        return GenericFraction.nan()
    return lhs % rhs
