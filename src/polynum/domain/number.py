"""
Number — единый числовой тип над тремя представлениями

Закрытое размеченное объединение (tagged union) с тремя вариантами:
- DECIMAL: float (IEEE-754 double)
- STANDARD_FORM: StandardForm (mantissa × 10^exponent)
- FRACTION: GenericFraction (рациональная дробь или ±inf/NaN)

Вызывающий код выполняет арифметику над разнородными значениями без
ручной конверсии; результат сохраняет естественное для входов представление.

ПРАВИЛА ДИСПЕТЧЕРИЗАЦИИ (Number × Number):
1. Одинаковые варианты → собственный оператор представления
2. Decimal с StandardForm/Fraction → оператор не-decimal стороны против float,
   результат в не-decimal представлении. Порядок операндов сохраняется
   намеренно: Decimal(10) - SF(3) == SF(7), а не SF(-7)
3. StandardForm с Fraction:
   - рациональная дробь → переводится в StandardForm (см. _rational_to_standard_form),
     результат StandardForm
   - специальная дробь (NaN/inf) → возвращается сама дробь, второй операнд
     отбрасывается (известный пробел, не общее правило)

ПРИМИТИВЫ (int/float):
- n op p: примитив трактуется в представлении левого операнда
- p op n: примитив поднимается в представление n
- n op= p: примитив всегда оборачивается в Decimal и идёт через Number × Number

СРАВНЕНИЕ:
- одинаковые варианты → сравнение представления
- разные варианты → сравнение float-значений обеих сторон
- Number vs примитив → примитив конвертируется в вариант Number
- cmp() — полный порядок, бросает TotalOrderViolation для NaN

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Активен ровно один вариант, конверсия только в момент операции
2. Number immutable; in-place операторы возвращают новый экземпляр
3. Равные Number (в том числе разных вариантов) имеют равный hash.
   С int согласованность hash/eq гарантируется только до 2**53:
   Number.decimal(2**53 + 1) == 2**53 + 1, но hash различается
"""

import functools
import logging
import operator
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Final

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from src.polynum.domain.errors import ParsingNumberError, TotalOrderViolation
from src.polynum.domain.kind import NumberKind
from src.polynum.domain.num_traits import NumTraits
from src.polynum.math.float_literal import DecimalParseError, parse_decimal
from src.polynum.math.fraction import FractionParseError, GenericFraction, Sign
from src.polynum.math.numerical_safeguards import (
    ieee_divide,
    ieee_remainder,
    ordered_float_hash,
    to_f64,
    trailing_zeros,
)
from src.polynum.math.standard_form import StandardForm, StandardFormParseError

logger = logging.getLogger(__name__)

NumberValue = float | StandardForm | GenericFraction


# =============================================================================
# ОПЕРАЦИИ
# =============================================================================


class ArithmeticOp(str, Enum):
    """Бинарная арифметическая операция"""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    REM = "%"


# Decimal × Decimal: IEEE-семантика (деление на ноль → inf/NaN, без исключений)
_DECIMAL_OPS: Final[dict[ArithmeticOp, Callable[[float, float], float]]] = {
    ArithmeticOp.ADD: operator.add,
    ArithmeticOp.SUB: operator.sub,
    ArithmeticOp.MUL: operator.mul,
    ArithmeticOp.DIV: ieee_divide,
    ArithmeticOp.REM: ieee_remainder,
}

# StandardForm / GenericFraction: собственные операторы представления
_REPRESENTATION_OPS: Final[dict[ArithmeticOp, Callable[[Any, Any], Any]]] = {
    ArithmeticOp.ADD: operator.add,
    ArithmeticOp.SUB: operator.sub,
    ArithmeticOp.MUL: operator.mul,
    ArithmeticOp.DIV: operator.truediv,
    ArithmeticOp.REM: operator.mod,
}

_VALUE_TYPES: Final[dict[NumberKind, type]] = {
    NumberKind.DECIMAL: float,
    NumberKind.STANDARD_FORM: StandardForm,
    NumberKind.FRACTION: GenericFraction,
}


def _is_primitive(value: object) -> bool:
    return isinstance(value, (int, float))


# =============================================================================
# NUMBER
# =============================================================================


@dataclass(frozen=True, eq=False, repr=False)
class Number(NumTraits):
    """
    Число в одном из трёх представлений.

    Создаётся через конструкторы decimal(), standard_form(), fraction(),
    from_value(), from_str() или как результат оператора.

    Examples:
        >>> Number.decimal(2.5) + Number.decimal(3.5)
        Number.decimal(6.0)
        >>> str(Number.from_str("2/3"))
        '2/3'
    """

    kind: NumberKind
    value: NumberValue

    def __post_init__(self) -> None:
        expected = _VALUE_TYPES[self.kind]
        if not isinstance(self.value, expected):
            raise TypeError(
                f"{self.kind.value} number requires {expected.__name__}, "
                f"got {type(self.value).__name__}"
            )

    # -------------------------------------------------------------------------
    # Конструкторы (lifting)
    # -------------------------------------------------------------------------

    @classmethod
    def decimal(cls, value: int | float) -> "Number":
        return cls(NumberKind.DECIMAL, to_f64(value))

    @classmethod
    def standard_form(cls, value: StandardForm) -> "Number":
        return cls(NumberKind.STANDARD_FORM, value)

    @classmethod
    def fraction(cls, value: GenericFraction) -> "Number":
        return cls(NumberKind.FRACTION, value)

    @classmethod
    def from_value(cls, value: "Number | NumberValue | int") -> "Number":
        """
        Подъём значения любого поддерживаемого типа в Number.

        int/float → Decimal, StandardForm → StandardForm,
        GenericFraction → Fraction, Number → без изменений.

        Raises:
            TypeError: Для неподдерживаемого типа
        """
        if isinstance(value, Number):
            return value
        if _is_primitive(value):
            return cls.decimal(value)
        if isinstance(value, StandardForm):
            return cls.standard_form(value)
        if isinstance(value, GenericFraction):
            return cls.fraction(value)
        raise TypeError(f"cannot convert {type(value).__name__} to Number")

    @classmethod
    def from_str(cls, text: str) -> "Number":
        """
        Разрешающий разбор текста.

        Порядок попыток:
        1. float литерал         → Decimal
        2. дробь "n/d"           → Fraction
        3. стандартный вид       → StandardForm

        Возвращается первый успех. Порядок отличается от scan_number()
        (там дробь проверяется первой).

        Args:
            text: Исходная строка (без пробелов по краям)

        Returns:
            Разобранное число

        Raises:
            ParsingNumberError: Со всеми тремя ошибками, если ни один разбор не удался

        Examples:
            >>> Number.from_str("3.14")
            Number.decimal(3.14)
            >>> Number.from_str("1*10^-9").kind
            <NumberKind.STANDARD_FORM: 'standard_form'>
        """
        try:
            return cls.decimal(parse_decimal(text))
        except DecimalParseError as error:
            double_error = error

        try:
            return cls.fraction(GenericFraction.parse(text))
        except FractionParseError as error:
            fraction_error = error

        try:
            return cls.standard_form(StandardForm.parse(text))
        except StandardFormParseError as error:
            standard_form_error = error

        logger.debug("Text %r matched no number representation", text)
        raise ParsingNumberError(
            fraction=fraction_error,
            double=double_error,
            standard_form=standard_form_error,
        )

    # -------------------------------------------------------------------------
    # Доступ к варианту
    # -------------------------------------------------------------------------

    def is_decimal(self) -> bool:
        return self.kind is NumberKind.DECIMAL

    def is_standard_form(self) -> bool:
        return self.kind is NumberKind.STANDARD_FORM

    def is_fraction(self) -> bool:
        return self.kind is NumberKind.FRACTION

    # -------------------------------------------------------------------------
    # Конверсии
    # -------------------------------------------------------------------------

    def to_float(self) -> float:
        """
        Сужение до float.

        Каждое представление использует собственное правило конверсии;
        определено для всех вариантов (с потерей точности).
        """
        if self.kind is NumberKind.DECIMAL:
            return self.value
        return self.value.to_float()

    def __float__(self) -> float:
        return self.to_float()

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"Number.{self.kind.value}({self.value!r})"

    # -------------------------------------------------------------------------
    # Унарные операции
    # -------------------------------------------------------------------------

    def __neg__(self) -> "Number":
        return Number(self.kind, -self.value)

    def __pos__(self) -> "Number":
        return self

    # -------------------------------------------------------------------------
    # Бинарные операции
    # -------------------------------------------------------------------------

    def _binary(self, other: object, op: ArithmeticOp) -> "Number":
        if isinstance(other, Number):
            return _dispatch(self, other, op)
        if _is_primitive(other):
            return _dispatch_primitive(self, other, op)
        return NotImplemented

    def _reflected(self, other: object, op: ArithmeticOp) -> "Number":
        if _is_primitive(other):
            return _dispatch_reflected(other, self, op)
        return NotImplemented

    def _in_place(self, other: object, op: ArithmeticOp) -> "Number":
        # Примитив всегда оборачивается в Decimal, в отличие от бинарной формы
        if _is_primitive(other):
            other = Number.decimal(other)
        if isinstance(other, Number):
            return _dispatch(self, other, op)
        return NotImplemented

    def __add__(self, other: object) -> "Number":
        return self._binary(other, ArithmeticOp.ADD)

    def __sub__(self, other: object) -> "Number":
        return self._binary(other, ArithmeticOp.SUB)

    def __mul__(self, other: object) -> "Number":
        return self._binary(other, ArithmeticOp.MUL)

    def __truediv__(self, other: object) -> "Number":
        return self._binary(other, ArithmeticOp.DIV)

    def __mod__(self, other: object) -> "Number":
        return self._binary(other, ArithmeticOp.REM)

    def __radd__(self, other: object) -> "Number":
        return self._reflected(other, ArithmeticOp.ADD)

    def __rsub__(self, other: object) -> "Number":
        return self._reflected(other, ArithmeticOp.SUB)

    def __rmul__(self, other: object) -> "Number":
        return self._reflected(other, ArithmeticOp.MUL)

    def __rtruediv__(self, other: object) -> "Number":
        return self._reflected(other, ArithmeticOp.DIV)

    def __rmod__(self, other: object) -> "Number":
        return self._reflected(other, ArithmeticOp.REM)

    def __iadd__(self, other: object) -> "Number":
        return self._in_place(other, ArithmeticOp.ADD)

    def __isub__(self, other: object) -> "Number":
        return self._in_place(other, ArithmeticOp.SUB)

    def __imul__(self, other: object) -> "Number":
        return self._in_place(other, ArithmeticOp.MUL)

    def __itruediv__(self, other: object) -> "Number":
        return self._in_place(other, ArithmeticOp.DIV)

    def __imod__(self, other: object) -> "Number":
        return self._in_place(other, ArithmeticOp.REM)

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def partial_cmp(self, other: "Number | int | float") -> int | None:
        """
        Частичное сравнение.

        Args:
            other: Number или примитив

        Returns:
            -1, 0, 1 или None, если порядок не определён (NaN)
        """
        if isinstance(other, Number):
            if self.kind is other.kind:
                return _compare_same_kind(self.kind, self.value, other.value)
            return _compare_floats(self.to_float(), other.to_float())

        if _is_primitive(other):
            try:
                lifted = _lift_primitive(self.kind, other)
            except OverflowError:
                # Примитив не представим в StandardForm (экспонента вне i8)
                return _compare_floats(self.to_float(), to_f64(other))
            return _compare_same_kind(self.kind, self.value, lifted)

        raise TypeError(f"cannot compare Number with {type(other).__name__}")

    def cmp(self, other: "Number | int | float") -> int:
        """
        Полный порядок.

        Returns:
            -1, 0 или 1

        Raises:
            TotalOrderViolation: Если частичный порядок не определён (NaN).
                Это нарушение контракта, а не восстанавливаемая ошибка.
        """
        result = self.partial_cmp(other)
        if result is None:
            raise TotalOrderViolation(self, other)
        return result

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Number):
            if self.kind is other.kind:
                return self.value == other.value
            return self.to_float() == other.to_float()
        if _is_primitive(other):
            return self.partial_cmp(other) == 0
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Number) and not _is_primitive(other):
            return NotImplemented
        return self.partial_cmp(other) == -1

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Number) and not _is_primitive(other):
            return NotImplemented
        return self.partial_cmp(other) in (-1, 0)

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Number) and not _is_primitive(other):
            return NotImplemented
        return self.partial_cmp(other) == 1

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Number) and not _is_primitive(other):
            return NotImplemented
        return self.partial_cmp(other) in (1, 0)

    def __hash__(self) -> int:
        # Каждый вариант хеширует своё значение через NaN-устойчивый float hash,
        # поэтому равные Number разных вариантов дают равный hash.
        # С int hash совпадает только для |n| <= 2**53
        if self.kind is NumberKind.DECIMAL:
            return ordered_float_hash(self.value)
        return hash(self.value)

    # -------------------------------------------------------------------------
    # Pydantic
    # -------------------------------------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Number как тип поля pydantic: разбор из текста/примитива, вывод как str."""
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )

    @classmethod
    def _validate(cls, value: Any) -> "Number":
        if isinstance(value, str):
            return cls.from_str(value)
        try:
            return cls.from_value(value)
        except TypeError as error:
            raise ValueError(str(error)) from error


# Ключ сортировки по полному порядку: sorted(values, key=total_order_key)
total_order_key = functools.cmp_to_key(Number.cmp)


# =============================================================================
# ДИСПЕТЧЕРИЗАЦИЯ
# =============================================================================


def _rational_to_standard_form(fraction: GenericFraction) -> StandardForm:
    """
    Мост дробь → StandardForm.

    mantissa = ±numerator
    exponent = -(число младших нулевых бит знаменателя)

    ВНИМАНИЕ: двоичный сдвиг знаменателя используется как десятичная
    экспонента, поэтому результат точен только для знаменателя 1.
    Например, 1/2 → 1*10^-1 = 0.1, а 1/3 → 1*10^0 = 1.
    На этом поведении основана текущая арифметика StandardForm × Fraction.
    Экспонента вне [-128, 127] насыщается: знаменатель 2^200 даёт ноль.
    """
    numerator = to_f64(fraction.numer())
    mantissa = -numerator if fraction.sign is Sign.MINUS else numerator
    return StandardForm.saturating(mantissa, -trailing_zeros(fraction.denom()))


def _dispatch(lhs: Number, rhs: Number, op: ArithmeticOp) -> Number:
    """Number × Number по правилам из описания модуля."""
    if lhs.kind is rhs.kind:
        if lhs.kind is NumberKind.DECIMAL:
            return Number.decimal(_DECIMAL_OPS[op](lhs.value, rhs.value))
        return Number(lhs.kind, _REPRESENTATION_OPS[op](lhs.value, rhs.value))

    # Decimal с другим вариантом: оператор не-decimal стороны против float
    if lhs.kind is NumberKind.DECIMAL:
        return Number(rhs.kind, _REPRESENTATION_OPS[op](lhs.value, rhs.value))
    if rhs.kind is NumberKind.DECIMAL:
        return Number(lhs.kind, _REPRESENTATION_OPS[op](lhs.value, rhs.value))

    # StandardForm × Fraction (в любом порядке)
    fraction = lhs.value if lhs.kind is NumberKind.FRACTION else rhs.value
    if not fraction.is_rational():
        logger.debug(
            "Special fraction %s in %s %s %s: returning the fraction operand",
            fraction,
            lhs,
            op.value,
            rhs,
        )
        return Number.fraction(fraction)

    bridged = _rational_to_standard_form(fraction)
    if lhs.kind is NumberKind.FRACTION:
        return Number.standard_form(_REPRESENTATION_OPS[op](bridged, rhs.value))
    return Number.standard_form(_REPRESENTATION_OPS[op](lhs.value, bridged))


def _dispatch_primitive(lhs: Number, primitive: int | float, op: ArithmeticOp) -> Number:
    """Number op примитив: примитив в представлении левого операнда."""
    if lhs.kind is NumberKind.DECIMAL:
        return Number.decimal(_DECIMAL_OPS[op](lhs.value, to_f64(primitive)))
    return Number(lhs.kind, _REPRESENTATION_OPS[op](lhs.value, primitive))


def _dispatch_reflected(primitive: int | float, rhs: Number, op: ArithmeticOp) -> Number:
    """примитив op Number: примитив поднимается в представление правого операнда."""
    if rhs.kind is NumberKind.DECIMAL:
        return Number.decimal(_DECIMAL_OPS[op](to_f64(primitive), rhs.value))
    return Number(rhs.kind, _REPRESENTATION_OPS[op](primitive, rhs.value))


# =============================================================================
# СРАВНЕНИЕ
# =============================================================================


def _lift_primitive(kind: NumberKind, primitive: int | float) -> NumberValue:
    if kind is NumberKind.DECIMAL:
        return to_f64(primitive)
    if kind is NumberKind.STANDARD_FORM:
        # Вне диапазона экспоненты OverflowError, partial_cmp сравнивает через float
        return StandardForm.new(to_f64(primitive))
    return GenericFraction.from_value(primitive)


def _compare_floats(lhs: float, rhs: float) -> int | None:
    if lhs < rhs:
        return -1
    if lhs > rhs:
        return 1
    if lhs == rhs:
        return 0
    return None


def _compare_same_kind(kind: NumberKind, lhs: NumberValue, rhs: NumberValue) -> int | None:
    if kind is NumberKind.DECIMAL:
        return _compare_floats(lhs, rhs)
    return lhs.partial_cmp(rhs)
