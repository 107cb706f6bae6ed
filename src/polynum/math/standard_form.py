"""
StandardForm — число в стандартном виде (mantissa × 10^exponent)

Immutable Pydantic модель. Мантисса нормализуется так, что
1 <= |mantissa| < 10, экспонента — знаковое 8-битное целое.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Экземпляры создаются через new() или saturating(): только они нормализуют
2. Ноль хранится как (0.0, 0)
3. Нефинитная мантисса (inf/NaN) хранится без нормализации
4. Выход экспоненты за [-128, 127]:
   - new() и разбор текста → OverflowError / EXPONENT_OUT_OF_RANGE
   - арифметика и from_value() насыщаются (±inf или 0), исключений нет
5. Грамматики принимают только ASCII-цифры

ТЕКСТОВЫЕ ФОРМЫ:
    "1.5"          plain float (экспонента не обязательна)
    "1.5e3"        e-нотация
    "1.5*10^3"     явный множитель (также "x10^")
"""

import math
import re
from enum import Enum
from typing import Final

from pydantic import BaseModel, Field

from src.polynum.math.numerical_safeguards import (
    ieee_divide,
    ieee_pow,
    ieee_remainder,
    is_negative,
    is_positive,
    ordered_float_hash,
    to_f64,
)

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

STANDARD_FORM_EXPONENT_MIN: Final[int] = -128
STANDARD_FORM_EXPONENT_MAX: Final[int] = 127

# Маркеры экспоненты в порядке проверки
EXPONENT_MARKERS: Final[tuple[str, ...]] = ("*10^", "x10^", "e", "E")

_MANTISSA_PATTERN: Final[str] = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)"
_EXPONENT_PATTERN: Final[str] = r"[+-]?\d+"


def _build_pattern(markers: tuple[str, ...], exponent_required: bool) -> re.Pattern[str]:
    marker_alternatives = "|".join(re.escape(marker) for marker in markers)
    quantifier = "" if exponent_required else "?"
    return re.compile(
        rf"(?P<mantissa>{_MANTISSA_PATTERN})"
        rf"(?:(?:{marker_alternatives})(?P<exponent>{_EXPONENT_PATTERN})){quantifier}",
        re.ASCII,
    )


_OPTIONAL_EXPONENT_RE = _build_pattern(EXPONENT_MARKERS, exponent_required=False)
_REQUIRED_EXPONENT_RE = _build_pattern(EXPONENT_MARKERS, exponent_required=True)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class StandardFormParseErrorKind(str, Enum):
    """Причина отказа разбора StandardForm"""

    EMPTY = "empty"
    INVALID_FORMAT = "invalid_format"
    MISSING_EXPONENT = "missing_exponent"
    EXPONENT_OUT_OF_RANGE = "exponent_out_of_range"


class StandardFormParseError(ValueError):
    """Текст не является числом в стандартном виде."""

    def __init__(self, text: str, kind: StandardFormParseErrorKind):
        self.text = text
        self.kind = kind
        super().__init__(f"cannot parse standard form from {text!r}: {kind.value}")


# =============================================================================
# STANDARD FORM MODEL
# =============================================================================


class StandardForm(BaseModel):
    """
    Число в стандартном виде: mantissa × 10^exponent.

    Immutable модель (frozen=True). Все арифметические операции
    возвращают новый нормализованный экземпляр.
    """

    mantissa: float = Field(..., description="Мантисса, 1 <= |mantissa| < 10 (или 0)")
    exponent: int = Field(
        ...,
        ge=STANDARD_FORM_EXPONENT_MIN,
        le=STANDARD_FORM_EXPONENT_MAX,
        description="Десятичная экспонента (signed 8-bit)",
    )

    model_config = {"frozen": True}

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def new(cls, mantissa: float, exponent: int = 0) -> "StandardForm":
        """
        Нормализующий конструктор.

        Args:
            mantissa: Произвольная мантисса
            exponent: Исходная экспонента

        Returns:
            StandardForm с 1 <= |mantissa| < 10

        Raises:
            OverflowError: Если итоговая экспонента вне [-128, 127]

        Examples:
            >>> StandardForm.new(1500.0, 0)
            StandardForm(mantissa=1.5, exponent=3)
            >>> StandardForm.new(0.0, 7)
            StandardForm(mantissa=0.0, exponent=0)
        """
        mantissa, exponent = _normalize(float(mantissa), exponent)

        if not STANDARD_FORM_EXPONENT_MIN <= exponent <= STANDARD_FORM_EXPONENT_MAX:
            raise OverflowError(
                f"standard form exponent {exponent} out of range "
                f"[{STANDARD_FORM_EXPONENT_MIN}, {STANDARD_FORM_EXPONENT_MAX}]"
            )

        return cls(mantissa=mantissa, exponent=exponent)

    @classmethod
    def saturating(cls, mantissa: float, exponent: int = 0) -> "StandardForm":
        """
        Нормализующий конструктор без исключений.

        Используется арифметикой и конверсией примитивов. Выход экспоненты
        за диапазон ведёт себя как переполнение float:
        - экспонента > 127 → мантисса ±inf
        - экспонента < -128 → ноль

        Examples:
            >>> StandardForm.saturating(2.0, 200)
            StandardForm(mantissa=inf, exponent=0)
            >>> StandardForm.saturating(5e-324)
            StandardForm(mantissa=0.0, exponent=0)
        """
        mantissa, exponent = _normalize(float(mantissa), exponent)

        if not math.isfinite(mantissa):
            return cls(mantissa=mantissa, exponent=_clamp_exponent(exponent))
        if exponent > STANDARD_FORM_EXPONENT_MAX:
            return cls(mantissa=math.copysign(math.inf, mantissa), exponent=0)
        if exponent < STANDARD_FORM_EXPONENT_MIN:
            return cls(mantissa=0.0, exponent=0)
        return cls(mantissa=mantissa, exponent=exponent)

    @classmethod
    def from_value(cls, value: int | float) -> "StandardForm":
        """
        Конверсия примитива (int/float) в StandardForm.

        Значения вне диапазона экспоненты насыщаются (см. saturating()):
        1e200 → inf, 5e-324 → 0.
        """
        return cls.saturating(to_f64(value), 0)

    @classmethod
    def parse(cls, text: str) -> "StandardForm":
        """
        Разбор строки целиком.

        Экспонента не обязательна: "12.5" разбирается как 1.25*10^1.

        Raises:
            StandardFormParseError: Если строка не является числом в стандартном виде
        """
        if not text:
            raise StandardFormParseError(text, StandardFormParseErrorKind.EMPTY)

        match = _OPTIONAL_EXPONENT_RE.fullmatch(text)
        if match is None:
            raise StandardFormParseError(text, StandardFormParseErrorKind.INVALID_FORMAT)

        return _from_match(match, text)

    # -------------------------------------------------------------------------
    # Конверсии
    # -------------------------------------------------------------------------

    def to_float(self) -> float:
        """
        Значение как float.

        Вычисляется через десятичный литерал, чтобы получить корректно
        округлённый результат (10.0 ** -9 не всегда точен).
        """
        return _shift_decimal(self.mantissa, self.exponent)

    def __float__(self) -> float:
        return self.to_float()

    def __str__(self) -> str:
        return f"{self.mantissa!r}*10^{self.exponent}"

    # -------------------------------------------------------------------------
    # Знак
    # -------------------------------------------------------------------------

    def is_positive(self) -> bool:
        return is_positive(self.mantissa)

    def is_negative(self) -> bool:
        return is_negative(self.mantissa)

    def __neg__(self) -> "StandardForm":
        if self.mantissa == 0.0:
            return self
        return StandardForm(mantissa=-self.mantissa, exponent=self.exponent)

    def __abs__(self) -> "StandardForm":
        return StandardForm(mantissa=abs(self.mantissa), exponent=self.exponent)

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def __add__(self, other: "StandardForm | int | float") -> "StandardForm":
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return _aligned_sum(self, other)

    def __radd__(self, other: int | float) -> "StandardForm":
        lifted = _coerce(other)
        if lifted is None:
            return NotImplemented
        return _aligned_sum(lifted, self)

    def __sub__(self, other: "StandardForm | int | float") -> "StandardForm":
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return _aligned_sum(self, -other)

    def __rsub__(self, other: int | float) -> "StandardForm":
        lifted = _coerce(other)
        if lifted is None:
            return NotImplemented
        return _aligned_sum(lifted, -self)

    def __mul__(self, other: "StandardForm | int | float") -> "StandardForm":
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return StandardForm.saturating(
            self.mantissa * other.mantissa, self.exponent + other.exponent
        )

    def __rmul__(self, other: int | float) -> "StandardForm":
        return self.__mul__(other)

    def __truediv__(self, other: "StandardForm | int | float") -> "StandardForm":
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return _quotient(self, other)

    def __rtruediv__(self, other: int | float) -> "StandardForm":
        lifted = _coerce(other)
        if lifted is None:
            return NotImplemented
        return _quotient(lifted, self)

    def __mod__(self, other: "StandardForm | int | float") -> "StandardForm":
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return StandardForm.from_value(ieee_remainder(self.to_float(), other.to_float()))

    def __rmod__(self, other: int | float) -> "StandardForm":
        lifted = _coerce(other)
        if lifted is None:
            return NotImplemented
        return lifted.__mod__(self)

    def __pow__(self, other: "StandardForm | int | float") -> "StandardForm":
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return StandardForm.from_value(ieee_pow(self.to_float(), other.to_float()))

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def partial_cmp(self, other: "StandardForm") -> int | None:
        """
        Частичное сравнение.

        Returns:
            -1, 0, 1 или None, если мантисса одной из сторон NaN
        """
        if self == other:
            return 0
        lhs, rhs = self.to_float(), other.to_float()
        if lhs < rhs:
            return -1
        if lhs > rhs:
            return 1
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StandardForm):
            return NotImplemented
        return self.mantissa == other.mantissa and self.exponent == other.exponent

    def __hash__(self) -> int:
        return ordered_float_hash(self.to_float())

    def __lt__(self, other: "StandardForm") -> bool:
        if not isinstance(other, StandardForm):
            return NotImplemented
        return self.partial_cmp(other) == -1

    def __le__(self, other: "StandardForm") -> bool:
        if not isinstance(other, StandardForm):
            return NotImplemented
        return self.partial_cmp(other) in (-1, 0)

    def __gt__(self, other: "StandardForm") -> bool:
        if not isinstance(other, StandardForm):
            return NotImplemented
        return self.partial_cmp(other) == 1

    def __ge__(self, other: "StandardForm") -> bool:
        if not isinstance(other, StandardForm):
            return NotImplemented
        return self.partial_cmp(other) in (1, 0)


# =============================================================================
# РАЗБОР С ОБЯЗАТЕЛЬНОЙ ЭКСПОНЕНТОЙ
# =============================================================================


def scan_standard_form(
    text: str,
    markers: tuple[str, ...] = EXPONENT_MARKERS,
) -> tuple[StandardForm, str]:
    """
    Разбор StandardForm в начале строки с обязательным маркером экспоненты.

    Args:
        text: Исходная строка
        markers: Допустимые маркеры экспоненты

    Returns:
        (значение, неразобранный остаток)

    Raises:
        StandardFormParseError: Если строка не начинается с числа с экспонентой

    Examples:
        >>> scan_standard_form("1*10^-9 m")
        (StandardForm(mantissa=1.0, exponent=-9), ' m')
    """
    if not text:
        raise StandardFormParseError(text, StandardFormParseErrorKind.EMPTY)

    pattern = (
        _REQUIRED_EXPONENT_RE
        if markers == EXPONENT_MARKERS
        else _build_pattern(markers, exponent_required=True)
    )
    match = pattern.match(text)
    if match is None:
        raise StandardFormParseError(text, StandardFormParseErrorKind.MISSING_EXPONENT)

    return _from_match(match, text), text[match.end():]


# =============================================================================
# ВНУТРЕННИЕ ФУНКЦИИ
# =============================================================================


def _shift_decimal(value: float, places: int) -> float:
    """value × 10^places через десятичный литерал (без накопления ошибки)."""
    if not math.isfinite(value):
        return value
    digits, _, exponent = repr(value).partition("e")
    if exponent:
        places += int(exponent)
    return float(f"{digits}e{places}")


def _normalize(mantissa: float, exponent: int) -> tuple[float, int]:
    """Приведение к 1 <= |mantissa| < 10 без проверки диапазона экспоненты."""
    if mantissa == 0.0:
        return 0.0, 0
    if not math.isfinite(mantissa):
        return mantissa, exponent

    shift = math.floor(math.log10(abs(mantissa)))
    mantissa = _shift_decimal(mantissa, -shift)
    exponent += shift

    # log10 может промахнуться на единицу у границ степеней 10
    while abs(mantissa) >= 10.0:
        mantissa = _shift_decimal(mantissa, -1)
        exponent += 1
    while abs(mantissa) < 1.0:
        mantissa = _shift_decimal(mantissa, 1)
        exponent -= 1

    return mantissa, exponent


def _clamp_exponent(exponent: int) -> int:
    return max(STANDARD_FORM_EXPONENT_MIN, min(exponent, STANDARD_FORM_EXPONENT_MAX))


def _from_match(match: re.Match[str], text: str) -> StandardForm:
    mantissa = float(match.group("mantissa"))
    exponent_text = match.group("exponent")
    exponent = int(exponent_text) if exponent_text is not None else 0
    try:
        return StandardForm.new(mantissa, exponent)
    except OverflowError:
        raise StandardFormParseError(
            text, StandardFormParseErrorKind.EXPONENT_OUT_OF_RANGE
        ) from None


def _coerce(value: object) -> StandardForm | None:
    if isinstance(value, StandardForm):
        return value
    if isinstance(value, (int, float)):
        return StandardForm.from_value(value)
    return None


def _aligned_sum(lhs: StandardForm, rhs: StandardForm) -> StandardForm:
    """Сумма с выравниванием по большей экспоненте."""
    max_exponent = max(lhs.exponent, rhs.exponent)
    total = _shift_decimal(lhs.mantissa, lhs.exponent - max_exponent) + _shift_decimal(
        rhs.mantissa, rhs.exponent - max_exponent
    )
    return StandardForm.saturating(total, max_exponent)


def _quotient(lhs: StandardForm, rhs: StandardForm) -> StandardForm:
    return StandardForm.saturating(
        ieee_divide(lhs.mantissa, rhs.mantissa), lhs.exponent - rhs.exponent
    )
