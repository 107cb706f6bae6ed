"""
Math modules для polynum

Представления, которые ядро Number использует как чёрные ящики:
float-примитивы с IEEE-семантикой, StandardForm и GenericFraction.
"""

# Numerical Safeguards
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

# Float literal
from src.polynum.math.float_literal import (
    DecimalParseError,
    parse_decimal,
    scan_decimal,
)

# Standard Form
from src.polynum.math.standard_form import (
    EXPONENT_MARKERS,
    STANDARD_FORM_EXPONENT_MAX,
    STANDARD_FORM_EXPONENT_MIN,
    StandardForm,
    StandardFormParseError,
    StandardFormParseErrorKind,
    scan_standard_form,
)

# Fraction
from src.polynum.math.fraction import (
    FractionParseError,
    FractionParseErrorKind,
    FractionState,
    GenericFraction,
    Sign,
)

__all__ = [
    # Numerical Safeguards — Constants
    "NAN_HASH",
    "U32_MAX",
    # Numerical Safeguards — IEEE arithmetic
    "ieee_divide",
    "ieee_pow",
    "ieee_remainder",
    # Numerical Safeguards — Conversion & sign
    "to_f64",
    "is_negative",
    "is_positive",
    "trailing_zeros",
    "ordered_float_hash",
    # Float literal
    "DecimalParseError",
    "parse_decimal",
    "scan_decimal",
    # Standard Form
    "EXPONENT_MARKERS",
    "STANDARD_FORM_EXPONENT_MAX",
    "STANDARD_FORM_EXPONENT_MIN",
    "StandardForm",
    "StandardFormParseError",
    "StandardFormParseErrorKind",
    "scan_standard_form",
    # Fraction
    "FractionParseError",
    "FractionParseErrorKind",
    "FractionState",
    "GenericFraction",
    "Sign",
]
