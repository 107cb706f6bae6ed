"""
polynum — единый числовой тип над float, стандартным видом и дробями.

Пакет не зависит от внешних систем: все значения immutable,
все операции синхронные и без побочных эффектов.
"""

from src.polynum.domain import (
    Number,
    NumberKind,
    NumTraits,
    ParsingNumberError,
    TotalOrderViolation,
    total_order_key,
)
from src.polynum.math import (
    DecimalParseError,
    FractionParseError,
    FractionState,
    GenericFraction,
    Sign,
    StandardForm,
    StandardFormParseError,
)
from src.polynum.parsing import (
    NumberScanError,
    NumberScanner,
    ScannerConfig,
    ScanResult,
    scan_number,
)

__all__ = [
    # Value type
    "Number",
    "NumberKind",
    "NumTraits",
    "total_order_key",
    # Representations
    "StandardForm",
    "GenericFraction",
    "FractionState",
    "Sign",
    # Parsing
    "NumberScanner",
    "ScannerConfig",
    "ScanResult",
    "scan_number",
    # Errors
    "ParsingNumberError",
    "TotalOrderViolation",
    "NumberScanError",
    "DecimalParseError",
    "FractionParseError",
    "StandardFormParseError",
]
