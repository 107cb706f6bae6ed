"""
Domain: тип Number и его ошибки.
"""

from src.polynum.domain.errors import ParsingNumberError, TotalOrderViolation
from src.polynum.domain.kind import NumberKind
from src.polynum.domain.num_traits import NumTraits
from src.polynum.domain.number import ArithmeticOp, Number, total_order_key

__all__ = [
    # Number
    "Number",
    "NumberKind",
    "ArithmeticOp",
    "total_order_key",
    # Numeric traits
    "NumTraits",
    # Errors
    "ParsingNumberError",
    "TotalOrderViolation",
]
