"""
NumberKind — тег активного представления Number
"""

from enum import Enum


class NumberKind(str, Enum):
    """Представление, хранящееся в Number"""

    DECIMAL = "decimal"
    STANDARD_FORM = "standard_form"
    FRACTION = "fraction"
