"""
Test suite for polynum

Contains:
- tests/unit/          : Unit tests for representations, Number and the scanner
"""
