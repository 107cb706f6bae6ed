"""
Parsing: грамматический сканер числовых литералов.

Разрешающий разбор целой строки — Number.from_str().
"""

from .scanner import NumberScanError, NumberScanner, ScannerConfig, ScanResult, scan_number

__all__ = [
    "NumberScanner",
    "NumberScanError",
    "ScannerConfig",
    "ScanResult",
    "scan_number",
]
