"""
Utility modules for the vacancy engine.
"""

from .formatting import format_currency, format_date, format_days, format_percent, format_ratio
from .config import Config
from .logging import configure_logging

__all__ = [
    "format_currency",
    "format_percent",
    "format_ratio",
    "format_date",
    "format_days",
    "Config",
    "configure_logging",
]
