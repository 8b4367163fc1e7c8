"""Utility modules for rulelex.

Provides:
- text: excerpt for byte-span diagnostics
- logger: get_logger for logging
"""

from rulelex.utils.logger import get_logger
from rulelex.utils.text import excerpt

__all__ = [
    "excerpt",
    "get_logger",
]
