"""Utility modules for Pluma.

Provides:
- logger: get_logger for namespaced logging
- text: blank-line and character class helpers shared by the grammar
"""

from pluma.utils.logger import get_logger
from pluma.utils.text import is_blank, strip_closing_hashes

__all__ = [
    "get_logger",
    "is_blank",
    "strip_closing_hashes",
]
