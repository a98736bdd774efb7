"""Message formatting: pattern parsing, plural rules and number formatting."""

from .formatter import MessageFormatter
from .numbers import format_number
from .parser import argument_names, parse_pattern
from .plurals import PLURAL_CATEGORIES, plural_category

__all__ = [
    "MessageFormatter",
    "PLURAL_CATEGORIES",
    "argument_names",
    "format_number",
    "parse_pattern",
    "plural_category",
]
