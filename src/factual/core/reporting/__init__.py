"""Reporting collaborator: print levels and the reporter."""
from __future__ import annotations

from .levels import PrintLevel, is_print_level, parse_print_level, separate_print_levels
from .reporter import Reporter

__all__ = [
    "PrintLevel",
    "is_print_level",
    "parse_print_level",
    "separate_print_levels",
    "Reporter",
]
