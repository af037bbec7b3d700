"""
Facts: models, the compendium, selectors, selection and checking.

The definition API (``fact``) lives in ``definition`` and is re-exported from
the top-level ``factual`` package.
"""
from __future__ import annotations

from .checker import FactChecker
from .compendium import Compendium
from .matching import (
    ALL,
    AllSelector,
    NamespaceSelector,
    PatternSelector,
    PredicateSelector,
    Selector,
    TagSelector,
    TextSelector,
    coerce_selector,
    matches,
    ns,
)
from .models import Fact, build_fact

__all__ = [
    "Fact",
    "build_fact",
    "Compendium",
    "FactChecker",
    "ALL",
    "Selector",
    "AllSelector",
    "NamespaceSelector",
    "TagSelector",
    "TextSelector",
    "PatternSelector",
    "PredicateSelector",
    "coerce_selector",
    "matches",
    "ns",
]
