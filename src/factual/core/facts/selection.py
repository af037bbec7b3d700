"""
Resolving selectors into facts.

``fetch_facts`` returns the union of the per-selector results, in argument
order, without removing duplicates: a fact selected by two arguments is
returned twice, and so is checked or counted twice by callers.
"""
from __future__ import annotations

import logging
from typing import List, Sequence

from .compendium import Compendium
from .matching import (
    AllSelector,
    NamespaceSelector,
    Selector,
    matches,
)
from .models import Fact

logger = logging.getLogger(__name__)


def _default_selectors(selectors: Sequence[Selector], current_namespace: str) -> Sequence[Selector]:
    if selectors:
        return selectors
    return [NamespaceSelector(current_namespace)]


def select(compendium: Compendium, selector: Selector) -> List[Fact]:
    """Facts matched by a single selector, in registry order."""
    if isinstance(selector, AllSelector):
        return compendium.all_facts()
    if isinstance(selector, NamespaceSelector):
        return compendium.facts_in_namespace(selector.namespace)
    return [f for f in compendium.all_facts() if matches(selector, f)]


def fetch_facts(
    compendium: Compendium,
    selectors: Sequence[Selector],
    current_namespace: str,
) -> List[Fact]:
    """Resolve ``selectors`` against the whole compendium.

    Args:
        compendium: Registry to read from
        selectors: Typed selectors; empty means the current namespace
        current_namespace: Namespace the caller is working in

    Returns:
        Concatenation of each selector's matches, duplicates included
    """
    result: List[Fact] = []
    for selector in _default_selectors(selectors, current_namespace):
        result.extend(select(compendium, selector))
    logger.debug("fetched %d fact(s) for %r", len(result), list(selectors))
    return result


def forget_facts(
    compendium: Compendium,
    selectors: Sequence[Selector],
    current_namespace: str,
) -> None:
    """Remove the selected facts from the compendium."""
    for selector in _default_selectors(selectors, current_namespace):
        if isinstance(selector, AllSelector):
            compendium.reset_all()
        elif isinstance(selector, NamespaceSelector):
            compendium.remove_namespace(selector.namespace)
        else:
            for fact in select(compendium, selector):
                compendium.remove(fact)


__all__ = ["select", "fetch_facts", "forget_facts"]
