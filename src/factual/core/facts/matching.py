"""
Selectors and metadata matching.

A selector decides which facts an operation (fetch, forget, check) applies to.
The core only ever sees the typed variants defined here; ``coerce_selector``
turns the loosely typed values users type at the REPL (``":slow"``,
``"addition"``, ``re.compile(...)``, a module, a function) into one of them.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from types import ModuleType
from typing import Any, Callable, Iterable, List, Mapping, Pattern, Union

from factual.core.exceptions import SelectorError

from .models import Fact


class _AllSentinel:
    """The ``:all`` marker."""

    _instance: "_AllSentinel | None" = None

    def __new__(cls) -> "_AllSentinel":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return ":all"


ALL = _AllSentinel()

ALL_KEYWORD = ":all"
TAG_PREFIX = ":"


@dataclass(frozen=True)
class AllSelector:
    """Every fact in the compendium."""


@dataclass(frozen=True)
class NamespaceSelector:
    """Every fact defined in one namespace, unfiltered."""

    namespace: str


@dataclass(frozen=True)
class TagSelector:
    """Facts whose metadata has a truthy value for ``key``."""

    key: str


@dataclass(frozen=True)
class TextSelector:
    """Facts whose name (or docstring) contains ``text``."""

    text: str


@dataclass(frozen=True)
class PatternSelector:
    """Facts whose name (or docstring) has a match for ``pattern``."""

    pattern: Pattern[str]


@dataclass(frozen=True)
class PredicateSelector:
    """Facts for which ``predicate(metadata)`` is truthy."""

    predicate: Callable[[Mapping[str, Any]], Any]


Selector = Union[
    AllSelector,
    NamespaceSelector,
    TagSelector,
    TextSelector,
    PatternSelector,
    PredicateSelector,
]

MatcherSelector = (TagSelector, TextSelector, PatternSelector, PredicateSelector)
_SELECTOR_TYPES = (AllSelector, NamespaceSelector) + MatcherSelector


def ns(name: Union[str, ModuleType]) -> NamespaceSelector:
    """Refer to a namespace by name, e.g. ``ns("pkg.t_core")``."""
    if isinstance(name, ModuleType):
        return NamespaceSelector(name.__name__)
    if not isinstance(name, str) or not name.strip():
        raise SelectorError(f"Namespace name must be a non-empty string, got {name!r}")
    return NamespaceSelector(name.strip())


def is_matcher(selector: Selector) -> bool:
    """True for selectors that filter on name or metadata."""
    return isinstance(selector, MatcherSelector)


def coerce_selector(value: Any) -> Selector:
    """Build a typed selector from a user-supplied value.

    Resolution order:
        1. selector instances are returned unchanged
        2. ``ALL`` or ``":all"`` -> AllSelector
        3. modules -> NamespaceSelector
        4. ``":key"`` -> TagSelector, other strings -> TextSelector,
           compiled regexes -> PatternSelector, callables -> PredicateSelector

    Raises:
        SelectorError: if the value has no selector interpretation
    """
    if isinstance(value, _SELECTOR_TYPES):
        return value
    if value is ALL or value == ALL_KEYWORD:
        return AllSelector()
    if isinstance(value, ModuleType):
        return NamespaceSelector(value.__name__)
    if isinstance(value, str):
        if value.startswith(TAG_PREFIX) and len(value) > 1:
            return TagSelector(value[1:])
        return TextSelector(value)
    if isinstance(value, re.Pattern):
        return PatternSelector(value)
    if callable(value):
        return PredicateSelector(value)
    raise SelectorError(
        f"Cannot select facts with {value!r}",
        context={"type": type(value).__name__},
    )


def coerce_selectors(values: Iterable[Any]) -> List[Selector]:
    """Coerce every value, failing before anything is modified."""
    return [coerce_selector(v) for v in values]


def matches(selector: Selector, fact: Fact) -> bool:
    """Decide whether ``fact`` is selected by ``selector``.

    Predicate exceptions propagate to the caller.
    """
    if isinstance(selector, AllSelector):
        return True
    if isinstance(selector, NamespaceSelector):
        return fact.namespace == selector.namespace
    if isinstance(selector, TagSelector):
        return bool(fact.metadata.get(selector.key))
    if isinstance(selector, TextSelector):
        name = fact.display_name
        return name is not None and selector.text in name
    if isinstance(selector, PatternSelector):
        name = fact.display_name
        return name is not None and selector.pattern.search(name) is not None
    if isinstance(selector, PredicateSelector):
        return bool(selector.predicate(fact.metadata))
    raise SelectorError(f"Unknown selector {selector!r}")


def matches_any(selectors: Iterable[Selector], fact: Fact) -> bool:
    return any(matches(s, fact) for s in selectors)


__all__ = [
    "ALL",
    "AllSelector",
    "NamespaceSelector",
    "TagSelector",
    "TextSelector",
    "PatternSelector",
    "PredicateSelector",
    "Selector",
    "ns",
    "is_matcher",
    "coerce_selector",
    "coerce_selectors",
    "matches",
    "matches_any",
]
