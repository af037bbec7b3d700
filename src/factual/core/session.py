"""
Fact sessions.

A ``FactSession`` owns one compendium, one reporter and one configuration, and
exposes the load / fetch / forget / check / recheck operations. There is no
registry global: the REPL layer keeps a default session and a ContextVar naming
the active one, so independent sessions can coexist (tests use their own).
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence, TextIO

from factual.core.config import ConfigManager, FactsConfig, FormulaConfig
from factual.core.exceptions import SelectorError
from factual.core.facts import selection
from factual.core.facts.checker import FactChecker
from factual.core.facts.compendium import Compendium
from factual.core.facts.context import current_run
from factual.core.facts.matching import (
    AllSelector,
    NamespaceSelector,
    Selector,
    coerce_selector,
    coerce_selectors,
    is_matcher,
    matches_any,
)
from factual.core.facts.models import Fact
from factual.core.loading import FactLoader
from factual.core.reporting import PrintLevel, Reporter, parse_print_level, separate_print_levels

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "__main__"


class FactSession:
    """Registry, reporter and configuration for one set of facts.

    Args:
        config: Merged configuration (loaded from ``repo_root`` when None)
        repo_root: Project root; relative search paths are resolved against it
        stream: Where report text is written (default: stdout)
        namespace: Namespace used when an operation gets no selectors
        module_loader: Imports a namespace by name (default: import or reload)
    """

    def __init__(
        self,
        config: Optional[Mapping[str, Any]] = None,
        *,
        repo_root: Optional[Path] = None,
        stream: Optional[TextIO] = None,
        namespace: str = DEFAULT_NAMESPACE,
        module_loader: Optional[Callable[[str], object]] = None,
    ) -> None:
        manager = ConfigManager(repo_root)
        self.repo_root = manager.repo_root
        self.config: Dict[str, Any] = dict(config) if config is not None else manager.load_config()
        self.facts_config = FactsConfig(self.config)
        self.formula_config = FormulaConfig(self.config)

        self.current_namespace = namespace
        self.check_on_definition = self.facts_config.check_on_definition
        self.compendium = Compendium()
        self.reporter = Reporter(self.facts_config.print_level, stream=stream)
        self.checker = FactChecker(self.compendium, self.reporter)
        self._module_loader = module_loader
        self._load_filters: Optional[List[Selector]] = None

    # ------------------------------------------------------------------
    # Activation
    # ------------------------------------------------------------------

    @contextmanager
    def activated(self) -> Iterator["FactSession"]:
        """Make this the session that ``@fact`` definitions register into."""
        token = _ACTIVE_SESSION.set(self)
        try:
            yield self
        finally:
            _ACTIVE_SESSION.reset(token)

    @property
    def search_roots(self) -> List[Path]:
        return [self.repo_root / p for p in self.facts_config.paths_to_load()]

    def _namespace(self, namespace: Optional[str]) -> str:
        return namespace or self.current_namespace

    # ------------------------------------------------------------------
    # Definition hook
    # ------------------------------------------------------------------

    def define(self, fact: Fact) -> Optional[bool]:
        """Handle a freshly defined fact.

        Inside a running fact the new fact is nested: it runs as part of the
        parent and is not registered. Otherwise it is registered (unless a load
        filter excludes it) and, if configured, checked right away.

        Returns:
            The check result, or None when the fact was not checked
        """
        if current_run() is not None:
            return self.checker.check_one(fact)

        if self._load_filters is not None and not matches_any(self._load_filters, fact):
            logger.debug("load filter skipped %s", fact.id)
            return None

        self.compendium.register(fact)
        if self.check_on_definition:
            return self.checker.check_one(fact)
        return None

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def fetch_facts(self, *selectors: Any, namespace: Optional[str] = None) -> List[Fact]:
        """Facts selected by ``selectors`` (default: the current namespace).

        Accepted selectors: ``":all"``/``ALL``, modules or ``ns("name")``,
        ``":tag"``, text, compiled regexes and predicates over metadata.
        Facts matching several selectors are returned several times.
        """
        typed = coerce_selectors(selectors)
        return selection.fetch_facts(self.compendium, typed, self._namespace(namespace))

    def forget_facts(self, *selectors: Any, namespace: Optional[str] = None) -> None:
        """Remove the selected facts from the compendium."""
        typed = coerce_selectors(selectors)
        selection.forget_facts(self.compendium, typed, self._namespace(namespace))

    def check_facts(self, *args: Any, namespace: Optional[str] = None) -> bool:
        """Check the selected facts. A print level may be mixed into ``args``."""
        level, selectors = separate_print_levels(args)
        typed = coerce_selectors(selectors)
        with self.reporter.obeying(level):
            facts = selection.fetch_facts(self.compendium, typed, self._namespace(namespace))
            return self.checker.check_many(facts)

    def check_one_fact(self, fact: Fact) -> bool:
        return self.checker.check_one(fact)

    def recheck_fact(self, print_level: Any = None) -> bool:
        """Check the last top-level fact checked again."""
        with self.reporter.obeying(print_level):
            return self.checker.recheck_last()

    rcf = recheck_fact

    def last_fact_checked(self) -> Optional[Fact]:
        return self.compendium.last_checked()

    def source_of_last_fact_checked(self) -> Optional[str]:
        last = self.last_fact_checked()
        return last.source if last is not None else None

    def load_facts(self, *args: Any) -> None:
        """Load namespaces, checking the facts they define.

        ``args`` mixes namespace specs (plain strings such as ``"pkg.t_core"``
        or ``"pkg.*"``, modules, ``ns(...)``), filters (``":tag"``, regexes,
        predicates, ``TextSelector``) and at most one print level. With no
        namespace specs every namespace under the search roots is loaded.
        Filters restrict which facts get registered and checked.
        """
        level, rest = separate_print_levels(args)
        specs, filters = self._split_load_args(rest)
        loader = FactLoader(
            self.compendium,
            self.reporter,
            self.search_roots,
            module_loader=self._module_loader,
        )
        previous = self._load_filters
        self._load_filters = filters or None
        try:
            with self.reporter.obeying(level), self.activated():
                loader.load(specs)
        finally:
            self._load_filters = previous
        return None

    def _split_load_args(self, args: Sequence[Any]) -> "tuple[List[object], List[Selector]]":
        specs: List[object] = []
        filters: List[Selector] = []
        for arg in args:
            if isinstance(arg, str) and not arg.startswith(":"):
                specs.append(arg)
                continue
            selector = coerce_selector(arg)
            if isinstance(selector, NamespaceSelector):
                specs.append(selector.namespace)
            elif isinstance(selector, AllSelector):
                continue
            elif is_matcher(selector):
                filters.append(selector)
            else:
                raise SelectorError(f"Cannot load facts with {arg!r}")
        return specs, filters

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    @property
    def print_level(self) -> PrintLevel:
        return self.reporter.level

    @print_level.setter
    def print_level(self, value: Any) -> None:
        self.reporter.level = parse_print_level(value)


_ACTIVE_SESSION: ContextVar[Optional[FactSession]] = ContextVar("_ACTIVE_SESSION", default=None)
_DEFAULT_SESSION: Optional[FactSession] = None


def default_session() -> FactSession:
    """The session used when none is active (created on first use)."""
    global _DEFAULT_SESSION
    if _DEFAULT_SESSION is None:
        _DEFAULT_SESSION = FactSession()
    return _DEFAULT_SESSION


def get_active_session() -> FactSession:
    return _ACTIVE_SESSION.get() or default_session()


def reset_default_session() -> None:
    """Test-only: drop the default session."""
    global _DEFAULT_SESSION
    _DEFAULT_SESSION = None


__all__ = [
    "FactSession",
    "default_session",
    "get_active_session",
    "reset_default_session",
]
