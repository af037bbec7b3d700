"""
Loading namespaces of facts.

For each namespace, in order: forget its facts, tell the reporter which
namespace is being loaded (so errors are attributed to it), then import or
reload the module. Defining facts during the import registers and checks them.
A namespace that fails to import is reported and skipped; the rest still load.
"""
from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Callable, List, Optional, Sequence

from factual.core.exceptions import LoadError
from factual.core.facts.compendium import Compendium
from factual.core.reporting import Reporter

from .discovery import discover_namespaces, ensure_importable, expand_namespaces

logger = logging.getLogger(__name__)


def reload_namespace(name: str) -> ModuleType:
    """Import ``name``, or reload it if it was imported before."""
    importlib.invalidate_caches()
    module = sys.modules.get(name)
    if module is None:
        return importlib.import_module(name)
    return importlib.reload(module)


class FactLoader:
    """Resolves namespace specs and (re)loads them.

    Args:
        compendium: Registry whose per-namespace facts are forgotten on reload
        reporter: Receives namespace transitions, load errors and the summary
        search_roots: Directories scanned for namespaces (and put on sys.path)
        module_loader: Callable importing one namespace by name
    """

    def __init__(
        self,
        compendium: Compendium,
        reporter: Reporter,
        search_roots: Sequence[Path],
        module_loader: Optional[Callable[[str], object]] = None,
    ) -> None:
        self.compendium = compendium
        self.reporter = reporter
        self.search_roots = [Path(p) for p in search_roots]
        self.module_loader = module_loader or reload_namespace

    def resolve(self, specs: Sequence[object]) -> List[str]:
        """Namespaces named by ``specs``; every discoverable one when empty."""
        if not specs:
            return discover_namespaces(self.search_roots)
        return expand_namespaces(specs, self.search_roots)

    def load_namespace(self, namespace: str) -> None:
        self.compendium.remove_namespace(namespace)
        self.reporter.report_changed_namespace(namespace)
        try:
            self.module_loader(namespace)
        except (Exception, SystemExit) as exc:
            error = LoadError(
                f"{type(exc).__name__}: {exc}",
                namespace=namespace,
                context={"exception": type(exc).__name__},
            )
            logger.warning("failed to load %s: %s", namespace, exc, exc_info=exc)
            self.reporter.report_load_error(error)

    def load(self, specs: Sequence[object]) -> None:
        """Load the namespaces named by ``specs`` and report a summary."""
        ensure_importable(self.search_roots)
        self.reporter.forget_past_results()
        namespaces = self.resolve(specs)
        logger.debug("loading %d namespace(s): %s", len(namespaces), namespaces)

        for namespace in namespaces:
            self.load_namespace(namespace)
        self.reporter.report_summary()
        return None


__all__ = ["FactLoader", "reload_namespace"]
