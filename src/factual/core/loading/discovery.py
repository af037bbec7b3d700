"""
Namespace discovery.

A namespace is an importable module name. Namespaces are found either by
scanning directories for ``.py`` files (names relative to the directory, which
is put on ``sys.path`` before loading) or by scanning a package's directories
on ``sys.path``. Discovery never imports anything.
"""
from __future__ import annotations

import logging
import pkgutil
import sys
from pathlib import Path
from typing import Iterable, List, Sequence

from factual.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

WILDCARD = "*"


def _skipped(part: str) -> bool:
    return part.startswith(".") or part == "__pycache__"


def namespaces_in_dir(directory: Path) -> List[str]:
    """Every module under ``directory`` as a dotted name, sorted.

    Package ``__init__.py`` files yield the package name. Files whose path is
    not a valid dotted name are ignored.
    """
    root = Path(directory)
    if not root.is_dir():
        return []

    names = set()
    for path in root.rglob("*.py"):
        rel = path.relative_to(root).with_suffix("")
        parts = list(rel.parts)
        if any(_skipped(p) for p in parts):
            continue
        if parts[-1] == "__init__":
            parts = parts[:-1]
            if not parts:
                continue
        if not all(p.isidentifier() for p in parts):
            continue
        names.add(".".join(parts))
    return sorted(names)


def ensure_importable(directories: Iterable[Path]) -> None:
    """Put each existing directory on ``sys.path`` (once)."""
    for directory in directories:
        d = str(Path(directory).resolve())
        if Path(d).is_dir() and d not in sys.path:
            sys.path.insert(0, d)


def _package_dirs(package_name: str) -> List[Path]:
    """Directories holding the submodules of ``package_name``.

    Found on ``sys.path`` without importing the package, so no package code
    runs while namespaces are being resolved.
    """
    loaded = sys.modules.get(package_name)
    if loaded is not None:
        return [Path(p) for p in getattr(loaded, "__path__", None) or []]
    parts = package_name.split(".")
    dirs: List[Path] = []
    for entry in sys.path:
        candidate = Path(entry or ".").joinpath(*parts)
        if candidate.is_dir() and candidate not in dirs:
            dirs.append(candidate)
    return dirs


def _walk_package(package_name: str) -> List[str]:
    names = set()
    for directory in _package_dirs(package_name):
        names.update(f"{package_name}.{n}" for n in namespaces_in_dir(directory))
    logger.debug("found %d submodule(s) of %s", len(names), package_name)
    return sorted(names)


def namespaces_with_prefix(prefix: str, search_roots: Sequence[Path]) -> List[str]:
    """Every discoverable namespace whose name starts with ``prefix``, sorted.

    Searches the given roots and, when the prefix names a package (or the start
    of a top-level package name), the installed packages as well.
    """
    found = set()
    for root in search_roots:
        found.update(n for n in namespaces_in_dir(root) if n.startswith(prefix))

    parent, _, _ = prefix.rpartition(".")
    if parent:
        found.update(n for n in _walk_package(parent) if n.startswith(prefix))
    elif prefix:
        for info in pkgutil.iter_modules():
            if not info.name.startswith(prefix):
                continue
            found.add(info.name)
            if info.ispkg:
                found.update(_walk_package(info.name))
    return sorted(found)


def expand_namespaces(specs: Iterable[object], search_roots: Sequence[Path]) -> List[str]:
    """Expand namespace specs, in order.

    A spec ending in ``*`` expands to every namespace sharing the prefix before
    it; any other spec (a string or a module) is a single namespace.
    """
    result: List[str] = []
    for spec in specs:
        name = getattr(spec, "__name__", None) if not isinstance(spec, str) else spec
        if not isinstance(name, str) or not name:
            raise ConfigurationError(f"Not a namespace: {spec!r}", context={"spec": repr(spec)})
        if name.endswith(WILDCARD):
            result.extend(namespaces_with_prefix(name[:-1], search_roots))
        else:
            result.append(name)
    return result


def discover_namespaces(search_roots: Sequence[Path]) -> List[str]:
    """Every namespace under the search roots, root by root."""
    result: List[str] = []
    for root in search_roots:
        result.extend(namespaces_in_dir(root))
    return result


__all__ = [
    "WILDCARD",
    "namespaces_in_dir",
    "namespaces_with_prefix",
    "expand_namespaces",
    "discover_namespaces",
    "ensure_importable",
]
