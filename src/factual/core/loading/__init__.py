"""Namespace discovery and loading."""
from __future__ import annotations

from .discovery import (
    discover_namespaces,
    ensure_importable,
    expand_namespaces,
    namespaces_in_dir,
    namespaces_with_prefix,
)
from .loader import FactLoader, reload_namespace

__all__ = [
    "FactLoader",
    "reload_namespace",
    "discover_namespaces",
    "ensure_importable",
    "expand_namespaces",
    "namespaces_in_dir",
    "namespaces_with_prefix",
]
