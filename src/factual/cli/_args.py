"""Common CLI argument registration and parsing helpers."""
from __future__ import annotations

import argparse
import re
from pathlib import Path
from typing import Any, List, Optional

from factual.core.facts.matching import Selector, TagSelector, TextSelector, PatternSelector


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--repo-root",
        type=str,
        help="Override project root path",
    )


def add_namespace_args(parser: argparse.ArgumentParser) -> None:
    """Positional namespaces plus the --filter/--pattern selectors."""
    parser.add_argument(
        "namespaces",
        nargs="*",
        help="Namespaces to load; 'pkg.*' loads every namespace under pkg (default: all under the test paths)",
    )
    parser.add_argument(
        "--filter",
        dest="filters",
        action="append",
        default=[],
        metavar="SELECTOR",
        help="Only facts matching: ':tag' (truthy metadata) or text contained in the name (repeatable)",
    )
    parser.add_argument(
        "--pattern",
        dest="patterns",
        action="append",
        default=[],
        metavar="REGEX",
        help="Only facts whose name matches REGEX (repeatable)",
    )


def add_print_level_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--print-level",
        type=str,
        default=None,
        help="nothing, no-summary, normally, namespaces or facts",
    )


def selectors_from_args(args: argparse.Namespace) -> List[Selector]:
    """Typed selectors for the --filter and --pattern values."""
    selectors: List[Selector] = []
    for raw in getattr(args, "filters", None) or []:
        if raw.startswith(":") and len(raw) > 1:
            selectors.append(TagSelector(raw[1:]))
        else:
            selectors.append(TextSelector(raw))
    for raw in getattr(args, "patterns", None) or []:
        selectors.append(PatternSelector(re.compile(raw)))
    return selectors


def get_repo_root(args: Any) -> Optional[Path]:
    raw = getattr(args, "repo_root", None)
    return Path(raw).expanduser().resolve() if raw else None


__all__ = [
    "add_json_flag",
    "add_repo_root_flag",
    "add_namespace_args",
    "add_print_level_flag",
    "selectors_from_args",
    "get_repo_root",
]
