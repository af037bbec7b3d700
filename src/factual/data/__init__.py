"""
Bundled data files: default configuration and the configuration schema.

Accessed through importlib.resources so the package works from a wheel.
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """
    Get absolute path to a data file or directory.

    Example:
        >>> get_data_path("config", "facts.yaml")
        PosixPath('/path/to/factual/data/config/facts.yaml')
    """
    pkg = resources.files("factual.data")
    base = Path(str(pkg / subpackage))
    return base / filename if filename else base


@lru_cache(maxsize=16)
def read_json(subpackage: str, filename: str) -> dict[str, Any]:
    """Read and parse a JSON data file (cached)."""
    path = get_data_path(subpackage, filename)
    return json.loads(path.read_text(encoding="utf-8"))


__all__ = ["get_data_path", "read_json"]
