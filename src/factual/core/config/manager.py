"""
Configuration management (YAML layers, environment overrides, JSON Schema).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

import jsonschema
import yaml

from factual.core.exceptions import ConfigurationError
from factual.core.utils.yaml_io import merge_yaml_directory
from factual.data import get_data_path, read_json

logger = logging.getLogger(__name__)

ENV_PREFIX = "FACTUAL_"
PROJECT_CONFIG_DIRNAME = ".factual"
_ROOT_MARKERS = (PROJECT_CONFIG_DIRNAME, "pyproject.toml", "setup.cfg", ".git")


def find_project_root(start: Optional[Path] = None) -> Path:
    """Walk up from ``start`` (default: cwd) to the nearest project marker.

    Falls back to ``start`` itself when no marker is found.
    """
    origin = Path(start or Path.cwd()).resolve()
    for candidate in (origin, *origin.parents):
        if any((candidate / marker).exists() for marker in _ROOT_MARKERS):
            return candidate
    return origin


class ConfigManager:
    """Load, merge, and validate factual configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: FACTUAL_<section>__<key>
    2. Project config: <repo>/.factual/config/*.yaml (alphabetical order)
    3. Bundled defaults: factual.data/config/*.yaml (alphabetical order)
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root) if repo_root else find_project_root()
        self.core_config_dir = get_data_path("config")
        self.project_config_dir = self.repo_root / PROJECT_CONFIG_DIRNAME / "config"

    # ------------------------------------------------------------------
    # Environment overrides
    # ------------------------------------------------------------------

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str) -> List[str]:
        segs = raw.split("__") if "__" in raw else raw.split("_")
        if any(seg == "" for seg in segs):
            raise ConfigurationError(
                f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.",
                context={"key": ENV_PREFIX + raw},
            )
        return segs

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            if not raw:
                continue
            yield self._parse_env_key(raw), self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur: Dict[str, Any] = root
        for part in path[:-1]:
            # Case-insensitive match against existing keys so FACTUAL_facts__printlevel
            # lands on facts.printLevel.
            key = {k.lower(): k for k in cur}.get(part.lower(), part)
            nxt = cur.setdefault(key, {})
            if not isinstance(nxt, dict):
                raise ConfigurationError(f"Cannot override below non-mapping key '{key}'")
            cur = nxt
        leaf = {k.lower(): k for k in cur}.get(path[-1].lower(), path[-1])
        cur[leaf] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            logger.debug("config override from environment: %s", ".".join(path))
            self._set_nested(cfg, path, typed_value)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def validate_schema(self, config: Dict[str, Any]) -> None:
        schema = read_json("schemas", "config.schema.json")
        try:
            jsonschema.validate(config, schema)
        except jsonschema.ValidationError as exc:
            location = ".".join(str(p) for p in exc.absolute_path) or "<root>"
            raise ConfigurationError(
                f"Invalid configuration at {location}: {exc.message}",
                context={"path": location},
            ) from exc

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load and merge configuration from every layer.

        Args:
            validate: If True, validate against the bundled JSON schema

        Returns:
            Merged configuration dictionary
        """
        cfg: Dict[str, Any] = {}
        try:
            cfg = merge_yaml_directory(cfg, self.core_config_dir)
            cfg = merge_yaml_directory(cfg, self.project_config_dir)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            raise ConfigurationError(str(exc), context={"repo_root": str(self.repo_root)}) from exc

        self.apply_env_overrides(cfg)

        if validate:
            self.validate_schema(cfg)
        return cfg


def load_config(repo_root: Optional[Union[str, Path]] = None, validate: bool = True) -> Dict[str, Any]:
    """Shortcut for ``ConfigManager(repo_root).load_config()``."""
    return ConfigManager(Path(repo_root) if repo_root else None).load_config(validate=validate)


__all__ = ["ConfigManager", "find_project_root", "load_config"]
