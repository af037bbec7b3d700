"""Base class for domain-specific configuration accessors.

Each accessor wraps one top-level section of the merged configuration:

    class MyConfig(BaseDomainConfig):
        def _config_section(self) -> str:
            return "mySection"

        @cached_property
        def my_setting(self) -> str:
            return self.section.get("mySetting", "default")
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .manager import ConfigManager


class BaseDomainConfig(ABC):
    """Abstract base class for domain-specific configuration accessors."""

    def __init__(
        self,
        config: Optional[Mapping[str, Any]] = None,
        *,
        repo_root: Optional[Path] = None,
    ) -> None:
        """
        Args:
            config: Already merged configuration. Loaded from ``repo_root``
                (or the detected project root) when None.
            repo_root: Project root used when ``config`` is None.
        """
        if config is None:
            config = ConfigManager(repo_root).load_config()
        self._config: Dict[str, Any] = dict(config)

    @abstractmethod
    def _config_section(self) -> str:
        """Return the top-level config key for this domain."""
        ...

    @cached_property
    def section(self) -> Dict[str, Any]:
        """This domain's configuration section (empty dict when absent)."""
        return self._config.get(self._config_section(), {}) or {}


__all__ = ["BaseDomainConfig"]
