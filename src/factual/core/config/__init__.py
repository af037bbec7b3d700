"""factual configuration system.

Usage:
    from factual.core.config import ConfigManager, FactsConfig

    config = ConfigManager(repo_root=Path("/path/to/project")).load_config()
    facts = FactsConfig(config)
    facts.paths_to_load()
"""
from __future__ import annotations

from .base import BaseDomainConfig
from .domains import FactsConfig, FormulaConfig, LoggingConfig, validate_generations
from .manager import ConfigManager, find_project_root, load_config

__all__ = [
    "ConfigManager",
    "BaseDomainConfig",
    "FactsConfig",
    "FormulaConfig",
    "LoggingConfig",
    "find_project_root",
    "load_config",
    "validate_generations",
]
