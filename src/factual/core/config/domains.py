"""Domain configuration accessors: facts, formulas, logging."""
from __future__ import annotations

import logging
from functools import cached_property
from pathlib import Path
from typing import Any, List, Optional

from factual.core.exceptions import ConfigurationError
from factual.core.reporting.levels import PrintLevel, parse_print_level

from .base import BaseDomainConfig


class FactsConfig(BaseDomainConfig):
    """Settings for loading and checking facts (``facts`` section)."""

    def _config_section(self) -> str:
        return "facts"

    @cached_property
    def print_level(self) -> PrintLevel:
        return parse_print_level(self.section.get("printLevel", PrintLevel.PRINT_NORMALLY))

    @cached_property
    def check_on_definition(self) -> bool:
        return bool(self.section.get("checkOnDefinition", True))

    @cached_property
    def test_paths(self) -> List[str]:
        return [str(p) for p in (self.section.get("testPaths") or [])]

    @cached_property
    def source_paths(self) -> List[str]:
        return [str(p) for p in (self.section.get("sourcePaths") or [])]

    def paths_to_load(self) -> List[str]:
        """Directories scanned when ``load_facts`` is called without namespaces."""
        paths = self.test_paths + self.source_paths
        return paths or ["tests"]


def validate_generations(value: Any) -> int:
    """Generation count must be an integer 1 or greater."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigurationError(
            f"generationsPerFormula must be an integer 1 or greater. You tried to set it to: {value!r}",
            context={"value": repr(value)},
        )
    return value


class FormulaConfig(BaseDomainConfig):
    """Settings for generative formulas (``formulas`` section).

    ``generations_per_formula`` is the one tunable: it can be changed at
    runtime but the setter refuses anything that is not a positive integer.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._generations = validate_generations(self.section.get("generationsPerFormula", 100))

    def _config_section(self) -> str:
        return "formulas"

    @property
    def generations_per_formula(self) -> int:
        return self._generations

    @generations_per_formula.setter
    def generations_per_formula(self, value: Any) -> None:
        self._generations = validate_generations(value)


class LoggingConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "logging"

    @cached_property
    def level(self) -> int:
        name = str(self.section.get("level") or "WARNING").upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ConfigurationError(f"Unknown logging level: {name}", context={"level": name})
        return level

    @cached_property
    def path(self) -> Optional[Path]:
        raw = self.section.get("path")
        return Path(raw) if raw else None


__all__ = ["FactsConfig", "FormulaConfig", "LoggingConfig", "validate_generations"]
