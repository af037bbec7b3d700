from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Union

_FACTUAL_HANDLER: logging.Handler | None = None
_CONFIGURED_TARGET: str | None = None

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: Union[str, int]) -> int:
    if isinstance(name, int):
        return name
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: Union[str, int] = "WARNING", log_path: Optional[Path] = None) -> None:
    """Install the single factual handler on the ``factual`` logger.

    Logs go to ``log_path`` when given, otherwise to stderr. Report output is
    written by the reporter and never passes through logging.

    Idempotent per-process: if already configured for the same target, only the
    level is updated.
    """
    global _FACTUAL_HANDLER, _CONFIGURED_TARGET

    target = str(Path(log_path).resolve()) if log_path else "<stderr>"
    logger = logging.getLogger("factual")
    logger.setLevel(_level_from_name(level))

    if _CONFIGURED_TARGET == target and _FACTUAL_HANDLER is not None:
        _FACTUAL_HANDLER.setLevel(_level_from_name(level))
        return

    if _FACTUAL_HANDLER is not None:
        logger.removeHandler(_FACTUAL_HANDLER)
        _FACTUAL_HANDLER.close()
        _FACTUAL_HANDLER = None

    if log_path:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(target, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)

    _FACTUAL_HANDLER = handler
    _CONFIGURED_TARGET = target


def reset_logging_for_tests() -> None:
    """Test-only: remove the installed handler."""
    global _FACTUAL_HANDLER, _CONFIGURED_TARGET
    if _FACTUAL_HANDLER is not None:
        logging.getLogger("factual").removeHandler(_FACTUAL_HANDLER)
        _FACTUAL_HANDLER.close()
    _FACTUAL_HANDLER = None
    _CONFIGURED_TARGET = None


__all__ = ["configure_logging", "reset_logging_for_tests"]
