"""Shared CLI utilities."""
from __future__ import annotations

import argparse
import sys
from typing import Optional, TextIO

from factual.core.config import ConfigManager, LoggingConfig
from factual.core.session import FactSession
from factual.core.stdlib_logging import configure_logging

from ._args import get_repo_root


def build_session(args: argparse.Namespace, *, stream: Optional[TextIO] = None) -> FactSession:
    """Create a session for one CLI invocation and configure logging from it.

    In JSON mode report text goes to stderr so stdout stays machine-readable.
    """
    manager = ConfigManager(get_repo_root(args))
    config = manager.load_config()

    logging_cfg = LoggingConfig(config)
    configure_logging(logging_cfg.level, logging_cfg.path)

    if stream is None and getattr(args, "json", False):
        stream = sys.stderr
    session = FactSession(config, repo_root=manager.repo_root, stream=stream)
    print_level = getattr(args, "print_level", None)
    if print_level:
        session.print_level = print_level
    return session


__all__ = ["build_session"]
