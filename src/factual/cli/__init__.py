"""
factual CLI package.

Commands are auto-discovered from ``factual.cli.commands``; each module
provides ``SUMMARY``, ``register_args(parser)`` and ``main(args) -> int``.

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Session construction for one invocation
"""
from ._output import OutputFormatter
from ._args import (
    add_json_flag,
    add_repo_root_flag,
    add_namespace_args,
    add_print_level_flag,
    selectors_from_args,
    get_repo_root,
)

__all__ = [
    "OutputFormatter",
    "add_json_flag",
    "add_repo_root_flag",
    "add_namespace_args",
    "add_print_level_flag",
    "selectors_from_args",
    "get_repo_root",
]
