"""
factual list command.

SUMMARY: List the facts defined in namespaces without checking them
"""

from __future__ import annotations

import argparse
import re
import sys

from factual.cli import OutputFormatter, add_json_flag, add_repo_root_flag
from factual.cli._args import add_namespace_args, selectors_from_args
from factual.cli._utils import build_session
from factual.core.exceptions import FactualError
from factual.core.reporting import PrintLevel

SUMMARY = "List the facts defined in namespaces without checking them"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_namespace_args(parser)
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        session = build_session(args)
        session.check_on_definition = False
        session.load_facts(*args.namespaces, PrintLevel.PRINT_NOTHING)
        selectors = selectors_from_args(args)
        facts = session.fetch_facts(*(selectors or [":all"]))
    except (FactualError, re.error) as e:
        formatter.error(e, error_code="error")
        return 2

    if formatter.json_mode:
        formatter.json_output(
            [
                {
                    "id": f.id,
                    "namespace": f.namespace,
                    "name": f.display_name,
                    "line": f.metadata.get("line"),
                }
                for f in facts
            ]
        )
    else:
        for f in facts:
            formatter.text(f"{f.namespace}  {f.display_name or f.id}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(prog="factual list")
    register_args(parser)
    sys.exit(main(parser.parse_args()))
