"""
factual load command.

SUMMARY: Load namespaces of facts and check them
"""

from __future__ import annotations

import argparse
import re
import sys

from factual.cli import OutputFormatter, add_json_flag, add_repo_root_flag
from factual.cli._args import add_namespace_args, add_print_level_flag, selectors_from_args
from factual.cli._utils import build_session
from factual.core.exceptions import FactualError

SUMMARY = "Load namespaces of facts and check them"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_namespace_args(parser)
    add_print_level_flag(parser)
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    """Load and check facts; exit 0 only if every check passed."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        session = build_session(args)
        selectors = selectors_from_args(args)
        session.load_facts(*args.namespaces, *selectors)
    except (FactualError, re.error) as e:
        formatter.error(e, error_code="error")
        return 2

    reporter = session.reporter
    ok = reporter.failures == 0
    if formatter.json_mode:
        formatter.success(
            {
                "passes": reporter.passes,
                "failures": reporter.failures,
                "facts": [f.id for f in session.fetch_facts(":all")],
            },
            "",
            status="success" if ok else "failure",
        )
    return 0 if ok else 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser(prog="factual load")
    register_args(parser)
    sys.exit(main(parser.parse_args()))
