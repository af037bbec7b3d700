from __future__ import annotations

import argparse
import re
from pathlib import Path

from factual.cli import OutputFormatter, add_namespace_args, get_repo_root, selectors_from_args
from factual.core.exceptions import SelectorError
from factual.core.facts.matching import PatternSelector, TagSelector, TextSelector


def parse(argv):
    parser = argparse.ArgumentParser()
    add_namespace_args(parser)
    return parser.parse_args(argv)


def test_namespace_args_defaults() -> None:
    args = parse([])
    assert args.namespaces == []
    assert selectors_from_args(args) == []


def test_filters_become_tag_or_text_selectors() -> None:
    args = parse(["pkg.*", "--filter", ":slow", "--filter", "adds", "--pattern", "^a"])
    assert args.namespaces == ["pkg.*"]
    assert selectors_from_args(args) == [
        TagSelector("slow"),
        TextSelector("adds"),
        PatternSelector(re.compile("^a")),
    ]


def test_get_repo_root(tmp_path: Path) -> None:
    assert get_repo_root(argparse.Namespace(repo_root=None)) is None
    assert get_repo_root(argparse.Namespace(repo_root=str(tmp_path))) == tmp_path.resolve()


def test_formatter_error_json_uses_error_payload(capsys) -> None:
    OutputFormatter(json_mode=True).error(SelectorError("bad", context={"type": "int"}))
    err = capsys.readouterr().err
    assert '"code": "SelectorError"' in err
    assert '"type": "int"' in err


def test_formatter_plain_error(capsys) -> None:
    OutputFormatter().error(ValueError("nope"))
    assert capsys.readouterr().err == "Error: nope\n"


def test_formatter_success_text_and_json(capsys) -> None:
    OutputFormatter().success({"a": 1}, "done")
    OutputFormatter(json_mode=True, indent=None).success({"a": 1}, "done", status="failure")
    assert capsys.readouterr().out.splitlines() == ["done", '{"status": "failure", "a": 1}']
