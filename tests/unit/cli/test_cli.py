from __future__ import annotations

import json
from pathlib import Path

import pytest
from helpers.facts import write_module

from factual.cli._dispatcher import build_parser, discover_commands, main

PASSING = """
from factual import expect, fact

@fact("passes", fast=True)
def _():
    expect(1 + 1, 2)
"""

FAILING = """
from factual import expect, fact

@fact("fails")
def _():
    expect(1 + 1, 3)

@fact("also passes", fast=True)
def _():
    expect(True)
"""


@pytest.fixture
def project(fact_project: Path) -> Path:
    write_module(fact_project / "tests", "cli_good", PASSING)
    write_module(fact_project / "tests", "cli_bad", FAILING)
    return fact_project


def test_commands_are_discovered() -> None:
    commands = discover_commands()
    assert {"load", "list"} <= set(commands)
    assert commands["load"]["summary"] == "Load namespaces of facts and check them"


def test_no_command_prints_help(capsys) -> None:
    assert main([]) == 0
    assert "usage: factual" in capsys.readouterr().out


def test_version(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        build_parser().parse_args(["--version"])
    assert excinfo.value.code == 0
    assert "factual 0.3.0" in capsys.readouterr().out


class TestLoadCommand:
    def test_passing_namespace_exits_zero(self, project: Path, capsys) -> None:
        code = main(["load", "cli_good", "--repo-root", str(project)])
        assert code == 0
        assert "All checks (1) succeeded." in capsys.readouterr().out

    def test_failures_exit_one(self, project: Path, capsys) -> None:
        code = main(["load", "--repo-root", str(project)])
        out = capsys.readouterr().out
        assert code == 1
        assert 'FAIL "fails"' in out
        assert "FAILURE: 1 check failed.  (But 2 succeeded.)" in out

    def test_filter_limits_checked_facts(self, project: Path, capsys) -> None:
        code = main(["load", "--filter", ":fast", "--repo-root", str(project)])
        assert code == 0
        assert "All checks (2) succeeded." in capsys.readouterr().out

    def test_pattern_filter(self, project: Path, capsys) -> None:
        code = main(["load", "cli_bad", "--pattern", "^also", "--repo-root", str(project)])
        assert code == 0

    def test_print_level_flag(self, project: Path, capsys) -> None:
        main(["load", "cli_good", "--print-level", "facts", "--repo-root", str(project)])
        out = capsys.readouterr().out
        assert "= Namespace cli_good" in out
        assert "Checking passes" in out

    def test_json_output(self, project: Path, capsys) -> None:
        code = main(["load", "cli_bad", "--json", "--repo-root", str(project)])
        captured = capsys.readouterr()
        payload = json.loads(captured.out)

        assert code == 1
        assert payload["status"] == "failure"
        assert payload["passes"] == 1
        assert payload["failures"] == 1
        assert payload["facts"] == ["cli_bad/fails", "cli_bad/also passes"]
        assert 'FAIL "fails"' in captured.err

    def test_bad_print_level_is_a_usage_error(self, project: Path, capsys) -> None:
        code = main(["load", "--print-level", "loud", "--json", "--repo-root", str(project)])
        error = json.loads(capsys.readouterr().err)
        assert code == 2
        assert error["code"] == "ConfigurationError"

    def test_bad_regex(self, project: Path, capsys) -> None:
        code = main(["load", "--pattern", "(", "--repo-root", str(project)])
        assert code == 2
        assert capsys.readouterr().err.startswith("Error:")


class TestListCommand:
    def test_lists_without_checking(self, project: Path, capsys) -> None:
        code = main(["list", "--repo-root", str(project)])
        out = capsys.readouterr().out
        assert code == 0
        assert out.splitlines() == [
            "cli_bad  fails",
            "cli_bad  also passes",
            "cli_good  passes",
        ]

    def test_list_with_filter_as_json(self, project: Path, capsys) -> None:
        code = main(["list", "--filter", ":fast", "--json", "--repo-root", str(project)])
        rows = json.loads(capsys.readouterr().out)
        assert code == 0
        assert [r["id"] for r in rows] == ["cli_bad/also passes", "cli_good/passes"]
        assert all(r["line"] for r in rows)
