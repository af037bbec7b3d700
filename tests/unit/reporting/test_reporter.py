from __future__ import annotations

import io

import pytest
from helpers.facts import make_fact

from factual.core.exceptions import ConfigurationError, LoadError
from factual.core.reporting import PrintLevel, Reporter


def make_reporter(level=PrintLevel.PRINT_NORMALLY):
    stream = io.StringIO()
    return Reporter(level, stream=stream), stream


class TestSummary:
    def test_all_succeeded(self) -> None:
        reporter, stream = make_reporter()
        reporter.record_pass()
        reporter.record_pass()
        assert reporter.report_summary() is True
        assert stream.getvalue() == "All checks (2) succeeded.\n"

    def test_failures_with_plural(self) -> None:
        reporter, stream = make_reporter()
        f = make_fact("f")
        reporter.record_pass(f)
        reporter.record_failure(f, "one")
        reporter.record_failure(f, "two")
        assert reporter.report_summary() is False
        assert stream.getvalue().splitlines()[-1] == "FAILURE: 2 checks failed.  (But 1 succeeded.)"

    def test_nothing_checked(self) -> None:
        reporter, stream = make_reporter()
        assert reporter.report_summary() is True
        assert stream.getvalue() == "No facts were checked. Is that what you wanted?\n"

    def test_no_summary_level_suppresses_summary_but_not_failures(self) -> None:
        reporter, stream = make_reporter(PrintLevel.PRINT_NO_SUMMARY)
        reporter.record_failure(make_fact("f"), "broken")
        reporter.report_summary()
        output = stream.getvalue()
        assert 'FAIL "f"' in output
        assert "FAILURE" not in output


def test_forget_past_results_zeroes_counters() -> None:
    reporter, _ = make_reporter()
    reporter.record_pass()
    reporter.record_failure(make_fact("f"), "x")
    reporter.forget_past_results()
    assert (reporter.passes, reporter.failures) == (0, 0)


def test_print_nothing_writes_nothing_but_still_counts() -> None:
    reporter, stream = make_reporter(PrintLevel.PRINT_NOTHING)
    f = make_fact("f")
    reporter.report_changed_namespace("pkg.x")
    reporter.report_fact_start(f)
    reporter.record_failure(f, "broken")
    reporter.report_load_error(LoadError("boom", namespace="pkg.x"))
    reporter.report_summary()
    assert stream.getvalue() == ""
    assert reporter.failures == 2


def test_namespaces_printed_from_print_namespaces() -> None:
    reporter, stream = make_reporter(PrintLevel.PRINT_NORMALLY)
    reporter.report_changed_namespace("pkg.hidden")
    reporter.level = PrintLevel.PRINT_NAMESPACES
    reporter.report_changed_namespace("pkg.shown")
    assert stream.getvalue() == "= Namespace pkg.shown\n"


def test_failure_message_lines_are_indented() -> None:
    reporter, stream = make_reporter()
    reporter.record_failure(make_fact("f", namespace="pkg.x"), "Expected: 1\n  Actual: 2")
    lines = stream.getvalue().splitlines()
    assert lines[0] == ""
    assert lines[1].startswith('FAIL "f" at (')
    assert lines[2:] == ["    Expected: 1", "      Actual: 2"]


def test_error_is_reported_as_unexpected_exception() -> None:
    reporter, stream = make_reporter()
    reporter.record_error(make_fact("f"), ValueError("bad"))
    assert "    Unexpected exception: ValueError: bad" in stream.getvalue()
    assert reporter.failures == 1


def test_load_error_names_the_namespace() -> None:
    reporter, stream = make_reporter()
    reporter.report_load_error(LoadError("SyntaxError: invalid syntax", namespace="pkg.broken"))
    assert "LOAD FAILURE for pkg.broken" in stream.getvalue()
    assert reporter.failures == 1


class TestObeying:
    def test_temporarily_changes_level(self) -> None:
        reporter, _ = make_reporter()
        with reporter.obeying(":print-facts"):
            assert reporter.level is PrintLevel.PRINT_FACTS
        assert reporter.level is PrintLevel.PRINT_NORMALLY

    def test_none_keeps_current_level(self) -> None:
        reporter, _ = make_reporter(PrintLevel.PRINT_NAMESPACES)
        with reporter.obeying(None):
            assert reporter.level is PrintLevel.PRINT_NAMESPACES

    def test_restores_level_on_error(self) -> None:
        reporter, _ = make_reporter()
        with pytest.raises(RuntimeError):
            with reporter.obeying(PrintLevel.PRINT_NOTHING):
                raise RuntimeError("stop")
        assert reporter.level is PrintLevel.PRINT_NORMALLY

    def test_rejects_unknown_level(self) -> None:
        reporter, _ = make_reporter()
        with pytest.raises(ConfigurationError):
            with reporter.obeying("loud"):
                pass


def test_default_stream_is_stdout(capsys) -> None:
    reporter = Reporter()
    reporter.report_summary()
    assert "No facts were checked" in capsys.readouterr().out
