from __future__ import annotations

import io

import pytest
from helpers.facts import make_fact

from factual.core.exceptions import FactFailure
from factual.core.facts.context import CheckRun, running
from factual.core.facts.expect import (
    Checker,
    checker,
    contains,
    expect,
    falsey,
    raises,
    roughly,
    truthy,
)
from factual.core.reporting import Reporter


class TestOutsideAFact:
    def test_passing_expectation_returns_true(self) -> None:
        assert expect(1 + 1, 2) is True
        assert expect([1]) is True

    def test_failing_expectation_raises(self) -> None:
        with pytest.raises(FactFailure) as excinfo:
            expect(3, 4, message="sums")
        assert excinfo.value.actual == 3
        assert excinfo.value.expected == 4
        assert str(excinfo.value).splitlines() == ["sums", "Expected: 4", "  Actual: 3"]

    def test_fact_failure_is_an_assertion_error(self) -> None:
        with pytest.raises(AssertionError):
            expect(None)


class TestInsideAFact:
    @pytest.fixture
    def run(self):
        stream = io.StringIO()
        run = CheckRun(fact=make_fact("inside"), reporter=Reporter(stream=stream))
        with running(run):
            yield run

    def test_outcomes_are_recorded_against_the_run(self, run) -> None:
        assert expect(1, 1) is True
        assert expect(1, 2) is False
        assert (run.passes, run.failures) == (1, 1)
        assert (run.reporter.passes, run.reporter.failures) == (1, 1)

    def test_failure_text_reaches_the_reporter(self, run) -> None:
        expect("a", "b")
        output = run.reporter.stream.getvalue()
        assert 'FAIL "inside"' in output
        assert "Expected: 'b'" in output
        assert "Actual: 'a'" in output

    def test_checker_failure_text(self, run) -> None:
        expect(5, falsey)
        output = run.reporter.stream.getvalue()
        assert "checking function falsey" in output

    def test_strict_failure_raises_after_recording(self, run) -> None:
        with pytest.raises(FactFailure):
            expect(1, 2, strict=True)
        assert run.failures == 1


class TestCheckers:
    def test_truthy_and_falsey(self) -> None:
        assert truthy(1) and not truthy(0)
        assert falsey([]) and not falsey([0])

    def test_roughly(self) -> None:
        assert expect(0.1 + 0.2, roughly(0.3))
        assert roughly(1.0, delta=0.5)(1.4)
        assert not roughly(1.0)(1.01)

    def test_contains(self) -> None:
        assert contains(2)([1, 2, 3])
        assert contains("ell")("hello")
        assert not contains(4)([1, 2, 3])

    def test_raises(self) -> None:
        def boom():
            raise ValueError("bad input")

        assert raises(ValueError)(boom)
        assert raises(ValueError, match="bad")(boom)
        assert not raises(ValueError, match="other")(boom)
        assert not raises(ValueError)(lambda: None)
        with pytest.raises(KeyError):
            raises(ValueError)(lambda: {}["k"])

    def test_custom_checker_uses_function_name(self) -> None:
        def even(n):
            return n % 2 == 0

        is_even = checker(even)
        assert isinstance(is_even, Checker)
        assert repr(is_even) == "even"
        assert expect(4, is_even)
        with pytest.raises(FactFailure, match="checking function even"):
            expect(3, is_even)
