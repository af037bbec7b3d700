"""
Checks inside fact bodies.

``expect(actual, expected)`` compares a value against an expectation. An
expectation is either a plain value (compared with ``==``) or a checker
built with ``checker``::

    @fact("arithmetic")
    def _():
        expect(1 + 1, 2)
        expect(0.1 + 0.2, roughly(0.3))
        expect(lambda: 1 / 0, raises(ZeroDivisionError))

Inside a running fact the outcome is recorded against that fact. Outside of
one, a failing ``expect`` raises ``FactFailure`` like a plain assertion.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Container, Optional, Type

from factual.core.exceptions import FactFailure

from .context import current_run


@dataclass(frozen=True)
class Checker:
    """A named predicate over the actual value."""

    name: str
    predicate: Callable[[Any], Any]

    def __call__(self, actual: Any) -> bool:
        return bool(self.predicate(actual))

    def __repr__(self) -> str:
        return self.name


def checker(predicate: Callable[[Any], Any], name: Optional[str] = None) -> Checker:
    """Wrap a one-argument predicate so ``expect`` applies it to the actual value."""
    return Checker(name=name or getattr(predicate, "__name__", "checker"), predicate=predicate)


truthy = checker(bool, "truthy")
falsey = checker(lambda value: not value, "falsey")


def roughly(expected: float, delta: float = 1e-3) -> Checker:
    return checker(lambda actual: abs(actual - expected) <= delta, f"(roughly {expected} {delta})")


def contains(item: Any) -> Checker:
    def _contains(actual: Container[Any]) -> bool:
        return item in actual

    return checker(_contains, f"(contains {item!r})")


def raises(exc_type: Type[BaseException], match: Optional[str] = None) -> Checker:
    """Expect the actual value, a zero-argument callable, to raise ``exc_type``."""

    def _raises(thunk: Callable[[], Any]) -> bool:
        try:
            thunk()
        except exc_type as exc:
            return match is None or match in str(exc)
        return False

    return checker(_raises, f"(raises {exc_type.__name__})")


def _format_failure(actual: Any, expected: Any, message: Optional[str]) -> str:
    lines = []
    if message:
        lines.append(message)
    if isinstance(expected, Checker):
        lines.append(f"Actual result did not agree with the checking function {expected!r}.")
        lines.append(f"    Actual result: {actual!r}")
    else:
        lines.append(f"Expected: {expected!r}")
        lines.append(f"  Actual: {actual!r}")
    return "\n".join(lines)


def expect(
    actual: Any,
    expected: Any = truthy,
    *,
    message: Optional[str] = None,
    strict: bool = False,
) -> bool:
    """Check ``actual`` against ``expected``.

    Args:
        actual: Value produced by the code under test
        expected: Plain value or Checker (default: truthy)
        message: Extra text shown when the check fails
        strict: Stop the enclosing fact at the first failure

    Returns:
        True if the check passed
    """
    if isinstance(expected, Checker):
        ok = expected(actual)
    else:
        ok = bool(actual == expected)

    run = current_run()
    if run is None:
        if not ok:
            raise FactFailure(_format_failure(actual, expected, message), actual=actual, expected=expected)
        return True

    if ok:
        run.record_pass()
        return True

    run.record_failure(_format_failure(actual, expected, message))
    if strict:
        raise FactFailure(message or "strict expectation failed", actual=actual, expected=expected)
    return False


__all__ = [
    "Checker",
    "checker",
    "expect",
    "truthy",
    "falsey",
    "roughly",
    "contains",
    "raises",
]
