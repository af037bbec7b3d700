"""
Per-check state.

While a fact body runs, a ``CheckRun`` is active in a ContextVar so that
``expect`` and nested ``@fact`` definitions know which fact they belong to and
where to report. Runs form a stack through ``parent``.
"""
from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional

if TYPE_CHECKING:
    from factual.core.reporting import Reporter

    from .models import Fact


_CURRENT_RUN: ContextVar["CheckRun | None"] = ContextVar("_CURRENT_RUN", default=None)


@dataclass
class CheckRun:
    fact: "Fact"
    reporter: "Reporter"
    parent: Optional["CheckRun"] = None
    passes: int = 0
    failures: int = 0

    @property
    def depth(self) -> int:
        return 0 if self.parent is None else self.parent.depth + 1

    @property
    def succeeded(self) -> bool:
        return self.failures == 0

    def record_pass(self) -> None:
        self.passes += 1
        self.reporter.record_pass(self.fact)

    def record_failure(self, message: str) -> None:
        self.failures += 1
        self.reporter.record_failure(self.fact, message)

    def record_error(self, exc: BaseException) -> None:
        self.failures += 1
        self.reporter.record_error(self.fact, exc)


def current_run() -> Optional[CheckRun]:
    return _CURRENT_RUN.get()


@contextmanager
def running(run: CheckRun) -> Iterator[CheckRun]:
    token = _CURRENT_RUN.set(run)
    try:
        yield run
    finally:
        _CURRENT_RUN.reset(token)


__all__ = ["CheckRun", "current_run", "running"]
