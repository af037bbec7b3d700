"""
Reporter: the presentation side of checking and loading.

The checker and loader call into the reporter at fixed points (start of a run,
namespace transitions, each check, end of a run); what gets written depends on
the current print level.
"""
from __future__ import annotations

import logging
import sys
import traceback
from contextlib import contextmanager
from typing import Any, Iterator, Optional, TextIO, TYPE_CHECKING

from .levels import PrintLevel, parse_print_level

if TYPE_CHECKING:
    from factual.core.exceptions import LoadError
    from factual.core.facts.models import Fact

logger = logging.getLogger(__name__)


def _describe(fact: "Fact") -> str:
    name = fact.display_name
    label = f'"{name}"' if name else fact.id
    file = fact.metadata.get("file")
    line = fact.metadata.get("line")
    if file:
        return f"{label} at ({file}:{line})"
    return label


class Reporter:
    """Counts passing and failing checks and writes report text.

    Attributes:
        level: Current print level
        passes: Checks that succeeded since the last ``forget_past_results``
        failures: Checks that failed since the last ``forget_past_results``
    """

    def __init__(self, level: Any = PrintLevel.PRINT_NORMALLY, stream: Optional[TextIO] = None) -> None:
        self.level = parse_print_level(level)
        self._stream = stream
        self.passes = 0
        self.failures = 0

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def _emit(self, text: str) -> None:
        print(text, file=self.stream)

    @contextmanager
    def obeying(self, level: Any) -> Iterator["Reporter"]:
        """Temporarily report at ``level`` (None keeps the current level)."""
        if level is None:
            yield self
            return
        previous = self.level
        self.level = parse_print_level(level)
        try:
            yield self
        finally:
            self.level = previous

    # ------------------------------------------------------------------
    # Run bracketing
    # ------------------------------------------------------------------

    def forget_past_results(self) -> None:
        self.passes = 0
        self.failures = 0

    def report_changed_namespace(self, namespace: str) -> None:
        if self.level >= PrintLevel.PRINT_NAMESPACES:
            self._emit(f"= Namespace {namespace}")

    def report_fact_start(self, fact: "Fact") -> None:
        if self.level >= PrintLevel.PRINT_FACTS:
            self._emit(f"Checking {fact.display_name or fact.id}")

    def report_summary(self) -> bool:
        """Write the summary line. Returns True if nothing failed."""
        if self.level >= PrintLevel.PRINT_NORMALLY:
            if self.failures:
                plural = "" if self.failures == 1 else "s"
                self._emit(
                    f"FAILURE: {self.failures} check{plural} failed.  (But {self.passes} succeeded.)"
                )
            elif self.passes:
                self._emit(f"All checks ({self.passes}) succeeded.")
            else:
                self._emit("No facts were checked. Is that what you wanted?")
        return self.failures == 0

    # ------------------------------------------------------------------
    # Individual outcomes
    # ------------------------------------------------------------------

    def record_pass(self, fact: Optional["Fact"] = None) -> None:
        self.passes += 1

    def record_failure(self, fact: "Fact", message: str) -> None:
        self.failures += 1
        if self.level > PrintLevel.PRINT_NOTHING:
            self._emit(f"\nFAIL {_describe(fact)}")
            for line in message.splitlines():
                self._emit(f"    {line}")

    def record_error(self, fact: "Fact", exc: BaseException) -> None:
        """A fact body raised something other than a check failure."""
        logger.debug("fact %s raised", fact.id, exc_info=exc)
        summary = "".join(traceback.format_exception_only(type(exc), exc)).strip()
        self.record_failure(fact, f"Unexpected exception: {summary}")

    def report_load_error(self, error: "LoadError") -> None:
        self.failures += 1
        if self.level > PrintLevel.PRINT_NOTHING:
            self._emit(f"\nLOAD FAILURE for {error.namespace}")
            for line in str(error).splitlines():
                self._emit(f"    {line}")


__all__ = ["Reporter"]
