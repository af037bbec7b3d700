"""
Checking facts.

A run is bracketed by the reporter: ``forget_past_results`` before the first
fact, ``report_summary`` after the last. Failures inside a fact body (failed
``expect`` calls, a ``False`` result, or any exception) are contained in that
fact; the remaining facts of the batch still run.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

from factual.core.exceptions import FactFailure, NothingCheckedError
from factual.core.reporting import Reporter

from .compendium import Compendium
from .context import CheckRun, current_run, running
from .models import Fact

logger = logging.getLogger(__name__)


class FactChecker:
    """Runs facts against one compendium and reporter."""

    def __init__(self, compendium: Compendium, reporter: Reporter) -> None:
        self.compendium = compendium
        self.reporter = reporter

    def check_one(self, fact: Fact) -> bool:
        """Run ``fact`` and return whether it checked out.

        Top-level facts are recorded as last checked before their body runs.
        A fact checked while another one is running is nested: it is not
        recorded, and its failure also fails the enclosing fact.
        """
        parent = current_run()
        if parent is None:
            self.compendium.set_last_checked(fact)

        self.reporter.report_fact_start(fact)
        run = CheckRun(fact=fact, reporter=self.reporter, parent=parent)
        outcome: Any = None
        with running(run):
            try:
                outcome = fact.body()
            except FactFailure as exc:
                # Strict expectations are recorded before they abort the body.
                if run.succeeded:
                    run.record_failure(str(exc))
            except (Exception, SystemExit) as exc:
                run.record_error(exc)

        if outcome is False and run.succeeded:
            run.record_failure("Fact returned False")

        if parent is not None and not run.succeeded:
            parent.failures += 1
        logger.debug("checked %s: %s", fact.id, "ok" if run.succeeded else "FAILED")
        return run.succeeded

    def check_many(self, facts: Iterable[Fact]) -> bool:
        """Check every fact in order; True iff all of them passed."""
        self.reporter.forget_past_results()
        results = [self.check_one(f) for f in facts]
        self.reporter.report_summary()
        return all(results)

    def recheck_last(self) -> bool:
        """Check the last top-level fact again.

        Raises:
            NothingCheckedError: if no fact has been checked yet
        """
        last = self.compendium.last_checked()
        if last is None:
            raise NothingCheckedError()
        return self.check_many([last])


__all__ = ["FactChecker"]
