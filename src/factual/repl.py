"""
Functions for working with facts from the REPL.

Every function acts on the active session (see ``FactSession.activated``), or
on the default session when none is active.

    >>> from factual.repl import *
    >>> load_facts("myproject.t_core", ":print-facts")
    >>> check_facts(":slow")
    >>> recheck_fact()

Selectors accepted by fetch_facts, forget_facts and check_facts:

    (no selector)   -- facts defined in the current namespace
    ":all"          -- facts defined anywhere
    a module or ns("name") -- facts defined in that namespace
    ":keyword"      -- does the metadata have a truthy value for the keyword?
    "string"        -- does the fact's name contain the given string?
    re.compile(...) -- does any part of the fact's name match the regex?
    a function      -- does it return a truthy value given the fact's metadata?

Facts matching any of the selectors are included.
"""
from __future__ import annotations

from typing import Any, List, Optional

from factual.core.facts.models import Fact
from factual.core.session import get_active_session


def load_facts(*args: Any) -> None:
    """Load namespaces (``"pkg.t_core"``, ``"pkg.*"``), checking their facts.

    With no namespaces, every namespace under the configured test and source
    paths is loaded. Filters (``":tag"``, regexes, predicates) restrict which
    facts are loaded; a print level adjusts the output.
    """
    return get_active_session().load_facts(*args)


def fetch_facts(*selectors: Any, namespace: Optional[str] = None) -> List[Fact]:
    """Fetch facts that have already been defined.

    With no selectors, the facts of ``namespace`` (default: the session's
    current namespace). Modules pass ``namespace=__name__``.
    """
    return get_active_session().fetch_facts(*selectors, namespace=namespace)


def forget_facts(*selectors: Any, namespace: Optional[str] = None) -> None:
    """Forget facts so that check_facts and fetch_facts no longer find them."""
    return get_active_session().forget_facts(*selectors, namespace=namespace)


def check_facts(*args: Any, namespace: Optional[str] = None) -> bool:
    """Check facts that have already been defined."""
    return get_active_session().check_facts(*args, namespace=namespace)


def check_one_fact(fact: Fact) -> bool:
    """Check a single fact, such as the one returned by last_fact_checked."""
    return get_active_session().check_one_fact(fact)


def last_fact_checked() -> Optional[Fact]:
    """The last fact checked. Only top-level facts are recorded, not nested ones."""
    return get_active_session().last_fact_checked()


def source_of_last_fact_checked() -> Optional[str]:
    return get_active_session().source_of_last_fact_checked()


def recheck_fact(print_level: Any = None) -> bool:
    """Recheck the last fact checked.

    When facts are nested, the entire outer fact is rechecked. The result is
    True if the fact checks out.
    """
    return get_active_session().recheck_fact(print_level)


rcf = recheck_fact


__all__ = [
    "load_facts",
    "fetch_facts",
    "forget_facts",
    "check_facts",
    "check_one_fact",
    "last_fact_checked",
    "source_of_last_fact_checked",
    "recheck_fact",
    "rcf",
]
