"""
The compendium: registry of every known fact.

Facts are keyed by identity (at most one entry each) and indexed by namespace.
The compendium also remembers the last top-level fact that was checked so it
can be rechecked.

All reads and writes of the internal maps happen under a single lock. Fact
bodies are never executed while the lock is held.
"""
from __future__ import annotations

import logging
import threading
from typing import Dict, Iterator, List, Optional

from .models import Fact

logger = logging.getLogger(__name__)


class Compendium:
    """Registry of facts keyed by identity and namespace.

    Insertion order is preserved (dicts are ordered) so that fetching and
    checking facts is reproducible. Re-registering an identity replaces the
    earlier fact in place.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_id: Dict[str, Fact] = {}
        # namespace -> identities, kept as an ordered dict used as a set
        self._by_namespace: Dict[str, Dict[str, None]] = {}
        self._last_checked: Optional[Fact] = None

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def register(self, fact: Fact) -> None:
        """Insert ``fact`` or replace the fact with the same identity."""
        with self._lock:
            previous = self._by_id.get(fact.id)
            if previous is not None and previous.namespace != fact.namespace:
                self._unindex(previous)
            self._by_id[fact.id] = fact
            self._by_namespace.setdefault(fact.namespace, {})[fact.id] = None
        logger.debug("registered %s (replaced=%s)", fact.id, previous is not None)

    def remove(self, fact: Fact) -> None:
        """Forget ``fact``. Absent facts are ignored."""
        with self._lock:
            existing = self._by_id.pop(fact.id, None)
            if existing is not None:
                self._unindex(existing)
        if existing is not None:
            logger.debug("removed %s", fact.id)

    def remove_namespace(self, namespace: str) -> None:
        """Forget every fact defined in ``namespace``."""
        with self._lock:
            ids = self._by_namespace.pop(namespace, {})
            for fact_id in ids:
                self._by_id.pop(fact_id, None)
        if ids:
            logger.debug("removed %d fact(s) from %s", len(ids), namespace)

    def reset_all(self) -> None:
        """Forget every fact."""
        with self._lock:
            self._by_id.clear()
            self._by_namespace.clear()
        logger.debug("compendium reset")

    def _unindex(self, fact: Fact) -> None:
        bucket = self._by_namespace.get(fact.namespace)
        if bucket is None:
            return
        bucket.pop(fact.id, None)
        if not bucket:
            del self._by_namespace[fact.namespace]

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def all_facts(self) -> List[Fact]:
        with self._lock:
            return list(self._by_id.values())

    def facts_in_namespace(self, namespace: str) -> List[Fact]:
        with self._lock:
            ids = self._by_namespace.get(namespace, {})
            return [self._by_id[fact_id] for fact_id in ids]

    def namespaces(self) -> List[str]:
        with self._lock:
            return list(self._by_namespace)

    def get(self, fact_id: str) -> Optional[Fact]:
        with self._lock:
            return self._by_id.get(fact_id)

    def __contains__(self, fact: object) -> bool:
        if not isinstance(fact, Fact):
            return False
        with self._lock:
            return self._by_id.get(fact.id) is fact

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_id)

    def __iter__(self) -> Iterator[Fact]:
        return iter(self.all_facts())

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def set_last_checked(self, fact: Fact) -> None:
        with self._lock:
            self._last_checked = fact

    def last_checked(self) -> Optional[Fact]:
        """The most recent top-level fact checked, or None."""
        with self._lock:
            return self._last_checked


__all__ = ["Compendium"]
