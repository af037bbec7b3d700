"""
Data models for facts.

A Fact is a named, executable specification unit: a callable body plus the
metadata used to find it again (name, namespace, tags, source location).
"""
from __future__ import annotations

import hashlib
import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional


# Metadata keys that every fact carries in addition to user tags.
NAME_KEY = "name"
NAMESPACE_KEY = "namespace"
DESCRIPTION_KEY = "description"
FILE_KEY = "file"
LINE_KEY = "line"

RESERVED_KEYS = frozenset({NAME_KEY, NAMESPACE_KEY, DESCRIPTION_KEY, FILE_KEY, LINE_KEY})


@dataclass(eq=False)
class Fact:
    """A single executable fact.

    Attributes:
        id: Namespace-qualified identity; registry membership is keyed on it
        namespace: Dotted name of the module that defined the fact
        body: Zero-argument callable performing the checks
        name: Optional explicit name
        description: Docstring of the body, if any
        metadata: User tags plus the reserved keys (name, namespace, ...)
    """

    id: str
    namespace: str
    body: Callable[[], Any]
    name: Optional[str] = None
    description: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def display_name(self) -> Optional[str]:
        """Name used by text and pattern selectors: the name, else the docstring."""
        return self.name or self.description

    @property
    def source(self) -> Optional[str]:
        try:
            return inspect.getsource(self.body)
        except (OSError, TypeError):
            return None

    def __call__(self) -> Any:
        return self.body()

    def __repr__(self) -> str:
        return f"<Fact {self.id}>"


def fact_identity(namespace: str, body: Callable[..., Any], name: Optional[str] = None) -> str:
    """Compute the identity under which a fact is registered.

    Named facts are keyed on their name. Unnamed facts are keyed on the body's
    qualified name plus a digest of its source, so that evaluating the same
    definition again replaces the earlier entry while two different anonymous
    bodies called ``_`` stay distinct.
    """
    if name:
        return f"{namespace}/{name}"

    qualname = getattr(body, "__qualname__", None) or getattr(body, "__name__", "fact")
    try:
        digest = hashlib.sha1(inspect.getsource(body).encode("utf-8")).hexdigest()[:12]
    except (OSError, TypeError):
        code = getattr(inspect.unwrap(body), "__code__", None)
        digest = f"L{code.co_firstlineno}" if code is not None else hex(id(body))
    return f"{namespace}/{qualname}@{digest}"


def build_fact(
    body: Callable[[], Any],
    *,
    name: Optional[str] = None,
    namespace: Optional[str] = None,
    tags: Optional[Mapping[str, Any]] = None,
) -> Fact:
    """Build a Fact from a function and its tags."""
    ns_name = namespace or getattr(body, "__module__", None) or "__main__"
    description = inspect.getdoc(body)
    code = getattr(inspect.unwrap(body), "__code__", None)

    metadata: Dict[str, Any] = dict(tags or {})
    metadata[NAME_KEY] = name
    metadata[NAMESPACE_KEY] = ns_name
    metadata[DESCRIPTION_KEY] = description
    metadata[FILE_KEY] = code.co_filename if code is not None else None
    metadata[LINE_KEY] = code.co_firstlineno if code is not None else None

    return Fact(
        id=fact_identity(ns_name, body, name),
        namespace=ns_name,
        body=body,
        name=name,
        description=description,
        metadata=metadata,
    )


__all__ = [
    "Fact",
    "fact_identity",
    "build_fact",
    "RESERVED_KEYS",
]
