"""
The ``@fact`` decorator.

    @fact("addition is commutative", core=True)
    def _():
        expect(1 + 2, 2 + 1)

Decorating registers the fact in the active session (and by default checks it
straight away). Facts defined while another fact runs are nested and only run
as part of it. The decorator returns the ``Fact``.
"""
from __future__ import annotations

from typing import Any, Callable, Optional, Union, overload

from factual.core.exceptions import ConfigurationError

from .models import RESERVED_KEYS, Fact, build_fact

FactBody = Callable[[], Any]


def _validate_tags(tags: dict) -> None:
    clash = sorted(RESERVED_KEYS & set(tags))
    if clash:
        raise ConfigurationError(
            f"Reserved metadata key(s) cannot be used as tags: {', '.join(clash)}",
            context={"keys": clash},
        )


def define_fact(body: FactBody, *, name: Optional[str] = None, **tags: Any) -> Fact:
    """Build a fact from ``body`` and hand it to the active session."""
    from factual.core.session import get_active_session

    _validate_tags(tags)
    new_fact = build_fact(body, name=name, tags=tags)
    get_active_session().define(new_fact)
    return new_fact


@overload
def fact(name: FactBody) -> Fact: ...


@overload
def fact(name: Optional[str] = None, **tags: Any) -> Callable[[FactBody], Fact]: ...


def fact(name: Union[str, FactBody, None] = None, **tags: Any) -> Union[Fact, Callable[[FactBody], Fact]]:
    """Define a fact. Usable bare (``@fact``) or with a name and tags."""
    if callable(name):
        return define_fact(name)

    if name is not None and not isinstance(name, str):
        raise ConfigurationError(f"Fact name must be a string, got {name!r}")

    def decorator(body: FactBody) -> Fact:
        return define_fact(body, name=name, **tags)

    return decorator


__all__ = ["fact", "define_fact"]
