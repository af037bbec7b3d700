"""
Generative facts.

    @formula("concatenation starts with the first string", a=random_text, b=random_text)
    def _(a, b):
        expect((a + b).startswith(a))

A formula is one fact whose body calls the decorated function repeatedly with
fresh keyword arguments drawn from the generators. It stops at the first
generation that fails. The number of generations comes from the active
session's ``FormulaConfig.generations_per_formula``.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from factual.core.exceptions import ConfigurationError
from factual.core.facts.context import current_run
from factual.core.facts.definition import define_fact
from factual.core.facts.models import Fact

FORMULA_TAG = "formula"


def run_generations(
    body: Callable[..., Any],
    generators: Dict[str, Callable[[], Any]],
    generations: int,
) -> bool:
    """Call ``body`` up to ``generations`` times; False at the first failing one."""
    for _ in range(generations):
        run = current_run()
        failures_before = run.failures if run is not None else 0
        bindings = {key: generate() for key, generate in generators.items()}
        outcome = body(**bindings)
        failed = outcome is False or (run is not None and run.failures > failures_before)
        if failed:
            return False
    return True


def formula(name: Optional[str] = None, **generators: Callable[[], Any]) -> Callable[[Callable[..., Any]], Fact]:
    """Define a generative fact.

    Raises:
        ConfigurationError: if no generators are given or one is not callable
    """
    if not generators:
        raise ConfigurationError("Formula requires at least one generator binding")
    for key, generate in generators.items():
        if not callable(generate):
            raise ConfigurationError(
                f"Formula binding '{key}' must be a zero-argument callable",
                context={"binding": key},
            )

    def decorator(body: Callable[..., Any]) -> Fact:
        from factual.core.session import get_active_session

        def generate_and_check() -> bool:
            generations = get_active_session().formula_config.generations_per_formula
            return run_generations(body, generators, generations)

        generate_and_check.__module__ = body.__module__
        generate_and_check.__qualname__ = body.__qualname__
        generate_and_check.__doc__ = body.__doc__
        generate_and_check.__wrapped__ = body  # type: ignore[attr-defined]
        return define_fact(generate_and_check, name=name, **{FORMULA_TAG: True})

    return decorator


__all__ = ["formula", "run_generations", "FORMULA_TAG"]
