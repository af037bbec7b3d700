"""
factual - facts for Python

Define executable specification units ("facts") in ordinary modules, keep them
in a registry, then load, select, check and recheck them from the REPL or the
command line.
"""

__version__ = "0.3.0"

from factual.core.facts.definition import fact
from factual.core.facts.expect import (
    checker,
    contains,
    expect,
    falsey,
    raises,
    roughly,
    truthy,
)
from factual.core.facts.matching import ALL, ns
from factual.core.formulas import formula
from factual.core.reporting import PrintLevel

__all__ = [
    "__version__",
    "fact",
    "formula",
    "expect",
    "checker",
    "truthy",
    "falsey",
    "roughly",
    "contains",
    "raises",
    "ALL",
    "ns",
    "PrintLevel",
]
