"""
Print levels.

The print level controls how much the reporter writes. It is consulted only by
the reporter; the checking and loading control flow never looks at it.
"""
from __future__ import annotations

from enum import IntEnum
from typing import Any, List, Optional, Sequence, Tuple

from factual.core.exceptions import ConfigurationError


class PrintLevel(IntEnum):
    PRINT_NOTHING = -2
    PRINT_NO_SUMMARY = -1
    PRINT_NORMALLY = 0
    PRINT_NAMESPACES = 1
    PRINT_FACTS = 2

    @property
    def keyword(self) -> str:
        return ":" + self.name.lower().replace("_", "-")


_ALIASES = {
    "nothing": PrintLevel.PRINT_NOTHING,
    "silent": PrintLevel.PRINT_NOTHING,
    "no-summary": PrintLevel.PRINT_NO_SUMMARY,
    "normally": PrintLevel.PRINT_NORMALLY,
    "normal": PrintLevel.PRINT_NORMALLY,
    "namespaces": PrintLevel.PRINT_NAMESPACES,
    "facts": PrintLevel.PRINT_FACTS,
    "full": PrintLevel.PRINT_FACTS,
}


def _lookup(value: Any) -> Optional[PrintLevel]:
    if isinstance(value, PrintLevel):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        try:
            return PrintLevel(value)
        except ValueError:
            return None
    if isinstance(value, str):
        key = value.strip().lower().lstrip(":").replace("_", "-")
        if key.startswith("print-"):
            key = key[len("print-"):]
        return _ALIASES.get(key)
    return None


def is_print_level(value: Any) -> bool:
    """True if ``value`` names a print level (``":print-facts"``, ``PrintLevel.PRINT_FACTS``, ``2``).

    Bare words such as ``"facts"`` are accepted by ``parse_print_level`` but
    are ordinary text selectors when mixed into an argument list.
    """
    if isinstance(value, str):
        return value.strip().lstrip(":").lower().startswith("print") and _lookup(value) is not None
    return _lookup(value) is not None


def parse_print_level(value: Any) -> PrintLevel:
    """Parse a print level.

    Raises:
        ConfigurationError: if ``value`` is not a known level
    """
    level = _lookup(value)
    if level is None:
        known = ", ".join(lvl.keyword for lvl in PrintLevel)
        raise ConfigurationError(
            f"{value!r} is not a print level (expected one of {known})",
            context={"value": repr(value)},
        )
    return level


def separate_print_levels(args: Sequence[Any]) -> Tuple[Optional[PrintLevel], List[Any]]:
    """Split a single print level out of an argument list.

    Integers are always taken as print levels.

    Returns:
        (level or None, remaining arguments in order)

    Raises:
        ConfigurationError: if more than one print level is given, or an
            integer is not a known level
    """
    levels: List[PrintLevel] = []
    rest: List[Any] = []
    for arg in args:
        if isinstance(arg, int) and not isinstance(arg, bool):
            levels.append(parse_print_level(arg))
        elif is_print_level(arg):
            levels.append(parse_print_level(arg))
        else:
            rest.append(arg)
    if len(levels) > 1:
        raise ConfigurationError(
            "Only one print level may be given",
            context={"levels": [lvl.keyword for lvl in levels]},
        )
    return (levels[0] if levels else None), rest


__all__ = [
    "PrintLevel",
    "is_print_level",
    "parse_print_level",
    "separate_print_levels",
]
