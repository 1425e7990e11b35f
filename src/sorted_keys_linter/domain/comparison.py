"""
Key comparison: two primitives (lexical, natural) composed with case folding
and direction into the eight order modes.

Ordering is by Unicode code point, never by locale. Uppercase ASCII letters
therefore sort before their lowercase counterparts ("Bar" < "bar" < "foo").
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

_DIGIT_RUNS = re.compile(r"([0-9]+)")


class Direction(Enum):
    ASC = "asc"
    DESC = "desc"


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def lexical_compare(a: str, b: str) -> int:
    """Three-way code-point comparison."""
    return (a > b) - (a < b)


def _runs(text: str) -> list[str]:
    # re.split with a capturing group alternates text/digits and may yield empty
    # strings at the edges; those carry no information.
    return [run for run in _DIGIT_RUNS.split(text) if run]


def natural_compare(a: str, b: str) -> int:
    """
    Three-way comparison treating embedded digit runs as numbers.

    Runs are compared left to right: two digit runs numerically, anything else
    by code point. A string whose runs are a strict prefix of the other's sorts
    first. When all runs tie (``"a01"`` vs ``"a1"``) the code-point order of the
    whole strings decides so the result stays a total order.
    """
    for left, right in zip(_runs(a), _runs(b)):
        if _DIGIT_RUNS.fullmatch(left) and _DIGIT_RUNS.fullmatch(right):
            result = _sign(int(left) - int(right))
        else:
            result = lexical_compare(left, right)
        if result:
            return result
    length_result = _sign(len(_runs(a)) - len(_runs(b)))
    if length_result:
        return length_result
    return lexical_compare(a, b)


def _identity(text: str) -> str:
    return text


def _casefold(text: str) -> str:
    return text.lower()


@dataclass(frozen=True)
class OrderMode:
    """
    Resolved ordering: direction x case sensitivity x natural.

    Every combination maps to exactly one comparison built from the same two
    primitives, so ascending and descending can never drift apart.
    """

    direction: Direction = Direction.ASC
    case_sensitive: bool = True
    natural: bool = False

    @property
    def _primitive(self) -> Callable[[str, str], int]:
        return natural_compare if self.natural else lexical_compare

    @property
    def _normalize(self) -> Callable[[str], str]:
        return _identity if self.case_sensitive else _casefold

    def ascending(self, a: str, b: str) -> int:
        """Three-way ascending comparison under this mode's case and natural settings."""
        normalize = self._normalize
        return self._primitive(normalize(a), normalize(b))

    def compare(self, a: str, b: str) -> int:
        """Three-way comparison for sorting; negative means ``a`` goes first."""
        if self.direction is Direction.DESC:
            return self.ascending(b, a)
        return self.ascending(a, b)

    def allows(self, a: str, b: str) -> bool:
        """True when ``a`` may appear immediately before ``b``."""
        return self.compare(a, b) <= 0

    @property
    def label(self) -> str:
        parts = [
            "ascending" if self.direction is Direction.ASC else "descending",
            "case-sensitive" if self.case_sensitive else "case-insensitive",
        ]
        if self.natural:
            parts.append("natural")
        return " ".join(parts)
