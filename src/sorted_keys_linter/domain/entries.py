"""Entry data model: the key/value elements of one dictionary construction."""

from dataclasses import dataclass, field
from enum import Enum


class EntryKind(Enum):
    """The four shapes an entry can take."""

    PLAIN = "plain"
    """Static key: a constant in a display or a keyword name in dict(...)."""
    LITERAL_COMPUTED = "literal_computed"
    """Key expression that folds to a constant, e.g. ``-1`` or ``f"a"``."""
    DYNAMIC_COMPUTED = "dynamic_computed"
    """Key expression whose value is only known at runtime."""
    SEPARATOR = "separator"
    """``**mapping`` unpacking; never reordered, always splits groups."""


@dataclass(frozen=True)
class SourceSpan:
    """Half-open character range [start, end) of the module source, plus its lines."""

    start: int
    end: int
    start_line: int
    end_line: int

    def overlaps(self, other: "SourceSpan") -> bool:
        """True when the two ranges share at least one character."""
        return self.start < other.end and other.start < self.end


@dataclass(frozen=True)
class TokenSpan:
    """A token or comment lying between two entries. Only its lines matter to the core."""

    start_line: int
    end_line: int
    text: str = ""


@dataclass(frozen=True, eq=False)
class Entry:
    """
    One element of the sequence under analysis.

    Entries compare by identity: the fix planner decides whether a position
    moved by asking whether the target entry *is* the original one.
    """

    kind: EntryKind
    span: SourceSpan
    text: str
    key_value: object = None
    node: object = field(default=None, repr=False, compare=False)
    """Opaque host handle (an astroid node) used only to position diagnostics."""

    @property
    def is_separator(self) -> bool:
        return self.kind is EntryKind.SEPARATOR

    @property
    def is_dynamic(self) -> bool:
        return self.kind is EntryKind.DYNAMIC_COMPUTED


Group = tuple[Entry, ...]
