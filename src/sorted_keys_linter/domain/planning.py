"""
Fix planning: compute the sorted order of a group and the text edits that
produce it.

Every edit replaces one original entry's span with the full original text of
the entry that belongs there. Spans of distinct entries never intersect, so
all edits apply to the original source at once; comments and punctuation
outside the entry spans stay where they are.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from functools import cmp_to_key

from sorted_keys_linter.domain.comparison import OrderMode
from sorted_keys_linter.domain.entries import Entry, Group, SourceSpan
from sorted_keys_linter.domain.errors import OverlappingEditsError
from sorted_keys_linter.domain.naming import extract_name


@dataclass(frozen=True)
class TextEdit:
    span: SourceSpan
    replacement: str


@dataclass(frozen=True)
class FixPlan:
    """Pairwise non-overlapping edits, ordered by position. Checked on construction."""

    edits: tuple[TextEdit, ...] = ()

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.edits, key=lambda edit: (edit.span.start, edit.span.end)))
        for left, right in zip(ordered, ordered[1:]):
            if left.span.overlaps(right.span):
                raise OverlappingEditsError(
                    f"Edits overlap at offsets {left.span.start}-{left.span.end} "
                    f"and {right.span.start}-{right.span.end}"
                )
        object.__setattr__(self, "edits", ordered)

    def __bool__(self) -> bool:
        return bool(self.edits)

    def __len__(self) -> int:
        return len(self.edits)

    def overlaps(self, other: "FixPlan") -> bool:
        return any(
            mine.span.overlaps(theirs.span) for mine in self.edits for theirs in other.edits
        )

    def apply(self, source: str) -> str:
        """Apply every edit relative to ``source`` as a single batch."""
        return apply_edits(source, self.edits)


def apply_edits(source: str, edits: Iterable[TextEdit]) -> str:
    """Splice edits into source. Offsets always refer to the unmodified source."""
    ordered = FixPlan(tuple(edits)).edits
    pieces: list[str] = []
    cursor = 0
    for edit in ordered:
        pieces.append(source[cursor:edit.span.start])
        pieces.append(edit.replacement)
        cursor = edit.span.end
    pieces.append(source[cursor:])
    return "".join(pieces)


def _compare_names(mode: OrderMode, a: str | None, b: str | None) -> int:
    # Unsortable entries are greater than every named entry and tie with each
    # other, so the stable sort keeps them at the end in their original order.
    if a is None and b is None:
        return 0
    if a is None:
        return 1
    if b is None:
        return -1
    return mode.compare(a, b)


def sort_group(group: Sequence[Entry], mode: OrderMode) -> Group:
    """Stable sort of the group's entries by name under ``mode``."""
    keyed = [(extract_name(entry), entry) for entry in group]
    key = cmp_to_key(lambda left, right: _compare_names(mode, left[0], right[0]))
    return tuple(entry for _, entry in sorted(keyed, key=key))


def plan_fix(group: Sequence[Entry], mode: OrderMode) -> tuple[Group, FixPlan]:
    """Return the target order of ``group`` and the edits that rewrite it."""
    target = sort_group(group, mode)
    edits = tuple(
        TextEdit(span=original.span, replacement=wanted.text)
        for original, wanted in zip(group, target)
        if original is not wanted
    )
    return target, FixPlan(edits)
