"""
Group segmentation: split an entry sequence into runs that are sorted
independently of each other.

A group ends at a ``**mapping`` separator, at a dynamic computed key when
``ignore_computed_keys`` is set, and at a blank line when
``allow_line_separated_groups`` is set.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from functools import reduce

from sorted_keys_linter.domain.entries import Entry, Group, TokenSpan
from sorted_keys_linter.domain.protocols import TokenSource


def has_blank_line_between(
    previous: Entry, following: Entry, tokens: Sequence[TokenSpan]
) -> bool:
    """
    True when at least one fully blank line separates the two entries.

    Comments count as content: a comment sitting between two entries on its own
    line does not create a gap, but a blank line above or below it does.
    """
    ends = [previous.span.end_line] + [token.end_line for token in tokens]
    starts = [token.start_line for token in tokens] + [following.span.start_line]
    return any(start - end > 1 for end, start in zip(ends, starts))


@dataclass(frozen=True)
class _Fold:
    """Immutable accumulator: groups closed so far plus the one being built."""

    closed: tuple[Group, ...] = ()
    current: Group = ()

    def close(self) -> "_Fold":
        if not self.current:
            return self
        return _Fold(closed=self.closed + (self.current,))

    def push(self, entry: Entry) -> "_Fold":
        return _Fold(closed=self.closed, current=self.current + (entry,))

    def groups(self) -> tuple[Group, ...]:
        return self.close().closed


def split_into_groups(
    entries: Sequence[Entry],
    *,
    allow_line_separated_groups: bool = False,
    ignore_computed_keys: bool = False,
    tokens: TokenSource | None = None,
) -> tuple[Group, ...]:
    """Return the non-empty groups of ``entries`` in source order."""
    if allow_line_separated_groups and tokens is None:
        raise ValueError("allow_line_separated_groups requires a token source")

    def step(state: _Fold, entry: Entry) -> _Fold:
        if entry.is_separator or (ignore_computed_keys and entry.is_dynamic):
            return state.close()
        if allow_line_separated_groups and state.current:
            previous = state.current[-1]
            between = tokens.tokens_between(previous, entry)  # type: ignore[union-attr]
            if has_blank_line_between(previous, entry, between):
                state = state.close()
        return state.push(entry)

    return reduce(step, entries, _Fold()).groups()
