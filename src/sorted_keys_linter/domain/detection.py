"""Violation detection over the extracted names of one group."""

from collections.abc import Sequence

from sorted_keys_linter.domain.comparison import OrderMode


def find_first_violation(names: Sequence[str | None], mode: OrderMode) -> int | None:
    """
    Index of the first entry that may not follow its predecessor, or None.

    Pairs where either name is None (unsortable) are skipped, so unsortable
    entries neither trigger a report nor hide a violation next to them.
    """
    for index in range(1, len(names)):
        previous, current = names[index - 1], names[index]
        if previous is None or current is None:
            continue
        if not mode.allows(previous, current):
            return index
    return None


def is_sorted(names: Sequence[str | None], mode: OrderMode) -> bool:
    return find_first_violation(names, mode) is None
