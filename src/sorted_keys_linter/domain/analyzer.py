"""Key-order analysis of one dictionary construction."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from sorted_keys_linter.domain.config import SortKeysConfig
from sorted_keys_linter.domain.detection import find_first_violation
from sorted_keys_linter.domain.entries import Entry, Group
from sorted_keys_linter.domain.naming import extract_name
from sorted_keys_linter.domain.planning import FixPlan, plan_fix
from sorted_keys_linter.domain.protocols import TokenSource
from sorted_keys_linter.domain.segmentation import split_into_groups

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyOrderViolation:
    """One unsorted group: where to point the diagnostic and how to fix it."""

    group: Group
    target: Group
    anchor_index: int
    fix: FixPlan
    anchor_name: str
    previous_name: str

    @property
    def anchor(self) -> Entry:
        return self.group[self.anchor_index]

    @property
    def previous(self) -> Entry:
        return self.group[self.anchor_index - 1]


class KeyOrderAnalyzer:
    """
    Checks every group of a structure and plans fixes for the unsorted ones.

    Stateless apart from its configuration and token source; one instance can
    analyze any number of structures of the same module.
    """

    def __init__(self, config: SortKeysConfig, tokens: TokenSource | None = None) -> None:
        self._config = config
        self._mode = config.order_mode
        self._tokens = tokens

    @property
    def config(self) -> SortKeysConfig:
        return self._config

    def groups(self, entries: Sequence[Entry]) -> tuple[Group, ...]:
        return split_into_groups(
            entries,
            allow_line_separated_groups=self._config.allow_line_separated_groups,
            ignore_computed_keys=self._config.ignore_computed_keys,
            tokens=self._tokens,
        )

    def analyze(self, entries: Sequence[Entry]) -> tuple[KeyOrderViolation, ...]:
        """Return at most one violation per group of ``entries``."""
        min_keys = self._config.min_keys
        if len(entries) < min_keys:
            return ()

        violations: list[KeyOrderViolation] = []
        groups = self.groups(entries)
        for group in groups:
            if len(group) < min_keys:
                continue
            violation = self.check_group(group)
            if violation is not None:
                violations.append(violation)
        logger.debug(
            "Analyzed %d entries in %d group(s): %d unsorted",
            len(entries), len(groups), len(violations),
        )
        return tuple(violations)

    def check_group(self, group: Group) -> KeyOrderViolation | None:
        names = [extract_name(entry) for entry in group]
        index = find_first_violation(names, self._mode)
        if index is None:
            return None
        target, plan = plan_fix(group, self._mode)
        return KeyOrderViolation(
            group=group,
            target=target,
            anchor_index=index,
            fix=plan,
            anchor_name=names[index] or "",
            previous_name=names[index - 1] or "",
        )
