"""Domain models for rules and violations, and the key-order rule itself."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Protocol

import astroid

from sorted_keys_linter.domain.analyzer import KeyOrderAnalyzer, KeyOrderViolation
from sorted_keys_linter.domain.constants import DEFAULT_MESSAGE_TEMPLATE, RULE_CODE
from sorted_keys_linter.domain.naming import extract_name

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sorted_keys_linter.domain.config import ConfigurationLoader, SortKeysConfig
    from sorted_keys_linter.domain.entries import Entry
    from sorted_keys_linter.domain.planning import FixPlan
    from sorted_keys_linter.domain.protocols import AstroidProtocol, TokenSource

__all__ = [
    "Checkable",
    "Fixable",
    "KeyOrderRule",
    "Violation",
]


@dataclass(frozen=True)
class Violation:
    """A rule violation with code, message, location, and fixability."""

    code: str
    message: str
    location: str
    node: astroid.nodes.NodeNG | None
    fixable: bool = False
    message_args: tuple[str, ...] | None = None
    """Args for Pylint add_message, e.g. (anchor_name, previous_name)."""
    detail: KeyOrderViolation | None = None
    """The analysis result behind this violation; carries the fix plan."""

    @staticmethod
    def _location_from_node(node: astroid.nodes.NodeNG | None) -> str:
        """Compute path:lineno:col_offset from an astroid node. Used by from_node."""
        if node is None:
            return "N/A"
        root = node.root()
        path = getattr(root, "file", "") or ""
        lineno = getattr(node, "lineno", 0)
        col_offset = getattr(node, "col_offset", 0)
        return f"{path}:{lineno}:{col_offset}"

    @classmethod
    def from_node(
        cls,
        *,
        code: str,
        message: str,
        node: astroid.nodes.NodeNG | None,
        fixable: bool = False,
        message_args: tuple[str, ...] | None = None,
        detail: KeyOrderViolation | None = None,
    ) -> "Violation":
        """Build a Violation with location derived from node. Prefer over manual location=."""
        return cls(
            code=code,
            message=message,
            location=cls._location_from_node(node),
            node=node,
            fixable=fixable,
            message_args=message_args,
            detail=detail,
        )


class Checkable(Protocol):
    """One-and-done check: given a node, return violations. No fix required."""

    code: str
    description: str

    def check(self, node: astroid.nodes.NodeNG) -> list[Violation]:
        """Interrogate a node for ordering breaches."""
        ...


class Fixable(Protocol):
    """Optional capability: rule can produce a fix or human fix instructions."""

    fix_type: Literal["code", "comment"]

    def fix(self, violation: Violation) -> "FixPlan | None":
        """Return the text edits resolving the violation, or None when there are none."""
        ...

    def get_fix_instructions(self, violation: Violation) -> str:
        """Provide human instructions for a manual fix."""
        ...


class KeyOrderRule(Checkable, Fixable):
    """
    Rule for C9501: dictionary keys out of order.

    - Detection: every dict display and keyword ``dict(...)`` call is split into
      groups; each unsorted group yields one violation anchored on the first key
      that may not follow its predecessor.
    - Fix: the group's entries are rewritten in sorted order, text swapped
      verbatim so comments and trailing punctuation survive.
    """

    code: str = RULE_CODE
    description: str = "Dictionary keys must be sorted. Auto-fix: reorders the keys."
    fix_type: Literal["code"] = "code"

    def __init__(
        self,
        ast_gateway: "AstroidProtocol",
        config_loader: "ConfigurationLoader | None" = None,
        config: "SortKeysConfig | None" = None,
    ) -> None:
        if config is None:
            if config_loader is None:
                raise ValueError("KeyOrderRule needs a config_loader or a config")
            config = config_loader.sort_config
        self._ast_gateway = ast_gateway
        self._config = config

    @property
    def config(self) -> "SortKeysConfig":
        return self._config

    def check(self, node: astroid.nodes.NodeNG) -> list[Violation]:
        """Check a Dict or dict(...) Call node. Returns one violation per unsorted group."""
        entries = self._ast_gateway.entries_for(node)
        if not entries:
            return []
        return self.check_entries(entries, self._ast_gateway.token_source_for(node))

    def check_entries(
        self, entries: "Sequence[Entry]", tokens: "TokenSource | None" = None
    ) -> list[Violation]:
        """Check already extracted entries of one structure."""
        analyzer = KeyOrderAnalyzer(self._config, tokens)
        return [self.to_violation(result) for result in analyzer.analyze(entries)]

    def to_violation(self, result: KeyOrderViolation) -> Violation:
        anchor_node = result.anchor.node
        return Violation.from_node(
            code=self.code,
            message=DEFAULT_MESSAGE_TEMPLATE % (result.anchor_name, result.previous_name),
            node=anchor_node if isinstance(anchor_node, astroid.nodes.NodeNG) else None,
            fixable=bool(result.fix),
            message_args=(result.anchor_name, result.previous_name),
            detail=result,
        )

    def fix(self, violation: Violation) -> "FixPlan | None":
        if violation.detail is None or not violation.detail.fix:
            return None
        return violation.detail.fix

    def get_fix_instructions(self, violation: Violation) -> str:
        mode = self._config.order_mode
        if violation.detail is None:
            return f"Sort the keys in {mode.label} order."
        names = ", ".join(
            repr(name) if name is not None else "<computed>"
            for name in map(extract_name, violation.detail.target)
        )
        return f"Reorder the keys ({mode.label}): {names}."
