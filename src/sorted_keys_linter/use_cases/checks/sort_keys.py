"""Dictionary key order checks (C9501)."""

from collections.abc import Mapping
from typing import TYPE_CHECKING

import astroid  # type: ignore[import-untyped]
from pylint.checkers import BaseChecker

from sorted_keys_linter.domain.config import ConfigurationLoader
from sorted_keys_linter.domain.registry_types import RuleRegistryEntry
from sorted_keys_linter.domain.rule_msgs import RuleMsgBuilder
from sorted_keys_linter.domain.rules import KeyOrderRule
from sorted_keys_linter.infrastructure.gateways.astroid_gateway import AstroidGateway

if TYPE_CHECKING:
    from pylint.lint import PyLinter


class SortKeysChecker(BaseChecker):
    """C9501: unsorted dictionary keys. Thin: delegates to KeyOrderRule."""

    name: str = "sorted-keys"
    CODES = ["C9501"]

    def __init__(
        self,
        linter: "PyLinter",
        ast_gateway: AstroidGateway,
        config_loader: ConfigurationLoader,
        registry: Mapping[str, RuleRegistryEntry],
    ) -> None:
        self.msgs = RuleMsgBuilder.build_msgs_for_codes(
            registry, self.CODES)  # type: ignore[assignment]
        super().__init__(linter)
        self.config_loader = config_loader
        self._ast_gateway = ast_gateway
        self._key_order_rule = KeyOrderRule(
            ast_gateway=ast_gateway, config_loader=config_loader)

    def visit_dict(self, node: astroid.nodes.Dict) -> None:
        """Delegate C9501 to domain rule; report each violation via add_message."""
        self._report(node)

    def visit_call(self, node: astroid.nodes.Call) -> None:
        """Only dict(...) calls with keyword arguments are checked."""
        if self._ast_gateway.is_dict_call(node):
            self._report(node)

    def leave_module(self, node: astroid.nodes.Module) -> None:
        self._ast_gateway.clear_cache()

    def _report(self, node: astroid.nodes.NodeNG) -> None:
        for v in self._key_order_rule.check(node):
            self.add_message(
                v.code,
                node=v.node if v.node is not None else node,
                args=v.message_args or (),
            )
