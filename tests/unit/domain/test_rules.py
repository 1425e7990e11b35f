"""Unit tests for KeyOrderRule and Violation (domain/rules.py)."""

import astroid  # type: ignore[import-untyped]
import pytest

from sorted_keys_linter.domain.comparison import Direction
from sorted_keys_linter.domain.config import ConfigurationLoader, SortKeysConfig
from sorted_keys_linter.domain.rules import KeyOrderRule, Violation
from sorted_keys_linter.infrastructure.gateways.astroid_gateway import AstroidGateway


def _dict_node(code: str) -> astroid.nodes.Dict:
    module = astroid.parse(code)
    return next(module.nodes_of_class(astroid.nodes.Dict))


class TestViolation:
    def test_from_node_derives_location(self) -> None:
        module = astroid.parse("x = {'b': 1}\n")
        module.file = "pkg/mod.py"
        node = next(module.nodes_of_class(astroid.nodes.Const))
        violation = Violation.from_node(code="C9501", message="m", node=node)
        assert violation.location == "pkg/mod.py:1:5"

    def test_location_without_node(self) -> None:
        assert Violation.from_node(code="C9501", message="m", node=None).location == "N/A"


class TestKeyOrderRule:
    def test_needs_config_or_loader(self) -> None:
        with pytest.raises(ValueError):
            KeyOrderRule(AstroidGateway())

    def test_takes_config_from_loader(self) -> None:
        rule = KeyOrderRule(AstroidGateway(), config_loader=ConfigurationLoader({"order": "desc"}))
        assert rule.config.order is Direction.DESC

    def test_check_reports_anchor_key(self) -> None:
        rule = KeyOrderRule(AstroidGateway(), config=SortKeysConfig())
        (violation,) = rule.check(_dict_node("x = {'a': 1, 'c': 2, 'b': 3}\n"))
        assert violation.code == "C9501"
        assert violation.message == "Run autofix to sort these keys! 'b' should not follow 'c'."
        assert violation.message_args == ("b", "c")
        assert violation.fixable
        assert isinstance(violation.node, astroid.nodes.Const)
        assert violation.node.value == "b"

    def test_check_sorted_dict(self) -> None:
        rule = KeyOrderRule(AstroidGateway(), config=SortKeysConfig())
        assert rule.check(_dict_node("x = {'a': 1, 'b': 2}\n")) == []

    def test_check_ignores_other_nodes(self) -> None:
        rule = KeyOrderRule(AstroidGateway(), config=SortKeysConfig())
        module = astroid.parse("x = [3, 1, 2]\n")
        assert rule.check(module.body[0].value) == []

    def test_fix_returns_plan(self) -> None:
        rule = KeyOrderRule(AstroidGateway(), config=SortKeysConfig())
        (violation,) = rule.check(_dict_node("x = {'b': 1, 'a': 2}\n"))
        plan = rule.fix(violation)
        assert plan is not None
        assert plan.apply("x = {'b': 1, 'a': 2}\n") == "x = {'a': 2, 'b': 1}\n"

    def test_fix_without_detail(self) -> None:
        rule = KeyOrderRule(AstroidGateway(), config=SortKeysConfig())
        violation = Violation.from_node(code="C9501", message="m", node=None)
        assert rule.fix(violation) is None
        assert rule.get_fix_instructions(violation) == "Sort the keys in ascending case-sensitive order."

    def test_fix_instructions_list_target_order(self) -> None:
        rule = KeyOrderRule(AstroidGateway(), config=SortKeysConfig())
        (violation,) = rule.check(_dict_node("x = {'b': 1, 'a': 2, k: 0}\n"))
        assert rule.get_fix_instructions(violation) == (
            "Reorder the keys (ascending case-sensitive): 'a', 'b', <computed>."
        )
