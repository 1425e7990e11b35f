"""Unit tests for RuleMsgBuilder (domain/rule_msgs.py)."""

import unittest

from sorted_keys_linter.domain.constants import RULE_PREFIX
from sorted_keys_linter.domain.rule_msgs import RuleMsgBuilder


def _registry(*entries: tuple[str, dict[str, object]]) -> dict[str, object]:
    """Build a registry dict from (key, value) pairs."""
    return dict(entries)


_C9501 = (
    f"{RULE_PREFIX}C9501",
    {
        "symbol": "unsorted-keys",
        "display_name": "Dictionary keys must be sorted",
        "message_template": "'%s' should not follow '%s'.",
    },
)


class TestRuleMsgBuilderGetEntry(unittest.TestCase):
    """Tests for RuleMsgBuilder.get_entry."""

    def test_returns_entry_by_code(self) -> None:
        entry = RuleMsgBuilder.get_entry(_registry(_C9501), "C9501")
        self.assertIsNotNone(entry)
        self.assertEqual(entry.get("symbol"), "unsorted-keys")

    def test_returns_entry_by_symbol(self) -> None:
        entry = RuleMsgBuilder.get_entry(_registry(_C9501), "unsorted-keys")
        self.assertIsNotNone(entry)
        self.assertEqual(entry.get("message_template"), "'%s' should not follow '%s'.")

    def test_returns_none_for_unknown_code(self) -> None:
        self.assertIsNone(RuleMsgBuilder.get_entry(_registry(_C9501), "C9999"))
        self.assertIsNone(RuleMsgBuilder.get_entry({}, "C9501"))

    def test_ignores_foreign_prefixes(self) -> None:
        registry = _registry(("other.C9501", {"symbol": "unsorted-keys"}))
        self.assertIsNone(RuleMsgBuilder.get_entry(registry, "unsorted-keys"))

    def test_returns_none_when_entry_is_not_dict(self) -> None:
        registry = {f"{RULE_PREFIX}C9501": "not a dict"}
        self.assertIsNone(RuleMsgBuilder.get_entry(registry, "C9501"))


class TestBuildMsgsForCodes(unittest.TestCase):
    """Tests for RuleMsgBuilder.build_msgs_for_codes."""

    def test_builds_pylint_tuple(self) -> None:
        msgs = RuleMsgBuilder.build_msgs_for_codes(_registry(_C9501), ["C9501"])
        self.assertEqual(
            msgs,
            {
                "C9501": (
                    "'%s' should not follow '%s'.",
                    "unsorted-keys",
                    "Dictionary keys must be sorted",
                )
            },
        )

    def test_skips_entries_without_template(self) -> None:
        registry = _registry((f"{RULE_PREFIX}C9501", {"symbol": "unsorted-keys"}))
        self.assertEqual(RuleMsgBuilder.build_msgs_for_codes(registry, ["C9501"]), {})

    def test_falls_back_to_code_for_symbol_and_description(self) -> None:
        registry = _registry((f"{RULE_PREFIX}C9501", {"message_template": "m"}))
        msgs = RuleMsgBuilder.build_msgs_for_codes(registry, ["C9501"])
        self.assertEqual(msgs["C9501"], ("m", "C9501", "C9501"))
