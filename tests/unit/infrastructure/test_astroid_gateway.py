"""Unit tests for AstroidGateway (infrastructure/gateways/astroid_gateway.py)."""

import textwrap

import astroid  # type: ignore[import-untyped]
import pytest

from sorted_keys_linter.domain.entries import EntryKind
from sorted_keys_linter.domain.errors import SourceParseError
from sorted_keys_linter.infrastructure.gateways.astroid_gateway import AstroidGateway


def _entries(gateway: AstroidGateway, code: str):
    parsed = gateway.parse_source(textwrap.dedent(code), "mod.py")
    _, found = next(parsed.structures())
    return found


class TestClassifyKey:
    def test_constant_keys_are_plain(self, gateway: AstroidGateway) -> None:
        found = _entries(gateway, "x = {'a': 1, 1: 2, b'x': 3, None: 4, True: 5, 1.5: 6}\n")
        assert [item.kind for item in found] == [EntryKind.PLAIN] * 6
        assert [item.key_value for item in found] == ["a", 1, b"x", None, True, 1.5]

    def test_foldable_expressions_are_literal_computed(self, gateway: AstroidGateway) -> None:
        found = _entries(gateway, "x = {-1: a, +2: b, ~3: c, f'x': d, ...: e}\n")
        assert [item.kind for item in found] == [EntryKind.LITERAL_COMPUTED] * 5
        assert [item.key_value for item in found] == [-1, 2, -4, "x", Ellipsis]

    def test_runtime_expressions_are_dynamic(self, gateway: AstroidGateway) -> None:
        found = _entries(gateway, "x = {k: 1, f'{k}': 2, a.b: 3, (1, 2): 4, -True: 5, -k: 6}\n")
        assert [item.kind for item in found] == [EntryKind.DYNAMIC_COMPUTED] * 6
        assert all(item.key_value is None for item in found)


class TestEntriesFor:
    def test_display_separator_starts_at_double_star(self, gateway: AstroidGateway) -> None:
        found = _entries(gateway, "x = {'b': 1, **other, 'a': 2}\n")
        assert [item.kind for item in found] == [
            EntryKind.PLAIN, EntryKind.SEPARATOR, EntryKind.PLAIN,
        ]
        assert [item.text for item in found] == ["'b': 1", "**other", "'a': 2"]

    def test_dict_call_keywords(self, gateway: AstroidGateway) -> None:
        found = _entries(gateway, "x = dict(b=1, **other, a=2)\n")
        assert [item.kind for item in found] == [
            EntryKind.PLAIN, EntryKind.SEPARATOR, EntryKind.PLAIN,
        ]
        assert [item.key_value for item in found] == ["b", None, "a"]
        assert [item.text for item in found] == ["b=1", "**other", "a=2"]

    def test_other_calls_have_no_entries(self, gateway: AstroidGateway) -> None:
        module = astroid.parse("dict()\ndict(pairs)\nf(a=1)\nobj.dict(a=1)\n")
        calls = list(module.nodes_of_class(astroid.nodes.Call))
        assert [gateway.entries_for(call) for call in calls] == [None, None, None, None]

    def test_entry_text_covers_parenthesised_key_and_value(self, gateway: AstroidGateway) -> None:
        found = _entries(gateway, "x = {('b'): (1), 'a': [1, 2]}\n")
        assert [item.text for item in found] == ["('b'): (1)", "'a': [1, 2]"]

    def test_spans_are_character_offsets(self, gateway: AstroidGateway) -> None:
        source = "x = {'é': 1, 'a': 2}\n"
        parsed = gateway.parse_source(source, "mod.py")
        _, found = next(parsed.structures())
        assert [source[item.span.start:item.span.end] for item in found] == ["'é': 1", "'a': 2"]

    def test_multiline_entry_lines(self, gateway: AstroidGateway) -> None:
        found = _entries(
            gateway,
            """
            x = {
                'b': [
                    1,
                ],
                'a': 2,
            }
            """,
        )
        assert (found[0].span.start_line, found[0].span.end_line) == (3, 5)
        assert (found[1].span.start_line, found[1].span.end_line) == (6, 6)

    def test_entries_keep_their_nodes(self, gateway: AstroidGateway) -> None:
        found = _entries(gateway, "x = {'a': 1}\n")
        assert isinstance(found[0].node, astroid.nodes.Const)


class TestParsing:
    def test_syntax_error_raises_source_parse_error(self, gateway: AstroidGateway) -> None:
        with pytest.raises(SourceParseError) as info:
            gateway.parse_source("x = {'a': \n", "broken.py")
        assert info.value.path == "broken.py"

    def test_structures_are_outermost_first(self, gateway: AstroidGateway) -> None:
        parsed = gateway.parse_source("x = {'o': {'i': 1}, 'p': dict(q=1)}\n", "mod.py")
        keys = [[item.key_value for item in found] for _, found in parsed.structures()]
        assert keys == [["o", "p"], ["i"], ["q"]]

    def test_empty_dicts_are_not_structures(self, gateway: AstroidGateway) -> None:
        parsed = gateway.parse_source("x = {}\n", "mod.py")
        assert list(parsed.structures()) == []

    def test_token_source_is_shared_with_parsed_module(self, gateway: AstroidGateway) -> None:
        parsed = gateway.parse_source("x = {'a': 1}\n", "mod.py")
        node, _ = next(parsed.structures())
        assert gateway.token_source_for(node) is parsed.tokens

    def test_reads_source_of_foreign_modules(self, gateway: AstroidGateway) -> None:
        module = astroid.parse("x = {'b': 1, 'a': 2}\n")
        node = next(module.nodes_of_class(astroid.nodes.Dict))
        assert [item.text for item in gateway.entries_for(node)] == ["'b': 1", "'a': 2"]

    def test_clear_cache(self, gateway: AstroidGateway) -> None:
        parsed = gateway.parse_source("x = {'a': 1}\n", "mod.py")
        node, _ = next(parsed.structures())
        gateway.clear_cache()
        assert gateway.token_source_for(node) is not parsed.tokens
