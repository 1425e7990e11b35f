"""Astroid gateway: turns dict displays and dict(...) calls into entry sequences."""

import logging
import operator
from collections.abc import Callable, Iterator

from astroid import MANAGER, nodes
from astroid.builder import AstroidBuilder
from astroid.exceptions import AstroidSyntaxError

from sorted_keys_linter.domain.entries import Entry, EntryKind, SourceSpan
from sorted_keys_linter.domain.errors import SourceParseError
from sorted_keys_linter.domain.protocols import AstroidProtocol, ParsedModule, TokenSource
from sorted_keys_linter.infrastructure.gateways.source_gateway import SourceText, TokenStream

logger = logging.getLogger(__name__)

_PLAIN_CONSTANT_TYPES: tuple[type, ...] = (str, bytes, int, float, complex, bool, type(None))

_UNARY_FOLDS: dict[str, Callable[[object], object]] = {
    "-": operator.neg,
    "+": operator.pos,
    "~": operator.invert,
}

# Sentinel distinguishing "not foldable" from a folded None.
_NOT_CONSTANT = object()


class ModuleSource:
    """Source text and tokens of one module, shared by all its structures."""

    def __init__(self, text: str, path: str = "<unknown>") -> None:
        self.path = path
        self.text = SourceText(text)
        self.tokens = TokenStream(self.text)

    def span_of(self, start_node: nodes.NodeNG, end_node: nodes.NodeNG) -> tuple[int, int]:
        """Character range from start_node's first to end_node's last character."""
        start = self.text.offset_from_byte_col(start_node.lineno, start_node.col_offset)
        end = self.text.offset_from_byte_col(end_node.end_lineno, end_node.end_col_offset)
        return start, end

    def expression_span(self, node: nodes.NodeNG) -> tuple[int, int]:
        return self.tokens.expand_parentheses(*self.span_of(node, node))

    def make_span(self, start: int, end: int) -> SourceSpan:
        return SourceSpan(
            start=start,
            end=end,
            start_line=self.text.line_of(start),
            end_line=self.text.line_of(max(end - 1, start)),
        )


class ParsedSourceModule(ParsedModule):
    """An astroid module parsed from text, with entry extraction bound to it."""

    def __init__(self, gateway: "AstroidGateway", module: nodes.Module, source: ModuleSource) -> None:
        self._gateway = gateway
        self.module = module
        self.path = source.path
        self.source = source.text.text
        self.tokens: TokenSource = source.tokens

    def structures(self) -> Iterator[tuple[nodes.NodeNG, list[Entry]]]:
        for node in self.module.nodes_of_class((nodes.Dict, nodes.Call)):
            entries = self._gateway.entries_for(node)
            if entries:
                yield node, entries


class AstroidGateway(AstroidProtocol):
    """AST gateway: classifies keys and measures entry spans on astroid trees."""

    def __init__(self) -> None:
        # Keyed by id(module); the module itself is kept alive alongside so ids stay unique.
        self._sources: dict[int, tuple[nodes.Module, ModuleSource]] = {}

    def clear_cache(self) -> None:
        self._sources.clear()

    def parse_source(self, source: str, path: str = "<unknown>") -> ParsedSourceModule:
        try:
            module = AstroidBuilder(MANAGER).string_build(source, path=path)
        except AstroidSyntaxError as exc:
            raise SourceParseError(path, str(exc)) from exc
        module_source = ModuleSource(source, path)
        self._sources[id(module)] = (module, module_source)
        return ParsedSourceModule(self, module, module_source)

    def module_source(self, node: nodes.NodeNG) -> ModuleSource:
        module = node.root()
        cached = self._sources.get(id(module))
        if cached is not None and cached[0] is module:
            return cached[1]
        text = self._read_module_text(module)
        source = ModuleSource(text, getattr(module, "file", None) or "<unknown>")
        self._sources[id(module)] = (module, source)
        return source

    def token_source_for(self, node: nodes.NodeNG) -> TokenSource:
        return self.module_source(node).tokens

    @staticmethod
    def _read_module_text(module: nodes.Module) -> str:
        stream = module.stream()
        if stream is None:
            raise SourceParseError(module.name, "module has no source")
        with stream:
            data = stream.read()
        encoding = getattr(module, "file_encoding", None) or "utf-8"
        return data.decode(encoding) if isinstance(data, bytes) else data

    def is_dict_call(self, node: nodes.NodeNG) -> bool:
        return (
            isinstance(node, nodes.Call)
            and isinstance(node.func, nodes.Name)
            and node.func.name == "dict"
            and bool(node.keywords)
        )

    def entries_for(self, node: nodes.NodeNG) -> list[Entry] | None:
        if isinstance(node, nodes.Dict):
            source = self.module_source(node)
            return [self._display_entry(source, key, value) for key, value in node.items]
        if self.is_dict_call(node):
            source = self.module_source(node)
            return [self._keyword_entry(source, keyword) for keyword in node.keywords]
        return None

    # ------------------------------------------------------------------ #
    # Entry construction
    # ------------------------------------------------------------------ #

    def _display_entry(self, source: ModuleSource, key: nodes.NodeNG, value: nodes.NodeNG) -> Entry:
        value_start, value_end = source.expression_span(value)
        if isinstance(key, nodes.DictUnpack):
            start = self._unpack_start(source, value_start)
            return self._entry(source, EntryKind.SEPARATOR, start, value_end, None, key)
        key_start, _ = source.expression_span(key)
        kind, key_value = self.classify_key(key)
        return self._entry(source, kind, key_start, value_end, key_value, key)

    def _keyword_entry(self, source: ModuleSource, keyword: nodes.Keyword) -> Entry:
        value_start, value_end = source.expression_span(keyword.value)
        if keyword.arg is None:
            start = self._unpack_start(source, value_start)
            return self._entry(source, EntryKind.SEPARATOR, start, value_end, None, keyword)
        if keyword.lineno is not None:
            start = source.text.offset_from_byte_col(keyword.lineno, keyword.col_offset)
        else:
            start = self._keyword_start(source, value_start)
        return self._entry(source, EntryKind.PLAIN, start, value_end, keyword.arg, keyword)

    @staticmethod
    def _unpack_start(source: ModuleSource, value_start: int) -> int:
        marker = source.tokens.significant_before(value_start)
        if marker is not None and marker.string == "**":
            return marker.start
        return value_start

    @staticmethod
    def _keyword_start(source: ModuleSource, value_start: int) -> int:
        # Older astroid releases leave keyword positions unset: walk back over "=" and the name.
        equals = source.tokens.significant_before(value_start)
        if equals is None or equals.string != "=":
            return value_start
        name = source.tokens.significant_before(equals.start)
        return name.start if name is not None else equals.start

    @staticmethod
    def _entry(
        source: ModuleSource,
        kind: EntryKind,
        start: int,
        end: int,
        key_value: object,
        node: nodes.NodeNG,
    ) -> Entry:
        return Entry(
            kind=kind,
            span=source.make_span(start, end),
            text=source.text.slice(start, end),
            key_value=key_value,
            node=node,
        )

    def classify_key(self, key: nodes.NodeNG) -> tuple[EntryKind, object]:
        """Map a display key onto an entry kind and, for literal kinds, its value."""
        if isinstance(key, nodes.Const):
            if isinstance(key.value, _PLAIN_CONSTANT_TYPES):
                return EntryKind.PLAIN, key.value
            return EntryKind.LITERAL_COMPUTED, key.value
        folded = self._fold_constant(key)
        if folded is not _NOT_CONSTANT:
            return EntryKind.LITERAL_COMPUTED, folded
        return EntryKind.DYNAMIC_COMPUTED, None

    def _fold_constant(self, key: nodes.NodeNG) -> object:
        if isinstance(key, nodes.UnaryOp) and key.op in _UNARY_FOLDS:
            operand = key.operand
            if (
                isinstance(operand, nodes.Const)
                and isinstance(operand.value, (int, float, complex))
                and not isinstance(operand.value, bool)
            ):
                try:
                    return _UNARY_FOLDS[key.op](operand.value)
                except TypeError:
                    logger.debug("Cannot fold %s%r", key.op, operand.value)
                    return _NOT_CONSTANT
        if isinstance(key, nodes.JoinedStr):
            parts = key.values or []
            if all(isinstance(part, nodes.Const) for part in parts):
                return "".join(str(part.value) for part in parts)
        return _NOT_CONSTANT

