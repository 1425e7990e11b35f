"""Source text and token access for one module, built on the stdlib tokenizer."""

import io
import tokenize
from bisect import bisect_left, bisect_right
from collections.abc import Sequence
from dataclasses import dataclass

from sorted_keys_linter.domain.entries import Entry, TokenSpan
from sorted_keys_linter.domain.protocols import TokenSource

_LAYOUT_TOKENS = frozenset({
    tokenize.NL,
    tokenize.NEWLINE,
    tokenize.INDENT,
    tokenize.DEDENT,
    tokenize.ENDMARKER,
    tokenize.ENCODING,
})


class SourceText:
    """
    Module text with line/column to character-offset translation.

    AST column offsets are UTF-8 byte offsets; tokenizer columns are character
    offsets. Both are mapped onto character offsets into ``text``.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        # newline="" splits on \n, \r\n and \r exactly like the tokenizer and
        # keeps the original line endings.
        self._lines = io.StringIO(text, newline="").readlines()
        self._line_starts: list[int] = []
        position = 0
        for line in self._lines:
            self._line_starts.append(position)
            position += len(line)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def _line(self, lineno: int) -> tuple[int, str]:
        index = lineno - 1
        if index >= len(self._lines):
            return len(self.text), ""
        return self._line_starts[index], self._lines[index]

    def offset_from_byte_col(self, lineno: int, byte_col: int) -> int:
        start, line = self._line(lineno)
        prefix = line.encode("utf-8")[:byte_col].decode("utf-8", errors="ignore")
        return start + len(prefix)

    def offset_from_char_col(self, lineno: int, char_col: int) -> int:
        start, _ = self._line(lineno)
        return start + char_col

    def line_of(self, offset: int) -> int:
        """1-based line number containing the character at ``offset``."""
        return max(bisect_right(self._line_starts, offset), 1)

    def slice(self, start: int, end: int) -> str:
        return self.text[start:end]


@dataclass(frozen=True)
class Token:
    """A non-layout token with both its line span and its character offsets."""

    type: int
    string: str
    start: int
    end: int
    start_line: int
    end_line: int

    @property
    def is_comment(self) -> bool:
        return self.type == tokenize.COMMENT

    def as_span(self) -> TokenSpan:
        return TokenSpan(start_line=self.start_line, end_line=self.end_line, text=self.string)


class TokenStream(TokenSource):
    """All tokens and comments of a module, searchable by character offset."""

    def __init__(self, source: SourceText) -> None:
        self._source = source
        self._tokens: list[Token] = []
        readline = io.StringIO(source.text, newline="").readline
        for tok in tokenize.generate_tokens(readline):
            if tok.type in _LAYOUT_TOKENS:
                continue
            self._tokens.append(
                Token(
                    type=tok.type,
                    string=tok.string,
                    start=source.offset_from_char_col(*tok.start),
                    end=source.offset_from_char_col(*tok.end),
                    start_line=tok.start[0],
                    end_line=tok.end[0],
                )
            )
        self._starts = [token.start for token in self._tokens]

    def __len__(self) -> int:
        return len(self._tokens)

    def in_range(self, start: int, end: int) -> list[Token]:
        """Tokens lying entirely within [start, end)."""
        first = bisect_left(self._starts, start)
        found: list[Token] = []
        for token in self._tokens[first:]:
            if token.start >= end:
                break
            if token.end <= end:
                found.append(token)
        return found

    def tokens_between(self, previous: Entry, following: Entry) -> Sequence[TokenSpan]:
        return [
            token.as_span()
            for token in self.in_range(previous.span.end, following.span.start)
        ]

    def significant_before(self, offset: int) -> Token | None:
        """Closest non-comment token ending at or before ``offset``."""
        index = bisect_left(self._starts, offset) - 1
        while index >= 0:
            token = self._tokens[index]
            if token.end <= offset and not token.is_comment:
                return token
            index -= 1
        return None

    def significant_after(self, offset: int) -> Token | None:
        """Closest non-comment token starting at or after ``offset``."""
        index = bisect_left(self._starts, offset)
        while index < len(self._tokens):
            token = self._tokens[index]
            if not token.is_comment:
                return token
            index += 1
        return None

    def expand_parentheses(self, start: int, end: int) -> tuple[int, int]:
        """Grow [start, end) over redundant parentheses wrapping an expression."""
        while True:
            before = self.significant_before(start)
            after = self.significant_after(end)
            if before is None or after is None:
                return start, end
            if before.string != "(" or after.string != ")":
                return start, end
            start, end = before.start, after.end
