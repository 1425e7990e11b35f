from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    import astroid

    from sorted_keys_linter.domain.entries import Entry, TokenSpan
    from sorted_keys_linter.domain.planning import TextEdit


class TokenSource(Protocol):
    """Host query used for blank-line detection between two entries."""

    def tokens_between(self, previous: "Entry", following: "Entry") -> Sequence["TokenSpan"]:
        """Tokens and comments strictly between the two entries, in source order."""
        ...


class ParsedModule(Protocol):
    """A parsed source file: its text, its tokens, and its dictionary constructions."""

    path: str
    source: str
    tokens: TokenSource

    def structures(self) -> Iterator[tuple["astroid.nodes.NodeNG", list["Entry"]]]:
        """Yield every dict display / dict() call with its entries, outermost first."""
        ...


class AstroidProtocol(Protocol):
    def parse_source(self, source: str, path: str = "<unknown>") -> ParsedModule:
        """Parse source text. Raises SourceParseError on syntax errors."""
        ...

    def entries_for(self, node: "astroid.nodes.NodeNG") -> list["Entry"] | None:
        """Entries of a Dict or dict(...) Call node; None for any other node."""
        ...

    def token_source_for(self, node: "astroid.nodes.NodeNG") -> TokenSource:
        """Token source of the module the node belongs to."""
        ...


class FixerGatewayProtocol(Protocol):
    def apply_edits(self, source: str, edits: Sequence["TextEdit"]) -> str:
        """Apply non-overlapping edits to source as one batch and return the new text."""
        ...

    def is_valid(self, source: str, file_path: str = "<unknown>") -> bool:
        """True when source still parses as a Python module."""
        ...

    def write_if_valid(self, file_path: str, original: str, updated: str) -> bool:
        """Write updated text when it still parses. Returns True if the file changed."""
        ...


class FileSystemProtocol(Protocol):
    """Protocol for filesystem operations - abstracts Path usage."""

    def glob_python_files(self, path: str) -> list[str]:
        """Get all Python files in path (recursive if directory)."""
        ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content from a file."""
        ...

    def copy_file(self, source: str, destination: str) -> None:
        """Copy a file, preserving metadata."""
        ...

    def relative_path(self, path: str) -> str:
        """Path relative to the working directory when possible."""
        ...


class TelemetryPort(Protocol):
    """Protocol for telemetry/UI updates."""

    def step(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def handshake(self) -> None: ...


class GuidanceServiceProtocol(Protocol):
    def get_display_name(self, rule_code: str) -> str:
        """Return the human-readable name of a rule."""
        ...

    def get_manual_instructions(self, rule_code: str) -> str:
        """Return manual fix instructions for the given rule code."""
        ...
