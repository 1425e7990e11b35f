"""Text based Fixer Gateway."""

import logging
from collections.abc import Sequence
from pathlib import Path

from astroid import MANAGER
from astroid.builder import AstroidBuilder
from astroid.exceptions import AstroidSyntaxError

from sorted_keys_linter.domain.planning import TextEdit, apply_edits
from sorted_keys_linter.domain.protocols import FixerGatewayProtocol

logger = logging.getLogger(__name__)


class TextFixerGateway(FixerGatewayProtocol):
    """Gateway for applying span edits to source text and writing the result safely."""

    def apply_edits(self, source: str, edits: Sequence[TextEdit]) -> str:
        return apply_edits(source, edits)

    def is_valid(self, source: str, file_path: str = "<unknown>") -> bool:
        """True when source still parses as a Python module."""
        try:
            AstroidBuilder(MANAGER).string_build(source, path=file_path)
        except AstroidSyntaxError as exc:
            logger.error("Rewritten %s no longer parses: %s", file_path, exc)
            return False
        return True

    def write_if_valid(self, file_path: str, original: str, updated: str) -> bool:
        """
        Write updated text to file_path.

        Args:
            file_path: Path to the file to modify
            original: Text the edits were computed against
            updated: Text after applying the edits

        Returns:
            True if the file was modified, False otherwise
        """
        if updated == original:
            return False
        if not self.is_valid(updated, file_path):
            return False
        # newline="" keeps the line endings found in the original file.
        with Path(file_path).open("w", encoding="utf-8", newline="") as f:
            f.write(updated)
        logger.debug("Wrote %s", file_path)
        return True
