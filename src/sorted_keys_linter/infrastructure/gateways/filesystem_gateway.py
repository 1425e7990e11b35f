"""Filesystem Gateway - Infrastructure implementation of FileSystemProtocol."""

import shutil
from pathlib import Path

from sorted_keys_linter.domain.protocols import FileSystemProtocol

_SKIPPED_DIRS = frozenset({".git", ".hg", ".tox", ".venv", "venv", "__pycache__", "build", "dist"})


class FileSystemGateway(FileSystemProtocol):
    """Infrastructure implementation of FileSystemProtocol using pathlib."""

    def glob_python_files(self, path: str) -> list[str]:
        """Get all Python files in path (recursive if directory)."""
        path_obj = Path(path).resolve()
        if path_obj.is_dir():
            return sorted(
                str(p)
                for p in path_obj.glob("**/*.py")
                if not _SKIPPED_DIRS.intersection(p.relative_to(path_obj).parts[:-1])
            )
        return [str(path_obj)] if path_obj.suffix == ".py" else []

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        # newline="" so offsets match the bytes on disk, \r\n included.
        with Path(path).open(encoding=encoding, newline="") as f:
            return f.read()

    def copy_file(self, source: str, destination: str) -> None:
        shutil.copy2(source, destination)

    def relative_path(self, path: str) -> str:
        """Return path relative to cwd for logging; fallback to absolute."""
        try:
            return str(Path(path).resolve().relative_to(Path.cwd()))
        except ValueError:
            return path
