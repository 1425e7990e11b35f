"""Exception hierarchy for the sorted-keys linter."""


class SortKeysError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(SortKeysError, ValueError):
    """Raised when [tool.sorted-keys] or CLI overrides hold an invalid value."""


class OverlappingEditsError(SortKeysError, AssertionError):
    """Raised when a fix plan would replace two intersecting source spans."""


class SourceParseError(SortKeysError, ValueError):
    """Raised when a Python source file cannot be parsed into entries."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
