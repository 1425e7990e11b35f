"""Interface for violation reporting."""

from typing import TYPE_CHECKING, Literal, Protocol

if TYPE_CHECKING:
    from sorted_keys_linter.use_cases.check_keys import CheckResult

OutputFormat = Literal["text", "json"]


class ViolationReporter(Protocol):
    """Protocol for reporting check results."""

    def report(self, result: "CheckResult", output_format: OutputFormat = "text") -> None:
        """Report check results to the user."""
        ...

    def report_diffs(self, diffs: list[str]) -> None:
        """Print unified diffs produced by a dry-run fix."""
        ...
