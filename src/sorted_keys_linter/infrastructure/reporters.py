"""Terminal reporters for check results, rendered with rich."""

import json

from rich.console import Console
from rich.table import Table

from sorted_keys_linter.interface.reporters import OutputFormat, ViolationReporter
from sorted_keys_linter.use_cases.check_keys import CheckResult


class TerminalViolationReporter(ViolationReporter):
    """Writes one line per violation (or a JSON array) to stdout."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)

    def report(self, result: CheckResult, output_format: OutputFormat = "text") -> None:
        if output_format == "json":
            payload = [record.to_dict() for record in result.violations]
            self.console.out(json.dumps(payload, indent=2))
            return
        for record in result.violations:
            self.console.out(
                f"{record.path}:{record.line}:{record.column}: {record.code} {record.message}"
            )
        self.console.print(self.summary_table(result))

    def report_diffs(self, diffs: list[str]) -> None:
        for diff in diffs:
            self.console.out(diff, end="")

    @staticmethod
    def summary_table(result: CheckResult) -> Table:
        fixable = sum(1 for record in result.violations if record.fixable)
        table = Table(title="Dictionary key order", header_style="bold cyan")
        table.add_column("Files checked", justify="right")
        table.add_column("Violations", justify="right")
        table.add_column("Fixable", justify="right")
        table.add_column("Failed files", justify="right")
        table.add_row(
            str(result.files_checked),
            str(len(result.violations)),
            str(fixable),
            str(len(result.failed_files)),
        )
        return table
