"""Console telemetry: user-facing progress lines rendered with rich."""

from rich.console import Console
from rich.markup import escape

from sorted_keys_linter.domain.constants import BANNER
from sorted_keys_linter.domain.protocols import TelemetryPort


class ConsoleTelemetry(TelemetryPort):
    """TelemetryPort on a rich Console. Progress goes to stderr so reports stay pipeable."""

    def __init__(self, console: Console | None = None, quiet: bool = False) -> None:
        self.console = console or Console(stderr=True, highlight=False)
        self.quiet = quiet

    def handshake(self) -> None:
        if not self.quiet:
            self.console.print(f"[bold cyan]{BANNER}[/bold cyan]")

    def step(self, message: str) -> None:
        if not self.quiet:
            self.console.print(message, markup=False)

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]warning:[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]error:[/bold red] {escape(message)}")
