"""CLI entry points for sorted-keys - Thin Controller using Typer."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from sorted_keys_linter.domain.config import ConfigurationLoader, SortKeysConfig
from sorted_keys_linter.domain.constants import BANNER, DEFAULT_MAX_FIX_PASSES, RULE_CODE
from sorted_keys_linter.domain.errors import ConfigurationError
from sorted_keys_linter.domain.protocols import (
    AstroidProtocol,
    FileSystemProtocol,
    FixerGatewayProtocol,
    GuidanceServiceProtocol,
    TelemetryPort,
)
from sorted_keys_linter.interface.reporters import ViolationReporter
from sorted_keys_linter.use_cases.apply_fixes import ApplyFixesUseCase
from sorted_keys_linter.use_cases.check_keys import CheckKeysUseCase

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_CONFIG_ERROR = 2

# B008: avoid function call in default; use module-level singletons for Typer Options
_PATHS = typer.Argument(None, help="Files or directories to process (default: current directory)")
_ORDER = typer.Option(None, "--order", help="Sort direction: asc or desc")
_NATURAL = typer.Option(None, "--natural/--no-natural", help="Compare digit runs by value")
_CASE_SENSITIVE = typer.Option(
    None, "--case-sensitive/--case-insensitive", help="Distinguish letter case")
_LINE_GROUPS = typer.Option(
    None,
    "--allow-line-separated-groups/--no-allow-line-separated-groups",
    help="Blank lines start a new group",
)
_IGNORE_COMPUTED = typer.Option(
    None,
    "--ignore-computed-keys/--no-ignore-computed-keys",
    help="Only dynamic computed keys end a group",
)
_MIN_KEYS = typer.Option(None, "--min-keys", help="Smallest group that is checked (>= 2)")


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    config_loader: ConfigurationLoader
    telemetry: TelemetryPort
    astroid_gateway: AstroidProtocol
    filesystem: FileSystemProtocol
    fixer_gateway: FixerGatewayProtocol
    reporter: ViolationReporter
    guidance_service: GuidanceServiceProtocol


class CLIAppFactory:
    """Creates the Typer app."""

    @staticmethod
    def resolve_target_paths(paths: Optional[list[Path]]) -> list[str]:
        """Explicit paths, else the current directory."""
        if not paths:
            return ["."]
        return [str(path) for path in paths]

    @staticmethod
    def resolve_config(
        deps: CLIDependencies,
        order: Optional[str],
        natural: Optional[bool],
        case_sensitive: Optional[bool],
        allow_line_separated_groups: Optional[bool],
        ignore_computed_keys: Optional[bool],
        min_keys: Optional[int],
    ) -> SortKeysConfig:
        """pyproject.toml settings with command-line flags on top. Exits with 2 when invalid."""
        try:
            return deps.config_loader.sort_config.with_overrides(
                order=order,
                natural=natural,
                case_sensitive=case_sensitive,
                allow_line_separated_groups=allow_line_separated_groups,
                ignore_computed_keys=ignore_computed_keys,
                min_keys=min_keys,
            )
        except ConfigurationError as exc:
            deps.telemetry.error(f"Invalid configuration: {exc}")
            raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies. No Service Locator."""
        app = typer.Typer(
            name="sorted-keys",
            help=f"{BANNER}\nReport and fix unsorted dictionary keys.",
            add_completion=False,
        )

        @app.command()
        def check(
            paths: Optional[list[Path]] = _PATHS,
            output_format: str = typer.Option(
                "text", "--format", help="Report format: text or json"),
            order: Optional[str] = _ORDER,
            natural: Optional[bool] = _NATURAL,
            case_sensitive: Optional[bool] = _CASE_SENSITIVE,
            allow_line_separated_groups: Optional[bool] = _LINE_GROUPS,
            ignore_computed_keys: Optional[bool] = _IGNORE_COMPUTED,
            min_keys: Optional[int] = _MIN_KEYS,
        ) -> None:
            """Report dictionaries whose keys are out of order."""
            if output_format not in ("text", "json"):
                deps.telemetry.error(f"Unknown format {output_format!r}; use text or json")
                raise typer.Exit(code=EXIT_CONFIG_ERROR)
            config = CLIAppFactory.resolve_config(
                deps, order, natural, case_sensitive,
                allow_line_separated_groups, ignore_computed_keys, min_keys,
            )
            if output_format == "text":
                deps.telemetry.handshake()
            use_case = CheckKeysUseCase(
                astroid_gateway=deps.astroid_gateway,
                filesystem=deps.filesystem,
                telemetry=deps.telemetry,
                config=config,
            )
            result = use_case.execute(CLIAppFactory.resolve_target_paths(paths))
            deps.reporter.report(result, output_format)  # type: ignore[arg-type]
            if result.has_violations() or result.failed_files:
                raise typer.Exit(code=EXIT_VIOLATIONS)

        @app.command()
        def fix(
            paths: Optional[list[Path]] = _PATHS,
            diff: bool = typer.Option(
                False, "--diff", help="Print a unified diff instead of writing files"),
            no_backup: bool = typer.Option(
                False, "--no-backup", help="Do not keep a .bak copy of rewritten files"),
            max_passes: int = typer.Option(
                DEFAULT_MAX_FIX_PASSES, "--max-passes", min=1, help="Upper bound on fix passes per file"),
            order: Optional[str] = _ORDER,
            natural: Optional[bool] = _NATURAL,
            case_sensitive: Optional[bool] = _CASE_SENSITIVE,
            allow_line_separated_groups: Optional[bool] = _LINE_GROUPS,
            ignore_computed_keys: Optional[bool] = _IGNORE_COMPUTED,
            min_keys: Optional[int] = _MIN_KEYS,
        ) -> None:
            """Rewrite unsorted dictionaries in place."""
            config = CLIAppFactory.resolve_config(
                deps, order, natural, case_sensitive,
                allow_line_separated_groups, ignore_computed_keys, min_keys,
            )
            deps.telemetry.handshake()
            use_case = ApplyFixesUseCase(
                fixer_gateway=deps.fixer_gateway,
                filesystem=deps.filesystem,
                astroid_gateway=deps.astroid_gateway,
                telemetry=deps.telemetry,
                config=config,
                create_backups=not no_backup,
                max_passes=max_passes,
            )
            summary = use_case.execute(CLIAppFactory.resolve_target_paths(paths), diff_only=diff)
            if diff:
                deps.reporter.report_diffs(summary.diffs)
            if summary.failed_files:
                raise typer.Exit(code=EXIT_VIOLATIONS)

        @app.command()
        def explain(
            rule: str = typer.Argument(RULE_CODE, help="Rule code or symbol"),
        ) -> None:
            """Show how to fix a rule's violations by hand."""
            typer.echo(f"{rule}: {deps.guidance_service.get_display_name(rule)}")
            typer.echo(deps.guidance_service.get_manual_instructions(rule))

        return app
