"""Use Case: Apply Fixes to Source Code."""

import difflib
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from sorted_keys_linter.domain.config import SortKeysConfig
from sorted_keys_linter.domain.constants import DEFAULT_MAX_FIX_PASSES
from sorted_keys_linter.domain.errors import SourceParseError
from sorted_keys_linter.domain.planning import FixPlan
from sorted_keys_linter.domain.protocols import (
    AstroidProtocol,
    FileSystemProtocol,
    FixerGatewayProtocol,
    TelemetryPort,
)
from sorted_keys_linter.domain.rules import KeyOrderRule
from sorted_keys_linter.use_cases.check_keys import CheckKeysUseCase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceFix:
    """Outcome of fixing one module's text."""

    original: str
    updated: str
    passes: int
    edits: int
    converged: bool

    @property
    def changed(self) -> bool:
        return self.updated != self.original


@dataclass
class FixSummary:
    files_seen: int = 0
    files_modified: list[str] = field(default_factory=list)
    failed_files: list[str] = field(default_factory=list)
    diffs: list[str] = field(default_factory=list)


class ApplyFixesUseCase:
    """
    Rewrite unsorted groups in place.

    Each pass collects the fix plans of every structure of a module, keeps the
    plans that do not overlap an already accepted one, applies them as one
    batch and parses the result again. A dictionary nested in an entry that
    moves is settled by a later pass.
    """

    def __init__(
        self,
        fixer_gateway: FixerGatewayProtocol,
        filesystem: FileSystemProtocol,
        astroid_gateway: AstroidProtocol,
        telemetry: TelemetryPort,
        config: SortKeysConfig,
        create_backups: bool = True,
        max_passes: int = DEFAULT_MAX_FIX_PASSES,
    ) -> None:
        if max_passes < 1:
            raise ValueError(f"max_passes must be at least 1, got {max_passes}")
        self.fixer_gateway = fixer_gateway
        self.filesystem = filesystem
        self.astroid_gateway = astroid_gateway
        self.telemetry = telemetry
        self.create_backups = create_backups
        self.max_passes = max_passes
        self.rule = KeyOrderRule(astroid_gateway, config=config)

    def execute(self, paths: Sequence[str], diff_only: bool = False) -> FixSummary:
        """Fix all files under paths. With diff_only, collect unified diffs instead of writing."""
        summary = FixSummary()
        for file_path in CheckKeysUseCase.iter_files(paths, self.filesystem):
            summary.files_seen += 1
            self._execute_one_file(file_path, summary, diff_only)

        status = "with failures" if summary.failed_files else "complete"
        verb = "would change" if diff_only else "repaired"
        self.telemetry.step(
            f"Fix {status}. Files {verb}: {len(summary.files_modified)} of {summary.files_seen}"
        )
        return summary

    def _execute_one_file(self, file_path: str, summary: FixSummary, diff_only: bool) -> None:
        rel_path = self.filesystem.relative_path(file_path)
        try:
            original = self.filesystem.read_text(file_path)
            result = self.fix_source(original, file_path)
        except SourceParseError as exc:
            self.telemetry.error(f"file={rel_path} status=failed reason={exc.reason}")
            summary.failed_files.append(rel_path)
            return
        except (OSError, UnicodeDecodeError) as exc:
            self.telemetry.error(f"file={rel_path} status=failed reason={exc}")
            summary.failed_files.append(rel_path)
            return

        if not result.converged:
            self.telemetry.warning(
                f"file={rel_path} still unsorted after {result.passes} pass(es); run fix again"
            )
        if not result.changed:
            logger.debug("file=%s status=skipped reason=no_fixable_violations", rel_path)
            return

        if diff_only:
            summary.diffs.append(self.unified_diff(result.original, result.updated, rel_path))
            summary.files_modified.append(rel_path)
            return

        if not self.fixer_gateway.is_valid(result.updated, file_path):
            self.telemetry.error(f"file={rel_path} status=failed reason=rewritten_source_invalid")
            summary.failed_files.append(rel_path)
            return
        if self.create_backups:
            self.filesystem.copy_file(file_path, file_path + ".bak")
        if self.fixer_gateway.write_if_valid(file_path, result.original, result.updated):
            self.telemetry.step(
                f"file={rel_path} status=fixed edits={result.edits} passes={result.passes}"
            )
            summary.files_modified.append(rel_path)

    def fix_source(self, source: str, path: str = "<unknown>") -> SourceFix:
        """Apply fix passes to source until it is sorted or max_passes is reached."""
        current = source
        edits_applied = 0
        for pass_number in range(1, self.max_passes + 1):
            accepted = self.select_plans(self.collect_plans(current, path))
            if not accepted:
                return SourceFix(source, current, pass_number - 1, edits_applied, True)
            edits = [edit for plan in accepted for edit in plan.edits]
            current = self.fixer_gateway.apply_edits(current, edits)
            edits_applied += len(edits)
            logger.debug(
                "%s pass %d: applied %d plan(s), %d edit(s)", path, pass_number, len(accepted), len(edits)
            )
        converged = not self.collect_plans(current, path)
        return SourceFix(source, current, self.max_passes, edits_applied, converged)

    def collect_plans(self, source: str, path: str = "<unknown>") -> list[FixPlan]:
        """Fix plans of every unsorted group in source, outermost structures first."""
        parsed = self.astroid_gateway.parse_source(source, path)
        plans: list[FixPlan] = []
        for _node, entries in parsed.structures():
            for violation in self.rule.check_entries(entries, parsed.tokens):
                plan = self.rule.fix(violation)
                if plan:
                    plans.append(plan)
        return plans

    @staticmethod
    def select_plans(plans: Sequence[FixPlan]) -> list[FixPlan]:
        """Greedily keep plans whose edits do not overlap any plan kept before them."""
        accepted: list[FixPlan] = []
        for plan in plans:
            if not any(plan.overlaps(kept) for kept in accepted):
                accepted.append(plan)
        return accepted

    @staticmethod
    def unified_diff(original: str, updated: str, rel_path: str) -> str:
        return "".join(
            difflib.unified_diff(
                original.splitlines(keepends=True),
                updated.splitlines(keepends=True),
                fromfile=f"a/{rel_path}",
                tofile=f"b/{rel_path}",
            )
        )
