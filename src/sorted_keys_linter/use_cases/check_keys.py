"""Use Case: report unsorted dictionary keys across files."""

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from sorted_keys_linter.domain.config import SortKeysConfig
from sorted_keys_linter.domain.constants import RULE_SYMBOL
from sorted_keys_linter.domain.errors import SourceParseError
from sorted_keys_linter.domain.protocols import AstroidProtocol, FileSystemProtocol, TelemetryPort
from sorted_keys_linter.domain.rules import KeyOrderRule, Violation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViolationRecord:
    """One reported violation, flattened for reporters."""

    path: str
    line: int
    column: int
    code: str
    symbol: str
    message: str
    fixable: bool

    def to_dict(self) -> dict[str, object]:
        return {
            "column": self.column,
            "code": self.code,
            "fixable": self.fixable,
            "line": self.line,
            "message": self.message,
            "path": self.path,
            "symbol": self.symbol,
        }


@dataclass
class CheckResult:
    files_checked: int = 0
    violations: list[ViolationRecord] = field(default_factory=list)
    failed_files: list[str] = field(default_factory=list)

    def has_violations(self) -> bool:
        return bool(self.violations)


class CheckKeysUseCase:
    """Run the key-order rule over every dictionary construction of the given paths."""

    def __init__(
        self,
        astroid_gateway: AstroidProtocol,
        filesystem: FileSystemProtocol,
        telemetry: TelemetryPort,
        config: SortKeysConfig,
    ) -> None:
        self.astroid_gateway = astroid_gateway
        self.filesystem = filesystem
        self.telemetry = telemetry
        self.rule = KeyOrderRule(astroid_gateway, config=config)

    def execute(self, paths: Sequence[str]) -> CheckResult:
        result = CheckResult()
        for file_path in self.iter_files(paths, self.filesystem):
            rel_path = self.filesystem.relative_path(file_path)
            result.files_checked += 1
            try:
                source = self.filesystem.read_text(file_path)
                violations = self.check_source(source, file_path)
            except SourceParseError as exc:
                self.telemetry.error(f"file={rel_path} status=failed reason={exc.reason}")
                result.failed_files.append(rel_path)
                continue
            except (OSError, UnicodeDecodeError) as exc:
                self.telemetry.error(f"file={rel_path} status=failed reason={exc}")
                result.failed_files.append(rel_path)
                continue
            result.violations.extend(self.to_record(rel_path, v) for v in violations)
        logger.info(
            "Checked %d file(s): %d violation(s), %d failure(s)",
            result.files_checked, len(result.violations), len(result.failed_files),
        )
        return result

    def check_source(self, source: str, path: str = "<unknown>") -> list[Violation]:
        """All violations of one module's source text, in source order."""
        parsed = self.astroid_gateway.parse_source(source, path)
        violations: list[Violation] = []
        for _node, entries in parsed.structures():
            violations.extend(self.rule.check_entries(entries, parsed.tokens))
        violations.sort(key=lambda v: self.position(v.node))
        return violations

    @staticmethod
    def to_record(path: str, violation: Violation) -> ViolationRecord:
        line, column = CheckKeysUseCase.position(violation.node)
        return ViolationRecord(
            path=path,
            line=line,
            column=column,
            code=violation.code,
            symbol=RULE_SYMBOL,
            message=violation.message,
            fixable=violation.fixable,
        )

    @staticmethod
    def position(node: object) -> tuple[int, int]:
        return (getattr(node, "lineno", 0) or 0, getattr(node, "col_offset", 0) or 0)

    @staticmethod
    def iter_files(paths: Sequence[str], filesystem: FileSystemProtocol) -> Iterator[str]:
        """Python files under paths, each once, in the order given."""
        seen: set[str] = set()
        for path in paths:
            for file_path in filesystem.glob_python_files(path):
                if file_path not in seen:
                    seen.add(file_path)
                    yield file_path
