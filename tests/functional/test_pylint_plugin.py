"""End-to-end: the plugin loaded into a real pylint run, and the fixer on the same file."""

import io
import textwrap
from pathlib import Path

from pylint.lint import Run
from pylint.reporters.text import TextReporter

from sorted_keys_linter.domain.config import SortKeysConfig
from sorted_keys_linter.infrastructure.gateways.astroid_gateway import AstroidGateway
from sorted_keys_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from sorted_keys_linter.infrastructure.gateways.text_fixer_gateway import TextFixerGateway
from sorted_keys_linter.use_cases.apply_fixes import ApplyFixesUseCase
from sorted_keys_linter.use_cases.check_keys import CheckKeysUseCase
from tests.conftest import use_case_deps

SAMPLE = textwrap.dedent(
    """\
    SETTINGS = {
        "timeout": 30,
        "retries": 3,
        **OVERRIDES,
        "verbose": False,
        "debug": True,
    }
    HEADERS = dict(user_agent="x", accept="json")
    """
)


def _pylint(path: Path) -> str:
    output = io.StringIO()
    Run(
        [
            str(path),
            "--load-plugins=sorted_keys_linter.checker",
            "--disable=all",
            "--enable=unsorted-keys",
            "--msg-template={line}:{msg_id}:{msg}",
            "--persistent=n",
        ],
        reporter=TextReporter(output),
        exit=False,
    )
    return output.getvalue()


def test_pylint_reports_each_unsorted_group(tmp_path: Path) -> None:
    target = tmp_path / "settings.py"
    target.write_text(SAMPLE, encoding="utf-8")
    output = _pylint(target)
    assert "3:C9501:Run autofix to sort these keys! 'retries' should not follow 'timeout'." in output
    assert "6:C9501:Run autofix to sort these keys! 'debug' should not follow 'verbose'." in output
    assert "8:C9501:Run autofix to sort these keys! 'accept' should not follow 'user_agent'." in output


def test_fixed_file_is_clean(tmp_path: Path) -> None:
    target = tmp_path / "settings.py"
    target.write_text(SAMPLE, encoding="utf-8")
    deps = use_case_deps(filesystem=FileSystemGateway())
    ApplyFixesUseCase(fixer_gateway=TextFixerGateway(), create_backups=False, **deps).execute(
        [str(target)]
    )
    assert target.read_text(encoding="utf-8") == textwrap.dedent(
        """\
        SETTINGS = {
            "retries": 3,
            "timeout": 30,
            **OVERRIDES,
            "debug": True,
            "verbose": False,
        }
        HEADERS = dict(accept="json", user_agent="x")
        """
    )
    check = CheckKeysUseCase(
        astroid_gateway=AstroidGateway(),
        filesystem=FileSystemGateway(),
        telemetry=deps["telemetry"],
        config=SortKeysConfig(),
    )
    assert not check.execute([str(target)]).has_violations()
    assert "C9501" not in _pylint(target)
