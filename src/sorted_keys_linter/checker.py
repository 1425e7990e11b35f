"""
Pylint plugin entry point - composition root for the checker plugin.

Load with ``pylint --load-plugins=sorted_keys_linter.checker``.
"""

from pylint.lint import PyLinter

from sorted_keys_linter.infrastructure.di.container import SortedKeysContainer
from sorted_keys_linter.use_cases.checks.sort_keys import SortKeysChecker


def register(linter: PyLinter) -> None:
    """Register checkers."""
    container = SortedKeysContainer.get_instance()
    linter.register_checker(
        SortKeysChecker(
            linter,
            ast_gateway=container.get_astroid_gateway(),
            config_loader=container.get_config_loader(),
            registry=container.get_guidance_service().get_registry(),
        )
    )
