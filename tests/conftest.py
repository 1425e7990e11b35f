"""Pytest configuration shared by all sorted-keys tests.

Run pytest from the project root; pythonpath in pyproject.toml puts src/ and
the project root on sys.path so ``tests.*`` helpers import cleanly.
"""

from unittest.mock import MagicMock

import pytest

from sorted_keys_linter.domain.config import SortKeysConfig
from sorted_keys_linter.infrastructure.di.container import SortedKeysContainer
from sorted_keys_linter.infrastructure.gateways.astroid_gateway import AstroidGateway


@pytest.fixture(autouse=True)
def _reset_container():
    SortedKeysContainer.reset()
    yield
    SortedKeysContainer.reset()


@pytest.fixture
def gateway() -> AstroidGateway:
    return AstroidGateway()


@pytest.fixture
def default_config() -> SortKeysConfig:
    return SortKeysConfig()


def use_case_deps(**overrides: object) -> dict[str, object]:
    """Return dependency mocks for the check/fix use cases. Pass overrides to customize."""
    base: dict[str, object] = {
        "telemetry": MagicMock(),
        "filesystem": MagicMock(),
        "astroid_gateway": AstroidGateway(),
        "config": SortKeysConfig(),
    }
    base.update(overrides)
    return base
