"""Unit tests for SortedKeysContainer (infrastructure/di/container.py)."""

from pathlib import Path

import pytest

from sorted_keys_linter.domain.comparison import Direction
from sorted_keys_linter.domain.errors import ConfigurationError
from sorted_keys_linter.infrastructure.di.container import SortedKeysContainer
from sorted_keys_linter.infrastructure.gateways.astroid_gateway import AstroidGateway
from sorted_keys_linter.infrastructure.gateways.text_fixer_gateway import TextFixerGateway
from sorted_keys_linter.infrastructure.telemetry import ConsoleTelemetry


class TestSortedKeysContainer:
    def test_registers_defaults(self) -> None:
        container = SortedKeysContainer()
        assert isinstance(container.get_telemetry_port(), ConsoleTelemetry)
        assert isinstance(container.get_astroid_gateway(), AstroidGateway)
        assert isinstance(container.get_fixer_gateway(), TextFixerGateway)
        assert container.get_guidance_service().get_entry("C9501") is not None
        assert container.get_filesystem_gateway() is container.get("FileSystemGateway")
        assert container.get_reporter() is container.get("ViolationReporter")

    def test_register_and_get_singleton(self) -> None:
        container = SortedKeysContainer()
        mock_dep = {"foo": "bar"}
        container.register_singleton("MockDep", mock_dep)
        assert container.get("MockDep") is mock_dep

    def test_get_missing_dependency_raises_error(self) -> None:
        container = SortedKeysContainer()
        with pytest.raises(ValueError, match=r"Dependency 'Missing' not registered\."):
            container.get("Missing")

    def test_get_instance_is_cached_until_reset(self) -> None:
        first = SortedKeysContainer.get_instance()
        assert SortedKeysContainer.get_instance() is first
        SortedKeysContainer.reset()
        assert SortedKeysContainer.get_instance() is not first

    def test_config_comes_from_pyproject(self, tmp_path: Path, monkeypatch) -> None:
        (tmp_path / "pyproject.toml").write_text(
            '[tool.sorted-keys]\norder = "desc"\n', encoding="utf-8"
        )
        monkeypatch.chdir(tmp_path)
        loader = SortedKeysContainer().get_config_loader()
        assert loader.sort_config.order is Direction.DESC

    def test_invalid_pyproject_config_raises(self, tmp_path: Path, monkeypatch) -> None:
        (tmp_path / "pyproject.toml").write_text(
            "[tool.sorted-keys]\nmin-keys = 1\n", encoding="utf-8"
        )
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ConfigurationError):
            SortedKeysContainer()
