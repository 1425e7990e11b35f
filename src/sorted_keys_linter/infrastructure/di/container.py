from typing import TYPE_CHECKING, Any, Optional, cast

from sorted_keys_linter.domain.config import ConfigurationLoader
from sorted_keys_linter.infrastructure.config_file_loader import ConfigFileLoader
from sorted_keys_linter.infrastructure.gateways.astroid_gateway import AstroidGateway
from sorted_keys_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from sorted_keys_linter.infrastructure.gateways.text_fixer_gateway import TextFixerGateway
from sorted_keys_linter.infrastructure.reporters import TerminalViolationReporter
from sorted_keys_linter.infrastructure.services.guidance_service import GuidanceService
from sorted_keys_linter.infrastructure.telemetry import ConsoleTelemetry

if TYPE_CHECKING:
    from sorted_keys_linter.domain.protocols import (
        FileSystemProtocol,
        FixerGatewayProtocol,
        TelemetryPort,
    )
    from sorted_keys_linter.interface.reporters import ViolationReporter


class SortedKeysContainer:
    """Dependency Injection Container for the sorted-keys linter."""

    _instance: Optional["SortedKeysContainer"] = None

    def __init__(self) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default implementations for protocols."""
        config_dict = ConfigFileLoader.load_config_from_fs()
        self.register_singleton(
            "ConfigurationLoader", ConfigurationLoader(config_dict))

        self.register_singleton("TelemetryPort", ConsoleTelemetry())
        self.register_singleton("AstroidGateway", AstroidGateway())
        self.register_singleton("GuidanceService", GuidanceService())
        self.register_singleton("FileSystemGateway", FileSystemGateway())
        self.register_singleton("TextFixerGateway", TextFixerGateway())
        self.register_singleton("ViolationReporter", TerminalViolationReporter())

    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_telemetry_port(self) -> "TelemetryPort":
        """Return the telemetry/UI port."""
        return cast("TelemetryPort", self.get("TelemetryPort"))

    def get_astroid_gateway(self) -> AstroidGateway:
        """Return the Astroid gateway."""
        return cast(AstroidGateway, self.get("AstroidGateway"))

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        """Return the filesystem gateway."""
        return cast("FileSystemProtocol", self.get("FileSystemGateway"))

    def get_fixer_gateway(self) -> "FixerGatewayProtocol":
        """Return the text fixer gateway."""
        return cast("FixerGatewayProtocol", self.get("TextFixerGateway"))

    def get_reporter(self) -> "ViolationReporter":
        """Return the violation reporter."""
        return cast("ViolationReporter", self.get("ViolationReporter"))

    def get_guidance_service(self) -> GuidanceService:
        """Return the guidance service (rule registry)."""
        return cast(GuidanceService, self.get("GuidanceService"))

    def get_config_loader(self) -> ConfigurationLoader:
        """Return the configuration loader (created at composition root)."""
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    @classmethod
    def get_instance(cls) -> "SortedKeysContainer":
        """Get or create global container instance."""
        if cls._instance is None:
            cls._instance = SortedKeysContainer()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (primarily for testing)."""
        cls._instance = None
