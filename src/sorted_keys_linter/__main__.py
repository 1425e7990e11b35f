"""Package entry point - composition root. Wire dependencies and run the CLI app."""

import logging
import sys

from sorted_keys_linter.domain.errors import ConfigurationError
from sorted_keys_linter.infrastructure.di.container import SortedKeysContainer
from sorted_keys_linter.interface.cli import EXIT_CONFIG_ERROR, CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    try:
        container = SortedKeysContainer.get_instance()
    except ConfigurationError as exc:
        print(f"error: invalid [tool.sorted-keys] configuration: {exc}", file=sys.stderr)
        sys.exit(EXIT_CONFIG_ERROR)

    deps = CLIDependencies(
        config_loader=container.get_config_loader(),
        telemetry=container.get_telemetry_port(),
        astroid_gateway=container.get_astroid_gateway(),
        filesystem=container.get_filesystem_gateway(),
        fixer_gateway=container.get_fixer_gateway(),
        reporter=container.get_reporter(),
        guidance_service=container.get_guidance_service(),
    )

    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
