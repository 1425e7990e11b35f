"""Load [tool.sorted-keys] from pyproject.toml. Infrastructure I/O only."""

import logging
import sys
from pathlib import Path

from sorted_keys_linter.domain.constants import PYPROJECT_SECTIONS

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib

logger = logging.getLogger(__name__)


class ConfigFileLoader:
    """Loads config from the nearest pyproject.toml."""

    @staticmethod
    def find_pyproject(start: Path | None = None) -> Path | None:
        current_path = (start or Path.cwd()).resolve()
        for directory in (current_path, *current_path.parents):
            config_file = directory / "pyproject.toml"
            if config_file.is_file():
                return config_file
        return None

    @staticmethod
    def load_config_from_fs(start: Path | None = None) -> dict[str, object]:
        """Load the [tool.sorted-keys] table of the nearest pyproject.toml, or {}."""
        config_file = ConfigFileLoader.find_pyproject(start)
        if config_file is None:
            return {}
        try:
            with config_file.open("rb") as f:
                data = toml_lib.load(f)
        except OSError as exc:
            logger.warning("Cannot read %s: %s", config_file, exc)
            return {}
        except toml_lib.TOMLDecodeError as exc:
            logger.warning("Ignoring malformed %s: %s", config_file, exc)
            return {}
        tool_section = data.get("tool", {}) or {}
        for section in PYPROJECT_SECTIONS:
            config_dict = tool_section.get(section)
            if config_dict:
                logger.debug("Loaded [tool.%s] from %s", section, config_file)
                return dict(config_dict)
        return {}
