"""Configuration for key ordering. Immutable value objects created by Infrastructure."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import ClassVar

from sorted_keys_linter.domain.comparison import Direction, OrderMode
from sorted_keys_linter.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SortKeysConfig:
    """The six options of the key-order rule, already validated."""

    order: Direction = Direction.ASC
    allow_line_separated_groups: bool = False
    case_sensitive: bool = True
    ignore_computed_keys: bool = False
    min_keys: int = 2
    natural: bool = False

    _BOOL_OPTIONS: ClassVar[tuple[str, ...]] = (
        "allow_line_separated_groups",
        "case_sensitive",
        "ignore_computed_keys",
        "natural",
    )

    def __post_init__(self) -> None:
        if not isinstance(self.order, Direction):
            raise ConfigurationError(f"order must be a Direction, got {self.order!r}")
        for name in self._BOOL_OPTIONS:
            if not isinstance(getattr(self, name), bool):
                raise ConfigurationError(f"{name} must be true or false, got {getattr(self, name)!r}")
        if isinstance(self.min_keys, bool) or not isinstance(self.min_keys, int) or self.min_keys < 2:
            raise ConfigurationError(f"min_keys must be an integer >= 2, got {self.min_keys!r}")

    @property
    def order_mode(self) -> OrderMode:
        return OrderMode(
            direction=self.order,
            case_sensitive=self.case_sensitive,
            natural=self.natural,
        )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, object]) -> "SortKeysConfig":
        """
        Build a config from a [tool.sorted-keys] table.

        Keys may be snake_case or kebab-case. Unknown keys are logged and ignored;
        bad values raise ConfigurationError.
        """
        known = {"order", "min_keys", *cls._BOOL_OPTIONS}
        values: dict[str, object] = {}
        for raw_key, value in mapping.items():
            key = str(raw_key).replace("-", "_")
            if key not in known:
                logger.warning("Ignoring unknown sorted-keys option %r", raw_key)
                continue
            values[key] = value
        if "order" in values:
            values["order"] = cls._parse_order(values["order"])
        return cls(**values)  # type: ignore[arg-type]

    def with_overrides(self, **overrides: object) -> "SortKeysConfig":
        """Copy with the given options replaced. None values mean 'keep current'."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        if "order" in changes:
            changes["order"] = self._parse_order(changes["order"])
        return replace(self, **changes)  # type: ignore[arg-type]

    @staticmethod
    def _parse_order(value: object) -> Direction:
        if isinstance(value, Direction):
            return value
        try:
            return Direction(value)
        except ValueError:
            raise ConfigurationError(f"order must be 'asc' or 'desc', got {value!r}") from None


class ConfigurationLoader:
    """
    Immutable configuration for linter settings.

    Created by Infrastructure from the [tool.sorted-keys] table. Domain does not
    read the filesystem; Infrastructure calls ConfigFileLoader.load_config_from_fs()
    and constructs ConfigurationLoader(config_dict) at composition root.
    """

    def __init__(self, config_dict: Mapping[str, object] | None = None) -> None:
        self._sort_config = SortKeysConfig.from_mapping(dict(config_dict or {}))

    @property
    def sort_config(self) -> SortKeysConfig:
        return self._sort_config
