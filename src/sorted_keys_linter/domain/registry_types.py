from typing import TypedDict


class RuleRegistryEntry(TypedDict, total=False):
    """One rule of rule_registry.yaml. Other YAML keys are carried but not read."""

    symbol: str
    message_template: str
    display_name: str
    short_description: str
    manual_instructions: str
