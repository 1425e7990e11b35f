"""Rule identity and CLI presentation constants."""

RULE_PREFIX: str = "sorted-keys."
RULE_CODE: str = "C9501"
RULE_SYMBOL: str = "unsorted-keys"
DEFAULT_MESSAGE_TEMPLATE: str = "Run autofix to sort these keys! '%s' should not follow '%s'."

PYPROJECT_SECTIONS: tuple[str, ...] = ("sorted-keys", "sorted_keys")

# Each fix pass settles at least one nesting level of dictionaries.
DEFAULT_MAX_FIX_PASSES: int = 10

BANNER: str = "sorted-keys :: dictionary key order"
