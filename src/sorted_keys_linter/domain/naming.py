"""Name extraction: the sortable name of an entry, or None when it has none."""

from sorted_keys_linter.domain.entries import Entry, EntryKind

# Constants that are literals syntactically but have no meaningful name.
_UNNAMEABLE_CONSTANTS: tuple[object, ...] = (Ellipsis,)


def stringify_key(value: object) -> str:
    """Render a literal key the way it is compared: str(), bytes decoded byte-per-code-point."""
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return str(value)


def extract_name(entry: Entry) -> str | None:
    """Return the entry's key name, or None for unsortable entries."""
    kind = entry.kind
    if kind is EntryKind.SEPARATOR:
        return None
    if kind is EntryKind.PLAIN:
        return stringify_key(entry.key_value)
    if kind is EntryKind.LITERAL_COMPUTED:
        if any(entry.key_value is constant for constant in _UNNAMEABLE_CONSTANTS):
            return None
        return stringify_key(entry.key_value)
    if kind is EntryKind.DYNAMIC_COMPUTED:
        return None
    raise TypeError(f"Unknown entry kind: {kind!r}")
