"""Derive the ordered field list shared by the schema and all row emitters."""

from collections.abc import Iterable

from bibsql.models import EntryType

__all__ = ["collect_fields", "role_lists"]


def role_lists(entry_type: EntryType) -> tuple[tuple[str, ...], ...]:
    """Return the role lists of a type in sweep order.

    Order is required, optional, general, utility. Both field collection and
    role coding iterate in this order.
    """
    return (
        entry_type.required,
        entry_type.optional,
        entry_type.general,
        entry_type.utility,
    )


def collect_fields(entry_types: Iterable[EntryType]) -> tuple[str, ...]:
    """Collect the deduplicated union of fields across entry types.

    Parameters
    ----------
    entry_types : Iterable[EntryType]
        Entry-type definitions, scanned in iteration order.

    Returns
    -------
    tuple[str, ...]
        Field names in order of first appearance. This order is the column
        order of every per-field column in the emitted schema and rows.
    """
    seen: set[str] = set()
    fields: list[str] = []
    for entry_type in entry_types:
        for names in role_lists(entry_type):
            for name in names:
                if name not in seen:
                    seen.add(name)
                    fields.append(name)
    return tuple(fields)
