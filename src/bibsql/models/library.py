"""Bibliographic data model consumed by the SQL exporter.

Every type here is frozen: the exporter reads the model but never mutates
it, so two independent walks over the same group tree always see the same
structure.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum

__all__ = [
    "BibEntry",
    "EntryType",
    "GroupKind",
    "GroupNode",
    "Library",
]


@dataclass(frozen=True)
class EntryType:
    """Named template declaring which fields an entry of this type uses.

    The four role lists are independent and may overlap.

    Attributes
    ----------
    name : str
        Type name (e.g., 'Article'). Exported lowercased.
    required : tuple[str, ...]
        Required field names.
    optional : tuple[str, ...]
        Optional field names.
    general : tuple[str, ...]
        Fields shared by all types (e.g., 'keywords', 'doi').
    utility : tuple[str, ...]
        Internal bookkeeping fields.
    """

    name: str
    required: tuple[str, ...] = ()
    optional: tuple[str, ...] = ()
    general: tuple[str, ...] = ()
    utility: tuple[str, ...] = ()

    @property
    def label(self) -> str:
        """Case-normalized name used as the row label and lookup key."""
        return self.name.lower()


@dataclass(frozen=True)
class BibEntry:
    """A single bibliography entry.

    Attributes
    ----------
    entry_id : str
        Identifier unique within one export run.
    entry_type : EntryType
        Type definition of this entry.
    cite_key : str | None
        Citation key, if any.
    fields : Mapping[str, str | None]
        Field values keyed by field name.
    """

    entry_id: str
    entry_type: EntryType
    cite_key: str | None = None
    fields: Mapping[str, str | None] = field(default_factory=dict)

    def get_field(self, name: str) -> str | None:
        """Return the value of ``name`` or None when absent."""
        return self.fields.get(name)


class GroupKind(StrEnum):
    """Group variants.

    Only explicit groups enumerate their members; the others select entries
    by rule or only organize the tree.
    """

    ALL_ENTRIES = "all_entries"
    EXPLICIT = "explicit"
    KEYWORD = "keyword"
    SEARCH = "search"


@dataclass(frozen=True)
class GroupNode:
    """Node of the group tree.

    Attributes
    ----------
    label : str
        Group name.
    kind : GroupKind
        Group variant.
    children : tuple[GroupNode, ...]
        Sub-groups in display order.
    members : tuple[str, ...]
        Entry ids of an explicit group. Ignored for other kinds.
    """

    label: str
    kind: GroupKind = GroupKind.EXPLICIT
    children: tuple["GroupNode", ...] = ()
    members: tuple[str, ...] = ()

    @property
    def is_explicit(self) -> bool:
        """Whether this group carries explicit entry membership."""
        return self.kind == GroupKind.EXPLICIT

    def count(self) -> int:
        """Number of nodes in this subtree, including self."""
        total = 0
        stack = [self]
        while stack:
            node = stack.pop()
            total += 1
            stack.extend(node.children)
        return total


@dataclass(frozen=True)
class Library:
    """Everything one export reads: type catalog, entries and group tree.

    Attributes
    ----------
    entry_types : tuple[EntryType, ...]
        Entry-type definitions in catalog order.
    entries : tuple[BibEntry, ...]
        All entries of the library.
    groups : GroupNode | None
        Root of the group tree, or None when the library has no groups.
    """

    entry_types: tuple[EntryType, ...] = ()
    entries: tuple[BibEntry, ...] = ()
    groups: GroupNode | None = None

    def entry_type(self, name: str) -> EntryType | None:
        """Look up an entry type by case-insensitive name."""
        wanted = name.lower()
        for entry_type in self.entry_types:
            if entry_type.label == wanted:
                return entry_type
        return None

    def select_entries(self, keys: Iterable[str] | None = None) -> list[BibEntry]:
        """Return the entries to export, sorted for output.

        Parameters
        ----------
        keys : Iterable[str] | None, optional
            Entry ids to keep. All entries are kept when None.

        Returns
        -------
        list[BibEntry]
            Selected entries sorted by citation key, then entry id.
        """
        if keys is None:
            selected = list(self.entries)
        else:
            wanted = set(keys)
            selected = [e for e in self.entries if e.entry_id in wanted]
        return sorted(selected, key=lambda e: (e.cite_key or "", e.entry_id))
