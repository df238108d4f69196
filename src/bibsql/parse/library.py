"""JSON library documents.

A library document carries the entry-type catalog, the entries and the group
tree of one bibliography. Documents are validated against ``LIBRARY_SCHEMA``
before conversion into the frozen model types.
"""

import json
from pathlib import Path
from typing import Any

import jsonschema

from bibsql.models import (
    STANDARD_ENTRY_TYPES,
    BibEntry,
    EntryType,
    GroupKind,
    GroupNode,
    Library,
)

__all__ = [
    "LIBRARY_SCHEMA",
    "LibraryError",
    "library_from_dict",
    "load_library",
]

_FIELD_LIST: dict[str, Any] = {"type": "array", "items": {"type": "string"}}

LIBRARY_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "bibsql library document",
    "type": "object",
    "properties": {
        "use_standard_types": {"type": "boolean"},
        "entry_types": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name"],
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "required": _FIELD_LIST,
                    "optional": _FIELD_LIST,
                    "general": _FIELD_LIST,
                    "utility": _FIELD_LIST,
                },
                "additionalProperties": False,
            },
        },
        "entries": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "type"],
                "properties": {
                    "id": {"type": "string", "minLength": 1},
                    "type": {"type": "string", "minLength": 1},
                    "cite_key": {"type": ["string", "null"]},
                    "fields": {
                        "type": "object",
                        "additionalProperties": {"type": ["string", "null"]},
                    },
                },
                "additionalProperties": False,
            },
        },
        "groups": {"oneOf": [{"type": "null"}, {"$ref": "#/$defs/group"}]},
    },
    "additionalProperties": False,
    "$defs": {
        "group": {
            "type": "object",
            "required": ["label"],
            "properties": {
                "label": {"type": "string"},
                "kind": {"enum": [kind.value for kind in GroupKind]},
                "members": {"type": "array", "items": {"type": "string"}},
                "children": {"type": "array", "items": {"$ref": "#/$defs/group"}},
            },
            "additionalProperties": False,
        }
    },
}


class LibraryError(Exception):
    """Raised when a library document is invalid."""

    def __init__(
        self,
        message: str,
        file: str | None = None,
    ) -> None:
        """Initialize library error.

        Parameters
        ----------
        message : str
            Error message.
        file : str | None, optional
            File the document was read from.
        """
        super().__init__(message)
        self.file = file


def _entry_type_from_dict(data: dict[str, Any]) -> EntryType:
    return EntryType(
        name=data["name"],
        required=tuple(data.get("required", ())),
        optional=tuple(data.get("optional", ())),
        general=tuple(data.get("general", ())),
        utility=tuple(data.get("utility", ())),
    )


def _group_from_dict(data: dict[str, Any]) -> GroupNode:
    return GroupNode(
        label=data["label"],
        kind=GroupKind(data.get("kind", GroupKind.EXPLICIT)),
        children=tuple(_group_from_dict(child) for child in data.get("children", ())),
        members=tuple(data.get("members", ())),
    )


def _resolve_entry_types(doc: dict[str, Any]) -> tuple[EntryType, ...]:
    """Merge declared types over the standard catalog when requested.

    A declared type replaces the standard type of the same name in place;
    other declared types are appended in document order.
    """
    declared = [_entry_type_from_dict(item) for item in doc.get("entry_types", ())]
    if "entry_types" in doc and not doc.get("use_standard_types", False):
        return tuple(declared)

    overrides = {entry_type.label: entry_type for entry_type in declared}
    merged = [overrides.pop(t.label, t) for t in STANDARD_ENTRY_TYPES]
    merged.extend(t for t in declared if t.label in overrides)
    return tuple(merged)


def library_from_dict(doc: dict[str, Any]) -> Library:
    """Validate a library document and build the model.

    Parameters
    ----------
    doc : dict[str, Any]
        Decoded JSON document.

    Returns
    -------
    Library
        Frozen library model.

    Raises
    ------
    LibraryError
        If the document violates ``LIBRARY_SCHEMA``, an entry names an
        undeclared entry type, or two entries share an id.
    """
    try:
        jsonschema.validate(instance=doc, schema=LIBRARY_SCHEMA)
    except jsonschema.ValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise LibraryError(f"Invalid library document at {location}: {e.message}") from e

    types_only = Library(entry_types=_resolve_entry_types(doc))

    entries: list[BibEntry] = []
    seen_ids: set[str] = set()
    for item in doc.get("entries", ()):
        if item["id"] in seen_ids:
            raise LibraryError(f"Duplicate entry id {item['id']!r}")
        seen_ids.add(item["id"])
        entry_type = types_only.entry_type(item["type"])
        if entry_type is None:
            raise LibraryError(f"Entry {item['id']!r} has unknown entry type {item['type']!r}")
        entries.append(
            BibEntry(
                entry_id=item["id"],
                entry_type=entry_type,
                cite_key=item.get("cite_key"),
                fields=dict(item.get("fields", {})),
            )
        )

    groups_doc = doc.get("groups")
    return Library(
        entry_types=types_only.entry_types,
        entries=tuple(entries),
        groups=_group_from_dict(groups_doc) if groups_doc is not None else None,
    )


def load_library(path: str | Path) -> Library:
    """Read and validate a JSON library document.

    Parameters
    ----------
    path : str | Path
        Path to the document.

    Returns
    -------
    Library
        Frozen library model.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    LibraryError
        If the file is not valid JSON or not a valid library document.
    """
    file_path = Path(path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with file_path.open("r", encoding="utf-8") as f:
        try:
            doc = json.load(f)
        except json.JSONDecodeError as e:
            raise LibraryError(f"Failed to parse {file_path.name}: {e}", file=str(file_path)) from e

    try:
        return library_from_dict(doc)
    except LibraryError as e:
        raise LibraryError(f"{file_path.name}: {e}", file=str(file_path)) from e
