"""Standard BibTeX entry-type catalog.

Required and optional fields follow the classic BibTeX style files. Every
type shares the same general and utility fields.
"""

from bibsql.models.library import EntryType

__all__ = [
    "GENERAL_FIELDS",
    "STANDARD_ENTRY_TYPES",
    "UTILITY_FIELDS",
    "standard_entry_type",
]

GENERAL_FIELDS: tuple[str, ...] = (
    "crossref",
    "keywords",
    "file",
    "doi",
    "url",
    "citeseerurl",
    "pdf",
    "comment",
    "owner",
    "timestamp",
)

UTILITY_FIELDS: tuple[str, ...] = ("search",)


def _standard(name: str, required: tuple[str, ...], optional: tuple[str, ...]) -> EntryType:
    return EntryType(
        name=name,
        required=required,
        optional=optional,
        general=GENERAL_FIELDS,
        utility=UTILITY_FIELDS,
    )


STANDARD_ENTRY_TYPES: tuple[EntryType, ...] = (
    _standard(
        "Article",
        ("author", "title", "journal", "year"),
        ("volume", "number", "pages", "month", "note"),
    ),
    _standard(
        "Book",
        ("title", "publisher", "year", "author", "editor"),
        ("volume", "number", "series", "address", "edition", "month", "note"),
    ),
    _standard(
        "Booklet",
        ("title",),
        ("author", "howpublished", "address", "month", "year", "note"),
    ),
    _standard(
        "InBook",
        ("chapter", "pages", "title", "publisher", "year", "author", "editor"),
        ("volume", "number", "series", "type", "address", "edition", "month", "note"),
    ),
    _standard(
        "InCollection",
        ("author", "title", "booktitle", "publisher", "year"),
        (
            "editor",
            "volume",
            "number",
            "series",
            "type",
            "chapter",
            "pages",
            "address",
            "edition",
            "month",
            "note",
        ),
    ),
    _standard(
        "InProceedings",
        ("author", "title", "booktitle", "year"),
        (
            "editor",
            "volume",
            "number",
            "series",
            "pages",
            "address",
            "month",
            "organization",
            "publisher",
            "note",
        ),
    ),
    _standard(
        "Manual",
        ("title",),
        ("author", "organization", "address", "edition", "month", "year", "note"),
    ),
    _standard(
        "MastersThesis",
        ("author", "title", "school", "year"),
        ("type", "address", "month", "note"),
    ),
    _standard(
        "Misc",
        (),
        ("author", "title", "howpublished", "month", "year", "note"),
    ),
    _standard(
        "PhdThesis",
        ("author", "title", "school", "year"),
        ("type", "address", "month", "note"),
    ),
    _standard(
        "Proceedings",
        ("title", "year"),
        (
            "editor",
            "volume",
            "number",
            "series",
            "address",
            "month",
            "organization",
            "publisher",
            "note",
        ),
    ),
    _standard(
        "TechReport",
        ("author", "title", "institution", "year"),
        ("type", "number", "address", "month", "note"),
    ),
    _standard(
        "Unpublished",
        ("author", "title", "note"),
        ("month", "year"),
    ),
)


def standard_entry_type(name: str) -> EntryType | None:
    """Return the standard type named ``name`` (case-insensitive), if any."""
    wanted = name.lower()
    for entry_type in STANDARD_ENTRY_TYPES:
        if entry_type.label == wanted:
            return entry_type
    return None
