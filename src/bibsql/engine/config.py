"""Export configuration and result dataclasses."""

import codecs
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from bibsql.sql.schema import SchemaOptions


@dataclass
class ExportConfig:
    """Configuration for one SQL export.

    Attributes
    ----------
    encoding : str
        Output encoding (default: "utf-8").
    eid_width : int
        Width of the entry id column (default: 10).
    cite_key_width : int
        Width of the citation key column (default: 30).
    group_label_width : int
        Width of the group label column (default: 100).
    start_group_id : int
        Id given to the root group (default: 1).
    legacy_foreign_keys : bool
        Emit the legacy foreign-key references (default: True).
    audit_dir : Path | None
        Directory for events.jsonl and run.json. None disables auditing.
    """

    encoding: str = "utf-8"
    eid_width: int = 10
    cite_key_width: int = 30
    group_label_width: int = 100
    start_group_id: int = 1
    legacy_foreign_keys: bool = True
    audit_dir: Path | None = None

    def __post_init__(self) -> None:
        """Validate widths, ids and encoding."""
        for name in ("eid_width", "cite_key_width", "group_label_width"):
            value = getattr(self, name)
            if value < 1:
                raise ValueError(f"{name} must be positive, got {value}")

        if self.start_group_id < 1:
            raise ValueError(f"start_group_id must be positive, got {self.start_group_id}")

        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {self.encoding}") from e

        if self.audit_dir is not None:
            self.audit_dir = Path(self.audit_dir)

    def schema_options(self) -> SchemaOptions:
        """Schema options derived from this config."""
        return SchemaOptions(
            eid_width=self.eid_width,
            cite_key_width=self.cite_key_width,
            group_label_width=self.group_label_width,
            legacy_foreign_keys=self.legacy_foreign_keys,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        data["audit_dir"] = str(self.audit_dir) if self.audit_dir is not None else None
        return data


@dataclass
class ExportResult:
    """Results from one export.

    Attributes
    ----------
    success : bool
        Whether the export completed.
    output_path : str
        Path of the SQL file.
    total_entry_types : int
        Entry-type rows emitted.
    total_entries : int
        Entry rows emitted.
    total_fields : int
        Per-field columns in the schema.
    total_groups : int
        Group rows emitted.
    total_memberships : int
        Entry-group rows emitted.
    total_statements : int
        Statements written.
    run_id : str | None
        Audit run id, when auditing is enabled.
    error_message : str | None
        Error message if failed.
    """

    success: bool
    output_path: str
    total_entry_types: int = 0
    total_entries: int = 0
    total_fields: int = 0
    total_groups: int = 0
    total_memberships: int = 0
    total_statements: int = 0
    run_id: str | None = None
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)
