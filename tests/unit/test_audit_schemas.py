"""Tests for schema validation of manifests and events."""

import json
from pathlib import Path

import jsonschema
import pytest

from bibsql.engine import ExportConfig, run_export
from bibsql.models import Library

_SCHEMAS_DIR = Path(__file__).parent.parent.parent / "schemas"


@pytest.fixture(scope="module")
def manifest_schema() -> dict:
    """Load export manifest JSON schema."""
    with (_SCHEMAS_DIR / "export_manifest.schema.json").open() as f:
        return json.load(f)


@pytest.fixture(scope="module")
def event_schema() -> dict:
    """Load log event JSON schema."""
    with (_SCHEMAS_DIR / "log_event.schema.json").open() as f:
        return json.load(f)


@pytest.mark.unit
def test_export_audit_trail_validates(
    tmp_path: Path,
    library: Library,
    manifest_schema: dict,
    event_schema: dict,
) -> None:
    """A real export produces a manifest and events matching the schemas."""
    audit_dir = tmp_path / "audit"
    result = run_export(library, tmp_path / "out.sql", ExportConfig(audit_dir=audit_dir))

    assert result.success

    with (audit_dir / "run.json").open() as f:
        jsonschema.validate(instance=json.load(f), schema=manifest_schema)

    with (audit_dir / "events.jsonl").open() as f:
        for line in f:
            if line.strip():
                jsonschema.validate(instance=json.loads(line), schema=event_schema)


@pytest.mark.unit
def test_invalid_data_rejected_by_schema(manifest_schema: dict, event_schema: dict) -> None:
    """Schemas reject an unknown status and incomplete events."""
    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate(
            instance={
                "manifest_version": "1.0.0",
                "run_id": "x",
                "created_at": "2026-01-01T00:00:00Z",
                "status": "bogus",
                "argv": [],
                "environment": {
                    "python_version": "3.12",
                    "platform": "Linux",
                    "package_version": "0.3.0",
                },
                "parameters": {},
                "stages": [],
                "artifacts": [],
                "errors": [],
            },
            schema=manifest_schema,
        )

    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate(instance={"ts": "x", "run_id": "x"}, schema=event_schema)
