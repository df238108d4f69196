"""Tests for export configuration."""

from pathlib import Path

import pytest

from bibsql.engine.config import ExportConfig, ExportResult


@pytest.mark.unit
def test_defaults() -> None:
    """Defaults match the legacy schema."""
    config = ExportConfig()
    options = config.schema_options()

    assert config.encoding == "utf-8"
    assert config.start_group_id == 1
    assert config.audit_dir is None
    assert (options.eid_width, options.cite_key_width, options.group_label_width) == (10, 30, 100)
    assert options.legacy_foreign_keys is True


@pytest.mark.unit
@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        pytest.param({"eid_width": 0}, "eid_width must be positive", id="eid_width"),
        pytest.param({"cite_key_width": -1}, "cite_key_width must be positive", id="cite_key_width"),
        pytest.param({"group_label_width": 0}, "group_label_width must be positive", id="label_width"),
        pytest.param({"start_group_id": 0}, "start_group_id must be positive", id="start_id"),
        pytest.param({"encoding": "no-such-codec"}, "Unknown encoding", id="encoding"),
    ],
)
def test_invalid_values_rejected(kwargs: dict, message: str) -> None:
    """Invalid settings raise ValueError."""
    with pytest.raises(ValueError, match=message):
        ExportConfig(**kwargs)


@pytest.mark.unit
def test_to_dict_is_json_friendly() -> None:
    """Paths are stringified for the manifest."""
    config = ExportConfig(audit_dir="audit", legacy_foreign_keys=False)

    data = config.to_dict()

    assert isinstance(config.audit_dir, Path)
    assert data["audit_dir"] == "audit"
    assert data["legacy_foreign_keys"] is False


@pytest.mark.unit
def test_result_to_dict() -> None:
    """Results serialize every counter."""
    result = ExportResult(success=False, output_path="out.sql", error_message="boom")

    data = result.to_dict()

    assert data["success"] is False
    assert data["total_statements"] == 0
    assert data["error_message"] == "boom"
