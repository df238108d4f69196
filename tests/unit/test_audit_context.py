"""Tests for the export context."""

import json
from pathlib import Path

import pytest

from bibsql.audit import ExportContext


def _read_manifest(audit_dir: Path) -> dict:
    with (audit_dir / "run.json").open() as f:
        return json.load(f)


def _read_events(audit_dir: Path) -> list[dict]:
    with (audit_dir / "events.jsonl").open() as f:
        return [json.loads(line) for line in f if line.strip()]


@pytest.mark.unit
def test_start_writes_started_event(tmp_path: Path) -> None:
    """Starting a context opens the log with an export_started event."""
    run = ExportContext.start(tmp_path / "audit", parameters={"a": 1}, argv=["bibsql"])
    run.finish()

    events = _read_events(tmp_path / "audit")
    assert events[0]["event"] == "export_started"
    assert events[0]["data"] == {"argv": ["bibsql"], "parameters": {"a": 1}}
    assert events[-1]["event"] == "export_finished"


@pytest.mark.unit
def test_stage_counters_reach_manifest(tmp_path: Path) -> None:
    """Finished stages carry timing and counters."""
    audit_dir = tmp_path / "audit"
    run = ExportContext.start(audit_dir, parameters={}, argv=[])
    run.start_stage("schema")
    run.finish_stage("schema", counters={"statements": 8})
    run.finish(status="success", statements_written=8)

    manifest = _read_manifest(audit_dir)
    assert manifest["status"] == "success"
    assert manifest["stages"][0]["name"] == "schema"
    assert manifest["stages"][0]["counters"] == {"statements": 8}
    assert manifest["stages"][0]["duration_seconds"] >= 0
    assert manifest["environment"]["dependencies"].keys() == {"click", "jsonschema"}


@pytest.mark.unit
def test_finish_unknown_stage_raises(tmp_path: Path) -> None:
    """Finishing a stage that never started is an error."""
    run = ExportContext.start(tmp_path, parameters={}, argv=[])

    with pytest.raises(ValueError, match="Stage not started"):
        run.finish_stage("ghost")
    run.finish()


@pytest.mark.unit
def test_artifact_is_hashed(tmp_path: Path) -> None:
    """Artifacts are registered with their hash and size."""
    output = tmp_path / "out.sql"
    output.write_text("SELECT 1;\n", encoding="utf-8")

    run = ExportContext.start(tmp_path / "audit", parameters={}, argv=[])
    run.add_artifact(output, statement_count=1)
    run.finish()

    artifact = _read_manifest(tmp_path / "audit")["artifacts"][0]
    assert artifact["path"] == str(output)
    assert artifact["sha256"].startswith("sha256:")
    assert artifact["bytes"] == 10
    assert artifact["statement_count"] == 1


@pytest.mark.unit
def test_exception_marks_run_failed(tmp_path: Path) -> None:
    """An exception escaping the context is recorded and re-raised."""
    audit_dir = tmp_path / "audit"

    with pytest.raises(RuntimeError, match="boom"):
        with ExportContext.start(audit_dir, parameters={}, argv=[]):
            raise RuntimeError("boom")

    manifest = _read_manifest(audit_dir)
    assert manifest["status"] == "failed"
    assert manifest["errors"][0]["exception_class"] == "RuntimeError"
    assert "RuntimeError: boom" in manifest["errors"][0]["traceback"]
    assert any(e["event"] == "error" for e in _read_events(audit_dir))


@pytest.mark.unit
def test_finish_twice_writes_once(tmp_path: Path) -> None:
    """A second finish is ignored."""
    audit_dir = tmp_path / "audit"
    run = ExportContext.start(audit_dir, parameters={}, argv=[])
    run.finish(status="failed")
    run.finish(status="success")

    assert _read_manifest(audit_dir)["status"] == "failed"
    assert not (audit_dir / "run.tmp").exists()
