"""Manifest writer for export run metadata."""

import json
import os
from dataclasses import asdict
from pathlib import Path
from typing import Any

from bibsql.audit.models import (
    ArtifactInfo,
    EnvironmentInfo,
    ErrorInfo,
    ManifestData,
    StageInfo,
)
from bibsql.utils import get_iso_timestamp

__all__ = ["MANIFEST_VERSION", "ManifestWriter"]

MANIFEST_VERSION = "1.0.0"


class ManifestWriter:
    """Builds the export manifest and writes it atomically.

    Attributes
    ----------
    manifest : ManifestData
        Manifest being built.
    manifest_path : Path
        Destination of ``run.json``.
    """

    def __init__(
        self,
        run_id: str,
        audit_dir: Path,
        argv: list[str],
        environment: EnvironmentInfo,
        parameters: dict[str, Any],
    ) -> None:
        self.manifest_path = audit_dir / "run.json"
        self.manifest = ManifestData(
            manifest_version=MANIFEST_VERSION,
            run_id=run_id,
            created_at=get_iso_timestamp(),
            status="partial",
            argv=argv,
            environment=environment,
            parameters=parameters,
        )
        self._stage_index: dict[str, StageInfo] = {}

    def _get_stage(self, stage_name: str) -> StageInfo:
        stage = self._stage_index.get(stage_name)
        if stage is None:
            raise ValueError(f"Stage not found: {stage_name}")
        return stage

    def add_stage(self, stage: StageInfo) -> None:
        """Append a stage record."""
        self.manifest.stages.append(stage)
        self._stage_index[stage.name] = stage

    def finish_stage(
        self,
        stage_name: str,
        duration_seconds: float,
        counters: dict[str, int] | None = None,
    ) -> None:
        """Mark stage as finished and merge its counters.

        Raises
        ------
        ValueError
            If the stage was never added.
        """
        stage = self._get_stage(stage_name)
        stage.finished_at = get_iso_timestamp()
        stage.duration_seconds = duration_seconds
        if counters:
            stage.counters.update(counters)

    def add_artifact(self, artifact: ArtifactInfo) -> None:
        """Register an output artifact."""
        self.manifest.artifacts.append(artifact)

    def add_error(self, error: ErrorInfo) -> None:
        """Register an error."""
        self.manifest.errors.append(error)

    def finish(self, status: str, duration_seconds: float | None = None) -> None:
        """Finalize the manifest and write it.

        Parameters
        ----------
        status : str
            Final run status ("success", "failed", "partial").
        duration_seconds : float | None, optional
            Total run duration in seconds.
        """
        self.manifest.status = status
        self.manifest.finished_at = get_iso_timestamp()
        self.manifest.duration_seconds = duration_seconds

        self._write_atomic(self.manifest_path)

    def _write_atomic(self, path: Path) -> None:
        """Write to a temp file, fsync, then rename over ``path``."""
        temp_path = path.with_suffix(".tmp")

        with temp_path.open("w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())

        temp_path.replace(path)

    def to_dict(self) -> dict[str, Any]:
        """Manifest as a plain dictionary."""
        return asdict(self.manifest)
