"""Export context manager tying the event log to the run manifest."""

import sys
import traceback
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from bibsql.audit.helpers import (
    generate_run_id,
    get_dependency_versions,
    get_package_version,
    get_platform_info,
    get_python_version,
)
from bibsql.audit.logger import AuditLogger
from bibsql.audit.manifest import ManifestWriter
from bibsql.audit.models import ArtifactInfo, EnvironmentInfo, ErrorInfo, StageInfo
from bibsql.utils import calculate_file_sha256, get_iso_timestamp

__all__ = ["ExportContext"]


class ExportContext:
    """Lifecycle of one audited export.

    Writes ``events.jsonl`` and ``run.json`` into the audit directory and
    keeps stage timings itself.

    Attributes
    ----------
    run_id : str
        Unique run identifier.
    audit_dir : Path
        Directory holding the event log and manifest.
    audit_logger : AuditLogger
        Structured event logger.
    manifest_writer : ManifestWriter
        Manifest builder and writer.
    start_time : datetime
        Run start timestamp.
    """

    def __init__(
        self,
        run_id: str,
        audit_dir: Path,
        audit_logger: AuditLogger,
        manifest_writer: ManifestWriter,
    ) -> None:
        self.run_id = run_id
        self.audit_dir = audit_dir
        self.audit_logger = audit_logger
        self.manifest_writer = manifest_writer
        self.start_time = datetime.now(UTC)
        self._stage_start_times: dict[str, datetime] = {}
        self._finished = False

    @classmethod
    def start(
        cls,
        audit_dir: Path,
        parameters: dict[str, Any],
        argv: list[str] | None = None,
    ) -> "ExportContext":
        """Start a new export context.

        Parameters
        ----------
        audit_dir : Path
            Directory for ``events.jsonl`` and ``run.json``. Created if
            missing.
        parameters : dict[str, Any]
            Configuration snapshot recorded in the manifest.
        argv : list[str] | None, optional
            Command-line arguments, uses sys.argv if None.

        Returns
        -------
        ExportContext
            Started context.
        """
        run_id = generate_run_id()
        audit_dir.mkdir(parents=True, exist_ok=True)
        argv = list(argv if argv is not None else sys.argv)

        environment = EnvironmentInfo(
            python_version=get_python_version(),
            platform=get_platform_info(),
            package_version=get_package_version(),
            dependencies=get_dependency_versions(["click", "jsonschema"]),
        )

        audit_logger = AuditLogger(run_id=run_id, log_path=audit_dir / "events.jsonl")
        manifest_writer = ManifestWriter(
            run_id=run_id,
            audit_dir=audit_dir,
            argv=argv,
            environment=environment,
            parameters=parameters,
        )

        audit_logger.export_started(argv=argv, parameters=parameters)

        return cls(
            run_id=run_id,
            audit_dir=audit_dir,
            audit_logger=audit_logger,
            manifest_writer=manifest_writer,
        )

    def start_stage(self, stage_name: str) -> None:
        """Start an export stage."""
        self._stage_start_times[stage_name] = datetime.now(UTC)
        self.manifest_writer.add_stage(StageInfo(name=stage_name, started_at=get_iso_timestamp()))
        self.audit_logger.stage_started(stage_name)

    def finish_stage(self, stage_name: str, counters: dict[str, int] | None = None) -> None:
        """Finish an export stage.

        Raises
        ------
        ValueError
            If stage was not started.
        """
        start_time = self._stage_start_times.pop(stage_name, None)
        if start_time is None:
            raise ValueError(f"Stage not started: {stage_name}")

        duration = (datetime.now(UTC) - start_time).total_seconds()
        self.manifest_writer.finish_stage(stage_name, duration, counters)
        self.audit_logger.stage_finished(stage_name, duration, counters)

    def add_artifact(self, path: Path, statement_count: int | None = None) -> None:
        """Hash a written file and register it as an output artifact."""
        sha256 = calculate_file_sha256(path)
        size = path.stat().st_size
        self.manifest_writer.add_artifact(
            ArtifactInfo(path=str(path), sha256=sha256, bytes=size, statement_count=statement_count)
        )
        self.audit_logger.artifact_written(
            path=str(path),
            sha256=sha256,
            bytes_written=size,
            statement_count=statement_count,
        )

    def record_error(
        self,
        exception: BaseException,
        stage: str | None = None,
        include_traceback: bool = False,
    ) -> None:
        """Record an error in the event log and manifest."""
        tb = None
        if include_traceback:
            tb = "".join(
                traceback.format_exception(type(exception), exception, exception.__traceback__)
            )

        error_info = ErrorInfo(
            timestamp=get_iso_timestamp(),
            exception_class=type(exception).__name__,
            message=str(exception),
            stage=stage,
            traceback=tb,
        )
        self.manifest_writer.add_error(error_info)
        self.audit_logger.error(
            exception_class=error_info.exception_class,
            message=error_info.message,
            stage=stage,
            traceback=tb,
        )

    def finish(self, status: str = "success", statements_written: int | None = None) -> None:
        """Finish the run: close the event log, then write the manifest.

        Calling ``finish`` more than once has no further effect.
        """
        if self._finished:
            return
        self._finished = True

        duration = (datetime.now(UTC) - self.start_time).total_seconds()
        self.audit_logger.export_finished(
            status=status,
            duration_seconds=duration,
            statements_written=statements_written,
        )
        self.audit_logger.close()
        self.manifest_writer.finish(status=status, duration_seconds=duration)

    def __enter__(self) -> "ExportContext":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Finish the run, recording the exception if one escaped."""
        if exc_type is not None:
            self.record_error(exc_val, include_traceback=True)
            self.finish(status="failed")
        else:
            self.finish(status="success")
