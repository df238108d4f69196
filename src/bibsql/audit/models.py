"""Data models for the export audit trail and run manifest."""

from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "ArtifactInfo",
    "EnvironmentInfo",
    "ErrorInfo",
    "LogEvent",
    "ManifestData",
    "StageInfo",
]


@dataclass
class EnvironmentInfo:
    """Execution environment information.

    Attributes
    ----------
    python_version : str
        Python version (e.g., "3.12.3").
    platform : str
        OS and architecture (e.g., "Linux-6.8.0-x86_64").
    package_version : str
        bibsql package version.
    dependencies : dict[str, str]
        Key dependency versions.
    """

    python_version: str
    platform: str
    package_version: str
    dependencies: dict[str, str] = field(default_factory=dict)


@dataclass
class ArtifactInfo:
    """Output artifact metadata.

    Attributes
    ----------
    path : str
        Artifact path as given to the exporter.
    sha256 : str
        SHA256 digest with "sha256:" prefix.
    bytes : int | None
        File size in bytes.
    statement_count : int | None
        Number of SQL statements in the artifact.
    """

    path: str
    sha256: str
    bytes: int | None = None
    statement_count: int | None = None


@dataclass
class StageInfo:
    """Export stage information.

    Attributes
    ----------
    name : str
        Stage identifier (e.g., "schema", "entries").
    started_at : str
        ISO8601 start time.
    counters : dict[str, int]
        Stage-specific counts, such as emitted statements.
    finished_at : str | None
        ISO8601 end time.
    duration_seconds : float | None
        Stage duration.
    """

    name: str
    started_at: str
    counters: dict[str, int] = field(default_factory=dict)
    finished_at: str | None = None
    duration_seconds: float | None = None


@dataclass
class ErrorInfo:
    """Error record.

    Attributes
    ----------
    timestamp : str
        ISO8601 time the error was recorded.
    exception_class : str
        Exception class name.
    message : str
        Error message.
    stage : str | None
        Stage where the error occurred.
    traceback : str | None
        Stack trace, if captured.
    """

    timestamp: str
    exception_class: str
    message: str
    stage: str | None = None
    traceback: str | None = None


@dataclass
class ManifestData:
    """Complete export manifest (``run.json``).

    Attributes
    ----------
    manifest_version : str
        Manifest format version (semver).
    run_id : str
        Unique run identifier.
    created_at : str
        ISO8601 UTC time the export started.
    status : str
        Run status ("success", "failed", "partial").
    argv : list[str]
        Command-line arguments of the process.
    environment : EnvironmentInfo
        Execution environment.
    parameters : dict[str, Any]
        Configuration snapshot.
    stages : list[StageInfo]
        Stage records in execution order.
    artifacts : list[ArtifactInfo]
        Files produced by the export.
    finished_at : str | None
        ISO8601 UTC time the export finished.
    duration_seconds : float | None
        Total execution time.
    errors : list[ErrorInfo]
        Error records.
    """

    manifest_version: str
    run_id: str
    created_at: str
    status: str
    argv: list[str]
    environment: EnvironmentInfo
    parameters: dict[str, Any]
    stages: list[StageInfo] = field(default_factory=list)
    artifacts: list[ArtifactInfo] = field(default_factory=list)
    finished_at: str | None = None
    duration_seconds: float | None = None
    errors: list[ErrorInfo] = field(default_factory=list)


@dataclass
class LogEvent:
    """Structured log event, one line of ``events.jsonl``.

    Attributes
    ----------
    ts : str
        ISO8601 timestamp with microseconds (UTC).
    run_id : str
        Unique run identifier.
    level : str
        Log level ("DEBUG", "INFO", "WARN", "ERROR").
    event : str
        Event type identifier.
    data : dict[str, Any]
        Event-specific payload.
    stage : str | None
        Current stage identifier.
    """

    ts: str
    run_id: str
    level: str
    event: str
    data: dict[str, Any]
    stage: str | None = None
