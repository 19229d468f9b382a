"""Single and bulk export of job artifacts into a sink."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from threading import Lock, Timer
from typing import Any, Callable, List

from ..core.exceptions import JobError
from ..core.model import OutputArtifact
from ..core.utils import get_logger, resolve_path
from .model import ConversionJob, JobStatus

LOGGER = get_logger("pdftoolbox.export")

ExportSink = Callable[[OutputArtifact], Any]
TimerFactory = Callable[..., Any]

DEFAULT_INTERVAL_MS = 100


class DirectorySink:
    """Sink writing each exported artifact into *directory*."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = resolve_path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self.written: List[Path] = []
        self._lock = Lock()

    def __call__(self, artifact: OutputArtifact) -> Path:
        destination = self.directory / Path(artifact.name).name
        destination.write_bytes(artifact.data)
        with self._lock:
            self.written.append(destination)
        LOGGER.debug("Wrote %s (%d bytes)", destination, artifact.size)
        return destination


@dataclass
class ScheduledExport:
    """Handle for one pending bulk-export emission."""

    artifact_name: str
    delay_ms: int
    timer: Any

    def cancel(self) -> None:
        self.timer.cancel()

    def wait(self, timeout: float | None = None) -> None:
        self.timer.join(timeout)


class BatchExportScheduler:
    """Expose the outputs of a succeeded job for single or bulk export.

    Bulk export spaces emissions by ``index * interval_ms`` so that consumers
    which drop rapid-fire triggers receive every artifact.
    """

    def __init__(
        self,
        job: ConversionJob,
        sink: ExportSink,
        *,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        timer_factory: TimerFactory = Timer,
    ) -> None:
        if job.status is not JobStatus.SUCCEEDED:
            raise JobError(f"Job {job.id} has not succeeded (status: {job.status.value})")
        if interval_ms < 0:
            raise ValueError("interval_ms must not be negative")
        self.job = job
        self.sink = sink
        self.interval_ms = interval_ms
        self._timer_factory = timer_factory
        self._pending: list[ScheduledExport] = []
        self._lock = Lock()

    @property
    def artifacts(self) -> list[OutputArtifact]:
        return self.job.artifacts

    def _resolve(self, key: int | str) -> OutputArtifact:
        artifacts = self.artifacts
        if isinstance(key, int):
            try:
                return artifacts[key]
            except IndexError as exc:
                raise KeyError(f"No artifact at position {key}") from exc
        for artifact in artifacts:
            if artifact.name == key:
                return artifact
        raise KeyError(f"No artifact named {key!r}")

    def export(self, key: int | str) -> OutputArtifact:
        """Emit the artifact at position or with name *key* immediately."""

        artifact = self._resolve(key)
        self._emit(artifact)
        return artifact

    def export_all(self) -> list[ScheduledExport]:
        """Schedule every artifact for emission and return without waiting."""

        scheduled: list[ScheduledExport] = []
        for index, artifact in enumerate(self.artifacts):
            delay_ms = index * self.interval_ms
            timer = self._timer_factory(delay_ms / 1000.0, self._emit_scheduled, args=(artifact,))
            scheduled.append(ScheduledExport(artifact.name, delay_ms, timer))

        with self._lock:
            self._pending.extend(scheduled)
        for entry in scheduled:
            entry.timer.start()
        LOGGER.debug(
            "Scheduled %d export(s) at %d ms intervals", len(scheduled), self.interval_ms
        )
        return scheduled

    def wait(self, timeout: float | None = None) -> None:
        """Block until every scheduled emission has run or been cancelled."""

        with self._lock:
            pending = list(self._pending)
        for entry in pending:
            entry.wait(timeout)

    def cancel_pending(self) -> int:
        """Cancel scheduled emissions that have not fired and forget their handles."""

        with self._lock:
            pending, self._pending = self._pending, []
        for entry in pending:
            entry.cancel()
        return len(pending)

    def _emit_scheduled(self, artifact: OutputArtifact) -> None:
        if self.job.released:
            LOGGER.warning(
                "Dropping export of %s: job %s was released", artifact.name, self.job.id
            )
            return
        try:
            self._emit(artifact)
        except Exception:
            LOGGER.exception("Export of %s failed", artifact.name)

    def _emit(self, artifact: OutputArtifact) -> None:
        LOGGER.debug("Exporting %s", artifact.name)
        self.sink(artifact)


__all__ = [
    "BatchExportScheduler",
    "DirectorySink",
    "ExportSink",
    "ScheduledExport",
    "DEFAULT_INTERVAL_MS",
]
