"""Sequential job orchestration for pdftoolbox tools."""

from __future__ import annotations

from threading import Lock
from typing import Any, Iterable, Optional

from ..core.config import Settings, load_settings
from ..core.exceptions import (
    InputValidationError,
    JobError,
    JobInProgressError,
    PdfToolboxError,
)
from ..core.model import InputFile, ItemFailure, OutputArtifact
from ..core.utils import get_logger
from ..tools import load_builtin_plugins
from ..tools.common.interfaces import JobContext, ProgressCallback
from ..tools.common.pipeline import ToolRegistry, registry as default_registry
from .model import ConversionJob, Operation

LOGGER = get_logger("pdftoolbox.jobs")


def summarize_item_errors(errors: list[ItemFailure], total: int) -> str:
    details = "; ".join(f"{failure.name} ({failure.message})" for failure in errors)
    return f"{len(errors)} of {total} file(s) could not be processed: {details}"


class ConversionJobRunner:
    """Runs jobs for a single tool, one at a time.

    Each call to :meth:`run` creates a fresh :class:`ConversionJob`, releases
    the previous one and processes the inputs in order. The returned job is
    always either succeeded or failed.
    """

    def __init__(
        self,
        operation: Operation | str,
        *,
        settings: Settings | None = None,
        registry: ToolRegistry | None = None,
    ) -> None:
        self.operation = Operation.parse(operation)
        self.settings = settings if settings is not None else load_settings()
        if registry is None:
            load_builtin_plugins()
            registry = default_registry
        if self.operation.value not in registry:
            raise JobError(f"No tool is registered for {self.operation.value!r}")
        self.registry = registry
        self._lock = Lock()
        self._current: Optional[ConversionJob] = None

    @property
    def current_job(self) -> Optional[ConversionJob]:
        return self._current

    @property
    def running(self) -> bool:
        return self._lock.locked()

    def run(
        self,
        inputs: Iterable[InputFile],
        *,
        progress_callback: ProgressCallback | None = None,
        **options: Any,
    ) -> ConversionJob:
        """Run the runner's operation over *inputs* and return the finished job.

        Keyword *options* are passed to the tool (for example ``format`` and
        ``quality`` for image conversion) and override the runner settings.

        Raises:
            JobInProgressError: If another job of this runner is still running.
        """

        if not self._lock.acquire(blocking=False):
            raise JobInProgressError(f"A {self.operation.value} job is already running")
        try:
            self.release()
            job = ConversionJob(operation=self.operation, inputs=list(inputs))
            self._current = job
            self._execute(job, options, progress_callback)
            return job
        finally:
            self._lock.release()

    def _execute(
        self,
        job: ConversionJob,
        options: dict[str, Any],
        progress_callback: ProgressCallback | None,
    ) -> None:
        context = JobContext(
            inputs=job.inputs,
            settings=self.settings,
            config=dict(options),
            progress_callback=progress_callback,
        )
        tool = self.registry.create(self.operation.value, context)

        try:
            job.inputs = tool.prepare_inputs()
        except InputValidationError as exc:
            LOGGER.warning("Rejected %s job %s: %s", job.operation.value, job.id, exc)
            job.mark_failed(exc)
            return

        job.mark_running()
        LOGGER.debug(
            "Started %s job %s with %d input(s)", job.operation.value, job.id, len(job.inputs)
        )
        try:
            outputs = tool.execute(job.inputs)
        except PdfToolboxError as exc:
            LOGGER.error("%s job %s failed: %s", job.operation.value, job.id, exc)
            job.mark_failed(exc)
            return
        except Exception as exc:
            LOGGER.exception("Unexpected error in %s job %s", job.operation.value, job.id)
            job.mark_failed(exc, message=f"Unexpected error: {exc}")
            return

        self._finish(job, outputs, context.resources)

    def _finish(
        self,
        job: ConversionJob,
        outputs: list[OutputArtifact],
        resources: dict[str, Any],
    ) -> None:
        item_errors: list[ItemFailure] = list(resources.get("item_errors") or [])
        if item_errors:
            message = summarize_item_errors(item_errors, len(job.inputs))
            if not outputs:
                LOGGER.error("%s job %s failed: %s", job.operation.value, job.id, message)
                job.mark_failed(PdfToolboxError(message), item_errors=item_errors)
                return
            LOGGER.warning("%s job %s: %s", job.operation.value, job.id, message)
        else:
            message = None

        job.mark_succeeded(
            outputs,
            item_errors=item_errors,
            statistics=resources.get("statistics"),
            message=message,
        )
        LOGGER.info(
            "%s job %s produced %d artifact(s)", job.operation.value, job.id, len(job.outputs)
        )

    def release(self) -> None:
        """Release the outputs of the current job, if any."""

        if self._current is not None:
            LOGGER.debug("Releasing outputs of job %s", self._current.id)
            self._current.release()
            self._current = None


__all__ = ["ConversionJobRunner", "summarize_item_errors"]
