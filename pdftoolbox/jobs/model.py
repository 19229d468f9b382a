"""Job records tracked by :class:`pdftoolbox.jobs.runner.ConversionJobRunner`."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..compress.compressor import CompressionResult
from ..core.exceptions import ArtifactReleasedError, InputValidationError, JobError
from ..core.model import InputFile, ItemFailure, OutputArtifact


class Operation(str, Enum):
    """Operations a job can perform; values match the registered tool names."""

    MERGE = "merge"
    IMAGES_TO_PDF = "images_to_pdf"
    SPLIT = "split"
    CONVERT_IMAGES = "convert_images"
    COMPRESS = "compress"

    @classmethod
    def parse(cls, value: "Operation | str") -> "Operation":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "_")
        try:
            return cls(key)
        except ValueError as exc:
            choices = ", ".join(member.value for member in cls)
            raise InputValidationError(
                f"Unknown operation {value!r}; expected one of: {choices}"
            ) from exc


class JobStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(eq=False)
class ConversionJob:
    """One run of one operation over one set of inputs.

    Status changes go through the ``mark_*`` methods, which the runner calls.
    A job owns its outputs until :meth:`release` is called; afterwards
    :attr:`artifacts` raises :class:`ArtifactReleasedError`. Jobs are context
    managers that release their outputs on exit.
    """

    operation: Operation
    inputs: list[InputFile] = field(default_factory=list)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    status: JobStatus = JobStatus.IDLE
    outputs: list[OutputArtifact] = field(default_factory=list)
    error_message: Optional[str] = None
    error: Optional[BaseException] = field(default=None, repr=False)
    item_errors: list[ItemFailure] = field(default_factory=list)
    statistics: Optional[CompressionResult] = None
    released: bool = False

    @property
    def succeeded(self) -> bool:
        return self.status is JobStatus.SUCCEEDED

    @property
    def failed(self) -> bool:
        return self.status is JobStatus.FAILED

    @property
    def finished(self) -> bool:
        return self.status in {JobStatus.SUCCEEDED, JobStatus.FAILED}

    @property
    def artifacts(self) -> list[OutputArtifact]:
        if self.released:
            raise ArtifactReleasedError(f"Outputs of job {self.id} have been released")
        return list(self.outputs)

    def mark_running(self) -> None:
        if self.status is not JobStatus.IDLE:
            raise JobError(f"Job {self.id} cannot start from status {self.status.value}")
        self.status = JobStatus.RUNNING

    def mark_succeeded(
        self,
        outputs: list[OutputArtifact],
        *,
        item_errors: list[ItemFailure] | None = None,
        statistics: CompressionResult | None = None,
        message: str | None = None,
    ) -> None:
        if self.status is not JobStatus.RUNNING:
            raise JobError(f"Job {self.id} is not running")
        self.outputs = list(outputs)
        self.item_errors = list(item_errors or [])
        self.statistics = statistics
        self.error_message = message
        self.status = JobStatus.SUCCEEDED

    def mark_failed(
        self,
        error: BaseException,
        *,
        item_errors: list[ItemFailure] | None = None,
        message: str | None = None,
    ) -> None:
        self.outputs = []
        self.statistics = None
        self.item_errors = list(item_errors or [])
        self.error = error
        self.error_message = message or str(error) or error.__class__.__name__
        self.status = JobStatus.FAILED

    def release(self) -> None:
        """Drop the output buffers; safe to call more than once."""

        self.outputs = []
        self.released = True

    def __enter__(self) -> "ConversionJob":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()


__all__ = ["Operation", "JobStatus", "ConversionJob"]
