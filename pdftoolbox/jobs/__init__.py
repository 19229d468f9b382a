"""Job orchestration and artifact export for :mod:`pdftoolbox`."""

from __future__ import annotations

from .export import BatchExportScheduler, DirectorySink, ScheduledExport
from .model import ConversionJob, JobStatus, Operation
from .runner import ConversionJobRunner

__all__ = [
    "BatchExportScheduler",
    "ConversionJob",
    "ConversionJobRunner",
    "DirectorySink",
    "JobStatus",
    "Operation",
    "ScheduledExport",
]
