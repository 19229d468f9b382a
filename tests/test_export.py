from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from pdftoolbox.core.config import Settings
from pdftoolbox.core.exceptions import ArtifactReleasedError, JobError
from pdftoolbox.core.model import InputFile, OutputArtifact
from pdftoolbox.jobs import (
    BatchExportScheduler,
    ConversionJob,
    ConversionJobRunner,
    DirectorySink,
    Operation,
)


class FakeTimer:
    """Records scheduling requests instead of starting threads."""

    def __init__(self, interval: float, function: Callable[..., Any], args: tuple = ()) -> None:
        self.interval = interval
        self.function = function
        self.args = args
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def join(self, timeout: float | None = None) -> None:
        pass

    def fire(self) -> None:
        if not self.cancelled:
            self.function(*self.args)


class TimerRecorder:
    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, interval: float, function: Callable[..., Any], args: tuple = ()) -> FakeTimer:
        timer = FakeTimer(interval, function, args)
        self.timers.append(timer)
        return timer


@pytest.fixture()
def split_job(sample_pdf: InputFile) -> ConversionJob:
    runner = ConversionJobRunner(Operation.SPLIT, settings=Settings())
    return runner.run([sample_pdf])


def test_export_all_schedules_spaced_emissions(split_job: ConversionJob) -> None:
    received: list[OutputArtifact] = []
    timers = TimerRecorder()
    scheduler = BatchExportScheduler(split_job, received.append, interval_ms=100, timer_factory=timers)

    scheduled = scheduler.export_all()

    assert [entry.delay_ms for entry in scheduled] == [0, 100, 200, 300, 400]
    assert [timer.interval for timer in timers.timers] == [0.0, 0.1, 0.2, 0.3, 0.4]
    assert all(timer.started for timer in timers.timers)
    assert received == []

    for timer in timers.timers:
        timer.fire()

    assert [artifact.name for artifact in received] == [f"page-{n}.pdf" for n in range(1, 6)]


def test_export_all_can_be_repeated(split_job: ConversionJob) -> None:
    received: list[OutputArtifact] = []
    timers = TimerRecorder()
    scheduler = BatchExportScheduler(split_job, received.append, timer_factory=timers)

    scheduler.export_all()
    scheduler.export_all()
    for timer in timers.timers:
        timer.fire()

    assert len(received) == 10


def test_single_export_is_repeatable(split_job: ConversionJob) -> None:
    received: list[OutputArtifact] = []
    scheduler = BatchExportScheduler(split_job, received.append, timer_factory=TimerRecorder())

    first = scheduler.export(2)
    second = scheduler.export("page-3.pdf")

    assert first == second
    assert [artifact.name for artifact in received] == ["page-3.pdf", "page-3.pdf"]


def test_export_unknown_artifact(split_job: ConversionJob) -> None:
    scheduler = BatchExportScheduler(split_job, lambda artifact: None)

    with pytest.raises(KeyError):
        scheduler.export("page-9.pdf")
    with pytest.raises(KeyError):
        scheduler.export(9)


def test_scheduler_requires_succeeded_job(pdf_factory: Callable[..., InputFile]) -> None:
    job = ConversionJobRunner(Operation.MERGE, settings=Settings()).run([pdf_factory("a.pdf")])

    with pytest.raises(JobError):
        BatchExportScheduler(job, lambda artifact: None)


def test_released_job_drops_pending_emissions(split_job: ConversionJob) -> None:
    received: list[OutputArtifact] = []
    timers = TimerRecorder()
    scheduler = BatchExportScheduler(split_job, received.append, timer_factory=timers)
    scheduler.export_all()

    split_job.release()
    for timer in timers.timers:
        timer.fire()

    assert received == []
    with pytest.raises(ArtifactReleasedError):
        scheduler.export(0)


def test_cancel_pending(split_job: ConversionJob) -> None:
    timers = TimerRecorder()
    scheduler = BatchExportScheduler(split_job, lambda artifact: None, timer_factory=timers)
    scheduler.export_all()

    assert scheduler.cancel_pending() == 5
    assert all(timer.cancelled for timer in timers.timers)


def test_directory_sink_with_real_timers(split_job: ConversionJob, tmp_path: Path) -> None:
    sink = DirectorySink(tmp_path / "out")
    scheduler = BatchExportScheduler(split_job, sink, interval_ms=1)

    scheduler.export_all()
    scheduler.wait(timeout=5)

    assert sorted(path.name for path in sink.written) == sorted(
        f"page-{n}.pdf" for n in range(1, 6)
    )
    assert (tmp_path / "out" / "page-1.pdf").read_bytes().startswith(b"%PDF")


def test_negative_interval_rejected(split_job: ConversionJob) -> None:
    with pytest.raises(ValueError):
        BatchExportScheduler(split_job, lambda artifact: None, interval_ms=-1)
