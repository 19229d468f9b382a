"""Core interfaces and context objects shared by pdftoolbox tools."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Sequence

from ...core.config import Settings
from ...core.model import InputFile, OutputArtifact
from ...core.validator import (
    ensure_image_inputs,
    ensure_min_inputs,
    ensure_pdf_inputs,
    take_single_input,
)

ProgressCallback = Callable[[int, int], None]


@dataclass
class JobContext:
    """Holds the explicit state handed to a tool for one run."""

    inputs: list[InputFile] = field(default_factory=list)
    settings: Settings = field(default_factory=Settings)
    config: dict[str, Any] = field(default_factory=dict)
    resources: dict[str, Any] = field(default_factory=dict)
    progress_callback: ProgressCallback | None = None

    def __post_init__(self) -> None:
        self.inputs = list(self.inputs)

    def option(self, key: str, default: Any = None) -> Any:
        value = self.config.get(key)
        return default if value is None else value

    def with_updates(
        self,
        *,
        inputs: Sequence[InputFile] | None = None,
        config: dict[str, Any] | None = None,
    ) -> "JobContext":
        data = JobContext(
            inputs=list(inputs) if inputs is not None else list(self.inputs),
            settings=self.settings,
            resources=dict(self.resources),
            config=dict(self.config),
            progress_callback=self.progress_callback,
        )
        if config:
            data.config.update(config)
        return data


class BaseTool:
    """Base class for all pluggable pdftoolbox tools.

    Subclasses declare which inputs they accept and implement :meth:`execute`.
    """

    name: ClassVar[str]
    accepts: ClassVar[str] = "pdf"
    min_inputs: ClassVar[int] = 1
    single_input: ClassVar[bool] = False

    def __init__(self, context: JobContext) -> None:
        self.context = context

    def prepare_inputs(self) -> list[InputFile]:
        """Validate the context inputs and return the ones the tool will use."""

        inputs = list(self.context.inputs)
        if self.single_input:
            inputs = [take_single_input(inputs, self.name)]
        else:
            ensure_min_inputs(inputs, self.min_inputs, self.name)
        if self.accepts == "pdf":
            ensure_pdf_inputs(inputs)
        else:
            ensure_image_inputs(inputs)
        self.context.inputs = inputs
        return inputs

    def execute(self, inputs: list[InputFile]) -> list[OutputArtifact]:  # pragma: no cover
        raise NotImplementedError

    def run(self) -> list[OutputArtifact]:
        return self.execute(self.prepare_inputs())

