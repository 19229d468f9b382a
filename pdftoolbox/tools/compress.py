"""Plugin exposing compression helper through the registry."""

from __future__ import annotations

from ..compress.compressor import COMPRESSED_OUTPUT_NAME, compress_document
from ..core.model import InputFile, OutputArtifact
from ..core.utils import get_logger
from .common.interfaces import BaseTool
from .common.pipeline import register_tool

LOGGER = get_logger("pdftoolbox.tools.compress")


@register_tool("compress")
class CompressTool(BaseTool):
    accepts = "pdf"
    single_input = True

    def execute(self, inputs: list[InputFile]) -> list[OutputArtifact]:
        source = inputs[0]
        LOGGER.debug("Compressing %s", source.name)
        artifact, result = compress_document(
            source,
            output_name=self.context.option("output_name", COMPRESSED_OUTPUT_NAME),
        )
        self.context.resources["statistics"] = result
        if self.context.progress_callback is not None:
            self.context.progress_callback(1, 1)
        return [artifact]
