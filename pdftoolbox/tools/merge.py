"""Plugin exposing PDF merge capabilities through the registry."""

from __future__ import annotations

from ..compose.merger import MERGED_OUTPUT_NAME, merge_documents
from ..core.model import InputFile, OutputArtifact
from ..core.utils import get_logger
from .common.interfaces import BaseTool
from .common.pipeline import register_tool

LOGGER = get_logger("pdftoolbox.tools.merge")


@register_tool("merge")
class MergeTool(BaseTool):
    accepts = "pdf"
    min_inputs = 2

    def execute(self, inputs: list[InputFile]) -> list[OutputArtifact]:
        output_name = self.context.option("output_name", MERGED_OUTPUT_NAME)
        LOGGER.debug("Merging %d input(s) into %s", len(inputs), output_name)
        artifact = merge_documents(
            inputs,
            output_name=output_name,
            progress_callback=self.context.progress_callback,
        )
        return [artifact]
