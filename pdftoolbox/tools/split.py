"""Plugin splitting a PDF into one document per page."""

from __future__ import annotations

from ..compose.splitter import PAGE_NAME_TEMPLATE, split_document
from ..core.model import InputFile, OutputArtifact
from ..core.utils import get_logger
from .common.interfaces import BaseTool
from .common.pipeline import register_tool

LOGGER = get_logger("pdftoolbox.tools.split")


@register_tool("split")
class SplitTool(BaseTool):
    accepts = "pdf"
    single_input = True

    def execute(self, inputs: list[InputFile]) -> list[OutputArtifact]:
        source = inputs[0]
        LOGGER.debug("Splitting %s", source.name)
        return split_document(
            source,
            name_template=self.context.option("name_template", PAGE_NAME_TEMPLATE),
            progress_callback=self.context.progress_callback,
        )
