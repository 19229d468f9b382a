"""Plugin turning raster images into a paginated PDF."""

from __future__ import annotations

from ..compose.images import IMAGES_OUTPUT_NAME, images_to_document
from ..core.model import InputFile, OutputArtifact
from ..core.utils import get_logger
from .common.interfaces import BaseTool
from .common.pipeline import register_tool

LOGGER = get_logger("pdftoolbox.tools.images")


@register_tool("images_to_pdf")
class ImagesToPdfTool(BaseTool):
    accepts = "image"

    def execute(self, inputs: list[InputFile]) -> list[OutputArtifact]:
        context = self.context
        page_format = context.option("page_format", context.settings.page_format)
        LOGGER.debug("Placing %d image(s) on %s pages", len(inputs), page_format)
        artifact = images_to_document(
            inputs,
            page_format=page_format,
            quality=context.settings.embed_quality,
            output_name=context.option("output_name", IMAGES_OUTPUT_NAME),
            progress_callback=context.progress_callback,
        )
        return [artifact]
