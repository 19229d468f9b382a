"""Plugin re-encoding raster images into another format."""

from __future__ import annotations

from ..core.model import InputFile, OutputArtifact
from ..core.utils import get_logger
from ..raster.converter import RasterFormat, convert_images
from .common.interfaces import BaseTool
from .common.pipeline import register_tool

LOGGER = get_logger("pdftoolbox.tools.convert")


@register_tool("convert_images")
class ConvertImagesTool(BaseTool):
    accepts = "image"

    def execute(self, inputs: list[InputFile]) -> list[OutputArtifact]:
        context = self.context
        settings = context.settings
        fmt = RasterFormat.parse(context.option("format", settings.raster_format))
        quality = context.option("quality", settings.raster_quality)
        isolate = context.option("isolate_failures", settings.isolate_item_failures)

        LOGGER.debug(
            "Converting %d image(s) to %s at quality %s", len(inputs), fmt.value, quality
        )
        batch = convert_images(
            inputs,
            fmt,
            quality,
            isolate_failures=isolate,
            progress_callback=context.progress_callback,
        )
        context.resources["item_errors"] = batch.errors
        return batch.artifacts
