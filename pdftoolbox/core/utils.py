"""Utilities shared by pdftoolbox components."""

from __future__ import annotations

import logging
import re
from pathlib import Path

_EXTENSION_PATTERN = re.compile(r"\.[^/.]+$")


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
    return logger


def set_log_level(level: int | str) -> None:
    """Apply *level* to the ``pdftoolbox`` logger hierarchy."""

    if isinstance(level, str):
        level = level.upper()
    root = logging.getLogger("pdftoolbox")
    root.setLevel(level)
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith("pdftoolbox.") and isinstance(logger, logging.Logger):
            logger.setLevel(level)


def resolve_path(path: str | Path | None) -> Path:
    if path is None:
        raise ValueError("Path must not be None")
    resolved = Path(path).expanduser().resolve()
    return resolved


def replace_extension(name: str, extension: str) -> str:
    """Return *name* with its extension swapped for *extension*.

    Names without an extension get *extension* appended.
    """

    suffix = f".{extension.lstrip('.')}"
    if _EXTENSION_PATTERN.search(name):
        return _EXTENSION_PATTERN.sub(suffix, name)
    return name + suffix


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def format_file_size(num_bytes: int) -> str:
    """Format *num_bytes* into a human-friendly string."""

    step_unit = 1024.0
    size = float(num_bytes)
    for unit in ("bytes", "KiB", "MiB", "GiB"):
        if abs(size) < step_unit:
            return f"{size:3.1f} {unit}"
        size /= step_unit
    return f"{size:.1f} TiB"


__all__ = [
    "get_logger",
    "set_log_level",
    "resolve_path",
    "replace_extension",
    "clamp",
    "format_file_size",
]
