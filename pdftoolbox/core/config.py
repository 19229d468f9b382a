"""Runtime configuration for pdftoolbox, read from ``PDFTOOLBOX_*`` variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from .exceptions import InputValidationError
from .geometry import DEFAULT_PAGE_FORMAT, PAGE_FORMATS

_ENV_PREFIX = "PDFTOOLBOX_"
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"not a boolean: {value!r}")


@dataclass(frozen=True)
class Settings:
    """Defaults applied to every job unless overridden per run."""

    export_interval_ms: int = 100
    page_format: str = DEFAULT_PAGE_FORMAT
    embed_quality: float = 0.95
    raster_format: str = "jpeg"
    raster_quality: float = 0.9
    isolate_item_failures: bool = True
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.export_interval_ms < 0:
            raise InputValidationError("export_interval_ms must not be negative")
        if self.page_format.lower() not in PAGE_FORMATS:
            raise InputValidationError(f"Unknown page format: {self.page_format!r}")


_ENV_PARSERS: dict[str, tuple[str, Callable[[str], Any]]] = {
    "export_interval_ms": ("EXPORT_INTERVAL_MS", int),
    "page_format": ("PAGE_FORMAT", str.strip),
    "embed_quality": ("EMBED_QUALITY", float),
    "raster_format": ("RASTER_FORMAT", str.strip),
    "raster_quality": ("RASTER_QUALITY", float),
    "isolate_item_failures": ("ISOLATE_FAILURES", _parse_bool),
    "log_level": ("LOG_LEVEL", lambda value: value.strip().upper()),
}


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from *environ* (defaults to :data:`os.environ`)."""

    env = os.environ if environ is None else environ
    values: dict[str, Any] = {}
    for field_name, (suffix, parser) in _ENV_PARSERS.items():
        raw = env.get(_ENV_PREFIX + suffix)
        if raw is None or not raw.strip():
            continue
        try:
            values[field_name] = parser(raw)
        except ValueError as exc:
            raise InputValidationError(
                f"Invalid value for {_ENV_PREFIX + suffix}: {raw!r}"
            ) from exc
    return Settings(**values)


__all__ = ["Settings", "load_settings"]
