"""Shared building blocks for pdftoolbox tool plugins."""

from __future__ import annotations

from .interfaces import BaseTool, JobContext, ProgressCallback
from .pipeline import ToolRegistry, register_tool, registry

__all__ = ["BaseTool", "JobContext", "ProgressCallback", "ToolRegistry", "register_tool", "registry"]
