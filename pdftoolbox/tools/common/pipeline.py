"""Plugin registry mapping operation names to pdftoolbox tools."""

from __future__ import annotations

from typing import Dict, Iterable

from .interfaces import BaseTool, JobContext


class ToolRegistry:
    """Registry of tool classes keyed by the operation they implement."""

    def __init__(self) -> None:
        self._tools: Dict[str, type[BaseTool]] = {}

    def register(self, name: str, tool_class: type[BaseTool]) -> None:
        if name in self._tools:
            raise ValueError(f"Tool '{name}' is already registered")
        self._tools[name] = tool_class

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def create(self, name: str, context: JobContext) -> BaseTool:
        """Instantiate the tool registered under *name* for one run."""

        try:
            tool_class = self._tools[name]
        except KeyError as exc:
            raise KeyError(f"Tool '{name}' is not registered") from exc
        return tool_class(context)

    def names(self) -> Iterable[str]:
        return sorted(self._tools)


registry = ToolRegistry()


def register_tool(name: str):
    """Class decorator registering a :class:`BaseTool` subclass in :data:`registry`."""

    def decorator(cls: type[BaseTool]) -> type[BaseTool]:
        cls.name = name
        registry.register(name, cls)
        return cls

    return decorator


__all__ = ["ToolRegistry", "registry", "register_tool"]
