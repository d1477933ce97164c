"""Tool registry: registration and lookup."""

from __future__ import annotations

from collections.abc import Iterator

from agent_sdk.errors import ConfigError
from agent_sdk.llm.types import ToolDefinition
from agent_sdk.tools.spec import ToolSpec


class ToolRegistry:
    """Registry of tools available to an agent.

    Names are unique; registering a second tool under an existing name raises
    ConfigError. Insertion-order stable.
    """

    def __init__(self, tools: list[ToolSpec] | None = None) -> None:
        self._tools: dict[str, ToolSpec] = {}
        for tool in tools or []:
            self.register(tool)

    def register(self, tool: ToolSpec) -> None:
        """Register a tool. Raises ConfigError if the name is taken."""
        if tool.name in self._tools:
            raise ConfigError(f"duplicate tool registered: {tool.name}")
        self._tools[tool.name] = tool

    def get(self, name: str) -> ToolSpec | None:
        """Look up a registered tool by name."""
        return self._tools.get(name)

    def definitions(self) -> list[ToolDefinition]:
        """Return all tool definitions in registration order."""
        return [t.definition() for t in self._tools.values()]

    def names(self) -> list[str]:
        """Return all registered tool names in registration order."""
        return list(self._tools.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[ToolSpec]:
        return iter(self._tools.values())
