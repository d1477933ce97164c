"""Tool specs, registry, and built-in tools."""

from agent_sdk.tools.builtin import (
    TodoItem,
    TodoList,
    all_tools,
    done_tool,
    todo_read_tool,
    todo_write_tool,
)
from agent_sdk.tools.registry import ToolRegistry
from agent_sdk.tools.spec import (
    ToolHandler,
    ToolOutcome,
    ToolSpec,
    validate_arguments,
    validate_schema,
)

__all__ = [
    "TodoItem",
    "TodoList",
    "ToolHandler",
    "ToolOutcome",
    "ToolRegistry",
    "ToolSpec",
    "all_tools",
    "done_tool",
    "todo_read_tool",
    "todo_write_tool",
    "validate_arguments",
    "validate_schema",
]
