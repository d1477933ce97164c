"""Built-in tools: explicit completion and a shared todo list."""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any

from agent_sdk.dependencies import DependencyContainer
from agent_sdk.errors import ToolExecutionError
from agent_sdk.tools.spec import ToolOutcome, ToolSpec

TODO_STATUSES = ("pending", "in_progress", "completed")

_STATUS_MARKERS = {
    "pending": "[ ]",
    "in_progress": "[>]",
    "completed": "[x]",
}


@dataclass(frozen=True)
class TodoItem:
    content: str
    status: str = "pending"
    active_form: str | None = None


class TodoList:
    """Todo list shared between tool calls through the dependency container."""

    def __init__(self) -> None:
        self._items: list[TodoItem] = []
        self._lock = threading.Lock()

    def read(self) -> list[TodoItem]:
        with self._lock:
            return list(self._items)

    def replace(self, items: list[TodoItem]) -> None:
        with self._lock:
            self._items = list(items)


# ---------------------------------------------------------------------------
# done
# ---------------------------------------------------------------------------


def _done(arguments: dict[str, Any], deps: DependencyContainer) -> ToolOutcome:
    message = arguments.get("message")
    if not isinstance(message, str):
        message = "task complete"
    return ToolOutcome.finish(message)


def done_tool() -> ToolSpec:
    """Tool the model calls to end the run with a final message."""
    return ToolSpec(
        name="done",
        description="Signal that the task is complete",
        parameters={
            "type": "object",
            "properties": {
                "message": {"type": "string", "description": "Final answer for the user"},
            },
            "required": ["message"],
            "additionalProperties": False,
        },
        handler=_done,
    )


# ---------------------------------------------------------------------------
# todo_read / todo_write
# ---------------------------------------------------------------------------


def _todo_read(arguments: dict[str, Any], deps: DependencyContainer) -> ToolOutcome:
    todos = deps.require(TodoList).read()
    if not todos:
        return ToolOutcome.text("Todo list is empty")

    lines = [
        f"{idx}. {_STATUS_MARKERS.get(item.status, '[?]')} {item.content}"
        for idx, item in enumerate(todos, start=1)
    ]
    return ToolOutcome.text("\n".join(lines))


def _todo_write(arguments: dict[str, Any], deps: DependencyContainer) -> ToolOutcome:
    todo_list = deps.require(TodoList)

    items: list[TodoItem] = []
    for raw in arguments["todos"]:
        if not isinstance(raw, dict) or not isinstance(raw.get("content"), str):
            raise ToolExecutionError("each todo needs a string 'content'")
        status = raw.get("status")
        items.append(TodoItem(
            content=raw["content"],
            status=status if status in TODO_STATUSES else "pending",
            active_form=raw.get("active_form"),
        ))

    todo_list.replace(items)

    counts = {status: sum(1 for t in items if t.status == status) for status in TODO_STATUSES}
    return ToolOutcome.text(
        f"Updated todos: {counts['pending']} pending, "
        f"{counts['in_progress']} in progress, {counts['completed']} completed"
    )


def todo_read_tool() -> ToolSpec:
    return ToolSpec(
        name="todo_read",
        description="Read current todo list",
        parameters={
            "type": "object",
            "properties": {},
            "required": [],
            "additionalProperties": False,
        },
        handler=_todo_read,
    )


def todo_write_tool() -> ToolSpec:
    return ToolSpec(
        name="todo_write",
        description="Update the todo list",
        parameters={
            "type": "object",
            "properties": {
                "todos": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "content": {"type": "string"},
                            "status": {"type": "string", "enum": list(TODO_STATUSES)},
                            "active_form": {"type": "string"},
                        },
                        "required": ["content", "status"],
                    },
                },
            },
            "required": ["todos"],
            "additionalProperties": False,
        },
        handler=_todo_write,
    )


def all_tools() -> list[ToolSpec]:
    """Return every built-in tool. The todo tools need a TodoList dependency."""
    return [todo_read_tool(), todo_write_tool(), done_tool()]
