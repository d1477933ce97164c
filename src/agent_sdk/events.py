"""Event types produced by the agent loop."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from agent_sdk.messages import Role


class StepStatus(Enum):
    COMPLETED = "completed"
    ERROR = "error"


# --- Event dataclasses ---


@dataclass(frozen=True)
class MessageStartEvent:
    message_id: str
    role: Role


@dataclass(frozen=True)
class MessageCompleteEvent:
    message_id: str
    content: str


@dataclass(frozen=True)
class HiddenUserMessageEvent:
    content: str


@dataclass(frozen=True)
class ThinkingEvent:
    content: str


@dataclass(frozen=True)
class TextEvent:
    content: str


@dataclass(frozen=True)
class StepStartEvent:
    step_id: str
    title: str
    step_number: int


@dataclass(frozen=True)
class ToolCallEvent:
    tool: str
    tool_call_id: str
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ToolResultEvent:
    tool: str
    tool_call_id: str
    result_text: str
    is_error: bool = False


@dataclass(frozen=True)
class StepCompleteEvent:
    step_id: str
    status: StepStatus
    duration_ms: int


@dataclass(frozen=True)
class FinalResponseEvent:
    content: str


# Type alias for all event types
AgentEvent = (
    MessageStartEvent
    | MessageCompleteEvent
    | HiddenUserMessageEvent
    | ThinkingEvent
    | TextEvent
    | StepStartEvent
    | ToolCallEvent
    | ToolResultEvent
    | StepCompleteEvent
    | FinalResponseEvent
)


class EventEmitter:
    """Synchronous callback-based event emitter.

    An agent built with an emitter dispatches every event here before
    yielding it from the stream. Events are dispatched in registration order.
    """

    def __init__(self) -> None:
        self._listeners: dict[type, list[Callable]] = {}
        self._global_listeners: list[Callable] = []

    def subscribe(self, event_type: type, callback: Callable) -> None:
        """Register a callback for a specific event type."""
        self._listeners.setdefault(event_type, []).append(callback)

    def on_all(self, callback: Callable) -> None:
        """Register a callback that receives every event."""
        self._global_listeners.append(callback)

    def emit(self, event: Any) -> None:
        """Dispatch event to all matching listeners."""
        for cb in self._global_listeners:
            cb(event)
        for cb in self._listeners.get(type(event), []):
            cb(event)
