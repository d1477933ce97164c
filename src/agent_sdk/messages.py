"""Message types for the agent conversation history."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Role(Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


@dataclass(frozen=True)
class ToolCall:
    """A tool call requested by the assistant."""

    id: str
    name: str
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SystemMessage:
    """System prompt, pushed once at the start of a fresh history."""

    content: str

    @property
    def role(self) -> Role:
        return Role.SYSTEM


@dataclass(frozen=True)
class UserMessage:
    """User input, including hidden follow-up prompts."""

    content: str

    @property
    def role(self) -> Role:
        return Role.USER


@dataclass(frozen=True)
class AssistantMessage:
    """Model reply with optional text and the tool calls it requested."""

    content: str | None = None
    tool_calls: tuple[ToolCall, ...] = ()

    @property
    def role(self) -> Role:
        return Role.ASSISTANT


@dataclass(frozen=True)
class ToolResultMessage:
    """Rendered outcome of one tool call."""

    tool_call_id: str
    tool_name: str
    content: str
    is_error: bool = False

    @property
    def role(self) -> Role:
        return Role.TOOL


# Type alias for all message types
Message = SystemMessage | UserMessage | AssistantMessage | ToolResultMessage
