"""Provider-facing types: tool definitions, tool choice, completions."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from agent_sdk.messages import ToolCall


class ToolChoiceMode(StrEnum):
    """How the model should choose which tools to call."""

    AUTO = "auto"
    REQUIRED = "required"
    NONE = "none"
    NAMED = "named"


@dataclass(frozen=True)
class ToolChoice:
    """Controls whether and which tools the model may call on a turn."""

    mode: ToolChoiceMode = ToolChoiceMode.AUTO
    tool_name: str | None = None

    @classmethod
    def auto(cls) -> ToolChoice:
        return cls(mode=ToolChoiceMode.AUTO)

    @classmethod
    def required(cls) -> ToolChoice:
        return cls(mode=ToolChoiceMode.REQUIRED)

    @classmethod
    def none(cls) -> ToolChoice:
        return cls(mode=ToolChoiceMode.NONE)

    @classmethod
    def named(cls, tool_name: str) -> ToolChoice:
        return cls(mode=ToolChoiceMode.NAMED, tool_name=tool_name)


@dataclass(frozen=True)
class ToolDefinition:
    """Schema definition for a tool exposed to the model."""

    name: str
    description: str
    parameters: dict[str, Any] = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class Usage:
    """Token usage statistics."""

    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def __add__(self, other: Usage) -> Usage:
        if not isinstance(other, Usage):
            return NotImplemented
        return Usage(
            input_tokens=self.input_tokens + other.input_tokens,
            output_tokens=self.output_tokens + other.output_tokens,
        )


@dataclass(frozen=True)
class Completion:
    """Result of one provider round trip."""

    text: str | None = None
    thinking: str | None = None
    tool_calls: tuple[ToolCall, ...] = ()
    usage: Usage | None = None
