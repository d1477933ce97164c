"""Model interface, provider-facing types, and adapters."""

from agent_sdk.llm.anthropic import AnthropicModel, AnthropicModelConfig
from agent_sdk.llm.base import ChatModel, ModelCall, ScriptedModel
from agent_sdk.llm.types import (
    Completion,
    ToolChoice,
    ToolChoiceMode,
    ToolDefinition,
    Usage,
)

__all__ = [
    "AnthropicModel",
    "AnthropicModelConfig",
    "ChatModel",
    "Completion",
    "ModelCall",
    "ScriptedModel",
    "ToolChoice",
    "ToolChoiceMode",
    "ToolDefinition",
    "Usage",
]
