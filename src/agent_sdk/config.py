"""Agent configuration and retry policy."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from agent_sdk.llm.types import ToolChoice


@dataclass(frozen=True)
class RetryPolicy:
    """Configuration for retrying retryable provider failures."""

    max_attempts: int = 3
    base_delay: float = 0.5
    max_delay: float = 8.0
    on_retry: Callable[[int, Exception, float], None] | None = field(
        default=None, compare=False, hash=False
    )


@dataclass(frozen=True)
class AgentConfig:
    """Configuration for an agent run."""

    require_done_tool: bool = False
    max_iterations: int = 24
    system_prompt: str | None = None
    tool_choice: ToolChoice = field(default_factory=ToolChoice.auto)
    followup_prompt: str | None = None  # injected once when the model stops calling tools
    retry: RetryPolicy = field(default_factory=RetryPolicy)
