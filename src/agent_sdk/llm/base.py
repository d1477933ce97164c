"""Chat model protocol and scripted test double."""
from __future__ import annotations

from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from agent_sdk.errors import ResponseError
from agent_sdk.llm.types import Completion, ToolChoice, ToolDefinition
from agent_sdk.messages import Message


@runtime_checkable
class ChatModel(Protocol):
    """Protocol that every model adapter must satisfy.

    ``invoke`` raises :class:`~agent_sdk.errors.RequestError` for retryable
    transport failures and :class:`~agent_sdk.errors.ResponseError` for
    unusable output.
    """

    async def invoke(
        self,
        messages: Sequence[Message],
        tools: Sequence[ToolDefinition],
        tool_choice: ToolChoice,
    ) -> Completion: ...


@dataclass(frozen=True)
class ModelCall:
    """One recorded invocation of a :class:`ScriptedModel`."""

    messages: tuple[Message, ...]
    tools: tuple[ToolDefinition, ...]
    tool_choice: ToolChoice


class ScriptedModel:
    """Test double that replays predefined completions in sequence.

    Script entries may be :class:`Completion` objects or exceptions; an
    exception entry is raised instead of returned. Once the script is
    exhausted every call raises a ResponseError.
    """

    def __init__(self, script: Sequence[Completion | Exception] | None = None) -> None:
        self._script: deque[Completion | Exception] = deque(script or [])
        self._calls: list[ModelCall] = []

    async def invoke(
        self,
        messages: Sequence[Message],
        tools: Sequence[ToolDefinition],
        tool_choice: ToolChoice,
    ) -> Completion:
        self._calls.append(ModelCall(
            messages=tuple(messages), tools=tuple(tools), tool_choice=tool_choice,
        ))
        if not self._script:
            raise ResponseError("scripted model exhausted responses")
        entry = self._script.popleft()
        if isinstance(entry, Exception):
            raise entry
        return entry

    @property
    def call_count(self) -> int:
        return len(self._calls)

    @property
    def calls(self) -> list[ModelCall]:
        return list(self._calls)
