"""Core agent loop: the Agent orchestrator and its builder."""

from __future__ import annotations

import dataclasses
import logging
import time
from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass
from typing import Any

from agent_sdk._retry import with_retry
from agent_sdk.config import AgentConfig, RetryPolicy
from agent_sdk.dependencies import DependencyContainer
from agent_sdk.errors import (
    ConfigError,
    MaxIterationsReached,
    MissingFinalResponse,
    ToolError,
    ToolExecutionError,
    ToolNotFoundError,
)
from agent_sdk.events import (
    AgentEvent,
    EventEmitter,
    FinalResponseEvent,
    HiddenUserMessageEvent,
    MessageCompleteEvent,
    MessageStartEvent,
    StepCompleteEvent,
    StepStartEvent,
    StepStatus,
    TextEvent,
    ThinkingEvent,
    ToolCallEvent,
    ToolResultEvent,
)
from agent_sdk.llm.base import ChatModel
from agent_sdk.llm.types import Completion, ToolChoice, ToolDefinition
from agent_sdk.messages import (
    AssistantMessage,
    Message,
    Role,
    SystemMessage,
    ToolCall,
    ToolResultMessage,
    UserMessage,
)
from agent_sdk.tools.registry import ToolRegistry
from agent_sdk.tools.spec import ToolSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ToolExecution:
    result_text: str
    is_error: bool = False
    done_message: str | None = None


class Agent:
    """Central orchestrator for a tool-using conversation.

    Holds the conversation history, runs the turn loop against a
    :class:`ChatModel`, executes tool calls in order and produces a stream of
    events. One query may be in flight at a time; callers must serialize
    calls on the same instance.
    """

    def __init__(
        self,
        model: ChatModel,
        tools: ToolRegistry | None = None,
        config: AgentConfig | None = None,
        dependencies: DependencyContainer | None = None,
        dependency_overrides: DependencyContainer | None = None,
        event_emitter: EventEmitter | None = None,
    ) -> None:
        self.model = model
        self.tools = tools if tools is not None else ToolRegistry()
        self.config = config or AgentConfig()
        self.dependencies = dependencies if dependencies is not None else DependencyContainer()
        self.dependency_overrides = (
            dependency_overrides if dependency_overrides is not None else DependencyContainer()
        )
        self.event_emitter = event_emitter

        self._history: list[Message] = []
        self._message_counter = 0

    @classmethod
    def builder(cls) -> AgentBuilder:
        return AgentBuilder()

    # --- History ---

    @property
    def history(self) -> tuple[Message, ...]:
        return tuple(self._history)

    def messages_len(self) -> int:
        return len(self._history)

    def clear_history(self) -> None:
        self._history.clear()

    def load_history(self, messages: Sequence[Message]) -> None:
        """Replace the conversation history, e.g. with a previously saved one."""
        self._history = list(messages)

    # --- Public API ---

    async def query(self, user_message: str) -> str:
        """Run the agent loop to completion and return the final response."""
        final_response: str | None = None
        async for event in self.query_stream(user_message):
            if isinstance(event, FinalResponseEvent):
                final_response = event.content

        if final_response is None:
            raise MissingFinalResponse()
        return final_response

    async def query_stream(self, user_message: str) -> AsyncIterator[AgentEvent]:
        """Run the agent loop for *user_message*, yielding events as it goes.

        The loop only advances while the stream is consumed. Fatal errors
        (provider failure after retries, iteration limit) are raised from the
        iterator.
        """
        if not self._history and self.config.system_prompt is not None:
            self._history.append(SystemMessage(content=self.config.system_prompt))

        message_id = self._next_message_id()
        yield self._emit(MessageStartEvent(message_id=message_id, role=Role.USER))
        self._history.append(UserMessage(content=user_message))
        yield self._emit(MessageCompleteEvent(message_id=message_id, content=user_message))

        tool_definitions = self.tools.definitions()
        tool_choice = self._resolve_tool_choice(tool_definitions)
        followup_injected = False
        step_number = 0

        for _ in range(self.config.max_iterations):
            completion = await self._invoke_model(tool_definitions, tool_choice)

            if completion.thinking:
                yield self._emit(ThinkingEvent(content=completion.thinking))

            self._history.append(AssistantMessage(
                content=completion.text,
                tool_calls=tuple(completion.tool_calls),
            ))

            if completion.text:
                yield self._emit(TextEvent(content=completion.text))

            # No tool calls: implicit completion unless done is required
            if not completion.tool_calls:
                if self.config.require_done_tool:
                    continue
                if self.config.followup_prompt and not followup_injected:
                    followup_injected = True
                    self._history.append(UserMessage(content=self.config.followup_prompt))
                    yield self._emit(HiddenUserMessageEvent(content=self.config.followup_prompt))
                    continue
                yield self._emit(FinalResponseEvent(content=completion.text or ""))
                return

            # Execute tool calls sequentially, in the order returned
            for tool_call in completion.tool_calls:
                step_number += 1
                yield self._emit(StepStartEvent(
                    step_id=tool_call.id, title=tool_call.name, step_number=step_number,
                ))
                yield self._emit(ToolCallEvent(
                    tool=tool_call.name,
                    tool_call_id=tool_call.id,
                    arguments=tool_call.arguments,
                ))

                started = time.monotonic()
                execution = await self._execute_tool_call(tool_call)
                duration_ms = int((time.monotonic() - started) * 1000)

                self._history.append(ToolResultMessage(
                    tool_call_id=tool_call.id,
                    tool_name=tool_call.name,
                    content=execution.result_text,
                    is_error=execution.is_error,
                ))
                yield self._emit(ToolResultEvent(
                    tool=tool_call.name,
                    tool_call_id=tool_call.id,
                    result_text=execution.result_text,
                    is_error=execution.is_error,
                ))
                yield self._emit(StepCompleteEvent(
                    step_id=tool_call.id,
                    status=StepStatus.ERROR if execution.is_error else StepStatus.COMPLETED,
                    duration_ms=duration_ms,
                ))

                if execution.done_message is not None:
                    yield self._emit(FinalResponseEvent(content=execution.done_message))
                    return

        raise MaxIterationsReached(self.config.max_iterations)

    # --- Private methods ---

    def _emit(self, event: AgentEvent) -> AgentEvent:
        if self.event_emitter is not None:
            self.event_emitter.emit(event)
        return event

    def _next_message_id(self) -> str:
        self._message_counter += 1
        return f"msg_{self._message_counter}"

    def _resolve_tool_choice(self, tool_definitions: list[ToolDefinition]) -> ToolChoice:
        if not tool_definitions:
            return ToolChoice.none()
        return self.config.tool_choice

    async def _invoke_model(
        self, tool_definitions: list[ToolDefinition], tool_choice: ToolChoice,
    ) -> Completion:
        messages = tuple(self._history)
        started = time.monotonic()
        completion = await with_retry(
            lambda: self.model.invoke(messages, tool_definitions, tool_choice),
            self.config.retry,
        )
        tokens = completion.usage.total_tokens if completion.usage else 0
        logger.info(
            "Model completion: tool_calls=%d tokens=%d latency=%.2fs",
            len(completion.tool_calls), tokens, time.monotonic() - started,
        )
        return completion

    async def _execute_tool_call(self, tool_call: ToolCall) -> _ToolExecution:
        """Look up and run one tool call, converting tool failures into error results."""
        tool = self.tools.get(tool_call.name)
        if tool is None:
            logger.warning("Model requested unknown tool %r", tool_call.name)
            return _ToolExecution(result_text=str(ToolNotFoundError(tool_call.name)), is_error=True)

        # Merged per call; overrides win
        runtime_dependencies = self.dependencies.merged_with(self.dependency_overrides)

        logger.debug("Executing tool %s (%s)", tool_call.name, tool_call.id)
        try:
            outcome = await tool.execute(tool_call.arguments, runtime_dependencies)
        except ToolError as exc:
            logger.warning("Tool %s failed: %s", tool_call.name, exc)
            return _ToolExecution(result_text=str(exc), is_error=True)
        except Exception as exc:
            logger.exception("Tool %s raised an unexpected error", tool_call.name)
            error = ToolExecutionError(str(exc), cause=exc)
            return _ToolExecution(result_text=str(error), is_error=True)

        if outcome.is_done:
            return _ToolExecution(
                result_text=f"Task completed: {outcome.content}",
                done_message=outcome.content,
            )
        return _ToolExecution(result_text=outcome.content)


class AgentBuilder:
    """Fluent builder that validates agent configuration before use."""

    def __init__(self) -> None:
        self._model: ChatModel | None = None
        self._tools: list[ToolSpec] = []
        self._config = AgentConfig()
        self._dependencies = DependencyContainer()
        self._dependency_overrides = DependencyContainer()
        self._event_emitter: EventEmitter | None = None

    def model(self, model: ChatModel) -> AgentBuilder:
        self._model = model
        return self

    def tool(self, tool: ToolSpec) -> AgentBuilder:
        self._tools.append(tool)
        return self

    def tools(self, tools: Sequence[ToolSpec]) -> AgentBuilder:
        self._tools.extend(tools)
        return self

    def config(self, config: AgentConfig) -> AgentBuilder:
        self._config = config
        return self

    def system_prompt(self, system_prompt: str) -> AgentBuilder:
        return self._update(system_prompt=system_prompt)

    def require_done_tool(self, require_done_tool: bool = True) -> AgentBuilder:
        return self._update(require_done_tool=require_done_tool)

    def max_iterations(self, max_iterations: int) -> AgentBuilder:
        return self._update(max_iterations=max_iterations)

    def tool_choice(self, tool_choice: ToolChoice) -> AgentBuilder:
        return self._update(tool_choice=tool_choice)

    def followup_prompt(self, followup_prompt: str) -> AgentBuilder:
        return self._update(followup_prompt=followup_prompt)

    def retry_policy(self, retry: RetryPolicy) -> AgentBuilder:
        return self._update(retry=retry)

    def dependency(self, value: Any, key_type: type | None = None) -> AgentBuilder:
        self._dependencies.insert(value, key_type)
        return self

    def dependency_named(self, key: str, value: Any) -> AgentBuilder:
        self._dependencies.insert_named(key, value)
        return self

    def dependency_override(self, value: Any, key_type: type | None = None) -> AgentBuilder:
        self._dependency_overrides.insert(value, key_type)
        return self

    def dependency_override_named(self, key: str, value: Any) -> AgentBuilder:
        self._dependency_overrides.insert_named(key, value)
        return self

    def event_emitter(self, emitter: EventEmitter) -> AgentBuilder:
        self._event_emitter = emitter
        return self

    def build(self) -> Agent:
        """Create the agent. Raises ConfigError without a model or on duplicate tool names."""
        if self._model is None:
            raise ConfigError("agent model must be configured via AgentBuilder.model(...)")

        return Agent(
            model=self._model,
            tools=ToolRegistry(self._tools),
            config=self._config,
            dependencies=self._dependencies,
            dependency_overrides=self._dependency_overrides,
            event_emitter=self._event_emitter,
        )

    def _update(self, **changes: Any) -> AgentBuilder:
        self._config = dataclasses.replace(self._config, **changes)
        return self


async def query(agent: Agent, user_message: str) -> str:
    return await agent.query(user_message)


def query_stream(agent: Agent, user_message: str) -> AsyncIterator[AgentEvent]:
    return agent.query_stream(user_message)
