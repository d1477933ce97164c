"""Anthropic Messages API adapter."""
from __future__ import annotations

import json
import os
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import httpx

from agent_sdk.errors import RequestError, ResponseError
from agent_sdk.llm.types import Completion, ToolChoice, ToolChoiceMode, ToolDefinition, Usage
from agent_sdk.messages import (
    AssistantMessage,
    Message,
    SystemMessage,
    ToolCall,
    ToolResultMessage,
    UserMessage,
)

_RETRYABLE_STATUS = {408, 429}


@dataclass(frozen=True)
class AnthropicModelConfig:
    """Runtime configuration for :class:`AnthropicModel`."""

    api_key: str
    model: str
    api_version: str = "2023-06-01"
    base_url: str = "https://api.anthropic.com"
    max_tokens: int = 4096
    temperature: float | None = None
    top_p: float | None = None
    thinking_budget_tokens: int | None = None
    timeout: float = 120.0


class AnthropicModel:
    """Adapter for the Anthropic Messages API implementing ChatModel."""

    def __init__(
        self,
        config: AnthropicModelConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url.rstrip("/"),
            headers={
                "x-api-key": config.api_key,
                "anthropic-version": config.api_version,
                "content-type": "application/json",
            },
            timeout=httpx.Timeout(config.timeout),
            transport=transport,
        )

    @classmethod
    def from_env(cls, model: str) -> AnthropicModel:
        """Create an adapter using ``ANTHROPIC_API_KEY`` from the environment."""
        api_key = os.environ.get("ANTHROPIC_API_KEY")
        if not api_key:
            raise RequestError("ANTHROPIC_API_KEY is not set")
        return cls(AnthropicModelConfig(api_key=api_key, model=model))

    @property
    def name(self) -> str:
        return "anthropic"

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    async def invoke(
        self,
        messages: Sequence[Message],
        tools: Sequence[ToolDefinition],
        tool_choice: ToolChoice,
    ) -> Completion:
        body = self._build_request_body(messages, tools, tool_choice)

        try:
            http_response = await self._client.post("/v1/messages", json=body)
        except httpx.TimeoutException as exc:
            raise RequestError(f"request timed out: {exc}", cause=exc) from exc
        except httpx.HTTPError as exc:
            raise RequestError(f"network error: {exc}", cause=exc) from exc

        if http_response.status_code != 200:
            raise self._translate_error(http_response)

        try:
            raw = http_response.json()
        except ValueError as exc:
            raise ResponseError(f"response body is not JSON: {exc}", cause=exc) from exc
        if not isinstance(raw, dict):
            raise ResponseError("response body is not a JSON object")

        return self._parse_response(raw)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Request translation
    # ------------------------------------------------------------------

    def _build_request_body(
        self,
        messages: Sequence[Message],
        tools: Sequence[ToolDefinition],
        tool_choice: ToolChoice,
    ) -> dict[str, Any]:
        """Translate history and tools into an Anthropic Messages API body."""
        system, api_messages = to_anthropic_messages(messages)

        body: dict[str, Any] = {
            "model": self.config.model,
            "max_tokens": self.config.max_tokens,
            "messages": api_messages,
        }
        if system:
            body["system"] = system
        if self.config.temperature is not None:
            body["temperature"] = self.config.temperature
        if self.config.top_p is not None:
            body["top_p"] = self.config.top_p
        if self.config.thinking_budget_tokens is not None:
            body["thinking"] = {
                "type": "enabled",
                "budget_tokens": self.config.thinking_budget_tokens,
            }

        # Tools are omitted entirely when none is selected
        if tools and tool_choice.mode != ToolChoiceMode.NONE:
            body["tools"] = [
                {
                    "name": t.name,
                    "description": t.description,
                    "input_schema": t.parameters,
                }
                for t in tools
            ]
            if tool_choice.mode == ToolChoiceMode.REQUIRED:
                body["tool_choice"] = {"type": "any"}
            elif tool_choice.mode == ToolChoiceMode.NAMED and tool_choice.tool_name:
                body["tool_choice"] = {"type": "tool", "name": tool_choice.tool_name}
            else:
                body["tool_choice"] = {"type": "auto"}

        return body

    # ------------------------------------------------------------------
    # Response parsing
    # ------------------------------------------------------------------

    def _parse_response(self, raw: dict[str, Any]) -> Completion:
        """Parse an Anthropic API response into a Completion."""
        text_parts: list[str] = []
        thinking_parts: list[str] = []
        tool_calls: list[ToolCall] = []

        content = raw.get("content", [])
        if not isinstance(content, list) or not all(isinstance(b, dict) for b in content):
            raise ResponseError("response content must be a list of objects")
        usage_raw = raw.get("usage") or {}
        if not isinstance(usage_raw, dict):
            raise ResponseError("response usage must be an object")

        for block in content:
            btype = block.get("type")
            if btype == "text":
                text_parts.append(block.get("text", ""))
            elif btype == "tool_use":
                arguments = block.get("input", {})
                if isinstance(arguments, str):
                    try:
                        arguments = json.loads(arguments)
                    except ValueError as exc:
                        raise ResponseError(
                            f"tool_use input for {block.get('name')} is not valid JSON", cause=exc,
                        ) from exc
                tool_calls.append(ToolCall(
                    id=block.get("id", ""),
                    name=block.get("name", ""),
                    arguments=arguments,
                ))
            elif btype == "thinking":
                thinking_parts.append(block.get("thinking", ""))
            elif btype == "redacted_thinking":
                thinking_parts.append(f"[redacted:{len(block.get('data', ''))} bytes]")

        return Completion(
            text="\n".join(text_parts) if text_parts else None,
            thinking="\n".join(thinking_parts) if thinking_parts else None,
            tool_calls=tuple(tool_calls),
            usage=Usage(
                input_tokens=usage_raw.get("input_tokens", 0),
                output_tokens=usage_raw.get("output_tokens", 0),
            ),
        )

    # ------------------------------------------------------------------
    # Error handling
    # ------------------------------------------------------------------

    def _translate_error(self, response: httpx.Response) -> Exception:
        """Classify an HTTP error response as retryable or not."""
        try:
            message = response.json().get("error", {}).get("message", response.text)
        except (ValueError, AttributeError):
            message = response.text

        status = response.status_code
        detail = f"HTTP {status}: {message}"
        if status in _RETRYABLE_STATUS or status >= 500:
            return RequestError(detail, status_code=status)
        return ResponseError(detail, status_code=status)


def to_anthropic_messages(messages: Sequence[Message]) -> tuple[str | None, list[dict[str, Any]]]:
    """Split history into a system string and Anthropic role messages."""
    system_lines: list[str] = []
    api_messages: list[dict[str, Any]] = []

    for msg in messages:
        if isinstance(msg, SystemMessage):
            system_lines.append(msg.content)
        elif isinstance(msg, UserMessage):
            api_messages.append({
                "role": "user",
                "content": [{"type": "text", "text": msg.content}],
            })
        elif isinstance(msg, AssistantMessage):
            blocks: list[dict[str, Any]] = []
            if msg.content:
                blocks.append({"type": "text", "text": msg.content})
            for tc in msg.tool_calls:
                blocks.append({
                    "type": "tool_use",
                    "id": tc.id,
                    "name": tc.name,
                    "input": tc.arguments,
                })
            if blocks:
                api_messages.append({"role": "assistant", "content": blocks})
        elif isinstance(msg, ToolResultMessage):
            content = f"Error: {msg.content}" if msg.is_error else msg.content
            api_messages.append({
                "role": "user",
                "content": [{
                    "type": "tool_result",
                    "tool_use_id": msg.tool_call_id,
                    "content": content,
                    "is_error": msg.is_error,
                }],
            })

    system = "\n\n".join(system_lines) if system_lines else None
    return system, _enforce_alternation(api_messages)


def _enforce_alternation(messages: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Merge consecutive same-role messages to satisfy Anthropic alternation."""
    if not messages:
        return messages
    merged: list[dict[str, Any]] = [messages[0]]
    for msg in messages[1:]:
        if msg["role"] == merged[-1]["role"]:
            merged[-1]["content"].extend(msg["content"])
        else:
            merged.append(msg)
    return merged
