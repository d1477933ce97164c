"""Error hierarchy for the agent runtime."""
from __future__ import annotations


class AgentError(Exception):
    """Base error for all agent_sdk errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ConfigError(AgentError):
    """The agent builder was misused (no model, duplicate tools)."""

    def __init__(self, message: str, **kwargs) -> None:
        super().__init__(f"agent configuration error: {message}", **kwargs)
        self.detail = message


class SchemaError(AgentError):
    """A tool parameter schema is malformed."""


# ---------------------------------------------------------------------------
# Tool errors: recovered by the agent and fed back to the model
# ---------------------------------------------------------------------------


class ToolError(AgentError):
    """Base class for failures while running a single tool call."""


class ToolNotFoundError(ToolError):
    """The model asked for a tool that is not registered."""

    def __init__(self, tool: str) -> None:
        super().__init__(f"tool not found: {tool}")
        self.tool = tool


class InvalidArgumentsError(ToolError):
    """Tool call arguments did not satisfy the tool's parameter schema."""

    def __init__(self, tool: str, message: str) -> None:
        super().__init__(f"invalid tool arguments for {tool}: {message}")
        self.tool = tool
        self.reason = message


class MissingDependencyError(ToolError):
    """A tool handler needed a dependency that was never injected."""

    def __init__(self, dependency: str) -> None:
        super().__init__(f"dependency missing: {dependency}")
        self.dependency = dependency


class ToolExecutionError(ToolError):
    """A tool handler failed while running."""

    def __init__(self, message: str, **kwargs) -> None:
        super().__init__(f"tool execution failed: {message}", **kwargs)
        self.reason = message


# ---------------------------------------------------------------------------
# Provider errors
# ---------------------------------------------------------------------------


class ProviderError(AgentError):
    """Error originating from a model provider."""

    retryable = False

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.status_code = status_code


class RequestError(ProviderError):
    """Transport-level failure (timeout, connection, throttling). Retryable."""

    retryable = True

    def __init__(self, message: str, **kwargs) -> None:
        super().__init__(f"provider request failed: {message}", **kwargs)


class ResponseError(ProviderError):
    """The provider answered with something unusable. Never retried."""

    def __init__(self, message: str, **kwargs) -> None:
        super().__init__(f"provider response invalid: {message}", **kwargs)


# ---------------------------------------------------------------------------
# Run termination
# ---------------------------------------------------------------------------


class MaxIterationsReached(AgentError):
    """The turn loop ran out of iterations without finalizing."""

    def __init__(self, max_iterations: int) -> None:
        super().__init__(f"max iterations reached ({max_iterations})")
        self.max_iterations = max_iterations


class MissingFinalResponse(AgentError):
    """The event stream ended without producing a final response."""

    def __init__(self) -> None:
        super().__init__("agent stream ended without final response")
