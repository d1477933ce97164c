"""agent_sdk: a tool-using agent loop with explicit completion."""

__version__ = "0.1.0"

from agent_sdk.agent import Agent, AgentBuilder, query, query_stream  # noqa: E402
from agent_sdk.config import AgentConfig, RetryPolicy  # noqa: E402
from agent_sdk.dependencies import DependencyContainer  # noqa: E402
from agent_sdk.errors import (  # noqa: E402
    AgentError,
    ConfigError,
    InvalidArgumentsError,
    MaxIterationsReached,
    MissingDependencyError,
    MissingFinalResponse,
    ProviderError,
    RequestError,
    ResponseError,
    SchemaError,
    ToolError,
    ToolExecutionError,
    ToolNotFoundError,
)
from agent_sdk.events import (  # noqa: E402
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
from agent_sdk.llm import (  # noqa: E402
    AnthropicModel,
    AnthropicModelConfig,
    ChatModel,
    Completion,
    ScriptedModel,
    ToolChoice,
    ToolChoiceMode,
    ToolDefinition,
    Usage,
)
from agent_sdk.messages import (  # noqa: E402
    AssistantMessage,
    Message,
    Role,
    SystemMessage,
    ToolCall,
    ToolResultMessage,
    UserMessage,
)
from agent_sdk.tools import ToolOutcome, ToolRegistry, ToolSpec  # noqa: E402

__all__ = [
    # Core orchestrator
    "Agent",
    "AgentBuilder",
    "AgentConfig",
    "RetryPolicy",
    "query",
    "query_stream",
    # Models
    "AnthropicModel",
    "AnthropicModelConfig",
    "ChatModel",
    "Completion",
    "ScriptedModel",
    "ToolChoice",
    "ToolChoiceMode",
    "ToolDefinition",
    "Usage",
    # Tools
    "DependencyContainer",
    "ToolOutcome",
    "ToolRegistry",
    "ToolSpec",
    # Messages
    "AssistantMessage",
    "Message",
    "Role",
    "SystemMessage",
    "ToolCall",
    "ToolResultMessage",
    "UserMessage",
    # Events
    "AgentEvent",
    "EventEmitter",
    "FinalResponseEvent",
    "HiddenUserMessageEvent",
    "MessageCompleteEvent",
    "MessageStartEvent",
    "StepCompleteEvent",
    "StepStartEvent",
    "StepStatus",
    "TextEvent",
    "ThinkingEvent",
    "ToolCallEvent",
    "ToolResultEvent",
    # Errors
    "AgentError",
    "ConfigError",
    "InvalidArgumentsError",
    "MaxIterationsReached",
    "MissingDependencyError",
    "MissingFinalResponse",
    "ProviderError",
    "RequestError",
    "ResponseError",
    "SchemaError",
    "ToolError",
    "ToolExecutionError",
    "ToolNotFoundError",
]
