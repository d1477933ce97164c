"""Tool specifications: schema contract, argument validation, execution."""

from __future__ import annotations

import copy
import dataclasses
import inspect
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Union

from agent_sdk.dependencies import DependencyContainer
from agent_sdk.errors import InvalidArgumentsError, SchemaError, ToolExecutionError
from agent_sdk.llm.types import ToolDefinition


@dataclass(frozen=True)
class ToolOutcome:
    """Result of running a tool.

    Plain text is fed back to the model; a ``done`` outcome ends the run
    with *content* as the final response.
    """

    content: str
    done: bool = False

    @classmethod
    def text(cls, content: str) -> ToolOutcome:
        return cls(content=content)

    @classmethod
    def finish(cls, message: str) -> ToolOutcome:
        return cls(content=message, done=True)

    @property
    def is_done(self) -> bool:
        return self.done


ToolHandler = Callable[
    [dict[str, Any], DependencyContainer],
    Union[ToolOutcome, Awaitable[ToolOutcome]],
]


def _default_schema() -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {},
        "required": [],
        "additionalProperties": True,
    }


async def _unconfigured_handler(arguments: dict[str, Any], deps: DependencyContainer) -> ToolOutcome:
    raise ToolExecutionError("tool handler not configured")


@dataclass(frozen=True)
class ToolSpec:
    """A named capability the model can call.

    The parameter schema is checked when the spec is created; a malformed
    schema raises :class:`SchemaError`. Use :meth:`with_schema` and
    :meth:`with_handler` to derive modified copies.
    """

    name: str
    description: str
    parameters: dict[str, Any] = field(default_factory=_default_schema, hash=False)
    handler: ToolHandler = field(default=_unconfigured_handler, compare=False, hash=False)

    def __post_init__(self) -> None:
        validate_schema(self.parameters)

    def with_schema(self, schema: dict[str, Any]) -> ToolSpec:
        return dataclasses.replace(self, parameters=schema)

    def with_handler(self, handler: ToolHandler) -> ToolSpec:
        return dataclasses.replace(self, handler=handler)

    def definition(self) -> ToolDefinition:
        """Project this spec to the definition sent to the provider."""
        return ToolDefinition(
            name=self.name, description=self.description, parameters=self.parameters,
        )

    async def execute(self, arguments: Any, dependencies: DependencyContainer) -> ToolOutcome:
        """Validate *arguments* against the schema, then run the handler.

        The handler receives a private copy of *arguments*. Raises
        InvalidArgumentsError on validation failure and ToolExecutionError
        when the handler returns something other than a ToolOutcome or str;
        errors raised by the handler propagate to the caller.
        """
        validate_arguments(self.name, self.parameters, arguments)
        result = self.handler(copy.deepcopy(arguments), dependencies)
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, str):
            return ToolOutcome.text(result)
        if not isinstance(result, ToolOutcome):
            raise ToolExecutionError(f"handler returned {type(result).__name__}")
        return result


# ---------------------------------------------------------------------------
# Schema checks
# ---------------------------------------------------------------------------


def validate_schema(schema: Any) -> None:
    """Check that *schema* is usable as a tool parameter schema."""
    if not isinstance(schema, dict):
        raise SchemaError("tool schema must be a JSON object")
    if schema.get("type") != "object":
        raise SchemaError("tool schema must declare type=object")
    if "required" in schema:
        required = schema["required"]
        if not isinstance(required, list) or not all(isinstance(f, str) for f in required):
            raise SchemaError("required must be an array of strings")


def validate_arguments(tool_name: str, schema: dict[str, Any], arguments: Any) -> None:
    """Check *arguments* against *schema*, raising InvalidArgumentsError on the first problem."""
    if not isinstance(arguments, dict):
        raise InvalidArgumentsError(tool_name, "arguments must be a JSON object")

    for field_name in schema.get("required") or []:
        if isinstance(field_name, str) and field_name not in arguments:
            raise InvalidArgumentsError(tool_name, f"missing required field: {field_name}")

    properties = schema.get("properties")
    if not isinstance(properties, dict):
        properties = {}

    if schema.get("additionalProperties") is False:
        for key in arguments:
            if key not in properties:
                raise InvalidArgumentsError(tool_name, f"unknown field: {key}")

    for key, value in arguments.items():
        field_schema = properties.get(key)
        if not isinstance(field_schema, dict):
            continue
        type_name = field_schema.get("type")
        if isinstance(type_name, str) and not value_matches_type(value, type_name):
            raise InvalidArgumentsError(tool_name, f"field '{key}' must be of type {type_name}")


def value_matches_type(value: Any, type_name: str) -> bool:
    """Return whether a decoded JSON *value* has the JSON Schema primitive *type_name*.

    Unknown type names always match.
    """
    if type_name == "string":
        return isinstance(value, str)
    if type_name == "integer":
        if isinstance(value, bool):
            return False
        return isinstance(value, int) or (isinstance(value, float) and value.is_integer())
    if type_name == "number":
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if type_name == "boolean":
        return isinstance(value, bool)
    if type_name == "object":
        return isinstance(value, dict)
    if type_name == "array":
        return isinstance(value, list)
    if type_name == "null":
        return value is None
    return True
