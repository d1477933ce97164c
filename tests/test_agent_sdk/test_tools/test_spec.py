"""Tests for ToolSpec, schema checks and argument validation."""

import pytest

from agent_sdk.dependencies import DependencyContainer
from agent_sdk.errors import InvalidArgumentsError, SchemaError, ToolExecutionError
from agent_sdk.llm.types import ToolDefinition
from agent_sdk.tools.spec import (
    ToolOutcome,
    ToolSpec,
    validate_arguments,
    validate_schema,
    value_matches_type,
)


def _schema(properties: dict, required: list[str] | None = None, strict: bool = True) -> dict:
    return {
        "type": "object",
        "properties": properties,
        "required": required or [],
        "additionalProperties": not strict,
    }


def _make_spec(**overrides) -> ToolSpec:
    defaults = dict(
        name="echo",
        description="echo the text back",
        parameters=_schema({"text": {"type": "string"}}, ["text"]),
        handler=lambda args, deps: ToolOutcome.text(args["text"]),
    )
    defaults.update(overrides)
    return ToolSpec(**defaults)


class TestToolOutcome:
    def test_text(self):
        outcome = ToolOutcome.text("hi")
        assert outcome.content == "hi"
        assert not outcome.is_done

    def test_finish(self):
        outcome = ToolOutcome.finish("bye")
        assert outcome.content == "bye"
        assert outcome.is_done


class TestSchemaValidation:
    def test_default_schema_is_permissive_object(self):
        spec = ToolSpec(name="noop", description="nothing")
        assert spec.parameters == {
            "type": "object",
            "properties": {},
            "required": [],
            "additionalProperties": True,
        }

    def test_non_object_schema_rejected(self):
        with pytest.raises(SchemaError, match="type=object"):
            ToolSpec(name="bad", description="x", parameters={"type": "array"})

    def test_non_dict_schema_rejected(self):
        with pytest.raises(SchemaError):
            validate_schema(["type", "object"])

    def test_required_must_be_string_list(self):
        with pytest.raises(SchemaError, match="required must be an array of strings"):
            validate_schema({"type": "object", "required": [1, 2]})

    def test_with_schema_revalidates(self):
        spec = _make_spec()
        with pytest.raises(SchemaError):
            spec.with_schema({"type": "string"})

    def test_with_schema_returns_copy(self):
        spec = _make_spec()
        wider = spec.with_schema(_schema({}, strict=False))
        assert wider.parameters["additionalProperties"] is True
        assert spec.parameters["required"] == ["text"]


class TestArgumentValidation:
    def test_valid_arguments(self):
        validate_arguments("t", _schema({"a": {"type": "integer"}}, ["a"]), {"a": 1})

    def test_non_object_arguments(self):
        with pytest.raises(InvalidArgumentsError, match="arguments must be a JSON object"):
            validate_arguments("t", _schema({}), [1, 2])

    def test_missing_required(self):
        with pytest.raises(InvalidArgumentsError) as exc_info:
            validate_arguments("calc", _schema({"a": {"type": "integer"}}, ["a"]), {})
        assert str(exc_info.value) == "invalid tool arguments for calc: missing required field: a"
        assert exc_info.value.tool == "calc"

    def test_unknown_field_when_closed(self):
        with pytest.raises(InvalidArgumentsError, match="unknown field: extra"):
            validate_arguments("t", _schema({"a": {"type": "string"}}), {"a": "x", "extra": 1})

    def test_unknown_field_allowed_when_open(self):
        validate_arguments("t", _schema({}, strict=False), {"anything": 1})

    def test_type_mismatch(self):
        with pytest.raises(InvalidArgumentsError, match="field 'a' must be of type integer"):
            validate_arguments("t", _schema({"a": {"type": "integer"}}), {"a": "2"})

    def test_untyped_property_accepts_anything(self):
        validate_arguments("t", _schema({"a": {"description": "free"}}), {"a": [1, "x"]})


class TestValueMatchesType:
    @pytest.mark.parametrize("value,type_name", [
        ("s", "string"),
        (3, "integer"),
        (3.0, "integer"),
        (3.5, "number"),
        (3, "number"),
        (True, "boolean"),
        ({}, "object"),
        ([], "array"),
        (None, "null"),
        (object(), "custom"),
    ])
    def test_matches(self, value, type_name):
        assert value_matches_type(value, type_name)

    @pytest.mark.parametrize("value,type_name", [
        (3.5, "integer"),
        (True, "integer"),
        (False, "number"),
        ("3", "number"),
        (1, "boolean"),
        ([], "object"),
        ({}, "array"),
        (0, "null"),
        (None, "string"),
    ])
    def test_mismatches(self, value, type_name):
        assert not value_matches_type(value, type_name)


class TestExecute:
    @pytest.mark.asyncio
    async def test_sync_handler(self):
        outcome = await _make_spec().execute({"text": "hi"}, DependencyContainer())
        assert outcome == ToolOutcome.text("hi")

    @pytest.mark.asyncio
    async def test_async_handler(self):
        async def handler(args, deps):
            return ToolOutcome.finish(args["text"])

        outcome = await _make_spec(handler=handler).execute({"text": "end"}, DependencyContainer())
        assert outcome.is_done
        assert outcome.content == "end"

    @pytest.mark.asyncio
    async def test_string_result_wrapped(self):
        spec = _make_spec(handler=lambda args, deps: args["text"].upper())
        outcome = await spec.execute({"text": "hi"}, DependencyContainer())
        assert outcome == ToolOutcome.text("HI")

    @pytest.mark.asyncio
    async def test_handler_receives_dependencies(self):
        deps = DependencyContainer()
        deps.insert_named("prefix", ">> ")
        spec = _make_spec(handler=lambda args, d: ToolOutcome.text(d.get_named("prefix") + args["text"]))
        outcome = await spec.execute({"text": "hi"}, deps)
        assert outcome.content == ">> hi"

    @pytest.mark.asyncio
    async def test_validation_happens_before_handler(self):
        called: list[bool] = []
        spec = _make_spec(handler=lambda args, deps: called.append(True) or ToolOutcome.text(""))
        with pytest.raises(InvalidArgumentsError):
            await spec.execute({}, DependencyContainer())
        assert called == []

    @pytest.mark.asyncio
    async def test_handler_receives_copy_of_arguments(self):
        def handler(args, deps):
            args["text"] = "changed"
            return ToolOutcome.text(args["text"])

        arguments = {"text": "original"}
        outcome = await _make_spec(handler=handler).execute(arguments, DependencyContainer())
        assert outcome.content == "changed"
        assert arguments == {"text": "original"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("returned", [None, 42, {"content": "x"}])
    async def test_unsupported_result_type(self, returned):
        spec = _make_spec(handler=lambda args, deps: returned)
        with pytest.raises(ToolExecutionError, match=f"handler returned {type(returned).__name__}"):
            await spec.execute({"text": "hi"}, DependencyContainer())

    @pytest.mark.asyncio
    async def test_unconfigured_handler(self):
        spec = ToolSpec(name="todo", description="not wired yet")
        with pytest.raises(ToolExecutionError, match="tool handler not configured"):
            await spec.execute({}, DependencyContainer())

    @pytest.mark.asyncio
    async def test_with_handler(self):
        spec = ToolSpec(name="todo", description="x").with_handler(lambda a, d: "wired")
        outcome = await spec.execute({}, DependencyContainer())
        assert outcome.content == "wired"


class TestDefinition:
    def test_definition_projection(self):
        spec = _make_spec()
        assert spec.definition() == ToolDefinition(
            name="echo", description="echo the text back", parameters=spec.parameters,
        )
