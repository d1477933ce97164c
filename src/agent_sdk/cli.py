"""agent-sdk CLI entry point: Click group with a ``run`` subcommand."""

from __future__ import annotations

import asyncio
import json
import logging
import sys

import click

from agent_sdk import __version__
from agent_sdk.agent import Agent
from agent_sdk.errors import AgentError
from agent_sdk.events import (
    AgentEvent,
    FinalResponseEvent,
    HiddenUserMessageEvent,
    MessageCompleteEvent,
    StepCompleteEvent,
    TextEvent,
    ThinkingEvent,
    ToolCallEvent,
    ToolResultEvent,
)
from agent_sdk.llm.anthropic import AnthropicModel
from agent_sdk.llm.base import ChatModel
from agent_sdk.tools.builtin import TodoList, all_tools

DEFAULT_MODEL = "claude-sonnet-4-5"
DEFAULT_SYSTEM_PROMPT = (
    "You are a careful assistant. Track multi-step work with the todo tools "
    "and call the done tool with your final answer when the task is complete."
)


def _truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


def _build_model(model_name: str) -> ChatModel:
    return AnthropicModel.from_env(model_name)


def _format_event(event: AgentEvent) -> str | None:
    """Render one event as a console line, or None to skip it."""
    if isinstance(event, MessageCompleteEvent):
        return f"user [{event.message_id}]: {_truncate(event.content, 160)}"
    if isinstance(event, HiddenUserMessageEvent):
        return f"hidden-user: {_truncate(event.content, 160)}"
    if isinstance(event, ThinkingEvent):
        return f"thinking: {_truncate(event.content, 160)}"
    if isinstance(event, TextEvent):
        return f"assistant: {_truncate(event.content, 200)}"
    if isinstance(event, ToolCallEvent):
        args = json.dumps(event.arguments)
        return f"tool-call [{event.tool_call_id}] {event.tool}: {_truncate(args, 160)}"
    if isinstance(event, ToolResultEvent):
        return (
            f"tool-result [{event.tool_call_id}] {event.tool} "
            f"(error={event.is_error}): {_truncate(event.result_text, 240)}"
        )
    if isinstance(event, StepCompleteEvent):
        return f"step-complete [{event.step_id}] {event.status.value} ({event.duration_ms} ms)"
    if isinstance(event, FinalResponseEvent):
        return f"\nfinal:\n{event.content}"
    return None


async def _run_agent(agent: Agent, prompt: str) -> None:
    try:
        async for event in agent.query_stream(prompt):
            line = _format_event(event)
            if line is not None:
                click.echo(line)
    finally:
        close = getattr(agent.model, "aclose", None)
        if close is not None:
            await close()


@click.group()
@click.version_option(version=__version__, prog_name="agent-sdk")
def cli() -> None:
    """agent-sdk - run a tool-using agent with explicit completion."""


@cli.command()
@click.argument("prompt", nargs=-1, required=True)
@click.option("--model", "model_name", envvar="ANTHROPIC_MODEL", default=DEFAULT_MODEL,
              show_default=True, help="Anthropic model id")
@click.option("--max-iterations", default=64, show_default=True, type=click.IntRange(min=1),
              help="Upper bound on model round trips")
@click.option("--require-done/--no-require-done", default=True, show_default=True,
              help="Only finish when the model calls the done tool")
@click.option("--system-prompt", default=DEFAULT_SYSTEM_PROMPT, help="System prompt for the run")
@click.option("--verbose", is_flag=True, help="Log provider and tool activity to stderr")
def run(
    prompt: tuple[str, ...],
    model_name: str,
    max_iterations: int,
    require_done: bool,
    system_prompt: str,
    verbose: bool,
) -> None:
    """Run the agent on PROMPT and print its event stream."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    try:
        model = _build_model(model_name)
        agent = (
            Agent.builder()
            .model(model)
            .tools(all_tools())
            .dependency(TodoList())
            .system_prompt(system_prompt)
            .require_done_tool(require_done)
            .max_iterations(max_iterations)
            .build()
        )
        asyncio.run(_run_agent(agent, " ".join(prompt)))
    except AgentError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


def main() -> None:
    cli()
