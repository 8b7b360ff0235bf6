"""OpenAI Agents SDK binding: one FunctionTool per registry entry.

Pure reshaping of the registry contract. The SDK hands us the model's
arguments as a JSON string; we decode it, run the registry handler (same
validation, same manager call) and hand back the result as JSON text.
"""
from __future__ import annotations

import json
from typing import Any, Iterable

from agents import FunctionTool, RunContextWrapper

from threads_tools.manager import ThreadsManager
from threads_tools.registry import ToolDefinition, ToolHandler, ToolRegistry, create_tool_registry


def _parse_arguments(raw: str) -> dict[str, Any]:
    if not raw or not raw.strip():
        return {}
    args = json.loads(raw)
    if not isinstance(args, dict):
        raise ValueError(f"Tool arguments must be a JSON object, got {type(args).__name__}")
    return args


def _as_function_tool(definition: ToolDefinition, handler: ToolHandler) -> FunctionTool:
    async def on_invoke_tool(ctx: RunContextWrapper[Any], raw_args: str) -> str:
        result = await handler(_parse_arguments(raw_args))
        return json.dumps(result, ensure_ascii=False, default=str)

    return FunctionTool(
        name=definition.name,
        description=definition.description,
        params_json_schema=definition.input_schema,
        on_invoke_tool=on_invoke_tool,
        # Optional fields with defaults are not expressible in strict mode.
        strict_json_schema=False,
    )


def tools_from_registry(registry: ToolRegistry) -> list[FunctionTool]:
    return [_as_function_tool(d, registry.handlers[d.name]) for d in registry.definitions]


def create_agent_tools(
    manager: ThreadsManager | None = None,
    include: Iterable[str] | None = None,
) -> list[FunctionTool]:
    """FunctionTools for every Threads operation.

    Without a manager one is built from THREADS_ACCESS_TOKEN / THREADS_USER_ID,
    which raises ConfigurationError if either is missing.
    """
    if manager is None:
        manager = ThreadsManager.from_env()
    return tools_from_registry(create_tool_registry(manager, include))
