"""OpenAI Agents SDK adapter: same names, schemas and behaviour as the registry."""
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from agents import Agent, FunctionTool

from threads_tools.agent.assistant import build_threads_agent
from threads_tools.agent.tools import create_agent_tools
from threads_tools.errors import ConfigurationError, ToolValidationError
from threads_tools.manager import ThreadsManager
from threads_tools.registry import MINIMAL_TOOL_NAMES, TOOL_NAMES, build_tool_definitions


def _manager(*responses):
    client = MagicMock()
    client.request = AsyncMock(side_effect=list(responses))
    return ThreadsManager(client, "42", "tok"), client


def test_one_function_tool_per_registry_entry():
    manager, _ = _manager()
    tools = create_agent_tools(manager)
    assert all(isinstance(t, FunctionTool) for t in tools)
    assert [t.name for t in tools] == list(TOOL_NAMES)


def test_tool_schema_and_description_match_registry():
    manager, _ = _manager()
    tools = {t.name: t for t in create_agent_tools(manager)}
    for definition in build_tool_definitions():
        tool = tools[definition.name]
        assert tool.description == definition.description
        assert tool.params_json_schema == definition.input_schema
        assert tool.strict_json_schema is False


def test_include_restricts_tools():
    manager, _ = _manager()
    tools = create_agent_tools(manager, include=MINIMAL_TOOL_NAMES)
    assert [t.name for t in tools] == list(MINIMAL_TOOL_NAMES)


def test_without_manager_reads_environment(monkeypatch):
    monkeypatch.delenv("THREADS_ACCESS_TOKEN", raising=False)
    monkeypatch.delenv("THREADS_USER_ID", raising=False)
    with pytest.raises(ConfigurationError):
        create_agent_tools()


def test_without_manager_uses_from_env():
    manager, _ = _manager()
    with patch.object(ThreadsManager, "from_env", return_value=manager) as from_env:
        tools = create_agent_tools()
    from_env.assert_called_once_with()
    assert len(tools) == len(TOOL_NAMES)


@pytest.mark.asyncio
async def test_invoking_tool_returns_json_result():
    data = [{"id": "1", "text": "hello"}]
    manager, client = _manager({"data": data})
    tools = {t.name: t for t in create_agent_tools(manager)}

    output = await tools["threads_get_user_threads"].on_invoke_tool(None, json.dumps({"limit": 3}))

    assert json.loads(output) == data
    assert client.request.call_args.args[2]["limit"] == 3


@pytest.mark.asyncio
async def test_invoking_tool_with_empty_arguments_uses_defaults():
    manager, client = _manager({"data": {"quota_usage": 0}})
    tools = {t.name: t for t in create_agent_tools(manager)}
    output = await tools["threads_get_publishing_limit"].on_invoke_tool(None, "")
    assert json.loads(output) == {"quota_usage": 0}


@pytest.mark.asyncio
async def test_invalid_arguments_propagate_validation_error():
    manager, client = _manager()
    tools = {t.name: t for t in create_agent_tools(manager)}
    with pytest.raises(ToolValidationError):
        await tools["threads_reply"].on_invoke_tool(None, json.dumps({"media_id": "1"}))
    client.request.assert_not_called()


def test_build_threads_agent():
    manager, _ = _manager()
    agent = build_threads_agent(manager, model="gpt-4o-mini")
    assert isinstance(agent, Agent)
    assert agent.model == "gpt-4o-mini"
    assert [t.name for t in agent.tools] == list(TOOL_NAMES)
