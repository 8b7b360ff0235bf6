import json
from unittest.mock import AsyncMock, patch

import pytest
from agents.exceptions import MaxTurnsExceeded, UserError
from typer.testing import CliRunner

from threads_tools.cli import app
from threads_tools.errors import ToolValidationError
from threads_tools.registry import MINIMAL_TOOL_NAMES, TOOL_NAMES

runner = CliRunner()


@pytest.fixture
def credentials(monkeypatch):
    monkeypatch.setenv("THREADS_ACCESS_TOKEN", "tok")
    monkeypatch.setenv("THREADS_USER_ID", "42")


def test_tools_prints_full_catalog():
    result = runner.invoke(app, ["tools"])
    assert result.exit_code == 0
    catalog = json.loads(result.stdout)
    assert [t["name"] for t in catalog] == list(TOOL_NAMES)
    assert catalog[0]["inputSchema"]["type"] == "object"


def test_tools_minimal():
    result = runner.invoke(app, ["tools", "--minimal"])
    assert result.exit_code == 0
    assert [t["name"] for t in json.loads(result.stdout)] == list(MINIMAL_TOOL_NAMES)


def test_command_without_credentials_exits_1(monkeypatch):
    monkeypatch.delenv("THREADS_ACCESS_TOKEN", raising=False)
    monkeypatch.delenv("THREADS_USER_ID", raising=False)
    result = runner.invoke(app, ["limit"])
    assert result.exit_code == 1
    assert "THREADS_ACCESS_TOKEN" in result.stdout


def test_post_rejects_both_image_and_video():
    result = runner.invoke(app, ["post", "hi", "--image", "https://a/b.png", "--video", "https://a/c.mp4"])
    assert result.exit_code == 1


def test_ask_reports_tool_error_raised_inside_the_run(credentials):
    """A tool failure wrapped by Runner.run is unwrapped into a one-line error and exit 1."""
    cause = ToolValidationError(
        "Invalid arguments",
        tool="threads_reply",
        errors=[{"loc": ("text",), "msg": "Field required", "type": "missing"}],
    )
    wrapped = UserError("Error running tool threads_reply")
    wrapped.__cause__ = cause
    with patch("agents.Runner.run", new=AsyncMock(side_effect=wrapped)):
        result = runner.invoke(app, ["ask", "reply to thread 1"])
    assert result.exit_code == 1
    assert not isinstance(result.exception, UserError)
    assert "threads_reply: Invalid arguments" in result.stdout
    assert "Field required" in result.stdout


def test_ask_reports_agent_errors_without_cause(credentials):
    with patch("agents.Runner.run", new=AsyncMock(side_effect=MaxTurnsExceeded("Max turns (10) exceeded"))):
        result = runner.invoke(app, ["ask", "loop forever"])
    assert result.exit_code == 1
    assert "Max turns (10) exceeded" in result.stdout
