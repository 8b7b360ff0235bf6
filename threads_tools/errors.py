"""Error taxonomy for threads-tools.

Transport and HTTP failures are not part of this hierarchy: they surface as the
``httpx.HTTPError`` subclasses raised by the underlying client, unchanged.
"""
from __future__ import annotations

from typing import Any


class ThreadsError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(ThreadsError):
    """A required credential or setting is missing or malformed."""


class ToolValidationError(ThreadsError, ValueError):
    """Tool input violated a schema constraint or a workflow precondition."""

    def __init__(
        self,
        message: str,
        *,
        tool: str | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.tool = tool
        self.errors = errors or []
        super().__init__(self._render())

    def _render(self) -> str:
        prefix = f"{self.tool}: " if self.tool else ""
        if not self.errors:
            return f"{prefix}{self.message}"
        lines = [f"{prefix}{self.message}"]
        for err in self.errors:
            loc = ".".join(str(part) for part in err.get("loc", ())) or "(input)"
            lines.append(f"  - {loc}: {err.get('msg', '')}")
        return "\n".join(lines)


class UpstreamContractError(ThreadsError):
    """A successful Graph API response lacked a documented field (e.g. ``id``)."""

    def __init__(self, message: str, response: Any = None) -> None:
        self.response = response
        super().__init__(message)


class UnknownToolError(ThreadsError, KeyError):
    """The registry has no tool under the requested name."""

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.name = name
        self.available = available or []
        super().__init__(name)

    def __str__(self) -> str:
        available = ", ".join(self.available) or "none"
        return f"Unknown tool: {self.name}. Available tools: {available}"
