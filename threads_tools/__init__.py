"""Typed tools over the Threads (Meta) Graph API."""
from threads_tools.client.graph import GraphClient
from threads_tools.config import ThreadsConfig, load_config
from threads_tools.errors import (
    ConfigurationError,
    ThreadsError,
    ToolValidationError,
    UnknownToolError,
    UpstreamContractError,
)
from threads_tools.manager import ThreadsManager
from threads_tools.models import CarouselMediaType, MediaType, ReplyControl
from threads_tools.registry import (
    MINIMAL_TOOL_NAMES,
    TOOL_NAMES,
    ToolDefinition,
    ToolRegistry,
    create_tool_registry,
)

__all__ = [
    "CarouselMediaType",
    "ConfigurationError",
    "GraphClient",
    "MINIMAL_TOOL_NAMES",
    "MediaType",
    "ReplyControl",
    "TOOL_NAMES",
    "ThreadsConfig",
    "ThreadsError",
    "ThreadsManager",
    "ToolDefinition",
    "ToolRegistry",
    "ToolValidationError",
    "UnknownToolError",
    "UpstreamContractError",
    "create_tool_registry",
    "load_config",
]
