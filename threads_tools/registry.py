"""Tool registry: name-indexed definitions + validated executors over a ThreadsManager.

``definitions`` is what a tool-calling host advertises to the model;
``handlers`` maps each name to an async callable that validates raw arguments,
calls the matching ThreadsManager method and returns its result unmodified.
Building a registry performs no I/O.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Iterable, Mapping

from threads_tools.errors import UnknownToolError
from threads_tools.schemas import (
    TOOL_DESCRIPTIONS,
    TOOL_SCHEMAS,
    GetInsightsInput,
    GetPublishingLimitInput,
    GetRepliesInput,
    GetUserThreadsInput,
    PostCarouselInput,
    PostPhotoInput,
    PostThreadInput,
    PostVideoInput,
    ReplyInput,
    describe,
    validate,
)

if TYPE_CHECKING:
    from threads_tools.manager import ThreadsManager

ToolHandler = Callable[[Mapping[str, Any] | None], Awaitable[Any]]

TOOL_NAMES: tuple[str, ...] = tuple(TOOL_SCHEMAS)

# Core four-tool surface; the other five are publishing/reply extras.
MINIMAL_TOOL_NAMES: tuple[str, ...] = (
    "threads_post",
    "threads_get_user_threads",
    "threads_get_insights",
    "threads_get_publishing_limit",
)

# Names used by the earlier four-tool surface, still accepted on lookup.
LEGACY_ALIASES: dict[str, str] = {
    "th_post_thread": "threads_post",
    "th_get_user_threads": "threads_get_user_threads",
    "th_get_user_insights": "threads_get_insights",
    "th_get_publishing_limit": "threads_get_publishing_limit",
}


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    input_schema: dict[str, Any]

    def to_openai(self) -> dict[str, Any]:
        """Chat Completions ``tools=[...]`` entry for this tool."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.input_schema,
            },
        }


@dataclass(frozen=True)
class ToolRegistry:
    definitions: tuple[ToolDefinition, ...]
    handlers: Mapping[str, ToolHandler] = field(repr=False)

    @property
    def names(self) -> list[str]:
        return [d.name for d in self.definitions]

    def resolve(self, name: str) -> str:
        canonical = LEGACY_ALIASES.get(name, name)
        if canonical not in self.handlers:
            raise UnknownToolError(name, self.names)
        return canonical

    def get(self, name: str) -> ToolHandler:
        return self.handlers[self.resolve(name)]

    async def call(self, name: str, args: Mapping[str, Any] | None = None) -> Any:
        return await self.get(name)(args)

    def openai_schemas(self) -> list[dict[str, Any]]:
        return [d.to_openai() for d in self.definitions]


def _build_handlers(manager: ThreadsManager) -> dict[str, ToolHandler]:
    async def threads_post(args: Mapping[str, Any] | None) -> Any:
        p = validate(PostThreadInput, args, "threads_post")
        return await manager.post_thread(
            p.text,
            p.media_type,
            p.media_url,
            reply_control=p.reply_control,
            quote_post_id=p.quote_post_id,
            link_attachment=p.link_attachment,
            alt_text=p.alt_text,
        )

    async def threads_post_photo(args: Mapping[str, Any] | None) -> Any:
        p = validate(PostPhotoInput, args, "threads_post_photo")
        return await manager.post_thread(p.text, "IMAGE", p.url, alt_text=p.alt_text)

    async def threads_post_video(args: Mapping[str, Any] | None) -> Any:
        p = validate(PostVideoInput, args, "threads_post_video")
        return await manager.post_thread(p.text, "VIDEO", p.url, alt_text=p.alt_text)

    async def threads_post_carousel(args: Mapping[str, Any] | None) -> Any:
        p = validate(PostCarouselInput, args, "threads_post_carousel")
        return await manager.post_carousel(p.items, p.text)

    async def threads_get_replies(args: Mapping[str, Any] | None) -> Any:
        p = validate(GetRepliesInput, args, "threads_get_replies")
        return await manager.get_replies(p.media_id, p.limit, p.cursor)

    async def threads_reply(args: Mapping[str, Any] | None) -> Any:
        p = validate(ReplyInput, args, "threads_reply")
        return await manager.reply_to_thread(p.media_id, p.text)

    async def threads_get_user_threads(args: Mapping[str, Any] | None) -> Any:
        p = validate(GetUserThreadsInput, args, "threads_get_user_threads")
        return await manager.get_user_threads(p.limit)

    async def threads_get_insights(args: Mapping[str, Any] | None) -> Any:
        validate(GetInsightsInput, args, "threads_get_insights")
        return await manager.get_user_insights()

    async def threads_get_publishing_limit(args: Mapping[str, Any] | None) -> Any:
        validate(GetPublishingLimitInput, args, "threads_get_publishing_limit")
        return await manager.get_publishing_limit()

    return {
        "threads_post": threads_post,
        "threads_post_photo": threads_post_photo,
        "threads_post_video": threads_post_video,
        "threads_post_carousel": threads_post_carousel,
        "threads_get_replies": threads_get_replies,
        "threads_reply": threads_reply,
        "threads_get_user_threads": threads_get_user_threads,
        "threads_get_insights": threads_get_insights,
        "threads_get_publishing_limit": threads_get_publishing_limit,
    }


def build_tool_definitions(names: Iterable[str] = TOOL_NAMES) -> tuple[ToolDefinition, ...]:
    """Definitions for ``names``; needs no manager or credentials."""
    return tuple(
        ToolDefinition(name=name, description=TOOL_DESCRIPTIONS[name], input_schema=describe(TOOL_SCHEMAS[name]))
        for name in names
    )


def _select(include: Iterable[str] | None) -> list[str]:
    if include is None:
        return list(TOOL_NAMES)
    wanted = {LEGACY_ALIASES.get(n, n) for n in include}
    unknown = sorted(wanted - set(TOOL_NAMES))
    if unknown:
        raise UnknownToolError(unknown[0], list(TOOL_NAMES))
    # Canonical order regardless of how ``include`` was ordered.
    return [n for n in TOOL_NAMES if n in wanted]


def create_tool_registry(manager: ThreadsManager, include: Iterable[str] | None = None) -> ToolRegistry:
    """Build the registry for ``manager``; pass ``include=MINIMAL_TOOL_NAMES`` for the four-tool surface."""
    names = _select(include)
    all_handlers = _build_handlers(manager)
    return ToolRegistry(
        definitions=build_tool_definitions(names),
        handlers=MappingProxyType({n: all_handlers[n] for n in names}),
    )
