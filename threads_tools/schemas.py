"""Input schemas for every Threads tool.

Each tool has one pydantic model. ``validate`` turns free-form arguments into a
model instance (or a ToolValidationError listing every violation) and
``describe`` renders the JSON schema handed to tool-calling hosts.
"""
from __future__ import annotations

from typing import Annotated, Any, Literal, Mapping, TypeVar

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    WithJsonSchema,
)

from threads_tools.errors import ToolValidationError
from threads_tools.models import CarouselMediaType, ReplyControl

_HTTP_URL = TypeAdapter(HttpUrl)


def _check_url(value: str) -> str:
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError:
        raise ValueError("must be a valid http(s) URL") from None
    return value


# Validated as a URL but passed on exactly as the caller wrote it.
Url = Annotated[str, AfterValidator(_check_url), WithJsonSchema({"type": "string", "format": "uri"})]

# One pagination policy for every listing.
Limit = Annotated[int, Field(ge=1, le=50, description="Number of items to return (1-50).")]


class _ToolInput(BaseModel):
    # Unknown keys are dropped, not rejected.
    model_config = ConfigDict(extra="ignore", frozen=True)


# ── Publishing ────────────────────────────────────────────────────────────────

class PostThreadInput(_ToolInput):
    text: str | None = Field(default=None, description="Text content of the thread. Required if media_type is TEXT.")
    media_type: Literal["TEXT", "IMAGE", "VIDEO"] = Field(default="TEXT", description="Kind of post to publish.")
    media_url: Url | None = Field(default=None, description="Public URL of the image or video.")
    reply_control: ReplyControl | None = Field(default=None, description="Who can reply to this thread.")
    quote_post_id: str | None = Field(default=None, description="ID of a post to quote.")
    link_attachment: Url | None = Field(default=None, description="URL to attach as a link preview.")
    alt_text: str | None = Field(default=None, description="Alt text for media.")


class PostPhotoInput(_ToolInput):
    url: Url = Field(description="Public image URL.")
    text: str | None = Field(default=None, description="Caption text.")
    alt_text: str | None = Field(default=None, description="Alt text for the image.")


class PostVideoInput(_ToolInput):
    url: Url = Field(description="Public video URL.")
    text: str | None = Field(default=None, description="Caption text.")
    alt_text: str | None = Field(default=None, description="Alt text for the video.")


class CarouselItem(_ToolInput):
    url: Url = Field(description="Public URL of the image or video.")
    media_type: CarouselMediaType = Field(description="IMAGE or VIDEO.")
    alt_text: str | None = Field(default=None, description="Alt text for this item.")


class PostCarouselInput(_ToolInput):
    items: list[CarouselItem] = Field(min_length=2, max_length=10, description="2-10 media items, in display order.")
    text: str | None = Field(default=None, description="Caption text for the carousel.")


# ── Replies ───────────────────────────────────────────────────────────────────

class GetRepliesInput(_ToolInput):
    media_id: str = Field(min_length=1, description="Thread / media ID.")
    limit: Limit = 25
    cursor: str | None = Field(default=None, description="Pagination cursor from a previous page's paging.cursors.after.")


class ReplyInput(_ToolInput):
    media_id: str = Field(min_length=1, description="Thread / media ID to reply to.")
    text: str = Field(min_length=1, description="Reply text.")


# ── Account ───────────────────────────────────────────────────────────────────

class GetUserThreadsInput(_ToolInput):
    limit: Limit = 25


class GetInsightsInput(_ToolInput):
    pass


class GetPublishingLimitInput(_ToolInput):
    pass


TOOL_SCHEMAS: dict[str, type[BaseModel]] = {
    "threads_post": PostThreadInput,
    "threads_post_photo": PostPhotoInput,
    "threads_post_video": PostVideoInput,
    "threads_post_carousel": PostCarouselInput,
    "threads_get_replies": GetRepliesInput,
    "threads_reply": ReplyInput,
    "threads_get_user_threads": GetUserThreadsInput,
    "threads_get_insights": GetInsightsInput,
    "threads_get_publishing_limit": GetPublishingLimitInput,
}

TOOL_DESCRIPTIONS: dict[str, str] = {
    "threads_post": "Publish a new Thread (text, image, or video).",
    "threads_post_photo": "Publish a photo Thread from a public image URL.",
    "threads_post_video": "Publish a video Thread from a public video URL.",
    "threads_post_carousel": "Publish a carousel Thread of 2-10 images and/or videos.",
    "threads_get_replies": "Get replies to a specific thread, one page at a time.",
    "threads_reply": "Reply to a thread or comment.",
    "threads_get_user_threads": "Get threads published by the authenticated user.",
    "threads_get_insights": "Get daily insights (views, likes, replies, reposts, quotes) for the Threads account.",
    "threads_get_publishing_limit": "Check Threads publishing rate limits and quota usage.",
}


ModelT = TypeVar("ModelT", bound=BaseModel)


def validate(schema: type[ModelT], args: Mapping[str, Any] | None, tool: str | None = None) -> ModelT:
    """Parse raw tool arguments; defaults are applied, violations raise ToolValidationError."""
    try:
        return schema.model_validate(dict(args or {}))
    except ValidationError as exc:
        errors = [
            {"loc": tuple(err["loc"]), "msg": err["msg"], "type": err["type"]}
            for err in exc.errors()
        ]
        raise ToolValidationError("Invalid arguments", tool=tool, errors=errors) from exc


def describe(schema: type[BaseModel]) -> dict[str, Any]:
    """Return a JSON-schema object for a tool's parameters."""
    json_schema = schema.model_json_schema()
    json_schema.pop("title", None)
    json_schema.setdefault("properties", {})
    json_schema.setdefault("required", [])
    json_schema["type"] = "object"
    return json_schema
