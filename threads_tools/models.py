"""Enums and read projections for Threads Graph API payloads."""
from enum import Enum
from typing import Any, TypedDict


class MediaType(str, Enum):
    TEXT = "TEXT"
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"
    CAROUSEL = "CAROUSEL"


class CarouselMediaType(str, Enum):
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"


class ReplyControl(str, Enum):
    EVERYONE = "everyone"
    ACCOUNTS_YOU_FOLLOW = "accounts_you_follow"
    MENTIONED_ONLY = "mentioned_only"


# Field name the container-creation endpoint expects for each media kind.
MEDIA_URL_FIELDS: dict[MediaType, str] = {
    MediaType.IMAGE: "image_url",
    MediaType.VIDEO: "video_url",
}


class ThreadsMedia(TypedDict, total=False):
    id: str
    text: str
    media_type: str
    media_url: str
    permalink: str
    timestamp: str
    like_count: int
    reply_count: int


class ThreadsInsight(TypedDict, total=False):
    # Returned verbatim; metric shapes differ (time series vs total_value).
    id: str
    name: str
    period: str
    title: str
    description: str
    values: list[dict[str, Any]]
    total_value: dict[str, Any]


class PublishingLimit(TypedDict, total=False):
    quota_usage: int
    config: dict[str, Any]
    reply_quota_usage: int
    reply_config: dict[str, Any]
