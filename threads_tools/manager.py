"""ThreadsManager: authenticated publish/read workflow over the Threads Graph API.

Publishing is two-phase: create a media container, then publish it by id.
Carousels add a phase in front: one container per child item, then an
aggregate container referencing the children.

Every step is a single awaited request; nothing runs concurrently and nothing
is retried. httpx errors propagate unchanged.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from threads_tools.client.graph import GraphClient, Method
from threads_tools.config import DEFAULT_API_VERSION, DEFAULT_BASE_URL, ThreadsConfig, load_config
from threads_tools.errors import ToolValidationError, UpstreamContractError
from threads_tools.models import (
    MEDIA_URL_FIELDS,
    CarouselMediaType,
    MediaType,
    PublishingLimit,
    ReplyControl,
    ThreadsInsight,
    ThreadsMedia,
)

_log = logging.getLogger(__name__)

DEFAULT_API_BASE = f"{DEFAULT_BASE_URL}/{DEFAULT_API_VERSION}"

THREAD_FIELDS = "id,text,media_type,media_url,permalink,timestamp,like_count,reply_count"
REPLY_FIELDS = "id,text,username,timestamp,like_count,reply_count"
INSIGHT_METRICS = "views,likes,replies,reposts,quotes"
PUBLISHING_LIMIT_FIELDS = "quota_usage,config,reply_quota_usage,reply_config"
CONTAINER_STATUS_FIELDS = "id,status,error_message"


def _item_value(item: Any, key: str) -> Any:
    """Read a carousel item field from either a mapping or a model instance."""
    if isinstance(item, Mapping):
        return item.get(key)
    return getattr(item, key, None)


class ThreadsManager:
    def __init__(
        self,
        client: GraphClient,
        user_id: str,
        access_token: str,
        *,
        base_url: str = DEFAULT_API_BASE,
    ) -> None:
        self._client = client
        self._user_id = user_id
        self._access_token = access_token
        self._base_url = base_url

    @classmethod
    def from_config(cls, config: ThreadsConfig, client: GraphClient | None = None) -> ThreadsManager:
        return cls(
            client or GraphClient(timeout=config.timeout),
            config.user_id,
            config.access_token,
            base_url=config.api_base,
        )

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> ThreadsManager:
        """Build from THREADS_ACCESS_TOKEN / THREADS_USER_ID.

        Raises ConfigurationError, without touching the network, if either is unset.
        """
        return cls.from_config(load_config(env))

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def client(self) -> GraphClient:
        return self._client

    def __repr__(self) -> str:
        return f"ThreadsManager(user_id={self._user_id!r}, base_url={self._base_url!r})"

    async def _request(self, endpoint: str, method: Method, params: Mapping[str, Any] | None = None) -> Any:
        return await self._client.request(
            method,
            endpoint,
            params,
            base_url=self._base_url,
            access_token=self._access_token,
        )

    async def _create_container(self, params: Mapping[str, Any], *, what: str) -> str:
        container = await self._request(f"{self._user_id}/threads", "POST", params)
        creation_id = container.get("id") if isinstance(container, Mapping) else None
        if not creation_id:
            raise UpstreamContractError(f"Failed to create {what}", response=container)
        _log.info("Created %s %s", what, creation_id)
        return str(creation_id)

    # ── Publishing ────────────────────────────────────────────────────────────

    async def post_thread(
        self,
        text: str | None = None,
        media_type: MediaType | str = MediaType.TEXT,
        media_url: str | None = None,
        *,
        reply_control: ReplyControl | str | None = None,
        quote_post_id: str | None = None,
        reply_to_id: str | None = None,
        link_attachment: str | None = None,
        alt_text: str | None = None,
    ) -> dict[str, Any]:
        """Publish a single text, image or video post and return the publish response."""
        try:
            media_type = MediaType(media_type)
        except ValueError:
            raise ToolValidationError(f"Unsupported media_type: {media_type!r}") from None
        if media_type is MediaType.CAROUSEL:
            raise ToolValidationError("Use post_carousel for CAROUSEL posts")
        if media_type is MediaType.TEXT and not text:
            raise ToolValidationError("Text is required for TEXT media type")

        params: dict[str, Any] = {
            "media_type": media_type.value,
            "text": text,
            "reply_control": ReplyControl(reply_control).value if reply_control else None,
            "quote_post_id": quote_post_id,
            "reply_to_id": reply_to_id,
            "link_attachment": link_attachment,
            "alt_text": alt_text,
        }
        if media_url:
            url_field = MEDIA_URL_FIELDS.get(media_type)
            if url_field is None:
                _log.warning("Ignoring media_url for %s post", media_type.value)
            else:
                params[url_field] = media_url

        creation_id = await self._create_container(params, what="Threads media container")
        return await self.publish_thread(creation_id)

    async def post_carousel(self, items: Iterable[Any], text: str | None = None) -> dict[str, Any]:
        """Publish a carousel of 2-10 image/video items, children in input order.

        Items may be mappings or CarouselItem models with ``url``, ``media_type``
        and optional ``alt_text``. If any child container comes back without an
        id, nothing further is created or published.
        """
        items = list(items)
        kinds: list[CarouselMediaType] = []
        for position, item in enumerate(items, start=1):
            try:
                kinds.append(CarouselMediaType(_item_value(item, "media_type")))
            except ValueError:
                raise ToolValidationError(f"Carousel item {position} must be IMAGE or VIDEO") from None

        children: list[str] = []
        failed: list[int] = []

        for position, (item, kind) in enumerate(zip(items, kinds), start=1):
            params: dict[str, Any] = {
                "media_type": kind.value,
                "is_carousel_item": True,
                MEDIA_URL_FIELDS[MediaType(kind.value)]: _item_value(item, "url"),
            }
            alt_text = _item_value(item, "alt_text")
            if alt_text:
                params["alt_text"] = alt_text

            container = await self._request(f"{self._user_id}/threads", "POST", params)
            child_id = container.get("id") if isinstance(container, Mapping) else None
            if child_id:
                children.append(str(child_id))
            else:
                _log.warning("Carousel item %d returned no container id: %r", position, container)
                failed.append(position)

        if not children:
            raise UpstreamContractError("Failed to create carousel items")
        if failed:
            positions = ", ".join(str(p) for p in failed)
            raise UpstreamContractError(f"Failed to create carousel items at positions {positions}")

        params = {
            "media_type": MediaType.CAROUSEL.value,
            # A single comma-delimited string; list values would be sent as repeated keys.
            "children": ",".join(children),
        }
        if text:
            params["text"] = text

        creation_id = await self._create_container(params, what="carousel container")
        return await self.publish_thread(creation_id)

    async def publish_thread(self, creation_id: str) -> dict[str, Any]:
        published = await self._request(
            f"{self._user_id}/threads_publish",
            "POST",
            {"creation_id": creation_id},
        )
        _log.info("Published container %s", creation_id)
        return published

    async def reply_to_thread(self, media_id: str, text: str) -> dict[str, Any]:
        return await self.post_thread(text, MediaType.TEXT, reply_to_id=media_id)

    # ── Reading ───────────────────────────────────────────────────────────────

    async def get_replies(self, media_id: str, limit: int = 25, cursor: str | None = None) -> dict[str, Any]:
        """Return one raw page of replies, including any ``paging`` cursors."""
        return await self._request(
            f"{media_id}/replies",
            "GET",
            {"fields": REPLY_FIELDS, "limit": limit, "after": cursor},
        )

    async def get_user_threads(self, limit: int = 25) -> list[ThreadsMedia]:
        response = await self._request(
            f"{self._user_id}/threads",
            "GET",
            {"fields": THREAD_FIELDS, "limit": limit},
        )
        return response.get("data", [])

    async def get_user_insights(self) -> list[ThreadsInsight]:
        response = await self._request(
            f"{self._user_id}/threads_insights",
            "GET",
            {"metric": INSIGHT_METRICS, "period": "day"},
        )
        return response.get("data", [])

    async def get_publishing_limit(self) -> PublishingLimit:
        """Return current quota usage; the endpoint wraps one object in a ``data`` list."""
        response = await self._request(
            f"{self._user_id}/threads_publishing_limit",
            "GET",
            {"fields": PUBLISHING_LIMIT_FIELDS},
        )
        data = response.get("data")
        if isinstance(data, list):
            if not data:
                raise UpstreamContractError("Publishing limit response had no data", response=response)
            return data[0]
        if data is None:
            raise UpstreamContractError("Publishing limit response had no data", response=response)
        return data

    async def get_container_status(self, container_id: str) -> dict[str, Any]:
        """Check whether a media container finished processing (``FINISHED``/``ERROR``/...)."""
        return await self._request(container_id, "GET", {"fields": CONTAINER_STATUS_FIELDS})
