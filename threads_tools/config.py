"""Explicit configuration for the Threads Graph API.

Settings are read from the process environment on demand; nothing is cached at
module level. Load a ``.env`` file (``python-dotenv``) before calling
:func:`load_config` if you want one honoured; the CLI does this at startup.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from threads_tools.errors import ConfigurationError

DEFAULT_BASE_URL = "https://graph.threads.net"
DEFAULT_API_VERSION = "v1.0"
DEFAULT_TIMEOUT = 30.0

ACCESS_TOKEN_VAR = "THREADS_ACCESS_TOKEN"
USER_ID_VAR = "THREADS_USER_ID"


@dataclass(frozen=True)
class ThreadsConfig:
    access_token: str
    user_id: str
    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    timeout: float = DEFAULT_TIMEOUT

    @property
    def api_base(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.api_version}"

    def __repr__(self) -> str:
        # Keep the token out of logs and tracebacks.
        return (
            f"ThreadsConfig(user_id={self.user_id!r}, base_url={self.base_url!r}, "
            f"api_version={self.api_version!r}, timeout={self.timeout!r})"
        )


def load_config(env: Mapping[str, str] | None = None) -> ThreadsConfig:
    """Build a ThreadsConfig from environment variables.

    Required: THREADS_ACCESS_TOKEN, THREADS_USER_ID.
    Optional: THREADS_API_BASE_URL, THREADS_API_VERSION, THREADS_TIMEOUT.

    Raises ConfigurationError before any network activity if a required value is
    missing or empty.
    """
    source = os.environ if env is None else env

    access_token = (source.get(ACCESS_TOKEN_VAR) or "").strip()
    user_id = (source.get(USER_ID_VAR) or "").strip()
    missing = [
        name for name, value in ((ACCESS_TOKEN_VAR, access_token), (USER_ID_VAR, user_id))
        if not value
    ]
    if missing:
        raise ConfigurationError(f"{' and '.join(missing)} must be set.")

    raw_timeout = source.get("THREADS_TIMEOUT")
    timeout = DEFAULT_TIMEOUT
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError(f"THREADS_TIMEOUT must be a number, got {raw_timeout!r}") from None
        if timeout <= 0:
            raise ConfigurationError("THREADS_TIMEOUT must be positive.")

    return ThreadsConfig(
        access_token=access_token,
        user_id=user_id,
        base_url=source.get("THREADS_API_BASE_URL") or DEFAULT_BASE_URL,
        api_version=source.get("THREADS_API_VERSION") or DEFAULT_API_VERSION,
        timeout=timeout,
    )
