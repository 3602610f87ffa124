from __future__ import annotations

from typing import Any, Protocol

import requests

from .config_schema import FetchConfig
from .errors import FetchError
from .http_retry import is_retryable_http_exception
from .retry import OnRetryFn, RetryPolicy, SleepFn, call_with_retries


class PageFetcher(Protocol):
    def fetch(self, url: str) -> str: ...


class _Session(Protocol):
    headers: Any

    def get(self, url: str, **kwargs: Any) -> Any: ...


def retry_policy_from_config(config: FetchConfig) -> RetryPolicy:
    return RetryPolicy(
        max_attempts=config.max_attempts,
        base_delay_seconds=config.base_delay_seconds,
        max_delay_seconds=config.max_delay_seconds,
    )


class ChannelPageFetcher:
    """
    Downloads a channel page as text with requests.

    This only does transport: headers, timeout and retries. Parsing is left to
    yt_community.extract, which never performs I/O.
    """

    def __init__(
        self,
        config: FetchConfig | None = None,
        *,
        session: _Session | None = None,
        on_retry: OnRetryFn | None = None,
        sleep_fn: SleepFn | None = None,
    ) -> None:
        self._config = config or FetchConfig()
        self._policy = retry_policy_from_config(self._config)
        self._on_retry = on_retry
        self._sleep_fn = sleep_fn

        self._session = session if session is not None else requests.Session()
        self._session.headers.update(
            {
                "User-Agent": self._config.user_agent,
                "Accept-Language": self._config.accept_language,
            }
        )

    def fetch(self, url: str) -> str:
        target = (url or "").strip() if isinstance(url, str) else ""
        if not target:
            raise FetchError("A non-empty channel URL is required")

        def _do_get() -> str:
            response = self._session.get(target, timeout=self._config.timeout_seconds)
            response.raise_for_status()
            return response.text

        try:
            return call_with_retries(
                _do_get,
                policy=self._policy,
                is_retryable=is_retryable_http_exception,
                operation="fetch_channel_page",
                on_retry=self._on_retry,
                sleep_fn=self._sleep_fn,
                url=target,
            )
        except requests.RequestException as e:
            raise FetchError(f"Failed to fetch {target}: {e}") from e
