"""Reference dataset access.

``DatasetClient`` is the abstract fetch capability the pipeline depends on;
``HttpDatasetClient`` implements it over httpx with retry logic.
"""

from abc import ABC, abstractmethod
from typing import Any

import httpx
from loguru import logger

from pokerank.dataset.config import DatasetConfig
from pokerank.exceptions import TransientFetchError
from pokerank.utils.error_handling import RetryConfig, retry_with_backoff

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


class _RetryableFetch(Exception):
    """Internal marker for failures worth another attempt."""


class DatasetClient(ABC):
    """Interface for fetching JSON resources from the reference dataset."""

    def __init__(self, config: DatasetConfig | None = None):
        self.config = config or DatasetConfig()

    def url_for(self, resource: str, key: str | int) -> str:
        """Build ``{base_url}/{resource}/{key}``."""
        return f"{self.config.base_url}/{resource}/{key}"

    @abstractmethod
    async def fetch_json(self, url: str) -> Any:
        """Return the decoded JSON body at ``url``.

        Raises:
            TransientFetchError: on any transport, status or decoding failure.
        """

    async def aclose(self) -> None:
        pass

    async def __aenter__(self) -> "DatasetClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


class HttpDatasetClient(DatasetClient):
    """httpx-backed client with exponential backoff on transient errors."""

    def __init__(
        self,
        config: DatasetConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(config)
        self._client = httpx.AsyncClient(
            timeout=self.config.timeout,
            headers={
                "Accept": "application/json",
                "User-Agent": self.config.user_agent,
            },
            follow_redirects=True,
            transport=transport,
        )
        self._retry = RetryConfig(
            max_attempts=self.config.max_retries + 1,
            base_delay=self.config.retry_delay,
        )
        logger.info(f"[HttpDatasetClient] Initialized with base_url: {self.config.base_url}")

    @staticmethod
    def _should_retry(error: Exception) -> bool:
        if isinstance(error, httpx.HTTPStatusError):
            return error.response.status_code in RETRYABLE_STATUS_CODES
        return isinstance(error, (httpx.TimeoutException, httpx.TransportError))

    async def _get_once(self, url: str) -> Any:
        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as error:
            if self._should_retry(error):
                raise _RetryableFetch(str(error)) from error
            raise TransientFetchError(url, str(error)) from error

        try:
            return response.json()
        except ValueError as error:
            raise TransientFetchError(url, f"invalid JSON: {error}") from error

    async def fetch_json(self, url: str) -> Any:
        logger.debug(f"[HttpDatasetClient] GET {url}")
        try:
            return await retry_with_backoff(
                lambda: self._get_once(url),
                config=self._retry,
                exception_types=(_RetryableFetch,),
                operation_name=f"GET {url}",
            )
        except _RetryableFetch as error:
            raise TransientFetchError(url, str(error)) from error

    async def aclose(self) -> None:
        await self._client.aclose()
        logger.debug("[HttpDatasetClient] Closed")
