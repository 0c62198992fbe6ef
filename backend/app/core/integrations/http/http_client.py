"""
Async JSON-over-HTTP client built on aiohttp.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp

logger = logging.getLogger(__name__)


class HttpClient:
    """
    Issues JSON GET requests against one base URL, reusing a single
    aiohttp session. Failed attempts are retried with exponential backoff
    until max_retries attempts have been made.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: int = 30,
        max_retries: int = 3,
        retry_delay: float = 1.0,
    ):
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self._session: Optional[aiohttp.ClientSession] = None

    def _session_for_request(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()

    def _url(self, endpoint: str) -> str:
        if not self.base_url:
            return endpoint
        if not endpoint:
            return self.base_url
        return f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"

    async def get(
        self,
        endpoint: str = "",
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        GET a URL and decode its JSON body.

        Raises:
            aiohttp.ClientError: connection problems and status codes >= 400,
                after the last attempt
            asyncio.TimeoutError: the total timeout elapsed on the last attempt
            ValueError: the body is not JSON
        """
        url = self._url(endpoint)
        session = self._session_for_request()

        for attempt in range(1, self.max_retries + 1):
            try:
                async with session.get(url, params=params, headers=headers) as response:
                    response.raise_for_status()
                    return await response.json(content_type=None)
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                if attempt == self.max_retries:
                    logger.error(f"GET {url} failed after {attempt} attempt(s): {e}")
                    raise
                delay = self.retry_delay * (2 ** (attempt - 1))
                logger.warning(f"GET {url} failed (attempt {attempt}/{self.max_retries}), retrying in {delay}s: {e}")
                await asyncio.sleep(delay)
