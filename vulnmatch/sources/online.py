"""HTTP source for a vulnerability database such as https://vuln.go.dev."""

import asyncio
import ssl
from typing import Optional

import aiohttp
import certifi
from aiohttp import ClientTimeout

from ..errors import SourceError, SourceNotFoundError
from ..utils.logging import get_logger
from .base import Source


class OnlineSource(Source):
    """Async source reading database documents over HTTP."""

    TIMEOUT = ClientTimeout(total=30)

    def __init__(
        self,
        base_url: str,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: Optional[ClientTimeout] = None
    ) -> None:
        """Initialize the online source.

        Args:
            base_url: Database root, e.g. "https://vuln.go.dev"
            session: Optional aiohttp session for connection reuse; a
                session passed in is not closed by this source
            timeout: Per-request timeout, defaults to 30 seconds total
        """
        self.base_url = base_url.rstrip("/")
        self.logger = get_logger("OnlineSource")
        self.timeout = timeout or self.TIMEOUT
        self._session = session
        self._owns_session = session is None
        self._ssl_context = ssl.create_default_context(cafile=certifi.where())

    async def get(self, key: str) -> bytes:
        url = f"{self.base_url}/{key.lstrip('/')}"
        session = self._get_session()
        try:
            async with session.get(url) as response:
                if response.status == 404:
                    raise SourceNotFoundError("get", key)
                if response.status != 200:
                    raise SourceError("get", key, RuntimeError(f"HTTP {response.status}"))
                return await response.read()
        except SourceError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.debug(f"GET {url} failed: {e!r}")
            raise SourceError("get", key, e) from e

    def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session.

        Returns:
            aiohttp ClientSession
        """
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(ssl=self._ssl_context)
            self._session = aiohttp.ClientSession(
                timeout=self.timeout,
                connector=connector
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
