"""Async client for the REST Countries catalog."""
import asyncio
import logging
from typing import List, Optional

import aiohttp

from flag_bot.config import settings
from .endpoints import COUNTRIES_URL, COUNTRY_FIELDS, DEFAULT_HEADERS
from .exceptions import InvalidResponseError, NetworkError

logger = logging.getLogger(__name__)


class CountriesClient:
    """Fetches the raw country list over HTTP."""

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Args:
            url: Catalog endpoint, defaults to settings.COUNTRIES_API_URL
            timeout: Total request timeout in seconds
            session: Externally owned aiohttp session (not closed by this client)
        """
        self.url = url or settings.COUNTRIES_API_URL or COUNTRIES_URL
        self.timeout = timeout if timeout is not None else settings.COUNTRIES_API_TIMEOUT
        self._session = session
        self._owns_session = session is None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers=DEFAULT_HEADERS,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
            self._owns_session = True
        return self._session

    async def fetch_countries(self) -> List[dict]:
        """
        Single GET for all countries with the name and flag fields.

        Returns:
            Raw JSON array of country objects

        Raises:
            NetworkError: transport failure or timeout
            InvalidResponseError: non-success status or body is not a JSON array
        """
        session = self._get_session()
        logger.info("Fetching countries from %s", self.url)

        try:
            async with session.get(self.url, params={"fields": COUNTRY_FIELDS}) as resp:
                if not 200 <= resp.status < 300:
                    raise InvalidResponseError(f"Network response was not ok: HTTP {resp.status}")
                data = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error("Country request failed: %s", e)
            raise NetworkError(f"Country request failed: {e}") from e
        except ValueError as e:
            raise InvalidResponseError(f"Country response is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise InvalidResponseError(
                f"Expected a JSON array of countries, got {type(data).__name__}"
            )

        logger.info("Received %d raw country entries", len(data))
        return data

    async def close(self):
        """Close the HTTP session if this client created it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
