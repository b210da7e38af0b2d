from __future__ import annotations

import logging
import random
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

QUOTE_URL = "https://api.quotable.io/random"

FALLBACK_QUOTES = (
    "The only limit to our realization of tomorrow is our doubts of today. - Franklin D. Roosevelt",
    "The future belongs to those who believe in the beauty of their dreams. - Eleanor Roosevelt",
    "Do not watch the clock. Do what it does. Keep going. - Sam Levenson",
    "Keep your face always toward the sunshine—and shadows will fall behind you. - Walt Whitman",
    "The best way to predict the future is to create it. - Peter Drucker",
)


class QuoteFetchError(Exception):
    """The remote quote service could not produce a usable quote."""


class QuoteClient:
    """Fetches a quote from the remote service, masking failures with a local one.

    ``transport`` is handed to ``httpx.AsyncClient`` unchanged, which lets tests
    plug in ``httpx.MockTransport``. Timeouts are httpx's defaults.
    """

    def __init__(
        self,
        url: str = QUOTE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.url = url
        self._transport = transport
        self._rng = rng or random.Random()

    async def fetch(self) -> str:
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(self.url)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise QuoteFetchError(str(exc) or type(exc).__name__) from exc

        if not isinstance(data, dict):
            raise QuoteFetchError("unexpected response body")
        content = data.get("content")
        author = data.get("author")
        if not isinstance(content, str) or not isinstance(author, str):
            raise QuoteFetchError("response is missing content or author")
        return f"{content} - {author}"

    def fallback(self) -> str:
        return self._rng.choice(FALLBACK_QUOTES)

    async def get_quote(self) -> str:
        try:
            return await self.fetch()
        except QuoteFetchError as exc:
            logger.warning("Error fetching quote: %s", exc)
            return self.fallback()
