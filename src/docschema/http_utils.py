"""HTTP retrieval of remote schema documents with retry and backoff."""

from __future__ import annotations

import asyncio
import logging
from typing import Final

import httpx

from docschema.config import (
    DOCSCHEMA_FETCH_BACKOFF_S,
    DOCSCHEMA_FETCH_MAX_RETRIES,
    DOCSCHEMA_FETCH_TIMEOUT_S,
    DOCSCHEMA_USER_AGENT,
)
from docschema.exceptions import FetchError

logger = logging.getLogger(__name__)

RETRY_STATUS_CODES: Final[frozenset[int]] = frozenset({429, 500, 502, 503, 504})

_MAX_REDIRECTS: Final[int] = 5
_ACCEPT: Final[str] = "application/yaml, application/json;q=0.9, text/plain;q=0.8, */*;q=0.5"


async def fetch_text(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    max_retries: int = DOCSCHEMA_FETCH_MAX_RETRIES,
    backoff_s: float = DOCSCHEMA_FETCH_BACKOFF_S,
    follow_redirects: bool = True,
) -> str:
    """Fetch ``url`` as text, retrying transient failures.

    Args:
        url: Address of the document.
        client: Optional shared client. A short-lived client is created when
            omitted.
        max_retries: Extra attempts after the first one.
        backoff_s: Base delay, doubled after every failed attempt.
        follow_redirects: Follow redirects when creating the client.

    Returns:
        The response body decoded as text.

    Raises:
        FetchError: On 404, on any other non-retryable error status, or when
            every attempt failed.
    """
    if client is not None:
        return await _fetch(client, url, max_retries=max_retries, backoff_s=backoff_s)

    async with httpx.AsyncClient(
        timeout=httpx.Timeout(DOCSCHEMA_FETCH_TIMEOUT_S),
        headers={"User-Agent": DOCSCHEMA_USER_AGENT, "Accept": _ACCEPT},
        follow_redirects=follow_redirects,
        max_redirects=_MAX_REDIRECTS,
    ) as new_client:
        return await _fetch(new_client, url, max_retries=max_retries, backoff_s=backoff_s)


async def _fetch(
    client: httpx.AsyncClient, url: str, *, max_retries: int, backoff_s: float
) -> str:
    last_error: str = "no attempt made"

    for attempt in range(max_retries + 1):
        try:
            response = await client.get(url)
        except httpx.RequestError as exc:
            last_error = str(exc) or type(exc).__name__
        else:
            if response.status_code == 404:
                raise FetchError(f"Schema not found at {url}")
            if response.status_code not in RETRY_STATUS_CODES:
                try:
                    response.raise_for_status()
                except httpx.HTTPStatusError as exc:
                    raise FetchError(f"HTTP {response.status_code} from {url}") from exc
                return response.text
            last_error = f"HTTP {response.status_code}"

        if attempt < max_retries:
            delay = backoff_s * (2**attempt)
            logger.debug("Fetch of %s failed (%s), retrying in %.2fs", url, last_error, delay)
            await asyncio.sleep(delay)

    raise FetchError(f"Failed to fetch {url}: {last_error}")
