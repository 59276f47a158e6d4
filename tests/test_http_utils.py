"""Tests for HTTP utilities module."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from docschema.exceptions import FetchError
from docschema.http_utils import RETRY_STATUS_CODES, fetch_text


def _response(status_code: int, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    if status_code >= 400:
        response.raise_for_status = MagicMock(
            side_effect=httpx.HTTPStatusError("error", request=MagicMock(), response=response)
        )
    else:
        response.raise_for_status = MagicMock()
    return response


def _client(*responses: object) -> AsyncMock:
    client = AsyncMock()
    client.get = AsyncMock(side_effect=list(responses))
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=None)
    return client


class TestRetryStatusCodes:
    """Tests for RETRY_STATUS_CODES constant."""

    def test_contains_expected_codes(self) -> None:
        """Should contain all expected retryable status codes."""
        assert RETRY_STATUS_CODES == frozenset({429, 500, 502, 503, 504})


class TestFetchText:
    """Tests for fetch_text function."""

    @pytest.mark.asyncio
    async def test_returns_text(self) -> None:
        """Returns the body of a successful response."""
        client = _client(_response(200, "sections: []"))

        with patch("docschema.http_utils.httpx.AsyncClient", return_value=client):
            result = await fetch_text("https://example.com/schema.yaml")

        assert result == "sections: []"

    @pytest.mark.asyncio
    async def test_uses_given_client(self) -> None:
        """A provided client is used instead of creating one."""
        client = _client(_response(200, "ok"))

        with patch("docschema.http_utils.httpx.AsyncClient") as mock_client_class:
            result = await fetch_text("https://example.com", client=client)

        assert result == "ok"
        mock_client_class.assert_not_called()

    @pytest.mark.asyncio
    async def test_redirects_can_be_disabled(self) -> None:
        """follow_redirects is passed to the created client."""
        client = _client(_response(200, "ok"))

        with patch("docschema.http_utils.httpx.AsyncClient", return_value=client) as mock_client_class:
            await fetch_text("https://example.com", follow_redirects=False)

        assert mock_client_class.call_args.kwargs["follow_redirects"] is False

    @pytest.mark.asyncio
    async def test_raises_on_404_without_retry(self) -> None:
        """404 is final."""
        client = _client(_response(404))

        with pytest.raises(FetchError, match="Schema not found"):
            await fetch_text("https://example.com/missing", client=client)

        assert client.get.await_count == 1

    @pytest.mark.asyncio
    async def test_raises_on_other_client_errors_without_retry(self) -> None:
        """Non-retryable error statuses fail immediately."""
        client = _client(_response(403))

        with pytest.raises(FetchError, match="HTTP 403"):
            await fetch_text("https://example.com/private", client=client)

        assert client.get.await_count == 1

    @pytest.mark.asyncio
    async def test_retries_retryable_status(self) -> None:
        """Retryable statuses are retried with backoff."""
        client = _client(_response(503), _response(200, "ok"))

        with patch("docschema.http_utils.asyncio.sleep", new=AsyncMock()) as mock_sleep:
            result = await fetch_text("https://example.com", client=client, backoff_s=0.5)

        assert result == "ok"
        mock_sleep.assert_awaited_once_with(0.5)

    @pytest.mark.asyncio
    async def test_retries_request_errors(self) -> None:
        """Transport errors are retried."""
        client = _client(httpx.ConnectError("refused"), _response(200, "ok"))

        with patch("docschema.http_utils.asyncio.sleep", new=AsyncMock()):
            result = await fetch_text("https://example.com", client=client)

        assert result == "ok"

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self) -> None:
        """Raises FetchError once every attempt failed."""
        client = _client(_response(500), _response(502), _response(503))

        with patch("docschema.http_utils.asyncio.sleep", new=AsyncMock()) as mock_sleep:
            with pytest.raises(FetchError, match="Failed to fetch .*HTTP 503"):
                await fetch_text("https://example.com", client=client, max_retries=2, backoff_s=1.0)

        assert client.get.await_count == 3
        assert [call.args[0] for call in mock_sleep.await_args_list] == [1.0, 2.0]
