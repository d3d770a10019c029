"""
Tests unitaires pour le mecanisme de retry avec backoff exponentiel.

Ces tests verifient:
- RateLimitError capture le header Retry-After
- with_retry relance sur les erreurs transitoires avec backoff exponentiel
- request_with_retry detecte les 429 / 5xx et relance automatiquement
- Les echecs permanents remontent apres epuisement des tentatives
- Le rate limiter est consulte avant chaque tentative
"""

import httpx
import pytest
import respx

from mediameta.adapters.api.retry import (
    RateLimitError,
    ServerError,
    request_with_retry,
    with_retry,
)


class TestRateLimitError:
    """Tests pour l'exception RateLimitError."""

    def test_rate_limit_error_stores_retry_after(self) -> None:
        """RateLimitError stocke la valeur Retry-After."""
        error = RateLimitError(retry_after=60)
        assert error.retry_after == 60
        assert error.status_code == 429
        assert "60" in str(error)

    def test_rate_limit_error_without_retry_after(self) -> None:
        """RateLimitError fonctionne sans Retry-After."""
        error = RateLimitError(retry_after=None)
        assert error.retry_after is None


class TestWithRetryDecorator:
    """Tests pour le decorateur with_retry."""

    @pytest.mark.asyncio
    async def test_with_retry_retries_on_rate_limit_error(self) -> None:
        """with_retry relance quand RateLimitError est levee."""
        call_count = 0

        @with_retry(max_attempts=3, max_wait=0, min_wait=0)
        async def flaky_function() -> str:
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise RateLimitError(retry_after=1)
            return "success"

        result = await flaky_function()
        assert result == "success"
        assert call_count == 3

    @pytest.mark.asyncio
    async def test_with_retry_retries_on_network_error(self) -> None:
        """with_retry relance sur les erreurs reseau httpx."""
        call_count = 0

        @with_retry(max_attempts=2, max_wait=0, min_wait=0)
        async def flaky_network() -> str:
            nonlocal call_count
            call_count += 1
            if call_count == 1:
                raise httpx.ConnectError("connection refused")
            return "ok"

        assert await flaky_network() == "ok"
        assert call_count == 2

    @pytest.mark.asyncio
    async def test_with_retry_stops_after_max_attempts(self) -> None:
        """with_retry abandonne apres max_attempts tentatives."""
        call_count = 0

        @with_retry(max_attempts=3, max_wait=0, min_wait=0)
        async def always_fails() -> str:
            nonlocal call_count
            call_count += 1
            raise ServerError(503)

        with pytest.raises(ServerError):
            await always_fails()
        assert call_count == 3

    @pytest.mark.asyncio
    async def test_with_retry_does_not_retry_other_exceptions(self) -> None:
        """with_retry ne relance pas les autres exceptions."""
        call_count = 0

        @with_retry(max_attempts=3, max_wait=0, min_wait=0)
        async def raises_value_error() -> str:
            nonlocal call_count
            call_count += 1
            raise ValueError("not a transient error")

        with pytest.raises(ValueError):
            await raises_value_error()
        assert call_count == 1  # Pas de retry


class _CountingLimiter:
    """Rate limiter factice qui compte les jetons demandes."""

    def __init__(self) -> None:
        self.acquired = 0

    async def acquire(self) -> None:
        self.acquired += 1


class TestRequestWithRetry:
    """Tests pour request_with_retry avec httpx."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_request_with_retry_raises_on_429(self, respx_mock: respx.Router) -> None:
        """request_with_retry convertit 429 en RateLimitError et relance."""
        route = respx_mock.get("https://api.example.com/data").mock(
            return_value=httpx.Response(429, headers={"Retry-After": "30"})
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(RateLimitError) as exc_info:
                await request_with_retry(
                    client,
                    "GET",
                    "https://api.example.com/data",
                    max_attempts=3,
                    max_wait=0,
                    min_wait=0,
                )

        assert exc_info.value.retry_after == 30
        assert route.call_count == 3

    @pytest.mark.asyncio
    @respx.mock
    async def test_request_with_retry_retries_then_succeeds(self, respx_mock: respx.Router) -> None:
        """request_with_retry reussit apres des erreurs transitoires."""
        route = respx_mock.get("https://api.example.com/data").mock(
            side_effect=[
                httpx.Response(429, headers={"Retry-After": "1"}),
                httpx.Response(502),
                httpx.Response(200, json={"status": "ok"}),
            ]
        )

        async with httpx.AsyncClient() as client:
            response = await request_with_retry(
                client,
                "GET",
                "https://api.example.com/data",
                max_attempts=3,
                max_wait=0,
                min_wait=0,
            )

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
        assert route.call_count == 3

    @pytest.mark.asyncio
    @respx.mock
    async def test_request_with_retry_passes_on_success(self, respx_mock: respx.Router) -> None:
        """request_with_retry retourne directement sur 200."""
        route = respx_mock.get("https://api.example.com/data").mock(
            return_value=httpx.Response(200, json={"data": "value"})
        )

        async with httpx.AsyncClient() as client:
            response = await request_with_retry(
                client, "GET", "https://api.example.com/data"
            )

        assert response.status_code == 200
        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_request_with_retry_does_not_retry_404(self, respx_mock: respx.Router) -> None:
        """request_with_retry leve HTTPStatusError sur 4xx sans relancer."""
        route = respx_mock.get("https://api.example.com/data").mock(
            return_value=httpx.Response(404, text="Not Found")
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(httpx.HTTPStatusError) as exc_info:
                await request_with_retry(
                    client, "GET", "https://api.example.com/data", max_wait=0, min_wait=0
                )

        assert exc_info.value.response.status_code == 404
        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_request_with_retry_429_without_retry_after(self, respx_mock: respx.Router) -> None:
        """request_with_retry gere 429 sans header Retry-After (ou non numerique)."""
        route = respx_mock.get("https://api.example.com/data").mock(
            side_effect=[
                httpx.Response(429),
                httpx.Response(429, headers={"Retry-After": "Wed, 21 Oct 2015 07:28:00 GMT"}),
                httpx.Response(200, json={"ok": True}),
            ]
        )

        async with httpx.AsyncClient() as client:
            response = await request_with_retry(
                client,
                "GET",
                "https://api.example.com/data",
                max_attempts=3,
                max_wait=0,
                min_wait=0,
            )

        assert response.status_code == 200
        assert route.call_count == 3

    @pytest.mark.asyncio
    @respx.mock
    async def test_rate_limiter_acquired_before_each_attempt(
        self, respx_mock: respx.Router
    ) -> None:
        """Chaque tentative consomme un jeton du rate limiter."""
        respx_mock.get("https://api.example.com/data").mock(
            side_effect=[httpx.Response(503), httpx.Response(200, json={})]
        )
        limiter = _CountingLimiter()

        async with httpx.AsyncClient() as client:
            await request_with_retry(
                client,
                "GET",
                "https://api.example.com/data",
                max_attempts=3,
                max_wait=0,
                min_wait=0,
                rate_limiter=limiter,
            )

        assert limiter.acquired == 2
