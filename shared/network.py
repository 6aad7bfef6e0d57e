"""
PwGauge Async Network Client
=============================

Small async HTTP client built on **httpx** with retry, exponential
backoff and full jitter.

The client keeps no state between requests beyond its connection pool:
no response cache and no circuit breaker, so one analysis can never see
data fetched for another.

References:
    - AWS Architecture Blog (2015). Exponential Backoff and Jitter.
    - Fielding, R. T. (2000). Architectural Styles and the Design of
      Network-based Software Architectures. UC Irvine PhD Dissertation.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Any

import httpx

logger = logging.getLogger("pwgauge.network")


class GaugeHTTPError(Exception):
    """Transport errors, timeouts and non-success HTTP statuses."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GaugeHTTP:
    """Async HTTP client with retry support.

    Usage::

        async with GaugeHTTP(base_url="https://api.pwnedpasswords.com") as http:
            body = await http.fetch_text("/range/5baa6")

    Args:
        base_url:      Base URL prepended to all relative paths.
        timeout:       Request timeout in seconds.
        max_retries:   Retry attempts on transient errors.
        backoff_base:  Base delay (seconds) for exponential backoff.
        backoff_max:   Maximum delay cap (seconds).
        headers:       Default HTTP headers merged into every request.
        user_agent:    User-Agent header value.
        transport:     Optional httpx transport (tests inject a
                       :class:`httpx.MockTransport`).
    """

    # Transient server errors and rate limiting
    _RETRYABLE_STATUS: frozenset[int] = frozenset({429, 500, 502, 503, 504})

    def __init__(
        self,
        *,
        base_url: str = "",
        timeout: float = 10.0,
        max_retries: int = 1,
        backoff_base: float = 0.5,
        backoff_max: float = 8.0,
        headers: dict[str, str] | None = None,
        user_agent: str = "PwGauge/1.0",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._max_retries = max(0, max_retries)
        self._backoff_base = backoff_base
        self._backoff_max = backoff_max

        default_headers = {"User-Agent": user_agent}
        if headers:
            default_headers.update(headers)

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(timeout),
            headers=default_headers,
            follow_redirects=True,
            transport=transport,
        )

    async def __aenter__(self) -> GaugeHTTP:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying httpx client."""
        await self._client.aclose()

    # ------------------------------------------------------------------ #
    #  Core fetch
    # ------------------------------------------------------------------ #

    async def fetch(
        self,
        url: str,
        *,
        method: str = "GET",
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Execute an HTTP request, retrying transient failures.

        Returns:
            The successful (2xx) :class:`httpx.Response`.

        Raises:
            GaugeHTTPError: On a non-retryable status, or once retries
                are exhausted.
        """
        attempts = self._max_retries + 1
        for attempt in range(attempts):
            try:
                response = await self._client.request(
                    method=method.upper(),
                    url=url,
                    params=params,
                    headers=headers,
                )
            except (httpx.TransportError, httpx.TimeoutException) as exc:
                logger.warning(
                    "Transport error on %s %s (attempt %d/%d): %s",
                    method, url, attempt + 1, attempts, exc,
                )
                if attempt < self._max_retries:
                    await self._backoff(attempt)
                    continue
                raise GaugeHTTPError(
                    f"All {attempts} attempts exhausted for {url}"
                ) from exc

            if response.status_code in self._RETRYABLE_STATUS:
                logger.warning(
                    "HTTP %d on %s %s (attempt %d/%d)",
                    response.status_code, method, url, attempt + 1, attempts,
                )
                if attempt < self._max_retries:
                    await self._backoff(attempt)
                    continue
                raise GaugeHTTPError(
                    f"HTTP {response.status_code} from {url}",
                    status_code=response.status_code,
                )

            if not response.is_success:
                raise GaugeHTTPError(
                    f"HTTP {response.status_code} from {url}",
                    status_code=response.status_code,
                )
            return response

        # range() always yields at least one attempt
        raise GaugeHTTPError(f"No attempt made for {url}")

    async def fetch_text(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> str:
        """Convenience wrapper returning the decoded response body."""
        response = await self.fetch(url, params=params, headers=headers)
        return response.text

    async def _backoff(self, attempt: int) -> None:
        """Sleep ``min(max, base * 2**attempt) * U(0, 1)`` seconds."""
        delay = min(self._backoff_max, self._backoff_base * (2 ** attempt))
        jittered = delay * random.random()
        logger.debug("Backing off %.2fs (attempt %d)", jittered, attempt + 1)
        await asyncio.sleep(jittered)
