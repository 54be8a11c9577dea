"""Base API client with circuit breaker.

This module provides:
- CircuitState enum for circuit breaker states
- CircuitBreaker dataclass for tracking circuit breaker state
- BaseAPIClient class for making HTTP requests to upstream services
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any

import httpx
import structlog

from dexcache.core.exceptions import CircuitBreakerOpenError, ExternalServiceError

log = structlog.get_logger(__name__)


class CircuitState(Enum):
    """Circuit breaker states."""

    CLOSED = "closed"  # Normal operation, requests allowed
    OPEN = "open"  # Circuit tripped, requests blocked
    HALF_OPEN = "half_open"  # Testing if service recovered


@dataclass
class CircuitBreaker:
    """Circuit breaker for protecting against cascading failures.

    Tracks consecutive failures and opens the circuit when threshold is reached.
    After cooldown period, allows a single test request (half-open state).

    Attributes:
        failure_threshold: Number of consecutive failures before opening circuit.
        cooldown_seconds: Seconds to wait before half-open test.
        failure_count: Current consecutive failure count.
        last_failure_time: Timestamp of most recent failure.
        state: Current circuit state (CLOSED, OPEN, HALF_OPEN).
    """

    failure_threshold: int = 5
    cooldown_seconds: int = 30
    failure_count: int = field(default=0, init=False)
    last_failure_time: datetime | None = field(default=None, init=False)
    state: CircuitState = field(default=CircuitState.CLOSED, init=False)

    def record_success(self) -> None:
        """Reset failure count and close the circuit."""
        self.failure_count = 0
        self.state = CircuitState.CLOSED

    def record_failure(self) -> None:
        """Record a failed request.

        Increments failure count and opens circuit if threshold reached.
        In HALF_OPEN state, a single failure reopens the circuit.
        """
        self.failure_count += 1
        self.last_failure_time = datetime.now(UTC)

        if self.state == CircuitState.HALF_OPEN:
            self.state = CircuitState.OPEN
            log.warning(
                "circuit_breaker_reopened",
                failure_count=self.failure_count,
                state="open",
            )
        elif self.failure_count >= self.failure_threshold:
            self.state = CircuitState.OPEN
            log.warning(
                "circuit_breaker_opened",
                failure_count=self.failure_count,
                threshold=self.failure_threshold,
                state="open",
            )

    def can_execute(self) -> bool:
        """Check if a request can be executed.

        State transitions:
            - CLOSED: Always returns True
            - OPEN: Returns False unless cooldown elapsed, then transitions to HALF_OPEN
            - HALF_OPEN: Returns True (allows test request)
        """
        if self.state == CircuitState.CLOSED:
            return True

        if self.state == CircuitState.OPEN:
            if self.last_failure_time is None:
                return False

            elapsed = datetime.now(UTC) - self.last_failure_time
            if elapsed > timedelta(seconds=self.cooldown_seconds):
                self.state = CircuitState.HALF_OPEN
                log.info(
                    "circuit_breaker_half_open",
                    cooldown_elapsed=elapsed.total_seconds(),
                    state="half_open",
                )
                return True
            return False

        return True

    def time_until_half_open(self) -> float:
        """Seconds remaining until the circuit may transition to half-open."""
        if self.last_failure_time is None:
            return 0.0

        elapsed = datetime.now(UTC) - self.last_failure_time
        return max(0.0, self.cooldown_seconds - elapsed.total_seconds())


class BaseAPIClient:
    """Base API client with circuit breaker support.

    Provides HTTP requests with:
    - Lazy client initialization (created on first request)
    - One attempt per call, failures raised immediately
    - Circuit breaker pattern for failure protection
    - Proper resource cleanup

    Every failure is raised as ExternalServiceError so callers can
    tell upstream problems apart from local ones.

    Attributes:
        service: Service name used in errors and logs.
        base_url: Base URL for all requests.
        timeout: Request timeout in seconds.
        headers: Default headers for all requests.
    """

    def __init__(
        self,
        service: str,
        base_url: str,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        circuit_breaker_threshold: int = 5,
        circuit_breaker_cooldown: int = 30,
    ) -> None:
        self.service = service
        self.base_url = base_url
        self.timeout = timeout
        self.headers = headers or {}
        self._client: httpx.AsyncClient | None = None
        self._circuit_breaker = CircuitBreaker(
            failure_threshold=circuit_breaker_threshold,
            cooldown_seconds=circuit_breaker_cooldown,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the httpx client (lazy initialization)."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.headers,
            )
            log.debug("httpx_client_created", base_url=self.base_url)
        return self._client

    async def close(self) -> None:
        """Close the httpx client and release resources."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            log.debug("httpx_client_closed", base_url=self.base_url)

    async def _request(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Make a single HTTP request guarded by the circuit breaker.

        Failures are not retried here; they are counted by the breaker and
        raised to the caller.

        Args:
            method: HTTP method.
            path: Request path (appended to base_url).
            **kwargs: Additional arguments passed to httpx.request.

        Returns:
            httpx.Response on success.

        Raises:
            CircuitBreakerOpenError: If circuit breaker is open.
            ExternalServiceError: If the request fails.
        """
        if not self._circuit_breaker.can_execute():
            raise CircuitBreakerOpenError(
                service=self.service,
                message=(
                    "Circuit breaker is open. Next attempt in "
                    f"{self._circuit_breaker.time_until_half_open():.1f} seconds."
                ),
            )

        client = await self._get_client()
        log.debug("request_sent", method=method, path=path)

        try:
            response = await client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code

            # 4xx errors (except 429) say nothing about upstream health
            if 400 <= status_code < 500 and status_code != 429:
                log.warning(
                    "request_client_error",
                    method=method,
                    path=path,
                    status_code=status_code,
                )
            else:
                self._circuit_breaker.record_failure()
                log.warning(
                    "request_server_error",
                    method=method,
                    path=path,
                    status_code=status_code,
                )
            raise ExternalServiceError(
                service=self.service,
                message=str(e),
                status_code=status_code,
            ) from e
        except httpx.RequestError as e:
            self._circuit_breaker.record_failure()
            log.warning(
                "request_connection_error",
                method=method,
                path=path,
                error=str(e),
            )
            raise ExternalServiceError(
                service=self.service,
                message=f"Request failed: {e}",
            ) from e

        self._circuit_breaker.record_success()
        return response

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a GET request.

        Args:
            path: Request path.
            **kwargs: Additional arguments passed to httpx.

        Returns:
            httpx.Response on success.
        """
        return await self._request("GET", path, **kwargs)
