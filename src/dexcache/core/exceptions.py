"""DexCache exception hierarchy.

This module defines the base exception class and specialized exceptions
for the failure kinds the gateway distinguishes: bad caller input,
upstream API failures and cache store failures.
"""


class DexCacheError(Exception):
    """Base exception for all DexCache errors."""

    pass


class ValidationError(DexCacheError):
    """Raised when caller input fails a precondition.

    Raised before any cache or upstream call is attempted.

    Example:
        raise ValidationError('Query parameter "q" is required')
    """

    pass


class ExternalServiceError(DexCacheError):
    """Raised when an upstream API call fails.

    Covers network errors, timeouts, non-2xx responses and response
    bodies that do not match the expected shape.

    Attributes:
        service: Name of the external service that failed.
        status_code: HTTP status code if available, None otherwise.

    Example:
        raise ExternalServiceError(service="dexscreener", message="Rate limited", status_code=429)
    """

    def __init__(
        self,
        service: str,
        message: str,
        status_code: int | None = None,
    ) -> None:
        self.service = service
        self.status_code = status_code
        super().__init__(f"{service}: {message}")


class CircuitBreakerOpenError(ExternalServiceError):
    """Raised when the upstream circuit breaker is open.

    Requests are blocked without reaching the network until the cooldown
    elapses.
    """

    def __init__(self, service: str, message: str) -> None:
        super().__init__(service=service, message=message)


class CacheStoreError(DexCacheError):
    """Raised when the cache store is unreachable or a command fails.

    Never translated into an empty result: "store unreachable" and
    "no data" must stay distinguishable.

    Attributes:
        operation: Store operation that failed (e.g. "get_pair", "save").

    Example:
        raise CacheStoreError("Redis: Connection refused", operation="connect")
    """

    def __init__(self, message: str, operation: str | None = None) -> None:
        super().__init__(message)
        self.operation = operation
