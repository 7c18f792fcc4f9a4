"""
Provider failure hierarchy.

Every error carries the HTTP status the API should answer with, a
machine-readable ``code`` and optional ``details`` for diagnostics:

    ProviderError
    ├── ProviderNotConfigured   credential missing (503)
    ├── ProviderUnreachable     no response received (503)
    ├── ProviderRejected        non-2xx response (forwarded 4xx, else 502)
    └── ProviderResponseInvalid 2xx body that does not match the schema (502)
"""

from __future__ import annotations

from typing import Any


class ProviderError(Exception):
    status_code: int = 502
    code: str = "UPSTREAM_ERROR"

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        status_code: int | None = None,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.provider = provider
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.details = details or {}


class ProviderNotConfigured(ProviderError):
    status_code = 503
    code = "PROVIDER_NOT_CONFIGURED"


class ProviderUnreachable(ProviderError):
    status_code = 503
    code = "PROVIDER_UNAVAILABLE"


class ProviderRejected(ProviderError):
    """The provider answered with a non-success status.

    ``upstream_status`` is the provider's own status code; ``payload`` is its
    parsed error body, or ``None`` when the body was not structured.
    """

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        upstream_status: int,
        payload: dict[str, Any] | None = None,
        code: str | None = None,
        raw_message: str | None = None,
    ) -> None:
        if payload is not None and 400 <= upstream_status < 500:
            status_code = upstream_status
        else:
            status_code = 502
        details: dict[str, Any] = {"upstreamStatus": upstream_status}
        if payload is not None:
            details["upstreamError"] = payload
        if raw_message is not None:
            details["rawMessage"] = raw_message
        super().__init__(
            message,
            provider=provider,
            status_code=status_code,
            code=code or ("PROVIDER_REJECTED" if payload is not None else "UPSTREAM_ERROR"),
            details=details,
        )
        self.upstream_status = upstream_status
        self.payload = payload


class ProviderResponseInvalid(ProviderError):
    status_code = 502
    code = "UPSTREAM_BAD_RESPONSE"
