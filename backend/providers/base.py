from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx
from pydantic import ValidationError

from .config import DEFAULT_PROVIDER_CONFIG, ProviderConfig
from .errors import (
    ProviderNotConfigured,
    ProviderRejected,
    ProviderResponseInvalid,
    ProviderUnreachable,
)
from .models import ProviderSearchParams, ProviderSearchResult

logger = logging.getLogger(__name__)

_RAW_MESSAGE_LIMIT = 500


class PlaceProvider(ABC):
    """A remote place-search API."""

    name: str

    @abstractmethod
    async def search(self, params: ProviderSearchParams) -> ProviderSearchResult:
        ...

    @property
    def is_configured(self) -> bool:
        return True

    async def aclose(self) -> None:
        return None


class HttpPlaceProvider(PlaceProvider):
    """
    Shared request/response handling for JSON-over-HTTP providers.

    Subclasses describe the endpoint, query string, credentials and payload
    parsing; this class issues the single outbound call and turns every
    failure mode into a ``ProviderError``.
    """

    base_url: str
    search_path: str

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str | None = None,
        timeout: float = DEFAULT_PROVIDER_CONFIG.timeout,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        if base_url:
            self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @abstractmethod
    def _auth_headers(self) -> dict[str, str]:
        ...

    @abstractmethod
    def _build_query(self, params: ProviderSearchParams) -> dict[str, Any]:
        ...

    @abstractmethod
    def _parse_results(self, payload: Any) -> ProviderSearchResult:
        ...

    def _error_code(self, payload: dict[str, Any]) -> tuple[str | None, str | None]:
        """Return ``(code, description)`` from a structured error body."""
        return None, payload.get("message")

    async def search(self, params: ProviderSearchParams) -> ProviderSearchResult:
        if not self.is_configured:
            raise ProviderNotConfigured(
                f"{self.name} API service is not available: API key is not configured",
                provider=self.name,
            )

        query = self._build_query(params)
        logger.info("[%s] Searching: %s", self.name, query)

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                resp = await client.get(
                    self.search_path,
                    params=query,
                    headers={"Accept": "application/json", **self._auth_headers()},
                )
        except httpx.RequestError as e:
            logger.error("[%s] No response received: %s", self.name, e)
            raise ProviderUnreachable(
                f"No response received from {self.name} API - please check your network connection",
                provider=self.name,
                details={"reason": str(e)},
            ) from e

        if not resp.is_success:
            raise self._rejection(resp)

        try:
            payload = resp.json()
        except ValueError as e:
            raise ProviderResponseInvalid(
                f"{self.name} API returned a non-JSON body",
                provider=self.name,
                details={"rawMessage": resp.text[:_RAW_MESSAGE_LIMIT]},
            ) from e

        try:
            result = self._parse_results(payload)
        except ValidationError as e:
            logger.error("[%s] Unexpected response shape: %s", self.name, e)
            raise ProviderResponseInvalid(
                f"{self.name} API returned an unexpected response shape",
                provider=self.name,
                details={"errors": e.errors(include_url=False, include_context=False, include_input=False)},
            ) from e

        logger.info("[%s] Got %d places", self.name, len(result.places))
        return result

    def _rejection(self, resp: httpx.Response) -> ProviderRejected:
        status = resp.status_code
        try:
            payload = resp.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict):
            code, description = self._error_code(payload)
            logger.warning("[%s] API error - Status: %s %s", self.name, status, payload)
            return ProviderRejected(
                description or f"{self.name} API request failed with status {status}",
                provider=self.name,
                upstream_status=status,
                payload=payload,
                code=code,
            )

        raw = resp.text[:_RAW_MESSAGE_LIMIT]
        logger.warning("[%s] API error - Status: %s (unstructured body)", self.name, status)
        return ProviderRejected(
            f"{self.name} API request failed with status {status}",
            provider=self.name,
            upstream_status=status,
            raw_message=raw,
        )


def build_provider(config: ProviderConfig = DEFAULT_PROVIDER_CONFIG) -> PlaceProvider:
    """Instantiate the provider selected by ``config.provider``."""
    from .foursquare import FoursquareProvider
    from .yelp import YelpProvider

    name = config.provider.strip().lower()
    if name == "foursquare":
        return FoursquareProvider(
            config.foursquare_api_key,
            base_url=config.foursquare_base_url,
            timeout=config.timeout,
            fields=config.foursquare_fields,
        )
    if name == "yelp":
        return YelpProvider(
            config.yelp_api_key,
            base_url=config.yelp_base_url,
            timeout=config.timeout,
        )
    raise ValueError(f"Unknown places provider: {config.provider}. Available: ['foursquare', 'yelp']")
