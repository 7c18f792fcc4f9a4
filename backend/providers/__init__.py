"""
Place search provider adapters.

Responsibilities:
- Manage provider configuration and credentials.
- Translate a search request into a single provider HTTP call.
- Parse provider payloads into provider-neutral ``ProviderPlace`` records.
- Raise structured errors for missing credentials, transport failures and
  rejected requests.
"""

from .base import PlaceProvider, build_provider
from .errors import (
    ProviderError,
    ProviderNotConfigured,
    ProviderRejected,
    ProviderResponseInvalid,
    ProviderUnreachable,
)
from .models import ProviderPlace, ProviderSearchParams, ProviderSearchResult

__all__ = [
    "PlaceProvider",
    "ProviderError",
    "ProviderNotConfigured",
    "ProviderPlace",
    "ProviderRejected",
    "ProviderResponseInvalid",
    "ProviderSearchParams",
    "ProviderSearchResult",
    "ProviderUnreachable",
    "build_provider",
]
