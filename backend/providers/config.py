from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class ProviderConfig:
    provider: str = os.getenv("PLACES_PROVIDER", "foursquare")
    foursquare_api_key: str = os.getenv("FOURSQUARE_API_KEY", "")
    foursquare_base_url: str = "https://api.foursquare.com/v3"
    foursquare_fields: str = (
        "fsq_id,name,geocodes,location,categories,rating,website,photos,price,description"
    )
    yelp_api_key: str = os.getenv("YELP_API_KEY", "")
    yelp_base_url: str = "https://api.yelp.com/v3"
    timeout: float = 10.0


DEFAULT_PROVIDER_CONFIG = ProviderConfig()
