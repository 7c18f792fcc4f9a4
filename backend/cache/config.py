from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class CacheConfig:
    default_ttl: int = int(os.getenv("CACHE_DEFAULT_TTL", "3600"))
    check_period: int = int(os.getenv("CACHE_CHECK_PERIOD", "120"))
    search_ttl: int = 3600


DEFAULT_CACHE_CONFIG = CacheConfig()
