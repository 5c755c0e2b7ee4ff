"""Runtime configuration read from the environment (and an optional .env)."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


def _env_float(name: str, default: float, lo: float, hi: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return min(hi, max(lo, value))


def _env_int(name: str, default: int, lo: int, hi: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return min(hi, max(lo, value))


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name) or default
    items = [item.strip() for item in raw.split(",") if item.strip()]
    return items or [default]


@dataclass(frozen=True)
class Settings:
    openai_api_key: Optional[str] = None
    primary_model: str = "gpt-4o-mini"
    secondary_model: str = "gpt-4.1-mini"
    upstream_timeout: float = 15.0
    candidate_count: int = 16
    shortlist_size: int = 5
    recency_capacity: int = 30
    safety_file: Optional[str] = None
    allowed_origins: List[str] = field(default_factory=lambda: ["*"])

    @property
    def generator_enabled(self) -> bool:
        return bool(self.openai_api_key)


def load_settings() -> Settings:
    """Build a fresh ``Settings`` from the current environment."""
    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        primary_model=os.getenv("INSPIRE_PRIMARY_MODEL") or "gpt-4o-mini",
        secondary_model=os.getenv("INSPIRE_SECONDARY_MODEL") or "gpt-4.1-mini",
        upstream_timeout=_env_float("INSPIRE_UPSTREAM_TIMEOUT", 15.0, 1.0, 20.0),
        candidate_count=_env_int("INSPIRE_CANDIDATE_COUNT", 16, 12, 20),
        shortlist_size=_env_int("INSPIRE_SHORTLIST_SIZE", 5, 1, 20),
        recency_capacity=_env_int("INSPIRE_RECENCY_CAPACITY", 30, 1, 1000),
        safety_file=os.getenv("INSPIRE_SAFETY_FILE") or None,
        allowed_origins=_env_list("INSPIRE_ALLOWED_ORIGINS", "*"),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
