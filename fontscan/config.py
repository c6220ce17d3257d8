"""Centralised settings for Font Scan.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "USER_AGENT",
            "Mozilla/5.0 (compatible; FontScan-Bot/0.1; +https://github.com/fontscan)",
        )
    )
    spa_fallback: bool = field(
        default_factory=lambda: _env_flag("SPA_FALLBACK", "true")
    )

    # ------------------------------------------------------------------
    # Collector
    # ------------------------------------------------------------------
    max_external_stylesheets: int = field(
        default_factory=lambda: int(os.environ.get("MAX_EXTERNAL_STYLESHEETS", "10"))
    )
    fetch_concurrency: int = field(
        default_factory=lambda: int(os.environ.get("FETCH_CONCURRENCY", "4"))
    )


# Module-level singleton — import this everywhere:
#   from fontscan.config import settings
settings = Settings()
