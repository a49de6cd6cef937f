"""
Configuration for the economic risk dashboard.

Settings are read from environment variables (optionally via a local .env
file). The FRED API key is only ever read here, on the server side.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

from .utils import setup_logging

logger = setup_logging()

DEFAULT_FRED_BASE_URL = "https://api.stlouisfed.org/fred"
DEFAULT_FRED_TIMEOUT_SECONDS = 10.0
DEFAULT_FRED_MAX_WORKERS = 5
DEFAULT_REFRESH_INTERVAL_MINUTES = 30


def _env_number(name: str, default, convert):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return convert(raw.strip())
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using default %s", name, raw, default)
        return default


def _env_float(name: str, default: float) -> float:
    return _env_number(name, default, float)


def _env_int(name: str, default: int) -> int:
    return _env_number(name, default, int)


@dataclass
class FredSettings:
    """Settings for the FRED observations API."""

    api_key: Optional[str] = None
    base_url: str = DEFAULT_FRED_BASE_URL
    timeout_seconds: float = DEFAULT_FRED_TIMEOUT_SECONDS
    max_workers: int = DEFAULT_FRED_MAX_WORKERS

    @classmethod
    def from_env(cls) -> "FredSettings":
        # NEXT_PUBLIC_FRED_API_KEY is accepted for older deployments
        api_key = os.getenv("FRED_API_KEY") or os.getenv("NEXT_PUBLIC_FRED_API_KEY")
        return cls(
            api_key=api_key.strip() if api_key else None,
            base_url=os.getenv("FRED_BASE_URL", DEFAULT_FRED_BASE_URL).rstrip("/"),
            timeout_seconds=_env_float("FRED_TIMEOUT_SECONDS", DEFAULT_FRED_TIMEOUT_SECONDS),
            max_workers=_env_int("FRED_MAX_WORKERS", DEFAULT_FRED_MAX_WORKERS),
        )

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)


@dataclass
class ServerSettings:
    """Settings for the HTTP surface and the refresh loop."""

    frontend_url: Optional[str] = None
    refresh_interval_minutes: int = DEFAULT_REFRESH_INTERVAL_MINUTES
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ServerSettings":
        return cls(
            frontend_url=os.getenv("FRONTEND_URL") or None,
            refresh_interval_minutes=_env_int(
                "REFRESH_INTERVAL_MINUTES", DEFAULT_REFRESH_INTERVAL_MINUTES
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def allowed_origins(self) -> List[str]:
        origins = [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]
        if self.frontend_url:
            origins.append(self.frontend_url)
        return origins


@dataclass
class Settings:
    fred: FredSettings = field(default_factory=FredSettings)
    server: ServerSettings = field(default_factory=ServerSettings)


def load_settings() -> Settings:
    """Load settings from the environment, reading .env if present."""
    load_dotenv()
    return Settings(
        fred=FredSettings.from_env(),
        server=ServerSettings.from_env(),
    )


def validate_settings(settings: Settings) -> List[str]:
    """
    Check settings for problems that would stop indicators from loading.

    Returns:
        List of human-readable problems (empty if settings are usable)
    """
    errors = []
    if not settings.fred.has_credential:
        errors.append("FRED_API_KEY is not set; indicator endpoints will fail")
    if settings.fred.timeout_seconds <= 0:
        errors.append("FRED_TIMEOUT_SECONDS must be positive")
    if settings.fred.max_workers < 1:
        errors.append("FRED_MAX_WORKERS must be at least 1")
    if settings.server.refresh_interval_minutes < 1:
        errors.append("REFRESH_INTERVAL_MINUTES must be at least 1")
    return errors
