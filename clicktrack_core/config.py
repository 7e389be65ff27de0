#!/usr/bin/env python3
from dataclasses import dataclass, field
import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/127.0 Safari/537.36"
)


def _env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return str(v).strip().lower() in ("1", "true", "yes", "y", "on")


def _env_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None or str(v).strip() == "":
        return default
    try:
        return int(str(v).strip())
    except ValueError:
        return default


def _env_str(name: str, default: Optional[str]) -> Optional[str]:
    return os.getenv(name, default)


def _env(reader, *args):
    """Field default read from the environment each time a Config is built."""
    return field(default_factory=lambda: reader(*args))


@dataclass
class Config:
    """Application configuration"""
    port: int = field(default_factory=lambda: _env_int("PORT", _env_int("CLICKTRACK_PORT", 3000)))
    host: str = _env(_env_str, "CLICKTRACK_HOST", "0.0.0.0")
    marker: str = _env(_env_str, "CLICKTRACK_MARKER", "clicktrackedAd_js")

    # "local" -> Playwright bundled Chromium, "serverless" -> external Chromium binary
    browser_mode: str = field(default_factory=lambda: os.getenv("CLICKTRACK_BROWSER_MODE", "local").lower())
    chromium_executable_path: Optional[str] = field(default_factory=lambda: os.getenv("CLICKTRACK_CHROMIUM_PATH") or None)
    headless: bool = _env(_env_bool, "CLICKTRACK_HEADLESS", True)

    # Timeouts (milliseconds)
    navigation_timeout_ms: int = _env(_env_int, "CLICKTRACK_NAV_TIMEOUT_MS", 60000)
    async_wait_timeout_ms: int = _env(_env_int, "CLICKTRACK_WAIT_TIMEOUT_MS", 10000)
    max_isolated_probes: int = _env(_env_int, "CLICKTRACK_MAX_PROBES", 10)

    # Outgoing identity
    user_agent: str = _env(_env_str, "CLICKTRACK_USER_AGENT", DEFAULT_USER_AGENT)
    accept_language: str = _env(_env_str, "CLICKTRACK_ACCEPT_LANGUAGE", "en-US,en;q=0.9")
    referer: str = _env(_env_str, "CLICKTRACK_REFERER", "https://www.google.com/")

    log_level: str = field(default_factory=lambda: os.getenv("CLICKTRACK_LOG_LEVEL", "INFO").upper())

    @classmethod
    def from_env(cls) -> "Config":
        """Build a config from the current environment."""
        return cls()


config = Config()
