"""
clicktrack_core: locate a tracking marker on a page rendered in headless Chromium

Usage:
    from clicktrack_core import scrape, PageOrchestrator, extract_from_frame

    response = await scrape("https://example.com/")
"""
from .config import Config, config
from .errors import (
    ScrapeError,
    ConfigurationError,
    BrowserLaunchError,
    NavigationError,
    create_error_response,
)
from .models import DetailRecord, ExtractionResult, FrameHit
from .extraction import DEFAULT_STRATEGIES, extract_from_frame
from .orchestrator import PageOrchestrator, isolated_page
from .browser_setup import (
    BrowserLauncher,
    LocalBrowserLauncher,
    ServerlessBrowserLauncher,
    get_launcher,
    launch_browser,
)
from .stealth import StealthConfig
from .scraper import scrape, run_scrape

__all__ = [
    "Config",
    "config",
    "ScrapeError",
    "ConfigurationError",
    "BrowserLaunchError",
    "NavigationError",
    "create_error_response",
    "DetailRecord",
    "ExtractionResult",
    "FrameHit",
    "DEFAULT_STRATEGIES",
    "extract_from_frame",
    "PageOrchestrator",
    "isolated_page",
    "BrowserLauncher",
    "LocalBrowserLauncher",
    "ServerlessBrowserLauncher",
    "get_launcher",
    "launch_browser",
    "StealthConfig",
    "scrape",
    "run_scrape",
]

__version__ = "1.0.0"
