#!/usr/bin/env python3
import asyncio
import logging
from typing import Any, Dict, Optional

from .browser_setup import BrowserLauncher, launch_browser
from .config import Config, config as default_config
from .errors import NavigationError
from .models import ExtractionResult
from .orchestrator import PageOrchestrator

logger = logging.getLogger(__name__)


def build_response(url: str, final_url: str, result: ExtractionResult, marker: str) -> Dict[str, Any]:
    response: Dict[str, Any] = {
        "url": url,
        marker: result.value,
        "finalUrl": final_url,
    }
    if result.details is not None:
        response["details"] = result.details.to_dict()
    return response


async def scrape(
    url: str,
    cfg: Optional[Config] = None,
    launcher: Optional[BrowserLauncher] = None,
) -> Dict[str, Any]:
    """
    Load ``url`` in a fresh browser and look for the marker.

    Returns:
        {"url", <marker>, "finalUrl"} plus "details" for structural hits

    Raises:
        BrowserLaunchError: browser could not be started
        NavigationError: the page did not load within the navigation timeout
    """
    cfg = cfg or default_config
    orchestrator = PageOrchestrator(cfg)
    async with launch_browser(cfg, launcher) as session:
        page = await session.new_page()
        await orchestrator.prepare_page(page)
        try:
            await page.goto(url, wait_until="domcontentloaded", timeout=cfg.navigation_timeout_ms)
        except Exception as e:
            raise NavigationError(f"Navigation to {url} failed: {e}") from e
        result = await orchestrator.extract(page)
        return build_response(url, page.url, result, cfg.marker)


def run_scrape(
    url: str,
    cfg: Optional[Config] = None,
    launcher: Optional[BrowserLauncher] = None,
) -> Dict[str, Any]:
    """Run ``scrape`` to completion in a fresh event loop (for sync callers)."""
    loop = asyncio.new_event_loop()
    try:
        asyncio.set_event_loop(loop)
        return loop.run_until_complete(scrape(url, cfg, launcher))
    finally:
        try:
            loop.run_until_complete(loop.shutdown_asyncgens())
        except RuntimeError as e:
            logger.debug(f"Event loop shutdown: {e}")
        loop.close()
        asyncio.set_event_loop(None)
