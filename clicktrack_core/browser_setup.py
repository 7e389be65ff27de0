#!/usr/bin/env python3
"""
Browser launch.

Two launchers behind one interface, selected by ``config.browser_mode``:

    local       Playwright's bundled Chromium (developer machines, CI)
    serverless  an externally provided Chromium binary with flags suited to
                container / function runtimes

``launch_browser`` owns the Playwright driver, the browser and its context for
the duration of one request and releases all three on every exit path.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

from playwright.async_api import async_playwright

from .config import Config, config as default_config
from .errors import BrowserLaunchError, ConfigurationError
from .stealth import StealthConfig

logger = logging.getLogger(__name__)

SERVERLESS_CHROME_ARGS: List[str] = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--single-process",
    "--no-zygote",
    "--hide-scrollbars",
    "--mute-audio",
    "--disable-extensions",
    "--disable-background-networking",
]

SERVERLESS_VIEWPORT = {"width": 1920, "height": 1080}


class BrowserLauncher:
    """Capability: launch a controllable Chromium browser"""
    mode = "base"

    def __init__(self, cfg: Optional[Config] = None, stealth_config: Optional[StealthConfig] = None):
        self.config = cfg or default_config
        self.stealth_config = stealth_config or StealthConfig(self.config)

    def launch_args(self) -> Dict[str, Any]:
        raise NotImplementedError

    def context_args(self) -> Dict[str, Any]:
        return {
            "user_agent": self.stealth_config.get_user_agent(),
            "extra_http_headers": self.stealth_config.get_extra_headers(),
        }

    async def launch(self, playwright):
        return await playwright.chromium.launch(**self.launch_args())


class LocalBrowserLauncher(BrowserLauncher):
    """Playwright-managed Chromium"""
    mode = "local"

    def launch_args(self) -> Dict[str, Any]:
        return {
            "headless": bool(self.config.headless),
            "args": ["--no-sandbox"] + self.stealth_config.get_chrome_args(),
        }


class ServerlessBrowserLauncher(BrowserLauncher):
    """Chromium binary shipped with the deployment image"""
    mode = "serverless"

    def launch_args(self) -> Dict[str, Any]:
        path = self.config.chromium_executable_path
        if not path:
            raise ConfigurationError(
                "Serverless browser mode requires CLICKTRACK_CHROMIUM_PATH"
            )
        return {
            "headless": True,
            "executable_path": path,
            "args": list(SERVERLESS_CHROME_ARGS),
        }

    def context_args(self) -> Dict[str, Any]:
        args = super().context_args()
        args["viewport"] = dict(SERVERLESS_VIEWPORT)
        args["ignore_https_errors"] = True
        return args


LAUNCHERS = {
    LocalBrowserLauncher.mode: LocalBrowserLauncher,
    ServerlessBrowserLauncher.mode: ServerlessBrowserLauncher,
}


def get_launcher(cfg: Optional[Config] = None) -> BrowserLauncher:
    cfg = cfg or default_config
    launcher_cls = LAUNCHERS.get(cfg.browser_mode)
    if launcher_cls is None:
        raise ConfigurationError(
            f"Unknown browser mode '{cfg.browser_mode}' (expected one of: {', '.join(sorted(LAUNCHERS))})"
        )
    return launcher_cls(cfg)


class BrowserSession:
    """Browser and context owned by a single request"""
    def __init__(self, browser, context):
        self.browser = browser
        self.context = context

    async def new_page(self):
        return await self.context.new_page()


@asynccontextmanager
async def launch_browser(
    cfg: Optional[Config] = None,
    launcher: Optional[BrowserLauncher] = None,
) -> AsyncIterator[BrowserSession]:
    """
    Launch a browser for one request.

    Raises:
        ConfigurationError: browser mode is unknown or incomplete
        BrowserLaunchError: Playwright or Chromium failed to start
    """
    cfg = cfg or default_config
    launcher = launcher or get_launcher(cfg)
    launcher.launch_args()  # fail on bad config before starting the driver

    try:
        playwright = await async_playwright().start()
    except Exception as e:
        raise BrowserLaunchError(f"Failed to start Playwright: {e}") from e

    browser = None
    try:
        try:
            browser = await launcher.launch(playwright)
            context = await browser.new_context(**launcher.context_args())
            await launcher.stealth_config.apply_to_context(context)
        except Exception as e:
            raise BrowserLaunchError(f"Failed to launch browser ({launcher.mode}): {e}") from e
        logger.debug(f"Browser launched ({launcher.mode})")
        yield BrowserSession(browser, context)
    finally:
        if browser is not None:
            try:
                await browser.close()
            except Exception as e:
                logger.warning(f"Browser close failed: {e}")
        try:
            await playwright.stop()
        except Exception as e:
            logger.warning(f"Playwright stop failed: {e}")
