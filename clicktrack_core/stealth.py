#!/usr/bin/env python3
from typing import Dict, List, Optional

from .config import Config, config as default_config


class StealthConfig:
    """Outgoing browser identity: user agent, fixed headers and launch flags"""
    def __init__(self, cfg: Optional[Config] = None):
        self.config = cfg or default_config

    def get_chrome_args(self) -> List[str]:
        return [
            '--disable-blink-features=AutomationControlled',
            '--disable-dev-shm-usage',
            '--no-first-run',
            '--no-default-browser-check',
            '--window-size=1920,1080',
        ]

    def get_user_agent(self) -> str:
        return self.config.user_agent

    def get_extra_headers(self) -> Dict[str, str]:
        return {
            "accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "accept-language": self.config.accept_language,
            "referer": self.config.referer,
        }

    async def apply_to_page(self, page) -> None:
        """Set user agent and fixed headers on a page before it navigates."""
        headers = dict(self.get_extra_headers())
        headers["user-agent"] = self.get_user_agent()
        await page.set_extra_http_headers(headers)

    async def apply_to_context(self, context) -> None:
        await context.add_init_script(
            """
            // Remove webdriver flag
            Object.defineProperty(navigator, 'webdriver', { get: () => undefined });
            """
        )
