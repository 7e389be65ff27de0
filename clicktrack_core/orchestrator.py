"""
Page Orchestrator

Drives the Frame Extractor across the frame topology of a navigated page and
widens the search only when the narrower scope came up empty:

    1. main document
    2. same-origin child frames, in browser-reported order
    3. iframe sources opened one by one in isolated pages
    4. one bounded wait for the global to be assigned asynchronously

Per-frame and per-probe failures are logged and skipped. Running out of places
to look is a normal, absent result.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional, Sequence
from urllib.parse import urljoin, urlparse

from .config import Config, config as default_config
from .extraction import GLOBAL_VARIABLE_JS, Strategy, extract_from_frame
from .models import ExtractionResult, coerce_value
from .stealth import StealthConfig

logger = logging.getLogger(__name__)

IFRAME_SOURCES_JS = "els => els.map(e => e.getAttribute('src')).filter(Boolean)"

WAIT_FOR_GLOBAL_JS = "(name) => typeof window[name] !== 'undefined' && !(window[name] instanceof Node)"

PROBE_SCHEMES = ("http", "https")


def origin_of(url: Optional[str]) -> Optional[str]:
    """scheme://host[:port], or None for URLs without a network origin (about:blank, data:)."""
    if not url:
        return None
    try:
        parsed = urlparse(url)
    except ValueError:
        return None
    if not parsed.scheme or not parsed.netloc:
        return None
    return f"{parsed.scheme.lower()}://{parsed.netloc.lower()}"


def resolve_iframe_sources(sources: Sequence[str], base_url: str, limit: Optional[int] = None) -> List[str]:
    """Absolute http(s) URLs in document order, without duplicates."""
    out: List[str] = []
    for src in sources:
        try:
            absolute = urljoin(base_url, str(src).strip())
        except ValueError:
            continue
        if urlparse(absolute).scheme not in PROBE_SCHEMES:
            continue
        if absolute not in out:
            out.append(absolute)
    if limit is not None and limit >= 0:
        out = out[:limit]
    return out


@asynccontextmanager
async def isolated_page(context) -> AsyncIterator[object]:
    """A fresh page in ``context`` that is closed on every exit path."""
    page = await context.new_page()
    try:
        yield page
    finally:
        try:
            await page.close()
        except Exception as e:
            logger.debug(f"Isolated page close failed: {e}")


class PageOrchestrator:
    """Escalating marker search over one navigated page"""

    def __init__(
        self,
        cfg: Optional[Config] = None,
        stealth_config: Optional[StealthConfig] = None,
        strategies: Optional[Sequence[Strategy]] = None,
    ):
        self.config = cfg or default_config
        self.stealth_config = stealth_config or StealthConfig(self.config)
        self.strategies = strategies

    @property
    def marker(self) -> str:
        return self.config.marker

    async def prepare_page(self, page) -> None:
        await self.stealth_config.apply_to_page(page)

    async def extract(self, page) -> ExtractionResult:
        """
        Search the page for the marker.

        Args:
            page: Playwright Page that has already navigated

        Returns:
            ExtractionResult (value None when every scope came up empty)
        """
        for step in (
            self.search_main_frame,
            self.search_same_origin_frames,
            self.search_isolated_pages,
            self.wait_for_global,
        ):
            result = await step(page)
            if result is not None:
                logger.info(
                    f"Marker '{self.marker}' found via {result.source}/{result.strategy}"
                    f" ({result.frame_url or page.url})"
                )
                return result
        logger.info(f"Marker '{self.marker}' not found on {page.url}")
        return ExtractionResult()

    async def search_main_frame(self, page) -> Optional[ExtractionResult]:
        hit = await extract_from_frame(page.main_frame, self.marker, self.strategies)
        if hit is None:
            return None
        return ExtractionResult.from_hit(hit, "main", page.url)

    async def search_same_origin_frames(self, page) -> Optional[ExtractionResult]:
        page_origin = origin_of(page.url)
        if page_origin is None:
            return None
        main = page.main_frame
        for frame in page.frames:
            if frame is main:
                continue
            frame_url = frame.url
            if origin_of(frame_url) != page_origin:
                continue
            hit = await extract_from_frame(frame, self.marker, self.strategies)
            if hit is not None:
                return ExtractionResult.from_hit(hit, "frame", frame_url)
        return None

    async def list_iframe_sources(self, page) -> List[str]:
        try:
            sources = await page.eval_on_selector_all("iframe", IFRAME_SOURCES_JS)
        except Exception as e:
            logger.debug(f"iframe enumeration failed: {e}")
            return []
        return resolve_iframe_sources(sources or [], page.url, self.config.max_isolated_probes)

    async def probe_isolated(self, context, url: str) -> Optional[ExtractionResult]:
        """Open ``url`` in its own page and run the extractor there; None on miss or failure."""
        try:
            async with isolated_page(context) as probe:
                await self.prepare_page(probe)
                await probe.goto(
                    url,
                    wait_until="domcontentloaded",
                    timeout=self.config.navigation_timeout_ms,
                )
                hit = await extract_from_frame(probe.main_frame, self.marker, self.strategies)
        except Exception as e:
            logger.debug(f"Isolated probe of {url} failed: {e}")
            return None
        if hit is None:
            return None
        return ExtractionResult.from_hit(hit, "isolated", url)

    async def search_isolated_pages(self, page) -> Optional[ExtractionResult]:
        sources = await self.list_iframe_sources(page)
        if not sources:
            return None
        logger.debug(f"Probing {len(sources)} iframe source(s) in isolated pages")
        for url in sources:
            result = await self.probe_isolated(page.context, url)
            if result is not None:
                return result
        return None

    async def wait_for_global(self, page) -> Optional[ExtractionResult]:
        try:
            await page.wait_for_function(
                WAIT_FOR_GLOBAL_JS,
                arg=self.marker,
                timeout=self.config.async_wait_timeout_ms,
            )
            value = coerce_value(await page.evaluate(GLOBAL_VARIABLE_JS, self.marker))
        except Exception as e:
            logger.debug(f"Async wait for '{self.marker}' ended without a value: {e}")
            return None
        if not value:
            return None
        return ExtractionResult(
            value=value,
            strategy="global_variable",
            source="wait",
            frame_url=page.url,
        )
