"""
Pytest configuration for integration tests

These tests drive a real headless Chromium. Pages are served from
``context.route`` handlers so no network access is needed; the whole module is
skipped when Chromium cannot be launched.
"""

import pytest
import pytest_asyncio


SITES = {}


@pytest.fixture
def sites():
    """url -> HTML body served to the browser context"""
    SITES.clear()
    return SITES


@pytest_asyncio.fixture
async def browser_context(sites):
    """Provide a browser context whose requests are answered from ``sites``"""
    from playwright.async_api import async_playwright

    async with async_playwright() as p:
        try:
            browser = await p.chromium.launch(headless=True)
        except Exception as e:
            pytest.skip(f"Chromium not available: {e}")
        context = await browser.new_context()

        async def _serve(route):
            body = sites.get(route.request.url)
            if body is None:
                await route.fulfill(status=404, body="not found")
            else:
                await route.fulfill(status=200, content_type="text/html", body=body)

        await context.route("**/*", _serve)
        yield context
        await browser.close()
