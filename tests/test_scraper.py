"""Tests for the request-level scrape service."""

import pytest

from clicktrack_core.errors import NavigationError
from clicktrack_core.models import DetailRecord, ExtractionResult
from clicktrack_core.scraper import build_response, scrape
from fakes import FakeFrame

URL = "https://example.com/has-marker"


@pytest.mark.asyncio
async def test_scrape_found(cfg, fake_browser):
    fake_browser.sites[URL] = FakeFrame(URL, globals={"clicktrackedAd_js": "abc123"})
    response = await scrape(URL, cfg)
    assert response == {"url": URL, "clicktrackedAd_js": "abc123", "finalUrl": URL}
    assert fake_browser.state == {"launched": 1, "closed": 1}


@pytest.mark.asyncio
async def test_scrape_identity_applied_before_navigation(cfg, fake_browser):
    await scrape(URL, cfg)
    top = fake_browser.pages[0]
    assert top.headers["user-agent"] == cfg.user_agent


@pytest.mark.asyncio
async def test_scrape_absent_is_not_an_error(cfg, fake_browser):
    response = await scrape(URL, cfg)
    assert response["clicktrackedAd_js"] is None
    assert "details" not in response


@pytest.mark.asyncio
async def test_scrape_navigation_failure(cfg, fake_browser):
    fake_browser.broken.add(URL)
    with pytest.raises(NavigationError):
        await scrape(URL, cfg)
    assert fake_browser.state["closed"] == 1


@pytest.mark.asyncio
async def test_scrape_uses_configured_marker(cfg, fake_browser):
    cfg.marker = "otherMarker"
    fake_browser.sites[URL] = FakeFrame(URL, local_storage={"otherMarker": "s-1"})
    response = await scrape(URL, cfg)
    assert response["otherMarker"] == "s-1"


def test_build_response_with_details():
    details = DetailRecord(href=None, text="Ad", tag="div", html_snippet="<div>Ad</div>")
    result = ExtractionResult(value="present", details=details, strategy="structural_marker", source="main")
    response = build_response(URL, URL + "?r=1", result, "clicktrackedAd_js")
    assert response == {
        "url": URL,
        "clicktrackedAd_js": "present",
        "finalUrl": URL + "?r=1",
        "details": {"href": None, "text": "Ad", "tag": "div", "htmlSnippet": "<div>Ad</div>"},
    }
