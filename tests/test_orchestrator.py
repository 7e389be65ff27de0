"""Tests for the Page Orchestrator escalation order and probe cleanup."""

import pytest

from clicktrack_core.orchestrator import (
    PageOrchestrator,
    isolated_page,
    origin_of,
    resolve_iframe_sources,
)
from fakes import FakeContext, FakeFrame, FakePage

MARKER = "clicktrackedAd_js"
PAGE_URL = "https://shop.example.com/product/1"


def make_page(main=None, children=None, iframe_srcs=None, sites=None, broken=None, late=None):
    context = FakeContext(sites=sites, broken=broken)
    page = FakePage(
        context=context,
        main_frame=main or FakeFrame(PAGE_URL),
        child_frames=children,
        iframe_srcs=iframe_srcs,
        late_globals=late,
    )
    return page, context


def test_origin_of():
    assert origin_of("https://Shop.Example.com/a?b=1") == "https://shop.example.com"
    assert origin_of("http://example.com:8080/x") == "http://example.com:8080"
    assert origin_of("about:blank") is None
    assert origin_of("") is None
    assert origin_of(None) is None


def test_resolve_iframe_sources():
    sources = [
        "/ads/frame.html",
        "https://cdn.other.net/tag.html",
        "/ads/frame.html",
        "javascript:void(0)",
        "about:blank",
        "//cdn.other.net/proto-relative.html",
    ]
    assert resolve_iframe_sources(sources, PAGE_URL) == [
        "https://shop.example.com/ads/frame.html",
        "https://cdn.other.net/tag.html",
        "https://cdn.other.net/proto-relative.html",
    ]
    assert resolve_iframe_sources(sources, PAGE_URL, limit=1) == [
        "https://shop.example.com/ads/frame.html",
    ]


@pytest.mark.asyncio
async def test_main_frame_hit_short_circuits(cfg):
    child = FakeFrame("https://shop.example.com/child", globals={MARKER: "child"})
    page, context = make_page(
        main=FakeFrame(PAGE_URL, globals={MARKER: "main"}),
        children=[child],
        iframe_srcs=["/child"],
    )
    result = await PageOrchestrator(cfg).extract(page)
    assert result.value == "main"
    assert result.source == "main"
    assert child.evaluated == []
    assert context.pages == []
    assert page.waited is False


@pytest.mark.asyncio
async def test_same_origin_frames_in_reported_order(cfg):
    cross = FakeFrame("https://ads.other.net/f", globals={MARKER: "cross"})
    blank = FakeFrame("about:blank", globals={MARKER: "blank"})
    empty = FakeFrame("https://shop.example.com/empty")
    first = FakeFrame("https://shop.example.com/first", globals={MARKER: "first"})
    second = FakeFrame("https://shop.example.com/second", globals={MARKER: "second"})
    page, _ = make_page(children=[cross, blank, empty, first, second])

    result = await PageOrchestrator(cfg).extract(page)

    assert result.value == "first"
    assert result.source == "frame"
    assert result.frame_url == "https://shop.example.com/first"
    assert cross.evaluated == []
    assert blank.evaluated == []
    assert empty.evaluated  # searched, nothing found
    assert second.evaluated == []


@pytest.mark.asyncio
async def test_cross_origin_iframe_probed_in_isolated_page(cfg):
    ad_url = "https://ads.other.net/slot.html"
    page, context = make_page(
        children=[FakeFrame(ad_url)],
        iframe_srcs=["https://ads.other.net/slot.html"],
        sites={ad_url: FakeFrame(ad_url, scripts=['clicktrackedAd_js = "iso-1"'])},
    )

    result = await PageOrchestrator(cfg).extract(page)

    assert result.value == "iso-1"
    assert result.source == "isolated"
    assert result.frame_url == ad_url
    assert len(context.pages) == 1
    assert context.open_pages == []
    assert context.pages[0].headers["referer"] == cfg.referer
    assert page.waited is False


@pytest.mark.asyncio
async def test_isolated_probe_failures_continue_and_close(cfg):
    bad = "https://broken.example/a.html"
    miss = "https://shop.example.com/miss.html"
    good = "https://ads.other.net/b.html"
    page, context = make_page(
        iframe_srcs=[bad, "/miss.html", good],
        sites={good: FakeFrame(good, globals={MARKER: "found-b"})},
        broken={bad},
    )

    result = await PageOrchestrator(cfg).extract(page)

    assert result.value == "found-b"
    assert context.loaded == [bad, miss, good]
    assert len(context.pages) == 3
    assert context.open_pages == []


@pytest.mark.asyncio
async def test_isolated_probe_structural_details_returned(cfg):
    ad_url = "https://ads.other.net/slot.html"
    structural = {"href": "https://ads.other.net/click", "text": "Ad", "tag": "div", "html": "<div></div>"}
    page, context = make_page(
        iframe_srcs=[ad_url],
        sites={ad_url: FakeFrame(ad_url, structural=structural)},
    )

    result = await PageOrchestrator(cfg).extract(page)

    assert result.value == "https://ads.other.net/click"
    assert result.details is not None
    assert result.details.href == "https://ads.other.net/click"
    assert context.open_pages == []


@pytest.mark.asyncio
async def test_probe_count_capped(cfg):
    cfg.max_isolated_probes = 2
    page, context = make_page(iframe_srcs=["/a", "/b", "/c", "/d"])
    result = await PageOrchestrator(cfg).extract(page)
    assert result.value is None
    assert len(context.loaded) == 2


@pytest.mark.asyncio
async def test_async_wait_fallback(cfg):
    page, context = make_page(late={MARKER: "late-7"})
    result = await PageOrchestrator(cfg).extract(page)
    assert result.value == "late-7"
    assert result.source == "wait"
    assert page.waited is True


@pytest.mark.asyncio
async def test_nothing_anywhere_is_absent(cfg):
    page, context = make_page(
        children=[FakeFrame("https://shop.example.com/c")],
        iframe_srcs=["/c"],
    )
    result = await PageOrchestrator(cfg).extract(page)
    assert result.value is None
    assert result.found is False
    assert page.waited is True
    assert context.open_pages == []


@pytest.mark.asyncio
async def test_isolated_page_closed_when_body_raises():
    context = FakeContext()
    with pytest.raises(ValueError):
        async with isolated_page(context) as probe:
            assert probe.closed is False
            raise ValueError("boom")
    assert context.pages[0].closed is True


@pytest.mark.asyncio
async def test_prepare_page_sets_identity(cfg):
    page, _ = make_page()
    await PageOrchestrator(cfg).prepare_page(page)
    assert page.headers["user-agent"] == cfg.user_agent
    assert page.headers["accept-language"] == cfg.accept_language
    assert page.headers["referer"] == cfg.referer
    assert page.headers["accept"].startswith("text/html")
