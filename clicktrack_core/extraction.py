"""
Frame Extractor

Runs a fixed, ordered battery of lookups against a single frame and returns
the first hit. Each strategy is an async function ``(frame, marker)`` returning
a FrameHit or None; failures inside a strategy count as a miss.

Order:
    1. global_variable    - window[marker]
    2. web_storage        - localStorage / sessionStorage
    3. inline_scripts     - assignment in inline <script> text
    4. document_html      - assignment anywhere in the serialized document
    5. structural_marker  - element whose class/id/name/data-* mentions the marker

Usage:
    from clicktrack_core.extraction import extract_from_frame

    hit = await extract_from_frame(page.main_frame, "clicktrackedAd_js")
"""

import logging
import re
from typing import Awaitable, Callable, List, Optional, Sequence

from .models import DetailRecord, FrameHit, coerce_value

logger = logging.getLogger(__name__)

Strategy = Callable[[object, str], Awaitable[Optional[FrameHit]]]

PRESENT_SENTINEL = "present"

GLOBAL_VARIABLE_JS = """(name) => {
    const v = window[name];
    if (typeof v === 'undefined' || v === null || v === '') return null;
    // named element access (id="<marker>") is not an assignment
    if (v instanceof Node) return null;
    return String(v);
}"""

WEB_STORAGE_JS = """(name) => {
    let v = null;
    try { v = window.localStorage.getItem(name); } catch (e) {}
    if (!v) {
        try { v = window.sessionStorage.getItem(name); } catch (e) {}
    }
    return v || null;
}"""

INLINE_SCRIPTS_JS = """() => Array.from(document.scripts).map(s => s.textContent || '')"""

DOCUMENT_HTML_JS = """() => (document.documentElement && document.documentElement.outerHTML) || ''"""

STRUCTURAL_MARKER_JS = """(name) => {
    const needle = String(name);
    const mentions = (el) => {
        const cls = typeof el.className === 'string'
            ? el.className
            : (el.getAttribute && el.getAttribute('class')) || '';
        if (cls.includes(needle)) return true;
        if ((el.id || '').includes(needle)) return true;
        if ((el.getAttribute('name') || '').includes(needle)) return true;
        for (const attr of Array.from(el.attributes || [])) {
            if (!attr.name.startsWith('data-')) continue;
            if (attr.name.includes(needle.toLowerCase()) || (attr.value || '').includes(needle)) return true;
        }
        return false;
    };
    const el = Array.from(document.querySelectorAll('*')).find(mentions);
    if (!el) return null;
    const anchor = el.closest('a[href]') || el.querySelector('a[href]');
    return {
        href: anchor ? anchor.href : null,
        text: (el.innerText || el.textContent || '').trim().slice(0, 200),
        tag: (el.tagName || '').toLowerCase(),
        html: (el.outerHTML || '').trim().slice(0, 500),
    };
}"""


def assignment_pattern(marker: str) -> "re.Pattern[str]":
    """``<marker> (":" | "=") "<quoted>"`` matched case-insensitively."""
    return re.compile(
        r"\b" + re.escape(marker) + r"\b\s*[:=]\s*[\"']([^\"']+)[\"']",
        re.IGNORECASE,
    )


def match_assignment(text: str, marker: str) -> Optional[str]:
    if not text:
        return None
    m = assignment_pattern(marker).search(text)
    return m.group(1) if m else None


async def global_variable(frame, marker: str) -> Optional[FrameHit]:
    value = coerce_value(await frame.evaluate(GLOBAL_VARIABLE_JS, marker))
    return FrameHit(value, "global_variable") if value else None


async def web_storage(frame, marker: str) -> Optional[FrameHit]:
    value = coerce_value(await frame.evaluate(WEB_STORAGE_JS, marker))
    return FrameHit(value, "web_storage") if value else None


async def inline_scripts(frame, marker: str) -> Optional[FrameHit]:
    blocks = await frame.evaluate(INLINE_SCRIPTS_JS) or []
    value = match_assignment("\n".join(str(b) for b in blocks), marker)
    return FrameHit(value, "inline_scripts") if value else None


async def document_html(frame, marker: str) -> Optional[FrameHit]:
    html = await frame.evaluate(DOCUMENT_HTML_JS)
    value = match_assignment(str(html or ""), marker)
    return FrameHit(value, "document_html") if value else None


async def structural_marker(frame, marker: str) -> Optional[FrameHit]:
    # Substring match; unrelated elements whose identifiers contain the marker also match.
    raw = await frame.evaluate(STRUCTURAL_MARKER_JS, marker)
    if not isinstance(raw, dict):
        return None
    details = DetailRecord.from_raw(raw)
    return FrameHit(details.href or PRESENT_SENTINEL, "structural_marker", details)


DEFAULT_STRATEGIES: List[Strategy] = [
    global_variable,
    web_storage,
    inline_scripts,
    document_html,
    structural_marker,
]


def _frame_url(frame) -> str:
    try:
        return str(getattr(frame, "url", "") or "")
    except Exception:
        return ""


async def first_hit(frame, marker: str, strategies: Sequence[Strategy]) -> Optional[FrameHit]:
    """Run strategies in order, stop at the first one that yields a value."""
    for strategy in strategies:
        name = getattr(strategy, "__name__", repr(strategy))
        try:
            hit = await strategy(frame, marker)
        except Exception as e:
            logger.debug(f"Strategy {name} failed on {_frame_url(frame) or '<frame>'}: {e}")
            continue
        if hit is not None:
            logger.debug(f"Strategy {name} matched on {_frame_url(frame) or '<frame>'}")
            return hit
    return None


async def extract_from_frame(
    frame,
    marker: str,
    strategies: Optional[Sequence[Strategy]] = None,
) -> Optional[FrameHit]:
    """
    Resolve the marker in one frame.

    Args:
        frame: Playwright Frame/Page or anything with ``evaluate`` and ``url``
        marker: Name of the value to look for
        strategies: Override the default ordered strategy list

    Returns:
        FrameHit for the first strategy that found a value, else None
    """
    return await first_hit(frame, marker, DEFAULT_STRATEGIES if strategies is None else strategies)
