"""Result types shared by the extractor, orchestrator and scrape service"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

DETAIL_TEXT_MAX_CHARS = 200
DETAIL_HTML_MAX_CHARS = 500


@dataclass
class DetailRecord:
    """DOM element where a structural marker was found"""
    href: Optional[str]
    text: str
    tag: str
    html_snippet: str

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> "DetailRecord":
        href = raw.get("href")
        return cls(
            href=str(href) if href else None,
            text=str(raw.get("text") or "").strip()[:DETAIL_TEXT_MAX_CHARS],
            tag=str(raw.get("tag") or "").lower(),
            html_snippet=str(raw.get("html") or "").strip()[:DETAIL_HTML_MAX_CHARS],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "href": self.href,
            "text": self.text,
            "tag": self.tag,
            "htmlSnippet": self.html_snippet,
        }


@dataclass
class FrameHit:
    """A value located in a single frame by one strategy"""
    value: str
    strategy: str
    details: Optional[DetailRecord] = None


@dataclass
class ExtractionResult:
    """Outcome of a full page search; value is None when nothing was found"""
    value: Optional[str] = None
    details: Optional[DetailRecord] = None
    strategy: Optional[str] = None
    source: Optional[str] = None
    frame_url: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.value is not None

    @classmethod
    def from_hit(cls, hit: FrameHit, source: str, frame_url: Optional[str] = None) -> "ExtractionResult":
        return cls(
            value=hit.value,
            details=hit.details,
            strategy=hit.strategy,
            source=source,
            frame_url=frame_url,
        )


def coerce_value(raw: Any) -> Optional[str]:
    """Coerce a value returned from the page to a string; empty and null are absence."""
    if raw is None:
        return None
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if isinstance(raw, float) and raw.is_integer():
        raw = int(raw)
    value = str(raw)
    return value if value else None
