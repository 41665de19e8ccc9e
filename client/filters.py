"""
client/filters.py
Local helpers the site pages apply to already-fetched data.
"""

from typing import Iterable, List, Optional

UPLOAD_SEGMENT = "/upload/"


def filter_events(
    events: Iterable[dict],
    category: Optional[str] = None,
    search: Optional[str] = None,
) -> List[dict]:
    """
    Narrow events by category ("All" or empty means any) and by a
    case-insensitive search over title, client and description.
    """
    needle = (search or "").strip().lower()
    matched = []
    for event in events:
        if category and category != "All" and event.get("category") != category:
            continue
        if needle:
            haystack = " ".join(
                str(event.get(k) or "") for k in ("title", "client", "description")
            ).lower()
            if needle not in haystack:
                continue
        matched.append(event)
    return matched


def featured_events(events: Iterable[dict], limit: Optional[int] = None) -> List[dict]:
    featured = [e for e in events if e.get("featured")]
    return featured[:limit] if limit is not None else featured


def optimize_image_url(url: str, width: int = 400) -> str:
    """
    Insert a resize/quality/format transformation into a media host URL.
    URLs from elsewhere, or already transformed, are returned unchanged.
    """
    if not url:
        return ""
    if UPLOAD_SEGMENT not in url:
        return url
    head, tail = url.split(UPLOAD_SEGMENT, 1)
    if tail.startswith("w_"):
        return url
    return f"{head}/upload/w_{width},q_auto,f_auto/{tail}"
