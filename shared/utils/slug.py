"""
shared/utils/slug.py
"""

import re

_WHITESPACE = re.compile(r"\s+")


def slugify(name: str) -> str:
    """Lowercase and hyphenate whitespace: "Corporate Events" -> "corporate-events"."""
    return _WHITESPACE.sub("-", name.strip().lower())
