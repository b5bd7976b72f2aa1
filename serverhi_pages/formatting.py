"""Display helpers for article metadata.

These functions back the Jinja filters used by the page templates (dates,
reading time, difficulty badges) and the slug normalisation applied to
article directory names.

Examples
--------
>>> import datetime as dt
>>> format_date(dt.date(2026, 2, 5))
'February 5, 2026'
>>> slugify("Install Docker on Ubuntu!")
'install-docker-on-ubuntu'
>>> reading_time("word " * 450)
'3 min read'
"""

from __future__ import annotations

import datetime as dt  # noqa: TC003 - used for runtime type metadata
import math
import re

from ._constants import WORDS_PER_MINUTE

_NON_WORD_PATTERN = re.compile(r"[^\w\s-]")
_WHITESPACE_PATTERN = re.compile(r"[\s_]+")
_HYPHEN_RUN_PATTERN = re.compile(r"-{2,}")

DIFFICULTY_COLORS: dict[str, str] = {
    "beginner": "#00ff00",
    "intermediate": "#ff9500",
    "advanced": "#ff4444",
}
DEFAULT_DIFFICULTY_COLOR = "#8b949e"


def slugify(text: str) -> str:
    """Return a lowercase, hyphen-separated slug for ``text``."""
    slug = _NON_WORD_PATTERN.sub("", text.strip().lower())
    slug = _WHITESPACE_PATTERN.sub("-", slug)
    return _HYPHEN_RUN_PATTERN.sub("-", slug).strip("-")


def format_date(value: dt.date) -> str:
    """Return ``value`` as a long US-English date, e.g. ``February 5, 2026``."""
    return f"{value:%B} {value.day}, {value.year}"


def reading_time(content: str) -> str:
    """Estimate reading time for ``content`` at a fixed words-per-minute rate."""
    words = len(content.split())
    minutes = max(1, math.ceil(words / WORDS_PER_MINUTE))
    return f"{minutes} min read"


def truncate(text: str, length: int) -> str:
    """Shorten ``text`` to ``length`` characters, appending an ellipsis."""
    if len(text) <= length:
        return text
    return text[:length].strip() + "..."


def difficulty_label(difficulty: str | None) -> str:
    """Return a capitalised difficulty label, or an empty string."""
    if not difficulty:
        return ""
    return difficulty[:1].upper() + difficulty[1:]


def difficulty_color(difficulty: str | None) -> str:
    """Return the badge colour for ``difficulty``."""
    return DIFFICULTY_COLORS.get(difficulty or "", DEFAULT_DIFFICULTY_COLOR)


__all__ = [
    "difficulty_color",
    "difficulty_label",
    "format_date",
    "reading_time",
    "slugify",
    "truncate",
]
