"""URL paths for the pages generated from the article collection.

Tags may contain characters that are unsafe inside a path segment (``/``,
spaces, ``#``). :func:`tag_segment` percent-encodes every reserved
character and :func:`tag_from_segment` reverses it, so repository lookups
always receive the decoded tag.

Examples
--------
>>> tag_segment("CI/CD")
'CI%2FCD'
>>> tag_from_segment("CI%2FCD")
'CI/CD'
>>> tag_path("CI/CD")
'/tags/CI%2FCD/'
"""

from __future__ import annotations

from urllib.parse import quote, unquote

POSTS_ROOT = "/posts/"
CATEGORIES_ROOT = "/categories/"
TAGS_ROOT = "/tags/"


def tag_segment(tag: str) -> str:
    """Return ``tag`` percent-encoded for use as a single path segment.

    Dot-only tags (``.``, ``..``) are encoded as ``%2E`` runs so they never
    resolve to the current or parent directory.
    """
    segment = quote(tag, safe="")
    if not segment.strip("."):
        return segment.replace(".", "%2E")
    return segment


def tag_from_segment(segment: str) -> str:
    """Decode a path segment produced by :func:`tag_segment`."""
    return unquote(segment)


def article_path(slug: str) -> str:
    """Return the site-relative URL of an article page."""
    return f"{POSTS_ROOT}{slug}/"


def category_path(slug: str) -> str:
    """Return the site-relative URL of a category listing."""
    return f"{CATEGORIES_ROOT}{slug}/"


def tag_path(tag: str) -> str:
    """Return the site-relative URL of a tag listing."""
    return f"{TAGS_ROOT}{tag_segment(tag)}/"


def listing_path(page: int) -> str:
    """Return the URL of page ``page`` of the full article listing."""
    if page <= 1:
        return POSTS_ROOT
    return f"{POSTS_ROOT}page/{page}/"


__all__ = [
    "article_path",
    "category_path",
    "listing_path",
    "tag_from_segment",
    "tag_path",
    "tag_segment",
]
