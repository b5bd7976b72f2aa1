"""Build the payloads behind ``rss.xml``, ``sitemap.xml`` and the search index.

Each helper turns the published article collection into plain dictionaries
that the XML templates (or ``json.dumps``) serialise. Drafts never reach
these helpers because the repository excludes them from ``load_all``.
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import typing as typ
from email.utils import format_datetime

from serverhi_pages import routes

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from serverhi_pages.config import SiteMetadata
    from serverhi_pages.content import Article

SITEMAP_EXCLUDED_PATHS = ("/404", "/search")
SITEMAP_CHANGEFREQ = "weekly"
SITEMAP_PRIORITY = "0.7"


@dc.dataclass(frozen=True, slots=True)
class SitemapEntry:
    """One ``<url>`` element of the sitemap."""

    loc: str
    lastmod: str
    changefreq: str = SITEMAP_CHANGEFREQ
    priority: str = SITEMAP_PRIORITY


def absolute_url(site: SiteMetadata, path: str) -> str:
    """Join a site-relative ``path`` onto the configured site URL."""
    return f"{site.url}/{path.lstrip('/')}"


def rfc822_date(value: dt.date) -> str:
    """Format ``value`` as an RFC 822 date at midnight UTC."""
    moment = dt.datetime.combine(value, dt.time(), tzinfo=dt.UTC)
    return format_datetime(moment)


def rss_items(
    articles: cabc.Iterable[Article], site: SiteMetadata
) -> list[dict[str, typ.Any]]:
    """Return RSS item dictionaries for ``articles`` in collection order."""
    return [
        {
            "title": article.title,
            "description": article.description,
            "link": absolute_url(site, routes.article_path(article.slug)),
            "pub_date": rfc822_date(article.publish_date),
            "categories": [article.category, *article.tags],
            "author": article.author,
        }
        for article in articles
    ]


def search_index_records(
    articles: cabc.Iterable[Article],
) -> list[dict[str, typ.Any]]:
    """Return the search index records consumed by the client-side search."""
    return [
        {
            "slug": article.slug,
            "url": routes.article_path(article.slug),
            "title": article.title,
            "description": article.description,
            "category": article.category,
            "tags": list(article.tags),
            "publishDate": article.publish_date.isoformat(),
        }
        for article in articles
    ]


def sitemap_entries(
    page_paths: cabc.Iterable[str],
    site: SiteMetadata,
    *,
    lastmod_by_path: cabc.Mapping[str, dt.date] | None = None,
    default_lastmod: dt.date,
) -> list[SitemapEntry]:
    """Return sitemap entries for the rendered ``page_paths``.

    Paths under :data:`SITEMAP_EXCLUDED_PATHS` are omitted. Article pages use
    their updated (or publish) date; every other page uses
    ``default_lastmod``.
    """
    lastmods = lastmod_by_path or {}
    entries: list[SitemapEntry] = []
    for path in sorted(set(page_paths)):
        if path.startswith(SITEMAP_EXCLUDED_PATHS):
            continue
        lastmod = lastmods.get(path, default_lastmod)
        entries.append(
            SitemapEntry(loc=absolute_url(site, path), lastmod=lastmod.isoformat())
        )
    return entries


__all__ = [
    "SitemapEntry",
    "absolute_url",
    "rfc822_date",
    "rss_items",
    "search_index_records",
    "sitemap_entries",
]
