"""Load site configuration JSON into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from serverhi_pages._constants import (
    DEFAULT_AUTHOR,
    DEFAULT_FEATURED_COUNT,
    DEFAULT_POSTS_PER_PAGE,
    DEFAULT_RELATED_COUNT,
)

from .helpers import (
    _build_theme_config,
    _optional_int,
    _optional_str,
    _read_json,
    _required_str,
)
from .models import CategoryConfig, ConfigError, SiteConfig, SiteMetadata

SITE_FILENAME = "site.json"
CATEGORIES_FILENAME = "categories.json"
THEME_FILENAME = "theme.json"


def load_site_config(config_dir: Path) -> SiteConfig:
    """Load the JSON files describing site metadata, categories, and theme.

    Parameters
    ----------
    config_dir : Path
        Directory holding ``site.json``, ``categories.json`` and, optionally,
        ``theme.json``.

    Returns
    -------
    SiteConfig
        Parsed configuration with typed accessors for categories and theme
        tokens.

    Raises
    ------
    ConfigError
        If a required file or key is missing, a file is not valid JSON, or a
        value has the wrong type (for example, a non-integer page size).

    Examples
    --------
    >>> from pathlib import Path
    >>> from serverhi_pages.config import load_site_config
    >>> config = load_site_config(Path("config"))  # doctest: +SKIP
    >>> sorted(config.category_slugs)[:2]  # doctest: +SKIP
    ['devops', 'docker']
    """
    if not config_dir.is_dir():
        msg = f"Configuration directory '{config_dir}' not found."
        raise ConfigError(msg)

    site = _build_site_metadata(_read_json(config_dir / SITE_FILENAME))
    categories = _build_categories(_read_json(config_dir / CATEGORIES_FILENAME))

    theme_path = config_dir / THEME_FILENAME
    theme_raw = _read_json(theme_path) if theme_path.exists() else None
    theme = _build_theme_config(theme_raw)

    return SiteConfig(site=site, categories=categories, theme=theme)


def _build_site_metadata(payload: typ.Mapping[str, typ.Any]) -> SiteMetadata:
    """Build SiteMetadata from the ``site.json`` payload."""
    source = SITE_FILENAME
    return SiteMetadata(
        name=_required_str(payload, "name", source),
        title=_required_str(payload, "title", source),
        description=_required_str(payload, "description", source),
        url=_required_str(payload, "url", source).rstrip("/"),
        author=_optional_str(payload, "author", DEFAULT_AUTHOR, source),
        language=_optional_str(payload, "language", "en-us", source),
        posts_per_page=_optional_int(
            payload, "postsPerPage", DEFAULT_POSTS_PER_PAGE, source, minimum=1
        ),
        related_posts_count=_optional_int(
            payload, "relatedPostsCount", DEFAULT_RELATED_COUNT, source
        ),
        featured_posts_count=_optional_int(
            payload, "featuredPostsCount", DEFAULT_FEATURED_COUNT, source, minimum=1
        ),
    )


def _build_categories(
    payload: typ.Mapping[str, typ.Any],
) -> tuple[CategoryConfig, ...]:
    """Build the ordered category tuple from the ``categories.json`` payload."""
    entries = payload.get("categories")
    if entries is None:
        msg = f"Missing required key 'categories' in {CATEGORIES_FILENAME}."
        raise ConfigError(msg)
    if not isinstance(entries, list):
        msg = f"Key 'categories' in {CATEGORIES_FILENAME} must be an array."
        raise ConfigError(msg)

    categories: list[CategoryConfig] = []
    seen: set[str] = set()
    for index, entry in enumerate(entries):
        source = f"{CATEGORIES_FILENAME} entry {index}"
        if not isinstance(entry, dict):
            msg = f"{source} must be an object."
            raise ConfigError(msg)
        category = CategoryConfig(
            slug=_required_str(entry, "slug", source),
            name=_required_str(entry, "name", source),
            description=_required_str(entry, "description", source),
            color=_required_str(entry, "color", source),
            icon=_required_str(entry, "icon", source),
        )
        if category.slug in seen:
            msg = f"Duplicate category slug '{category.slug}' in {CATEGORIES_FILENAME}."
            raise ConfigError(msg)
        seen.add(category.slug)
        categories.append(category)
    return tuple(categories)


__all__ = ["load_site_config"]
