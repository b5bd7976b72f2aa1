"""Typed dataclasses describing ServerHi site configuration structures."""

from __future__ import annotations

import dataclasses as dc

from serverhi_pages._constants import (
    DEFAULT_AUTHOR,
    DEFAULT_CATEGORY_ICON,
    DEFAULT_FEATURED_COUNT,
    DEFAULT_POSTS_PER_PAGE,
    DEFAULT_RELATED_COUNT,
)

DEFAULT_DARK_COLORS: dict[str, str] = {
    "background": "#0d1117",
    "surface": "#161b22",
    "text": "#c9d1d9",
    "muted": "#8b949e",
    "primary": "#00ff9c",
    "border": "#30363d",
}
DEFAULT_LIGHT_COLORS: dict[str, str] = {
    "background": "#ffffff",
    "surface": "#f6f8fa",
    "text": "#24292f",
    "muted": "#57606a",
    "primary": "#0969da",
    "border": "#d0d7de",
}


class ConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(frozen=True, slots=True)
class SiteMetadata:
    """Site-wide metadata sourced from ``site.json``."""

    name: str
    title: str
    description: str
    url: str
    author: str = DEFAULT_AUTHOR
    language: str = "en-us"
    posts_per_page: int = DEFAULT_POSTS_PER_PAGE
    related_posts_count: int = DEFAULT_RELATED_COUNT
    featured_posts_count: int = DEFAULT_FEATURED_COUNT


@dc.dataclass(frozen=True, slots=True)
class CategoryConfig:
    """A single category definition from ``categories.json``."""

    slug: str
    name: str
    description: str
    color: str
    icon: str


@dc.dataclass(frozen=True, slots=True)
class ThemeConfig:
    """Colour tokens for the dark and light themes."""

    dark: dict[str, str] = dc.field(default_factory=lambda: dict(DEFAULT_DARK_COLORS))
    light: dict[str, str] = dc.field(
        default_factory=lambda: dict(DEFAULT_LIGHT_COLORS)
    )

    @property
    def primary(self) -> str:
        """Return the dark theme's primary accent colour."""
        return self.dark.get("primary", DEFAULT_DARK_COLORS["primary"])


@dc.dataclass(frozen=True, slots=True)
class SiteConfig:
    """Site metadata, categories, and theme loaded from the config directory."""

    site: SiteMetadata
    categories: tuple[CategoryConfig, ...]
    theme: ThemeConfig = dc.field(default_factory=ThemeConfig)

    @property
    def category_slugs(self) -> frozenset[str]:
        """Return the set of configured category slugs."""
        return frozenset(category.slug for category in self.categories)

    def get_category(self, slug: str) -> CategoryConfig | None:
        """Return the category with ``slug`` or ``None`` when it is not defined."""
        for category in self.categories:
            if category.slug == slug:
                return category
        return None

    def category_color(self, slug: str) -> str:
        """Return the category colour, falling back to the theme primary."""
        category = self.get_category(slug)
        return category.color if category else self.theme.primary

    def category_icon(self, slug: str) -> str:
        """Return the category icon, falling back to a generic document icon."""
        category = self.get_category(slug)
        return category.icon if category else DEFAULT_CATEGORY_ICON


__all__ = [
    "CategoryConfig",
    "ConfigError",
    "SiteConfig",
    "SiteMetadata",
    "ThemeConfig",
]
