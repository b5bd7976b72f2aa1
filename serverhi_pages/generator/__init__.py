"""Utilities for rendering article pages, listings, and feeds."""

from .asset_links import AssetLinkExtension
from .renderer import HtmlContentRenderer
from .site_builder import SiteBuilder

__all__ = [
    "AssetLinkExtension",
    "HtmlContentRenderer",
    "SiteBuilder",
]
