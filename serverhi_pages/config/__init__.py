"""Load and validate the ServerHi site configuration.

This subpackage reads the JSON files in the project's ``config/`` directory
(``site.json``, ``categories.json`` and the optional ``theme.json``) and
produces frozen dataclasses (:class:`SiteConfig`, :class:`CategoryConfig`,
etc.) that the content repository and page builders consume. The primary
entry point is :func:`load_site_config`, which ensures required keys are
present, applies defaults, and raises :class:`ConfigError` for anything
structurally wrong.

Examples
--------
>>> from pathlib import Path
>>> from serverhi_pages.config import load_site_config
>>> config = load_site_config(Path("config"))  # doctest: +SKIP
>>> config.get_category("docker").name  # doctest: +SKIP
'Docker'
"""

from .loader import load_site_config
from .models import (
    CategoryConfig,
    ConfigError,
    SiteConfig,
    SiteMetadata,
    ThemeConfig,
)

__all__ = [
    "CategoryConfig",
    "ConfigError",
    "SiteConfig",
    "SiteMetadata",
    "ThemeConfig",
    "load_site_config",
]
