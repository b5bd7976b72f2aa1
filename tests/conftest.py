"""Shared fixtures for building throwaway config directories and article stores.

Tests describe articles as keyword arguments of frontmatter values; the
``write_article`` fixture serialises them with ruamel.yaml into
``<content_dir>/<slug>/index.md`` so every test exercises the same parsing
path as a real build.
"""

from __future__ import annotations

import functools
import typing as typ

import pytest

from serverhi_pages.config import SiteConfig, load_site_config
from tests.helpers import write_article as _write_article
from tests.helpers import write_config_dir

if typ.TYPE_CHECKING:
    from pathlib import Path

WriteArticle = typ.Callable[..., "Path"]


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Return a config directory with a page size of two and five categories."""
    return write_config_dir(tmp_path)


@pytest.fixture
def site_config(config_dir: Path) -> SiteConfig:
    """Return the SiteConfig loaded from ``config_dir``."""
    return load_site_config(config_dir)


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Return an empty article store directory."""
    path = tmp_path / "content" / "posts"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def write_article(content_dir: Path) -> WriteArticle:
    """Return a factory writing ``<slug>/index.md`` into ``content_dir``."""
    return functools.partial(_write_article, content_dir)
