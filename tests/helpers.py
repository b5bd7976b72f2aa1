"""Helpers for writing throwaway config directories and articles in tests."""

from __future__ import annotations

import io
import json
import typing as typ

from ruamel.yaml import YAML

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

CATEGORIES = [
    {
        "slug": slug,
        "name": slug.replace("-", " ").title(),
        "description": f"{slug} tutorials",
        "color": "#00ff9c",
        "icon": "*",
    }
    for slug in ("docker", "linux", "server-config", "devops", "security")
]


def article_frontmatter(**overrides: object) -> dict[str, object]:
    """Return a valid frontmatter mapping with ``overrides`` applied.

    Passing ``None`` for a key removes it from the mapping.
    """
    data: dict[str, object] = {
        "title": "Sample tutorial",
        "description": "A sample tutorial.",
        "pubDate": "2026-02-05",
        "category": "docker",
        "tags": ["docker"],
    }
    data.update(overrides)
    return {key: value for key, value in data.items() if value is not None}


def render_article(frontmatter: cabc.Mapping[str, object], body: str) -> str:
    """Return Markdown text with ``frontmatter`` serialised as YAML."""
    yaml = YAML(typ="safe")
    yaml.default_flow_style = False
    buffer = io.StringIO()
    yaml.dump(dict(frontmatter), buffer)
    return f"---\n{buffer.getvalue()}---\n{body}"


def write_config_dir(
    root: Path,
    *,
    site: cabc.Mapping[str, object] | None = None,
    categories: list[dict[str, str]] | None = None,
) -> Path:
    """Write ``site.json`` and ``categories.json`` under ``root/config``."""
    config_dir = root / "config"
    config_dir.mkdir(parents=True, exist_ok=True)
    site_payload: dict[str, object] = {
        "name": "ServerHi",
        "title": "ServerHi Tutorials",
        "description": "Linux and Docker tutorials.",
        "url": "https://serverhi.example",
        "postsPerPage": 2,
        "relatedPostsCount": 3,
    }
    site_payload.update(site or {})
    (config_dir / "site.json").write_text(json.dumps(site_payload), encoding="utf-8")
    (config_dir / "categories.json").write_text(
        json.dumps({"categories": CATEGORIES if categories is None else categories}),
        encoding="utf-8",
    )
    return config_dir


def write_article(
    content_dir: Path,
    slug: str,
    body: str = "## Heading\n\nSome body text.\n",
    *,
    raw: str | None = None,
    **frontmatter: object,
) -> Path:
    """Write ``<content_dir>/<slug>/index.md`` and return its path."""
    article_dir = content_dir / slug
    article_dir.mkdir(parents=True, exist_ok=True)
    path = article_dir / "index.md"
    if raw is None:
        raw = render_article(article_frontmatter(**frontmatter), body)
    path.write_text(raw, encoding="utf-8")
    return path
