"""Markdown extension that points relative asset links at article routes.

Articles keep their images next to ``index.md`` and reference them with
relative paths (``./diagram.png``). The site builder copies those files into
the article's output directory, so this extension rewrites each relative
``img src`` and ``a href`` to an absolute site path under the article route.
"""

from __future__ import annotations

import posixpath
import typing as typ
from urllib.parse import urlsplit

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

_LINK_ATTRIBUTES = {"a": "href", "img": "src"}
_EXTERNAL_PREFIXES = ("http://", "https://", "mailto:", "tel:", "data:", "javascript:")


class AssetLinkExtension(Extension):
    """Rewrite relative article links to absolute paths under ``base_path``."""

    def __init__(self, base_path: str) -> None:
        self.base_path = base_path if base_path.endswith("/") else f"{base_path}/"
        super().__init__()

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the asset-link treeprocessor on the Markdown instance."""
        processor = AssetLinkTreeprocessor(md, self.base_path)
        md.treeprocessors.register(processor, "serverhi_asset_links", 15)


class AssetLinkTreeprocessor(Treeprocessor):
    """Rewrite relative ``href``/``src`` attributes in the parsed tree."""

    def __init__(self, md: Markdown, base_path: str) -> None:
        super().__init__(md)
        self.base_path = base_path

    def run(self, root: Element) -> Element:
        """Rewrite relative links in place and return the tree."""
        for element in root.iter():
            attribute = _LINK_ATTRIBUTES.get(element.tag)
            if attribute is None:
                continue
            rewritten = rewrite_asset_link(element.get(attribute), self.base_path)
            if rewritten:
                element.set(attribute, rewritten)
        return root


def rewrite_asset_link(target: str | None, base_path: str) -> str | None:
    """Return ``target`` resolved against ``base_path``, or None to leave it.

    Absolute URLs, root-relative paths, fragments, and paths escaping the
    article directory are left untouched.
    """
    if not target:
        return None
    if target.lower().startswith(_EXTERNAL_PREFIXES):
        return None
    if target.startswith(("#", "/")) or "://" in target:
        return None

    parsed = urlsplit(target)
    if parsed.scheme or parsed.netloc or not parsed.path:
        return None
    joined = posixpath.normpath(parsed.path)
    if joined in (".", "") or joined.startswith(".."):
        return None

    url = f"{base_path}{joined}"
    if parsed.query:
        url = f"{url}?{parsed.query}"
    if parsed.fragment:
        url = f"{url}#{parsed.fragment}"
    return url


__all__ = ["AssetLinkExtension", "AssetLinkTreeprocessor", "rewrite_asset_link"]
