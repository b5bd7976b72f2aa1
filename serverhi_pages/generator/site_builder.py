"""Render the ServerHi static site from the content repository.

:class:`SiteBuilder` walks the published article collection and writes every
public page into an output directory: the home page, the paginated article
listing, one page per article, per category and per tag, plus ``rss.xml``,
``sitemap.xml`` and ``search-index.json``. Pages are rendered with Jinja2
templates from ``serverhi_pages/templates`` and article bodies go through
:class:`~serverhi_pages.generator.renderer.HtmlContentRenderer`.

Example
-------
>>> from pathlib import Path
>>> from serverhi_pages.config import load_site_config
>>> from serverhi_pages.content import ContentRepository
>>> from serverhi_pages.generator import SiteBuilder
>>> config = load_site_config(Path("config"))  # doctest: +SKIP
>>> repo = ContentRepository(Path("content/posts"), config)  # doctest: +SKIP
>>> SiteBuilder(config, repo, Path("dist")).run()  # doctest: +SKIP
[PosixPath('dist/index.html'), ...]
"""

from __future__ import annotations

import datetime as dt
import json
import logging
import shutil
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from serverhi_pages import formatting, routes
from serverhi_pages._constants import (
    ARTICLE_FILENAME,
    RSS_FILENAME,
    SEARCH_INDEX_FILENAME,
    SITEMAP_FILENAME,
)
from serverhi_pages.content import page_count

from .asset_links import AssetLinkExtension
from .feeds import absolute_url, rss_items, search_index_records, sitemap_entries
from .renderer import HtmlContentRenderer

if typ.TYPE_CHECKING:
    from serverhi_pages.config import SiteConfig
    from serverhi_pages.content import Article, ContentRepository

logger = logging.getLogger(__name__)

CODE_STYLESHEET = "styles/code.css"


class SiteBuilder:
    """Write the rendered site for a loaded repository into ``output_dir``."""

    def __init__(
        self,
        site_config: SiteConfig,
        repository: ContentRepository,
        output_dir: Path,
        *,
        templates_dir: Path | None = None,
        pygments_style: str = "github-dark",
    ) -> None:
        """Initialize the builder and its Jinja environment.

        Parameters
        ----------
        site_config : SiteConfig
            Loaded site configuration (metadata, categories, theme).
        repository : ContentRepository
            Repository supplying the article collection; loaded on first use.
        output_dir : Path
            Directory receiving the generated files. Existing files are
            overwritten; unrelated files are left alone.
        templates_dir : Path, optional
            Directory containing Jinja templates. Defaults to
            ``serverhi_pages/templates``.
        pygments_style : str, optional
            Pygments style used for code blocks.
        """
        self.site_config = site_config
        self.repository = repository
        self.output_dir = output_dir
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.renderer = HtmlContentRenderer(pygments_style)
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters.update(
            format_date=formatting.format_date,
            reading_time=formatting.reading_time,
            truncate_text=formatting.truncate,
            difficulty_label=formatting.difficulty_label,
            difficulty_color=formatting.difficulty_color,
            article_path=routes.article_path,
            category_path=routes.category_path,
            tag_path=routes.tag_path,
        )
        self.env.globals.update(
            site=site_config.site,
            categories=site_config.categories,
            theme=site_config.theme,
            category_color=site_config.category_color,
            category_icon=site_config.category_icon,
            code_stylesheet=f"/{CODE_STYLESHEET}",
        )
        self._written: list[Path] = []
        self._page_paths: list[str] = []
        self._lastmod_by_path: dict[str, dt.date] = {}

    def run(self) -> list[Path]:
        """Render every page and feed, returning the written file paths.

        Returns
        -------
        list[Path]
            Paths of all generated files, in the order they were written.
            Copied article assets are not included.
        """
        self._written = []
        self._page_paths = []
        self._lastmod_by_path = {}
        self.output_dir.mkdir(parents=True, exist_ok=True)
        articles = self.repository.load_all()
        generated_at = dt.datetime.now(dt.UTC)
        self.env.globals["generated_at"] = generated_at

        self._write_text(CODE_STYLESHEET, self.renderer.stylesheet)
        self._render_home(articles)
        self._render_listing(articles)
        for article in articles:
            self._render_article(article)
        for draft in self.repository.drafts:
            self._render_article(draft, preview=True)
        self._render_categories()
        self._render_tags()
        self._render_page("404.html", "not_found.jinja", {}, site_path="/404")
        self._write_feeds(articles, generated_at.date())
        logger.info("Wrote %d files to %s", len(self._written), self.output_dir)
        return list(self._written)

    def _render_home(self, articles: tuple[Article, ...]) -> None:
        page_size = self.site_config.site.posts_per_page
        context = {
            "featured": self.repository.get_featured(),
            "latest": articles[:page_size],
            "category_counts": self.repository.category_counts(),
        }
        self._render_page("index.html", "home.jinja", context, site_path="/")

    def _render_listing(self, articles: tuple[Article, ...]) -> None:
        """Write ``/posts/`` and ``/posts/page/<n>/`` for the full collection."""
        page_size = self.site_config.site.posts_per_page
        total_pages = page_count(len(articles), page_size)
        for number in range(1, total_pages + 1):
            site_path = routes.listing_path(number)
            context = {
                "articles": self.repository.paginate(articles, number, page_size),
                "pagination": {
                    "current": number,
                    "total": total_pages,
                    "previous": routes.listing_path(number - 1)
                    if number > 1
                    else None,
                    "next": routes.listing_path(number + 1)
                    if number < total_pages
                    else None,
                },
            }
            self._render_page(
                _index_file(site_path), "listing.jinja", context, site_path=site_path
            )

    def _render_article(self, article: Article, *, preview: bool = False) -> None:
        site_path = routes.article_path(article.slug)
        body_html = self.renderer.markdown(
            article.body, extensions=[AssetLinkExtension(site_path)]
        )
        context = {
            "article": article,
            "body_html": body_html,
            "category": self.site_config.get_category(article.category),
            "related": self.repository.get_related(article),
            "preview": preview,
        }
        self._render_page(
            _index_file(site_path),
            "article.jinja",
            context,
            site_path=None if preview else site_path,
        )
        if not preview:
            self._lastmod_by_path[site_path] = article.last_modified
        self._copy_assets(article.slug, site_path)

    def _render_categories(self) -> None:
        for category in self.site_config.categories:
            site_path = routes.category_path(category.slug)
            context = {
                "category": category,
                "articles": self.repository.get_by_category(category.slug),
            }
            self._render_page(
                _index_file(site_path), "category.jinja", context, site_path=site_path
            )

    def _render_tags(self) -> None:
        counts = self.repository.tag_counts()
        tags = [
            {"name": tag, "count": counts[tag]}
            for tag in self.repository.get_all_tags()
        ]
        self._render_page(
            "tags/index.html", "tags.jinja", {"tags": tags}, site_path=routes.TAGS_ROOT
        )
        for tag in self.repository.get_all_tags():
            site_path = routes.tag_path(tag)
            context = {"tag": tag, "articles": self.repository.get_by_tag(tag)}
            self._render_page(
                _index_file(site_path), "tag.jinja", context, site_path=site_path
            )

    def _write_feeds(self, articles: tuple[Article, ...], today: dt.date) -> None:
        site = self.site_config.site
        rss = self.env.get_template("rss.xml.jinja").render(
            items=rss_items(articles, site),
            feed_url=absolute_url(site, RSS_FILENAME),
        )
        self._write_text(RSS_FILENAME, rss)

        index = search_index_records(articles)
        self._write_text(
            SEARCH_INDEX_FILENAME, json.dumps(index, ensure_ascii=False, indent=2)
        )

        entries = sitemap_entries(
            self._page_paths,
            site,
            lastmod_by_path=self._lastmod_by_path,
            default_lastmod=today,
        )
        sitemap = self.env.get_template("sitemap.xml.jinja").render(entries=entries)
        self._write_text(SITEMAP_FILENAME, sitemap)

    def _render_page(
        self,
        relative_path: str,
        template_name: str,
        context: dict[str, typ.Any],
        *,
        site_path: str | None,
    ) -> None:
        """Render ``template_name`` to ``relative_path`` and track its route."""
        html = self.env.get_template(template_name).render(**context)
        self._write_text(relative_path, html)
        if site_path is not None:
            self._page_paths.append(site_path)

    def _write_text(self, relative_path: str, content: str) -> Path:
        output_path = self.output_dir / relative_path
        if not output_path.resolve().is_relative_to(self.output_dir.resolve()):
            msg = f"Refusing to write '{relative_path}' outside '{self.output_dir}'."
            raise ValueError(msg)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        if not content.endswith("\n"):
            content += "\n"
        output_path.write_text(content, encoding="utf-8")
        self._written.append(output_path)
        return output_path

    def _copy_assets(self, slug: str, site_path: str) -> None:
        """Copy files stored beside an article's ``index.md`` next to its page."""
        source_dir = self.repository.source_dir(slug)
        if source_dir is None:
            return
        target_dir = self.output_dir / site_path.strip("/")
        for asset in source_dir.rglob("*"):
            if not asset.is_file() or asset == source_dir / ARTICLE_FILENAME:
                continue
            destination = target_dir / asset.relative_to(source_dir)
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(asset, destination)


def _index_file(site_path: str) -> str:
    """Return the ``index.html`` file backing a directory-style route."""
    return f"{site_path.strip('/')}/index.html".lstrip("/")


__all__ = ["SiteBuilder"]
