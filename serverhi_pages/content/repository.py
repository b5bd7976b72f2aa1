"""Load the article collection once and answer read queries against it.

:class:`ContentRepository` scans a content directory in which every
sub-directory holding an ``index.md`` is one article, validates each article
through :mod:`serverhi_pages.content.schema`, and caches an immutable,
date-ordered tuple of the published (non-draft) articles. A broken article is
logged and excluded without affecting its siblings; structural problems
(duplicate slugs, categories missing from the configuration) abort the load.

Typical usage:

>>> from pathlib import Path
>>> from serverhi_pages.config import load_site_config
>>> from serverhi_pages.content import ContentRepository
>>> config = load_site_config(Path("config"))  # doctest: +SKIP
>>> repo = ContentRepository(Path("content/posts"), config)  # doctest: +SKIP
>>> [article.slug for article in repo.get_by_category("docker")]  # doctest: +SKIP
['docker-compose-basics', 'install-docker-ubuntu']
"""

from __future__ import annotations

import collections
import logging
import math
import typing as typ
from pathlib import Path

from serverhi_pages._constants import ARTICLE_FILENAME
from serverhi_pages.config import ConfigError
from serverhi_pages.formatting import slugify

from .frontmatter import parse_frontmatter
from .models import (
    Article,
    ContentStoreError,
    DuplicateSlugError,
    FieldError,
    FrontmatterError,
    LoadFailure,
)
from .schema import validate_article

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from serverhi_pages.config import SiteConfig

logger = logging.getLogger(__name__)

T = typ.TypeVar("T")


def paginate(items: cabc.Sequence[T], page: int, page_size: int) -> tuple[T, ...]:
    """Return the 1-indexed ``page`` of ``items``.

    Pages past the end yield an empty tuple rather than an error, so
    concatenating pages ``1..n`` always reconstructs ``items``.

    Raises
    ------
    ValueError
        If ``page`` or ``page_size`` is smaller than 1.
    """
    if page < 1:
        msg = f"Page number must be at least 1, got {page}."
        raise ValueError(msg)
    if page_size < 1:
        msg = f"Page size must be at least 1, got {page_size}."
        raise ValueError(msg)
    start = (page - 1) * page_size
    return tuple(items[start : start + page_size])


def page_count(total: int, page_size: int) -> int:
    """Return the number of pages needed for ``total`` items (at least 1)."""
    if page_size < 1:
        msg = f"Page size must be at least 1, got {page_size}."
        raise ValueError(msg)
    return max(1, math.ceil(total / page_size))


def _publication_order(articles: cabc.Iterable[Article]) -> tuple[Article, ...]:
    """Sort newest first, breaking publish-date ties by ascending slug."""
    by_slug = sorted(articles, key=lambda article: article.slug)
    return tuple(
        sorted(by_slug, key=lambda article: article.publish_date, reverse=True)
    )


class ContentRepository:
    """Materialize the article collection and serve queries from the cache."""

    def __init__(
        self,
        content_dir: Path,
        site_config: SiteConfig,
        *,
        include_drafts: bool = False,
    ) -> None:
        """Initialize the repository without touching the filesystem.

        Parameters
        ----------
        content_dir : Path
            Directory whose sub-directories each hold one article's
            ``index.md`` plus any assets it references.
        site_config : SiteConfig
            Loaded configuration; supplies the allowed categories and the
            default related/featured counts.
        include_drafts : bool, optional
            Enable preview behaviour: drafts become reachable through
            :meth:`get_by_slug` (never through listings). Leave ``False`` for
            production builds.
        """
        self.content_dir = content_dir
        self.site_config = site_config
        self.include_drafts = include_drafts
        self._articles: tuple[Article, ...] | None = None
        self._drafts: tuple[Article, ...] = ()
        self._by_slug: dict[str, Article] = {}
        self._draft_by_slug: dict[str, Article] = {}
        self._failures: tuple[LoadFailure, ...] = ()
        self._sources: dict[str, Path] = {}

    @property
    def loaded(self) -> bool:
        """Return ``True`` once the collection has been materialized."""
        return self._articles is not None

    def initialize(self) -> None:
        """Load the collection unless it has already been loaded."""
        if self._articles is None:
            self._load()

    def reload(self) -> None:
        """Discard the cached collection and load it again from disk."""
        self._articles = None
        self._load()

    def load_all(self) -> tuple[Article, ...]:
        """Return every published article, newest first.

        The first call scans and validates the content directory; later calls
        return the same cached tuple.
        """
        self.initialize()
        return typ.cast("tuple[Article, ...]", self._articles)

    @property
    def drafts(self) -> tuple[Article, ...]:
        """Return draft articles for preview builds (empty in production)."""
        self.initialize()
        return self._drafts if self.include_drafts else ()

    @property
    def failures(self) -> tuple[LoadFailure, ...]:
        """Return the articles excluded during the last load."""
        self.initialize()
        return self._failures

    def source_dir(self, slug: str) -> Path | None:
        """Return the directory an article was loaded from, if known."""
        self.initialize()
        return self._sources.get(slug)

    def get_by_slug(self, slug: str) -> Article | None:
        """Return the article with ``slug`` or ``None`` when there is none.

        Drafts are only returned when the repository was created with
        ``include_drafts=True``.
        """
        self.initialize()
        article = self._by_slug.get(slug)
        if article is None and self.include_drafts:
            article = self._draft_by_slug.get(slug)
        return article

    def get_by_category(self, category: str) -> tuple[Article, ...]:
        """Return published articles in ``category``, newest first."""
        return tuple(
            article for article in self.load_all() if article.category == category
        )

    def get_by_tag(self, tag: str) -> tuple[Article, ...]:
        """Return published articles carrying ``tag`` exactly, newest first.

        ``tag`` must already be decoded; see
        :func:`serverhi_pages.routes.tag_from_segment`.
        """
        return tuple(article for article in self.load_all() if tag in article.tags)

    def get_featured(self, limit: int | None = None) -> tuple[Article, ...]:
        """Return up to ``limit`` featured articles, newest first."""
        if limit is None:
            limit = self.site_config.site.featured_posts_count
        featured = [article for article in self.load_all() if article.featured]
        return tuple(featured[: max(limit, 0)])

    def get_related(
        self, article: Article, count: int | None = None
    ) -> tuple[Article, ...]:
        """Return up to ``count`` other articles ranked by shared tags.

        Articles sharing more tags with ``article`` rank first; ties keep the
        collection order (newest first, then slug). When fewer than ``count``
        articles share a tag, the remainder is filled with the most recent
        articles that share none. ``article`` itself is never included.
        """
        if count is None:
            count = self.site_config.site.related_posts_count
        if count <= 0:
            return ()
        wanted = set(article.tags)
        candidates = [
            (position, other)
            for position, other in enumerate(self.load_all())
            if other.slug != article.slug
        ]
        ranked = sorted(
            candidates,
            key=lambda entry: (-len(wanted.intersection(entry[1].tags)), entry[0]),
        )
        return tuple(other for _, other in ranked[:count])

    def get_all_tags(self) -> tuple[str, ...]:
        """Return every tag used by a published article, sorted."""
        return tuple(sorted(self.tag_counts()))

    def tag_counts(self) -> dict[str, int]:
        """Return the number of published articles per tag."""
        counts: collections.Counter[str] = collections.Counter()
        for article in self.load_all():
            counts.update(set(article.tags))
        return dict(counts)

    def category_counts(self) -> dict[str, int]:
        """Return the number of published articles per configured category."""
        counts = {category.slug: 0 for category in self.site_config.categories}
        for article in self.load_all():
            counts[article.category] = counts.get(article.category, 0) + 1
        return counts

    def paginate(
        self, items: cabc.Sequence[Article], page: int, page_size: int | None = None
    ) -> tuple[Article, ...]:
        """Return one page of ``items`` using the configured page size by default."""
        if page_size is None:
            page_size = self.site_config.site.posts_per_page
        return paginate(items, page, page_size)

    def _load(self) -> None:
        """Scan the content directory and rebuild every cache."""
        if not self.content_dir.is_dir():
            msg = f"Content directory '{self.content_dir}' not found."
            raise ContentStoreError(msg)

        published: list[Article] = []
        drafts: list[Article] = []
        failures: list[LoadFailure] = []
        sources: dict[str, Path] = {}
        scanned = 0

        for entry in sorted(self.content_dir.iterdir()):
            article_path = entry / ARTICLE_FILENAME
            if not entry.is_dir() or not article_path.is_file():
                logger.debug("Skipping %s: no %s", entry, ARTICLE_FILENAME)
                continue
            scanned += 1
            slug = slugify(entry.name)
            if slug in sources:
                msg = (
                    f"Articles '{sources[slug]}' and '{entry}' both resolve to "
                    f"slug '{slug}'."
                )
                raise DuplicateSlugError(msg)
            sources[slug] = entry

            article, errors = self._load_article(slug, entry, article_path)
            if article is None:
                logger.warning(
                    "Skipping article %s (%s): %s",
                    slug,
                    article_path,
                    "; ".join(errors),
                )
                failures.append(
                    LoadFailure(path=article_path, slug=slug, errors=tuple(errors))
                )
                continue
            self._check_category(article, article_path)
            (drafts if article.draft else published).append(article)

        self._articles = _publication_order(published)
        self._drafts = _publication_order(drafts)
        self._by_slug = {article.slug: article for article in self._articles}
        self._draft_by_slug = {article.slug: article for article in self._drafts}
        self._failures = tuple(failures)
        self._sources = sources
        logger.info(
            "Loaded %d articles from %s (%d drafts, %d skipped, %d scanned)",
            len(self._articles),
            self.content_dir,
            len(self._drafts),
            len(self._failures),
            scanned,
        )

    @staticmethod
    def _load_article(
        slug: str, directory: Path, article_path: Path
    ) -> tuple[Article | None, list[str]]:
        """Parse and validate one article, returning it or its error messages."""
        try:
            data, body = parse_frontmatter(article_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, FrontmatterError) as exc:
            return None, [str(exc)]

        result = validate_article(slug, data, body)
        if not result.ok:
            return None, [str(error) for error in result.errors]
        article = result.unwrap()
        if article.cover_image and not (directory / article.cover_image).is_file():
            error = FieldError(
                "coverImage", f"asset '{article.cover_image}' does not exist"
            )
            return None, [str(error)]
        return article, []

    def _check_category(self, article: Article, article_path: Path) -> None:
        """Raise ConfigError when ``article`` uses an unconfigured category."""
        if article.category not in self.site_config.category_slugs:
            msg = (
                f"Category '{article.category}' used by '{article_path}' is not "
                "defined in categories.json."
            )
            raise ConfigError(msg)


__all__ = ["ContentRepository", "page_count", "paginate"]
