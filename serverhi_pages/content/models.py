"""Records and errors shared by the content validator and repository."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt  # noqa: TC003 - used for runtime type metadata
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path


class ContentError(ValueError):
    """Base class for errors raised while loading article content."""


class ContentStoreError(ContentError):
    """Raised when the content directory itself cannot be read."""


class FrontmatterError(ContentError):
    """Raised when an article's frontmatter block is missing or malformed."""


class DuplicateSlugError(ContentError):
    """Raised when two article directories resolve to the same slug."""


class ArticleValidationError(ContentError):
    """Raised when frontmatter does not satisfy the article schema."""

    def __init__(self, slug: str, errors: typ.Sequence[FieldError]) -> None:
        self.slug = slug
        self.errors = tuple(errors)
        details = "; ".join(str(error) for error in self.errors)
        super().__init__(f"Article '{slug}' is invalid: {details}")


@dc.dataclass(frozen=True, slots=True)
class FieldError:
    """A single schema violation for one frontmatter field."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


@dc.dataclass(frozen=True, slots=True)
class Article:
    """A validated tutorial article.

    Attributes
    ----------
    slug : str
        URL-safe identifier derived from the article directory name.
    title, description : str
        Non-empty display strings.
    publish_date : datetime.date
        Date the article was published (``pubDate`` in frontmatter).
    updated_date : datetime.date or None
        Optional revision date; never earlier than ``publish_date``.
    category : str
        One of the schema's category slugs.
    tags : tuple[str, ...]
        Tags in display order.
    body : str
        Raw Markdown body following the frontmatter block.
    """

    slug: str
    title: str
    description: str
    publish_date: dt.date
    category: str
    tags: tuple[str, ...]
    body: str
    author: str
    featured: bool = False
    draft: bool = False
    updated_date: dt.date | None = None
    difficulty: str | None = None
    estimated_time: str | None = None
    prerequisites: tuple[str, ...] | None = None
    os_compatibility: tuple[str, ...] | None = None
    cover_image: str | None = None
    cover_image_alt: str | None = None

    @property
    def last_modified(self) -> dt.date:
        """Return the most recent of the publish and updated dates."""
        return self.updated_date or self.publish_date


@dc.dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of validating one article: a record or a list of field errors."""

    slug: str
    article: Article | None = None
    errors: tuple[FieldError, ...] = ()

    @property
    def ok(self) -> bool:
        """Return ``True`` when validation produced an article."""
        return self.article is not None and not self.errors

    def unwrap(self) -> Article:
        """Return the validated article or raise :class:`ArticleValidationError`."""
        if self.article is None or self.errors:
            raise ArticleValidationError(self.slug, self.errors)
        return self.article


@dc.dataclass(frozen=True, slots=True)
class LoadFailure:
    """An article that was excluded from the collection during loading."""

    path: Path
    slug: str
    errors: tuple[str, ...]


__all__ = [
    "Article",
    "ArticleValidationError",
    "ContentError",
    "ContentStoreError",
    "DuplicateSlugError",
    "FieldError",
    "FrontmatterError",
    "LoadFailure",
    "ValidationResult",
]
