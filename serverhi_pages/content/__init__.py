"""Article parsing, validation, and the in-memory content repository."""

from .frontmatter import parse_frontmatter, split_frontmatter
from .models import (
    Article,
    ArticleValidationError,
    ContentError,
    ContentStoreError,
    DuplicateSlugError,
    FieldError,
    FrontmatterError,
    LoadFailure,
    ValidationResult,
)
from .repository import ContentRepository, page_count, paginate
from .schema import validate_article

__all__ = [
    "Article",
    "ArticleValidationError",
    "ContentError",
    "ContentRepository",
    "ContentStoreError",
    "DuplicateSlugError",
    "FieldError",
    "FrontmatterError",
    "LoadFailure",
    "ValidationResult",
    "page_count",
    "paginate",
    "parse_frontmatter",
    "split_frontmatter",
    "validate_article",
]
