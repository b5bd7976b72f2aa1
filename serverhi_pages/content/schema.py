"""Validate article frontmatter against the ServerHi article schema.

The schema is a set of small field validators, each turning one raw
frontmatter value into a typed value or a :class:`FieldError`.
:func:`validate_article` runs every validator, collects all errors, and
returns a :class:`ValidationResult` holding either an :class:`Article` or the
complete list of problems. Validation is pure: it performs no I/O and does not
log.

Example
-------
>>> import datetime as dt
>>> from serverhi_pages.content.schema import validate_article
>>> result = validate_article(
...     "hello",
...     {
...         "title": " Hello ",
...         "description": "Intro",
...         "pubDate": dt.date(2026, 2, 5),
...         "category": "linux",
...         "tags": ["shell"],
...     },
...     "Body",
... )
>>> result.ok, result.unwrap().title
(True, 'Hello')
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import re
import typing as typ

from serverhi_pages._constants import (
    ARTICLE_CATEGORIES,
    DEFAULT_AUTHOR,
    DIFFICULTY_LEVELS,
)

from .models import Article, FieldError, ValidationResult

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

_MISSING = object()


class _FieldInvalid(Exception):
    """Internal signal carrying a field-level error message."""


@dc.dataclass(frozen=True, slots=True)
class FieldSpec:
    """Bind a frontmatter key to the validator that coerces its value."""

    key: str
    attribute: str
    validator: typ.Callable[[object], object]
    required: bool = False
    default: object = None


def _string(value: object) -> str:
    if not isinstance(value, str):
        msg = "must be a string"
        raise _FieldInvalid(msg)
    text = value.strip()
    if not text:
        msg = "must not be empty"
        raise _FieldInvalid(msg)
    return text


def _boolean(value: object) -> bool:
    if not isinstance(value, bool):
        msg = "must be true or false"
        raise _FieldInvalid(msg)
    return value


def _iso_date(value: object) -> dt.date:
    """Accept a YAML date scalar or a ``YYYY-MM-DD`` string, nothing else."""
    if isinstance(value, dt.datetime):
        msg = "must be a date without a time component (YYYY-MM-DD)"
        raise _FieldInvalid(msg)
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str) and ISO_DATE_PATTERN.match(value.strip()):
        try:
            return dt.date.fromisoformat(value.strip())
        except ValueError as exc:
            msg = f"is not a valid calendar date ({exc})"
            raise _FieldInvalid(msg) from exc
    msg = "must be an ISO 8601 date (YYYY-MM-DD)"
    raise _FieldInvalid(msg)


def _string_list(value: object) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        msg = "must be a list of strings"
        raise _FieldInvalid(msg)
    items: list[str] = []
    for index, item in enumerate(value):
        if not isinstance(item, str) or not item.strip():
            msg = f"item {index} must be a non-empty string"
            raise _FieldInvalid(msg)
        items.append(item.strip())
    return tuple(items)


def _one_of(choices: tuple[str, ...]) -> typ.Callable[[object], str]:
    def _validate(value: object) -> str:
        text = _string(value)
        if text not in choices:
            allowed = ", ".join(choices)
            msg = f"must be one of: {allowed} (got {text!r})"
            raise _FieldInvalid(msg)
        return text

    return _validate


ARTICLE_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("title", "title", _string, required=True),
    FieldSpec("description", "description", _string, required=True),
    FieldSpec("pubDate", "publish_date", _iso_date, required=True),
    FieldSpec("updatedDate", "updated_date", _iso_date),
    FieldSpec("category", "category", _one_of(ARTICLE_CATEGORIES), required=True),
    FieldSpec("tags", "tags", _string_list, required=True),
    FieldSpec("author", "author", _string, default=DEFAULT_AUTHOR),
    FieldSpec("featured", "featured", _boolean, default=False),
    FieldSpec("draft", "draft", _boolean, default=False),
    FieldSpec("difficulty", "difficulty", _one_of(DIFFICULTY_LEVELS)),
    FieldSpec("estimatedTime", "estimated_time", _string),
    FieldSpec("prerequisites", "prerequisites", _string_list),
    FieldSpec("osCompatibility", "os_compatibility", _string_list),
    FieldSpec("coverImage", "cover_image", _string),
    FieldSpec("coverImageAlt", "cover_image_alt", _string),
)


def validate_article(
    slug: str, data: typ.Mapping[str, typ.Any], body: str
) -> ValidationResult:
    """Validate a frontmatter mapping and body into an :class:`Article`.

    Parameters
    ----------
    slug : str
        Identifier derived from the article's storage location.
    data : Mapping[str, Any]
        Untyped frontmatter mapping produced by
        :func:`~serverhi_pages.content.frontmatter.parse_frontmatter`.
    body : str
        Raw Markdown body.

    Returns
    -------
    ValidationResult
        ``ok`` with the article when every field is valid, otherwise the full
        tuple of :class:`FieldError` entries. Keys outside the schema are
        ignored.
    """
    values: dict[str, object] = {}
    errors: list[FieldError] = []
    for field in ARTICLE_FIELDS:
        raw = data.get(field.key, _MISSING)
        if raw is _MISSING or raw is None:
            if field.required:
                errors.append(FieldError(field.key, "is required"))
            else:
                values[field.attribute] = field.default
            continue
        try:
            values[field.attribute] = field.validator(raw)
        except _FieldInvalid as exc:
            errors.append(FieldError(field.key, str(exc)))

    errors.extend(_cross_field_errors(values))
    if errors:
        return ValidationResult(slug=slug, errors=tuple(errors))
    article = Article(slug=slug, body=body, **values)  # type: ignore[arg-type]
    return ValidationResult(slug=slug, article=article)


def _cross_field_errors(values: typ.Mapping[str, object]) -> list[FieldError]:
    """Return errors for rules that relate more than one field."""
    errors: list[FieldError] = []
    published = values.get("publish_date")
    updated = values.get("updated_date")
    if (
        isinstance(published, dt.date)
        and isinstance(updated, dt.date)
        and updated < published
    ):
        errors.append(
            FieldError("updatedDate", "must not be earlier than pubDate")
        )
    if values.get("cover_image") and not values.get("cover_image_alt"):
        errors.append(
            FieldError("coverImageAlt", "is required when coverImage is set")
        )
    return errors


__all__ = ["ARTICLE_FIELDS", "FieldSpec", "validate_article"]
