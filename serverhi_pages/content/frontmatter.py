r"""Split Markdown articles into a frontmatter mapping and a body.

Parsing is kept separate from schema validation so malformed YAML and
schema violations surface as different failure kinds: this module raises
:class:`~serverhi_pages.content.models.FrontmatterError`, whereas
:mod:`serverhi_pages.content.schema` reports field errors.

Example
-------
>>> from serverhi_pages.content.frontmatter import parse_frontmatter
>>> data, body = parse_frontmatter("---\ntitle: Hello\n---\nBody\n")
>>> data["title"], body
('Hello', 'Body\n')
"""

from __future__ import annotations

import re
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .models import FrontmatterError

DELIMITER_PATTERN = re.compile(r"^---[ \t]*\r?$", re.MULTILINE)


def split_frontmatter(text: str) -> tuple[str, str]:
    """Return the raw frontmatter block and the Markdown body.

    Parameters
    ----------
    text : str
        Full file contents. The first line must be a ``---`` delimiter and the
        block ends at the next ``---`` line.

    Raises
    ------
    FrontmatterError
        If the opening or closing delimiter is missing.
    """
    source = text.removeprefix("\ufeff")
    opening = DELIMITER_PATTERN.match(source)
    if opening is None:
        msg = "File does not start with a '---' frontmatter delimiter."
        raise FrontmatterError(msg)
    closing = DELIMITER_PATTERN.search(source, opening.end())
    if closing is None:
        msg = "Frontmatter block is not closed with a '---' delimiter."
        raise FrontmatterError(msg)
    block = source[opening.end() : closing.start()]
    body = source[closing.end() :].removeprefix("\r").removeprefix("\n")
    return block, body


def parse_frontmatter(text: str) -> tuple[dict[str, typ.Any], str]:
    """Parse the YAML frontmatter of ``text`` into an untyped mapping.

    Returns
    -------
    tuple[dict[str, Any], str]
        The frontmatter mapping (empty when the block is blank) and the body.

    Raises
    ------
    FrontmatterError
        If delimiters are missing, the YAML is malformed (including bare
        dates that are not real calendar days), or the block is not a mapping.
    """
    block, body = split_frontmatter(text)
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        loaded = loader.load(block)
    except (YAMLError, ValueError) as exc:
        msg = f"Frontmatter is not valid YAML: {exc}"
        raise FrontmatterError(msg) from exc
    if loaded is None:
        return {}, body
    if not isinstance(loaded, dict):
        msg = "Frontmatter must be a mapping of keys to values."
        raise FrontmatterError(msg)
    return {str(key): value for key, value in loaded.items()}, body


__all__ = ["DELIMITER_PATTERN", "parse_frontmatter", "split_frontmatter"]
