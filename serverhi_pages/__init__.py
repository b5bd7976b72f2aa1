"""Build the ServerHi tutorial site from Markdown articles.

This package exposes the CLI entry points used by ``serverhi build`` and
``serverhi check`` to validate article frontmatter, materialise the article
collection, and render the static site.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from serverhi_pages import main
>>> main()  # doctest: +SKIP
>>> from serverhi_pages import app
>>> app.name  # doctest: +SKIP
('serverhi',)
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
