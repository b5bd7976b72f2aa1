"""Cyclopts CLI entrypoint for building the ServerHi static site.

The ``serverhi`` console script defined here loads the JSON site
configuration and the Markdown article store, then either renders the full
site (``serverhi build``) or only validates the content and reports broken
articles (``serverhi check``). Every option can also be supplied through a
``SERVERHI_``-prefixed environment variable, which is how CI passes paths.

Examples
--------
Build the production site into ``dist``:

>>> from serverhi_pages.cli import main
>>> main()  # doctest: +SKIP

Build a preview that includes drafts:

>>> from serverhi_pages.cli import app
>>> app(["build", "--include-drafts", "--output-dir", "preview"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import ConfigError, load_site_config
from .content import ContentError, ContentRepository
from .generator import SiteBuilder

DEFAULT_CONFIG_DIR = Path("config")
DEFAULT_CONTENT_DIR = Path("content/posts")
DEFAULT_OUTPUT_DIR = Path("dist")

app = App(name="serverhi", config=cyclopts.config.Env("SERVERHI_", command=False))  # type: ignore[unknown-argument]

logger = logging.getLogger(__name__)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(verbose: bool) -> None:
    """Send log records to stderr at INFO, or DEBUG when ``verbose``."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def _load_repository(
    config_dir: Path, content_dir: Path, *, include_drafts: bool
) -> ContentRepository:
    """Load configuration and content, exiting with a message on fatal errors."""
    try:
        site_config = load_site_config(config_dir)
        repository = ContentRepository(
            content_dir, site_config, include_drafts=include_drafts
        )
        repository.initialize()
    except (ConfigError, ContentError) as exc:
        logger.debug("Aborting build", exc_info=exc)
        msg = f"error: {exc}"
        raise SystemExit(msg) from exc
    return repository


def _report_failures(repository: ContentRepository) -> None:
    for failure in repository.failures:
        print(f"skipped {_format_path(failure.path)}")
        for error in failure.errors:
            print(f"  - {error}")


@app.command(help="Render the static site from the configured content.")
def build(
    *,
    config_dir: typ.Annotated[
        Path, Parameter(help="Directory holding site.json and categories.json")
    ] = DEFAULT_CONFIG_DIR,
    content_dir: typ.Annotated[
        Path, Parameter(help="Directory with one sub-directory per article")
    ] = DEFAULT_CONTENT_DIR,
    output_dir: typ.Annotated[
        Path, Parameter(help="Directory receiving the rendered site")
    ] = DEFAULT_OUTPUT_DIR,
    include_drafts: typ.Annotated[
        bool, Parameter(help="Render draft articles for preview builds")
    ] = False,
    verbose: typ.Annotated[bool, Parameter(help="Enable debug logging")] = False,
) -> None:
    """Build the site and print each written file.

    Parameters
    ----------
    config_dir : Path, optional
        Configuration directory (``SERVERHI_CONFIG_DIR``).
    content_dir : Path, optional
        Article store (``SERVERHI_CONTENT_DIR``).
    output_dir : Path, optional
        Output directory (``SERVERHI_OUTPUT_DIR``).
    include_drafts : bool, optional
        Render drafts at their article URLs without listing them anywhere.
    verbose : bool, optional
        Log at DEBUG instead of INFO.

    Raises
    ------
    SystemExit
        When the configuration is invalid, the content directory is missing,
        or two articles share a slug. Individual invalid articles are skipped
        and reported instead.
    """
    _configure_logging(verbose)
    repository = _load_repository(
        config_dir, content_dir, include_drafts=include_drafts
    )
    written = SiteBuilder(repository.site_config, repository, output_dir).run()
    for path in written:
        print(f"wrote {_format_path(path)}")
    _report_failures(repository)
    print(
        f"built {len(repository.load_all())} articles, "
        f"skipped {len(repository.failures)}"
    )


@app.command(help="Validate configuration and articles without rendering.")
def check(
    *,
    config_dir: typ.Annotated[
        Path, Parameter(help="Directory holding site.json and categories.json")
    ] = DEFAULT_CONFIG_DIR,
    content_dir: typ.Annotated[
        Path, Parameter(help="Directory with one sub-directory per article")
    ] = DEFAULT_CONTENT_DIR,
    verbose: typ.Annotated[bool, Parameter(help="Enable debug logging")] = False,
) -> None:
    """Validate every article, exiting with status 1 when any fails."""
    _configure_logging(verbose)
    repository = _load_repository(config_dir, content_dir, include_drafts=True)
    _report_failures(repository)
    print(
        f"{len(repository.load_all())} published, {len(repository.drafts)} drafts, "
        f"{len(repository.failures)} invalid"
    )
    if repository.failures:
        raise SystemExit(1)


def main() -> None:
    """Invoke the Cyclopts application that powers the ``serverhi`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
