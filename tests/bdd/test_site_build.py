"""Behaviour tests for draft handling during site builds.

The scenarios live in ``features/site_build.feature``. Each one writes a
small article store, runs :class:`~serverhi_pages.generator.SiteBuilder`
into a temporary output directory, and inspects the rendered HTML and
``sitemap.xml`` with BeautifulSoup.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, scenarios, then, when

from serverhi_pages.config import load_site_config
from serverhi_pages.content import ContentRepository
from serverhi_pages.generator import SiteBuilder

from tests.helpers import write_article, write_config_dir

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "site_build.feature"
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given("a content store with a published tutorial and a draft")
def given_store(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    content_dir = tmp_path / "content" / "posts"
    write_article(content_dir, "install-docker", title="Install Docker")
    write_article(content_dir, "half-written", title="Half Written", draft=True)
    scenario_state["config_dir"] = write_config_dir(tmp_path)
    scenario_state["content_dir"] = content_dir
    scenario_state["output_dir"] = tmp_path / "dist"


def _build(scenario_state: dict[str, object], *, include_drafts: bool) -> None:
    site_config = load_site_config(scenario_state["config_dir"])  # type: ignore[arg-type]
    repository = ContentRepository(
        scenario_state["content_dir"],  # type: ignore[arg-type]
        site_config,
        include_drafts=include_drafts,
    )
    SiteBuilder(site_config, repository, scenario_state["output_dir"]).run()  # type: ignore[arg-type]


@when("I build the site")
def when_build(scenario_state: dict[str, object]) -> None:
    _build(scenario_state, include_drafts=False)


@when("I build the site including drafts")
def when_build_preview(scenario_state: dict[str, object]) -> None:
    _build(scenario_state, include_drafts=True)


@then("the published tutorial page exists")
def then_published_exists(scenario_state: dict[str, object]) -> None:
    output_dir: Path = scenario_state["output_dir"]  # type: ignore[assignment]
    page = output_dir / "posts" / "install-docker" / "index.html"
    assert page.exists(), f"expected {page} to be rendered"


@then("no page is written for the draft")
def then_no_draft_page(scenario_state: dict[str, object]) -> None:
    output_dir: Path = scenario_state["output_dir"]  # type: ignore[assignment]
    assert not (output_dir / "posts" / "half-written").exists(), (
        "expected drafts to be skipped in production builds"
    )
    listing = (output_dir / "posts" / "index.html").read_text(encoding="utf-8")
    assert "Half Written" not in listing


@then("the draft page carries a draft banner and a noindex marker")
def then_draft_preview(scenario_state: dict[str, object]) -> None:
    output_dir: Path = scenario_state["output_dir"]  # type: ignore[assignment]
    page = output_dir / "posts" / "half-written" / "index.html"
    soup = BeautifulSoup(page.read_text(encoding="utf-8"), "html.parser")
    assert soup.select_one(".post__draft-banner") is not None, (
        "expected a draft banner on the preview page"
    )
    robots = soup.select_one("meta[name='robots']")
    assert robots is not None and robots.get("content") == "noindex", (
        f"expected a noindex robots tag, got {robots!r}"
    )


@then("the sitemap lists the published tutorial only")
def then_sitemap_published_only(scenario_state: dict[str, object]) -> None:
    output_dir: Path = scenario_state["output_dir"]  # type: ignore[assignment]
    soup = BeautifulSoup(
        (output_dir / "sitemap.xml").read_text(encoding="utf-8"), "html.parser"
    )
    article_locs = [
        loc.get_text(strip=True)
        for loc in soup.find_all("loc")
        if "/posts/" in loc.get_text() and "/page/" not in loc.get_text()
    ]
    assert article_locs == [
        "https://serverhi.example/posts/",
        "https://serverhi.example/posts/install-docker/",
    ], f"unexpected sitemap article entries {article_locs!r}"
