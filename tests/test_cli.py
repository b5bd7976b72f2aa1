"""Tests for the ``serverhi build`` and ``serverhi check`` commands."""

from __future__ import annotations

import typing as typ

import pytest

from serverhi_pages import cli

if typ.TYPE_CHECKING:
    from pathlib import Path

    from pytest_mock import MockerFixture

    from tests.conftest import WriteArticle


@pytest.fixture
def store(write_article: WriteArticle) -> None:
    write_article("install-docker", pubDate="2026-02-05")
    write_article("compose-basics", pubDate="2026-02-07")
    write_article("unfinished", draft=True)
    write_article("no-title", title=None)


def test_build_writes_site_and_reports_skipped_articles(
    store: None,
    config_dir: Path,
    content_dir: Path,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    output_dir = tmp_path / "dist"
    cli.build(config_dir=config_dir, content_dir=content_dir, output_dir=output_dir)

    out = capsys.readouterr().out
    assert f"wrote {output_dir / 'index.html'}" in out
    assert (output_dir / "posts" / "compose-basics" / "index.html").exists()
    assert not (output_dir / "posts" / "unfinished").exists()
    assert f"skipped {content_dir / 'no-title' / 'index.md'}" in out
    assert "  - title: is required" in out
    assert out.rstrip().endswith("built 2 articles, skipped 1"), (
        f"unexpected summary line in {out!r}"
    )


def test_build_with_drafts_renders_preview_pages(
    store: None, config_dir: Path, content_dir: Path, tmp_path: Path
) -> None:
    output_dir = tmp_path / "preview"
    cli.build(
        config_dir=config_dir,
        content_dir=content_dir,
        output_dir=output_dir,
        include_drafts=True,
    )
    assert (output_dir / "posts" / "unfinished" / "index.html").exists()


def test_check_counts_articles_and_fails_on_invalid_ones(
    store: None,
    config_dir: Path,
    content_dir: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    with pytest.raises(SystemExit) as info:
        cli.check(config_dir=config_dir, content_dir=content_dir)

    assert info.value.code == 1
    out = capsys.readouterr().out
    assert "2 published, 1 drafts, 1 invalid" in out, f"unexpected output {out!r}"


def test_check_passes_for_clean_content(
    write_article: WriteArticle,
    config_dir: Path,
    content_dir: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    write_article("install-docker")
    cli.check(config_dir=config_dir, content_dir=content_dir)
    assert "1 published, 0 drafts, 0 invalid" in capsys.readouterr().out


def test_fatal_errors_exit_with_message(
    write_article: WriteArticle, config_dir: Path, content_dir: Path
) -> None:
    write_article("install-docker")
    write_article("Install Docker")

    with pytest.raises(SystemExit) as info:
        cli.check(config_dir=config_dir, content_dir=content_dir)

    assert isinstance(info.value.code, str)
    assert info.value.code.startswith("error: "), f"unexpected {info.value.code!r}"
    assert "install-docker" in info.value.code


def test_missing_config_dir_exits(content_dir: Path, tmp_path: Path) -> None:
    with pytest.raises(SystemExit, match="error: "):
        cli.check(config_dir=tmp_path / "nowhere", content_dir=content_dir)


def test_build_passes_repository_to_site_builder(
    store: None,
    config_dir: Path,
    content_dir: Path,
    tmp_path: Path,
    mocker: MockerFixture,
    capsys: pytest.CaptureFixture[str],
) -> None:
    builder_cls = mocker.patch("serverhi_pages.cli.SiteBuilder")
    builder_cls.return_value.run.return_value = []

    cli.build(
        config_dir=config_dir, content_dir=content_dir, output_dir=tmp_path / "dist"
    )

    site_config, repository, output_dir = builder_cls.call_args.args
    assert output_dir == tmp_path / "dist"
    assert repository.site_config is site_config
    assert repository.loaded, "expected content to be loaded before rendering"
    assert "built 2 articles, skipped 1" in capsys.readouterr().out
