# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the bladepack command-line interface."""

from __future__ import annotations

import hashlib
from pathlib import Path

from typer.testing import CliRunner

from bladepack.cli.app import app


def _setup_project(root: Path, *, with_dist: bool = True) -> Path:
    views = root / "resources" / "views"
    (views / "pages").mkdir(parents=True)
    (views / "pages" / "home.blade.php").write_text(
        "<h1>home</h1>\n<style data-scoped>h1{color:red}</style>\n",
        encoding="utf-8",
    )
    (views / "pages" / "about.blade.php").write_text(
        '<p>about</p>\n<style data-import="home"></style>\n',
        encoding="utf-8",
    )
    if with_dist:
        (root / "pyproject.toml").write_text(
            '[tool.bladepack]\njs_dist_path = "js/blade"\ncss_dist_path = "css/blade"\n',
            encoding="utf-8",
        )
    return views


def test_names_lists_derived_names() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["names", "pages/home"])

    digest = hashlib.md5(b"pages/home.blade.php").hexdigest()
    assert result.exit_code == 0
    assert f"style.asset={digest}.css" in result.stdout
    assert f"script.asset={digest}.js" in result.stdout
    assert "style.loader=pages.home__style" in result.stdout
    assert "script.loader_path=pages/home__script.blade.php" in result.stdout


def test_build_writes_assets_and_compiled_templates(tmp_path: Path) -> None:
    _setup_project(tmp_path)
    runner = CliRunner()

    result = runner.invoke(app, ["build", "--root", str(tmp_path), "--no-emoji", "--build-version", "7"])

    assert result.exit_code == 0
    compiled = tmp_path / "storage" / "framework" / "blade" / "pages"
    digest = hashlib.md5(b"pages/home.blade.php").hexdigest()
    assert (tmp_path / "public" / "css" / "blade" / f"{digest}.css").read_text(encoding="utf-8") == "h1{color:red}"
    assert (compiled / "home.blade.php.md5").is_file()
    assert (compiled / "about__style.blade.php").read_text(encoding="utf-8") == "@include('pages.home__style')"
    assert (compiled / "about__script.blade.php").read_text(encoding="utf-8") == ""
    assert "@include('pages.about__style')" in (compiled / "about.blade.php").read_text(encoding="utf-8")


def test_build_second_run_reuses_cache(tmp_path: Path) -> None:
    _setup_project(tmp_path)
    runner = CliRunner()
    args = ["build", "--root", str(tmp_path), "--no-emoji"]

    assert runner.invoke(app, args).exit_code == 0
    record = tmp_path / "storage" / "framework" / "blade" / "pages" / "home.blade.php.md5"
    before = record.stat().st_mtime_ns
    assert runner.invoke(app, args).exit_code == 0
    assert record.stat().st_mtime_ns == before


def test_build_without_dist_paths_exits_with_config_error(tmp_path: Path) -> None:
    _setup_project(tmp_path, with_dist=False)
    runner = CliRunner()

    result = runner.invoke(app, ["build", "--root", str(tmp_path), "--no-emoji"])

    assert result.exit_code == 2
    assert not (tmp_path / "storage").exists()


def test_build_dist_paths_from_command_line(tmp_path: Path) -> None:
    _setup_project(tmp_path, with_dist=False)
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["build", "--root", str(tmp_path), "--no-emoji", "--js-dist", "js", "--css-dist", "static/css"],
    )

    assert result.exit_code == 0
    assert any((tmp_path / "public" / "static" / "css").glob("*.css"))


def test_build_reports_failed_templates(tmp_path: Path) -> None:
    views = _setup_project(tmp_path)
    (views / "broken.blade.php").write_text(
        "<script data-scoped>throw new Error('boom');</script>",
        encoding="utf-8",
    )
    runner = CliRunner()

    result = runner.invoke(app, ["build", "--root", str(tmp_path), "--no-emoji"])

    assert result.exit_code == 1
    compiled = tmp_path / "storage" / "framework" / "blade"
    assert not (compiled / "broken.blade.php.md5").exists()
    assert (compiled / "pages" / "home.blade.php.md5").is_file()


def test_build_missing_views_root(tmp_path: Path) -> None:
    (tmp_path / ".bladepack.toml").write_text('js_dist_path = "js"\ncss_dist_path = "css"\n', encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["build", "--root", str(tmp_path), "--no-emoji"])

    assert result.exit_code == 2
