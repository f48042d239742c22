# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for layered configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from bladepack.config_loader import ConfigLoader, DefaultConfigSource, TomlConfigSource
from bladepack.errors import ConfigError


def test_load_defaults_without_files(tmp_path: Path) -> None:
    cfg = ConfigLoader.for_root(tmp_path).load()

    assert cfg.js_dist_path is None
    assert cfg.views_root == Path("resources/views")
    assert cfg.minify is False


def test_project_file_overrides_pyproject(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        """
[project]
name = "site"

[tool.bladepack]
js_dist_path = "js/blade"
css_dist_path = "css/blade"
version = "from-pyproject"

[tool.bladepack.tools]
less = ["npx", "lessc", "-"]
""".strip(),
        encoding="utf-8",
    )
    (tmp_path / ".bladepack.toml").write_text(
        """
version = "from-project"
minify = true
""".strip(),
        encoding="utf-8",
    )

    cfg = ConfigLoader.for_root(tmp_path).load()

    assert cfg.js_dist_path == "js/blade"
    assert cfg.version == "from-project"
    assert cfg.minify is True
    assert cfg.tools.less == ["npx", "lessc", "-"]
    assert cfg.tools.scss == ["sass", "--stdin"]


def test_overrides_take_precedence_and_skip_none(tmp_path: Path) -> None:
    (tmp_path / ".bladepack.toml").write_text('version = "file"\njs_dist_path = "js"\n', encoding="utf-8")

    cfg = ConfigLoader.for_root(tmp_path).load({"version": "cli", "js_dist_path": None})

    assert cfg.version == "cli"
    assert cfg.js_dist_path == "js"


def test_explicit_project_config(tmp_path: Path) -> None:
    custom = tmp_path / "conf" / "build.toml"
    custom.parent.mkdir()
    custom.write_text('css_dist_path = "styles"\n', encoding="utf-8")

    loader = ConfigLoader.for_root(tmp_path, project_config=custom)

    assert loader.project_root == tmp_path.resolve()
    assert loader.load().css_dist_path == "styles"


def test_invalid_toml_raises_config_error(tmp_path: Path) -> None:
    broken = tmp_path / ".bladepack.toml"
    broken.write_text("version = \n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        ConfigLoader.for_root(tmp_path).load()


def test_validation_failure_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / ".bladepack.toml").write_text('js_import = "<script></script>"\n', encoding="utf-8")

    with pytest.raises(ConfigError, match="js_import"):
        ConfigLoader.for_root(tmp_path).load()


def test_missing_toml_source_contributes_nothing(tmp_path: Path) -> None:
    assert TomlConfigSource(tmp_path / "absent.toml").load() == {}


def test_loader_requires_sources(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        ConfigLoader(project_root=tmp_path, sources=[])
    assert ConfigLoader(project_root=tmp_path, sources=[DefaultConfigSource()]).load().version == ""
