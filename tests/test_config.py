# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the configuration models and directive rendering."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from bladepack.config import (
    DEFAULT_CSS_IMPORT,
    Config,
    ToolCommands,
    render_directive,
    render_ready,
)
from bladepack.errors import ConfigError


def test_defaults_match_laravel_layout() -> None:
    config = Config()

    assert config.js_dist_path is None
    assert config.public_root.as_posix() == "public"
    assert config.views_root.as_posix() == "resources/views"
    assert config.compiled_root.as_posix() == "storage/framework/blade"
    assert config.loader_include == "@include('$path')"
    assert "@push('css')" in config.css_import
    assert config.tools.less == ["lessc", "-"]


def test_dist_paths_lose_trailing_slash() -> None:
    config = Config(js_dist_path="js/blade/", css_dist_path="css/")

    assert config.js_dist_path == "js/blade"
    assert config.css_dist_path == "css"


@pytest.mark.parametrize(
    ("kwargs", "missing"),
    [
        ({"css_dist_path": "css"}, "js_dist_path"),
        ({"js_dist_path": "js"}, "css_dist_path"),
        ({"js_dist_path": "", "css_dist_path": "css"}, "js_dist_path"),
    ],
)
def test_require_dist_paths(kwargs: dict[str, str], missing: str) -> None:
    with pytest.raises(ConfigError, match=f"Missing {missing} option!"):
        Config(**kwargs).require_dist_paths()


def test_directive_templates_need_a_single_placeholder() -> None:
    with pytest.raises(ValidationError):
        Config(js_import="<script></script>")
    with pytest.raises(ValidationError):
        Config(css_import="$path $PATH")
    with pytest.raises(ValidationError):
        Config(ready_wrapper="document.ready()")


def test_empty_tool_command_is_rejected() -> None:
    with pytest.raises(ValidationError):
        ToolCommands(less=[])


def test_render_directive_replaces_placeholder_case_insensitively() -> None:
    assert render_directive("<x src='$PATH'>", "a/b.js?v=1") == "<x src='a/b.js?v=1'>"
    rendered = render_directive(DEFAULT_CSS_IMPORT, "css/x.css?v=2")
    assert "asset('css/x.css?v=2')" in rendered


def test_render_keeps_backslashes_literal() -> None:
    assert render_directive("@include('$path')", r"a\1") == r"@include('a\1')"
    assert render_ready("$($source);", "function () { return '\\n'; }") == "$(function () { return '\\n'; });"


def test_to_dict_is_json_friendly() -> None:
    payload = Config(js_dist_path="js", css_dist_path="css", minify=True).to_dict()

    assert payload["public_root"] == "public"
    assert payload["minify"] is True
    assert payload["tools"]["minify_style"] == ["cleancss"]
