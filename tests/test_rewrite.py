# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the final template clean-up."""

from bladepack.rewrite import strip_build_markers


def test_removes_line_continuation_markers() -> None:
    assert strip_build_markers("<a //@\nhref='x'>") == "<a href='x'>"
    assert strip_build_markers("tail //@") == "tail "
    assert strip_build_markers("a //@\r\nb") == "a b"


def test_removes_inline_continuation_markers() -> None:
    assert strip_build_markers("<div //@$class='x'>") == "<div class='x'>"
    assert strip_build_markers("price: $5") == "price: $5"


def test_removes_formatter_pragmas() -> None:
    text = "{{-- @formatter:off --}}\n<p>x</p>\n{{--@formatter:on--}}"
    assert strip_build_markers(text) == "<p>x</p>\n"


def test_removes_markup_comments_but_keeps_escaped_ones() -> None:
    text = "<!-- note -->\n<p>x</p><!--[if IE]><p>ie</p><![endif]--><!--\nmulti\n-->"
    assert strip_build_markers(text) == "<p>x</p><!--[if IE]><p>ie</p><![endif]-->"


def test_keeps_blade_comments() -> None:
    assert strip_build_markers("{{-- keep --}}") == "{{-- keep --}}"
