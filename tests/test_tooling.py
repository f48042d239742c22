# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the command-line toolchain adapter."""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

import pytest

from bladepack import tooling
from bladepack.config import ToolCommands
from bladepack.process import CommandOptions
from bladepack.tooling import CommandToolchain, Toolchain, UnsupportedDialectError


class _Recorder:
    def __init__(self) -> None:
        self.calls: list[tuple[list[str], CommandOptions]] = []

    def __call__(self, args: Sequence[str], *, options: CommandOptions | None = None) -> subprocess.CompletedProcess[str]:
        assert options is not None
        self.calls.append((list(args), options))
        return subprocess.CompletedProcess(args=list(args), returncode=0, stdout=f"out:{options.input_text}", stderr="")


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch) -> _Recorder:
    recorder = _Recorder()
    monkeypatch.setattr(tooling, "run_command", recorder)
    return recorder


def test_command_toolchain_satisfies_protocol() -> None:
    assert isinstance(CommandToolchain(ToolCommands()), Toolchain)


def test_less_is_piped_through_configured_command(recorder: _Recorder, tmp_path: Path) -> None:
    chain = CommandToolchain(ToolCommands(), options=CommandOptions(cwd=tmp_path))

    assert chain.compile_style("@c: red; h1 { color: @c; }", "less") == "out:@c: red; h1 { color: @c; }"
    args, options = recorder.calls[0]
    assert args == ["lessc", "-"]
    assert options.cwd == tmp_path


def test_plain_css_is_not_compiled(recorder: _Recorder) -> None:
    chain = CommandToolchain(ToolCommands())
    assert chain.compile_style("h1{}", "css") == "h1{}"
    assert recorder.calls == []


def test_unknown_dialect_is_rejected(recorder: _Recorder) -> None:
    chain = CommandToolchain(ToolCommands())
    with pytest.raises(UnsupportedDialectError):
        chain.compile_style("h1{}", "stylus")


def test_minify_script_flags(recorder: _Recorder) -> None:
    chain = CommandToolchain(ToolCommands())

    chain.minify_script("a()")
    chain.minify_script("b()", compress=False, mangle=False)
    chain.minify_script("c()", compress=True, mangle=False)

    assert [args for args, _ in recorder.calls] == [
        ["uglifyjs", "--compress", "--mangle"],
        ["uglifyjs"],
        ["uglifyjs", "--compress"],
    ]


def test_transpile_skips_empty_snippets(recorder: _Recorder) -> None:
    chain = CommandToolchain(ToolCommands(transpile=["npx", "babel"]))

    assert chain.transpile("  \n") == ""
    assert chain.transpile("let a = 1;") == "out:let a = 1;"
    assert recorder.calls[0][0] == ["npx", "babel"]
