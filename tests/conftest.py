# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from bladepack.compiler import Compiler
from bladepack.config import Config
from bladepack.storage import MemoryStore
from bladepack.tooling import Toolchain, UnsupportedDialectError


@dataclass
class FakeToolchain(Toolchain):
    """Deterministic stand-in for the external compilers and minifiers."""

    calls: list[tuple[str, str]] = field(default_factory=list)

    def compile_style(self, text: str, dialect: str) -> str:
        self.calls.append(("compile_style", dialect))
        if dialect == "stylus":
            raise UnsupportedDialectError("Unsupported style dialect 'stylus'")
        return f"/* {dialect} */{text.strip()}"

    def minify_style(self, text: str) -> str:
        self.calls.append(("minify_style", text))
        return "".join(text.split())

    def minify_script(self, text: str, *, compress: bool = True, mangle: bool = True) -> str:
        self.calls.append(("minify_script", f"compress={compress} mangle={mangle}"))
        return f"/*min*/{' '.join(text.split())}"

    def transpile(self, text: str) -> str:
        self.calls.append(("transpile", text))
        return f"/*es5*/{text}" if text else ""


@pytest.fixture
def toolchain() -> FakeToolchain:
    """Return a fresh fake toolchain."""
    return FakeToolchain()


@pytest.fixture
def store() -> MemoryStore:
    """Return an empty in-memory blob store."""
    return MemoryStore()


@pytest.fixture
def config() -> Config:
    """Return a configuration with compact directive templates."""
    return Config(
        js_dist_path="js/blade",
        css_dist_path="css/blade",
        version="v1",
        js_import="<script src=\"$path\"></script>",
        css_import="<link href=\"$path\">",
    )


@pytest.fixture
def compiler(config: Config, store: MemoryStore, toolchain: FakeToolchain) -> Compiler:
    """Return a compiler wired to the in-memory store and fake toolchain."""
    return Compiler(config, store, toolchain=toolchain)
