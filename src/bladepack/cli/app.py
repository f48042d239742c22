# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands."""

from __future__ import annotations

import typer

from .build import build_command
from .names import names_command

app = typer.Typer(
    name="bladepack",
    help="Compile scoped style and script blocks of Blade templates.",
    no_args_is_help=True,
    add_completion=False,
)
app.command("build")(build_command)
app.command("names")(names_command)


def main() -> None:
    """Run the Typer application."""

    app()


__all__ = ["app", "main"]
