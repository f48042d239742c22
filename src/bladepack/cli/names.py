# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command printing the deterministic names derived from a template path."""

from __future__ import annotations

from typing import Annotated

import typer

from ..config import DEFAULT_TEMPLATE_SUFFIX
from ..models import AssetKind
from ..naming import asset_filename, loader_identifier, loader_path, to_posix

TEMPLATE_ARGUMENT = Annotated[str, typer.Argument(help="Template path relative to the views root.")]
SUFFIX_OPTION = Annotated[str, typer.Option("--suffix", help="Template file suffix.")]


def names_command(template: TEMPLATE_ARGUMENT, suffix: SUFFIX_OPTION = DEFAULT_TEMPLATE_SUFFIX) -> None:
    """Show asset filenames and loader identifiers owned by ``template``."""

    path = to_posix(template)
    if not path.endswith(suffix):
        path += suffix
    for kind in AssetKind:
        typer.echo(f"{kind.value}.asset={asset_filename(path, kind)}")
        typer.echo(f"{kind.value}.loader={loader_identifier(path, kind, suffix=suffix)}")
        typer.echo(f"{kind.value}.loader_path={loader_path(path, kind, suffix=suffix)}")


__all__ = ["names_command"]
