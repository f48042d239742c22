# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command compiling every template below the views root."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..compiler import Compiler, FileStatus
from ..discovery import load_sources
from ..process import CommandOptions
from ..storage import FileStore
from ..tooling import CommandToolchain
from .shared import CLIError, build_cli_logger, load_config

ROOT_OPTION = Annotated[Path, typer.Option("--root", "-r", help="Project root.")]
CONFIG_OPTION = Annotated[Path | None, typer.Option("--config", help="Project configuration file.")]
VERSION_OPTION = Annotated[str | None, typer.Option("--build-version", help="Build-version tag mixed into fingerprints.")]
MINIFY_OPTION = Annotated[bool | None, typer.Option("--minify/--no-minify", help="Minify compiled assets.")]
JS_DIST_OPTION = Annotated[str | None, typer.Option("--js-dist", help="Public distribution path of scripts.")]
CSS_DIST_OPTION = Annotated[str | None, typer.Option("--css-dist", help="Public distribution path of stylesheets.")]
EMOJI_OPTION = Annotated[bool, typer.Option("--emoji/--no-emoji", help="Toggle emoji output.")]
DEBUG_OPTION = Annotated[bool, typer.Option("--debug", help="Show compiler debug logging.")]


def build_command(
    root: ROOT_OPTION = Path("."),
    config_file: CONFIG_OPTION = None,
    build_version: VERSION_OPTION = None,
    minify: MINIFY_OPTION = None,
    js_dist: JS_DIST_OPTION = None,
    css_dist: CSS_DIST_OPTION = None,
    emoji: EMOJI_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Compile scoped style and script blocks of every template.

    Raises:
        typer.Exit: Always raised; the status is ``1`` when any template failed.
    """

    logger = build_cli_logger(emoji=emoji, debug=debug)
    project_root = root.resolve()
    overrides = {
        "version": build_version,
        "minify": minify,
        "js_dist_path": js_dist,
        "css_dist_path": css_dist,
    }
    try:
        config = load_config(project_root, overrides, config_file=config_file)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc

    views_root = project_root / config.views_root
    if not views_root.is_dir():
        logger.fail(f"Views root {views_root} does not exist")
        raise typer.Exit(code=2)

    compiler = Compiler(
        config,
        FileStore(project_root),
        toolchain=CommandToolchain(config.tools, options=CommandOptions(cwd=project_root)),
    )
    counts = dict.fromkeys(FileStatus, 0)
    for result in compiler.run(load_sources(views_root, suffix=config.template_suffix)):
        counts[result.status] += 1
        if result.error is not None:
            logger.fail(f"[{result.error.kind}] {result.error}")
        elif result.status is FileStatus.COMPILED:
            logger.info(f"compiled {result.path}")

    logger.summary("Templates", {status.value: count for status, count in counts.items()})
    summary = ", ".join(f"{count} {status.value}" for status, count in counts.items())
    if counts[FileStatus.FAILED]:
        logger.warn(f"Build finished with failures: {summary}")
        raise typer.Exit(code=1)
    logger.ok(f"Build finished: {summary}")
    raise typer.Exit(code=0)


__all__ = ["build_command"]
