# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors, configuration)."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

from ..config import Config
from ..config_loader import ConfigLoader
from ..console import fail as core_fail
from ..console import info as core_info
from ..console import detect_tty
from ..console import ok as core_ok
from ..console import status_table as core_status_table
from ..console import warn as core_warn
from ..errors import ConfigError

PACKAGE_LOGGER = "bladepack"


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Adapter around console helpers respecting CLI emoji settings."""

    console: Console
    use_emoji: bool
    debug_enabled: bool = False

    def fail(self, message: str) -> None:
        """Log a failure message honouring emoji preferences."""

        core_fail(message, use_emoji=self.use_emoji)

    def warn(self, message: str) -> None:
        """Log a warning message honouring emoji preferences."""

        core_warn(message, use_emoji=self.use_emoji)

    def ok(self, message: str) -> None:
        """Log a success message honouring emoji preferences."""

        core_ok(message, use_emoji=self.use_emoji)

    def info(self, message: str) -> None:
        """Log an informational message honouring emoji preferences."""

        core_info(message, use_emoji=self.use_emoji)

    def summary(self, title: str, counts: Mapping[str, int]) -> None:
        """Render per-status template counts as a table."""

        core_status_table(title, counts, use_color=detect_tty() and not self.console.no_color)


def build_cli_logger(*, emoji: bool, debug: bool = False, no_color: bool = False) -> CLILogger:
    """Return a ``CLILogger`` and route the package logger through Rich.

    Args:
        emoji: Whether log output may include emoji glyphs.
        debug: Whether debug records of the compiler should be shown.
        no_color: Whether terminal colour output should be disabled.

    Returns:
        CLILogger: Logger instance bound to a dedicated Rich console.
    """

    console = Console(no_color=no_color, highlight=False)
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers[:] = [RichHandler(console=console, show_path=False, show_time=False)]
    package_logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    package_logger.propagate = False
    return CLILogger(console=console, use_emoji=emoji, debug_enabled=debug)


def load_config(root: Path, overrides: Mapping[str, Any], *, config_file: Path | None = None) -> Config:
    """Return the layered configuration for ``root`` or raise :class:`CLIError`.

    Args:
        root: Project root holding ``pyproject.toml`` and ``.bladepack.toml``.
        overrides: Values supplied on the command line.
        config_file: Optional explicit project configuration file.

    Returns:
        Config: Validated configuration with both distribution paths present.

    Raises:
        CLIError: If the configuration is invalid or incomplete.
    """

    try:
        config = ConfigLoader.for_root(root, project_config=config_file).load(overrides)
        config.require_dist_paths()
    except ConfigError as exc:
        raise CLIError(f"Configuration error: {exc}", exit_code=2) from exc
    return config


__all__ = ["CLIError", "CLILogger", "build_cli_logger", "load_config"]
