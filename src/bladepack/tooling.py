# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""External style compilers, script transpilers and minifiers."""

from __future__ import annotations

import logging
from abc import abstractmethod
from collections.abc import Sequence
from typing import Final, Protocol, runtime_checkable

from .config import ToolCommands
from .process import CommandOptions, run_command

LOGGER = logging.getLogger(__name__)

PLAIN_DIALECTS: Final[frozenset[str]] = frozenset({"css"})
STYLE_DIALECTS: Final[frozenset[str]] = frozenset({"less", "scss", "sass"})


class UnsupportedDialectError(ValueError):
    """Raised when a style block requests a dialect without a configured compiler."""


@runtime_checkable
class Toolchain(Protocol):
    """Define the pure text transformations delegated to external tools."""

    @abstractmethod
    def compile_style(self, text: str, dialect: str) -> str:
        """Compile ``text`` written in ``dialect`` down to plain CSS."""
        raise NotImplementedError

    @abstractmethod
    def minify_style(self, text: str) -> str:
        """Return a minified rendition of the stylesheet ``text``."""
        raise NotImplementedError

    @abstractmethod
    def minify_script(self, text: str, *, compress: bool = True, mangle: bool = True) -> str:
        """Return a minified rendition of the script ``text``.

        Args:
            text: JavaScript source.
            compress: Whether dead-code elimination and compression may run.
            mangle: Whether local identifiers may be renamed.
        """
        raise NotImplementedError

    @abstractmethod
    def transpile(self, text: str) -> str:
        """Transpile modern JavaScript ``text`` to the configured target level."""
        raise NotImplementedError


class CommandToolchain(Toolchain):
    """Toolchain piping text through command-line tools via stdin/stdout."""

    def __init__(self, commands: ToolCommands, *, options: CommandOptions | None = None) -> None:
        """Initialise the toolchain.

        Args:
            commands: Argument vectors of the external tools.
            options: Base subprocess options, e.g. the working directory used
                to resolve local ``node_modules`` binaries.
        """

        self._commands = commands
        self._options = options or CommandOptions()

    def _pipe(self, command: Sequence[str], text: str) -> str:
        LOGGER.debug("running command=%s", " ".join(command))
        completed = run_command(command, options=self._options.with_input(text))
        return completed.stdout or ""

    def compile_style(self, text: str, dialect: str) -> str:
        if dialect in PLAIN_DIALECTS:
            return text
        if dialect not in STYLE_DIALECTS:
            raise UnsupportedDialectError(f"Unsupported style dialect '{dialect}'")
        command: list[str] = getattr(self._commands, dialect)
        return self._pipe(command, text)

    def minify_style(self, text: str) -> str:
        return self._pipe(self._commands.minify_style, text)

    def minify_script(self, text: str, *, compress: bool = True, mangle: bool = True) -> str:
        if compress and mangle:
            return self._pipe(self._commands.minify_script, text)
        command = list(self._commands.minify_script_plain)
        if compress:
            command.append("--compress")
        if mangle:
            command.append("--mangle")
        return self._pipe(command, text)

    def transpile(self, text: str) -> str:
        if not text.strip():
            return ""
        return self._pipe(self._commands.transpile, text)


__all__ = [
    "CommandToolchain",
    "PLAIN_DIALECTS",
    "STYLE_DIALECTS",
    "Toolchain",
    "UnsupportedDialectError",
]
