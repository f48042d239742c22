# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the compiler stages."""

from __future__ import annotations


class ConfigError(Exception):
    """Raised when configuration input is invalid or incomplete."""


class CompileError(RuntimeError):
    """Raised when a single template cannot be compiled.

    The error is fatal for the offending template only. Callers record it and
    continue with the next template; no output or fingerprint is persisted for
    the failed file so the next build retries it.
    """

    kind = "compile"

    def __init__(self, path: str, message: str) -> None:
        """Initialise the error with the template path and a readable message.

        Args:
            path: Template path relative to the views root.
            message: Human-readable description of the failure.
        """

        super().__init__(f"{message} in {path}")
        self.path = path

    @property
    def cause(self) -> BaseException | None:
        """Return the underlying exception that triggered the failure."""

        return self.__cause__


class SandboxExecutionError(CompileError):
    """Raised when a scoped script block throws while its exports are harvested."""

    kind = "sandbox"


class IncludeReadError(CompileError):
    """Raised when a script ``include`` entry cannot be read."""

    kind = "include"


class StaleCacheReadError(CompileError):
    """Raised when a fingerprint hit has no previous compiled output to reuse."""

    kind = "stale-cache"


class StyleCompileError(CompileError):
    """Raised when a scoped style block declares an unsupported dialect."""

    kind = "style"


class ToolExecutionError(CompileError):
    """Raised when an external compiler, transpiler or minifier fails."""

    kind = "tool"


class ImportReferenceError(CompileError):
    """Raised when an import block references a template outside the views root."""

    kind = "import"


class AssetWriteError(CompileError):
    """Raised when an asset, loader fragment or compiled template cannot be written."""

    kind = "write"


__all__ = [
    "AssetWriteError",
    "CompileError",
    "ConfigError",
    "ImportReferenceError",
    "IncludeReadError",
    "SandboxExecutionError",
    "StaleCacheReadError",
    "StyleCompileError",
    "ToolExecutionError",
]
