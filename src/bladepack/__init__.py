# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Blade template preprocessor extracting scoped style and script blocks."""

from __future__ import annotations

from importlib import metadata

from .compiler import Compiler, FileResult, FileStatus
from .config import Config
from .errors import CompileError, ConfigError
from .models import SourceFile

__all__ = [
    "CompileError",
    "Compiler",
    "Config",
    "ConfigError",
    "FileResult",
    "FileStatus",
    "SourceFile",
    "__version__",
]

try:
    __version__ = metadata.version("bladepack")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
