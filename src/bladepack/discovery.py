# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Template discovery below the views root."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path
from typing import Final

from .models import SourceFile
from .naming import SCRIPT_LOADER_SUFFIX, STYLE_LOADER_SUFFIX

ALWAYS_EXCLUDE_DIRS: Final[frozenset[str]] = frozenset({".git", ".hg", ".svn", "node_modules", "__pycache__"})


def _is_loader_fragment(name: str, suffix: str) -> bool:
    stem = name[: -len(suffix)]
    return stem.endswith((STYLE_LOADER_SUFFIX, SCRIPT_LOADER_SUFFIX))


def iter_templates(views_root: Path, *, suffix: str) -> Iterator[str]:
    """Yield template paths below ``views_root`` relative to it, in sorted order.

    Args:
        views_root: Directory holding the source templates.
        suffix: Template file suffix, e.g. ``.blade.php``.

    Yields:
        str: POSIX path of each template relative to ``views_root``. Generated
        loader fragments are skipped.
    """

    root = views_root.resolve()
    found: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(name for name in dirnames if name not in ALWAYS_EXCLUDE_DIRS)
        directory = Path(dirpath)
        for filename in filenames:
            if not filename.endswith(suffix) or _is_loader_fragment(filename, suffix):
                continue
            found.append((directory / filename).relative_to(root).as_posix())
    yield from sorted(found)


def load_sources(views_root: Path, *, suffix: str) -> Iterator[SourceFile]:
    """Yield :class:`SourceFile` objects for every template below ``views_root``.

    Templates that are not valid UTF-8 are yielded with ``text=None`` so the
    compiler forwards them untouched.
    """

    for relative in iter_templates(views_root, suffix=suffix):
        try:
            text: str | None = (views_root / relative).read_text(encoding="utf-8")
        except UnicodeDecodeError:
            text = None
        yield SourceFile(path=relative, text=text)


__all__ = ["ALWAYS_EXCLUDE_DIRS", "iter_templates", "load_sources"]
