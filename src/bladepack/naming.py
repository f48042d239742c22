# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Deterministic names for compiled assets and loader fragments.

Every name here is a pure function of a template's path relative to the views
root. A template that imports another template's assets computes the same
names the owner computes, without reading the owner's compiled output.
"""

from __future__ import annotations

import hashlib
import posixpath
from functools import lru_cache
from typing import Final

from .errors import ImportReferenceError
from .models import AssetKind

STYLE_LOADER_SUFFIX: Final[str] = "__style"
SCRIPT_LOADER_SUFFIX: Final[str] = "__script"
_LOADER_SUFFIXES: Final[dict[AssetKind, str]] = {
    AssetKind.STYLE: STYLE_LOADER_SUFFIX,
    AssetKind.SCRIPT: SCRIPT_LOADER_SUFFIX,
}


def to_posix(path: str) -> str:
    """Return ``path`` with forward slashes and no redundant segments."""

    return posixpath.normpath(path.replace("\\", "/"))


@lru_cache(maxsize=1024)
def asset_filename(relative_path: str, kind: AssetKind) -> str:
    """Return the asset filename owned by the template at ``relative_path``.

    Args:
        relative_path: Template path relative to the views root.
        kind: Asset flavour selecting the extension.

    Returns:
        str: ``md5(relative_path)`` followed by ``.css`` or ``.js``.
    """

    digest = hashlib.md5(to_posix(relative_path).encode("utf-8")).hexdigest()
    return f"{digest}{kind.extension}"


def asset_key(dist_path: str, filename: str) -> str:
    """Return the public-root relative location of an asset file."""

    return posixpath.join(dist_path.strip("/"), filename)


def import_path(dist_path: str, filename: str, fingerprint: str) -> str:
    """Return the cache-busting public path used to reference an asset.

    Args:
        dist_path: Public distribution directory for the asset kind.
        filename: Deterministic asset filename.
        fingerprint: Fingerprint of the template that produced the asset.

    Returns:
        str: ``<dist_path>/<filename>?v=<fingerprint>``.
    """

    return f"{dist_path}/{filename}?v={fingerprint}"


def strip_suffix(relative_path: str, suffix: str) -> str:
    """Return ``relative_path`` without the template suffix when present."""

    path = to_posix(relative_path)
    return path[: -len(suffix)] if suffix and path.endswith(suffix) else path


def loader_identifier(relative_path: str, kind: AssetKind, *, suffix: str) -> str:
    """Return the dotted view identifier of a template's loader fragment.

    Args:
        relative_path: Template path relative to the views root.
        kind: Loader flavour.
        suffix: Template file suffix, e.g. ``.blade.php``.

    Returns:
        str: Identifier such as ``pages.home__style``.
    """

    stem = strip_suffix(relative_path, suffix)
    return stem.replace("/", ".") + _LOADER_SUFFIXES[kind]


def loader_path(relative_path: str, kind: AssetKind, *, suffix: str) -> str:
    """Return the compiled-root relative file path of a loader fragment."""

    stem = strip_suffix(relative_path, suffix)
    return f"{stem}{_LOADER_SUFFIXES[kind]}{suffix}"


def canonical_target(current_path: str, reference: str, *, suffix: str) -> str:
    """Resolve an import reference to a views-root relative template path.

    The suffix is appended when missing, the reference is resolved against the
    directory of ``current_path``, and the result is expressed relative to the
    views root.

    Args:
        current_path: Path of the importing template relative to the views root.
        reference: Target declared by the import block.
        suffix: Template file suffix.

    Returns:
        str: Canonical relative path of the referenced template.

    Raises:
        ImportReferenceError: If the reference resolves above the views root.
    """

    target = reference.strip().replace("\\", "/")
    if not target.endswith(suffix):
        target += suffix
    if target.startswith("/"):
        resolved = to_posix(target.lstrip("/"))
    else:
        resolved = to_posix(posixpath.join(posixpath.dirname(to_posix(current_path)), target))
    if resolved == ".." or resolved.startswith("../"):
        raise ImportReferenceError(current_path, f"Import '{reference}' resolves outside the views root")
    return resolved


__all__ = [
    "SCRIPT_LOADER_SUFFIX",
    "STYLE_LOADER_SUFFIX",
    "asset_filename",
    "asset_key",
    "canonical_target",
    "import_path",
    "loader_identifier",
    "loader_path",
    "strip_suffix",
    "to_posix",
]
