# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Key-value blob stores keyed by project-relative paths."""

from __future__ import annotations

import os
import tempfile
from abc import abstractmethod
from pathlib import Path, PurePosixPath
from typing import Protocol, runtime_checkable

StoreKey = str | PurePosixPath


def normalize_key(key: StoreKey) -> str:
    """Return ``key`` as a normalised POSIX path string.

    Args:
        key: Relative path identifying a blob.

    Returns:
        str: Key without redundant separators or ``.`` segments.

    Raises:
        ValueError: If ``key`` is empty.
    """

    text = str(key).replace("\\", "/")
    if not text:
        raise ValueError("store keys must not be empty")
    return str(PurePosixPath(text))


@runtime_checkable
class BlobStore(Protocol):
    """Define the storage contract used by the compiler.

    Writes must be durable once :meth:`write` returns; a later stage or a later
    template may read the blob immediately.
    """

    @abstractmethod
    def read(self, key: StoreKey) -> str | None:
        """Return the text stored under ``key`` or ``None`` when absent."""
        raise NotImplementedError

    @abstractmethod
    def write(self, key: StoreKey, text: str) -> None:
        """Persist ``text`` under ``key``, creating parent containers as needed."""
        raise NotImplementedError

    @abstractmethod
    def exists(self, key: StoreKey) -> bool:
        """Return ``True`` when a blob is stored under ``key``."""
        raise NotImplementedError


class MemoryStore(BlobStore):
    """Dictionary-backed store used by tests and dry runs."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._blobs: dict[str, str] = {}
        for key, text in (initial or {}).items():
            self.write(key, text)

    def read(self, key: StoreKey) -> str | None:
        return self._blobs.get(normalize_key(key))

    def write(self, key: StoreKey, text: str) -> None:
        self._blobs[normalize_key(key)] = text

    def exists(self, key: StoreKey) -> bool:
        return normalize_key(key) in self._blobs

    def keys(self) -> list[str]:
        """Return the stored keys in sorted order."""

        return sorted(self._blobs)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, (str, PurePosixPath)) and self.exists(key)

    def __getitem__(self, key: StoreKey) -> str:
        return self._blobs[normalize_key(key)]


class FileStore(BlobStore):
    """Filesystem store rooted at a project directory."""

    def __init__(self, root: Path) -> None:
        """Initialise the store.

        Args:
            root: Directory that relative keys are resolved against.
        """

        self._root = root

    @property
    def root(self) -> Path:
        """Return the directory backing the store."""

        return self._root

    def path_for(self, key: StoreKey) -> Path:
        """Return the filesystem location of ``key``.

        Args:
            key: Relative or absolute path identifying the blob.

        Returns:
            Path: Absolute keys are returned unchanged; relative keys are
            anchored at the store root.
        """

        candidate = Path(normalize_key(key))
        return candidate if candidate.is_absolute() else self._root / candidate

    def read(self, key: StoreKey) -> str | None:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def write(self, key: StoreKey, text: str) -> None:
        """Atomically replace the blob under ``key``.

        The payload is written to a sibling temporary file, flushed to disk and
        moved into place so readers never observe a partially written blob.

        Args:
            key: Relative path identifying the blob.
            text: Content to persist.
        """

        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
                handle.write(text)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def exists(self, key: StoreKey) -> bool:
        return self.path_for(key).is_file()


__all__ = ["BlobStore", "FileStore", "MemoryStore", "StoreKey", "normalize_key"]
