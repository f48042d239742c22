# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-template fingerprint records deciding whether recompilation is needed."""

from __future__ import annotations

import hashlib
import logging
import posixpath
from typing import Final

from ..errors import StaleCacheReadError
from ..storage import BlobStore

FINGERPRINT_SUFFIX: Final[str] = ".md5"

LOGGER = logging.getLogger(__name__)


def fingerprint(text: str, version: str) -> str:
    """Return the md5 digest of ``text`` combined with the build ``version`` tag.

    Args:
        text: Raw template text.
        version: Build-version tag mixed into every fingerprint.

    Returns:
        str: Lowercase hexadecimal digest.
    """

    return hashlib.md5((text + version).encode("utf-8")).hexdigest()


class FingerprintCache:
    """Use this helper to gate compilation on unchanged template content.

    Records and previous outputs live in ``store`` below ``compiled_root``: the
    compiled template at ``<compiled_root>/<path>`` and its record at
    ``<compiled_root>/<path>.md5``.
    """

    def __init__(self, store: BlobStore, compiled_root: str) -> None:
        self._store = store
        self._root = compiled_root

    def _output_key(self, path: str) -> str:
        return posixpath.join(self._root, path)

    def _record_key(self, path: str) -> str:
        return self._output_key(path) + FINGERPRINT_SUFFIX

    def stored(self, path: str) -> str | None:
        """Return the recorded fingerprint for ``path`` when one exists."""

        record = self._store.read(self._record_key(path))
        if record is None:
            return None
        return record.strip() or None

    def should_recompile(self, path: str, text: str, version: str) -> bool:
        """Return ``True`` when ``text`` differs from the last committed compile.

        Args:
            path: Template path relative to the views root.
            text: Current raw template text.
            version: Build-version tag.

        Returns:
            bool: ``True`` on a cache miss.
        """

        record = self.stored(path)
        if record is None:
            return True
        return record.casefold() != fingerprint(text, version).casefold()

    def commit(self, path: str, text: str, version: str) -> str:
        """Persist the fingerprint of a successful compile.

        Args:
            path: Template path relative to the views root.
            text: Raw template text that was compiled.
            version: Build-version tag.

        Returns:
            str: The committed fingerprint.
        """

        digest = fingerprint(text, version)
        self._store.write(self._record_key(path), digest)
        LOGGER.debug("committed fingerprint path=%s digest=%s", path, digest)
        return digest

    def store_output(self, path: str, text: str) -> None:
        """Persist the compiled template text reused by later cache hits."""

        self._store.write(self._output_key(path), text)

    def load_previous_output(self, path: str) -> str:
        """Return the compiled output produced by the last successful compile.

        Args:
            path: Template path relative to the views root.

        Returns:
            str: Previously compiled template text.

        Raises:
            StaleCacheReadError: If the fingerprint matched but no compiled
                output exists.
        """

        previous = self._store.read(self._output_key(path))
        if previous is None:
            raise StaleCacheReadError(path, "Fingerprint hit without a previous compiled output")
        return previous


__all__ = ["FINGERPRINT_SUFFIX", "FingerprintCache", "fingerprint"]
