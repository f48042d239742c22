# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Materialise the per-template style and script loader fragments."""

from __future__ import annotations

import posixpath

from .config import Config, render_directive
from .context import CompileContext
from .models import LoaderFragment
from .storage import BlobStore


class LoaderFragmentGenerator:
    """Write loader fragments and link the non-empty ones from the template body.

    Both fragments are always written, empty or not, so a rebuild never leaves
    a stale fragment from an earlier build behind.
    """

    def __init__(self, config: Config, store: BlobStore) -> None:
        self._config = config
        self._store = store

    def key_for(self, fragment: LoaderFragment) -> str:
        """Return the store key the fragment is written under."""

        return posixpath.join(self._config.compiled_root.as_posix(), fragment.path)

    def emit(self, context: CompileContext) -> list[LoaderFragment]:
        """Write both loader fragments of ``context`` and append their includes.

        Args:
            context: State of the template being compiled.

        Returns:
            list[LoaderFragment]: The style and script fragments, in that order.
        """

        fragments = [context.style_loader, context.script_loader]
        for fragment in fragments:
            self._store.write(self.key_for(fragment), fragment.render())
            if fragment:
                context.body += "\n" + render_directive(self._config.loader_include, fragment.identifier)
        return fragments


__all__ = ["LoaderFragmentGenerator"]
