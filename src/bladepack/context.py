# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Mutable state threaded through the stages compiling one template."""

from __future__ import annotations

from dataclasses import dataclass, field

from .config import Config
from .models import AssetKind, CompiledAsset, LoaderFragment
from .naming import loader_identifier, loader_path


@dataclass(slots=True)
class CompileContext:
    """Capture the body and loader fragments of the template being compiled."""

    path: str
    fingerprint: str
    body: str
    style_loader: LoaderFragment
    script_loader: LoaderFragment
    assets: list[CompiledAsset] = field(default_factory=list)

    @classmethod
    def create(cls, path: str, text: str, fingerprint: str, *, config: Config) -> CompileContext:
        """Return a context with empty loader fragments for ``path``.

        Args:
            path: Template path relative to the views root.
            text: Raw template text.
            fingerprint: Fingerprint of ``text`` for this build.
            config: Active build configuration.

        Returns:
            CompileContext: Fresh context ready for the stage pipeline.
        """

        suffix = config.template_suffix
        return cls(
            path=path,
            fingerprint=fingerprint,
            body=text,
            style_loader=_empty_loader(path, AssetKind.STYLE, suffix),
            script_loader=_empty_loader(path, AssetKind.SCRIPT, suffix),
        )


def _empty_loader(path: str, kind: AssetKind, suffix: str) -> LoaderFragment:
    return LoaderFragment(
        owner=path,
        kind=kind,
        identifier=loader_identifier(path, kind, suffix=suffix),
        path=loader_path(path, kind, suffix=suffix),
    )


__all__ = ["CompileContext"]
