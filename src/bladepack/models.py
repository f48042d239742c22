# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Data structures exchanged between the compiler stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class AssetKind(str, Enum):
    """Enumerate the compiled asset flavours."""

    STYLE = "style"
    SCRIPT = "script"

    @property
    def extension(self) -> str:
        """Return the file extension used for assets of this kind."""

        return ".css" if self is AssetKind.STYLE else ".js"


class BlockKind(str, Enum):
    """Enumerate the recognised template block kinds."""

    OWNED_STYLE = "owned-style"
    IMPORTED_STYLE = "imported-style"
    OWNED_SCRIPT = "owned-script"
    IMPORTED_SCRIPT = "imported-script"

    @property
    def asset_kind(self) -> AssetKind:
        """Return the asset kind this block contributes to."""

        if self in (BlockKind.OWNED_STYLE, BlockKind.IMPORTED_STYLE):
            return AssetKind.STYLE
        return AssetKind.SCRIPT


@dataclass(frozen=True, slots=True)
class SourceFile:
    """Template handed to the compiler by the build driver.

    ``text`` is ``None`` for inputs without material content; such files are
    forwarded untouched.
    """

    path: str
    text: str | None


@dataclass(frozen=True, slots=True)
class OwnedBlock:
    """Style or script block whose body is compiled by the declaring file."""

    kind: BlockKind
    source: str
    attributes: str
    body: str
    start: int = 0


@dataclass(frozen=True, slots=True)
class ImportedBlock:
    """Style or script block reusing the loader fragment of another template."""

    kind: BlockKind
    source: str
    reference: str
    target: str
    start: int = 0


@dataclass(frozen=True, slots=True)
class ExtractedBlocks:
    """Result of scanning one template for the four block kinds."""

    owned_style: OwnedBlock | None = None
    imported_style: ImportedBlock | None = None
    owned_script: OwnedBlock | None = None
    imported_script: ImportedBlock | None = None

    def __bool__(self) -> bool:
        return any((self.owned_style, self.imported_style, self.owned_script, self.imported_script))


@dataclass(frozen=True, slots=True)
class CompiledAsset:
    """Stylesheet or script produced for a template."""

    kind: AssetKind
    filename: str
    content: str
    import_path: str


@dataclass(slots=True)
class LoaderFragment:
    """Generated template aggregating include directives for one asset kind."""

    owner: str
    kind: AssetKind
    identifier: str
    path: str
    directives: list[str] = field(default_factory=list)

    def add(self, directive: str) -> None:
        """Append ``directive`` to the fragment."""

        self.directives.append(directive)

    def render(self) -> str:
        """Return the fragment text; empty when no directives were collected."""

        return "\n".join(self.directives)

    def __bool__(self) -> bool:
        return bool(self.directives)


@dataclass(frozen=True, slots=True)
class ScriptMetadata:
    """Exports harvested from a scoped script block.

    ``init`` and ``ready`` hold the function source text when the block
    exported callables under those names.
    """

    required: tuple[str, ...] = ()
    include: tuple[str, ...] = ()
    init: str | None = None
    ready: str | None = None


__all__ = [
    "AssetKind",
    "BlockKind",
    "CompiledAsset",
    "ExtractedBlocks",
    "ImportedBlock",
    "LoaderFragment",
    "OwnedBlock",
    "ScriptMetadata",
    "SourceFile",
]
