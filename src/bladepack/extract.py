# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Structural detection of scoped and imported style/script blocks.

Detection uses regular expressions rather than a template grammar. Each of the
four scans honours only its first match; later blocks of the same kind stay in
the template body untouched.
"""

from __future__ import annotations

import re
from typing import Final, cast

from .models import BlockKind, ExtractedBlocks, ImportedBlock, OwnedBlock
from .naming import canonical_target

OWNED_STYLE_RE: Final[re.Pattern[str]] = re.compile(
    r"<style\s+data-scoped(?=[\s>])([^>]*)>([\s\S]*?)</style>",
    re.IGNORECASE,
)
IMPORTED_STYLE_RE: Final[re.Pattern[str]] = re.compile(
    r"<style\s+data-import=\"([^\"]*)\"\s*>\s*</style>",
    re.IGNORECASE,
)
OWNED_SCRIPT_RE: Final[re.Pattern[str]] = re.compile(
    r"<script\s+data-scoped\s*>([\s\S]*?)</script>",
    re.IGNORECASE,
)
IMPORTED_SCRIPT_RE: Final[re.Pattern[str]] = re.compile(
    r"<script\s+data-import=\"([^\"]*)\"\s*>\s*</script>",
    re.IGNORECASE,
)
_DIALECT_RE: Final[re.Pattern[str]] = re.compile(r"\blang\s*=\s*[\"']?([\w-]+)", re.IGNORECASE)
_PATTERNS: Final[dict[BlockKind, re.Pattern[str]]] = {
    BlockKind.OWNED_STYLE: OWNED_STYLE_RE,
    BlockKind.IMPORTED_STYLE: IMPORTED_STYLE_RE,
    BlockKind.OWNED_SCRIPT: OWNED_SCRIPT_RE,
    BlockKind.IMPORTED_SCRIPT: IMPORTED_SCRIPT_RE,
}


def _owned(match: re.Match[str], kind: BlockKind) -> OwnedBlock:
    if kind is BlockKind.OWNED_STYLE:
        attributes, body = match.group(1), match.group(2)
    else:
        attributes, body = "", match.group(1)
    return OwnedBlock(
        kind=kind,
        source=match.group(0),
        attributes=attributes.strip(),
        body=body,
        start=match.start(),
    )


def _imported(match: re.Match[str], kind: BlockKind, *, current_path: str, suffix: str) -> ImportedBlock:
    reference = match.group(1)
    return ImportedBlock(
        kind=kind,
        source=match.group(0),
        reference=reference,
        target=canonical_target(current_path, reference, suffix=suffix),
        start=match.start(),
    )


def find_block(
    kind: BlockKind,
    text: str,
    *,
    current_path: str,
    suffix: str,
) -> OwnedBlock | ImportedBlock | None:
    """Return the first block of ``kind`` in ``text``.

    The compiler calls this once per kind against the current template body,
    so a block is always located in the text it is later removed from.

    Args:
        kind: Block kind to look for.
        text: Current template body.
        current_path: Template path relative to the views root, used to
            canonicalise import references.
        suffix: Template file suffix appended to bare import references.

    Returns:
        OwnedBlock | ImportedBlock | None: First match, or ``None``.

    Raises:
        ImportReferenceError: If an import reference leaves the views root.
    """

    match = _PATTERNS[kind].search(text)
    if match is None:
        return None
    if kind in (BlockKind.OWNED_STYLE, BlockKind.OWNED_SCRIPT):
        return _owned(match, kind)
    return _imported(match, kind, current_path=current_path, suffix=suffix)


def extract_blocks(text: str, *, current_path: str, suffix: str) -> ExtractedBlocks:
    """Scan ``text`` for the four recognised block kinds.

    Every kind is searched in the same unmodified ``text``; use
    :func:`find_block` when blocks are removed between searches.

    Args:
        text: Raw template text.
        current_path: Template path relative to the views root, used to
            canonicalise import references.
        suffix: Template file suffix appended to bare import references.

    Returns:
        ExtractedBlocks: First match of each kind, or ``None`` per missing kind.
    """

    found = {kind: find_block(kind, text, current_path=current_path, suffix=suffix) for kind in BlockKind}
    return ExtractedBlocks(
        owned_style=cast("OwnedBlock | None", found[BlockKind.OWNED_STYLE]),
        imported_style=cast("ImportedBlock | None", found[BlockKind.IMPORTED_STYLE]),
        owned_script=cast("OwnedBlock | None", found[BlockKind.OWNED_SCRIPT]),
        imported_script=cast("ImportedBlock | None", found[BlockKind.IMPORTED_SCRIPT]),
    )


def style_dialect(attributes: str) -> str | None:
    """Return the lower-cased ``lang`` attribute of a scoped style block, if any."""

    match = _DIALECT_RE.search(attributes)
    return match.group(1).lower() if match else None


def remove_block(body: str, block: OwnedBlock | ImportedBlock, replacement: str = "") -> str:
    """Replace ``block`` at the offset where it was found in ``body``.

    Args:
        body: Template body the block was located in.
        block: Block located by :func:`find_block`.
        replacement: Text inserted where the block was.

    Returns:
        str: Updated template body.

    Raises:
        ValueError: If ``body`` no longer holds the block at its recorded offset.
    """

    end = block.start + len(block.source)
    if body[block.start : end] != block.source:
        raise ValueError(f"{block.kind.value} block is not at offset {block.start} of the template body")
    return body[: block.start] + replacement + body[end:]


__all__ = [
    "IMPORTED_SCRIPT_RE",
    "IMPORTED_STYLE_RE",
    "OWNED_SCRIPT_RE",
    "OWNED_STYLE_RE",
    "extract_blocks",
    "find_block",
    "remove_block",
    "style_dialect",
]
