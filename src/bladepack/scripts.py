# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Compile scoped script blocks and link imported ones."""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Callable, Sequence
from functools import partial

from .config import Config, render_directive, render_ready
from .context import CompileContext
from .errors import IncludeReadError, ToolExecutionError
from .extract import remove_block
from .models import AssetKind, CompiledAsset, ImportedBlock, OwnedBlock, ScriptMetadata
from .naming import asset_filename, asset_key, import_path, loader_identifier
from .process import SubprocessExecutionError
from .sandbox import ScriptSandbox
from .storage import BlobStore
from .tooling import Toolchain

LOGGER = logging.getLogger(__name__)


def build_entry_snippet(metadata: ScriptMetadata, *, ready_wrapper: str) -> str:
    """Return the entry code invoking the exported ``init`` and ``ready`` callables.

    Args:
        metadata: Exports harvested from the script block.
        ready_wrapper: Template registering a callable against the host
            readiness event.

    Returns:
        str: Entry snippet; empty when neither callable was exported.
    """

    snippet = ""
    if metadata.init is not None:
        snippet += f"({metadata.init})();\n\n"
    if metadata.ready is not None:
        snippet += render_ready(ready_wrapper, metadata.ready)
    return snippet


class ScriptPipeline:
    """Turn owned script blocks into script assets."""

    def __init__(
        self,
        config: Config,
        store: BlobStore,
        toolchain: Toolchain,
        sandbox: ScriptSandbox,
    ) -> None:
        self._config = config
        self._store = store
        self._toolchain = toolchain
        self._sandbox = sandbox

    @property
    def dist_path(self) -> str:
        """Return the public distribution directory of scripts."""

        return self._config.js_dist_path or ""

    def compile_owned(self, context: CompileContext, block: OwnedBlock) -> CompiledAsset:
        """Compile ``block`` into a script asset and route it through the loader.

        Args:
            context: State of the template being compiled.
            block: Scoped script block found in the template.

        Returns:
            CompiledAsset: Script written to the asset store.

        Raises:
            SandboxExecutionError: If the block throws while exports are harvested.
            IncludeReadError: If an ``include`` entry cannot be read.
            ToolExecutionError: If the transpiler or minifier fails.
        """

        metadata = self._sandbox.harvest(context.path, block.body)
        fragments = self._read_includes(context.path, metadata.include)
        fragments.append(self._entry(context.path, metadata))
        content = "\n".join(fragments)

        filename = asset_filename(context.path, AssetKind.SCRIPT)
        public_path = import_path(self.dist_path, filename, context.fingerprint)
        asset = CompiledAsset(kind=AssetKind.SCRIPT, filename=filename, content=content, import_path=public_path)
        self._store.write(
            posixpath.join(self._config.public_root.as_posix(), asset_key(self.dist_path, filename)),
            content,
        )
        LOGGER.debug("wrote script path=%s asset=%s includes=%d", context.path, filename, len(metadata.include))

        context.body = remove_block(context.body, block)
        for required in metadata.required:
            context.script_loader.add(render_directive(self._config.js_import, required))
        context.script_loader.add(render_directive(self._config.js_import, public_path))
        context.assets.append(asset)
        return asset

    def link_imported(self, context: CompileContext, block: ImportedBlock) -> None:
        """Reference the script loader of the template ``block`` imports."""

        identifier = loader_identifier(block.target, AssetKind.SCRIPT, suffix=self._config.template_suffix)
        context.body = remove_block(context.body, block)
        context.script_loader.add(render_directive(self._config.loader_include, identifier))

    def _read_includes(self, path: str, includes: Sequence[str]) -> list[str]:
        fragments: list[str] = []
        for include in includes:
            try:
                code = self._store.read(include)
            except (OSError, ValueError) as exc:
                raise IncludeReadError(path, f"Cannot read include '{include}': {exc}") from exc
            if code is None:
                raise IncludeReadError(path, f"Include '{include}' does not exist")
            if self._config.minify:
                # Included libraries are referenced by name from other scripts.
                code = self._run_tool(path, partial(self._toolchain.minify_script, compress=False, mangle=False), code)
            fragments.append(code)
        return fragments

    def _entry(self, path: str, metadata: ScriptMetadata) -> str:
        snippet = build_entry_snippet(metadata, ready_wrapper=self._config.ready_wrapper)
        code = self._run_tool(path, self._toolchain.transpile, snippet)
        if self._config.minify:
            code = self._run_tool(path, self._toolchain.minify_script, code)
        return code

    @staticmethod
    def _run_tool(path: str, tool: Callable[[str], str], text: str) -> str:
        try:
            return tool(text)
        except (SubprocessExecutionError, OSError, UnicodeDecodeError) as exc:
            raise ToolExecutionError(path, f"Script compilation failed: {exc}") from exc


__all__ = ["ScriptPipeline", "build_entry_snippet"]
