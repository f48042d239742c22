# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Compile scoped style blocks and link imported ones."""

from __future__ import annotations

import logging
import posixpath

from .config import Config, render_directive
from .context import CompileContext
from .errors import StyleCompileError, ToolExecutionError
from .extract import remove_block, style_dialect
from .models import AssetKind, CompiledAsset, ImportedBlock, OwnedBlock
from .naming import asset_filename, asset_key, import_path, loader_identifier
from .process import SubprocessExecutionError
from .storage import BlobStore
from .tooling import Toolchain, UnsupportedDialectError

LOGGER = logging.getLogger(__name__)


class StylePipeline:
    """Turn owned style blocks into stylesheet assets."""

    def __init__(self, config: Config, store: BlobStore, toolchain: Toolchain) -> None:
        self._config = config
        self._store = store
        self._toolchain = toolchain

    @property
    def dist_path(self) -> str:
        """Return the public distribution directory of stylesheets."""

        return self._config.css_dist_path or ""

    def compile_owned(self, context: CompileContext, block: OwnedBlock) -> CompiledAsset:
        """Compile ``block``, persist the stylesheet and route it through the loader.

        The asset write has completed when this method returns, so templates
        processed afterwards may rely on the file being present.

        Args:
            context: State of the template being compiled.
            block: Scoped style block found in the template.

        Returns:
            CompiledAsset: Stylesheet written to the asset store.

        Raises:
            StyleCompileError: If the block declares an unsupported dialect.
            ToolExecutionError: If the style compiler or minifier fails.
        """

        filename = asset_filename(context.path, AssetKind.STYLE)
        public_path = import_path(self.dist_path, filename, context.fingerprint)
        css = self._compile(context.path, block)
        asset = CompiledAsset(kind=AssetKind.STYLE, filename=filename, content=css, import_path=public_path)
        self._store.write(posixpath.join(self._config.public_root.as_posix(), asset_key(self.dist_path, filename)), css)
        LOGGER.debug("wrote stylesheet path=%s asset=%s", context.path, filename)

        context.body = remove_block(context.body, block)
        context.style_loader.add(render_directive(self._config.css_import, public_path))
        context.assets.append(asset)
        return asset

    def link_imported(self, context: CompileContext, block: ImportedBlock) -> None:
        """Reference the style loader of the template ``block`` imports.

        Nothing is compiled; the target template produces its own stylesheet
        whenever it is compiled.

        Args:
            context: State of the template being compiled.
            block: Style import block found in the template.
        """

        identifier = loader_identifier(block.target, AssetKind.STYLE, suffix=self._config.template_suffix)
        context.body = remove_block(context.body, block)
        context.style_loader.add(render_directive(self._config.loader_include, identifier))

    def _compile(self, path: str, block: OwnedBlock) -> str:
        dialect = style_dialect(block.attributes)
        try:
            css = block.body if dialect is None else self._toolchain.compile_style(block.body, dialect)
            if self._config.minify:
                css = self._toolchain.minify_style(css)
        except UnsupportedDialectError as exc:
            raise StyleCompileError(path, str(exc)) from exc
        except (SubprocessExecutionError, OSError, UnicodeDecodeError) as exc:
            raise ToolExecutionError(path, f"Style compilation failed: {exc}") from exc
        return css


__all__ = ["StylePipeline"]
