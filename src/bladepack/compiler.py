# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-template compilation engine.

The engine gates work on the fingerprint cache, extracts the scoped and
imported blocks, compiles owned assets, writes the loader fragments, cleans the
body, and finally persists the compiled template followed by its fingerprint.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .cache import FingerprintCache, fingerprint
from .config import Config
from .context import CompileContext
from .errors import AssetWriteError, CompileError
from .extract import find_block
from .loaders import LoaderFragmentGenerator
from .models import BlockKind, CompiledAsset, LoaderFragment, SourceFile
from .naming import to_posix
from .rewrite import strip_build_markers
from .sandbox import ScriptSandbox
from .scripts import ScriptPipeline
from .storage import BlobStore
from .styles import StylePipeline
from .tooling import CommandToolchain, Toolchain

LOGGER = logging.getLogger(__name__)


class FileStatus(str, Enum):
    """Enumerate the outcomes of processing one template."""

    COMPILED = "compiled"
    CACHED = "cached"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(slots=True)
class FileResult:
    """Capture the outcome of processing one template."""

    path: str
    status: FileStatus
    output: str | None = None
    error: CompileError | None = None
    assets: list[CompiledAsset] = field(default_factory=list)
    loaders: list[LoaderFragment] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Return ``True`` unless the template failed to compile."""

        return self.status is not FileStatus.FAILED


class Compiler:
    """Compile templates one at a time against an explicit blob store."""

    def __init__(
        self,
        config: Config,
        store: BlobStore,
        *,
        toolchain: Toolchain | None = None,
        sandbox: ScriptSandbox | None = None,
    ) -> None:
        """Initialise the compiler.

        Args:
            config: Build configuration; both distribution paths are required.
            store: Store holding assets, compiled templates, fingerprint records
                and the files named by script ``include`` entries.
            toolchain: External compilers and minifiers. Defaults to the
                command-line tools declared in ``config.tools``.
            sandbox: Evaluator for scoped script blocks.

        Raises:
            ConfigError: If a required distribution path is missing.
        """

        config.require_dist_paths()
        self._config = config
        self._store = store
        resolved_toolchain = toolchain or CommandToolchain(config.tools)
        self._cache = FingerprintCache(store, config.compiled_root.as_posix())
        self._styles = StylePipeline(config, store, resolved_toolchain)
        self._scripts = ScriptPipeline(config, store, resolved_toolchain, sandbox or ScriptSandbox())
        self._loaders = LoaderFragmentGenerator(config, store)
        self._stages: tuple[tuple[BlockKind, Callable[[CompileContext, Any], object]], ...] = (
            (BlockKind.OWNED_STYLE, self._styles.compile_owned),
            (BlockKind.IMPORTED_STYLE, self._styles.link_imported),
            (BlockKind.OWNED_SCRIPT, self._scripts.compile_owned),
            (BlockKind.IMPORTED_SCRIPT, self._scripts.link_imported),
        )

    @property
    def config(self) -> Config:
        """Return the active configuration."""

        return self._config

    @property
    def cache(self) -> FingerprintCache:
        """Return the fingerprint cache gating recompilation."""

        return self._cache

    def compile(self, source: SourceFile) -> FileResult:
        """Process one template.

        Args:
            source: Template path relative to the views root plus its text.

        Returns:
            FileResult: ``compiled`` or ``cached`` with the final output, or
            ``skipped`` when the input carries no text.

        Raises:
            CompileError: If any stage fails; nothing is persisted for the
                template's output or fingerprint in that case.
        """

        path = to_posix(source.path)
        if source.text is None:
            return FileResult(path=path, status=FileStatus.SKIPPED)

        version = self._config.version
        if not self._cache.should_recompile(path, source.text, version):
            return FileResult(path=path, status=FileStatus.CACHED, output=self._cache.load_previous_output(path))

        LOGGER.info("compiling %s", path)
        context = CompileContext.create(path, source.text, fingerprint(source.text, version), config=self._config)
        try:
            self._run_stages(context)
            loaders = self._loaders.emit(context)
            output = strip_build_markers(context.body)
            self._cache.store_output(path, output)
            self._cache.commit(path, source.text, version)
        except OSError as exc:
            raise AssetWriteError(path, f"Cannot write build output: {exc}") from exc
        return FileResult(
            path=path,
            status=FileStatus.COMPILED,
            output=output,
            assets=list(context.assets),
            loaders=loaders,
        )

    def _run_stages(self, context: CompileContext) -> None:
        # Each kind is searched in the body left by the previous stage.
        suffix = self._config.template_suffix
        for kind, stage in self._stages:
            block = find_block(kind, context.body, current_path=context.path, suffix=suffix)
            if block is not None:
                stage(context, block)

    def run(self, sources: Iterable[SourceFile]) -> Iterator[FileResult]:
        """Compile ``sources`` in order, isolating per-template failures.

        Args:
            sources: Templates supplied by the build driver.

        Yields:
            FileResult: One result per template; failures carry the
            :class:`CompileError` and the run continues with the next template.
        """

        for source in sources:
            try:
                yield self.compile(source)
            except CompileError as exc:
                LOGGER.warning("failed %s: %s", exc.path, exc)
                yield FileResult(path=exc.path, status=FileStatus.FAILED, error=exc)


__all__ = ["Compiler", "FileResult", "FileStatus"]
