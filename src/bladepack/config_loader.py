# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Config loading utilities with layered precedence."""

from __future__ import annotations

import copy
import tomllib
from collections.abc import Mapping, MutableMapping, Sequence
from pathlib import Path
from typing import Any, Final, Protocol

from pydantic import ValidationError

from .config import Config
from .errors import ConfigError

PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "bladepack"
PROJECT_CONFIG_NAME: Final[str] = ".bladepack.toml"


class ConfigSource(Protocol):
    """Provide a named configuration fragment."""

    name: str

    def load(self) -> Mapping[str, Any]:
        """Return the raw configuration fragment contributed by this source."""
        ...


class DefaultConfigSource:
    """Return the built-in defaults as a configuration fragment."""

    name = "defaults"

    def load(self) -> Mapping[str, Any]:
        return Config().to_dict()


class TomlConfigSource:
    """Load configuration data from a standalone TOML document."""

    def __init__(self, path: Path, *, name: str | None = None) -> None:
        self._path = path
        self.name = name or str(path)

    def load(self) -> Mapping[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("rb") as handle:
                data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in {self._path}: {exc}") from exc
        if not isinstance(data, MutableMapping):
            raise ConfigError(f"Configuration at {self._path} must be a table")
        return dict(data)


class PyProjectConfigSource(TomlConfigSource):
    """Read configuration from ``[tool.bladepack]`` within ``pyproject.toml``."""

    def load(self) -> Mapping[str, Any]:
        data = super().load()
        tool_section = data.get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(PYPROJECT_SECTION_KEY)
        if not isinstance(section, Mapping):
            return {}
        return dict(section)


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``base`` recursively updated with ``override``.

    Args:
        base: Mapping providing default values.
        override: Mapping whose values take precedence.

    Returns:
        dict[str, Any]: New merged mapping; inputs are left untouched.
    """

    merged: dict[str, Any] = copy.deepcopy(dict(base))
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class ConfigLoader:
    """Apply layered configuration sources with predictable precedence."""

    def __init__(self, *, project_root: Path, sources: Sequence[ConfigSource]) -> None:
        """Initialise a loader that merges the supplied configuration sources.

        Args:
            project_root: Directory that anchors relative paths.
            sources: Ordered collection of configuration sources, lowest
                precedence first.

        Raises:
            ValueError: If no sources are supplied.
        """

        if not sources:
            raise ValueError("at least one configuration source is required")
        self._project_root = project_root.resolve()
        self._sources = list(sources)

    @classmethod
    def for_root(cls, project_root: Path, *, project_config: Path | None = None) -> ConfigLoader:
        """Build a loader that respects defaults, ``pyproject.toml`` and project files.

        Args:
            project_root: Workspace root used to discover configuration files.
            project_config: Optional project-level override path.

        Returns:
            ConfigLoader: Loader configured with default precedence ordering.
        """

        root = project_root.resolve()
        project_file = project_config if project_config is not None else root / PROJECT_CONFIG_NAME
        sources: list[ConfigSource] = [DefaultConfigSource()]
        pyproject = root / "pyproject.toml"
        if pyproject.exists():
            sources.append(PyProjectConfigSource(pyproject))
        sources.append(TomlConfigSource(project_file))
        return cls(project_root=root, sources=sources)

    @property
    def project_root(self) -> Path:
        """Return the resolved project root."""

        return self._project_root

    def load(self, overrides: Mapping[str, Any] | None = None) -> Config:
        """Return the merged configuration with optional caller overrides.

        Args:
            overrides: Highest-precedence values, typically from the CLI.
                ``None`` values are ignored.

        Returns:
            Config: Fully merged configuration model.

        Raises:
            ConfigError: If a source is malformed or validation fails.
        """

        merged: dict[str, Any] = {}
        for source in self._sources:
            fragment = source.load()
            if fragment:
                merged = _deep_merge(merged, fragment)
        if overrides:
            merged = _deep_merge(merged, {key: value for key, value in overrides.items() if value is not None})
        try:
            return Config.model_validate(merged)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc


__all__ = [
    "ConfigLoader",
    "ConfigSource",
    "DefaultConfigSource",
    "PROJECT_CONFIG_NAME",
    "PyProjectConfigSource",
    "TomlConfigSource",
]
