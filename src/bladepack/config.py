# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the template preprocessor."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ConfigError

PATH_PLACEHOLDER: Final[str] = "$path"
SOURCE_PLACEHOLDER: Final[str] = "$source"
_PATH_PLACEHOLDER_RE: Final[re.Pattern[str]] = re.compile(re.escape(PATH_PLACEHOLDER), re.IGNORECASE)
_SOURCE_PLACEHOLDER_RE: Final[re.Pattern[str]] = re.compile(re.escape(SOURCE_PLACEHOLDER), re.IGNORECASE)

DEFAULT_JS_IMPORT: Final[str] = """
        @push('scripts')
            <script src="{{ asset('$path') }}"></script>
        @endpush
        """

DEFAULT_CSS_IMPORT: Final[str] = """
        @push('css')
            <link href="{{ asset('$path') }}" rel="stylesheet" type="text/css">
        @endpush
        """

DEFAULT_LOADER_INCLUDE: Final[str] = "@include('$path')"
DEFAULT_READY_WRAPPER: Final[str] = "$($source);"
DEFAULT_TEMPLATE_SUFFIX: Final[str] = ".blade.php"


class ToolCommands(BaseModel):
    """Argument vectors for the external compilers and minifiers.

    Every command reads its input from stdin and writes the result to stdout.
    """

    model_config = ConfigDict(validate_assignment=True)

    less: list[str] = Field(default_factory=lambda: ["lessc", "-"])
    scss: list[str] = Field(default_factory=lambda: ["sass", "--stdin"])
    sass: list[str] = Field(default_factory=lambda: ["sass", "--stdin", "--indented"])
    transpile: list[str] = Field(default_factory=lambda: ["babel", "--presets", "@babel/preset-env"])
    minify_script: list[str] = Field(default_factory=lambda: ["uglifyjs", "--compress", "--mangle"])
    minify_script_plain: list[str] = Field(default_factory=lambda: ["uglifyjs"])
    minify_style: list[str] = Field(default_factory=lambda: ["cleancss"])

    @field_validator("*")
    @classmethod
    def _require_executable(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("tool commands must name an executable")
        return value


class Config(BaseModel):
    """Primary configuration container supplied once per build."""

    model_config = ConfigDict(validate_assignment=True)

    js_dist_path: str | None = None
    css_dist_path: str | None = None
    public_root: Path = Path("public")
    views_root: Path = Path("resources/views")
    compiled_root: Path = Path("storage/framework/blade")
    minify: bool = False
    version: str = ""
    js_import: str = DEFAULT_JS_IMPORT
    css_import: str = DEFAULT_CSS_IMPORT
    loader_include: str = DEFAULT_LOADER_INCLUDE
    ready_wrapper: str = DEFAULT_READY_WRAPPER
    template_suffix: str = DEFAULT_TEMPLATE_SUFFIX
    tools: ToolCommands = Field(default_factory=ToolCommands)

    @field_validator("js_import", "css_import", "loader_include")
    @classmethod
    def _require_path_placeholder(cls, value: str) -> str:
        if len(_PATH_PLACEHOLDER_RE.findall(value)) != 1:
            raise ValueError(f"directive templates must contain exactly one {PATH_PLACEHOLDER} placeholder")
        return value

    @field_validator("ready_wrapper")
    @classmethod
    def _require_source_placeholder(cls, value: str) -> str:
        if len(_SOURCE_PLACEHOLDER_RE.findall(value)) != 1:
            raise ValueError(f"ready_wrapper must contain exactly one {SOURCE_PLACEHOLDER} placeholder")
        return value

    @field_validator("js_dist_path", "css_dist_path")
    @classmethod
    def _strip_trailing_slash(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.rstrip("/")

    def require_dist_paths(self) -> None:
        """Ensure both asset distribution paths are configured.

        Raises:
            ConfigError: If ``js_dist_path`` or ``css_dist_path`` is empty.
        """

        if not self.js_dist_path:
            raise ConfigError("Missing js_dist_path option!")
        if not self.css_dist_path:
            raise ConfigError("Missing css_dist_path option!")

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly mapping of the configuration.

        Returns:
            dict[str, object]: Serialised configuration payload.
        """

        return self.model_dump(mode="json")


def render_directive(template: str, path: str) -> str:
    """Substitute ``path`` into the single ``$path`` placeholder of ``template``.

    Args:
        template: Directive template such as :data:`DEFAULT_CSS_IMPORT`.
        path: Value inserted in place of the placeholder.

    Returns:
        str: Rendered directive.
    """

    return _PATH_PLACEHOLDER_RE.sub(lambda _match: path, template, count=1)


def render_ready(template: str, source: str) -> str:
    """Substitute a function's source text into the ready wrapper template."""

    return _SOURCE_PLACEHOLDER_RE.sub(lambda _match: source, template, count=1)


__all__ = [
    "Config",
    "ConfigError",
    "DEFAULT_CSS_IMPORT",
    "DEFAULT_JS_IMPORT",
    "DEFAULT_LOADER_INCLUDE",
    "DEFAULT_READY_WRAPPER",
    "DEFAULT_TEMPLATE_SUFFIX",
    "ToolCommands",
    "render_directive",
    "render_ready",
]
