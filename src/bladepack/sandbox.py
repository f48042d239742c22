# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Isolated evaluation of scoped script blocks to harvest their exports.

Each block runs in a fresh V8 context with no host bindings. Only an
``exports`` object is visible to the block. Timer globals are deleted from the
global object and shadowed by parameters, and the context is closed afterwards,
so no callback can outlive the evaluation.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Final

from py_mini_racer import MiniRacer

from .errors import SandboxExecutionError
from .models import ScriptMetadata

SHADOWED_GLOBALS: Final[tuple[str, ...]] = (
    "setTimeout",
    "setInterval",
    "setImmediate",
    "clearTimeout",
    "clearInterval",
    "queueMicrotask",
)

_HARNESS: Final[str] = """
(function () {
  %(names)s.forEach(function (name) {
    delete globalThis[name];
    if (typeof globalThis[name] !== "undefined") {
      globalThis[name] = undefined;
    }
  });
  var harvested = (function (exports, %(shadowed)s) {
%(body)s
;
    return exports;
  })({required: [], include: [], init: null, ready: null});
  function strings(value) {
    if (!Array.isArray(value)) {
      return [];
    }
    return value.filter(function (item) { return typeof item === "string"; });
  }
  function source(value) {
    return typeof value === "function" ? Function.prototype.toString.call(value) : null;
  }
  harvested = harvested || {};
  return JSON.stringify({
    required: strings(harvested.required),
    include: strings(harvested.include),
    init: source(harvested.init),
    ready: source(harvested.ready)
  });
})()
"""


def build_harness(body: str) -> str:
    """Wrap a block ``body`` in the evaluation harness.

    Args:
        body: Script text captured from a scoped script block.

    Returns:
        str: JavaScript expression evaluating to the JSON-encoded exports.
    """

    return _HARNESS % {
        "names": json.dumps(list(SHADOWED_GLOBALS)),
        "shadowed": ", ".join(SHADOWED_GLOBALS),
        "body": body,
    }


def _coerce_metadata(payload: Mapping[str, object]) -> ScriptMetadata:
    def _strings(key: str) -> tuple[str, ...]:
        value = payload.get(key)
        if not isinstance(value, list):
            return ()
        return tuple(item for item in value if isinstance(item, str))

    def _source(key: str) -> str | None:
        value = payload.get(key)
        return value if isinstance(value, str) else None

    return ScriptMetadata(
        required=_strings("required"),
        include=_strings("include"),
        init=_source("init"),
        ready=_source("ready"),
    )


class ScriptSandbox:
    """Evaluate scoped script blocks inside throwaway V8 contexts."""

    def harvest(self, path: str, body: str) -> ScriptMetadata:
        """Run ``body`` and return the metadata it exported.

        Args:
            path: Template path used when reporting failures.
            body: Script text captured from the scoped script block.

        Returns:
            ScriptMetadata: Harvested ``required``/``include`` lists and the
            source text of ``init``/``ready`` callables.

        Raises:
            SandboxExecutionError: If the block fails to parse or throws.
        """

        context = MiniRacer()
        try:
            raw = context.eval(build_harness(body))
        except Exception as exc:
            raise SandboxExecutionError(path, f"Script block raised {exc}") from exc
        finally:
            context.close()
        if not isinstance(raw, str):
            raise SandboxExecutionError(path, "Script block produced no exports")
        payload = json.loads(raw)
        return _coerce_metadata(payload if isinstance(payload, dict) else {})


__all__ = ["SHADOWED_GLOBALS", "ScriptSandbox", "build_harness"]
