# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the fingerprint cache."""

import hashlib

import pytest

from bladepack.cache import FingerprintCache, fingerprint
from bladepack.errors import StaleCacheReadError
from bladepack.storage import MemoryStore


def test_fingerprint_is_md5_of_text_and_version() -> None:
    expected = hashlib.md5(b"<p>hi</p>v1").hexdigest()
    assert fingerprint("<p>hi</p>", "v1") == expected
    assert fingerprint("<p>hi</p>", "v1") == fingerprint("<p>hi</p>", "v1")


def test_fingerprint_changes_with_text_or_version() -> None:
    base = fingerprint("<p>hi</p>", "v1")
    assert fingerprint("<p>hI</p>", "v1") != base
    assert fingerprint("<p>hi</p>", "v2") != base


def test_should_recompile_until_committed() -> None:
    store = MemoryStore()
    cache = FingerprintCache(store, "compiled")

    assert cache.should_recompile("a.blade.php", "text", "v1")
    cache.commit("a.blade.php", "text", "v1")

    assert store["compiled/a.blade.php.md5"] == fingerprint("text", "v1")
    assert not cache.should_recompile("a.blade.php", "text", "v1")
    assert cache.should_recompile("a.blade.php", "text!", "v1")
    assert cache.should_recompile("a.blade.php", "text", "v2")


def test_record_comparison_ignores_letter_case() -> None:
    store = MemoryStore({"compiled/a.blade.php.md5": fingerprint("text", "").upper() + "\n"})
    cache = FingerprintCache(store, "compiled")

    assert not cache.should_recompile("a.blade.php", "text", "")


def test_empty_record_counts_as_miss() -> None:
    store = MemoryStore({"compiled/a.blade.php.md5": ""})
    cache = FingerprintCache(store, "compiled")

    assert cache.stored("a.blade.php") is None
    assert cache.should_recompile("a.blade.php", "", "")


def test_load_previous_output_roundtrip_and_stale_error() -> None:
    cache = FingerprintCache(MemoryStore(), "compiled")

    with pytest.raises(StaleCacheReadError) as excinfo:
        cache.load_previous_output("pages/home.blade.php")
    assert excinfo.value.path == "pages/home.blade.php"

    cache.store_output("pages/home.blade.php", "<h1>done</h1>")
    assert cache.load_previous_output("pages/home.blade.php") == "<h1>done</h1>"
