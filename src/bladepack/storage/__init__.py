# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Blob stores backing assets, compiled templates and fingerprint records."""

from __future__ import annotations

from .store import BlobStore, FileStore, MemoryStore, StoreKey, normalize_key

__all__ = ["BlobStore", "FileStore", "MemoryStore", "StoreKey", "normalize_key"]
