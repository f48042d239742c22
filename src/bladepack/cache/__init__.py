# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Fingerprint-based memoisation of template compilation."""

from __future__ import annotations

from .fingerprint import FINGERPRINT_SUFFIX, FingerprintCache, fingerprint

__all__ = ["FINGERPRINT_SUFFIX", "FingerprintCache", "fingerprint"]
