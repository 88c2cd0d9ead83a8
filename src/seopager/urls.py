# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Canonical pagination URLs.

Path convention (bit-exact):
    page 1   -> {base}
    page N>1 -> {base}/page/{N}/

``base`` never carries a ``/page/N`` segment or a trailing slash; query
strings stay after the path.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit, urlunsplit

_PAGE_SEGMENT_RE = re.compile(r"/page/\d+/?")
_MULTI_SLASH_RE = re.compile(r"/{2,}")


def canonical_base_url(url: str) -> str:
    """Strip any ``/page/N/`` segment and the trailing slash from *url*.

    The fragment is dropped; scheme, host and query are preserved.
    Unparsable input is returned with only the string-level cleanup applied.
    """
    if not url:
        return ""
    try:
        parts = urlsplit(url)
    except ValueError:
        return _PAGE_SEGMENT_RE.sub("/", url).rstrip("/")

    path = _PAGE_SEGMENT_RE.sub("/", parts.path)
    path = _MULTI_SLASH_RE.sub("/", path).rstrip("/")
    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, ""))


def build_page_url(base_url: str, page: int) -> str:
    """Canonical URL of *page* within the listing at *base_url*."""
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    base = canonical_base_url(base_url)
    if page == 1:
        return base

    try:
        parts = urlsplit(base)
    except ValueError:
        return f"{base}/page/{page}/"
    path = f"{parts.path}/page/{page}/"
    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, ""))
