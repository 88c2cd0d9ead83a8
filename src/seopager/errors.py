# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""seopager exception hierarchy.

All seopager-specific errors inherit from SeoPagerError. None of them is
fatal to a render: the rewriter catches each one and hands back the markup
it received.
"""

from __future__ import annotations


class SeoPagerError(Exception):
    """Base exception for all seopager errors."""


class ParseFailure(SeoPagerError):
    """Fragment could not be parsed into a tree."""


FragmentParseError = ParseFailure


class SignalAmbiguous(SeoPagerError):
    """No usable pagination controls or page signal in the fragment."""


class MissingContainer(SeoPagerError):
    """The pagination container a rewrite step relies on is absent."""

    def __init__(self, message: str, *, selector: str = "") -> None:
        super().__init__(message)
        self.selector = selector
