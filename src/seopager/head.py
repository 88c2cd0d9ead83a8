# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""rel=prev / rel=next head links.

Runs once per page-head render, before the listing markup exists, so the
total page count comes from the host's query or from the total the rewriter
remembered on an earlier render. On page 1 with no known total, a pluggable
hint predicate decides whether ``next`` is emitted anyway.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import lxml.html

from . import RequestContext
from .config import PaginationConfig
from .signals import SignalResolver
from .urls import build_page_url

logger = logging.getLogger(__name__)

PaginationHint = Callable[[RequestContext], bool]


def content_signature_hint(signatures: Sequence[str]) -> PaginationHint:
    """Hint: the stored content mentions a known paginated listing module."""
    needles = tuple(s for s in signatures if s)

    def hint(context: RequestContext) -> bool:
        content = context.content or ""
        return any(needle in content for needle in needles)

    return hint


def never_hint(context: RequestContext) -> bool:
    return False


@dataclass(frozen=True, slots=True)
class HeadLink:
    rel: str  # "prev" | "next"
    href: str

    def render(self) -> str:
        el = lxml.html.Element("link")
        el.set("rel", self.rel)
        el.set("href", self.href)
        return lxml.html.tostring(el, encoding="unicode", method="html")


class HeadLinkEmitter:
    """Plans and renders rel=prev/next for one head render. Read-only."""

    def __init__(
        self,
        config: PaginationConfig | None = None,
        resolver: SignalResolver | None = None,
        hint: PaginationHint | None = None,
    ) -> None:
        self._config = config or PaginationConfig()
        self._resolver = resolver or SignalResolver(self._config)
        self._hint = hint if hint is not None else content_signature_hint(self._config.hint_signatures)

    def links(self, context: RequestContext) -> list[HeadLink]:
        signal = self._resolver.resolve_for_head(context)
        current = signal.current_page

        if not signal.has_prev and signal.total_pages <= 1 and not self._hint(context):
            logger.debug("No pagination detected for head links")
            return []

        base_url = context.pagination_base_url()
        links: list[HeadLink] = []
        if signal.has_prev:
            links.append(HeadLink("prev", build_page_url(base_url, current - 1)))
        if not signal.has_prev or signal.has_next:
            links.append(HeadLink("next", build_page_url(base_url, current + 1)))
        return links

    def render(self, context: RequestContext) -> str:
        """Head markup: one ``<link>`` per line, empty when there is nothing to emit."""
        return "".join(f"{link.render()}\n" for link in self.links(context))
