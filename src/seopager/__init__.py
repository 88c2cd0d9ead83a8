# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""seopager: crawlable pagination for theme-rendered listing widgets.

Rewrites script-driven pagination markup into plain links:
- page links carry canonical ``/page/N/`` URLs
- a sliding window bounds the visible page links (edges + ellipses)
- rel=prev/next head links are emitted for crawlers
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from .urls import canonical_base_url

__version__ = "1.4.3"


@dataclass(frozen=True, slots=True)
class PaginationSignal:
    """Current page and total page count resolved for one render.

    ``total_pages == 0`` means the total is unknown, not that there are no pages.
    """

    current_page: int = 1
    total_pages: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "current_page", max(1, int(self.current_page)))
        object.__setattr__(self, "total_pages", max(0, int(self.total_pages)))

    @property
    def has_prev(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages


@dataclass(frozen=True, slots=True)
class RequestContext:
    """Per-render inputs handed over by the host application."""

    url: str = ""  # current request URL, may still contain /page/N/
    base_url: str = ""  # explicit canonical listing URL (wins over url)
    query_vars: Mapping[str, object] = field(default_factory=dict)  # paged / page
    content_id: str | int | None = None  # cache key for the remembered total
    max_num_pages: int = 0  # total from the host's own query, 0 if unknown
    content: str = ""  # raw stored content, read by head-link hints

    def pagination_base_url(self) -> str:
        return canonical_base_url(self.base_url or self.url)

    def query_var(self, name: str) -> object:
        return self.query_vars.get(name)
