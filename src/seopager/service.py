# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Host-facing facade.

One ``SeoPagination`` per process. The host calls, per render:
- ``head_links(context)`` while rendering ``<head>``
- ``filter_content(markup, context)`` on each piece of listing markup
- ``script()`` once, to inline the client-side disable snippet

The rewriter and the head emitter share one resolver, so a total learned
from markup is visible to later head renders through the cache.
"""

from __future__ import annotations

from . import RequestContext
from .cache import InMemoryTotalsCache, TotalPagesCache
from .config import PaginationConfig
from .head import HeadLinkEmitter, PaginationHint
from .rewriter import PaginationRewriter
from .signals import SignalResolver
from .snippet import disable_ajax_script


class SeoPagination:
    def __init__(
        self,
        config: PaginationConfig | None = None,
        cache: TotalPagesCache | None = None,
        hint: PaginationHint | None = None,
    ) -> None:
        self.config = config or PaginationConfig.from_env()
        self.cache = cache if cache is not None else InMemoryTotalsCache()
        self.resolver = SignalResolver(self.config, self.cache)
        self.rewriter = PaginationRewriter(self.config, resolver=self.resolver)
        self.emitter = HeadLinkEmitter(self.config, self.resolver, hint)

    def filter_content(self, markup: str, context: RequestContext) -> str:
        return self.rewriter.rewrite(markup, context)

    def head_links(self, context: RequestContext) -> str:
        return self.emitter.render(context)

    def script(self) -> str:
        return disable_ajax_script(self.config.markup)
