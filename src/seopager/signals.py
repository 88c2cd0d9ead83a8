# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Page-signal resolution: current page and total page count.

Neither number is handed over reliably, so each is read from an ordered list
of sources. A source returns an int or None; the first non-None wins.

Current page:
  1. container ``data-init-pagination``
  2. "Page X of Y" display: the current-page span
  3. request query vars (``paged``, then ``page``), at least 1

Total pages:
  1. container ``data-max-pages``
  2. highest page number among the page controls
  3. "Page X of Y" display: the max-pages span
  default 1. A total of 1 counts as "no signal" so later sources can still
  find a larger count.

Malformed values coerce to 0 and are ignored; nothing here raises.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

import lxml.html

from . import PaginationSignal, RequestContext
from .cache import TotalPagesCache, total_pages_key
from .config import PaginationConfig, WidgetMarkup
from .elements import PageEllipsis, coerce_int, find_container, find_inner, iter_controls
from .fragment import class_xpath, text_of

logger = logging.getLogger(__name__)

SignalSource = Callable[[lxml.html.HtmlElement, RequestContext, WidgetMarkup], int | None]


def _positive(value: int) -> int | None:
    return value if value > 0 else None


# ---------------------------------------------------------------------------
# Current-page sources
# ---------------------------------------------------------------------------


def read_init_attr(root: lxml.html.HtmlElement, context: RequestContext, markup: WidgetMarkup) -> int | None:
    container = find_container(root, markup)
    if container is None:
        return None
    return _positive(coerce_int(container.get(markup.init_page_attr)))


def read_current_display(root: lxml.html.HtmlElement, context: RequestContext, markup: WidgetMarkup) -> int | None:
    spans = " or ".join(class_xpath(name) for name in markup.current_display_classes)
    found = root.xpath(f".//*[{class_xpath(markup.totals_class)}]//*[{spans}]")
    if not found:
        return None
    return _positive(coerce_int(text_of(found[0])))


def read_query_vars(root: lxml.html.HtmlElement | None, context: RequestContext, markup: WidgetMarkup) -> int | None:
    return current_page_from_query(context)


def current_page_from_query(context: RequestContext) -> int:
    paged = coerce_int(context.query_var("paged"))
    if not paged:
        paged = coerce_int(context.query_var("page"))  # static front page
    return max(1, paged)


CURRENT_PAGE_SOURCES: tuple[SignalSource, ...] = (read_init_attr, read_current_display, read_query_vars)


# ---------------------------------------------------------------------------
# Total-page sources
# ---------------------------------------------------------------------------


def _more_than_one(value: int) -> int | None:
    return value if value > 1 else None


def read_max_attr(root: lxml.html.HtmlElement, context: RequestContext, markup: WidgetMarkup) -> int | None:
    container = find_container(root, markup)
    if container is None:
        return None
    return _more_than_one(coerce_int(container.get(markup.max_pages_attr)))


def read_highest_control(root: lxml.html.HtmlElement, context: RequestContext, markup: WidgetMarkup) -> int | None:
    pages = [coerce_int(a.get(markup.page_id_attr)) for a in root.xpath(f".//a[@{markup.page_id_attr}]")]
    inner = find_inner(root, markup)
    if inner is not None:
        pages.extend(item.page for item in iter_controls(inner, markup) if not isinstance(item, PageEllipsis))
    return _more_than_one(max(pages, default=0))


def read_max_display(root: lxml.html.HtmlElement, context: RequestContext, markup: WidgetMarkup) -> int | None:
    found = root.xpath(f".//*[{class_xpath(markup.max_display_class)}]")
    if not found:
        return None
    return _more_than_one(coerce_int(text_of(found[0])))


TOTAL_PAGES_SOURCES: tuple[SignalSource, ...] = (read_max_attr, read_highest_control, read_max_display)


def first_signal(
    sources: Sequence[SignalSource],
    root: lxml.html.HtmlElement,
    context: RequestContext,
    markup: WidgetMarkup,
) -> int | None:
    """Value of the first source that reports one."""
    for source in sources:
        value = source(root, context, markup)
        if value is not None:
            logger.debug("Pagination signal from %s: %d", source.__name__, value)
            return value
    return None


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------


class SignalResolver:
    """Resolves PaginationSignal for markup (rewriter) or for a head render (emitter)."""

    def __init__(
        self,
        config: PaginationConfig | None = None,
        cache: TotalPagesCache | None = None,
        *,
        current_sources: Sequence[SignalSource] = CURRENT_PAGE_SOURCES,
        total_sources: Sequence[SignalSource] = TOTAL_PAGES_SOURCES,
    ) -> None:
        self._config = config or PaginationConfig()
        self._cache = cache
        self._current_sources = tuple(current_sources)
        self._total_sources = tuple(total_sources)

    def resolve(self, root: lxml.html.HtmlElement, context: RequestContext) -> PaginationSignal:
        """Signal from parsed markup. Remembers totals > 1 for later head renders."""
        markup = self._config.markup
        current = first_signal(self._current_sources, root, context, markup) or 1
        total = first_signal(self._total_sources, root, context, markup) or 1

        if total > 1:
            self.remember_total(context, total)
        return PaginationSignal(current_page=current, total_pages=total)

    def resolve_for_head(self, context: RequestContext) -> PaginationSignal:
        """Signal without markup: query vars, host total, remembered total."""
        current = current_page_from_query(context)
        total = max(0, coerce_int(context.max_num_pages))
        cached = self.cached_total(context)
        if cached and cached > total:
            total = cached
        return PaginationSignal(current_page=current, total_pages=total)

    # -- cache --

    def _key(self, context: RequestContext) -> str | None:
        if context.content_id is None or context.content_id == "":
            return None
        return total_pages_key(context.content_id, self._config.cache_key_prefix)

    def remember_total(self, context: RequestContext, total: int) -> None:
        key = self._key(context)
        if key is None or self._cache is None:
            return
        try:
            self._cache.set(key, total, self._config.cache_ttl)
        except Exception as e:  # cache backend is best-effort
            logger.warning("Failed to remember total pages for %s: %s", key, e)

    def cached_total(self, context: RequestContext) -> int:
        key = self._key(context)
        if key is None or self._cache is None:
            return 0
        try:
            return max(0, coerce_int(self._cache.get(key)))
        except Exception as e:
            logger.warning("Failed to read remembered total pages for %s: %s", key, e)
            return 0
