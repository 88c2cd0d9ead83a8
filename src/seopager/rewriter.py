# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Pagination rewriter: script-driven widget markup in, crawlable links out.

Pipeline (one call per render, synchronous):
  1. cheap substring check for the widget; absent -> markup returned as is
  2. parse the fragment (lxml)
  3. resolve current page / total pages (signals.py)
  4a. total > window_size: plan the sliding window and rebuild the controls
  4b. otherwise: correct the active marker only
  5. href pass: canonical URLs on links, ellipses and prev/next arrows,
     script hooks stripped
  6. serialize

Failures never escape: unparsable markup, missing controls or a missing
container leave the markup (or that step) as received.
"""

from __future__ import annotations

import logging

import lxml.html

from . import PaginationSignal, RequestContext
from .cache import TotalPagesCache
from .config import PaginationConfig
from .corrector import correct_current_page
from .elements import (
    CurrentMarker,
    PageEllipsis,
    PageLink,
    coerce_int,
    find_inner,
    inventory,
    iter_controls,
    materialize,
    normalize_marker,
)
from .errors import MissingContainer, ParseFailure, SignalAmbiguous
from .fragment import class_xpath, detach, has_class, parse_fragment, remove_classes, serialize_fragment
from .logging_config import render_context
from .signals import SignalResolver
from .urls import build_page_url
from .window import WindowPlan, plan_window

logger = logging.getLogger(__name__)


class PaginationRewriter:
    """Rewrites the pagination widget inside host markup."""

    def __init__(
        self,
        config: PaginationConfig | None = None,
        cache: TotalPagesCache | None = None,
        *,
        resolver: SignalResolver | None = None,
    ) -> None:
        self._config = config or PaginationConfig()
        self._resolver = resolver or SignalResolver(self._config, cache)

    @property
    def config(self) -> PaginationConfig:
        return self._config

    def detect(self, markup_html: str) -> bool:
        """True when *markup_html* may contain the widget."""
        return bool(markup_html) and any(m in markup_html for m in self._config.markup.detection_markers)

    def rewrite(self, markup_html: str, context: RequestContext | None = None) -> str:
        """Return *markup_html* with its pagination rewritten (or unchanged)."""
        if not self.detect(markup_html):
            return markup_html
        context = context or RequestContext()

        with render_context(content_id=context.content_id, url=context.url or context.base_url):
            try:
                fragment = parse_fragment(markup_html)
                signal = self.rewrite_tree(fragment.root, context)
            except ParseFailure as e:
                logger.warning("Pagination markup left as received: %s", e)
                return markup_html
            except SignalAmbiguous as e:
                logger.debug("Pagination markup left as received: %s", e)
                return markup_html

            logger.debug(
                "Pagination rewritten: page %d of %d",
                signal.current_page,
                signal.total_pages,
            )
            return serialize_fragment(fragment)

    def rewrite_tree(self, root: lxml.html.HtmlElement, context: RequestContext) -> PaginationSignal:
        """Rewrite the widget under *root* in place.

        Raises:
            SignalAmbiguous: no page controls under *root*.
        """
        markup = self._config.markup
        inner = find_inner(root, markup)
        has_links = bool(root.xpath(f".//a[@{markup.page_id_attr}]"))
        has_controls = inner is not None and next(iter_controls(inner, markup), None) is not None
        if not has_links and not has_controls:
            raise SignalAmbiguous("No pagination controls in markup")

        signal = self._resolver.resolve(root, context)

        try:
            if signal.total_pages > self._config.window_size:
                plan = plan_window(signal.current_page, signal.total_pages, self._config.window_size)
                self.apply_plan(root, plan)
            else:
                correct_current_page(root, signal.current_page, markup)
        except MissingContainer as e:
            logger.debug("%s; controls left in place", e)

        self.fix_links(root, signal, context.pagination_base_url())
        return signal

    def apply_plan(self, root: lxml.html.HtmlElement, plan: WindowPlan) -> None:
        """Replace every control in the inner container with the planned ones, in plan order.

        Raises:
            MissingContainer: no inner container in the tree.
        """
        markup = self._config.markup
        inner = find_inner(root, markup)
        if inner is None:
            raise MissingContainer("No pagination inner container", selector=markup.inner_class)

        existing = inventory(inner, markup)
        planned = [materialize(entry, plan.current_page, existing, markup) for entry in plan]

        for item in list(iter_controls(inner, markup)):
            detach(item.element)
        for el in planned:
            inner.append(el)
        logger.debug("Window plan applied: %s", plan)

    def fix_links(self, root: lxml.html.HtmlElement, signal: PaginationSignal, base_url: str) -> None:
        """Point every control at its canonical URL and strip the script hooks."""
        markup = self._config.markup

        inner = find_inner(root, markup)
        if inner is not None:
            for item in iter_controls(inner, markup):
                el = item.element
                if isinstance(item, PageLink):
                    el.set("href", build_page_url(base_url, item.page))
                elif isinstance(item, PageEllipsis):
                    if item.page > 0 and el.tag == "a":
                        el.set("href", build_page_url(base_url, item.page))
                elif isinstance(item, CurrentMarker) and has_class(el, markup.current_class):
                    normalize_marker(el, markup)

        # page links outside the inner container
        for a in root.xpath(f".//a[@{markup.page_id_attr}]"):
            if inner is not None and inner in a.iterancestors():
                continue
            page = coerce_int(a.get(markup.page_id_attr))
            if page > 0:
                a.set("href", build_page_url(base_url, page))

        self._fix_arrows(root, signal, base_url)

        hook_classes = markup.hook_classes
        hook_query = " or ".join(
            [class_xpath(name) for name in hook_classes] + [f"@{attr}" for attr in markup.hook_attrs]
        )
        for el in root.xpath(f".//*[{hook_query}]"):
            remove_classes(el, *hook_classes)
            for attr in markup.hook_attrs:
                el.attrib.pop(attr, None)

    def _fix_arrows(self, root: lxml.html.HtmlElement, signal: PaginationSignal, base_url: str) -> None:
        markup = self._config.markup
        prev_query = f"{class_xpath(markup.prev_class)} or {class_xpath(markup.prev_hook_class)}"
        if signal.has_prev:
            prev_url = build_page_url(base_url, signal.current_page - 1)
            for el in root.xpath(f".//*[{prev_query}]"):
                el.set("href", prev_url)

        next_query = f"{class_xpath(markup.next_class)} or {class_xpath(markup.next_hook_class)}"
        if signal.has_next:
            next_url = build_page_url(base_url, signal.current_page + 1)
            for el in root.xpath(f".//*[{next_query}]"):
                el.set("href", next_url)
