# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Shared helper utilities for pagination test files.

Underscore prefix prevents pytest collection.
These are plain utility functions (not fixtures; conftest.py is reserved
for fixtures).
"""

from __future__ import annotations

from collections.abc import Iterable

import lxml.html

from seopager.fragment import parse_fragment

BASE_URL = "https://example.com/blog"


def page_link(page: int, *, active: bool = False) -> str:
    """One page link as the theme renders it."""
    cls = "page-number js-pagination-page"
    if active:
        cls += " current-page"
    return f'<a class="{cls}" href="#" data-page-id="{page}">{page}</a>'


def jupiter_widget(
    pages: Iterable[int],
    *,
    active: int | None = 1,
    init: int | None = None,
    max_pages: int | None = None,
    display: tuple[int, int] | None = None,
    arrows: bool = True,
    active_as_span: bool = False,
) -> str:
    """Compact ``mk-pagination`` widget markup.

    ``active`` is the page the theme marked current (possibly the wrong one),
    rendered as a marker span with ``active_as_span``;
    ``display`` renders the "Page X of Y" block.
    """
    attrs = ""
    if init is not None:
        attrs += f' data-init-pagination="{init}"'
    if max_pages is not None:
        attrs += f' data-max-pages="{max_pages}"'

    parts = [f'<div class="mk-pagination js-el"{attrs}>']
    if arrows:
        parts.append('<a href="#" class="mk-pagination-previous js-pagination-prev"></a>')
    parts.append('<div class="mk-pagination-inner">')
    for p in pages:
        if p == active and active_as_span:
            parts.append(f'<span class="page-number current-page">{p}</span>')
        else:
            parts.append(page_link(p, active=(p == active)))
    parts.append("</div>")
    if arrows:
        parts.append('<a href="#" class="mk-pagination-next js-pagination-next"></a>')
    if display is not None:
        current, total = display
        parts.append(
            '<div class="mk-total-pages">Page '
            f'<span class="pagination-current-page js-current-page">{current}</span> of '
            f'<span class="pagination-max-pages">{total}</span></div>'
        )
    parts.append("</div>")
    return "".join(parts)


def parse_root(markup: str) -> lxml.html.HtmlElement:
    """Root element of a parsed fragment."""
    return parse_fragment(markup).root


def controls(markup: str) -> list[tuple[str, str, str | None, str]]:
    """(tag, class, href, text) for each child of the inner container."""
    root = parse_root(markup)
    inner = root.xpath(".//*[contains(concat(' ', normalize-space(@class), ' '), ' mk-pagination-inner ')]")[0]
    return [(el.tag, el.get("class", ""), el.get("href"), el.text_content().strip()) for el in inner]


def arrow_href(markup: str, cls: str) -> str | None:
    root = parse_root(markup)
    found = root.xpath(f".//*[contains(concat(' ', normalize-space(@class), ' '), ' {cls} ')]")
    return found[0].get("href") if found else None


def page_url(page: int, base: str = BASE_URL) -> str:
    return base if page == 1 else f"{base}/page/{page}/"
