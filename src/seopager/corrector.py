# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Current-page correction for widgets that need no sliding window.

The theme sometimes marks the wrong page active. Every active class in the
inner container is dropped, then the control for the real current page is
made the (single) current marker: a link is swapped for a marker span in
place, an existing marker gets its active class back. Markers standing for
any other page are turned back into links. If no control stands for the
current page the widget is left without a marker.
"""

from __future__ import annotations

import logging

import lxml.html

from .config import WidgetMarkup
from .elements import (
    CurrentMarker,
    PageLink,
    find_inner,
    iter_controls,
    make_current_marker,
    make_link,
    normalize_marker,
)
from .errors import MissingContainer
from .fragment import class_xpath, remove_classes, replace_keeping_tail, text_of

logger = logging.getLogger(__name__)


def correct_current_page(root: lxml.html.HtmlElement, current_page: int, markup: WidgetMarkup) -> bool:
    """Fix the active marker in place. Returns True when a marker exists afterwards.

    Raises:
        MissingContainer: no inner container in the tree.
    """
    inner = find_inner(root, markup)
    if inner is None:
        raise MissingContainer("No pagination inner container", selector=markup.inner_class)

    for el in inner.xpath(f".//*[{class_xpath(markup.current_class)}]"):
        remove_classes(el, markup.current_class)

    target = None
    stale: list[CurrentMarker] = []
    for item in iter_controls(inner, markup):
        if item.page != current_page:
            if isinstance(item, CurrentMarker):
                stale.append(item)
        elif isinstance(item, PageLink):
            if not isinstance(target, PageLink):
                target = item
        elif isinstance(item, CurrentMarker) and target is None:
            target = item

    # markers for other pages become links again
    for item in stale:
        link = make_link(item.page, markup, text=text_of(item.element))
        replace_keeping_tail(item.element, link)

    if target is None:
        logger.debug("No control for current page %d; leaving widget without marker", current_page)
        return False

    if target.element.tag == "a":
        marker = make_current_marker(current_page, markup, text=text_of(target.element))
        replace_keeping_tail(target.element, marker)
    else:
        normalize_marker(target.element, markup)
    return True
