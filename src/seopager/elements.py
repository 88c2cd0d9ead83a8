# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tagged element model for pagination controls.

Every control inside the widget's inner container is classified as one of:
- PageLink: clickable link to a page
- CurrentMarker: non-interactive indicator of the active page
- PageEllipsis: clickable placeholder jumping to the first hidden page of a gap

The rewriter works on this model in three steps: ``inventory`` the existing
controls, plan, then ``materialize`` one fresh lxml element per plan entry.
"""

from __future__ import annotations

import copy
import re
from collections.abc import Iterator
from dataclasses import dataclass

import lxml.html

from .config import WidgetMarkup
from .fragment import class_tokens, class_xpath, has_class, remove_classes, set_classes, text_of
from .window import PlanEntry

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")

_ELLIPSIS_TEXTS = frozenset({"...", "…"})

PLACEHOLDER_HREF = "#"


def coerce_int(value: object) -> int:
    """Loose integer parse: leading digits win, anything else is 0.

    ``"12"`` -> 12, ``" 7 pages"`` -> 7, ``"abc"`` / ``None`` / ``"..."`` -> 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    m = _LEADING_INT_RE.match(str(value))
    if not m:
        return 0
    try:
        return int(m.group(1))
    except ValueError:  # past the int/str conversion digit limit
        return 0


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PageLink:
    page: int
    element: lxml.html.HtmlElement | None = None


@dataclass(frozen=True, slots=True)
class CurrentMarker:
    page: int
    element: lxml.html.HtmlElement | None = None


@dataclass(frozen=True, slots=True)
class PageEllipsis:
    page: int  # target: first hidden page of the gap (0 if unknown)
    element: lxml.html.HtmlElement | None = None


PageElement = PageLink | CurrentMarker | PageEllipsis


# ---------------------------------------------------------------------------
# Locating
# ---------------------------------------------------------------------------


def find_container(root: lxml.html.HtmlElement, markup: WidgetMarkup) -> lxml.html.HtmlElement | None:
    """Outer widget element; one carrying page-count attributes is preferred."""
    predicate = class_xpath(markup.container_class)
    with_attrs = root.xpath(f".//*[{predicate} and (@{markup.init_page_attr} or @{markup.max_pages_attr})]")
    if with_attrs:
        return with_attrs[0]
    found = root.xpath(f".//*[{predicate}]")
    return found[0] if found else None


def find_inner(root: lxml.html.HtmlElement, markup: WidgetMarkup) -> lxml.html.HtmlElement | None:
    """Element holding the page controls."""
    found = root.xpath(f".//*[{class_xpath(markup.inner_class)}]")
    return found[0] if found else None


def is_ellipsis(el: lxml.html.HtmlElement, markup: WidgetMarkup) -> bool:
    if has_class(el, markup.ellipsis_class):
        return True
    if el.get(markup.page_id_attr) == markup.ellipsis_text:
        return True
    return el.get(markup.ellipsis_page_attr) is not None or (
        el.tag == "a" and text_of(el) in _ELLIPSIS_TEXTS | {markup.ellipsis_text}
    )


def page_number_of(el: lxml.html.HtmlElement, markup: WidgetMarkup) -> int:
    """Page a control stands for: ``data-page-id`` first, then its text."""
    page_id = el.get(markup.page_id_attr)
    if page_id:
        return coerce_int(page_id)
    return coerce_int(text_of(el))


def classify(el: lxml.html.HtmlElement, markup: WidgetMarkup) -> PageElement | None:
    """Classify one element of the inner container, or None if it is not a control."""
    if not isinstance(el.tag, str):
        return None
    if is_ellipsis(el, markup):
        return PageEllipsis(page=coerce_int(el.get(markup.ellipsis_page_attr)), element=el)

    tokens = class_tokens(el)
    is_control = (
        markup.current_class in tokens
        or markup.page_class in tokens
        or markup.page_hook_class in tokens
        or el.get(markup.page_id_attr) is not None
    )
    if not is_control:
        return None

    page = page_number_of(el, markup)
    if page <= 0:
        return None
    if markup.current_class in tokens or el.tag != "a":
        return CurrentMarker(page=page, element=el)
    return PageLink(page=page, element=el)


def iter_controls(inner: lxml.html.HtmlElement, markup: WidgetMarkup) -> Iterator[PageElement]:
    """Controls in document order. Descendants of a control are not visited."""
    for child in inner:
        item = classify(child, markup)
        if item is not None:
            yield item
        elif isinstance(child.tag, str) and len(child):
            yield from iter_controls(child, markup)


def inventory(inner: lxml.html.HtmlElement, markup: WidgetMarkup) -> dict[int, PageElement]:
    """page -> existing control; a current marker beats a link for the same page."""
    found: dict[int, PageElement] = {}
    for item in iter_controls(inner, markup):
        if isinstance(item, PageEllipsis):
            continue
        existing = found.get(item.page)
        if existing is None or (isinstance(item, CurrentMarker) and not isinstance(existing, CurrentMarker)):
            found[item.page] = item
    return dict(sorted(found.items()))


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def make_current_marker(page: int, markup: WidgetMarkup, text: str | None = None) -> lxml.html.HtmlElement:
    span = lxml.html.Element("span")
    span.set("class", f"{markup.page_class} {markup.current_class}")
    span.text = text if text else str(page)
    return span


def make_link(page: int, markup: WidgetMarkup, text: str | None = None) -> lxml.html.HtmlElement:
    """New page link; the href is a placeholder until the href pass runs."""
    a = lxml.html.Element("a")
    a.set("class", markup.page_class)
    a.set("href", PLACEHOLDER_HREF)
    a.set(markup.page_id_attr, str(page))
    a.text = text if text else str(page)
    return a


def make_ellipsis(target: int, markup: WidgetMarkup) -> lxml.html.HtmlElement:
    a = lxml.html.Element("a")
    a.set("class", f"{markup.page_class} {markup.ellipsis_class}")
    a.set("href", PLACEHOLDER_HREF)
    a.set(markup.ellipsis_page_attr, str(target))
    a.text = markup.ellipsis_text
    return a


def _reuse_link(item: PageElement, markup: WidgetMarkup) -> lxml.html.HtmlElement:
    el = copy.deepcopy(item.element)
    el.tail = None
    remove_classes(el, markup.current_class, markup.page_hook_class)
    return el


def materialize(
    entry: PlanEntry,
    current_page: int,
    existing: dict[int, PageElement],
    markup: WidgetMarkup,
) -> lxml.html.HtmlElement:
    """Fresh, detached element for one plan entry."""
    if entry.ellipsis:
        return make_ellipsis(entry.page, markup)

    if entry.page == current_page:
        return make_current_marker(entry.page, markup)

    item = existing.get(entry.page)
    if item is None or item.element is None:
        return make_link(entry.page, markup)
    if item.element.tag == "a":
        return _reuse_link(item, markup)
    # marker for a page that is no longer current
    return make_link(entry.page, markup, text=text_of(item.element))


def normalize_marker(el: lxml.html.HtmlElement, markup: WidgetMarkup) -> None:
    """Current-marker styling: current + page classes, no script hook."""
    tokens = [t for t in class_tokens(el) if t != markup.page_hook_class]
    for required in (markup.current_class, markup.page_class):
        if required not in tokens:
            tokens.append(required)
    set_classes(el, tokens)
