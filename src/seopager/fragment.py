# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Fragment parsing and serialization with lxml.

Host markup is usually a fragment (no ``<html>``/``<body>``). It is parsed
inside a synthetic body and serialized back as the body's contents only, so
no wrapper tags, default doctype or encoding declaration reach the output.
Full documents round-trip as documents.

Also holds the whole-token ``class`` helpers the rewriter passes share.
"""

from __future__ import annotations

import html as html_lib
import re
from collections.abc import Iterable
from dataclasses import dataclass

import lxml.html
from lxml import etree

from .errors import ParseFailure

_DOCUMENT_RE = re.compile(r"^\s*(?:<!--.*?-->\s*)*<(?:!doctype|html)\b", re.IGNORECASE | re.DOTALL)


@dataclass
class Fragment:
    """A parsed fragment: the element whose contents are the markup."""

    root: lxml.html.HtmlElement  # <body> for fragments, <html> for documents
    document: bool = False
    doctype: str = ""


def _parser() -> lxml.html.HTMLParser:
    # default_doctype=False: no implied HTML 4.0 doctype on serialization
    return lxml.html.HTMLParser(recover=True, encoding="utf-8", default_doctype=False)


def parse_fragment(markup: str) -> Fragment:
    """Parse *markup* into a mutable tree.

    Raises:
        ParseFailure: empty input or lxml could not build a tree.
    """
    if not markup or not markup.strip():
        raise ParseFailure("Empty fragment")

    if _DOCUMENT_RE.match(markup):
        try:
            doc = lxml.html.document_fromstring(markup.encode("utf-8"), parser=_parser())
        except (etree.LxmlError, ValueError) as e:
            raise ParseFailure(f"lxml parsing failed: {e}") from e
        return Fragment(root=doc, document=True, doctype=doc.getroottree().docinfo.doctype or "")

    wrapped = f"<html><body>{markup}</body></html>"
    try:
        doc = lxml.html.document_fromstring(wrapped.encode("utf-8"), parser=_parser())
    except (etree.LxmlError, ValueError) as e:
        raise ParseFailure(f"lxml parsing failed: {e}") from e

    bodies = doc.xpath("//body")
    if not bodies:
        raise ParseFailure("Parsed fragment has no body")
    return Fragment(root=bodies[0])


def serialize_fragment(fragment: Fragment) -> str:
    """Serialize *fragment* back to markup of the same shape it was parsed from."""
    root = fragment.root
    if fragment.document:
        return lxml.html.tostring(root, encoding="unicode", method="html", doctype=fragment.doctype or None)

    parts: list[str] = []
    if root.text:
        parts.append(html_lib.escape(root.text, quote=False))
    for child in root:
        parts.append(lxml.html.tostring(child, encoding="unicode", method="html", with_tail=True))
    return "".join(parts)


# ---------------------------------------------------------------------------
# Element helpers
# ---------------------------------------------------------------------------


def class_xpath(name: str) -> str:
    """XPath predicate body matching *name* as a whole class token."""
    return f"contains(concat(' ', normalize-space(@class), ' '), ' {name} ')"


def class_tokens(el: lxml.html.HtmlElement) -> list[str]:
    return (el.get("class") or "").split()


def has_class(el: lxml.html.HtmlElement, name: str) -> bool:
    return name in class_tokens(el)


def set_classes(el: lxml.html.HtmlElement, tokens: Iterable[str]) -> None:
    """Write *tokens* (deduplicated, order kept) as the class attribute; drop it when empty."""
    seen: list[str] = []
    for token in tokens:
        if token and token not in seen:
            seen.append(token)
    if seen:
        el.set("class", " ".join(seen))
    elif "class" in el.attrib:
        del el.attrib["class"]


def add_class(el: lxml.html.HtmlElement, name: str) -> None:
    tokens = class_tokens(el)
    if name not in tokens:
        set_classes(el, [*tokens, name])


def remove_classes(el: lxml.html.HtmlElement, *names: str) -> bool:
    """Remove class tokens; returns True when the attribute changed."""
    tokens = class_tokens(el)
    kept = [t for t in tokens if t not in names]
    if len(kept) == len(tokens):
        return False
    set_classes(el, kept)
    return True


def text_of(el: lxml.html.HtmlElement) -> str:
    """Stripped text content of an element."""
    return (el.text_content() or "").strip()


def detach(el: lxml.html.HtmlElement) -> None:
    """Remove *el* from its parent.

    Meaningful tail text is handed to the previous sibling (or parent); a
    whitespace-only tail goes with the element.
    """
    parent = el.getparent()
    if parent is None:
        return
    if el.tail and el.tail.strip():
        el.drop_tree()
        return
    el.tail = None
    parent.remove(el)


def replace_keeping_tail(old: lxml.html.HtmlElement, new: lxml.html.HtmlElement) -> None:
    """Swap *old* for *new* in place; *new* inherits *old*'s tail."""
    parent = old.getparent()
    if parent is None:
        return
    new.tail = old.tail
    old.tail = None
    parent.replace(old, new)
