# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for rel=prev/next head links."""

from __future__ import annotations

import pytest

from seopager import RequestContext
from seopager.config import PaginationConfig
from seopager.head import HeadLink, HeadLinkEmitter, content_signature_hint, never_hint
from seopager.signals import SignalResolver
from tests._markup_helpers import BASE_URL, page_url


def _ctx(paged: int | None = None, **kwargs) -> RequestContext:
    query_vars = {"paged": paged} if paged is not None else {}
    kwargs.setdefault("url", f"{BASE_URL}/page/{paged}/" if paged and paged > 1 else f"{BASE_URL}/")
    return RequestContext(query_vars=query_vars, **kwargs)


def _pairs(emitter: HeadLinkEmitter, context: RequestContext) -> list[tuple[str, str]]:
    return [(link.rel, link.href) for link in emitter.links(context)]


class TestLinks:
    def test_middle_page(self):
        pairs = _pairs(HeadLinkEmitter(), _ctx(3, max_num_pages=10))
        assert pairs == [("prev", page_url(2)), ("next", page_url(4))]

    def test_last_page(self):
        assert _pairs(HeadLinkEmitter(), _ctx(10, max_num_pages=10)) == [("prev", page_url(9))]

    def test_first_page_known_total(self):
        assert _pairs(HeadLinkEmitter(), _ctx(1, max_num_pages=10)) == [("next", page_url(2))]

    def test_prev_of_page_two_is_base(self):
        pairs = _pairs(HeadLinkEmitter(), _ctx(2, max_num_pages=10))
        assert pairs[0] == ("prev", BASE_URL)

    def test_unknown_total_on_later_page(self):
        assert _pairs(HeadLinkEmitter(), _ctx(4)) == [("prev", page_url(3))]

    def test_page_beyond_known_total(self):
        assert _pairs(HeadLinkEmitter(), _ctx(12, max_num_pages=10)) == [("prev", page_url(11))]

    def test_first_page_no_signal(self):
        assert _pairs(HeadLinkEmitter(), _ctx()) == []

    def test_single_page_listing(self):
        assert _pairs(HeadLinkEmitter(), _ctx(1, max_num_pages=1)) == []

    @pytest.mark.parametrize("content", ["[vc_row][mk_blog style='grid']", "[blog count=10]"])
    def test_first_page_hint_from_content(self, content):
        assert _pairs(HeadLinkEmitter(), _ctx(content=content)) == [("next", page_url(2))]

    def test_hint_not_triggered_by_plain_content(self):
        assert _pairs(HeadLinkEmitter(), _ctx(content="<p>About us</p>")) == []

    def test_never_hint(self):
        emitter = HeadLinkEmitter(hint=never_hint)
        assert _pairs(emitter, _ctx(content="[vc_row]")) == []

    def test_custom_hint(self):
        emitter = HeadLinkEmitter(hint=lambda context: True)
        assert _pairs(emitter, _ctx()) == [("next", page_url(2))]

    def test_configured_signatures(self):
        emitter = HeadLinkEmitter(PaginationConfig(hint_signatures=("[portfolio",)))
        assert _pairs(emitter, _ctx(content="[portfolio]")) == [("next", page_url(2))]
        assert _pairs(emitter, _ctx(content="[vc_row]")) == []

    def test_remembered_total(self, cache):
        cache.set("pagination_total_42", 6, 60)
        emitter = HeadLinkEmitter(resolver=SignalResolver(cache=cache))
        assert _pairs(emitter, _ctx(6, content_id=42)) == [("prev", page_url(5))]
        assert _pairs(emitter, _ctx(5, content_id=42)) == [("prev", page_url(4)), ("next", page_url(6))]

    def test_front_page_page_var(self):
        ctx = RequestContext(url="https://example.com/page/2/", query_vars={"page": 2}, max_num_pages=3)
        pairs = _pairs(HeadLinkEmitter(), ctx)
        assert pairs == [("prev", "https://example.com"), ("next", "https://example.com/page/3/")]


class TestRender:
    def test_link_markup(self):
        assert HeadLink("prev", page_url(2)).render() == f'<link rel="prev" href="{page_url(2)}">'

    def test_render_lines(self):
        out = HeadLinkEmitter().render(_ctx(3, max_num_pages=10))
        assert out == f'<link rel="prev" href="{page_url(2)}">\n<link rel="next" href="{page_url(4)}">\n'

    def test_render_empty(self):
        assert HeadLinkEmitter().render(_ctx()) == ""

    def test_ampersand_escaped(self):
        ctx = RequestContext(url="https://example.com/search/page/2/?a=1&b=2", query_vars={"paged": 2})
        out = HeadLinkEmitter().render(ctx)
        assert "a=1&amp;b=2" in out


class TestContentSignatureHint:
    def test_empty_signatures_ignored(self):
        hint = content_signature_hint(["", "mk_blog"])
        assert hint(RequestContext(content="[mk_blog]"))
        assert not hint(RequestContext(content="plain"))
