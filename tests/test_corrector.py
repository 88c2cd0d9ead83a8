# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for current-page correction (widgets that fit in the window)."""

from __future__ import annotations

import pytest

from seopager.config import WidgetMarkup
from seopager.corrector import correct_current_page
from seopager.errors import MissingContainer
from seopager.fragment import parse_fragment, serialize_fragment
from tests._markup_helpers import page_link

MARKUP = WidgetMarkup()


def _inner(*items: str) -> str:
    return f'<div class="mk-pagination-inner">{"".join(items)}</div>'


def _correct(markup: str, current: int) -> tuple[bool, str]:
    fragment = parse_fragment(markup)
    found = correct_current_page(fragment.root, current, MARKUP)
    return found, serialize_fragment(fragment)


class TestCorrectCurrentPage:
    def test_wrong_active_page_moved(self):
        markup = _inner(page_link(1, active=True), page_link(2), page_link(3))
        found, out = _correct(markup, 2)
        assert found
        assert out == _inner(
            '<a class="page-number js-pagination-page" href="#" data-page-id="1">1</a>',
            '<span class="page-number current-page">2</span>',
            '<a class="page-number js-pagination-page" href="#" data-page-id="3">3</a>',
        )

    def test_exactly_one_marker(self):
        markup = _inner(page_link(1, active=True), page_link(2, active=True), page_link(3))
        _, out = _correct(markup, 3)
        assert out.count("current-page") == 1
        assert '<span class="page-number current-page">3</span>' in out

    def test_separator_text_kept(self):
        markup = _inner(page_link(1, active=True), " | ", page_link(2))
        _, out = _correct(markup, 1)
        assert '<span class="page-number current-page">1</span> | ' in out

    def test_already_correct_span_untouched(self):
        markup = _inner(page_link(1), '<span class="page-number current-page">2</span>', page_link(3))
        found, out = _correct(markup, 2)
        assert found
        assert out == markup

    def test_marker_for_other_page_becomes_link(self):
        markup = _inner('<span class="page-number current-page">1</span>', page_link(2))
        _, out = _correct(markup, 2)
        assert out == _inner(
            '<a class="page-number" href="#" data-page-id="1">1</a>',
            '<span class="page-number current-page">2</span>',
        )

    def test_no_control_for_page(self):
        markup = _inner(page_link(1, active=True), page_link(2))
        found, out = _correct(markup, 7)
        assert not found
        assert "current-page" not in out

    def test_missing_inner(self):
        fragment = parse_fragment("<div>no widget</div>")
        with pytest.raises(MissingContainer) as exc_info:
            correct_current_page(fragment.root, 1, MARKUP)
        assert exc_info.value.selector == "mk-pagination-inner"

    def test_stale_marker_keeps_separator(self):
        markup = _inner('<span class="page-number current-page">1</span> | ', page_link(2), page_link(3))
        found, out = _correct(markup, 3)
        assert found
        assert '<a class="page-number" href="#" data-page-id="1">1</a> | ' in out
        assert out.count("<span") == 1

    def test_stale_marker_converted_without_target(self):
        markup = _inner('<span class="page-number current-page">1</span>', page_link(2))
        found, out = _correct(markup, 7)
        assert not found
        assert "<span" not in out
        assert '<a class="page-number" href="#" data-page-id="1">1</a>' in out
