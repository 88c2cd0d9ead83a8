# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for the sliding-window planner."""

from __future__ import annotations

import pytest

from seopager.window import PlanEntry, plan_window, window_bounds


class TestWindowBounds:
    @pytest.mark.parametrize(
        "current, total, size, expected",
        [
            (1, 20, 8, (1, 8)),
            (5, 20, 8, (1, 8)),
            (10, 20, 8, (6, 13)),
            (20, 20, 8, (13, 20)),
            (17, 20, 8, (13, 20)),
            (3, 5, 8, (1, 5)),
            (5, 10, 1, (5, 5)),
        ],
    )
    def test_bounds(self, current, total, size, expected):
        assert window_bounds(current, total, size) == expected


class TestPlanWindow:
    def test_near_start(self):
        plan = plan_window(5, 20, 8)
        assert str(plan) == "1,2,3,4,5,6,7,8,…(9),20"

    def test_middle_has_two_ellipses(self):
        plan = plan_window(10, 20, 8)
        assert str(plan) == "1,…(2),6,7,8,9,10,11,12,13,…(14),20"

    def test_last_page_slides_window_back(self):
        plan = plan_window(20, 20, 8)
        assert str(plan) == "1,…(2),13,14,15,16,17,18,19,20"
        assert plan.start == 13
        assert plan.end == 20

    def test_first_page(self):
        assert str(plan_window(1, 20, 8)) == "1,2,3,4,5,6,7,8,…(9),20"

    def test_no_gap_no_ellipsis(self):
        plan = plan_window(6, 10, 8)
        assert plan.pages == list(range(1, 11))
        assert not any(e.ellipsis for e in plan)

    def test_single_hidden_page_still_gets_ellipsis(self):
        plan = plan_window(2, 10, 8)
        assert str(plan) == "1,2,3,4,5,6,7,8,…(9),10"

    def test_total_within_window(self):
        plan = plan_window(3, 5, 8)
        assert plan.pages == [1, 2, 3, 4, 5]
        assert len(plan) == 5

    def test_window_of_one(self):
        assert str(plan_window(5, 10, 1)) == "1,…(2),5,…(6),10"

    def test_single_page(self):
        plan = plan_window(1, 1, 8)
        assert plan.entries == (PlanEntry(1),)

    def test_run(self):
        plan = plan_window(10, 20, 8)
        assert plan.run == range(6, 14)

    @pytest.mark.parametrize("size", [0, -3])
    def test_rejects_bad_window(self, size):
        with pytest.raises(ValueError, match="window_size"):
            plan_window(1, 10, size)

    def test_rejects_bad_total(self):
        with pytest.raises(ValueError, match="total_pages"):
            plan_window(1, 0, 8)


class TestPlanEntry:
    def test_str(self):
        assert str(PlanEntry(4)) == "4"
        assert str(PlanEntry(9, ellipsis=True)) == "…(9)"


