# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Sliding-window planner: which page controls to show, left to right.

    half  = window_size // 2
    start = max(1, current - half)
    end   = min(total, start + window_size - 1)
    (run shorter than window_size because end hit total -> slide start back)

Page 1 and the last page are kept as edge anchors outside the run, and an
ellipsis is placed before every gap. The ellipsis targets the first hidden
page of its gap so it works as a real link.

Pure module: no lxml, no seopager imports.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PlanEntry:
    """One visible control. For an ellipsis, ``page`` is its target page."""

    page: int
    ellipsis: bool = False

    def __str__(self) -> str:
        return f"…({self.page})" if self.ellipsis else str(self.page)


@dataclass(frozen=True, slots=True)
class WindowPlan:
    entries: tuple[PlanEntry, ...]
    start: int
    end: int
    current_page: int
    total_pages: int

    @property
    def run(self) -> range:
        """The contiguous middle run of pages."""
        return range(self.start, self.end + 1)

    @property
    def pages(self) -> list[int]:
        """Page numbers shown as links or markers (ellipses excluded)."""
        return [e.page for e in self.entries if not e.ellipsis]

    def __iter__(self) -> Iterator[PlanEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __str__(self) -> str:
        return ",".join(str(e) for e in self.entries)


def window_bounds(current_page: int, total_pages: int, window_size: int) -> tuple[int, int]:
    """(start, end) of the contiguous run, both inclusive."""
    half = window_size // 2
    start = max(1, current_page - half)
    end = min(total_pages, start + window_size - 1)
    if end - start + 1 < window_size:
        start = max(1, end - window_size + 1)
    return start, end


def plan_window(current_page: int, total_pages: int, window_size: int) -> WindowPlan:
    """Plan the visible controls for *current_page* of *total_pages*.

    Raises:
        ValueError: window_size < 1 or total_pages < 1.
    """
    if window_size < 1:
        raise ValueError(f"window_size must be >= 1, got {window_size}")
    if total_pages < 1:
        raise ValueError(f"total_pages must be >= 1, got {total_pages}")

    start, end = window_bounds(current_page, total_pages, window_size)

    kept: list[int] = []
    if start > 1:
        kept.append(1)
    kept.extend(range(start, end + 1))
    if end < total_pages:
        kept.append(total_pages)

    entries: list[PlanEntry] = []
    previous = 0
    for page in kept:
        if previous and page > previous + 1:
            entries.append(PlanEntry(page=previous + 1, ellipsis=True))
        entries.append(PlanEntry(page=page))
        previous = page

    return WindowPlan(
        entries=tuple(entries),
        start=start,
        end=end,
        current_page=current_page,
        total_pages=total_pages,
    )
