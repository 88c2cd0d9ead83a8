# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Configuration for the pagination rewriter and head-link emitter.

Two immutable layers:
- WidgetMarkup: class and attribute names the theme's pagination widget uses
- PaginationConfig: window size, cache policy, head-link hint signatures

``PaginationConfig.from_env()`` applies ``SEOPAGER_*`` environment overrides.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from contextlib import suppress
from dataclasses import dataclass, field, replace

DEFAULT_WINDOW_SIZE = 8
DEFAULT_CACHE_TTL = 3600.0  # 1 hour
DEFAULT_CACHE_KEY_PREFIX = "pagination_total_"
DEFAULT_HINT_SIGNATURES = ("mk_blog", "vc_row", "[blog")

ENV_WINDOW_SIZE = "SEOPAGER_WINDOW_SIZE"
ENV_CACHE_TTL = "SEOPAGER_CACHE_TTL"
ENV_HINT_SIGNATURES = "SEOPAGER_HINT_SIGNATURES"


@dataclass(frozen=True, slots=True)
class WidgetMarkup:
    """Class/attribute vocabulary of the Jupiter ``mk-pagination`` widget."""

    container_class: str = "mk-pagination"
    inner_class: str = "mk-pagination-inner"
    page_class: str = "page-number"
    current_class: str = "current-page"
    ellipsis_class: str = "dots"
    page_hook_class: str = "js-pagination-page"
    prev_class: str = "mk-pagination-previous"
    prev_hook_class: str = "js-pagination-prev"
    next_class: str = "mk-pagination-next"
    next_hook_class: str = "js-pagination-next"
    totals_class: str = "mk-total-pages"
    current_display_classes: tuple[str, ...] = ("pagination-current-page", "js-current-page")
    max_display_class: str = "pagination-max-pages"
    init_page_attr: str = "data-init-pagination"
    max_pages_attr: str = "data-max-pages"
    page_id_attr: str = "data-page-id"
    ellipsis_page_attr: str = "data-ellipsis-page"
    ellipsis_text: str = "..."

    @property
    def detection_markers(self) -> tuple[str, ...]:
        """Substrings whose presence means the fragment may hold the widget."""
        return (self.inner_class, self.page_hook_class)

    @property
    def hook_classes(self) -> tuple[str, ...]:
        return (self.page_hook_class, self.prev_hook_class, self.next_hook_class)

    @property
    def hook_attrs(self) -> tuple[str, ...]:
        return (self.page_id_attr, self.ellipsis_page_attr)


@dataclass(frozen=True, slots=True)
class PaginationConfig:
    """Immutable rewriter configuration."""

    window_size: int = DEFAULT_WINDOW_SIZE
    cache_ttl: float = DEFAULT_CACHE_TTL
    cache_key_prefix: str = DEFAULT_CACHE_KEY_PREFIX
    hint_signatures: tuple[str, ...] = DEFAULT_HINT_SIGNATURES
    markup: WidgetMarkup = field(default_factory=WidgetMarkup)

    def __post_init__(self) -> None:
        if self.window_size < 1:
            raise ValueError(f"window_size must be >= 1, got {self.window_size}")
        if self.cache_ttl <= 0:
            raise ValueError(f"cache_ttl must be > 0, got {self.cache_ttl}")
        if not self.cache_key_prefix:
            raise ValueError("cache_key_prefix must not be empty")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides) -> PaginationConfig:
        """Build a config from defaults, ``SEOPAGER_*`` variables and keyword overrides.

        Unparsable or out-of-range environment values are ignored.
        """
        env = os.environ if environ is None else environ
        config = cls()

        raw_window = env.get(ENV_WINDOW_SIZE, "").strip()
        if raw_window:
            with suppress(ValueError):
                config = replace(config, window_size=int(raw_window))

        raw_ttl = env.get(ENV_CACHE_TTL, "").strip()
        if raw_ttl:
            with suppress(ValueError):
                config = replace(config, cache_ttl=float(raw_ttl))

        raw_hints = env.get(ENV_HINT_SIGNATURES, "").strip()
        if raw_hints:
            signatures = tuple(s.strip() for s in raw_hints.split(",") if s.strip())
            if signatures:
                config = replace(config, hint_signatures=signatures)

        if overrides:
            config = replace(config, **overrides)
        return config
