# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""structlog + stdlib bridge for seopager.

Library modules log through ``logging.getLogger(__name__)``; the host (or the
CLI) calls :func:`configure` once to route those records through structlog.
Per-render fields (content id, URL) are bound with :func:`render_context`.

Leaf module: no seopager imports.
"""

from __future__ import annotations

import contextlib
import logging
import sys
from collections.abc import Iterator
from typing import TextIO

import structlog

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def configure(*, json_output: bool = False, level: str = "INFO", stream: TextIO | None = None) -> None:
    """Install a structlog ProcessorFormatter on the root logger.

    Args:
        json_output: JSON lines instead of the human-readable console renderer.
        level: Root logger level name; unknown names fall back to INFO.
        stream: Output stream (default stderr, so stdout stays clean for markup).
    """
    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    level_name = level.upper() if level.upper() in _LEVELS else "INFO"
    root.setLevel(getattr(logging, level_name))


@contextlib.contextmanager
def render_context(**fields: object) -> Iterator[None]:
    """Bind per-render fields (content_id, url, ...) for every log line inside."""
    bound = {k: v for k, v in fields.items() if v is not None and v != ""}
    tokens = structlog.contextvars.bind_contextvars(**bound)
    try:
        yield
    finally:
        structlog.contextvars.reset_contextvars(**tokens)
