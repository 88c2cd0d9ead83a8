# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""seopager CLI: rewrite, head, plan, script commands.

Usage:
    seopager rewrite [FILE] --url URL [--paged N] [--content-id ID] [-o OUT]
    seopager head --url URL [--paged N] [--max-pages N] [--content FILE]
    seopager plan CURRENT TOTAL [--window-size N]
    seopager script [--tag]

Markup goes to stdout, logs to stderr.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from . import RequestContext, __version__
from .config import PaginationConfig
from .head import HeadLinkEmitter
from .logging_config import configure as configure_logging
from .rewriter import PaginationRewriter
from .snippet import disable_ajax_script, disable_ajax_tag
from .window import plan_window

logger = logging.getLogger("seopager.cli")


def _read_input(path: str | None) -> str:
    if not path or path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _write_output(text: str, path: str | None) -> None:
    if not path or path == "-":
        sys.stdout.write(text)
        return
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8")
    logger.info("Wrote %s", out)


def _config_from_args(args: argparse.Namespace) -> PaginationConfig:
    config = PaginationConfig.from_env()
    if getattr(args, "window_size", None) is not None:
        config = replace(config, window_size=args.window_size)
    return config


def _context_from_args(args: argparse.Namespace, content: str = "") -> RequestContext:
    query_vars: dict[str, object] = {}
    if args.paged is not None:
        query_vars["paged"] = args.paged
    return RequestContext(
        url=args.url or "",
        base_url=args.base_url or "",
        query_vars=query_vars,
        content_id=args.content_id,
        max_num_pages=args.max_pages or 0,
        content=content,
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_rewrite(args: argparse.Namespace) -> int:
    rewriter = PaginationRewriter(_config_from_args(args))
    markup = _read_input(args.input)
    _write_output(rewriter.rewrite(markup, _context_from_args(args)), args.output)
    return 0


def cmd_head(args: argparse.Namespace) -> int:
    content = _read_input(args.content) if args.content else ""
    emitter = HeadLinkEmitter(_config_from_args(args))
    _write_output(emitter.render(_context_from_args(args, content)), None)
    return 0


def cmd_plan(args: argparse.Namespace) -> int:
    config = _config_from_args(args)
    plan = plan_window(args.current, args.total, config.window_size)
    print(plan)
    return 0


def cmd_script(args: argparse.Namespace) -> int:
    markup = PaginationConfig.from_env().markup
    sys.stdout.write(disable_ajax_tag(markup) if args.tag else disable_ajax_script(markup))
    return 0


def _add_context_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--url", type=str, default="", metavar="URL", help="Current request URL")
    p.add_argument("--base-url", type=str, default="", metavar="URL", help="Canonical listing URL (overrides --url)")
    p.add_argument("--paged", type=int, metavar="N", help="Route-level page number")
    p.add_argument("--content-id", type=str, metavar="ID", help="Content id for the remembered total")
    p.add_argument("--max-pages", type=int, metavar="N", help="Total pages known to the host")
    p.add_argument("--window-size", type=int, metavar="N", help="Visible page links (default: 8)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="seopager", description="Crawlable pagination for theme widgets")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--json-logs", action="store_true", help="JSON log lines on stderr")
    parser.add_argument("--log-level", type=str, metavar="LEVEL", help="Root log level (default: WARNING)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_rewrite = subparsers.add_parser("rewrite", help="Rewrite pagination markup")
    p_rewrite.add_argument("input", nargs="?", default="-", help="Markup file (default: stdin)")
    p_rewrite.add_argument("-o", "--output", type=str, metavar="PATH", help="Output file (default: stdout)")
    _add_context_args(p_rewrite)
    p_rewrite.set_defaults(func=cmd_rewrite)

    p_head = subparsers.add_parser("head", help="Print rel=prev/next head links")
    p_head.add_argument("--content", type=str, metavar="FILE", help="Stored content, checked for listing modules")
    _add_context_args(p_head)
    p_head.set_defaults(func=cmd_head)

    p_plan = subparsers.add_parser("plan", help="Print the sliding-window plan")
    p_plan.add_argument("current", type=int)
    p_plan.add_argument("total", type=int)
    p_plan.add_argument("--window-size", type=int, metavar="N")
    p_plan.set_defaults(func=cmd_plan)

    p_script = subparsers.add_parser("script", help="Print the client-side disable snippet")
    p_script.add_argument("--tag", action="store_true", help="Wrap in <script>")
    p_script.set_defaults(func=cmd_script)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = args.log_level or ("DEBUG" if args.verbose else "WARNING")
    configure_logging(json_output=args.json_logs, level=level)

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
