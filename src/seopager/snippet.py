# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Inline script that switches off the theme's client-side page switching.

Unbinds the theme's click handlers on the widget, drops the script-hook
classes it targets and rebinds a handler that lets links navigate normally,
only swallowing clicks on links whose href is empty or ``#``.
"""

from __future__ import annotations

from .config import WidgetMarkup

_TEMPLATE = """\
jQuery(document).ready(function($) {{
    $(document).off('click', '.{page_hook}');
    $(document).off('click', '.{inner} a');
    $(document).off('click', '.{prev_hook}');
    $(document).off('click', '.{next_hook}');

    $('.{inner}').off('click');
    $('.{prev}').off('click');
    $('.{next}').off('click');

    $('.{page_hook}').removeClass('{page_hook}');
    $('.{prev_hook}').removeClass('{prev_hook}');
    $('.{next_hook}').removeClass('{next_hook}');

    $('.{inner} a, .{prev}, .{next}').off('click').on('click', function(e) {{
        var href = $(this).attr('href');
        if (href && href !== '#') {{
            return true;
        }}
        e.preventDefault();
        return false;
    }});
}});
"""


def disable_ajax_script(markup: WidgetMarkup | None = None) -> str:
    """JavaScript source (no ``<script>`` tag) for the widget described by *markup*."""
    markup = markup or WidgetMarkup()
    return _TEMPLATE.format(
        page_hook=markup.page_hook_class,
        prev_hook=markup.prev_hook_class,
        next_hook=markup.next_hook_class,
        inner=markup.inner_class,
        prev=markup.prev_class,
        next=markup.next_class,
    )


def disable_ajax_tag(markup: WidgetMarkup | None = None) -> str:
    """The snippet wrapped in a ``<script>`` element."""
    return f"<script>\n{disable_ajax_script(markup)}</script>\n"
