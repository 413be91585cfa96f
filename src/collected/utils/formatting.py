"""HTML fragment and display formatting utilities."""

from __future__ import annotations

import html
from collections.abc import Iterable

DL_CLASS = "grid-1/3-2/3 grid-column-gap-1 grid-row-gap-1"


def escape_text(text: str) -> str:
    """Escape text for an element body (quotes are left alone)."""
    return html.escape(text, quote=False)


def description_list(items: Iterable[tuple[str, str]]) -> str:
    """Render key/value pairs as an escaped ``<dl>``."""
    parts = [f'<dl class="{DL_CLASS}">']
    for key, value in items:
        parts.append(f'<dt class="font-bold">{html.escape(key)}</dt>')
        parts.append(f'<dd class="mb-2">{html.escape(value)}</dd>')
    parts.append("</dl>")
    return "".join(parts)


def pre_block(text: str, css_class: str = "") -> str:
    """Wrap escaped text in a ``<pre>``."""
    attrs = f' class="{css_class}"' if css_class else ""
    return f"<pre{attrs}>{escape_text(text)}</pre>"


def render_error_html(message: str) -> str:
    """Inline error block a host embeds instead of a result."""
    return (
        '<div class="p-2 border-t-2 border-red bg-red-lightest rounded-sm">'
        f"Error: {html.escape(message)}</div>"
    )


def format_duration(ms: int) -> str:
    """Format milliseconds to human-readable duration."""
    if ms < 1000:
        return f"{ms}ms"
    elif ms < 60000:
        return f"{ms / 1000:.1f}s"
    else:
        minutes = ms // 60000
        seconds = (ms % 60000) // 1000
        return f"{minutes}m {seconds}s"
