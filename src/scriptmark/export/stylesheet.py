"""Companion stylesheet rendering for HTML export."""

from __future__ import annotations

from typing import TYPE_CHECKING

from scriptmark.export.html_render import render_template

if TYPE_CHECKING:
    from collections.abc import Iterable

    from scriptmark.config import ExportConfig

# CSS generic families must not be quoted.
_GENERIC_FAMILIES = frozenset(
    (
        "serif",
        "sans-serif",
        "monospace",
        "cursive",
        "fantasy",
        "system-ui",
        "ui-monospace",
    )
)


def format_font_family(fonts: Iterable[str]) -> str:
    """Format *fonts* as a CSS ``font-family`` value.

    >>> format_font_family(["Courier New", "monospace"])
    '"Courier New", monospace'
    """
    parts: list[str] = []
    for font in fonts:
        name = font.strip()
        if not name:
            continue
        if name.lower() in _GENERIC_FAMILIES:
            parts.append(name.lower())
        else:
            parts.append('"{}"'.format(name.replace('"', '\\"')))
    return ", ".join(parts)


def render_stylesheet(config: ExportConfig) -> str:
    """Render the configured CSS template with the configured fonts."""
    return render_template(
        config.css_template, {"font": format_font_family(config.fonts)}
    )
