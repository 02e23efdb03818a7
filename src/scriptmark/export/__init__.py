"""HTML export for annotated screenplay documents.

This package turns text plus externally computed style tags into a semantic
HTML document with a companion stylesheet.
"""

from scriptmark.export.elements import build_element
from scriptmark.export.errors import (
    ExportCancelledError,
    ExportError,
    InputUnavailableError,
    MalformedRangeError,
    MalformedTemplateError,
    NonProgressScanError,
)
from scriptmark.export.html_export import (
    build_head_bindings,
    derive_filename,
    export_html,
)
from scriptmark.export.html_render import Markup, escape_html, render_template
from scriptmark.export.run_scanner import scan_runs
from scriptmark.export.style_classes import (
    STYLE_RULES,
    ElementSpec,
    normalise_style_tag,
    resolve_style,
)
from scriptmark.export.stylesheet import format_font_family, render_stylesheet
from scriptmark.export.writer import ExportResult, write_export

__all__ = [
    "STYLE_RULES",
    "ElementSpec",
    "ExportCancelledError",
    "ExportError",
    "ExportResult",
    "InputUnavailableError",
    "MalformedRangeError",
    "MalformedTemplateError",
    "Markup",
    "NonProgressScanError",
    "build_element",
    "build_head_bindings",
    "derive_filename",
    "escape_html",
    "export_html",
    "format_font_family",
    "normalise_style_tag",
    "render_stylesheet",
    "render_template",
    "resolve_style",
    "scan_runs",
    "write_export",
]
