"""HTML export orchestration for annotated screenplay documents.

Coordinates the pipeline from annotated text to a complete HTML document:
1. Validate the document and requested range
2. Render the head template (prologue)
3. Open the root container
4. Scan runs and build one element per non-suppressed run, in order
5. Close the container and the document

``export_html`` is a pure transform: it reads the document, never mutates
it, and returns the same string for the same inputs.
"""

from __future__ import annotations

import html
import logging
import platform
from typing import TYPE_CHECKING

from scriptmark import __version__
from scriptmark.config import ExportConfig
from scriptmark.export.elements import build_element
from scriptmark.export.errors import InputUnavailableError, MalformedRangeError
from scriptmark.export.html_render import render_template
from scriptmark.export.run_scanner import scan_runs
from scriptmark.export.stylesheet import render_stylesheet

if TYPE_CHECKING:
    from collections.abc import Callable

    from scriptmark.export.run_scanner import CancelFlag
    from scriptmark.models.document import AnnotatedDocument

logger = logging.getLogger(__name__)

HTML_EXTENSION = ".html"
CSS_EXTENSION = ".css"

ROOT_CONTAINER_OPEN = '<div id="scriptmark">\n'
ROOT_CONTAINER_CLOSE = "</div>\n"
DOCUMENT_CLOSE = "</body>\n</html>\n"


def derive_filename(base_name: str | None, extension: str, default_name: str) -> str:
    """Return ``<base_name><extension>``, falling back to *default_name*."""
    return f"{base_name or default_name}{extension}"


def display_name(doc: AnnotatedDocument, config: ExportConfig) -> str:
    """Name shown to users for *doc*: its base name or the configured default."""
    return doc.base_name or config.default_document_name


def build_head_bindings(
    doc: AnnotatedDocument, config: ExportConfig
) -> dict[str, str]:
    """Build the placeholder bindings for the head template.

    Values derived from the document name are HTML-escaped here because
    ``render_template`` inserts bindings verbatim.
    """
    base = doc.base_name
    default = config.default_document_name
    htmlfile = html.escape(derive_filename(base, HTML_EXTENSION, default))
    cssfile = html.escape(derive_filename(base, CSS_EXTENSION, default))

    if config.use_inline_style:
        stylesheet = f"<style>\n{render_stylesheet(config)}</style>"
    else:
        stylesheet = f'<link rel="stylesheet" href="{cssfile}">'

    return {
        "tool-version": __version__,
        "host-version": f"Python {platform.python_version()}",
        "htmlfile": htmlfile,
        "cssfile": cssfile,
        "title": html.escape(display_name(doc, config)),
        "stylesheet": stylesheet,
    }


def _check_input(doc: AnnotatedDocument, start: int, end: int) -> None:
    """Reject unusable input before any scanning starts."""
    length = len(doc.text)
    if start > end or start < 0 or end > length:
        raise MalformedRangeError(start, end, length)
    if doc.spans is None:
        msg = "Document has no style annotation; run the annotator first"
        raise InputUnavailableError(msg)
    if start == end:
        msg = f"Document has no text in range [{start}, {end})"
        raise InputUnavailableError(msg)


def export_html(
    doc: AnnotatedDocument,
    start: int | None = None,
    end: int | None = None,
    config: ExportConfig | None = None,
    *,
    cancel: CancelFlag | None = None,
    on_progress: Callable[[int, int], None] | None = None,
) -> str:
    """Convert ``doc.text[start:end]`` into a complete HTML document.

    Args:
        doc: The annotated document.
        start: First character to export. Defaults to 0.
        end: End of the export range. Defaults to the document length.
        config: Templates and naming. Defaults to ``ExportConfig()``.
        cancel: Optional flag checked before every run.
        on_progress: Optional ``(position, end)`` callback after every run.

    Returns:
        The HTML text.

    Raises:
        MalformedRangeError: If the range is reversed or out of bounds.
        InputUnavailableError: If the document is unannotated or the range
            holds no text.
        MalformedTemplateError: If the head template has a bad placeholder.
        ExportCancelledError: If *cancel* was set mid-scan.
    """
    if config is None:
        config = ExportConfig()
    start = 0 if start is None else start
    end = len(doc.text) if end is None else end
    _check_input(doc, start, end)

    bindings = build_head_bindings(doc, config)
    prologue = render_template(config.html_head_template, bindings)

    parts: list[str] = [prologue, ROOT_CONTAINER_OPEN]
    suppressed = 0
    for run in scan_runs(doc, start, end, cancel=cancel, on_progress=on_progress):
        element = build_element(run, doc)
        if element is None:
            suppressed += 1
            continue
        parts.append(element)
    parts.append(ROOT_CONTAINER_CLOSE)
    parts.append(DOCUMENT_CLOSE)

    logger.info(
        "Exported %s [%d, %d): %d elements, %d suppressed",
        display_name(doc, config),
        start,
        end,
        len(parts) - 4,
        suppressed,
    )
    return "".join(parts)
