"""Write an HTML export (and its stylesheet) to disk.

The HTML is rendered completely in memory before any file is touched.
Each file is then written to a temporary file in the destination directory
and moved into place with ``os.replace``, so a failed export never leaves a
partial file behind.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from scriptmark.config import ExportConfig
from scriptmark.export.html_export import (
    CSS_EXTENSION,
    HTML_EXTENSION,
    derive_filename,
    export_html,
)
from scriptmark.export.stylesheet import render_stylesheet

if TYPE_CHECKING:
    from collections.abc import Callable

    from scriptmark.export.run_scanner import CancelFlag
    from scriptmark.models.document import AnnotatedDocument

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportResult:
    """Paths produced by ``write_export``.

    Attributes:
        html_path: The written HTML document.
        css_path: The companion stylesheet, or ``None`` when styles are inline.
    """

    html_path: Path
    css_path: Path | None


def _atomic_write(path: Path, content: str) -> None:
    """Write *content* to *path* via a temp file in the same directory."""
    fd, tmp = tempfile.mkstemp(
        dir=str(path.parent),
        prefix=".scriptmark-tmp-",
        suffix=path.suffix,
        text=True,
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    finally:
        try:
            os.unlink(tmp)
        except FileNotFoundError:
            pass


def write_export(
    doc: AnnotatedDocument,
    output_dir: Path,
    *,
    config: ExportConfig | None = None,
    overwrite: bool = False,
    start: int | None = None,
    end: int | None = None,
    cancel: CancelFlag | None = None,
    on_progress: Callable[[int, int], None] | None = None,
) -> ExportResult:
    """Export *doc* to ``output_dir/<name>.html`` (plus ``<name>.css``).

    Args:
        doc: The annotated document.
        output_dir: Destination directory, created if missing.
        config: Templates and naming. Defaults to ``ExportConfig()``.
        overwrite: Replace existing output files instead of refusing.
        start: First character to export.
        end: End of the export range.
        cancel: Optional flag checked before every run.
        on_progress: Optional ``(position, end)`` callback after every run.

    Returns:
        The written paths.

    Raises:
        FileExistsError: If an output file exists and *overwrite* is false.
        ExportError: Any export failure; nothing is written in that case.
    """
    if config is None:
        config = ExportConfig()
    output_dir = Path(output_dir)
    base = doc.base_name
    default = config.default_document_name
    html_path = output_dir / derive_filename(base, HTML_EXTENSION, default)
    css_path = (
        None
        if config.use_inline_style
        else output_dir / derive_filename(base, CSS_EXTENSION, default)
    )

    if not overwrite:
        for path in (html_path, css_path):
            if path is not None and path.exists():
                msg = f"{path} already exists"
                raise FileExistsError(msg)

    document = export_html(
        doc, start, end, config, cancel=cancel, on_progress=on_progress
    )
    stylesheet = render_stylesheet(config) if css_path is not None else None

    output_dir.mkdir(parents=True, exist_ok=True)
    _atomic_write(html_path, document)
    logger.info("Wrote %s", html_path)
    if css_path is not None and stylesheet is not None:
        try:
            _atomic_write(css_path, stylesheet)
        except (OSError, KeyboardInterrupt):
            # An HTML file without its stylesheet is an incomplete export
            html_path.unlink(missing_ok=True)
            raise
        logger.info("Wrote %s", css_path)

    return ExportResult(html_path=html_path, css_path=css_path)
