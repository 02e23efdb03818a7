"""Paragraph-bounded run detection over an annotated document.

Walks ``[start, end)`` left to right.  At each step the cursor skips
whitespace, the next paragraph boundary (a blank line, or the end of the
range) becomes the search limit, and the next style-tag change before that
limit ends the run.  Runs therefore never cross a blank line and never
extend past ``end``.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Protocol

from scriptmark.export.errors import ExportCancelledError, NonProgressScanError
from scriptmark.models.document import Run

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from scriptmark.models.document import AnnotatedDocument

logger = logging.getLogger(__name__)

# Two line breaks (LF or CRLF) with only horizontal whitespace between them.
_BLANK_LINE = re.compile(r"\r?\n[ \t\r]*\n")

_SKIP_CHARS = frozenset(" \t\r\n")


class CancelFlag(Protocol):
    """Anything with ``is_set()``, e.g. ``threading.Event``."""

    def is_set(self) -> bool: ...


def find_paragraph_limit(text: str, pos: int, end: int) -> int:
    """Return the start of the first blank line at or after *pos*, or *end*."""
    match = _BLANK_LINE.search(text, pos, end)
    return match.start() if match else end


def _skip_whitespace(text: str, pos: int, end: int) -> int:
    while pos < end and text[pos] in _SKIP_CHARS:
        pos += 1
    return pos


def scan_runs(
    doc: AnnotatedDocument,
    start: int,
    end: int,
    *,
    cancel: CancelFlag | None = None,
    on_progress: Callable[[int, int], None] | None = None,
) -> Iterator[Run]:
    """Yield the runs of *doc* within ``[start, end)`` in document order.

    The range is assumed valid; ``export_html`` checks it first.

    Args:
        doc: The annotated document.
        start: First character position to scan.
        end: Scan stops here; a run containing *end* is truncated.
        cancel: Checked before every run; when set the scan aborts.
        on_progress: Called with ``(position, end)`` after each run.

    Raises:
        ExportCancelledError: If *cancel* is set.
        NonProgressScanError: If the cursor fails to advance.
    """
    text = doc.text
    pos = start
    count = 0
    while pos < end:
        if cancel is not None and cancel.is_set():
            raise ExportCancelledError(pos)

        pos = _skip_whitespace(text, pos, end)
        if pos >= end:
            break

        limit = find_paragraph_limit(text, pos, end)
        change = doc.next_tag_change(pos, limit)
        if change <= pos:
            raise NonProgressScanError(pos)

        run = Run(pos, change, doc.tag_at(pos))
        count += 1
        yield run

        pos = change
        if on_progress is not None:
            on_progress(pos, end)

    logger.debug("Scanned %d runs in [%d, %d)", count, start, end)
