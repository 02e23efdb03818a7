"""Exceptions raised by the HTML export pipeline.

Every failure derives from ``ExportError`` so callers (the CLI, the writer)
can abort the whole export with a single ``except`` clause while still
inspecting the concrete type.
"""

from __future__ import annotations


class ExportError(Exception):
    """Base class for export failures."""


class InputUnavailableError(ExportError):
    """The document has no annotation or no text in the requested range."""


class MalformedRangeError(ExportError):
    """The requested ``[start, end)`` range is reversed or out of bounds."""

    def __init__(self, start: int, end: int, length: int) -> None:
        self.start = start
        self.end = end
        self.length = length
        super().__init__(
            f"Invalid export range [{start}, {end}) for document of length {length}"
        )


class NonProgressScanError(ExportError):
    """The run scanner failed to advance its cursor.

    This is an internal defect, never a recoverable condition.
    """

    def __init__(self, position: int) -> None:
        self.position = position
        super().__init__(f"Run scanner made no progress at position {position}")


class MalformedTemplateError(ExportError):
    """A template contains ``${`` without a valid ``identifier}`` after it."""

    def __init__(self, position: int, snippet: str) -> None:
        self.position = position
        self.snippet = snippet
        super().__init__(
            f"Malformed placeholder at offset {position}: {snippet!r}"
        )


class ExportCancelledError(ExportError):
    """The caller requested cancellation while runs were being scanned."""

    def __init__(self, position: int) -> None:
        self.position = position
        super().__init__(f"Export cancelled at position {position}")
