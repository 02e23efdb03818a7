"""Load annotated documents from JSON annotation files.

The annotator writes one JSON file per source document::

    {
      "name": "pilot.fountain",
      "text": "INT. ROOM\\n\\nA man enters.",
      "spans": [{"start": 0, "end": 9, "tag": "fountain-scene-heading"}]
    }

``spans`` may be omitted or ``null`` when the annotation pass has not run;
export then fails with ``InputUnavailableError``.  ``name`` falls back to the
JSON file's stem with a ``.fountain`` extension.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, NonNegativeInt, ValidationError, model_validator

from scriptmark.export.errors import InputUnavailableError
from scriptmark.models.document import AnnotatedDocument, StyleSpan

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

SOURCE_EXTENSION = ".fountain"


class AnnotationSpan(BaseModel):
    """One tagged range as written by the annotator."""

    start: NonNegativeInt
    end: NonNegativeInt
    tag: str

    @model_validator(mode="after")
    def _end_after_start(self) -> AnnotationSpan:
        if self.end <= self.start:
            msg = f"span end ({self.end}) must be greater than start ({self.start})"
            raise ValueError(msg)
        return self


class AnnotationFile(BaseModel):
    """Top-level annotation file schema."""

    name: str | None = None
    text: str
    spans: list[AnnotationSpan] | None = None

    def to_document(self, name: str | None = None) -> AnnotatedDocument:
        """Build an ``AnnotatedDocument``, sorting spans by start."""
        spans = None
        if self.spans is not None:
            spans = tuple(
                StyleSpan(s.start, s.end, s.tag)
                for s in sorted(self.spans, key=lambda s: (s.start, s.end))
            )
        return AnnotatedDocument(text=self.text, spans=spans, name=self.name or name)


def parse_annotation_json(
    raw: str | bytes, name: str | None = None
) -> AnnotatedDocument:
    """Parse annotation JSON into an ``AnnotatedDocument``.

    Args:
        raw: JSON text.
        name: Fallback document name when the JSON has none.

    Raises:
        InputUnavailableError: If the JSON is invalid or the spans are
            inconsistent with the text.
    """
    try:
        parsed = AnnotationFile.model_validate_json(raw)
    except ValidationError as exc:
        msg = f"Invalid annotation data: {exc.error_count()} error(s)\n{exc}"
        raise InputUnavailableError(msg) from exc
    try:
        return parsed.to_document(name)
    except ValueError as exc:
        msg = f"Inconsistent annotation spans: {exc}"
        raise InputUnavailableError(msg) from exc


def load_annotated_document(path: Path) -> AnnotatedDocument:
    """Read and parse the annotation file at *path*.

    Raises:
        InputUnavailableError: If the file cannot be read or parsed.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read annotation file {path}: {exc.strerror or exc}"
        raise InputUnavailableError(msg) from exc
    except UnicodeDecodeError as exc:
        msg = f"Annotation file {path} is not valid UTF-8: {exc.reason}"
        raise InputUnavailableError(msg) from exc
    doc = parse_annotation_json(raw, name=path.stem + SOURCE_EXTENSION)
    logger.info(
        "Loaded %s: %d chars, %s spans",
        path,
        len(doc.text),
        "no" if doc.spans is None else len(doc.spans),
    )
    return doc
