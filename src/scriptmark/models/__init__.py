"""Data models for ScriptMark annotated documents."""

from scriptmark.models.document import AnnotatedDocument, Run, StyleSpan

__all__ = [
    "AnnotatedDocument",
    "Run",
    "StyleSpan",
]
