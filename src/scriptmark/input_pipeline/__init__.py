"""Input pipeline: turn annotator output into ``AnnotatedDocument`` instances."""

from scriptmark.input_pipeline.annotations import (
    AnnotationFile,
    AnnotationSpan,
    load_annotated_document,
    parse_annotation_json,
)

__all__ = [
    "AnnotationFile",
    "AnnotationSpan",
    "load_annotated_document",
    "parse_annotation_json",
]
