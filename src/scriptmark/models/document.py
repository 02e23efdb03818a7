"""Annotated document model for screenplay export.

An annotated document is plain text plus a step function from character
position to an optional style tag.  The step function is backed by a sorted
tuple of non-overlapping ``StyleSpan`` ranges; positions not covered by any
span are untagged (``None``).

These are plain frozen dataclasses for in-memory use.  Nothing here knows
how the annotation was produced.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclass(frozen=True, slots=True)
class StyleSpan:
    """A half-open character range carrying one style tag.

    Attributes:
        start: Start character index (inclusive).
        end: End character index (exclusive).
        tag: Style tag assigned by the annotator (e.g. ``"fountain-character"``).
    """

    start: int
    end: int
    tag: str


@dataclass(frozen=True, slots=True)
class Run:
    """A maximal span within one paragraph sharing a single style tag.

    Attributes:
        start: Start character index (inclusive).
        end: End character index (exclusive).
        tag: Style tag at ``start``, or ``None`` for untagged text.
    """

    start: int
    end: int
    tag: str | None

    def text(self, doc: AnnotatedDocument) -> str:
        """Return the raw source text covered by this run."""
        return doc.text[self.start : self.end]


@dataclass(frozen=True)
class AnnotatedDocument:
    """Text plus a style-tag step function.

    Attributes:
        text: The full character buffer.
        spans: Sorted, non-overlapping tagged ranges.  ``None`` means the
            annotation pass never ran; an empty tuple means every position
            is untagged.
        name: Source file name, used to derive output file names.
    """

    text: str
    spans: tuple[StyleSpan, ...] | None = ()
    name: str | None = None
    _starts: list[int] = field(
        default_factory=list, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if self.spans is None:
            return
        # Accept lists from callers but store an immutable tuple
        object.__setattr__(self, "spans", tuple(self.spans))
        prev_end = 0
        for span in self.spans:
            if not span.tag:
                msg = f"Span {span.start}-{span.end} has an empty tag"
                raise ValueError(msg)
            if span.start >= span.end:
                msg = f"Span {span.start}-{span.end} is empty or reversed"
                raise ValueError(msg)
            if span.start < prev_end:
                msg = f"Span {span.start}-{span.end} overlaps or is out of order"
                raise ValueError(msg)
            if span.end > len(self.text):
                msg = (
                    f"Span {span.start}-{span.end} extends past "
                    f"document end ({len(self.text)})"
                )
                raise ValueError(msg)
            prev_end = span.end
        object.__setattr__(self, "_starts", [s.start for s in self.spans])

    @classmethod
    def from_char_tags(
        cls,
        text: str,
        tags: Sequence[str | None],
        name: str | None = None,
    ) -> AnnotatedDocument:
        """Build a document from one tag per character.

        Adjacent characters with equal tags are merged into a single span.
        """
        if len(tags) != len(text):
            msg = f"Expected {len(text)} tags, got {len(tags)}"
            raise ValueError(msg)
        spans: list[StyleSpan] = []
        run_start = 0
        for i in range(1, len(tags) + 1):
            if i == len(tags) or tags[i] != tags[run_start]:
                tag = tags[run_start]
                if tag is not None:
                    spans.append(StyleSpan(run_start, i, tag))
                run_start = i
        return cls(text=text, spans=tuple(spans), name=name)

    @property
    def base_name(self) -> str | None:
        """The source name without its final extension, or ``None``."""
        if not self.name:
            return None
        return PurePath(self.name).stem or None

    def _span_index(self, pos: int) -> int | None:
        """Index of the span containing *pos*, or ``None``."""
        if not self.spans:
            return None
        i = bisect_right(self._starts, pos) - 1
        if i >= 0 and pos < self.spans[i].end:
            return i
        return None

    def tag_at(self, pos: int) -> str | None:
        """Return the style tag at character *pos* (``None`` if untagged)."""
        i = self._span_index(pos)
        return None if i is None else self.spans[i].tag

    def next_tag_change(self, pos: int, limit: int) -> int:
        """Return the first position after *pos* whose tag differs.

        The search is bounded by *limit*: if the tag is constant on
        ``[pos, limit)`` the result is *limit*.  Adjacent spans carrying the
        same tag count as one constant interval.
        """
        if pos >= limit:
            return limit
        spans = self.spans or ()
        current = self.tag_at(pos)
        i = self._span_index(pos)
        if i is not None:
            # Inside a span: walk forward while spans abut with the same tag
            end = spans[i].end
            while i + 1 < len(spans) and spans[i + 1].start == end:
                if spans[i + 1].tag != current:
                    break
                i += 1
                end = spans[i].end
            return min(end, limit)
        # Untagged: the change is the start of the next span
        j = bisect_right(self._starts, pos) if spans else 0
        if j < len(spans):
            return min(spans[j].start, limit)
        return limit
