"""Style tag to output element mapping.

``STYLE_RULES`` is the single table deciding how a semantic class becomes
markup.  Rules are tried in order and the first matching predicate wins; the
last rule is a catch-all.  Add a class by adding a rule here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

# Annotator tags look like ``fountain-scene-heading`` and may carry a
# ``-highlight`` suffix when the span is emphasised in the editor.
NAMESPACE_PREFIX = "fountain-"
HIGHLIGHT_SUFFIX = "-highlight"

# Class used for text the annotator left untagged.
DEFAULT_CLASS = "action"


@dataclass(frozen=True, slots=True)
class ElementSpec:
    """How a resolved class is rendered.

    Attributes:
        tag_name: Output element name (``h1``, ``h2``, ``p``...).
        suppressed: When true, no element is emitted at all.
    """

    tag_name: str
    suppressed: bool = False


def _is(name: str) -> Callable[[str], bool]:
    return lambda cls: cls == name


STYLE_RULES: tuple[tuple[Callable[[str], bool], ElementSpec], ...] = (
    (_is("scene-heading"), ElementSpec("h1")),
    (_is("character"), ElementSpec("h2")),
    (_is("comment"), ElementSpec("", suppressed=True)),
    (lambda cls: True, ElementSpec("p")),
)


def normalise_style_tag(tag: str | None) -> str:
    """Reduce an annotator tag to its bare class name.

    ``None`` becomes ``"action"``.  A trailing ``-highlight`` is removed
    first, then a leading ``fountain-`` namespace.
    """
    if tag is None:
        return DEFAULT_CLASS
    return tag.removesuffix(HIGHLIGHT_SUFFIX).removeprefix(NAMESPACE_PREFIX)


def resolve_style(tag: str | None) -> tuple[str, ElementSpec]:
    """Return the bare class name and element spec for *tag*."""
    cls = normalise_style_tag(tag)
    for predicate, spec in STYLE_RULES:
        if predicate(cls):
            return cls, spec
    msg = f"No style rule matches class {cls!r}; STYLE_RULES needs a catch-all"
    raise LookupError(msg)
