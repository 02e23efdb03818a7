"""Build one HTML element per run."""

from __future__ import annotations

import html
from typing import TYPE_CHECKING

from scriptmark.export.html_render import escape_html
from scriptmark.export.style_classes import resolve_style

if TYPE_CHECKING:
    from scriptmark.models.document import AnnotatedDocument, Run


def build_element(run: Run, doc: AnnotatedDocument) -> str | None:
    """Render *run* as ``<tag class="cls">text</tag>``, or ``None`` if suppressed.

    The ``class`` attribute is always the bare class name, so classes that
    share an output element (every ``p``) stay distinguishable in CSS.
    """
    cls, spec = resolve_style(run.tag)
    if spec.suppressed:
        return None
    body = escape_html(run.text(doc))
    attr = html.escape(cls, quote=True)
    return f'<{spec.tag_name} class="{attr}">{body}</{spec.tag_name}>\n'
