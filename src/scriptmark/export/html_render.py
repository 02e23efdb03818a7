"""HTML rendering utilities: Markup, escape_html, render_template.

Two tools for two jobs:

- ``escape_html(text)`` makes raw screenplay text safe for element content,
  turning line breaks into ``<br>``.
- ``render_template(template, bindings)`` fills ``${key}`` placeholders in
  trusted template text (the document head, the stylesheet).  It does no
  escaping of its own.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from scriptmark.export.errors import MalformedTemplateError

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = ["Markup", "escape_html", "render_template"]

# Insertion order is the replacement priority: ``&`` first.
_HTML_SPECIALS: dict[str, str] = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "\n": "<br>",
}

# Either a well-formed placeholder or a stray ``${`` that starts a bad one.
_PLACEHOLDER = re.compile(r"\$\{(?P<key>[A-Za-z_][A-Za-z0-9_-]*)\}|\$\{")


class Markup(str):
    """Mark a string as trusted HTML that should not be escaped."""


def escape_html(text: str) -> Markup:
    """Escape *text* for use as HTML element content.

    If *text* is already a ``Markup`` instance it is returned unchanged.
    Otherwise ``&``, ``<``, ``>`` and ``\\n`` are replaced and the result is
    wrapped in ``Markup``.

    Uses character-by-character replacement so the ``&`` introduced by
    ``&lt;`` is never escaped again.
    """
    if isinstance(text, Markup):
        return text
    parts: list[str] = []
    for ch in text:
        parts.append(_HTML_SPECIALS.get(ch, ch))
    return Markup("".join(parts))


def render_template(template: str, bindings: Mapping[str, str]) -> str:
    """Substitute ``${key}`` placeholders in *template* from *bindings*.

    Placeholders whose key is not in *bindings* are left in the output
    literally.  Values are inserted verbatim; escape untrusted values before
    binding them.

    Raises:
        MalformedTemplateError: If ``${`` is not followed by an identifier
            and a closing ``}``.
    """

    def _substitute(match: re.Match[str]) -> str:
        key = match.group("key")
        if key is None:
            pos = match.start()
            raise MalformedTemplateError(pos, template[pos : pos + 20])
        return bindings.get(key, match.group(0))

    return _PLACEHOLDER.sub(_substitute, template)
