"""Text-processing pipeline applied to field values before display.

Modes:

- ``full``: value passes through untouched.
- ``plain``: HTML-escaped, URLs and e-mail addresses linked, newlines
  converted to ``<br />``.
- ``filtered``: tags outside the allow-list removed, then linked and
  newlines converted.
- ``markdown``: rendered with markdown-it (raw HTML disabled), then
  bare URLs and e-mail addresses linked.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

import bleach
from bleach.linkifier import Linker
from markdown_it import MarkdownIt
from markupsafe import escape

DEFAULT_ALLOWED_TAGS: tuple[str, ...] = (
    "a",
    "em",
    "strong",
    "cite",
    "blockquote",
    "code",
    "ul",
    "ol",
    "li",
    "dl",
    "dt",
    "dd",
    "p",
    "br",
)

PROCESSING_MODES: tuple[str, ...] = ("plain", "full", "filtered", "markdown")

ALLOWED_ATTRIBUTES: dict[str, list[str]] = {"a": ["href", "title"]}
ALLOWED_PROTOCOLS: tuple[str, ...] = ("http", "https", "mailto")

# Anchors get no rel="nofollow"; code samples are not linked.
_LINKER = Linker(callbacks=[], skip_tags={"pre", "code"}, parse_email=True)


def process(text: str | None, mode: str, *, allowed_tags: Iterable[str] | None = None) -> str:
    """Run *text* through the pipeline selected by *mode*.

    Raises:
        ValueError: If *mode* is not one of :data:`PROCESSING_MODES`.
    """
    value = "" if text is None else str(text)
    if mode == "full":
        return value
    if mode == "plain":
        return nl2br(link_urls(str(escape(value))))
    if mode == "filtered":
        tags = DEFAULT_ALLOWED_TAGS if allowed_tags is None else tuple(allowed_tags)
        return nl2br(link_urls(filter_tags(value, tags)))
    if mode == "markdown":
        return link_urls(render_markdown(value))
    msg = f"Unknown text processing mode {mode!r}; expected one of {PROCESSING_MODES}"
    raise ValueError(msg)


def filter_tags(text: str, allowed_tags: Iterable[str]) -> str:
    """Drop every tag whose name is not in *allowed_tags*; keep its inner text.

    Only ``href`` and ``title`` survive, and only on anchors; an ``href``
    outside http, https and mailto is dropped. Comments are stripped.
    """
    return bleach.clean(
        text,
        tags=frozenset(t.lower() for t in allowed_tags),
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
        strip_comments=True,
    )


def link_urls(text: str) -> str:
    """Turn bare URLs and e-mail addresses into anchors.

    Existing ``<a>`` elements are left alone.
    """
    return _LINKER.linkify(text)


def nl2br(text: str) -> str:
    """Insert ``<br />`` before each line break."""
    return re.sub(r"(\r\n|\n|\r)", r"<br />\1", text)


def render_markdown(text: str) -> str:
    """Render CommonMark with raw HTML disabled."""
    md = MarkdownIt("commonmark", {"html": False})
    return md.render(text)
