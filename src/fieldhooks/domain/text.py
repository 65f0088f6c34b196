"""Text field settings and validation predicates.

Settings are checked once, when a field is attached or loaded, so a
bad pattern or an unknown processing mode fails fast instead of at the
first render.

Predicates follow the text handler's rule semantics exactly:

- required: strip tags, decode entities (textarea only), trim; non-empty.
- max length: ``len(value.strip()) <= max_len``.
- pattern: search semantics against the raw value.
"""

from __future__ import annotations

import html
import re
from functools import lru_cache
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

TextProcessing = Literal["plain", "full", "filtered", "markdown"]

_TAG_RE = re.compile(r"<!--.*?-->|<[^>]*>", re.DOTALL)

# PCRE-style "/pattern/flags" input is accepted for compatibility with
# stored field configurations.
_DELIMITERS = frozenset("/#~@!%")
_PCRE_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "u": 0,
}


class TextSettings(BaseModel):
    """``metadata.settings`` schema for ``text`` fields."""

    type: Literal["text", "textarea"] = "textarea"
    max_len: int = Field(default=0, ge=0)
    validation_rule: str | None = None
    validation_message: str | None = None
    text_processing: TextProcessing = "plain"

    @field_validator("validation_rule")
    @classmethod
    def _compile_rule(cls, value: str | None) -> str | None:
        if value is None or value == "":
            return None
        try:
            compile_pattern(value)
        except re.error as exc:
            msg = f"invalid validation_rule {value!r}: {exc}"
            raise ValueError(msg) from exc
        return value

    @field_validator("max_len", mode="before")
    @classmethod
    def _blank_max_len(cls, value: Any) -> Any:
        if value is None or value == "":
            return 0
        return value


@lru_cache(maxsize=256)
def compile_pattern(rule: str) -> re.Pattern[str]:
    """Compile *rule*, translating ``/pattern/flags`` delimiters if present."""
    if len(rule) >= 2 and rule[0] in _DELIMITERS:
        end = rule.rfind(rule[0])
        flags_part = rule[end + 1 :]
        if end > 0 and all(c in _PCRE_FLAGS for c in flags_part):
            flags = 0
            for c in flags_part:
                flags |= _PCRE_FLAGS[c]
            return re.compile(rule[1:end], flags)
    return re.compile(rule)


def strip_tags(value: str) -> str:
    """Remove markup tags and comments."""
    return _TAG_RE.sub("", value)


def is_filled(value: Any, *, decode_entities: bool = False) -> bool:
    """Required-rule predicate.

    ``decode_entities`` is set for textarea fields, where editors submit
    ``&nbsp;`` for visually empty content.
    """
    text = strip_tags(str(value if value is not None else ""))
    if decode_entities:
        text = html.unescape(text)
    return text.strip() != ""


def within_length(value: Any, max_len: int) -> bool:
    """Max-length predicate; surrounding whitespace is not counted."""
    return len(str(value if value is not None else "").strip()) <= max_len


def matches(value: Any, rule: str) -> bool:
    """Pattern predicate against the raw value."""
    return compile_pattern(rule).search(str(value if value is not None else "")) is not None
