"""Hooktag expansion — short tags embedded in user content.

Syntax::

    [name attr="value" other='x' flag=y]enclosed content[/name]
    [name attr="value"/]
    [[name]]              -> literal "[name]", never expanded

Each tag name maps to a callable ``(attrs, content, code) -> str``
where ``content`` is ``None`` for self-closing tags and ``code`` is the
full matched tag. Tags with no registered callable are left untouched.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

logger = logging.getLogger(__name__)

Hooktag = Callable[[dict[str, str], str | None, str], str]

_ATTR_RE = re.compile(r"""([\w-]+)\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'\]/]+))|([\w-]+)""")


def parse_attributes(text: str) -> dict[str, str]:
    """Parse ``key="v" key='v' key=v flag`` into a dict (flags map to "")."""
    attrs: dict[str, str] = {}
    for match in _ATTR_RE.finditer(text):
        if match.group(1):
            value = match.group(2)
            if value is None:
                value = match.group(3)
            if value is None:
                value = match.group(4) or ""
            attrs[match.group(1)] = value
        elif match.group(5):
            attrs[match.group(5)] = ""
    return attrs


class HooktagExpander:
    """Registry of hooktag callables plus the expansion pass."""

    def __init__(self) -> None:
        self._tags: dict[str, Hooktag] = {}
        self._pattern: re.Pattern[str] | None = None

    def register(self, name: str, handler: Hooktag) -> None:
        """Register *handler* for ``[name]`` tags, replacing any previous one."""
        if not re.fullmatch(r"[\w-]+", name):
            msg = f"Invalid hooktag name {name!r}"
            raise ValueError(msg)
        self._tags[name] = handler
        self._pattern = None

    def names(self) -> list[str]:
        return list(self._tags)

    def _compiled(self) -> re.Pattern[str]:
        if self._pattern is None:
            names = "|".join(sorted((re.escape(n) for n in self._tags), key=len, reverse=True))
            self._pattern = re.compile(
                r"\[(\[?)(" + names + r")(?![\w-])([^\]/]*(?:/(?!\])[^\]/]*)*)"
                r"(?:(/)\]|\](?:(.*?)\[/\2\])?)(\]?)",
                re.DOTALL,
            )
        return self._pattern

    def expand(self, text: str | None) -> str:
        """Replace every registered hooktag in *text* with its output."""
        if not text:
            return text or ""
        if not self._tags:
            return text

        def _replace(match: re.Match[str]) -> str:
            code = match.group(0)
            if match.group(1) == "[" and match.group(6) == "]":
                return code[1:-1]
            name = match.group(2)
            attrs = parse_attributes(match.group(3) or "")
            content = None if match.group(4) else match.group(5)
            output = self._tags[name](attrs, content, code)
            logger.debug("Expanded hooktag %s", name)
            return match.group(1) + output + match.group(6)

        return self._compiled().sub(_replace, text)
