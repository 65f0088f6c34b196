"""Template resolution with most- to least-specific fallback.

For a ``(region, view_mode)`` rendering context the candidates are::

    {prefix}_{region}_{view_mode}
    {prefix}_{region}
    {prefix}

The first candidate the template engine reports as existing wins. The
outcome, including "nothing found", is memoized per :class:`TemplateKey`
so the template set is scanned at most once per key for the lifetime of
the cache. Template sets do not change while a deployment is running.

Note the separators: ``_`` joins prefix, region and view mode, while
region and view-mode names themselves use ``-`` (``left-sidebar``).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import NamedTuple

from fieldhooks.domain.errors import TemplateNotFound
from fieldhooks.infrastructure.cache import MemoryCache

logger = logging.getLogger(__name__)

DEFAULT_MENU_PREFIX = "Menu.render_menu"


class TemplateKey(NamedTuple):
    """Cache key for one rendering context."""

    region: str
    view_mode: str


class _NotFound:
    """Sentinel cached when no candidate exists."""

    def __repr__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND = _NotFound()


def candidate_templates(prefix: str, region: str, view_mode: str) -> list[str]:
    """Ordered candidate template ids, most specific first."""
    return [
        f"{prefix}_{region}_{view_mode}",
        f"{prefix}_{region}",
        prefix,
    ]


class TemplateResolver:
    """Resolves and memoizes the template used for a region/view-mode pair.

    Parameters:
        exists: Predicate telling whether a template id exists.
        prefix: Naming prefix shared by every candidate.
        cache: Memo store; a private one is created when omitted.
    """

    def __init__(
        self,
        exists: Callable[[str], bool],
        *,
        prefix: str = DEFAULT_MENU_PREFIX,
        cache: MemoryCache | None = None,
    ) -> None:
        self._exists = exists
        self._prefix = prefix
        self._cache = cache if cache is not None else MemoryCache()

    @property
    def prefix(self) -> str:
        return self._prefix

    def resolve(self, region: str, view_mode: str) -> str:
        """Return the winning template id for *region* and *view_mode*.

        Raises:
            TemplateNotFound: If no candidate exists (cached as well).
        """
        key = TemplateKey(region, view_mode)
        candidates = candidate_templates(self._prefix, region, view_mode)

        if key in self._cache:
            cached = self._cache.get(key)
            if cached is NOT_FOUND:
                raise TemplateNotFound(candidates)
            return cached

        for candidate in candidates:
            if self._exists(candidate):
                logger.debug("Resolved %s/%s to %s", region, view_mode, candidate)
                return self._cache.set(key, candidate)

        self._cache.set(key, NOT_FOUND)
        logger.warning("No template for region=%s view_mode=%s", region, view_mode)
        raise TemplateNotFound(candidates)

    def cached(self, region: str, view_mode: str) -> str | None:
        """The memoized template id for a key, or ``None`` if unresolved/missing."""
        value = self._cache.get(TemplateKey(region, view_mode))
        return None if value is NOT_FOUND else value
