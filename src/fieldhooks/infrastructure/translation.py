"""Domain-scoped message translation via gettext catalogs.

Catalogs live at ``{locale_dir}/{locale}/LC_MESSAGES/{domain}.mo``. A
missing catalog falls back to the untranslated message, so translation
never fails. Arguments are applied with ``%`` formatting after lookup.
"""

from __future__ import annotations

import gettext
from pathlib import Path
from typing import Any


class Translator:
    """Pure ``translate(domain, message, *args)`` collaborator."""

    def __init__(self, *, locale: str = "en", locale_dir: Path | None = None) -> None:
        self._locale = locale
        self._locale_dir = locale_dir
        self._catalogs: dict[str, gettext.NullTranslations] = {}

    @property
    def locale(self) -> str:
        return self._locale

    def _catalog(self, domain: str) -> gettext.NullTranslations:
        catalog = self._catalogs.get(domain)
        if catalog is None:
            if self._locale_dir is None:
                catalog = gettext.NullTranslations()
            else:
                catalog = gettext.translation(
                    domain,
                    localedir=str(self._locale_dir),
                    languages=[self._locale],
                    fallback=True,
                )
            self._catalogs[domain] = catalog
        return catalog

    def translate(self, domain: str, message: str, *args: Any) -> str:
        """Translate *message* within *domain*, then apply *args*."""
        translated = self._catalog(domain).gettext(message)
        if args:
            return translated % args
        return translated

    __call__ = translate
