"""Built-in hooktags."""

from __future__ import annotations

from typing import TYPE_CHECKING

from markupsafe import escape

from fieldhooks.plugins.hookspecs import hookimpl

if TYPE_CHECKING:
    from fieldhooks.infrastructure.hooktags import Hooktag
    from fieldhooks.infrastructure.site import Site


class SiteHooktags:
    """``[site_title/]`` expands to the configured site title."""

    @hookimpl
    def register_hooktags(self, site: Site) -> dict[str, Hooktag]:
        title = site.settings.site.title

        def site_title(attrs: dict[str, str], content: str | None, code: str) -> str:
            return str(escape(title))

        return {"site_title": site_title}
