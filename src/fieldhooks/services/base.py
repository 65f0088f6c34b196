"""BaseService — foundation for all fieldhooks services.

Every service receives a :class:`Site` at construction time. The Site
provides the repositories, the lifecycle dispatcher and the view layer.
Services own their transaction boundaries via ``self._site.transaction()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fieldhooks.fields.dispatcher import LifecycleDispatcher
    from fieldhooks.infrastructure.site import Site


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class FieldInstanceService(BaseService):
            def attach(self, table: str, name: str, ...) -> ServiceResult:
                with self._site.transaction() as conn:
                    ...
    """

    def __init__(self, site: Site) -> None:
        self._site = site

    @property
    def _dispatcher(self) -> LifecycleDispatcher:
        return self._site.dispatcher
