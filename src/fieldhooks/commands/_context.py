"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. The Site is built lazily so ``--help`` and
``--version`` never touch the database.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

import click

from fieldhooks.domain.errors import (
    FieldhooksError,
    InvalidFieldSettings,
    TemplateNotFound,
    UnknownFieldType,
)
from fieldhooks.output.formatters import OutputSettings, format_result
from fieldhooks.services.result import INVALID_SETTINGS, ServiceResult

if TYPE_CHECKING:
    from fieldhooks.config.settings import FieldhooksSettings
    from fieldhooks.infrastructure.site import Site

logger = logging.getLogger(__name__)


def error_result(op: str, exc: FieldhooksError) -> ServiceResult:
    """Turn a configuration error raised by a service into a failed result."""
    detail: dict[str, object] = {}
    if isinstance(exc, UnknownFieldType):
        code = "UNKNOWN_FIELD_TYPE"
        detail["type"] = exc.type_name
    elif isinstance(exc, TemplateNotFound):
        code = "TEMPLATE_NOT_FOUND"
        detail["candidates"] = list(exc.candidates)
    elif isinstance(exc, InvalidFieldSettings):
        code = INVALID_SETTINGS
        detail["reason"] = exc.reason
    else:
        code = "ERROR"
    return ServiceResult.failure(op, code, str(exc), detail=detail)


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: FieldhooksSettings) -> None:
        self.settings = settings
        self._site: Site | None = None

        from fieldhooks.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

    @property
    def site(self) -> Site:
        """The site instance (created lazily on first access)."""
        if self._site is None:
            from fieldhooks.config.logging import bind_context
            from fieldhooks.infrastructure.site import Site

            bind_context(site=str(self.settings.site_root))
            self._site = Site(self.settings)
        return self._site

    def run(self, op: str, action: Callable[[], ServiceResult]) -> None:
        """Call *action* and emit its result.

        Configuration errors raised by the service become a failed
        result for *op* instead of a traceback.
        """
        try:
            result = action()
        except FieldhooksError as exc:
            logger.debug("%s failed", op, exc_info=True)
            result = error_result(op, exc)
        self.emit(result)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout; warnings go to stderr outside ``--json``.
        * Failure: stderr, then exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    def close(self) -> None:
        """Release the site's resources and drop bound log context."""
        from fieldhooks.config.logging import clear_context

        if self._site is not None:
            self._site.close()
            self._site = None
        clear_context()
