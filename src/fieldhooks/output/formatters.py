"""Output-mode selection for ServiceResult.

``--json`` emits the serialized result, ``--quiet`` a single status line
(or bare ids for listings), and the default mode the Rich renderers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from fieldhooks.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from fieldhooks.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Global output flags relevant to formatting."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format *result* according to *settings*."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
