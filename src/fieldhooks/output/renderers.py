"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). Renderers
are dispatched by ``result.op`` in :func:`render_result`; unknown ops
fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from fieldhooks.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from fieldhooks.services.result import ServiceResult

Renderer = Callable[["ServiceResult", "Console"], None]

# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: ids or names for listings, markup for renders."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if result.op == "list_types":
        return "\n".join(t["type"] for t in result.data.get("types", []))
    if result.op == "list_fields":
        return "\n".join(f["name"] for f in result.data.get("fields", []))
    if "html" in result.data:
        return str(result.data["html"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="fh.ok"), Text(f"  {result.op}", style="fh.op"), sep="")


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="fh.key")
    if isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":")))
    elif key == "id" or key.endswith("_id"):
        v = Text(str(value), style="fh.id")
    elif key in ("type", "handler"):
        v = Text(str(value), style="fh.type")
    elif key in ("title", "label"):
        v = Text(str(value), style="fh.title")
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="fh.error"),
        Text(f"  {result.op}", style="fh.op"),
        Text(" — "),
        Text(msg),
        sep="",
    )
    if err is None:
        return
    # Validation errors are shown without --verbose too.
    for name, messages in err.detail.get("errors", {}).items():
        for message in messages:
            console.print(Text(f"  {name}: ", style="fh.key"), Text(message), sep="")
    if verbose and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}", markup=False)


def _render_generic(result: ServiceResult, console: Console) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    _render_warnings(result, console)


def _render_warnings(result: ServiceResult, console: Console) -> None:
    for warning in result.warnings:
        console.print(Text("  warning: ", style="fh.warning"), Text(warning), sep="")


# ── Field renderers ───────────────────────────────────────────────────


def _render_types(result: ServiceResult, console: Console) -> None:
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Type", style="fh.type")
    table.add_column("Name", style="fh.title")
    table.add_column("Description")
    for entry in result.data.get("types", []):
        table.add_row(Text(entry["type"]), Text(entry["name"]), Text(entry["description"]))
    console.print(table)
    console.print(f"\n{result.data.get('count', 0)} types")


def _render_instance(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key in ("id", "table", "name", "type", "label", "required"):
        if key in result.data:
            _field(console, key, result.data[key])
    if result.data.get("settings"):
        _field(console, "settings", result.data["settings"])


def _render_instances(result: ServiceResult, console: Console) -> None:
    fields = result.data.get("fields", [])
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Name", style="fh.title")
    table.add_column("Type", style="fh.type")
    table.add_column("Label")
    table.add_column("Required", style="fh.required")
    for entry in fields:
        table.add_row(
            Text(entry["name"]),
            Text(entry["type"]),
            Text(entry["label"]),
            "yes" if entry["required"] else "",
        )
    console.print(table)
    console.print(f"\n{len(fields)} fields on {result.data.get('table', '?')}")


def _render_entity(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    _field(console, "table", result.data.get("table"))
    _field(console, "entity_id", result.data.get("entity_id"))
    for name, value in result.data.get("fields", {}).items():
        console.print(Text(f"  {name} = ", style="fh.key"), Text(json.dumps(value)), sep="")
    _render_warnings(result, console)


def _render_html(result: ServiceResult, console: Console) -> None:
    """Print rendered markup verbatim."""
    console.print(str(result.data.get("html", "")), markup=False, soft_wrap=True)


# ── Menu renderers ────────────────────────────────────────────────────


def _render_menu_tree(result: ServiceResult, console: Console) -> None:
    tree = Tree(Text(f"{result.data.get('id')}  {result.data.get('title', '')}", style="fh.title"))

    def _add(node: Tree, links: list[dict[str, Any]]) -> None:
        for link in links:
            branch = node.add(Text(f"{link['id']}  {link['title']}  ({link['url']})"))
            _add(branch, link.get("children", []))

    _add(tree, result.data.get("links", []))
    console.print(tree)


def _render_created(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        if value is not None:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Renderer] = {
    # Fields
    "list_types": _render_types,
    "attach_field": _render_instance,
    "detach_field": _render_instance,
    "list_fields": _render_instances,
    "field_settings": _render_html,
    "field_formatter": _render_html,
    # Entities
    "get_entity": _render_entity,
    "save_entity": _render_entity,
    "display_entity": _render_html,
    "edit_entity": _render_html,
    # Menus
    "create_menu": _render_created,
    "add_link": _render_created,
    "show_menu": _render_menu_tree,
    "render_menu": _render_html,
}
