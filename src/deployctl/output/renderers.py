"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Registry names and ids are always wrapped in ``Text`` so brackets in
them are never parsed as markup.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from deployctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from deployctl.services.result import ServiceResult

Renderer = Callable[["ServiceResult", "Console"], None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS[result.op]
        renderer(result, console)
        if verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode: one service id per line."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    services = result.data.get("services", [])
    return "\n".join(str(s["id"]) for s in services)


# ── Helpers ───────────────────────────────────────────────────────────


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including the telemetry span tree."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(Text(f"    {k}: {v}"))


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    """Render a span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="deploy.error"),
        Text(f"  {result.op}", style="deploy.op"),
        Text(" — "),
        Text(msg),
    )

    if verbose and err:
        console.print(Text(f"  code: {err.code}", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── services list ─────────────────────────────────────────────────────


def _render_service_list(result: ServiceResult, console: Console) -> None:
    """Render services grouped under their resolved projects."""
    projects: list[dict[str, Any]] = result.data.get("projects", [])
    services: list[dict[str, Any]] = result.data.get("services", [])
    project_names = {p["id"]: p["body"]["name"] for p in projects}

    org = (result.meta or {}).get("org")
    if org:
        console.print(Text.assemble(("org: ", "deploy.key"), (str(org), "deploy.org")))

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Project", style="deploy.project")
    table.add_column("Service", style="deploy.service")
    table.add_column("ID", style="deploy.id", no_wrap=True)
    for svc in services:
        body = svc["body"]
        project = project_names.get(body["project_id"], body["project_id"])
        table.add_row(Text(project), Text(body["name"]), Text(svc["id"]))
    console.print(table)

    empty = [p["body"]["name"] for p in projects if not _has_services(p["id"], services)]
    for name in empty:
        console.print(Text(f"  {name}: no services", style="dim"))
    console.print(
        Text(f"\n{_count(len(services), 'service')} in {_count(len(projects), 'project')}")
    )


def _has_services(project_id: str, services: list[dict[str, Any]]) -> bool:
    return any(s["body"]["project_id"] == project_id for s in services)


def _count(n: int, noun: str) -> str:
    return f"{n} {noun}" if n == 1 else f"{n} {noun}s"


_OP_RENDERERS: dict[str, Renderer] = {
    "list_services": _render_service_list,
}
