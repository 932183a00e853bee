"""Render command: write an HTML snapshot of the dashboard."""

from __future__ import annotations

from typing import Annotated

import typer

from cmfgraph.cli._config import load_config
from cmfgraph.cli._progress import warm_up
from cmfgraph.cli.graph_cmd import DataDirArg, load_or_exit
from cmfgraph.dashboard import Dashboard
from cmfgraph.exceptions import UnknownNodeError
from cmfgraph.layout.adapter import LayoutSettings


def render_cmd(
    data_dir: DataDirArg = None,
    output: Annotated[str, typer.Option("--output", "-o", help="HTML file to write")] = "dashboard.html",
    focus: Annotated[str | None, typer.Option("--focus", help="Node id to focus, as if clicked")] = None,
    search: Annotated[str | None, typer.Option("--search", help="Search query to focus the first match")] = None,
    ticks: Annotated[int | None, typer.Option("--ticks", help="Layout frames to run before drawing")] = None,
):
    """Settle the layout, apply a focus, and write the dashboard as HTML."""
    config = load_config()
    tables = load_or_exit(data_dir)
    dashboard = Dashboard(tables, settings=LayoutSettings(width=config.width, height=config.height))

    warm_up(dashboard.layout, ticks if ticks is not None else config.ticks)

    if focus is not None:
        try:
            dashboard.click_node(focus)
        except UnknownNodeError as e:
            print(f"Error: {e}")
            raise typer.Exit(1) from e
    if search is not None:
        dashboard.search(search)
        for notice in dashboard.surface.notices:
            print(notice)

    path = dashboard.save_html(output)
    focused = dashboard.focus.node
    suffix = f" (focused: {focused.id} {focused.name})" if focused is not None else ""
    print(f"Wrote dashboard to {path}{suffix}")


def register_commands(app: typer.Typer) -> None:
    app.command("render")(render_cmd)
