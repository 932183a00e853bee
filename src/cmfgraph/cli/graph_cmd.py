"""Graph CLI commands: inspect, search."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from cmfgraph.cli._config import load_config
from cmfgraph.cli._format import print_json, print_lines, print_table, truncate
from cmfgraph.dashboard import Dashboard
from cmfgraph.exceptions import DataLoadError
from cmfgraph.loader import load_tables
from cmfgraph.surface import RecordingSurface
from cmfgraph.tables import DataTables

DataDirArg = Annotated[
    Path | None,
    typer.Argument(help="Directory with the JSON sources (default: [tool.cmfgraph] data_dir)"),
]


def resolve_data_dir(data_dir: Path | None) -> Path:
    """Use the given directory, or fall back to [tool.cmfgraph] data_dir."""
    if data_dir is not None:
        return data_dir
    configured = load_config().data_dir
    if configured is None:
        print("Error: no data directory given and none configured.")
        print("Hint: pass DATA_DIR or set it in pyproject.toml:")
        print('  [tool.cmfgraph]\n  data_dir = "data"')
        raise typer.Exit(1)
    return configured


def load_or_exit(data_dir: Path | None) -> DataTables:
    """Load tables, turning a load failure into a single error and exit code 1."""
    try:
        return load_tables(resolve_data_dir(data_dir))
    except DataLoadError as e:
        print(f"Error: {e}")
        raise typer.Exit(1) from e


def inspect_cmd(
    data_dir: DataDirArg = None,
    as_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    output: Annotated[str | None, typer.Option("--output", help="Write JSON to file")] = None,
):
    """Show node, edge and lookup table counts."""
    tables = load_or_exit(data_dir)
    summary = tables.summary()
    groups = tables.group_counts()

    if as_json:
        print_json("inspect", {"counts": summary, "groups": groups}, output)
        return

    print(
        f"\nGraph: {summary['nodes']} nodes | {summary['edges']} edges | "
        f"{summary['cbbs']} with CBBs | {summary['objectives']} with objectives | "
        f"{summary['artifacts']} with artifacts\n"
    )
    rows = [[group, str(count)] for group, count in groups.items()]
    print_lines(print_table(["Group", "Nodes"], rows))


def search_cmd(
    query: Annotated[str, typer.Argument(help="Case-insensitive text matched against name and short name")],
    data_dir: DataDirArg = None,
    as_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
):
    """Find the first node matching QUERY and show its detail panels."""
    tables = load_or_exit(data_dir)
    surface = RecordingSurface()
    dashboard = Dashboard(tables, surface=surface)
    dashboard.search(query)

    if surface.notices:
        print(surface.notices[-1])
        raise typer.Exit(1)

    node = dashboard.focus.node
    if node is None:
        print("Nothing to search for.")
        raise typer.Exit(1)

    panels = dashboard.selection.context.panels.render(node)
    neighbors = sorted(tables.neighbors(node.id))

    if as_json:
        data = {
            "query": query.strip().lower(),
            "node": {"id": node.id, "name": node.name, "name_short": node.name_short},
            "neighbors": neighbors,
            "panels": {command.panel.value: command.content.to_text() for command in panels},
        }
        print_json("search", data)
        return

    label = f" ({node.name_short})" if node.name_short else ""
    print(f"\nMatched {node.id}: {node.name}{label}")
    if neighbors:
        names = ", ".join(truncate(tables.node(n).label, 24) for n in neighbors)
        print(f"Connected: {names}")
    for command in panels:
        print()
        print(command.content.to_text())


def register_commands(app: typer.Typer) -> None:
    app.command("inspect")(inspect_cmd)
    app.command("search")(search_cmd)
