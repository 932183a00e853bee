"""cmfgraph CLI: inspect, search and render capability graphs.

Entry point for the `cmfgraph` command. Requires ``pip install cmfgraph[cli]``.

Commands:
    inspect     Show node/edge/table counts for a data directory
    search      Resolve a query and print the matched node's panels
    render      Write an HTML snapshot of the dashboard
"""

from __future__ import annotations


def _require_typer():
    """Check that typer is available."""
    try:
        import typer  # noqa: F401
    except ImportError:
        import sys

        print("Error: typer is required for the CLI. Install with: pip install cmfgraph[cli]", file=sys.stderr)
        raise SystemExit(1) from None


def create_app():
    """Create the Typer app with all commands."""
    _require_typer()

    import typer

    from cmfgraph.cli import graph_cmd, render_cmd
    from cmfgraph.cli._logging import configure_logging

    app = typer.Typer(
        name="cmfgraph",
        help="Explore IT-CMF capability graphs from the terminal.",
        no_args_is_help=True,
    )

    app.callback()(configure_logging)
    graph_cmd.register_commands(app)
    render_cmd.register_commands(app)
    return app


def main():
    """CLI entry point."""
    app = create_app()
    app()
