"""Click CLI with stats, vertices, and serve subcommands."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from dag_stats.errors import DatabaseError, GraphError
from dag_stats.models import AnalysisConfig
from dag_stats.pipeline import run_pipeline, run_vertex_report

_DATABASE_ARG = dict(
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default="database.txt",
    envvar="DAG_STATS_DATABASE",
)


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """dag-stats: Shape statistics for a rooted reference DAG."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger("dag_stats").setLevel(level)


@cli.command()
@click.argument("database", **_DATABASE_ARG)
@click.option("--json", "as_json", is_flag=True, help="Print the statistics as JSON")
@click.option("--precision", "-p", type=click.IntRange(min=0), default=2, show_default=True,
              help="Decimal places in the text output")
def stats(database: Path, as_json: bool, precision: int):
    """Print the average inbound references, root depth, root path size, and depth width."""
    config = AnalysisConfig(database_path=database, precision=precision)

    try:
        result = run_pipeline(config)
    except (GraphError, DatabaseError) as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(json.dumps(result.as_dict(), indent=2))
        return

    p = config.precision
    click.echo(f"AVG REF: {result.avg_inbound_refs:.{p}f}")
    click.echo(f"AVG DAG DEPTH: {result.avg_root_depth:.{p}f}")
    click.echo(f"AVG NODES PER ROOT PATH: {result.avg_nodes_per_root_path:.{p}f}")
    click.echo(f"AVG NODES PER DEPTH: {result.avg_nodes_per_depth:.{p}f}")


@cli.command()
@click.argument("database", **_DATABASE_ARG)
def vertices(database: Path):
    """List every vertex with its in-degree, depth, and root paths through it."""
    try:
        report = run_vertex_report(AnalysisConfig(database_path=database))
    except (GraphError, DatabaseError) as e:
        raise click.ClickException(str(e))

    click.echo(f"{'ID':>8}  {'IN':>6}  {'DEPTH':>6}  {'PATHS':>8}")
    for item in report:
        depth = str(item.depth) if item.reachable else "-"
        click.echo(f"{item.id:>8}  {item.in_degree:>6}  {depth:>6}  {item.path_count:>8}")

    unreached = sum(1 for item in report if not item.reachable)
    if unreached:
        click.echo(click.style(f"\n{unreached} vertex(es) not reachable from the root", fg="yellow"))


@cli.command()
@click.option("--port", "-p", default=8430, help="Port number")
@click.option("--host", default="127.0.0.1", help="Host address")
def serve(port: int, host: str):
    """Start the HTTP API."""
    try:
        import uvicorn
    except ImportError:
        raise click.ClickException(
            "uvicorn is required for the HTTP API. "
            "Install with: pip install 'dag-stats[web]'"
        )

    from dag_stats.web import create_app

    click.echo(f"Starting dag-stats API at http://{host}:{port}")
    uvicorn.run(create_app(), host=host, port=port, log_level="info")


if __name__ == "__main__":
    cli()
