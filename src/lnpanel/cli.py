from __future__ import annotations

import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import Settings
from .graph.neighbors import MissingHomeNode
from .ingest import describegraph
from .ingest.frames import FrameError, load_series
from .ingest.nodegraph import graph_fields
from .panel import RenderContext, prepare, render_panel


app = typer.Typer(add_completion=False, help="Lightning channel-graph panel: neighborhood of your node as a force graph.")
console = Console()
err_console = Console(stderr=True)


@app.callback()
def main(
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level (default: LNPANEL_LOG_LEVEL or WARNING)"),
):
    settings = Settings()
    logging.basicConfig(
        level=(log_level or settings.log_level).upper(),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _load(input: Path, identity: str | None):
    try:
        return load_series(input, identity_pubkey=identity)
    except json.JSONDecodeError as e:
        err_console.print(f"Invalid JSON in {input}: {e}", style="red")
        raise typer.Exit(code=2)
    except FrameError as e:
        err_console.print(str(e), style="red")
        raise typer.Exit(code=2)


def _degree_range(settings: Settings, min_degree: int | None, max_degree: int | None) -> tuple[int, int]:
    lo = settings.min_degree if min_degree is None else int(min_degree)
    hi = settings.max_degree if max_degree is None else int(max_degree)
    if lo > hi:
        raise typer.BadParameter("--min-degree must be <= --max-degree")
    return lo, hi


@app.command()
def render(
    input: Path = typer.Option(..., "--input", exists=True, file_okay=True, dir_okay=False, help="Frames, node-graph or describegraph JSON"),
    out: Path | None = typer.Option(None, "--out", help="Write the chart option here instead of stdout"),
    identity: str | None = typer.Option(None, "--identity", help="Own pubkey (describegraph input only)"),
    width: float | None = typer.Option(None, "--width", help="Chart width in px"),
    height: float | None = typer.Option(None, "--height", help="Chart height in px"),
    depth: int | None = typer.Option(None, "--depth", min=0, help="Hop depth"),
    min_degree: int | None = typer.Option(None, "--min-degree", help="Lowest channel count of a peer to expand"),
    max_degree: int | None = typer.Option(None, "--max-degree", help="Highest channel count of a peer to expand"),
    boundary_neighbors: bool = typer.Option(False, "--boundary-neighbors", help="Include far ends of channels at the last hop"),
    indent: int | None = typer.Option(None, "--indent", help="JSON indent"),
):
    """Render the chart option JSON for the home node's neighborhood."""
    settings = Settings()
    degree_range = _degree_range(settings, min_degree, max_degree)
    series = _load(input, identity)

    try:
        option = render_panel(
            series,
            RenderContext(width=width, height=height),
            settings=settings,
            depth=depth,
            degree_range=degree_range,
            boundary_neighbors=True if boundary_neighbors else None,
        )
    except (MissingHomeNode, FrameError) as e:
        err_console.print(str(e), style="red")
        raise typer.Exit(code=2)

    text = json.dumps(option, indent=indent, ensure_ascii=False)
    if out is None:
        # Plain write: rich would treat [..] in aliases as markup.
        typer.echo(text)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text + "\n", encoding="utf-8")
    console.print(f"Wrote chart option to {out}", markup=False)


@app.command()
def stats(
    input: Path = typer.Option(..., "--input", exists=True, file_okay=True, dir_okay=False),
    identity: str | None = typer.Option(None, "--identity", help="Own pubkey (describegraph input only)"),
    depth: int | None = typer.Option(None, "--depth", min=0, help="Hop depth"),
    min_degree: int | None = typer.Option(None, "--min-degree"),
    max_degree: int | None = typer.Option(None, "--max-degree"),
    top: int = typer.Option(10, "--top", help="Show this many best-connected peers in the neighborhood"),
):
    """Show graph totals and the home node's neighborhood."""
    settings = Settings()
    degree_range = _degree_range(settings, min_degree, max_degree)
    series = _load(input, identity)

    try:
        data = prepare(series, settings=settings, depth=depth, degree_range=degree_range)
    except (MissingHomeNode, FrameError) as e:
        err_console.print(str(e), style="red")
        raise typer.Exit(code=2)

    graph = data.graph
    hood = data.neighborhood

    table = Table(title="Channel Graph")
    table.add_column("Metric")
    table.add_column("Value")
    table.add_row("Nodes", str(len(graph.nodes)))
    table.add_row("Channels", str(len(graph.edges)))
    table.add_row("Home", hood.home.alias or hood.home.id)
    table.add_row("Home channels", str(hood.home.degree))
    table.add_row("Home capacity (BTC)", str(hood.home.value))
    table.add_row(f"Nodes within {hood.depth} hops", str(len(hood.nodes) - 1))
    table.add_row(f"Channels within {hood.depth} hops", str(len(hood.edges)))
    console.print(table)

    peers = sorted((n for n in hood.nodes if n is not hood.home), key=lambda n: n.degree, reverse=True)[: max(0, top)]
    if peers:
        t2 = Table(title="Best-connected Peers")
        t2.add_column("alias")
        t2.add_column("channels", justify="right")
        t2.add_column("BTC", justify="right")
        for n in peers:
            t2.add_row(n.alias or n.id, str(n.degree), str(n.value))
        console.print(t2)


@app.command()
def fields():
    """Print the node-graph field schema."""
    typer.echo(json.dumps(graph_fields()))


@app.command()
def convert(
    describegraph_path: Path = typer.Option(..., "--describegraph", exists=True, file_okay=True, dir_okay=False),
    identity: str | None = typer.Option(None, "--identity", help="Own pubkey; marks the home node"),
    out: Path = typer.Option(..., "--out", help="Output node-graph JSON path"),
):
    """Convert an `lncli describegraph` dump into a node-graph payload."""
    try:
        raw = json.loads(describegraph_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        err_console.print(f"Invalid JSON in {describegraph_path}: {e}", style="red")
        raise typer.Exit(code=2)
    if not describegraph.is_describegraph(raw):
        raise typer.BadParameter("Not a describegraph dump (expected nodes with pub_key / edges with node1_pub)")

    payload = describegraph.nodegraph_from_describegraph(raw, identity_pubkey=identity)
    if identity is None or not any(n.get("mainstat") for n in payload["nodes"]):
        console.print("No home node marked; pass --identity with your node's pubkey.", style="yellow")

    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(payload, ensure_ascii=False) + "\n", encoding="utf-8")
    console.print(f"Wrote {len(payload['nodes'])} nodes, {len(payload['edges'])} channels to {out}", markup=False)


if __name__ == "__main__":
    app()
