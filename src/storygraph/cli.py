"""storygraph CLI - typer application entry point."""

from __future__ import annotations

import atexit
import json
import os
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from storygraph.observability import close_file_logging, configure_logging, get_logger

if TYPE_CHECKING:
    from storygraph.graph import GraphDocument, StoryGraph

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="sg",
    help="storygraph: validate story graphs for cycles and broken structure.",
    no_args_is_help=True,
)
console = Console()
log = get_logger(__name__)

CONFIG_ENV_VAR = "SG_CONFIG"

SEVERITY_DISPLAY = {
    "pass": "[green]✓[/green] pass",
    "warn": "[yellow]![/yellow] warn",
    "fail": "[red]✗[/red] fail",
}


@app.callback()
def main(
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity: -v for INFO, -vv for DEBUG.",
        ),
    ] = 0,
    log_dir: Annotated[
        Path | None,
        typer.Option(
            "--log",
            help="Enable file logging to {DIR}/logs/debug.jsonl.",
        ),
    ] = None,
) -> None:
    """storygraph: validate story graphs for cycles and broken structure."""
    if log_dir is not None:
        configure_logging(verbosity=verbose, log_to_file=True, log_dir=log_dir)
        atexit.register(close_file_logging)
    else:
        configure_logging(verbosity=verbose)


def _load_document(document: Path) -> tuple[GraphDocument, StoryGraph]:
    """Load a description file and build its graph, exiting with code 2 on error."""
    from storygraph.graph import GraphDocumentError, UnknownNodeError, load_graph_document

    try:
        doc = load_graph_document(document)
    except GraphDocumentError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2) from e

    try:
        graph = doc.to_graph()
    except UnknownNodeError as e:
        console.print(f"[red]Error:[/red] {e}")
        console.print(f"  in {document}")
        console.print(Markdown(e.to_feedback()))
        raise typer.Exit(2) from e

    log.debug("document_loaded", path=str(document), nodes=len(graph), edges=graph.edge_count())
    return doc, graph


def _label(node_id: int, titles: dict[int, str]) -> str:
    title = titles.get(node_id)
    return f"{title} ({node_id})" if title else str(node_id)


@app.command()
def version() -> None:
    """Show version information."""
    from storygraph import __version__

    console.print(f"storygraph v{__version__}")


@app.command()
def check(
    document: Annotated[Path, typer.Argument(help="Graph description file (YAML or JSON).")],
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help=f"Validation config file (default: ${CONFIG_ENV_VAR} if set).",
        ),
    ] = None,
    sort: Annotated[
        bool | None,
        typer.Option(
            "--sort/--no-sort",
            help="Sort cycle members for display (overrides config).",
        ),
    ] = None,
) -> None:
    """Validate a story graph: entry point, cycles, reachability, dead ends."""
    from dataclasses import replace

    from storygraph.config import ConfigError, load_validation_config
    from storygraph.graph import validate_story_graph

    config_path = config
    if config_path is None and os.getenv(CONFIG_ENV_VAR):
        config_path = Path(os.environ[CONFIG_ENV_VAR])

    try:
        validation_config = load_validation_config(config_path)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2) from e

    if sort is not None:
        validation_config = replace(validation_config, sort_components=sort)

    doc, graph = _load_document(document)
    report = validate_story_graph(
        graph,
        entries=doc.entries,
        terminals=doc.terminals,
        titles=doc.titles,
        config=validation_config,
    )

    table = Table(title=f"Story Graph Check: {document.name}")
    table.add_column("Check", style="cyan")
    table.add_column("Result", style="bold")
    table.add_column("Details")

    for item in report.checks:
        table.add_row(item.name, SEVERITY_DISPLAY[item.severity], item.message)

    console.print()
    console.print(table)
    console.print(f"\n{report.summary}")

    if report.has_failures:
        raise typer.Exit(1)


@app.command()
def cycles(
    document: Annotated[Path, typer.Argument(help="Graph description file (YAML or JSON).")],
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print components as a JSON list of id lists."),
    ] = False,
) -> None:
    """List groups of nodes that form cycles (strongly connected components)."""
    doc, graph = _load_document(document)
    components = graph.detect_cycles()

    if as_json:
        console.print_json(json.dumps(components))
        return

    if not components:
        console.print("[green]No cycles found.[/green]")
        return

    titles = doc.titles
    for i, component in enumerate(components, start=1):
        members = " -> ".join(_label(n, titles) for n in component)
        console.print(f"[red]Cycle {i}[/red] ({len(component)} nodes): {members}")


@app.command()
def probe(
    document: Annotated[Path, typer.Argument(help="Graph description file (YAML or JSON).")],
    from_id: Annotated[int, typer.Argument(help="Source node of the proposed edge.", min=0)],
    to_id: Annotated[int, typer.Argument(help="Target node of the proposed edge.", min=0)],
) -> None:
    """Check whether connecting FROM_ID -> TO_ID would create a cycle.

    Exits with code 1 when it would.
    """
    doc, graph = _load_document(document)
    titles = doc.titles
    edge = f"{_label(from_id, titles)} -> {_label(to_id, titles)}"

    if graph.would_create_cycle(from_id, to_id):
        console.print(f"[red]✗[/red] {edge} would create a cycle")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] {edge} keeps the graph acyclic")
