"""Command-line interface for reqorder."""

from pathlib import Path

import structlog
import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import ReqOrderConfig
from .constants import VERSION
from .dependency.dot import to_dot
from .dependency.resolver import Resolution
from .models.manifest import Manifest, load_manifest
from .observability.logger import configure_from_config
from .session import ResolutionSession
from .utils.exceptions import CycleDetectedError, ReqOrderError, ResolutionError

app = typer.Typer(
    name="reqorder",
    help="reqorder - dependency-ordered activation of configuration units",
    add_completion=False,
)

console = Console()
logger = structlog.get_logger(__name__)


def _load_config(config_file: Path | None) -> ReqOrderConfig:
    if config_file is not None:
        return ReqOrderConfig.from_file(config_file)
    return ReqOrderConfig.from_env()


def _prepare(
    manifest_file: Path,
    config_file: Path | None,
    offline: bool,
    verbose: bool = False,
) -> tuple[Manifest, ResolutionSession]:
    """Load configuration and manifest, and declare every unit into a new session."""
    config = _load_config(config_file)
    configure_from_config(config.logging, verbose=verbose)

    manifest = load_manifest(manifest_file)
    session = ResolutionSession.from_config(config, offline=offline)
    manifest.declare_into(session)

    logger.debug("Manifest loaded", manifest=str(manifest_file), units=len(manifest.units))
    return manifest, session


def _print_resolution_error(error: ResolutionError) -> None:
    if isinstance(error, CycleDetectedError):
        console.print("[red]ERROR: Dependency cycle detected[/red]")
        console.print(f"  {escape(error.path)}")
    else:
        console.print(f"[red]ERROR: {escape(str(error))}[/red]")


def _order_table(manifest: Manifest, resolution: Resolution) -> Table:
    requires = {unit.name: unit.requires for unit in manifest.units}
    synthesized = set(resolution.synthesized)

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right")
    table.add_column("Unit", style="cyan")
    table.add_column("Requires")
    table.add_column("Placeholder", justify="center")
    table.add_column("Ensure", justify="center")

    for position, action in enumerate(resolution.order, start=1):
        table.add_row(
            str(position),
            escape(action.name),
            escape(", ".join(requires.get(action.name, []))) or "-",
            "yes" if action.name in synthesized else "",
            "yes" if action.ensure else "",
        )
    return table


@app.command()
def order(
    manifest_file: Path = typer.Argument(..., help="Manifest YAML file", exists=True),
    config_file: Path | None = typer.Option(None, "--config", "-c", help="Configuration file"),
    offline: bool = typer.Option(False, "--offline", help="Never contact the package catalog"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show resolution progress"),
) -> None:
    """
    Resolve a manifest and show the activation order.

    Examples:
        reqorder order units.yaml
        reqorder order units.yaml --offline -c reqorder.yaml
    """
    console.print(f"\n[bold blue]Resolving manifest:[/bold blue] {manifest_file}\n")

    try:
        manifest, session = _prepare(manifest_file, config_file, offline, verbose)
        resolution = session.resolve()
    except ResolutionError as e:
        _print_resolution_error(e)
        raise typer.Exit(code=1) from e
    except ReqOrderError as e:
        console.print(f"[red]ERROR: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    console.print(_order_table(manifest, resolution))
    console.print(
        f"\n[green]Resolved {len(resolution)} units[/green] "
        f"({len(resolution.synthesized)} placeholders, {resolution.passes} passes)"
    )


@app.command()
def check(
    manifest_file: Path = typer.Argument(..., help="Manifest YAML file", exists=True),
    config_file: Path | None = typer.Option(None, "--config", "-c", help="Configuration file"),
    offline: bool = typer.Option(False, "--offline", help="Never contact the package catalog"),
) -> None:
    """
    Check that a manifest can be ordered.

    Exits with code 1 and prints the offending cycle when it cannot.

    Examples:
        reqorder check units.yaml
    """
    try:
        _, session = _prepare(manifest_file, config_file, offline)
        resolution = session.resolve()
    except ResolutionError as e:
        _print_resolution_error(e)
        raise typer.Exit(code=1) from e
    except ReqOrderError as e:
        console.print(f"[red]ERROR: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[green]OK: {len(resolution)} units can be activated in order[/green]")


@app.command()
def graph(
    manifest_file: Path = typer.Argument(..., help="Manifest YAML file", exists=True),
    output_file: Path | None = typer.Option(
        None, "--output", "-o", help="Write DOT to this file instead of stdout"
    ),
    config_file: Path | None = typer.Option(None, "--config", "-c", help="Configuration file"),
) -> None:
    """
    Export the declared dependency graph in Graphviz DOT format.

    Examples:
        reqorder graph units.yaml
        reqorder graph units.yaml -o units.dot
    """
    try:
        _, session = _prepare(manifest_file, config_file, offline=True)
    except ReqOrderError as e:
        console.print(f"[red]ERROR: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    dot = to_dot(session.store.snapshot())
    session.store.clear()

    if output_file:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(dot + "\n", encoding="utf-8")
        console.print(f"[green]Wrote graph to {output_file}[/green]")
    else:
        typer.echo(dot)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(
        Panel.fit(
            "[bold]reqorder[/bold]\n\n"
            f"Version: [cyan]{VERSION}[/cyan]\n\n"
            "[bold]Core Features:[/bold]\n"
            "- Dependency-ordered activation of declared units\n"
            "- Placeholders for undeclared dependencies\n"
            "- Cycle diagnostics\n"
            "- Cached package catalog lookups\n"
            "- Graphviz export",
            title="About",
            border_style="blue",
        )
    )
