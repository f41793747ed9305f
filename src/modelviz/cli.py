"""CLI interface for modelviz using Typer framework."""

import logging
import sys
from pathlib import Path
from typing import Annotated, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from modelviz import __description__, __version__
from modelviz.config import LogLevel, ModelvizConfig, OutputFormat, load_config
from modelviz.errors import SnapshotError
from modelviz.graph import DiagramGenerator
from modelviz.models import load_snapshot

app = typer.Typer(
    name="modelviz",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

# Documents go to stdout, everything else to stderr
console = Console(stderr=True)

LOG_LEVELS = {
    LogLevel.ERROR.value: logging.ERROR,
    LogLevel.WARN.value: logging.WARNING,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.DEBUG.value: logging.DEBUG,
}


def _configure_logging(level: str) -> None:
    """Route library logging through rich at the configured level."""
    root = logging.getLogger("modelviz")
    root.handlers.clear()
    root.addHandler(RichHandler(console=console, show_path=False))
    root.setLevel(LOG_LEVELS.get(level, logging.WARNING))


def _apply_overrides(config: ModelvizConfig, **flags) -> ModelvizConfig:
    """Switch on the diagram options given on the command line."""
    options = config.diagram
    for name, value in flags.items():
        if value:
            setattr(options, name, value)
    return config


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"modelviz version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """modelviz - Graphviz diagrams of data-model classes."""


@app.command()
def models(
    snapshot_path: Annotated[
        Path,
        typer.Argument(help="Metadata snapshot (JSON) describing the application's classes")
    ],
    out: Annotated[
        Optional[Path],
        typer.Option("--out", "-o", help="Output file path (default: stdout)")
    ] = None,
    format: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="Output format: dot, xmi (default: from config, else dot)")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .modelviz.json)")
    ] = None,
    brief: Annotated[bool, typer.Option("--brief", help="Draw models without attributes")] = False,
    hide_types: Annotated[bool, typer.Option("--hide-types", help="Hide attribute types")] = False,
    hide_magic: Annotated[bool, typer.Option("--hide-magic", help="Hide framework-maintained columns")] = False,
    only_content_columns: Annotated[
        bool, typer.Option("--content-columns", help="Show only content columns")
    ] = False,
    hide_belongs_to: Annotated[bool, typer.Option("--hide-belongs-to", help="Skip belongs_to associations")] = False,
    inheritance: Annotated[bool, typer.Option("--inheritance", "-i", help="Group subclasses into clusters")] = False,
    transitive: Annotated[
        bool, typer.Option("--transitive", help="Repeat inherited associations on subclasses")
    ] = False,
    all_classes: Annotated[bool, typer.Option("--all", "-a", help="Include plain classes")] = False,
    modules: Annotated[bool, typer.Option("--modules", "-m", help="Include modules")] = False,
    label: Annotated[bool, typer.Option("--label", "-l", help="Add a title block")] = False,
    filter: Annotated[
        Optional[List[str]],
        typer.Option("--filter", "-F", help="Limit to matching classes (repeatable, 'Name*' wildcards)")
    ] = None,
    link_base: Annotated[
        Optional[str],
        typer.Option("--link-base", help="Base URL for clickable source links on models")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Log every processed class")] = False,
) -> None:
    """Generate a models diagram from a metadata snapshot."""
    try:
        modelviz_config = load_config(config)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    _configure_logging(LogLevel.DEBUG.value if verbose else modelviz_config.logging.level)

    _apply_overrides(
        modelviz_config,
        brief=brief,
        hide_types=hide_types,
        hide_magic=hide_magic,
        only_content_columns=only_content_columns,
        hide_belongs_to=hide_belongs_to,
        inheritance=inheritance,
        transitive=transitive,
        all_classes=all_classes,
        modules=modules,
        show_label=label,
        filter=filter,
    )
    if link_base:
        modelviz_config.links.base = link_base

    format_name = format or modelviz_config.output.format
    valid_formats = [f.value for f in OutputFormat]
    if format_name not in valid_formats:
        console.print(f"[red]Error:[/red] Invalid format '{format_name}'. Must be one of: {', '.join(valid_formats)}")
        raise typer.Exit(1)

    try:
        snapshot = load_snapshot(snapshot_path)
    except SnapshotError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    generator = DiagramGenerator(modelviz_config)
    generator.add_default_renderers(snapshot)
    renderer = generator.get_renderer(format_name)
    if not renderer.supported:
        console.print(f"[yellow]Sorry:[/yellow] {renderer.unsupported_message()}")
        raise typer.Exit(1)

    graph = generator.generate_from_snapshot(snapshot)
    rendered = generator.render_graph(graph, format_name)

    output_file = out or (Path(modelviz_config.output.file) if modelviz_config.output.file else None)
    if output_file is None:
        sys.stdout.write(rendered)
        return

    try:
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(rendered)
    except OSError as e:
        console.print(f"[red]Error:[/red] Cannot write {output_file}: {escape(str(e))}")
        raise typer.Exit(1)

    console.print(f"[green]Diagram generated:[/green] {output_file}")


if __name__ == "__main__":
    app()
