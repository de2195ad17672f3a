"""Platform detection command."""

import json
from dataclasses import asdict
from pathlib import Path

import typer
from rich.markup import escape

from ..exceptions import AssetInsightError
from ..logging_config import setup_logging
from ..platform import assess_platform, detect_platform
from ..snapshot import load_snapshot
from . import app
from ._common import console, resolve_config


@app.command()
def detect(
    snapshot: Path = typer.Argument(
        ...,
        help="Snapshot JSON file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
):
    """
    Detect WordPress signals (version, theme, plugins) in a captured page.

    Signals recorded in the snapshot win over detection from its markup.
    """
    logger = setup_logging()

    try:
        settings = resolve_config()
        logger = setup_logging(settings.verbosity)
        captured = load_snapshot(snapshot)
    except AssetInsightError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    signals = captured.platform or detect_platform(captured.markup, captured.asset_urls)
    report = assess_platform(signals, settings.thresholds)

    if json_output:
        typer.echo(json.dumps(asdict(report), indent=2))
        return

    if not signals.is_platform:
        console.print("[dim]No WordPress signals found.[/dim]")
        return

    console.print(f"[bold cyan]WordPress[/bold cyan] {signals.version or '(version unknown)'}")
    if signals.theme:
        console.print(f"  Theme: [green]{escape(signals.theme.name)}[/green]")
    console.print(f"  Plugins ({len(signals.plugins)}): {escape(', '.join(signals.plugin_names)) or '-'}")
    console.print(f"  Core files: {len(signals.core_files)}")
    for issue in report.issues:
        console.print(f"  [red]•[/red] {escape(issue)}")
    for rec in report.recommendations:
        console.print(f"  [green]→[/green] {escape(rec)}")
