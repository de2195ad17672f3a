"""Main analysis command."""

from pathlib import Path
from typing import Optional

import click
import typer

from ..engine import AnalysisEngine
from ..exceptions import AssetInsightError
from ..export import write_artifacts
from ..formatters import get_formatter
from ..logging_config import setup_logging, verbosity_from_flags
from ..snapshot import load_snapshot
from . import app
from ._common import console, resolve_config


@app.command()
def analyze(
    snapshot: Path = typer.Argument(
        ...,
        help="Snapshot JSON file (markup, stylesheets, scripts)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    output_format: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich | json",
        click_type=click.Choice(["rich", "json"], case_sensitive=False),
    ),
    export: Optional[Path] = typer.Option(
        None,
        "--export",
        "-o",
        help="Write purged.css and optimized.js into this directory",
        file_okay=False,
        dir_okay=True,
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Parallel workers for script classification (default: auto-detect)",
        min=1,
        max=32,
    ),
    degrade: bool = typer.Option(
        False,
        "--degrade",
        help="Substitute synthetic results for a failed stage instead of exiting",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable DEBUG logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
):
    """
    Report which CSS selectors and script files a captured page uses.

    [bold cyan]Examples:[/bold cyan]

      asset-insight analyze capture.json

      asset-insight analyze capture.json --format json

      asset-insight analyze capture.json --export out/ --degrade
    """
    logger = setup_logging(verbosity_from_flags(verbose, quiet))

    try:
        settings = resolve_config(
            config=config,
            workers=workers,
            degrade=degrade,
            export_dir=export,
            verbose=verbose,
            quiet=quiet,
        )
        logger = setup_logging(settings.verbosity)
        result = AnalysisEngine(settings).run(load_snapshot(snapshot))

        if settings.export_dir:
            written = write_artifacts(result, Path(settings.export_dir))
            if output_format != "json":
                for name, path in written.items():
                    console.print(f"[dim]Wrote {name} → {path}[/dim]")

        formatter = get_formatter(output_format.lower())
        if output_format.lower() == "json":
            typer.echo(formatter.format(result))
        else:
            formatter.render(result)

    except AssetInsightError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)
