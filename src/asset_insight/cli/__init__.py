"""CLI entry point: registers all subcommands."""

import typer

app = typer.Typer(
    name="asset-insight",
    help="asset-insight - Unused CSS and JavaScript analysis for captured pages",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .detect import detect as _detect  # noqa: F401, E402


def main() -> None:
    app()
