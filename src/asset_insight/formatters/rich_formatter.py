"""Rich terminal formatter for asset-insight."""

import io
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..bundle import format_bytes
from ..models import AnalysisResult, JSFileVerdict
from .base import BaseFormatter

MAX_UNUSED_SELECTORS = 15


def _verdict_label(verdict: JSFileVerdict) -> str:
    if verdict.likely_unused:
        return "[red]likely unused[/red]"
    return "[green]used[/green]"


def _savings_style(percent: float) -> str:
    if percent >= 50:
        return "red bold"
    elif percent >= 20:
        return "yellow"
    return "green"


class RichFormatter(BaseFormatter):
    """Summary panel, CSS/JS tables and platform report."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def render(self, result: AnalysisResult) -> None:
        self._render_to(self.console, result)

    def format(self, result: AnalysisResult) -> str:
        buffer = Console(file=io.StringIO(), record=True, width=120)
        self._render_to(buffer, result)
        return buffer.export_text()

    def _render_to(self, console: Console, result: AnalysisResult) -> None:
        self._print_summary(console, result)
        self._print_css(console, result)
        self._print_js(console, result)
        self._print_platform(console, result)

    def _print_summary(self, console: Console, result: AnalysisResult) -> None:
        css, bundle, perf = result.css, result.javascript.bundle, result.performance
        lines = [
            f"CSS selectors: [bold]{css.used}[/bold] used of {css.total_selectors} "
            f"([{_savings_style(css.savings_percent)}]{css.savings_percent:.0f}% removable[/])",
            f"JS files: [bold]{bundle.used_file_count}[/bold] used of {bundle.total_files}, "
            f"{format_bytes(bundle.original_bytes)} → {format_bytes(bundle.optimized_bytes)} "
            f"([{_savings_style(bundle.savings_percent)}]{bundle.savings_percent}% savings[/])",
            f"Estimated load time: [bold]{perf.estimated_load_time}[/bold] ({perf.core_web_vitals})",
        ]
        if result.degraded:
            lines.insert(
                0,
                "[red bold]DEGRADED[/red bold] synthetic data substituted for: "
                + ", ".join(result.degraded_stages),
            )
        console.print(
            Panel("\n".join(lines), title="[bold cyan]Asset Usage Summary[/bold cyan]", expand=False)
        )

    def _print_css(self, console: Console, result: AnalysisResult) -> None:
        css = result.css
        if not css.unused:
            console.print("[green]No unused CSS selectors found.[/green]")
            return

        table = Table(title=f"Unused CSS selectors ({len(css.unused)})", show_lines=False)
        table.add_column("Selector", style="red")
        for selector in css.unused[:MAX_UNUSED_SELECTORS]:
            table.add_row(escape(selector))
        if len(css.unused) > MAX_UNUSED_SELECTORS:
            table.add_row(f"[dim]... and {len(css.unused) - MAX_UNUSED_SELECTORS} more[/dim]")
        console.print(table)

        if css.used_fallback_stylesheet:
            console.print("[yellow]purged.css contains placeholder rules only.[/yellow]")

    def _print_js(self, console: Console, result: AnalysisResult) -> None:
        files = result.javascript.files
        if not files:
            if result.javascript.unused_files:
                console.print(
                    "Unused scripts: " + escape(", ".join(result.javascript.unused_files))
                )
            return

        table = Table(title=f"Scripts ({len(files)})")
        table.add_column("File", style="cyan", overflow="fold")
        table.add_column("Size", justify="right")
        table.add_column("Verdict")
        table.add_column("Reasons", overflow="fold")
        for verdict in files:
            table.add_row(
                escape(verdict.file_name),
                format_bytes(verdict.size),
                _verdict_label(verdict),
                escape("\n".join(verdict.reasons)) or "[dim]-[/dim]",
            )
        console.print(table)

    def _print_platform(self, console: Console, result: AnalysisResult) -> None:
        report = result.platform
        if report is None or not report.signals.is_platform:
            return

        signals = report.signals
        lines = [f"WordPress {signals.version or '(version unknown)'}"]
        if signals.theme:
            lines.append(f"Theme: {escape(signals.theme.name)}")
        lines.append(f"Plugins: {len(signals.plugins)}")
        for issue in report.issues:
            lines.append(f"[red]•[/red] {escape(issue)}")
        for rec in report.recommendations:
            lines.append(f"[green]→[/green] {escape(rec)}")
        console.print(Panel("\n".join(lines), title="[bold]Platform[/bold]", expand=False))
