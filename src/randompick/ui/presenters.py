from __future__ import annotations

from collections.abc import Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..analysis.frequency import FrequencyReport


class RichPresenter:
    def __init__(self, *, no_color: bool = False, console: Console | None = None):
        if console is not None:
            self.console = console
        elif no_color:
            self.console = Console(force_terminal=False, color_system=None)
        else:
            self.console = Console(force_terminal=True, color_system="auto")

    def show_report(self, report: FrequencyReport) -> None:
        check = report.check
        header = (
            f"Weights: {', '.join(str(w) for w in check.weights)}\n"
            f"Index range: [0, {report.high})  Draws: {report.draws:,}"
        )
        if check.seed is not None:
            header += f"  Seed: {check.seed}"
        self.console.print(Panel(header, title="Frequency check", border_style="bold cyan", expand=False))

        table = Table(box=box.SIMPLE_HEAVY)
        table.add_column("Bucket", justify="right")
        table.add_column("Indices", justify="left")
        table.add_column("Weight", justify="right")
        table.add_column("Expected", justify="right")
        table.add_column("Observed", justify="right")
        table.add_column("Count", justify="right")
        table.add_column("Rel. error", justify="right")
        for stats in report.buckets:
            style = "red" if stats.relative_error > check.tolerance else "green"
            table.add_row(
                str(stats.bucket),
                f"{stats.start}..{stats.stop - 1}" if stats.stop - stats.start > 1 else str(stats.start),
                str(stats.weight),
                f"{stats.expected_share:.4%}",
                f"{stats.observed_share:.4%}",
                f"{stats.observed:,}",
                f"[{style}]{stats.relative_error:.2%}[/]",
            )
        self.console.print(table)

        verdict = "[bold green]within tolerance[/]" if report.within_tolerance else "[bold red]outside tolerance[/]"
        self.console.print(f"Max relative error {report.max_relative_error:.2%} ({verdict}, limit {check.tolerance:.2%})")

    def show_picks(self, picks: Sequence[str]) -> None:
        if not picks:
            self.console.print("[yellow]No item could be picked (empty items or all-zero weights).[/]")
            return
        counts: dict[str, int] = {}
        for item in picks:
            counts[item] = counts.get(item, 0) + 1

        table = Table(box=box.SIMPLE_HEAVY, title=f"{len(picks):,} pick(s)")
        table.add_column("Item", justify="left")
        table.add_column("Count", justify="right")
        table.add_column("Share", justify="right")
        for item, count in sorted(counts.items(), key=lambda entry: (-entry[1], entry[0])):
            table.add_row(item, f"{count:,}", f"{count / len(picks):.2%}")
        self.console.print(table)
