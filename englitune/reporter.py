from __future__ import annotations

from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from englitune.domain.models import OutputRecord

MISSING_REGION = "[dim]-[/dim]"


def build_records_table(records: Sequence[OutputRecord], title: Optional[str] = None) -> Table:
    """
    Build a rich table with one row per sampled transcript.

    A NULL region renders as a dimmed dash rather than an empty cell.
    """
    table = Table(
        title=title or "Random transcripts",
        box=box.ROUNDED,
        caption=f"{len(records)} row(s)",
    )

    table.add_column("Speaker", style="cyan", no_wrap=True)
    table.add_column("Sequence", style="magenta", no_wrap=True)
    table.add_column("Age", justify="right", style="blue")
    table.add_column("Gender", style="green")
    table.add_column("Accent", style="yellow")
    table.add_column("Region", style="yellow")
    table.add_column("Transcript", style="white")

    for record in records:
        table.add_row(
            record.speaker,
            record.sequence,
            str(record.age),
            record.gender,
            record.accent,
            record.region if record.region is not None else MISSING_REGION,
            record.transcript,
        )
    return table


def print_records(records: Sequence[OutputRecord], console: Optional[Console] = None) -> None:
    """
    Render sampled records as a rich table.
    """
    console = console or Console()

    if not records:
        console.print("[yellow]No transcripts matched.[/yellow]")
        return

    console.print(build_records_table(records))


__all__ = ["build_records_table", "print_records"]
