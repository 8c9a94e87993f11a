"""``qsnotary ledger`` — show the local transparency ledger."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from qsnotary.config import config
from qsnotary.core.errors import NotaryError
from qsnotary.core.ledger import TransparencyLedger

console = Console()


def ledger_cmd(
    ledger: Optional[Path] = typer.Option(
        None,
        "--ledger",
        "-l",
        help="Path to the ledger file (default: QSNOTARY_LEDGER_PATH or ledger.json).",
    ),
    limit: int = typer.Option(
        20,
        "--limit",
        "-n",
        help="Show only the most recent N entries (0 for all).",
    ),
    file_name: Optional[str] = typer.Option(
        None,
        "--file",
        "-f",
        help="Only show entries recorded for this file name.",
    ),
) -> None:
    """Show ledger entries in append order."""
    ledger_path = ledger or config.ledger_path
    if not ledger_path.exists():
        console.print(f"[bold red]Ledger not found:[/bold red] {ledger_path}")
        raise typer.Exit(code=1)

    try:
        transparency_ledger = TransparencyLedger(ledger_path)
        if file_name is None:
            entries = transparency_ledger.entries()
        else:
            entries = transparency_ledger.entries_for(file_name)
    except NotaryError as exc:
        console.print(f"[bold red]Cannot read ledger:[/bold red] {exc}")
        raise typer.Exit(code=1)

    shown = entries[-limit:] if limit > 0 else entries
    table = Table(title=f"Ledger {ledger_path} ({len(entries)} entries)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Timestamp")
    table.add_column("File", style="cyan")
    table.add_column("Signature", style="dim")
    first = len(entries) - len(shown) + 1
    for index, entry in enumerate(shown, start=first):
        table.add_row(
            str(index),
            entry.timestamp.isoformat(timespec="seconds"),
            entry.file_name,
            entry.signature_hash[:16] + "...",
        )
    console.print(table)
