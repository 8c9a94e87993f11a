"""``qsnotary serve`` — run the transparency log collector."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from qsnotary.config import config

console = Console()


def serve_cmd(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address."),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port."),
    ledger: Optional[Path] = typer.Option(
        None,
        "--ledger",
        "-l",
        help="Server ledger file (default: QSNOTARY_CENTRAL_LEDGER_PATH).",
    ),
) -> None:
    """Accept POST /upload and append each entry to the server ledger."""
    try:
        import uvicorn

        from qsnotary.server.app import create_app
    except ImportError:
        console.print("[bold red]The server needs FastAPI and uvicorn.[/bold red]")
        console.print("Install with: pip install 'qsnotary\\[server]'")
        raise typer.Exit(code=1)

    ledger_path = ledger or config.central_ledger_path
    console.print(f"[dim]Recording uploads in {ledger_path}[/dim]")
    uvicorn.run(
        create_app(ledger_path),
        host=host or config.host,
        port=port or config.port,
        log_level=config.log_level.lower(),
    )
