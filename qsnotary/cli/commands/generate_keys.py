"""``qsnotary generate-keys`` — write a Dilithium5 key pair."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from qsnotary.bridge.crypto_bridge import key_fingerprint, save_keypair
from qsnotary.core.errors import NotaryError

console = Console()


def generate_keys_cmd(
    output_dir: Path = typer.Option(
        Path("."),
        "--output-dir",
        "-o",
        help="Directory to write public.key and private.key.",
    ),
) -> None:
    """Generate a Dilithium5 key pair (public.key and private.key)."""
    try:
        public_path, private_path = save_keypair(output_dir)
    except NotaryError as exc:
        console.print(f"[bold red]Key generation failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    fingerprint = key_fingerprint(public_path.read_bytes())
    console.print(f"Keys written to {output_dir} (public.key, private.key)")
    console.print(f"[dim]Fingerprint: {fingerprint}[/dim]")
