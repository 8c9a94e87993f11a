"""``qsnotary sign-all DIR`` — sign a tree, then sign its manifest.

Hidden paths and existing ``.sig`` files are skipped.  If one file fails,
the run stops: files already signed stay signed and in the ledger, and no
manifest is written.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from qsnotary.cli.commands._providers import build_key_provider, build_pipeline
from qsnotary.config import config
from qsnotary.core.batch import BatchSigner
from qsnotary.core.errors import BatchAbortedError, NotaryError

console = Console()


def sign_all_cmd(
    directory: Path = typer.Argument(
        ...,
        metavar="DIR",
        help="Directory to sign (recursive).",
    ),
    private_key: Optional[Path] = typer.Option(
        None,
        "--private-key",
        "-p",
        help="Path to the private key file (ignored if --kms is set).",
    ),
    kms: bool = typer.Option(
        False,
        "--kms",
        help="Use the simulated remote key service instead of a key file (test only).",
    ),
    kms_public_key: Optional[Path] = typer.Option(
        None,
        "--kms-public-key",
        help="Write the key service's public key here (with --kms).",
    ),
    ledger: Optional[Path] = typer.Option(
        None,
        "--ledger",
        "-l",
        help="Path to the ledger file (default: QSNOTARY_LEDGER_PATH or ledger.json).",
    ),
    server_url: Optional[str] = typer.Option(
        None,
        "--server-url",
        help="Transparency log server URL; each entry is uploaded in the background.",
    ),
) -> None:
    """Recursively sign all files in a directory, then create and sign the manifest."""
    provider = build_key_provider(console, private_key, kms, kms_public_key)
    pipeline = build_pipeline(provider, ledger, server_url)
    signer = BatchSigner(pipeline, manifest_name=config.manifest_name)

    try:
        result = signer.sign_tree(directory)
    except BatchAbortedError as exc:
        console.print(f"[bold red]Batch aborted:[/bold red] {exc}")
        console.print(
            f"[yellow]{len(exc.committed)} file(s) were signed and ledgered "
            f"before the failure; no manifest was written.[/yellow]"
        )
        raise typer.Exit(code=1)
    except NotaryError as exc:
        console.print(f"[bold red]Batch signing failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    table = Table(title=f"Signed files under {result.root}")
    table.add_column("Path", style="cyan")
    table.add_column("Signature", style="dim")
    for entry in result.manifest.entries:
        table.add_row(entry.path, entry.signature_hash[:32] + "...")
    console.print(table)
    console.print(f"Manifest: {result.manifest_path}")
    console.print("Signed all files and manifest.")
