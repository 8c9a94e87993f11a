"""``qsnotary sign SBOM`` — sign one SBOM, write its sidecar, update the ledger."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from qsnotary.cli.commands._providers import build_key_provider, build_pipeline
from qsnotary.core.errors import NotaryError

console = Console()


def sign_cmd(
    sbom_path: Path = typer.Argument(
        ...,
        metavar="SBOM",
        help="Path to the SBOM file (CycloneDX or SPDX JSON).",
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
        help="Transparency log server URL; the entry is uploaded in the background.",
    ),
) -> None:
    """Sign an SBOM file. Writes <SBOM>.sig and appends to the ledger."""
    provider = build_key_provider(console, private_key, kms, kms_public_key)
    pipeline = build_pipeline(provider, ledger, server_url)
    try:
        result = pipeline.sign_artifact(sbom_path)
    except NotaryError as exc:
        console.print(f"[bold red]Signing failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    console.print(f"[green]Signed[/green] {sbom_path} -> {result.signature_path}")
    console.print("Signed and ledger updated.")
