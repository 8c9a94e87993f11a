"""``qsnotary verify SBOM SIGNATURE`` — check a signature and apply a policy.

Prints ``Verified Safe`` on success.  On rejection prints ``Verification
Failed`` with the reason: a cryptographic failure is always reported as
such, and each policy rule has its own reason.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from qsnotary.core.errors import NotaryError
from qsnotary.core.policy import load_policy
from qsnotary.core.verification import VerificationPipeline

console = Console()


def verify_cmd(
    sbom_path: Path = typer.Argument(
        ...,
        metavar="SBOM",
        help="Path to the original SBOM file.",
    ),
    signature_path: Path = typer.Argument(
        ...,
        metavar="SIGNATURE",
        help="Path to the signature file (wrapped JSON or legacy raw).",
    ),
    public_key: Path = typer.Option(
        ...,
        "--public-key",
        "-k",
        help="Path to the public key file.",
    ),
    policy: Optional[Path] = typer.Option(
        None,
        "--policy",
        help="Path to policy JSON (enforces allowlist and max_age_days when set).",
    ),
) -> None:
    """Verify an SBOM file against a signature and public key."""
    try:
        loaded_policy = load_policy(policy) if policy is not None else None
        result = VerificationPipeline(loaded_policy).verify(
            sbom_path, signature_path, public_key
        )
    except NotaryError as exc:
        console.print("[bold red]Verification Failed[/bold red]")
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)

    if not result.accepted:
        console.print("[bold red]Verification Failed[/bold red]")
        console.print(f"[red]Reason: {result.detail}[/red]")
        raise typer.Exit(code=1)

    console.print("[bold green]Verified Safe[/bold green]")
    if result.signed_at is not None:
        console.print(f"[dim]Signed at {result.signed_at.isoformat()} "
                      f"by key {result.key_fingerprint}[/dim]")
