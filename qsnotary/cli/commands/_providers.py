"""Shared wiring for the signing commands: key provider, ledger, mirror."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from qsnotary.bridge.crypto_bridge import key_fingerprint
from qsnotary.bridge.mirror import MirrorClient
from qsnotary.config import config
from qsnotary.core.errors import KeyMaterialError
from qsnotary.core.key_provider import (
    KeyProvider,
    LocalKeyProvider,
    RemoteKeyProvider,
    RemoteKeyService,
)
from qsnotary.core.ledger import TransparencyLedger
from qsnotary.core.signing import SigningPipeline


def build_key_provider(
    console: Console,
    private_key: Optional[Path],
    kms: bool,
    kms_public_key: Optional[Path],
) -> KeyProvider:
    """Pick the signing backend once, at construction time."""
    if kms:
        service = RemoteKeyService()
        if kms_public_key is not None:
            try:
                service.export_public_key(kms_public_key)
            except KeyMaterialError as exc:
                console.print(f"[bold red]{exc}[/bold red]")
                raise typer.Exit(code=1)
            console.print(
                f"[dim]KMS public key ({key_fingerprint(service.public_key)}) "
                f"written to {kms_public_key}[/dim]"
            )
        return RemoteKeyProvider(service, latency_seconds=config.kms_latency_seconds)

    if private_key is None:
        console.print("[bold red]--private-key is required unless --kms is set.[/bold red]")
        raise typer.Exit(code=1)
    return LocalKeyProvider(private_key)


def build_pipeline(
    provider: KeyProvider,
    ledger: Optional[Path],
    server_url: Optional[str],
) -> SigningPipeline:
    """Wire the signing pipeline from CLI options and configuration."""
    url = server_url or config.server_url
    mirror = (
        MirrorClient(url, timeout=config.mirror_timeout_seconds) if url else None
    )
    return SigningPipeline(
        provider,
        TransparencyLedger(ledger or config.ledger_path),
        mirror=mirror,
    )
