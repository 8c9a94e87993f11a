"""Shared test fixtures for qsnotary."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import NamedTuple

import pytest

from qsnotary.bridge.crypto_bridge import generate_keypair
from qsnotary.core.key_provider import LocalKeyProvider, RemoteKeyService
from qsnotary.core.ledger import TransparencyLedger
from qsnotary.core.signing import SigningPipeline

CYCLONEDX_SBOM = b'{"bomFormat":"CycloneDX","version":1}'
SPDX_SBOM = b'{"spdxVersion":"SPDX-2.3","name":"demo","packages":[]}'


class KeyFiles(NamedTuple):
    public_key: bytes
    secret_key: bytes
    public_path: Path
    private_path: Path


# ---------------------------------------------------------------------------
# Key material — generated once per session (Dilithium5 keygen is slow)
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def keypair_a() -> tuple[bytes, bytes]:
    """Key pair A as ``(public, secret)``, shared by the whole session."""
    return generate_keypair()


@pytest.fixture(scope="session")
def keypair_b() -> tuple[bytes, bytes]:
    """A second, unrelated key pair B."""
    return generate_keypair()


def _write_keys(directory: Path, keypair: tuple[bytes, bytes]) -> KeyFiles:
    directory.mkdir(parents=True, exist_ok=True)
    public_path = directory / "public.key"
    private_path = directory / "private.key"
    public_path.write_bytes(keypair[0])
    private_path.write_bytes(keypair[1])
    return KeyFiles(keypair[0], keypair[1], public_path, private_path)


@pytest.fixture
def keys_a(tmp_path: Path, keypair_a: tuple[bytes, bytes]) -> KeyFiles:
    """Key pair A written to ``public.key`` / ``private.key`` in a temp dir."""
    return _write_keys(tmp_path / "keys-a", keypair_a)


@pytest.fixture
def keys_b(tmp_path: Path, keypair_b: tuple[bytes, bytes]) -> KeyFiles:
    """Key pair B written to ``public.key`` / ``private.key`` in a temp dir."""
    return _write_keys(tmp_path / "keys-b", keypair_b)


@pytest.fixture
def remote_service(keypair_a: tuple[bytes, bytes]) -> RemoteKeyService:
    """A remote key service with an injected, fixed identity (key pair A)."""
    return RemoteKeyService(keypair=keypair_a)


# ---------------------------------------------------------------------------
# Ledger and pipelines
# ---------------------------------------------------------------------------


@pytest.fixture
def ledger(tmp_path: Path) -> TransparencyLedger:
    """Provide a fresh ledger file in a temp directory."""
    return TransparencyLedger(tmp_path / "ledger.json")


@pytest.fixture
def pipeline(keys_a: KeyFiles, ledger: TransparencyLedger) -> SigningPipeline:
    """Signing pipeline using key pair A from disk."""
    return SigningPipeline(LocalKeyProvider(keys_a.private_path), ledger)


@pytest.fixture
def make_pipeline(
    keys_a: KeyFiles, ledger: TransparencyLedger
) -> Callable[..., SigningPipeline]:
    """Factory fixture: a pipeline signing as key A at a fixed time."""

    def _factory(signed_at: datetime | None = None, **overrides) -> SigningPipeline:
        kwargs = dict(overrides)
        if signed_at is not None:
            kwargs["clock"] = lambda: signed_at
        return SigningPipeline(LocalKeyProvider(keys_a.private_path), ledger, **kwargs)

    return _factory


@pytest.fixture
def sbom_path(tmp_path: Path) -> Path:
    """A minimal CycloneDX SBOM on disk."""
    path = tmp_path / "sbom.json"
    path.write_bytes(CYCLONEDX_SBOM)
    return path


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
