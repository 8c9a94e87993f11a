"""Signing capability: local key file or (simulated) remote key service.

Callers choose a variant once, at construction time, and inject it into the
signing pipeline.  Secret keys never leave the provider.
"""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from typing import Protocol, runtime_checkable

from qsnotary.bridge.crypto_bridge import (
    generate_keypair,
    key_fingerprint,
    load_secret_key,
    sign_digest,
)
from qsnotary.core.errors import KeyMaterialError

logger = logging.getLogger(__name__)


@runtime_checkable
class KeyProvider(Protocol):
    """Anything that can sign a digest and return raw signature bytes."""

    def sign(self, data: bytes) -> bytes: ...


class LocalKeyProvider:
    """Signs with a secret key read from disk on every call.

    Parameters
    ----------
    private_key_path:
        Path to a raw Dilithium5 ``private.key``.  It is not read until
        ``sign()`` is called, so a missing file fails the first signature,
        not construction.
    """

    def __init__(self, private_key_path: Path) -> None:
        self._private_key_path = Path(private_key_path)

    def sign(self, data: bytes) -> bytes:
        secret_key = load_secret_key(self._private_key_path)
        return sign_digest(data, secret_key)


class RemoteKeyService:
    """In-memory stand-in for a remote key-management service.

    The service owns exactly one key pair for its whole lifetime.  The pair
    is either injected (tests use a fixed pair) or generated on first use;
    every later signature comes from the same key, so one exported public
    key verifies all of them.
    """

    def __init__(self, keypair: tuple[bytes, bytes] | None = None) -> None:
        self._keypair = keypair
        self._lock = threading.Lock()

    def _ensure_keypair(self) -> tuple[bytes, bytes]:
        with self._lock:
            if self._keypair is None:
                self._keypair = generate_keypair()
                logger.info(
                    "Remote key service established identity %s.",
                    key_fingerprint(self._keypair[0]),
                )
            return self._keypair

    @property
    def public_key(self) -> bytes:
        return self._ensure_keypair()[0]

    def export_public_key(self, path: Path) -> Path:
        """Write the service's raw public key to *path*."""
        path = Path(path)
        try:
            path.write_bytes(self.public_key)
        except OSError as exc:
            raise KeyMaterialError(
                f"Failed to export public key to {path}: {exc}"
            ) from exc
        return path

    def sign(self, data: bytes) -> bytes:
        return sign_digest(data, self._ensure_keypair()[1])


class RemoteKeyProvider:
    """Signs through a :class:`RemoteKeyService` with simulated latency.

    Parameters
    ----------
    service:
        The key service holding the signing identity.
    latency_seconds:
        Artificial, non-cancellable delay before each signature to model a
        network round trip.
    """

    def __init__(
        self,
        service: RemoteKeyService,
        *,
        latency_seconds: float = 0.1,
    ) -> None:
        self._service = service
        self._latency_seconds = latency_seconds

    @property
    def service(self) -> RemoteKeyService:
        return self._service

    def sign(self, data: bytes) -> bytes:
        if self._latency_seconds > 0:
            time.sleep(self._latency_seconds)
        return self._service.sign(data)
