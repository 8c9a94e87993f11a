"""Signing pipeline — one artifact through digest, sign, sidecar, ledger.

Steps run strictly in order and the first failure aborts the run; whatever
already completed (e.g. a written sidecar) is left in place:

1. read the artifact bytes
2. optionally validate the SBOM structure
3. compute the SHA3-256 digest
4. sign the digest through the injected ``KeyProvider``
5. wrap signature + timestamp and overwrite ``<artifact>.sig``
6. append one ledger entry
7. hand the same fields to the mirror, if configured (never fatal)

SBOM validation is on for the top-level ``sign`` operation and off for
files signed inside a batch run, including the batch manifest.  That
asymmetry is kept on purpose; see DESIGN.md before unifying the two paths.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from qsnotary.bridge.mirror import MirrorClient
from qsnotary.core import signature_codec
from qsnotary.core.errors import ArtifactIOError
from qsnotary.core.hasher import sha3_256_digest
from qsnotary.core.key_provider import KeyProvider
from qsnotary.core.ledger import TransparencyLedger
from qsnotary.core.sbom import validate_sbom_json
from qsnotary.models.ledger import LedgerEntry, utc_now
from qsnotary.models.signature import SigningResult

logger = logging.getLogger(__name__)


def read_artifact(path: Path) -> bytes:
    """Read an artifact's bytes, translating I/O failures."""
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise ArtifactIOError(f"Failed to read {path}: {exc}", path) from exc


class SigningPipeline:
    """Signs artifacts and records each signature in the ledger.

    Parameters
    ----------
    key_provider:
        Local-file or remote-service signing capability.
    ledger:
        The transparency ledger that receives one entry per signature.
    mirror:
        Optional background client for the remote transparency log.
    clock:
        Returns the current aware UTC datetime; injectable for tests.
    """

    def __init__(
        self,
        key_provider: KeyProvider,
        ledger: TransparencyLedger,
        *,
        mirror: MirrorClient | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._key_provider = key_provider
        self._ledger = ledger
        self._mirror = mirror
        self._clock = clock

    @property
    def ledger(self) -> TransparencyLedger:
        return self._ledger

    def sign_artifact(
        self,
        artifact_path: Path,
        *,
        validate_sbom: bool = True,
    ) -> SigningResult:
        """Sign one artifact and return the result.

        Raises
        ------
        ArtifactIOError
            The artifact, sidecar or ledger could not be read/written.
        FormatError
            ``validate_sbom`` is set and the artifact is not an SBOM.
        KeyMaterialError
            The signing key is missing or unusable.
        """
        artifact_path = Path(artifact_path)
        data = read_artifact(artifact_path)

        if validate_sbom:
            sbom_format = validate_sbom_json(data)
            logger.debug("%s is a %s SBOM.", artifact_path, sbom_format)

        digest = sha3_256_digest(data)
        signature = self._key_provider.sign(digest)
        signature_hash = signature.hex()

        timestamp = self._clock()
        sidecar = signature_codec.wrap(signature, timestamp)
        signature_path = signature_codec.signature_path_for(artifact_path)
        try:
            signature_path.write_bytes(signature_codec.encode(sidecar))
        except OSError as exc:
            raise ArtifactIOError(
                f"Failed to write signature {signature_path}: {exc}",
                signature_path,
            ) from exc

        entry = self._ledger.append(
            LedgerEntry(
                timestamp=timestamp,
                file_name=artifact_path.name,
                signature_hash=signature_hash,
            )
        )

        if self._mirror is not None:
            self._mirror.submit(entry)

        logger.info(
            "Signed %s -> %s (signature %s...).",
            artifact_path, signature_path.name, signature_hash[:16],
        )
        return SigningResult(
            artifact_path=artifact_path,
            signature_path=signature_path,
            signature_hash=signature_hash,
            timestamp=timestamp,
            ledger_entry=entry,
        )
