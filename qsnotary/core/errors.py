"""Error taxonomy shared by the signing and verification pipelines.

Every fatal category derives from ``NotaryError`` so the CLI can turn any
of them into a non-zero exit.  Remote mirror failures are not represented
here: they are logged as warnings and never raised.
"""

from __future__ import annotations

from pathlib import Path


class NotaryError(RuntimeError):
    """Base class for all qsnotary failures."""


class ArtifactIOError(NotaryError):
    """Raised when a file cannot be read or written."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class FormatError(NotaryError):
    """Raised on malformed structured input (SBOM, sidecar, policy, ledger)."""


class KeyMaterialError(NotaryError):
    """Raised when a key file is missing, unreadable or undecodable."""


class VerificationRejected(NotaryError):
    """Base class for negative verification verdicts.

    ``reason`` is a :class:`~qsnotary.models.verification.RejectionReason`.
    """

    def __init__(self, reason, detail: str) -> None:
        super().__init__(detail)
        self.reason = reason
        self.detail = detail


class CryptographicFailure(VerificationRejected):
    """The signature does not verify over the artifact digest."""


class PolicyViolation(VerificationRejected):
    """The signature verifies but the trust policy rejects it."""


class BatchAbortedError(NotaryError):
    """Raised when a batch run stops on a per-file failure.

    Files signed before ``failed_path`` keep their sidecars and ledger
    entries; ``committed`` lists them.  The original error is chained as
    ``__cause__``.
    """

    def __init__(
        self,
        failed_path: Path,
        committed: list,
        cause: Exception,
    ) -> None:
        super().__init__(
            f"Batch aborted at {failed_path} after {len(committed)} "
            f"signed file(s): {cause}"
        )
        self.failed_path = failed_path
        self.committed = committed
