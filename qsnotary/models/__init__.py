"""qsnotary data models — all Pydantic v2, all frozen (immutable)."""

from qsnotary.models.ledger import LedgerEntry
from qsnotary.models.manifest import BatchResult, Manifest, ManifestEntry
from qsnotary.models.policy import Policy
from qsnotary.models.signature import SignatureFile, SigningResult
from qsnotary.models.verification import (
    RejectionReason,
    VerificationResult,
    VerificationState,
)

__all__ = [
    # ledger
    "LedgerEntry",
    # signatures
    "SignatureFile",
    "SigningResult",
    # policy
    "Policy",
    # manifest
    "Manifest",
    "ManifestEntry",
    "BatchResult",
    # verification
    "VerificationState",
    "RejectionReason",
    "VerificationResult",
]
