"""Verification state machine models.

The pipeline walks the states strictly in order; the first failing state
is terminal::

    load_public_key -> load_signature_file -> compute_digest
        -> cryptographic_verify -> policy_allowlist -> policy_age -> accepted

The two policy states are only entered when the supplied policy asks for
them.  Loading states raise instead of producing a verdict.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict

from qsnotary.core.errors import CryptographicFailure, PolicyViolation


class VerificationState(str, Enum):
    """States of the verification pipeline."""

    LOAD_PUBLIC_KEY = "load_public_key"
    LOAD_SIGNATURE_FILE = "load_signature_file"
    COMPUTE_DIGEST = "compute_digest"
    CRYPTOGRAPHIC_VERIFY = "cryptographic_verify"
    POLICY_ALLOWLIST = "policy_allowlist"
    POLICY_AGE = "policy_age"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class RejectionReason(str, Enum):
    """User-visible rejection reasons."""

    CRYPTOGRAPHIC_FAILURE = "cryptographic_failure"
    NOT_IN_ALLOWLIST = "not_in_allowlist"
    MISSING_TIMESTAMP = "missing_timestamp"
    SIGNATURE_EXPIRED = "signature_expired"

    @property
    def message(self) -> str:
        return _REASON_MESSAGES[self]

    @property
    def is_policy(self) -> bool:
        return self is not RejectionReason.CRYPTOGRAPHIC_FAILURE


_REASON_MESSAGES: dict[RejectionReason, str] = {
    RejectionReason.CRYPTOGRAPHIC_FAILURE: "signature verification failed",
    RejectionReason.NOT_IN_ALLOWLIST: "public key not in allowlist",
    RejectionReason.MISSING_TIMESTAMP: "no timestamp, cannot evaluate age",
    RejectionReason.SIGNATURE_EXPIRED: "signature older than max_age_days",
}


class VerificationResult(BaseModel):
    """Terminal outcome of one verification run."""

    model_config = ConfigDict(frozen=True)

    accepted: bool
    # ACCEPTED, or the state in which the run was rejected
    state: VerificationState
    reason: RejectionReason | None = None
    detail: str = ""
    signed_at: datetime | None = None
    key_fingerprint: str = ""

    def raise_for_rejection(self) -> None:
        """Raise ``CryptographicFailure`` or ``PolicyViolation`` if rejected."""
        if self.accepted or self.reason is None:
            return
        detail = self.detail or self.reason.message
        if self.reason.is_policy:
            raise PolicyViolation(self.reason, detail)
        raise CryptographicFailure(self.reason, detail)
