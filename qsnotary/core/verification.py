"""Verification pipeline — sidecar, digest, Dilithium5 check, then policy.

States are walked strictly in order and the first failure is terminal
(see :mod:`qsnotary.models.verification`).  Loading failures raise
``KeyMaterialError``, ``ArtifactIOError`` or ``FormatError``.  A bad
signature or a policy miss is a verdict: a rejected
``VerificationResult`` whose reason tells the two apart.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from qsnotary.bridge.crypto_bridge import (
    key_fingerprint,
    load_public_key,
    verify_digest,
)
from qsnotary.core import signature_codec
from qsnotary.core.hasher import sha3_256_digest
from qsnotary.core.policy import PolicyEngine
from qsnotary.core.signing import read_artifact
from qsnotary.models.ledger import utc_now
from qsnotary.models.policy import Policy
from qsnotary.models.verification import (
    RejectionReason,
    VerificationResult,
    VerificationState,
)

logger = logging.getLogger(__name__)


class VerificationPipeline:
    """Checks an artifact against its sidecar, a public key and a policy.

    Parameters
    ----------
    policy:
        Optional trust policy.  Without one, a cryptographically valid
        signature is accepted.
    clock:
        Returns the current aware UTC datetime; used for age checks.
    """

    def __init__(
        self,
        policy: Policy | None = None,
        *,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._policy_engine = (
            PolicyEngine(policy, clock=clock) if policy is not None else None
        )
        self._state = VerificationState.LOAD_PUBLIC_KEY

    @property
    def state(self) -> VerificationState:
        """The state reached by the most recent run."""
        return self._state

    def _enter(self, state: VerificationState) -> None:
        logger.debug("verification: %s -> %s", self._state.value, state.value)
        self._state = state

    def verify(
        self,
        artifact_path: Path,
        signature_path: Path,
        public_key_path: Path,
    ) -> VerificationResult:
        """Verify files on disk; see :meth:`verify_loaded` for the verdict rules."""
        self._enter(VerificationState.LOAD_PUBLIC_KEY)
        public_key = load_public_key(public_key_path)

        self._enter(VerificationState.LOAD_SIGNATURE_FILE)
        sidecar = read_artifact(signature_path)
        signature, signed_at = signature_codec.unwrap(sidecar)

        self._enter(VerificationState.COMPUTE_DIGEST)
        digest = sha3_256_digest(read_artifact(artifact_path))

        result = self._decide(signature, signed_at, digest, public_key)
        if result.accepted:
            logger.info("Verified %s (key %s).", artifact_path, result.key_fingerprint)
        else:
            logger.info(
                "Rejected %s at %s: %s.",
                artifact_path, result.state.value, result.detail,
            )
        return result

    def verify_loaded(
        self,
        artifact: bytes,
        sidecar: bytes,
        public_key: bytes,
    ) -> VerificationResult:
        """Verify in-memory artifact, sidecar and public key bytes.

        Raises ``FormatError`` on a malformed wrapped sidecar.
        """
        self._enter(VerificationState.LOAD_SIGNATURE_FILE)
        signature, signed_at = signature_codec.unwrap(sidecar)
        self._enter(VerificationState.COMPUTE_DIGEST)
        digest = sha3_256_digest(artifact)
        return self._decide(signature, signed_at, digest, public_key)

    # ------------------------------------------------------------------
    # Verdict states
    # ------------------------------------------------------------------

    def _decide(
        self,
        signature: bytes,
        signed_at: datetime | None,
        digest: bytes,
        public_key: bytes,
    ) -> VerificationResult:
        fingerprint = key_fingerprint(public_key)

        self._enter(VerificationState.CRYPTOGRAPHIC_VERIFY)
        if not verify_digest(signature, digest, public_key):
            return self._reject(
                RejectionReason.CRYPTOGRAPHIC_FAILURE, signed_at, fingerprint
            )

        engine = self._policy_engine
        if engine is not None and engine.policy.has_allowlist:
            self._enter(VerificationState.POLICY_ALLOWLIST)
            reason = engine.check_allowlist(public_key)
            if reason is not None:
                return self._reject(reason, signed_at, fingerprint)

        if engine is not None and engine.policy.enforces_age:
            self._enter(VerificationState.POLICY_AGE)
            reason = engine.check_age(signed_at)
            if reason is not None:
                return self._reject(reason, signed_at, fingerprint)

        self._enter(VerificationState.ACCEPTED)
        return VerificationResult(
            accepted=True,
            state=VerificationState.ACCEPTED,
            signed_at=signed_at,
            key_fingerprint=fingerprint,
        )

    def _reject(
        self,
        reason: RejectionReason,
        signed_at: datetime | None,
        fingerprint: str,
    ) -> VerificationResult:
        failed_at = self._state
        self._enter(VerificationState.REJECTED)
        return VerificationResult(
            accepted=False,
            state=failed_at,
            reason=reason,
            detail=reason.message,
            signed_at=signed_at,
            key_fingerprint=fingerprint,
        )
