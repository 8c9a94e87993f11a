"""Policy engine — allowlist and maximum-age rules for verified signatures.

The engine never sees an unverified signature: the verification pipeline
only consults it after the cryptographic check has passed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from qsnotary.core.errors import ArtifactIOError, FormatError
from qsnotary.models.ledger import utc_now
from qsnotary.models.policy import Policy
from qsnotary.models.verification import RejectionReason

logger = logging.getLogger(__name__)


def load_policy(path: Path) -> Policy:
    """Read and validate a policy JSON file."""
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ArtifactIOError(f"Failed to read policy {path}: {exc}", path) from exc
    try:
        return Policy.model_validate_json(raw)
    except ValidationError as exc:
        raise FormatError(f"Invalid policy JSON in {path}: {exc}") from exc


def signature_age_days(signed_at: datetime, now: datetime) -> int:
    """Whole days elapsed between *signed_at* and *now*.

    Naive timestamps are taken as UTC.
    """
    if signed_at.tzinfo is None:
        signed_at = signed_at.replace(tzinfo=timezone.utc)
    return (now - signed_at).days


class PolicyEngine:
    """Evaluates one :class:`Policy` against a verified signature.

    Parameters
    ----------
    policy:
        The trust rules.
    clock:
        Returns the current aware datetime; injectable for tests.
    """

    def __init__(
        self,
        policy: Policy,
        *,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._policy = policy
        self._clock = clock

    @property
    def policy(self) -> Policy:
        return self._policy

    def check_allowlist(self, public_key: bytes) -> RejectionReason | None:
        """Reject unless the key's hex matches an allowlist entry.

        Matching is case-insensitive and ignores surrounding whitespace.
        Returns None when the policy has no allowlist.
        """
        allowed = self._policy.allowed_public_keys
        if allowed is None:
            return None
        key_hex = public_key.hex().lower()
        if any(candidate.strip().lower() == key_hex for candidate in allowed):
            return None
        return RejectionReason.NOT_IN_ALLOWLIST

    def check_age(self, signed_at: datetime | None) -> RejectionReason | None:
        """Reject signatures older than ``max_age_days``.

        An age equal to the limit is accepted.  Returns None when the
        policy does not enforce age (no limit, or ``allow_expired``).
        """
        if not self._policy.enforces_age:
            return None
        if signed_at is None:
            return RejectionReason.MISSING_TIMESTAMP
        age = signature_age_days(signed_at, self._clock())
        if age > self._policy.max_age_days:
            logger.debug(
                "Signature is %d day(s) old; limit is %d.",
                age, self._policy.max_age_days,
            )
            return RejectionReason.SIGNATURE_EXPIRED
        return None
