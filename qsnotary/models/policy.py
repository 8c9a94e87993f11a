"""Verification trust policy (declarative, loaded once per verification)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, NonNegativeInt


class Policy(BaseModel):
    """Trust rules applied after a signature verifies cryptographically.

    ``max_age_days`` requires a timestamp in the sidecar and is ignored when
    ``allow_expired`` is set.  ``allowed_public_keys`` holds hex-encoded
    public keys; when present, the verifying key must be one of them.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    allow_expired: bool = False
    max_age_days: NonNegativeInt | None = None
    allowed_public_keys: list[str] | None = None

    @property
    def has_allowlist(self) -> bool:
        return self.allowed_public_keys is not None

    @property
    def enforces_age(self) -> bool:
        return self.max_age_days is not None and not self.allow_expired
