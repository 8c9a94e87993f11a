"""Signature sidecar and signing result models."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from qsnotary.models.ledger import LedgerEntry


class SignatureFile(BaseModel):
    """The persisted ``<artifact>.sig`` sidecar.

    ``timestamp`` is always written by the signer; it is optional on read
    because older wrapped sidecars may omit it.
    """

    model_config = ConfigDict(frozen=True)

    signature: str  # hex-encoded raw signature
    # RFC 3339 string on the wire; numeric Unix times are refused
    timestamp: datetime | None = Field(default=None, strict=True)

    @field_validator("signature")
    @classmethod
    def _signature_is_hex(cls, value: str) -> str:
        if any(ch.isspace() for ch in value):
            raise ValueError("signature hex must not contain whitespace")
        bytes.fromhex(value)  # ValueError surfaces as a ValidationError
        return value

    @property
    def signature_bytes(self) -> bytes:
        return bytes.fromhex(self.signature)


class SigningResult(BaseModel):
    """Outcome of signing one artifact."""

    model_config = ConfigDict(frozen=True)

    artifact_path: Path
    signature_path: Path
    signature_hash: str
    timestamp: datetime
    ledger_entry: LedgerEntry
