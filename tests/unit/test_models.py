"""Tests for the pydantic models and verification enums."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from qsnotary.core.errors import CryptographicFailure, PolicyViolation
from qsnotary.models import Manifest, ManifestEntry, Policy, SignatureFile
from qsnotary.models.verification import (
    RejectionReason,
    VerificationResult,
    VerificationState,
)


class TestPolicyModel:
    def test_enforces_age(self):
        assert Policy(max_age_days=3).enforces_age
        assert not Policy(max_age_days=3, allow_expired=True).enforces_age
        assert not Policy().enforces_age

    def test_has_allowlist(self):
        assert Policy(allowed_public_keys=[]).has_allowlist
        assert not Policy().has_allowlist

    def test_frozen(self):
        with pytest.raises(ValidationError):
            Policy().allow_expired = True


class TestSignatureFileModel:
    def test_signature_bytes(self):
        assert SignatureFile(signature="0aff").signature_bytes == b"\x0a\xff"

    def test_rejects_non_hex(self):
        with pytest.raises(ValidationError):
            SignatureFile(signature="nothex")

    def test_rejects_whitespace_in_hex(self):
        with pytest.raises(ValidationError):
            SignatureFile(signature="0a ff")

    def test_rejects_numeric_timestamp(self):
        with pytest.raises(ValidationError):
            SignatureFile.model_validate_json('{"signature": "0a", "timestamp": 1700000000}')


class TestManifestModel:
    def test_entries_required(self):
        with pytest.raises(ValidationError):
            Manifest.model_validate_json("{}")

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValidationError):
            Manifest.model_validate_json('{"entries": [], "manifest_version": 3}')

    def test_empty_manifest(self):
        assert Manifest(entries=[]).entries == []

    def test_json_shape(self):
        manifest = Manifest(entries=[ManifestEntry(path="a/b.txt", signature_hash="00")])
        assert manifest.model_dump() == {
            "entries": [{"path": "a/b.txt", "signature_hash": "00"}]
        }


class TestVerificationEnums:
    def test_only_crypto_failure_is_not_policy(self):
        assert not RejectionReason.CRYPTOGRAPHIC_FAILURE.is_policy
        for reason in (
            RejectionReason.NOT_IN_ALLOWLIST,
            RejectionReason.MISSING_TIMESTAMP,
            RejectionReason.SIGNATURE_EXPIRED,
        ):
            assert reason.is_policy

    def test_every_reason_has_a_message(self):
        for reason in RejectionReason:
            assert reason.message

    def test_raise_for_rejection_uses_reason_message(self):
        result = VerificationResult(
            accepted=False,
            state=VerificationState.POLICY_AGE,
            reason=RejectionReason.SIGNATURE_EXPIRED,
        )
        with pytest.raises(PolicyViolation, match="older than max_age_days"):
            result.raise_for_rejection()

    def test_raise_for_crypto_rejection(self):
        result = VerificationResult(
            accepted=False,
            state=VerificationState.CRYPTOGRAPHIC_VERIFY,
            reason=RejectionReason.CRYPTOGRAPHIC_FAILURE,
            detail="signature verification failed",
        )
        with pytest.raises(CryptographicFailure):
            result.raise_for_rejection()
