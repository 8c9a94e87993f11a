"""Integration tests — sign, ledger, mirror and verify working together."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from qsnotary.bridge import mirror as mirror_module
from qsnotary.bridge.mirror import MirrorClient
from qsnotary.core.batch import BatchSigner
from qsnotary.core.key_provider import (
    LocalKeyProvider,
    RemoteKeyProvider,
    RemoteKeyService,
)
from qsnotary.core.ledger import TransparencyLedger
from qsnotary.core.policy import load_policy
from qsnotary.core.signing import SigningPipeline
from qsnotary.core.verification import VerificationPipeline
from qsnotary.models.verification import RejectionReason

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _verify(artifact: Path, public_key: Path, policy_path: Path | None = None):
    policy = load_policy(policy_path) if policy_path is not None else None
    return VerificationPipeline(policy, clock=lambda: NOW).verify(
        artifact, artifact.with_name(artifact.name + ".sig"), public_key
    )


class TestSingleSbom:
    def test_cyclonedx_with_two_key_pairs(self, tmp_path, keys_a, keys_b, ledger):
        artifact = tmp_path / "bom.json"
        artifact.write_bytes(b'{"bomFormat":"CycloneDX","version":1}')

        SigningPipeline(LocalKeyProvider(keys_a.private_path), ledger).sign_artifact(artifact)

        doc = json.loads((tmp_path / "bom.json.sig").read_text())
        bytes.fromhex(doc["signature"])
        datetime.fromisoformat(doc["timestamp"].replace("Z", "+00:00"))

        assert _verify(artifact, keys_a.public_path).accepted
        rejected = _verify(artifact, keys_b.public_path)
        assert rejected.reason is RejectionReason.CRYPTOGRAPHIC_FAILURE

    def test_age_policy(self, make_pipeline, sbom_path, keys_a, tmp_path):
        make_pipeline(NOW - timedelta(days=8)).sign_artifact(sbom_path)

        strict = tmp_path / "strict.json"
        strict.write_text('{"max_age_days": 7, "allow_expired": false}')
        lenient = tmp_path / "lenient.json"
        lenient.write_text('{"max_age_days": 7, "allow_expired": true}')

        result = _verify(sbom_path, keys_a.public_path, strict)
        assert result.reason is RejectionReason.SIGNATURE_EXPIRED
        assert _verify(sbom_path, keys_a.public_path, lenient).accepted

    def test_allowlist_policy_with_valid_signature(
        self, tmp_path, keys_a, keys_b, sbom_path, ledger
    ):
        SigningPipeline(LocalKeyProvider(keys_b.private_path), ledger).sign_artifact(sbom_path)
        policy = tmp_path / "policy.json"
        policy.write_text(json.dumps({"allowed_public_keys": [keys_a.public_key.hex()]}))

        result = _verify(sbom_path, keys_b.public_path, policy)
        assert result.reason is RejectionReason.NOT_IN_ALLOWLIST
        assert result.reason is not RejectionReason.CRYPTOGRAPHIC_FAILURE


class TestBatch:
    def test_every_file_and_manifest_verify(self, tmp_path, pipeline, keys_a, ledger):
        root = tmp_path / "dist"
        (root / "pkg").mkdir(parents=True)
        (root / "app.whl").write_bytes(b"PK\x03\x04wheel")
        (root / "pkg" / "sbom.json").write_bytes(b'{"spdxVersion":"SPDX-2.3"}')
        (root / "README").write_text("readme")

        result = BatchSigner(pipeline).sign_tree(root)

        for entry in result.manifest.entries:
            assert _verify(root / entry.path, keys_a.public_path).accepted
        assert _verify(result.manifest_path, keys_a.public_path).accepted
        assert [e.file_name for e in ledger.entries()] == [
            "README", "app.whl", "sbom.json", "manifest.json",
        ]

    def test_remote_service_batch_verifies_with_exported_key(
        self, tmp_path, keypair_b, ledger
    ):
        root = tmp_path / "dist"
        root.mkdir()
        for n in range(3):
            (root / f"f{n}.txt").write_text(str(n))

        service = RemoteKeyService(keypair=keypair_b)
        exported = service.export_public_key(tmp_path / "kms.pub")
        provider = RemoteKeyProvider(service, latency_seconds=0)
        result = BatchSigner(SigningPipeline(provider, ledger)).sign_tree(root)

        for entry in result.manifest.entries:
            assert _verify(root / entry.path, exported).accepted
        assert _verify(result.manifest_path, exported).accepted


class TestMirrorToServer:
    def test_signing_event_reaches_central_ledger(
        self, monkeypatch, tmp_path, make_pipeline, sbom_path, ledger
    ):
        pytest.importorskip("fastapi")
        from fastapi.testclient import TestClient

        from qsnotary.server import create_app

        central = tmp_path / "central_ledger.jsonl"
        client = TestClient(create_app(central))

        def post_to_app(url, json=None, timeout=None):
            assert url == "http://collector/upload"
            return client.post("/upload", json=json)

        monkeypatch.setattr(mirror_module.requests, "post", post_to_app)

        class JoiningMirror(MirrorClient):
            """Waits for delivery so the test can inspect the server."""

            def submit(self, entry):
                thread = super().submit(entry)
                thread.join(timeout=10)
                return thread

        result = make_pipeline(NOW, mirror=JoiningMirror("http://collector/")).sign_artifact(
            sbom_path
        )

        remote = TransparencyLedger(central).entries()
        assert len(remote) == 1
        assert remote[0].file_name == result.ledger_entry.file_name
        assert remote[0].signature_hash == result.ledger_entry.signature_hash
        assert remote[0].timestamp == result.ledger_entry.timestamp
        assert ledger.entries() == [result.ledger_entry]
