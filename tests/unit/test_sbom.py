"""Tests for the CycloneDX / SPDX structural check."""

from __future__ import annotations

import pytest

from qsnotary.core.errors import FormatError
from qsnotary.core.sbom import detect_sbom_format, validate_sbom_json

CYCLONEDX_SBOM = b'{"bomFormat":"CycloneDX","version":1}'
SPDX_SBOM = b'{"spdxVersion":"SPDX-2.3","name":"demo","packages":[]}'


class TestValidateSbom:
    def test_cyclonedx(self):
        assert validate_sbom_json(CYCLONEDX_SBOM) == "CycloneDX"

    def test_spdx(self):
        assert validate_sbom_json(SPDX_SBOM) == "SPDX"

    @pytest.mark.parametrize(
        "data",
        [
            b"hello",
            b"",
            b"\xff\xfe\x00",
            b"[1, 2, 3]",
            b'"just a string"',
            b"{}",
            b'{"bomFormat": "SPDX"}',
            b'{"bomFormat": "cyclonedx"}',
            b'{"spdxVersion": 2.3}',
        ],
    )
    def test_rejected(self, data):
        with pytest.raises(FormatError):
            validate_sbom_json(data)

    def test_non_object_message(self):
        with pytest.raises(FormatError, match="JSON object"):
            validate_sbom_json(b"[]")


class TestDetectFormat:
    def test_unknown_document(self):
        assert detect_sbom_format({"name": "x"}) is None

    def test_cyclonedx_wins_when_both_present(self):
        doc = {"bomFormat": "CycloneDX", "spdxVersion": "SPDX-2.3"}
        assert detect_sbom_format(doc) == "CycloneDX"
