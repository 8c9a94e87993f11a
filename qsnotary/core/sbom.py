"""Structural check that a document is a CycloneDX or SPDX JSON SBOM."""

from __future__ import annotations

import json

from qsnotary.core.errors import FormatError

CYCLONEDX_FORMAT = "CycloneDX"


def detect_sbom_format(document: dict) -> str | None:
    """Return ``"CycloneDX"``, ``"SPDX"`` or None for a parsed JSON object."""
    if document.get("bomFormat") == CYCLONEDX_FORMAT:
        return "CycloneDX"
    if isinstance(document.get("spdxVersion"), str):
        return "SPDX"
    return None


def validate_sbom_json(data: bytes) -> str:
    """Validate *data* as an SBOM and return its format name.

    Raises
    ------
    FormatError
        If *data* is not JSON, is not an object, or carries neither
        ``"bomFormat": "CycloneDX"`` nor a string ``spdxVersion``.
    """
    try:
        document = json.loads(data)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise FormatError(f"Invalid JSON: {exc}") from exc
    if not isinstance(document, dict):
        raise FormatError("SBOM root must be a JSON object")
    sbom_format = detect_sbom_format(document)
    if sbom_format is None:
        raise FormatError(
            "Invalid SBOM: missing bomFormat (CycloneDX) or spdxVersion (SPDX)"
        )
    return sbom_format
