"""Signature sidecar codec.

Two on-disk forms are understood:

- **Wrapped** (written by every current signer)::

      {"signature": "<hex>", "timestamp": "<RFC3339>"}

- **Legacy**: the raw signature bytes with no wrapper and no timestamp.

The wrapped form is recognised by its leading ``{``.  A file exactly one
raw signature long is always legacy, since a wrapped sidecar is at least
twice that size.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError

from qsnotary.bridge.crypto_bridge import SIGNATURE_BYTES
from qsnotary.core.errors import FormatError
from qsnotary.models.signature import SignatureFile

SIDECAR_SUFFIX = ".sig"
_WRAPPED_MARKER = b"{"


def signature_path_for(artifact_path: Path) -> Path:
    """Sidecar path for an artifact: ``.sig`` appended to the file name.

    ``sbom.json`` -> ``sbom.json.sig``; ``README`` -> ``README.sig``.
    """
    artifact_path = Path(artifact_path)
    return artifact_path.with_name(artifact_path.name + SIDECAR_SUFFIX)


def is_signature_file(path: Path) -> bool:
    return Path(path).name.endswith(SIDECAR_SUFFIX)


def wrap(signature: bytes, timestamp: datetime) -> SignatureFile:
    """Build the sidecar model for a raw signature and issuance time."""
    return SignatureFile(signature=signature.hex(), timestamp=timestamp)


def encode(sidecar: SignatureFile) -> bytes:
    """Serialize a sidecar to its compact JSON bytes."""
    return sidecar.model_dump_json().encode("utf-8")


def is_wrapped(content: bytes) -> bool:
    if len(content) == SIGNATURE_BYTES:
        return False
    return content.lstrip().startswith(_WRAPPED_MARKER)


def unwrap(content: bytes) -> tuple[bytes, datetime | None]:
    """Decode sidecar bytes into ``(raw_signature, timestamp_or_None)``.

    Raises
    ------
    FormatError
        If the content looks wrapped but is not a valid sidecar.
    """
    if not is_wrapped(content):
        return content, None

    try:
        raw = json.loads(content)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise FormatError(f"Invalid signature JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise FormatError("Signature JSON must be an object")
    if not isinstance(raw.get("signature"), str):
        raise FormatError("Missing 'signature' in signature file")

    try:
        sidecar = SignatureFile.model_validate_json(content)
    except ValidationError as exc:
        raise FormatError(f"Invalid signature file: {exc}") from exc
    return sidecar.signature_bytes, sidecar.timestamp
