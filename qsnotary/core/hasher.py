"""Digest helpers: the SHA3-256 value that is actually signed."""

from __future__ import annotations

import hashlib

DIGEST_SIZE = 32


def sha3_256_digest(data: bytes) -> bytes:
    """Return the raw SHA3-256 digest of *data*."""
    return hashlib.sha3_256(data).digest()


def sha3_256_hex(data: bytes) -> str:
    """Return the SHA3-256 hex digest of *data*."""
    return hashlib.sha3_256(data).hexdigest()
