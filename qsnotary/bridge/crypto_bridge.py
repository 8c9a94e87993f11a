"""Crypto bridge — Dilithium5 key handling, signing and fail-closed verification.

Bridge boundary
---------------
The post-quantum signature math lives in ``dilithium-py``
(``dilithium_py.dilithium.Dilithium5``).  Everything else in qsnotary goes
through this module and only ever sees raw ``bytes``:

- ``generate_keypair()`` / ``save_keypair()`` create key material.
- ``load_public_key()`` / ``load_secret_key()`` read raw key files and raise
  ``KeyMaterialError`` on any problem.
- ``sign_digest()`` signs a SHA3-256 digest.
- ``verify_digest()`` **never raises**: an empty, truncated, oversized or
  forged signature, or a malformed public key, is simply ``False``.

Keys and signatures are stored as raw bytes on disk (``public.key``,
``private.key``) and hex-encoded everywhere else.
"""

from __future__ import annotations

import logging
from pathlib import Path

from dilithium_py.dilithium import Dilithium5

from qsnotary.core.errors import KeyMaterialError
from qsnotary.core.hasher import sha3_256_hex

logger = logging.getLogger(__name__)

ALGORITHM = "Dilithium5"

# Dilithium5 (NIST round 3) sizes.
PUBLIC_KEY_BYTES = 2592
SIGNATURE_BYTES = 4595

PUBLIC_KEY_FILENAME = "public.key"
PRIVATE_KEY_FILENAME = "private.key"


# ---------------------------------------------------------------------------
# Key material
# ---------------------------------------------------------------------------


def generate_keypair() -> tuple[bytes, bytes]:
    """Generate a Dilithium5 key pair.

    Returns
    -------
    tuple[bytes, bytes]
        ``(public_key, secret_key)`` as raw bytes.
    """
    public_key, secret_key = Dilithium5.keygen()
    return public_key, secret_key


def save_keypair(out_dir: Path) -> tuple[Path, Path]:
    """Generate a key pair and write ``public.key`` and ``private.key``.

    Returns the ``(public_path, private_path)`` that were written.
    """
    out_dir = Path(out_dir)
    public_key, secret_key = generate_keypair()
    public_path = out_dir / PUBLIC_KEY_FILENAME
    private_path = out_dir / PRIVATE_KEY_FILENAME
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        public_path.write_bytes(public_key)
        private_path.write_bytes(secret_key)
    except OSError as exc:
        raise KeyMaterialError(
            f"Failed to write key pair to {out_dir}: {exc}"
        ) from exc
    logger.info(
        "Wrote %s key pair to %s (fingerprint %s).",
        ALGORITHM, out_dir, key_fingerprint(public_key),
    )
    return public_path, private_path


def _read_key(path: Path, kind: str) -> bytes:
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise KeyMaterialError(f"Failed to read {kind} key {path}: {exc}") from exc
    if not data:
        raise KeyMaterialError(f"Invalid {kind} key {path}: file is empty")
    return data


def load_public_key(path: Path) -> bytes:
    """Read a raw Dilithium5 public key, checking its length."""
    data = _read_key(path, "public")
    if len(data) != PUBLIC_KEY_BYTES:
        raise KeyMaterialError(
            f"Invalid public key {path}: expected {PUBLIC_KEY_BYTES} bytes, "
            f"got {len(data)}"
        )
    return data


def load_secret_key(path: Path) -> bytes:
    """Read a raw Dilithium5 secret key."""
    return _read_key(path, "private")


def key_fingerprint(public_key: bytes) -> str:
    """Short fingerprint of a public key: first 16 hex chars of SHA3-256."""
    if not public_key:
        return ""
    return sha3_256_hex(public_key)[:16]


# ---------------------------------------------------------------------------
# Sign / verify
# ---------------------------------------------------------------------------


def sign_digest(digest: bytes, secret_key: bytes) -> bytes:
    """Sign *digest* with *secret_key* and return the raw detached signature.

    Raises ``KeyMaterialError`` if the secret key cannot be used.
    """
    try:
        signature = Dilithium5.sign(secret_key, digest)
    except (ValueError, IndexError, TypeError) as exc:
        raise KeyMaterialError(f"Invalid private key: {exc}") from exc
    return signature


def verify_digest(signature: bytes, digest: bytes, public_key: bytes) -> bool:
    """Return ``True`` only if *signature* is valid for *digest* under *public_key*.

    Fail-closed: malformed input of any kind returns ``False``.
    """
    if len(signature) != SIGNATURE_BYTES:
        logger.debug(
            "verify_digest: signature is %d bytes, expected %d.",
            len(signature), SIGNATURE_BYTES,
        )
        return False
    if len(public_key) != PUBLIC_KEY_BYTES:
        logger.debug("verify_digest: public key has wrong length.")
        return False
    try:
        return bool(Dilithium5.verify(public_key, digest, signature))
    except Exception:
        # Malformed packing inside the signature or key: fail closed
        logger.debug("verify_digest: verifier raised.", exc_info=True)
        return False
