"""qsnotary: post-quantum SBOM notary.

Signs software bills of materials with Dilithium5, writes portable
``.sig`` sidecars, and records every signing event in an append-only
JSON Lines transparency ledger that can be mirrored to a remote collector.
Verification applies an optional trust policy (public-key allowlist and
maximum signature age) on top of the cryptographic check.
"""

__version__ = "0.1.0"
__description__ = "Post-quantum SBOM notary with Dilithium5 signing"

from qsnotary.core.batch import BatchSigner
from qsnotary.core.key_provider import (
    KeyProvider,
    LocalKeyProvider,
    RemoteKeyProvider,
    RemoteKeyService,
)
from qsnotary.core.ledger import TransparencyLedger
from qsnotary.core.signing import SigningPipeline
from qsnotary.core.verification import VerificationPipeline

__all__ = [
    "BatchSigner",
    "KeyProvider",
    "LocalKeyProvider",
    "RemoteKeyProvider",
    "RemoteKeyService",
    "SigningPipeline",
    "TransparencyLedger",
    "VerificationPipeline",
    "__version__",
]
