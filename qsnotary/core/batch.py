"""Batch signer — sign every file under a directory, then a manifest of them.

Enumeration is recursive and sorted by relative POSIX path, so the manifest
order is reproducible.  Skipped:

- anything with a path component (relative to the root) starting with ``.``
- signature sidecars (``*.sig``)
- the root-level manifest left by a previous run
- the ledger file, when it lives inside the tree

A root-level file with the manifest's name that is *not* a previous
manifest (a web-extension ``manifest.json``, say) is never overwritten:
the run refuses to start and nothing is signed.

Signing is sequential.  A per-file failure aborts the run with
``BatchAbortedError``: files signed before it keep their sidecars and
ledger entries, and no manifest is written.  This partial commit is the
intended trade-off; there is no rollback.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from qsnotary.core.errors import ArtifactIOError, BatchAbortedError, NotaryError
from qsnotary.core.signature_codec import is_signature_file
from qsnotary.core.signing import SigningPipeline
from qsnotary.models.manifest import BatchResult, Manifest, ManifestEntry

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_NAME = "manifest.json"
HIDDEN_PREFIX = "."


def is_previous_manifest(path: Path) -> bool:
    """True if *path* holds a manifest written by an earlier batch run."""
    try:
        Manifest.model_validate_json(Path(path).read_bytes())
    except (OSError, ValidationError):
        return False
    return True


class BatchSigner:
    """Drives a :class:`SigningPipeline` over a directory tree.

    Parameters
    ----------
    pipeline:
        The signing pipeline used for every file and for the manifest.
    manifest_name:
        File name of the manifest written at the tree root.
    """

    def __init__(
        self,
        pipeline: SigningPipeline,
        *,
        manifest_name: str = DEFAULT_MANIFEST_NAME,
    ) -> None:
        self._pipeline = pipeline
        self._manifest_name = manifest_name

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------

    def eligible_files(self, root: Path) -> list[Path]:
        """Return the regular files found under *root*, in signing order.

        A foreign root-level file named like the manifest is listed here;
        :meth:`sign_tree` refuses to run over it.
        """
        root = Path(root)
        manifest_path = root / self._manifest_name
        ledger_path = self._pipeline.ledger.path.resolve()

        candidates: list[tuple[str, Path]] = []
        for path in root.rglob("*"):
            rel = path.relative_to(root)
            if any(part.startswith(HIDDEN_PREFIX) for part in rel.parts):
                continue
            if not path.is_file() or is_signature_file(path):
                continue
            if path.resolve() == ledger_path:
                continue
            if path == manifest_path and is_previous_manifest(path):
                continue
            candidates.append((rel.as_posix(), path))

        candidates.sort(key=lambda item: item[0])
        return [path for _rel, path in candidates]

    # ------------------------------------------------------------------
    # Signing
    # ------------------------------------------------------------------

    def sign_tree(self, root: Path) -> BatchResult:
        """Sign every eligible file under *root*, then sign the manifest.

        Produces K + 1 ledger entries for K eligible files.

        Raises
        ------
        ArtifactIOError
            *root* is not a directory, or a root-level file with the
            manifest's name was not written by qsnotary.  Nothing is
            signed in either case.
        BatchAbortedError
            A file failed to sign after earlier files were committed.
        """
        try:
            root = Path(root).resolve(strict=True)
        except OSError as exc:
            raise ArtifactIOError(f"Invalid directory {root}: {exc}", root) from exc
        if not root.is_dir():
            raise ArtifactIOError(f"Invalid directory {root}: not a directory", root)

        manifest_path = root / self._manifest_name
        if manifest_path.exists() and not is_previous_manifest(manifest_path):
            raise ArtifactIOError(
                f"Refusing to overwrite {manifest_path}: it is not a qsnotary "
                f"manifest; rename it or choose another manifest name",
                manifest_path,
            )

        files = self.eligible_files(root)
        logger.info("Batch signing %d file(s) under %s.", len(files), root)

        entries: list[ManifestEntry] = []
        for path in files:
            rel = path.relative_to(root).as_posix()
            try:
                result = self._pipeline.sign_artifact(path, validate_sbom=False)
            except NotaryError as exc:
                logger.error(
                    "Batch aborted at %s; %d file(s) already signed stay signed.",
                    rel, len(entries),
                )
                raise BatchAbortedError(path, list(entries), exc) from exc
            entries.append(ManifestEntry(path=rel, signature_hash=result.signature_hash))

        manifest = Manifest(entries=entries)
        try:
            manifest_path.write_text(manifest.model_dump_json(indent=2), encoding="utf-8")
        except OSError as exc:
            raise ArtifactIOError(
                f"Failed to write manifest {manifest_path}: {exc}", manifest_path
            ) from exc

        manifest_result = self._pipeline.sign_artifact(manifest_path, validate_sbom=False)
        logger.info(
            "Batch complete: %d file(s) plus manifest %s.",
            len(entries), manifest_path.name,
        )
        return BatchResult(
            root=root,
            manifest_path=manifest_path,
            manifest=manifest,
            manifest_signature_hash=manifest_result.signature_hash,
        )
