"""Batch manifest models."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class ManifestEntry(BaseModel):
    """One signed file: forward-slash relative path and its signature hash."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str
    signature_hash: str


class Manifest(BaseModel):
    """Ordered listing of every file signed in one batch run.

    Order is the lexicographic order of ``path``, never completion order.
    Unknown keys are rejected so that an unrelated ``manifest.json`` is
    never mistaken for one written by a previous run.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    entries: list[ManifestEntry]


class BatchResult(BaseModel):
    """Outcome of a batch run: the manifest and its own signature."""

    model_config = ConfigDict(frozen=True)

    root: Path
    manifest_path: Path
    manifest: Manifest
    manifest_signature_hash: str
