"""Transparency log server — receives mirrored ledger entries.

Each ``POST /upload`` appends the payload as one line to the server's own
JSON Lines ledger.  There is no authentication and no idempotency key:
duplicate uploads produce duplicate entries.

Timestamps are parsed on arrival and stored re-serialized, so the
collector records the same instant as the client but not necessarily the
same string (``+00:00`` may come back as ``Z``).  A timestamp that cannot be
parsed as a datetime is refused with 422 and nothing is written.

Run::

    qsnotary serve --port 8080
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from qsnotary import __version__
from qsnotary.core.errors import ArtifactIOError
from qsnotary.core.ledger import TransparencyLedger
from qsnotary.models.ledger import LedgerEntry

logger = logging.getLogger(__name__)


class UploadPayload(BaseModel):
    """Mirror request body; all three fields are required.

    ``timestamp`` is parsed here and normalised when the entry is stored.
    """

    file_name: str
    signature_hash: str
    timestamp: datetime


def create_app(ledger_path: Path) -> FastAPI:
    """Create the collector app writing to *ledger_path*."""
    ledger = TransparencyLedger(ledger_path)
    app = FastAPI(
        title="qsnotary transparency log",
        description="Collects mirrored signing events from qsnotary clients.",
        version=__version__,
    )

    @app.post("/upload")
    def upload(payload: UploadPayload) -> dict[str, str]:
        entry = LedgerEntry(**payload.model_dump())
        try:
            ledger.append(entry)
        except ArtifactIOError as exc:
            logger.error("Upload for %s not recorded: %s", entry.file_name, exc)
            raise HTTPException(status_code=500, detail="could not write ledger")
        logger.info("Recorded upload for %s.", entry.file_name)
        return {"status": "recorded"}

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
