"""Transparency ledger entry model.

One entry per successful signing operation.  The ledger file is JSON Lines;
each line is ``LedgerEntry.model_dump_json()`` of one entry.  Entries are
never edited or removed, and file order is append order (not necessarily
timestamp order).
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class LedgerEntry(BaseModel):
    """A single signing event.

    The same three fields are mirrored to the remote log server.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(default_factory=utc_now)
    file_name: str
    signature_hash: str  # hex of the raw signature bytes
