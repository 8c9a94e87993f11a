"""Append-only transparency ledger backed by a JSON Lines file.

The ledger file is the local source of truth for signing events.

Design:
- Append-only: only ``append()`` writes; there is no update or delete.
- One JSON object per line, newline-terminated; file order is append order.
- Each append opens the file, takes an exclusive ``flock``, writes the whole
  line in a single ``write()``, flushes and fsyncs, then unlocks and closes.
  Concurrent writer processes therefore never interleave partial lines.
"""

from __future__ import annotations

import fcntl
import logging
import os
from collections.abc import Iterator
from pathlib import Path

from pydantic import ValidationError

from qsnotary.core.errors import ArtifactIOError, FormatError
from qsnotary.models.ledger import LedgerEntry

logger = logging.getLogger(__name__)


class TransparencyLedger:
    """Append-only JSON Lines ledger.

    Parameters
    ----------
    path:
        Path to the ledger file.  Created on first append.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # Core: append-only write
    # ------------------------------------------------------------------

    def append(self, entry: LedgerEntry) -> LedgerEntry:
        """Append *entry* as one line and return it.

        This is the ONLY write method.
        """
        line = entry.model_dump_json().encode("utf-8") + b"\n"
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "ab") as fh:
                fcntl.flock(fh.fileno(), fcntl.LOCK_EX)
                try:
                    fh.write(line)
                    fh.flush()
                    os.fsync(fh.fileno())
                finally:
                    fcntl.flock(fh.fileno(), fcntl.LOCK_UN)
        except OSError as exc:
            raise ArtifactIOError(
                f"Failed to write ledger {self._path}: {exc}", self._path
            ) from exc

        logger.debug(
            "Ledger %s: appended entry for %s.", self._path, entry.file_name
        )
        return entry

    # ------------------------------------------------------------------
    # Query methods (read-only)
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[LedgerEntry]:
        return iter(self.entries())

    def __len__(self) -> int:
        return len(self.entries())

    def entries(self) -> list[LedgerEntry]:
        """Return every entry in append order.

        A missing ledger file is an empty ledger.  A line that does not
        parse raises ``FormatError`` naming the line number.
        """
        if not self._path.exists():
            return []
        try:
            lines = self._path.read_bytes().splitlines()
        except OSError as exc:
            raise ArtifactIOError(
                f"Failed to read ledger {self._path}: {exc}", self._path
            ) from exc

        entries: list[LedgerEntry] = []
        for lineno, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                entries.append(LedgerEntry.model_validate_json(line))
            except ValidationError as exc:
                raise FormatError(
                    f"Malformed ledger line {lineno} in {self._path}: {exc}"
                ) from exc
        return entries

    def entries_for(self, file_name: str) -> list[LedgerEntry]:
        """Return all entries recorded for *file_name*, in append order."""
        return [e for e in self.entries() if e.file_name == file_name]

    def latest(self) -> LedgerEntry | None:
        """Return the most recently appended entry, or None."""
        entries = self.entries()
        return entries[-1] if entries else None
