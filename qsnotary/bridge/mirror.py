"""Mirror client — best-effort delivery of ledger entries to a remote log.

Delivery semantics
------------------
- **Detached**: each ``submit()`` starts its own daemon thread; nothing in
  the signing pipeline waits on it.
- **At-most-once**: one HTTP attempt, no retry, no outbox.  A process that
  exits before the thread finishes simply loses the delivery.
- **Unordered**: concurrent deliveries may reach the server in any order.
- **Never fatal**: connection errors and non-2xx responses are logged as
  warnings and dropped.

If stronger guarantees are ever required, replace this with an explicit
outbox-and-retry queue instead of adding retries here.
"""

from __future__ import annotations

import logging
import threading

import requests

from qsnotary.models.ledger import LedgerEntry

logger = logging.getLogger(__name__)

UPLOAD_PATH = "/upload"


class MirrorClient:
    """Posts ledger entries to ``<server_url>/upload`` in the background.

    Parameters
    ----------
    server_url:
        Base URL of the transparency log server, e.g.
        ``http://localhost:8080``.  A trailing slash is ignored.
    timeout:
        Per-request timeout in seconds.
    """

    def __init__(self, server_url: str, *, timeout: float = 5.0) -> None:
        self._upload_url = server_url.rstrip("/") + UPLOAD_PATH
        self._timeout = timeout

    @property
    def upload_url(self) -> str:
        return self._upload_url

    def submit(self, entry: LedgerEntry) -> threading.Thread:
        """Start delivering *entry* and return the (daemon) worker thread.

        The returned thread is only useful to tests; production callers
        never join it.
        """
        thread = threading.Thread(
            target=self.deliver,
            args=(entry,),
            name=f"qsnotary-mirror-{entry.file_name}",
            daemon=True,
        )
        thread.start()
        return thread

    def deliver(self, entry: LedgerEntry) -> bool:
        """Perform one synchronous delivery attempt.

        Returns ``True`` on a 2xx response.  Never raises.
        """
        body = {
            "file_name": entry.file_name,
            "signature_hash": entry.signature_hash,
            "timestamp": entry.model_dump(mode="json")["timestamp"],
        }
        try:
            response = requests.post(
                self._upload_url, json=body, timeout=self._timeout
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.warning(
                "Could not reach transparency log server at %s: %s",
                self._upload_url, exc,
            )
            return False
        logger.debug(
            "Mirrored ledger entry for %s to %s.", entry.file_name, self._upload_url
        )
        return True
