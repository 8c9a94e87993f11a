"""Remote transparency log collector (``POST /upload``)."""

from qsnotary.server.app import create_app

__all__ = ["create_app"]
