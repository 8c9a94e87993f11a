"""Runtime configuration — env-driven via pydantic-settings.

Reads ``QSNOTARY_*`` environment variables and an optional ``.env`` file.
CLI options override these values per invocation.

Examples
--------
Override via environment::

    export QSNOTARY_LEDGER_PATH=/var/lib/qsnotary/ledger.json
    export QSNOTARY_SERVER_URL=http://transparency.internal:8080
    export QSNOTARY_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class NotaryConfig(BaseSettings):
    """qsnotary configuration with environment variable overrides."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="QSNOTARY_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Runtime environment
    environment: str = "development"
    log_level: str = "INFO"

    # Local ledger and batch output
    ledger_path: Path = Path("ledger.json")
    manifest_name: str = "manifest.json"

    # Remote transparency log (mirror client)
    server_url: str | None = None
    mirror_timeout_seconds: float = 5.0

    # Simulated remote key service
    kms_latency_seconds: float = 0.1

    # Mirror server (``qsnotary serve``)
    central_ledger_path: Path = Path("central_ledger.jsonl")
    host: str = "0.0.0.0"
    port: int = 8080


# Module-level singleton — import as `from qsnotary.config import config`
config = NotaryConfig()
