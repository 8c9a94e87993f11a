"""qsnotary CLI — Typer-based command-line interface.

Provides the ``qsnotary`` command with subcommands for key generation,
signing, batch signing, verification, ledger inspection and the
transparency log server.

All output uses Rich for formatted terminal display.
"""
