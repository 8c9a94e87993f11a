"""Bridge layer between qsnotary and its external collaborators.

Modules
-------
crypto_bridge
    Wraps ``dilithium_py`` for Dilithium5 key handling, signing and
    fail-closed verification.
mirror
    Fire-and-forget delivery of ledger entries to a remote transparency
    log server over HTTP (``requests``).

Nothing outside this package imports ``dilithium_py`` or ``requests``
directly.
"""
