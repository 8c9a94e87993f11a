"""Main Typer application — imports and registers all CLI commands.

Entry point: ``qsnotary`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

from typing import Optional

import typer

from qsnotary.cli.commands.generate_keys import generate_keys_cmd
from qsnotary.cli.commands.ledger_cmd import ledger_cmd
from qsnotary.cli.commands.serve import serve_cmd
from qsnotary.cli.commands.sign import sign_cmd
from qsnotary.cli.commands.sign_all import sign_all_cmd
from qsnotary.cli.commands.verify import verify_cmd
from qsnotary.config import config
from qsnotary.observability import configure_logging

app = typer.Typer(
    name="qsnotary",
    help="Post-quantum SBOM notary with Dilithium5 signing.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (default: QSNOTARY_LOG_LEVEL or INFO).",
    ),
) -> None:
    """Post-quantum SBOM notary with Dilithium5 signing."""
    configure_logging(log_level or config.log_level)


# Register subcommands
app.command(name="generate-keys", help="Generate a Dilithium5 key pair.")(generate_keys_cmd)
app.command(name="sign", help="Sign an SBOM file; writes .sig and appends to the ledger.")(sign_cmd)
app.command(name="verify", help="Verify an SBOM against its signature and a public key.")(verify_cmd)
app.command(name="sign-all", help="Sign every file in a directory, then the manifest.")(sign_all_cmd)
app.command(name="ledger", help="Show the local transparency ledger.")(ledger_cmd)
app.command(name="serve", help="Run the transparency log server.")(serve_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
