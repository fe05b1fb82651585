"""
Main CLI application for depowner.

Defines the Typer application structure and command routing; the commands
themselves are thin wrappers around ResponsibilityAuditor.
"""
import logging

import typer

from depowner.cli.commands.audit import audit_command
from depowner.cli.commands.classify import classify_command
from depowner.cli.commands.ignore_rules import ignore_rules_command


app = typer.Typer(help="depowner - responsibility-aware security audits for Composer projects")

app.command("classify", help="Show who owns each locked package.")(classify_command)
app.command("audit", help="Fail on advisories in user-owned dependencies only.")(audit_command)
app.command("ignore-rules", help="Print audit.ignore rules for platform-only advisories.")(ignore_rules_command)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
):
    """depowner - classify dependency ownership and audit only what you own."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
