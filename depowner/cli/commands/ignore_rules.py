"""
Ignore-rules command implementation.

Prints a Composer configuration fragment whose ``audit.ignore`` section lists
the advisories of platform-only dependencies. The fragment is written to
stdout so it can be merged by the caller; composer.json is never modified.
"""
import json
import sys
from typing import Optional

import typer
from rich.markup import escape

from depowner.core.auditor import ResponsibilityAuditor
from depowner.core.config_manager import ConfigManager
from depowner.rich_utils.ui_helpers import get_console
from depowner.utils.exceptions import DepOwnerError


def ignore_rules_command(
    path: str = typer.Argument(".", help="Project directory containing composer.json and composer.lock"),
    config_path: Optional[str] = typer.Option(None, "-c", "--config", help="Path to config YAML"),
):
    """Print audit.ignore rules for platform-only advisories."""
    console = get_console()

    try:
        config = ConfigManager().discover_and_load_config(config_path)
        rules = ResponsibilityAuditor(config, console=console).build_ignore_rules(path)
    except DepOwnerError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        sys.exit(2)

    typer.echo(json.dumps({"config": {"audit": {"ignore": rules}}}, indent=4))
