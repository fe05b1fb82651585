"""
Classify command implementation.

Prints the ownership of every classified package in the lock file.
"""
import json
import sys
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from depowner.core.auditor import ResponsibilityAuditor
from depowner.core.config_manager import ConfigManager
from depowner.graph import summarize
from depowner.rich_utils.ui_helpers import get_console
from depowner.utils.exceptions import DepOwnerError

OWNERSHIP_STYLES = {
    "direct": "bold",
    "shared": "yellow",
    "platform-only": "cyan",
    "user-transitive": "magenta",
}


def classify_command(
    path: str = typer.Argument(".", help="Project directory containing composer.json and composer.lock"),
    platform: Optional[List[str]] = typer.Option(
        None, "-p", "--platform", help="Platform package name or glob (repeatable)"
    ),
    config_path: Optional[str] = typer.Option(None, "-c", "--config", help="Path to config YAML"),
    as_json: bool = typer.Option(False, "--json", help="Print the classification as JSON"),
):
    """Show who owns each locked package."""
    console = get_console()

    try:
        config = ConfigManager().discover_and_load_config(config_path)
        auditor = ResponsibilityAuditor(config, console=console)
        classifications, platform_roots, repository = auditor.classify_project(path, platform or None)
    except DepOwnerError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        sys.exit(2)

    if repository is None:
        console.print("[red]❌ No composer.lock found. Run composer install first.[/red]")
        sys.exit(1)

    if as_json:
        payload = {
            "platform_roots": platform_roots,
            "packages": {name: ownership.value for name, ownership in sorted(classifications.items())},
            "summary": summarize(classifications),
        }
        typer.echo(json.dumps(payload, indent=4))
        return

    table = Table(title=f"Dependency ownership (platform: {', '.join(platform_roots) or 'none'})")
    table.add_column("Package")
    table.add_column("Ownership")
    table.add_column("Blocks", justify="center")
    for name, ownership in sorted(classifications.items()):
        style = OWNERSHIP_STYLES.get(ownership.value, "")
        table.add_row(name, f"[{style}]{ownership.value}[/{style}]", "yes" if ownership.should_block() else "no")

    out = Console()
    out.print(table)
    counts = summarize(classifications)
    out.print(", ".join(f"{count} {label}" for label, count in counts.items()))
