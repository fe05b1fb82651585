"""
Audit command implementation.

Thin wrapper around ResponsibilityAuditor.run_post_install_audit that maps
the outcome to an exit code.
"""
import sys
from typing import Optional

import typer
from rich.markup import escape

from depowner.core.auditor import ResponsibilityAuditor
from depowner.core.config_manager import ConfigManager
from depowner.rich_utils.ui_helpers import get_console
from depowner.utils.exceptions import DepOwnerError, UserOwnedAdvisoriesError


def audit_command(
    path: str = typer.Argument(".", help="Project directory containing composer.json and composer.lock"),
    config_path: Optional[str] = typer.Option(None, "-c", "--config", help="Path to config YAML"),
):
    """Fail on advisories in user-owned dependencies only."""
    console = get_console()

    try:
        config = ConfigManager().discover_and_load_config(config_path)
        result = ResponsibilityAuditor(config, console=console).run_post_install_audit(path)
    except UserOwnedAdvisoriesError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)
    except DepOwnerError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        sys.exit(2)

    if result.skipped:
        console.print(f"Responsibility audit skipped: {result.skipped_reason}")
