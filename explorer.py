#!/usr/bin/env python3
"""
File Explorer - Interactive Filesystem Shell

Main entry point for the File Explorer CLI application.
"""

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from core import AuditLogger, ExplorerConfig, load_config
from modules.file_explorer import FileExplorer, ExplorerShell, Session


console = Console()


def get_audit_logger(config: ExplorerConfig) -> AuditLogger:
    """Get an audit logger configured from the explorer settings."""
    return AuditLogger(log_path=config.audit_log_path, enabled=config.audit_enabled)


@click.group(invoke_without_command=True)
@click.version_option(version="0.1.0", prog_name="File Explorer")
@click.option(
    "--config", "config_path",
    default="config.yaml",
    show_default=True,
    help="Path to the YAML configuration file."
)
@click.pass_context
def explorer(ctx: click.Context, config_path: str):
    """
    File Explorer - Inspect and manipulate the local filesystem

    Run without a command to start the interactive shell.
    """
    ctx.obj = load_config(config_path)
    if ctx.invoked_subcommand is None:
        ctx.invoke(shell)


@explorer.command()
@click.pass_obj
def shell(config: ExplorerConfig):
    """Start the interactive shell in the current directory."""
    shell_console = Console(no_color=not config.colors)
    file_explorer = FileExplorer(
        logger=get_audit_logger(config),
        session=Session.from_cwd(),
        config=config
    )
    ExplorerShell(file_explorer, console=shell_console).run()


@explorer.command()
@click.option("--limit", default=20, show_default=True, help="Number of entries to show.")
@click.option("--failed", is_flag=True, help="Only show failed operations.")
@click.pass_obj
def audit(config: ExplorerConfig, limit: int, failed: bool):
    """View the audit log."""
    logger = AuditLogger(log_path=config.audit_log_path, enabled=False)
    entries = logger.get_failed_actions(limit=limit) if failed else logger.get_recent(limit=limit)

    if not entries:
        console.print("[dim]No audit entries found.[/dim]")
        return

    table = Table(title="Recent Audit Log")
    table.add_column("Time", style="dim")
    table.add_column("Type")
    table.add_column("Action")
    table.add_column("Status")
    table.add_column("Result")

    for entry in entries:
        time_str = entry.timestamp.split("T")[1].split(".")[0] if "T" in entry.timestamp else entry.timestamp

        status_str = entry.status
        if entry.status == "executed":
            status_str = f"[green]{entry.status}[/green]"
        elif entry.status == "failed":
            status_str = f"[red]{entry.status}[/red]"

        description = entry.action_description
        if len(description) > 50:
            description = description[:50] + "..."

        table.add_row(
            time_str,
            entry.action_type,
            escape(description),
            status_str,
            escape(entry.result or "")
        )

    console.print(table)


@explorer.command("config")
@click.pass_obj
def show_config(config: ExplorerConfig):
    """Show the effective configuration."""
    console.print(config.dump(), markup=False, highlight=False)


if __name__ == "__main__":
    explorer()
