"""Backup commands."""

from datetime import datetime

import click
from rich.prompt import Confirm
from rich.table import Table

from ...core.backup import BackupManager
from ...models.backup import BackupPhase
from ..helpers import console, get_context, handle_errors, info, success

PHASE_MESSAGES = {
    BackupPhase.STOPPING_SERVICES: "Stopping services...",
    BackupPhase.COPYING_VOLUMES: "Copying data directories...",
    BackupPhase.ARCHIVING: "Compressing backup...",
    BackupPhase.RESTARTING_SERVICES: "Restarting services...",
}


def _on_phase(phase: BackupPhase) -> None:
    if phase in PHASE_MESSAGES:
        info(PHASE_MESSAGES[phase])


@click.command()
@click.option('--yes', '-y', is_flag=True, help='Skip confirmation prompt')
@handle_errors
def backup(yes):
    """Stop services, archive their data, and start them again"""
    context = get_context()
    definitions = list(context.services.values())

    if not yes:
        if not Confirm.ask("Services will be stopped during the backup. Continue?"):
            console.print("[yellow]Cancelled[/yellow]")
            return

    manager = BackupManager(context.lifecycle(), context.config.install_path, on_phase=_on_phase)
    archive = manager.run(definitions)
    success(f"Backup written to {archive.output_path}")
    click.echo(f"Included {len(archive.included_volumes)} director(ies):")
    for path in archive.included_volumes:
        click.echo(f"  - {path}")


@click.command()
@handle_errors
def backups():
    """List existing backup archives"""
    context = get_context()
    # Listing is a pure file operation; it never needs Docker.
    manager = BackupManager(None, context.config.install_path)
    archives = manager.list_backups()

    if not archives:
        console.print("[yellow]No backups found.[/yellow]")
        console.print("Use 'rag-workshop backup' to create one.")
        return

    table = Table(title="Workshop Backups")
    table.add_column("Archive", style="cyan", no_wrap=True)
    table.add_column("Size", style="green", justify="right")
    table.add_column("Modified", style="white")

    for archive in archives:
        stat = archive.stat()
        table.add_row(
            archive.name,
            f"{stat.st_size / (1024 * 1024):.1f} MB",
            datetime.fromtimestamp(stat.st_mtime).strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)
