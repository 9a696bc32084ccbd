"""
superenv CLI - named snapshots of your .env file

Main entry point for the superenv command-line tool.
"""

import click
import sys
from rich.console import Console
from rich.table import Table
from rich import box
from rich.markup import escape

from . import __version__
from .core.config import Settings, load_settings
from .core.gitignore import ensure_ignored, GitignoreStatus
from .core.history import HistoryStore
from .core.store import (
    SnapshotStore, StoreError, StoreNotInitialized, WorkingFileMissing,
    InitStatus, CreateStatus, PushStatus, DeleteStatus,
)


console = Console()

project_root_option = click.option(
    '--project-root', default=".", help='Project root directory'
)


def fail(error: StoreError):
    """Report a fatal store error and exit with status 1."""
    console.print(f"[red]Error: {escape(str(error))}[/red]")

    if isinstance(error, StoreNotInitialized):
        console.print("[dim]Run 'superenv init' first.[/dim]")
    elif isinstance(error, WorkingFileMissing):
        console.print("[dim]Create the file before pushing it to a snapshot.[/dim]")

    sys.exit(1)


def record(settings: Settings, action: str, name: str, outcome: str):
    """Append an operation to the activity log if history is enabled."""
    if not settings.record_history:
        return
    HistoryStore(settings.store_root).record(action, name, outcome)


@click.group()
@click.version_option(__version__, prog_name="superenv")
def cli():
    """
    superenv - Manage named snapshots of your .env file
    """


@cli.command()
@click.argument('name')
def greet(name):
    """Greet the user by name."""
    console.print(f"[green]Hello, {escape(name)}![/green]")


@cli.command()
@project_root_option
def init(project_root):
    """
    Initialize the snapshot store in this project.

    Creates the store directory and makes sure it is listed in .gitignore.
    """
    settings = load_settings(project_root)
    store = SnapshotStore(settings.store_root)

    try:
        status = store.initialize()
    except StoreError as e:
        fail(e)

    if status == InitStatus.CREATED:
        console.print(f"[green]✓ Created {escape(settings.store_dir)} at {escape(str(settings.store_root))}[/green]")
    else:
        console.print(f"[yellow]{escape(settings.store_dir)} already exists at {escape(str(settings.store_root))}[/yellow]")

    gitignore_status = ensure_ignored(settings.gitignore_path, settings.store_dir)

    if gitignore_status == GitignoreStatus.CREATED:
        console.print(f"[green]✓ Created .gitignore with {escape(settings.store_dir)}[/green]")
    elif gitignore_status == GitignoreStatus.ADDED:
        console.print(f"[green]✓ Added {escape(settings.store_dir)} to .gitignore[/green]")
    else:
        console.print(f"[yellow]{escape(settings.store_dir)} is already listed in .gitignore[/yellow]")


@cli.command(name="list")
@project_root_option
def list_snapshots(project_root):
    """List all environment snapshots."""
    settings = load_settings(project_root)
    store = SnapshotStore(settings.store_root)

    try:
        names = sorted(store.list())
    except StoreError as e:
        fail(e)

    if not names:
        console.print("[yellow]No snapshots yet[/yellow]")
        console.print("[dim]Run 'superenv create NAME' to add one.[/dim]")
        return

    table = Table(title="Environment Snapshots", box=box.ROUNDED)
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("File", style="blue")

    for name in names:
        table.add_row(escape(name), escape(store.path_for(name).name))

    console.print(table)


@cli.command()
@click.argument('env_name')
@project_root_option
def create(env_name, project_root):
    """
    Create a new environment snapshot.

    The snapshot starts with a placeholder comment. An existing snapshot
    with the same name is left untouched.
    """
    settings = load_settings(project_root)
    store = SnapshotStore(settings.store_root)

    try:
        status = store.create(env_name)
    except StoreError as e:
        fail(e)

    record(settings, "create", env_name, status.value)

    if status == CreateStatus.CREATED:
        console.print(f"[green]✓ Created snapshot '{escape(env_name)}'[/green]")
    else:
        console.print(f"[yellow]Snapshot '{escape(env_name)}' already exists[/yellow]")


@cli.command()
@click.argument('env_name')
@click.option('--yes', '-y', is_flag=True, help='Overwrite without asking')
@project_root_option
def push(env_name, yes, project_root):
    """
    Push the working .env file into a snapshot.

    Asks before replacing a snapshot whose content differs.
    """
    settings = load_settings(project_root)
    store = SnapshotStore(settings.store_root)

    def confirm(name: str) -> bool:
        if yes:
            return True
        return click.confirm(
            f"Snapshot '{name}' differs from {settings.env_file}. Overwrite it?",
            default=False
        )

    try:
        status = store.push(env_name, settings.env_path, confirm)
    except StoreError as e:
        fail(e)

    record(settings, "push", env_name, status.value)

    if status == PushStatus.CREATED:
        console.print(f"[green]✓ Created snapshot '{escape(env_name)}' from {escape(settings.env_file)}[/green]")
    elif status == PushStatus.OVERWRITTEN:
        console.print(f"[green]✓ Updated snapshot '{escape(env_name)}' from {escape(settings.env_file)}[/green]")
    elif status == PushStatus.UNCHANGED:
        console.print(f"[yellow]Snapshot '{escape(env_name)}' is already up to date[/yellow]")
    else:
        console.print(f"[yellow]Push aborted - snapshot '{escape(env_name)}' left unchanged[/yellow]")


@cli.command()
@click.argument('env_name')
@project_root_option
def show(env_name, project_root):
    """Print the content of a snapshot."""
    settings = load_settings(project_root)
    store = SnapshotStore(settings.store_root)

    try:
        content = store.read(env_name)
    except StoreError as e:
        fail(e)

    # Plain echo so snapshot text is never read as rich markup
    click.echo(content, nl=False)


@cli.command()
@click.argument('env_name')
@click.option('--yes', '-y', is_flag=True, help='Delete without asking')
@project_root_option
def delete(env_name, yes, project_root):
    """Delete an environment snapshot."""
    settings = load_settings(project_root)
    store = SnapshotStore(settings.store_root)

    try:
        if store.is_initialized() and store.exists(env_name) and not yes:
            if not click.confirm(f"Delete snapshot '{env_name}'?", default=False):
                console.print(f"[yellow]Snapshot '{escape(env_name)}' kept[/yellow]")
                return

        status = store.delete(env_name)
    except StoreError as e:
        fail(e)

    record(settings, "delete", env_name, status.value)

    if status == DeleteStatus.DELETED:
        console.print(f"[green]✓ Deleted snapshot '{escape(env_name)}'[/green]")
    else:
        console.print(f"[yellow]Snapshot '{escape(env_name)}' does not exist[/yellow]")


@cli.command()
@click.argument('env_name', required=False)
@project_root_option
def history(env_name, project_root):
    """Show recorded snapshot activity."""
    settings = load_settings(project_root)
    store = SnapshotStore(settings.store_root)

    if not store.is_initialized():
        fail(StoreNotInitialized(settings.store_root))

    entries = HistoryStore(settings.store_root).entries(env_name)

    if not entries:
        console.print("[yellow]No activity recorded[/yellow]")
        return

    table = Table(title="Snapshot Activity", box=box.ROUNDED)
    table.add_column("When", style="dim", no_wrap=True)
    table.add_column("Action", style="magenta")
    table.add_column("Snapshot", style="cyan")
    table.add_column("Outcome", style="green")
    table.add_column("User", style="yellow")

    for entry in entries:
        table.add_row(entry.timestamp, entry.action, escape(entry.snapshot), entry.outcome, escape(entry.user))

    console.print(table)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
