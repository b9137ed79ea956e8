"""Commands: gatekeeper init-db / seed / assign - prepare the permission schema."""

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from gatekeeper.commands.utils import DatabaseUrlOption, engine_scope, session_scope
from gatekeeper.core.errors import NotFoundError, ValidationError
from gatekeeper.core.permissions.seed import SeedReport, assign_role, seed_permissions
from gatekeeper.models import Base


console = Console()


async def _create_tables(database_url: str | None) -> None:
    async with engine_scope(database_url) as engine:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)


async def _seed(database_url: str | None) -> SeedReport:
    async with session_scope(database_url) as session:
        return await seed_permissions(session)


async def _assign(database_url: str | None, user_id: str, role: str) -> bool:
    async with session_scope(database_url) as session:
        return await assign_role(session, user_id, role)


def init_db(database_url: str | None = DatabaseUrlOption) -> None:
    """Create the user, role and permission tables if they are missing."""
    asyncio.run(_create_tables(database_url))
    console.print("[green]✓[/green] Database tables created")


def seed(database_url: str | None = DatabaseUrlOption) -> None:
    """Seed the default permission catalog and roles.

    Safe to run repeatedly; existing permissions and roles are kept.
    """
    try:
        report = asyncio.run(_seed(database_url))
    except ValidationError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        for error in e.details.get("errors", []):
            console.print(f"  - {error['message']}")
        raise typer.Exit(1)

    if not report.changed:
        console.print("[yellow]Nothing to seed.[/yellow] Catalog is up to date.")
        return

    table = Table(title="Seeded", show_header=True)
    table.add_column("Kind", style="cyan", no_wrap=True)
    table.add_column("Count", style="green", justify="right")
    table.add_row("Permissions", str(len(report.permissions_created)))
    table.add_row("Roles", str(len(report.roles_created)))
    table.add_row("Role grants", str(len(report.grants_created)))

    console.print()
    console.print(table)
    console.print()


def assign(
    user_id: str = typer.Argument(..., help="ID of the user"),
    role: str = typer.Argument(..., help="Name of the role to assign"),
    database_url: str | None = DatabaseUrlOption,
) -> None:
    """Assign a role to a user."""
    try:
        created = asyncio.run(_assign(database_url, user_id, role))
    except NotFoundError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)

    if created:
        console.print(f"[green]✓[/green] Assigned role '{role}' to {user_id}")
    else:
        console.print(f"[yellow]Role '{role}' already assigned to {user_id}.[/yellow]")
