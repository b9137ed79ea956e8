"""Command: gatekeeper check - Evaluate permissions for a user."""

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from gatekeeper.commands.utils import DatabaseUrlOption, session_scope
from gatekeeper.core.permissions.checker import PermissionChecker
from gatekeeper.core.permissions.store import SQLAlchemyPermissionStore


console = Console()


async def _evaluate(
    database_url: str | None,
    user_id: str,
    permissions: list[str],
    require_any: bool,
) -> tuple[dict[str, bool], bool]:
    async with session_scope(database_url) as session:
        checker = PermissionChecker(SQLAlchemyPermissionStore(session))

        # One check per permission; the verdict is derived from the rows
        results = {p: await checker.has_permission(user_id, p) for p in permissions}

    granted = results.values()
    return results, any(granted) if require_any else all(granted)


def check(
    user_id: str = typer.Argument(..., help="ID of the user to check"),
    permissions: list[str] = typer.Argument(..., help="Permission names to check"),
    require_any: bool = typer.Option(
        False, "--any", help="Pass if any permission is held (default: all)"
    ),
    database_url: str | None = DatabaseUrlOption,
) -> None:
    """Check whether a user holds permissions.

    Exits with status 1 when the user is denied.
    """
    results, allowed = asyncio.run(
        _evaluate(database_url, user_id, permissions, require_any)
    )

    table = Table(title=f"Permissions for {user_id}", show_header=True)
    table.add_column("Permission", style="cyan", no_wrap=True)
    table.add_column("Granted", no_wrap=True)
    for permission, granted in results.items():
        table.add_row(permission, "[green]yes[/green]" if granted else "[red]no[/red]")

    console.print()
    console.print(table)

    mode = "any" if require_any else "all"
    if allowed:
        console.print(f"[green]✓[/green] Allowed ({mode})")
        return

    console.print(f"[red]✗[/red] Denied ({mode})")
    raise typer.Exit(1)
