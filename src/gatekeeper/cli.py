"""Main gatekeeper CLI application."""

import typer
from rich.console import Console

from gatekeeper import __version__
from gatekeeper.commands import check, db
from gatekeeper.config import settings
from gatekeeper.core.logging import configure_logging


console = Console()

app = typer.Typer(
    name="gatekeeper",
    help="Inspect and seed role-based permissions.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register commands
app.command(name="init-db")(db.init_db)
app.command(name="seed")(db.seed)
app.command(name="assign")(db.assign)
app.command(name="check")(check.check)


@app.callback(invoke_without_command=True)
def version_callback(
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit."
    ),
) -> None:
    """Gatekeeper CLI - Inspect and seed role-based permissions."""
    if version:
        console.print(f"[bold cyan]gatekeeper[/bold cyan] version {__version__}")
        raise typer.Exit()

    configure_logging(settings)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
