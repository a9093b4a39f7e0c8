"""Main CLI application module."""

import typer

from .catalog_commands import catalog_app

app = typer.Typer(
    help="Lending catalog administration",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(catalog_app, name="books")


@app.command("init-db")
def init_db_command() -> None:
    """Create tables and seed category counters."""
    from src.lending.runtime.init_db import init_db

    init_db()
    typer.echo("Database initialized")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
