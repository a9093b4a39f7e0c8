"""Book intake and inspection commands."""

import typer
from rich.console import Console
from rich.table import Table

from src.lending.core.exceptions import CatalogError
from src.lending.core.services import DbSessionService
from src.lending.core.services.catalog import (
    BookIntakeTransaction,
    CatalogQueryService,
    CategoryTable,
    NewBookInput,
)

console = Console()

catalog_app = typer.Typer(help="Register and inspect books")


def get_db_service() -> DbSessionService:
    return DbSessionService()


@catalog_app.command("categories")
def list_categories() -> None:
    """Show category ids and their call-sign prefixes."""
    categories = CategoryTable.from_config()
    table = Table(title="Categories")
    table.add_column("ID", style="cyan")
    table.add_column("Prefix", style="green")
    table.add_column("Name")
    for category_id in categories.ids():
        table.add_row(
            str(category_id),
            categories.prefix_for(category_id),
            categories.name_for(category_id),
        )
    console.print(table)


@catalog_app.command("intake")
def intake_book(
    title: str = typer.Option(..., "--title", "-t", help="Book title"),
    category_id: int = typer.Option(..., "--category", "-c", help="Category id"),
    pubdate: str = typer.Option(..., "--pubdate", "-p", help="Publication date, e.g. 2021-05-01"),
    donator: str = typer.Option(..., "--donator", "-d", help="Donator nickname"),
    isbn: str = typer.Option("", "--isbn", help="ISBN"),
    author: str | None = typer.Option(None, "--author", "-a", help="Author"),
    publisher: str | None = typer.Option(None, "--publisher", help="Publisher"),
) -> None:
    """Register a donated copy and print its call sign."""
    book = NewBookInput(
        isbn=isbn,
        title=title,
        author=author,
        publisher=publisher,
        category_id=category_id,
        pubdate=pubdate,
        donator=donator,
    )
    try:
        result = BookIntakeTransaction(get_db_service()).intake(book)
    except CatalogError as e:
        console.print(f"[red]❌ {e.code}: {e.message}[/red]")
        raise typer.Exit(code=1) from e
    console.print(f"[green]✅ Registered {result.call_sign}[/green]")


@catalog_app.command("show")
def show_title(
    title_id: str = typer.Argument(..., help="Book info id"),
) -> None:
    """Show a title and the circulation state of each copy."""
    db_service = get_db_service()
    try:
        with db_service.session_scope() as session:
            detail = CatalogQueryService(session).get_title_detail(title_id)
    except CatalogError as e:
        console.print(f"[red]❌ {e.code}: {e.message}[/red]")
        raise typer.Exit(code=1) from e

    table = Table(title=f"{detail.title} ({detail.category or '?'})")
    table.add_column("Call sign", style="cyan")
    table.add_column("Donator")
    table.add_column("Lendable", style="green")
    table.add_column("Reserved", style="yellow")
    table.add_column("Due")
    for copy in detail.copies:
        table.add_row(
            copy.call_sign,
            copy.donator or "",
            "✅" if copy.lendable else "❌",
            "✅" if copy.reserved else "❌",
            copy.due_date.date().isoformat() if copy.due_date else "-",
        )
    console.print(table)
