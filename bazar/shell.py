"""
Interactive Shell Mode.

Menu-driven REPL for the Bazar.com client. One command runs to completion,
post-purchase cache invalidation included, before the next prompt appears.
"""

import asyncio
from collections.abc import Awaitable, Callable

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from bazar.models import BookDetail, BookSummary
from bazar.services.errors import ServiceError
from bazar.session import ClientSession

console = Console()


def _origin_label(origin: str | None) -> str:
    return "from cache" if origin is None else f"from {origin}"


def render_books(books: list[BookSummary], origin: str | None) -> None:
    """Print search results as a table."""
    if not books:
        console.print(f"[yellow]No books found for that topic ({_origin_label(origin)}).[/yellow]")
        return

    table = Table(title=f"Books found ({_origin_label(origin)})", show_header=True)
    table.add_column("Item", style="cyan", justify="right")
    table.add_column("Title")
    for book in books:
        table.add_row(str(book.item_number), book.title)
    console.print(table)


def render_book(book: BookDetail, origin: str | None) -> None:
    """Print one book's details as a table."""
    table = Table(title=f"Book info ({_origin_label(origin)})", show_header=True)
    table.add_column("Item", style="cyan", justify="right")
    table.add_column("Title")
    table.add_column("Topic")
    table.add_column("Price", justify="right")
    table.add_column("Stock", justify="right")
    table.add_row(
        str(book.item_number),
        book.title,
        book.topic,
        f"{book.price:.2f}",
        str(book.stock),
    )
    console.print(table)


def _parse_item_number(raw: str) -> int | None:
    try:
        return int(raw.strip())
    except ValueError:
        console.print("[red]Invalid item number.[/red]")
        return None


class InteractiveShell:
    """
    Interactive shell for the book store.

    Usage:
        async with ClientSession.from_settings(global_settings) as session:
            await InteractiveShell(session).run()
    """

    def __init__(self, session: ClientSession) -> None:
        self.session = session
        self.running = False
        self.commands: dict[str, Callable[[], Awaitable[None]]] = {
            "1": self._cmd_search,
            "2": self._cmd_info,
            "3": self._cmd_purchase,
            "4": self._cmd_quit,
        }

    async def run(self) -> None:
        """Run the interactive shell."""
        self.running = True

        console.print(Panel(
            "[bold cyan]Welcome to BAZAR.COM[/bold cyan]\n"
            "[green]Your gateway to the world of books![/green]",
            border_style="magenta",
        ))

        while self.running:
            try:
                self._show_menu()
                option = console.input("[magenta]\nChoose an option (1-4): [/magenta]").strip()

                command = self.commands.get(option)
                if command is None:
                    console.print("[red]Invalid option. Try again.[/red]")
                    continue

                await command()

            except ServiceError as e:
                console.print(f"[red]Error:[/red] {e}")
            except (KeyboardInterrupt, EOFError, asyncio.CancelledError):
                # Ctrl-C / Ctrl-D at the prompt, or a cancelled command
                console.print()
                break

        console.print("[green]\nThank you for visiting Bazar.com![/green]")

    def _show_menu(self) -> None:
        console.print("[bold yellow]\nWhat would you like to do?[/bold yellow]")
        console.print("[cyan]1.[/cyan] Search for books by topic")
        console.print("[cyan]2.[/cyan] Get info about a book")
        console.print("[cyan]3.[/cyan] Purchase a book")
        console.print("[cyan]4.[/cyan] Exit")

    async def _cmd_search(self) -> None:
        topic = console.input("[yellow]Enter the topic: [/yellow]").strip()
        books = await self.session.catalog.search(topic)
        render_books(books, self.session.catalog.last_origin)

    async def _cmd_info(self) -> None:
        item_number = _parse_item_number(
            console.input("[yellow]Enter the item number of the book: [/yellow]")
        )
        if item_number is None:
            return
        book = await self.session.catalog.info(item_number)
        render_book(book, self.session.catalog.last_origin)

    async def _cmd_purchase(self) -> None:
        item_number = _parse_item_number(
            console.input("[yellow]Enter the item number to purchase: [/yellow]")
        )
        if item_number is None:
            return
        confirmation = await self.session.orders.purchase(item_number)
        console.print(f"[bold green]\n{confirmation.message}[/bold green]")

    async def _cmd_quit(self) -> None:
        self.running = False
