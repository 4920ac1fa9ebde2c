# cli.py - interactive catalog CLI with autocomplete
import argparse
import os
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from catalog_sdk import CatalogAPIError, CatalogClient

console = Console()

status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Products Catalog",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=12)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=15)
    table.add_column("In stock", justify="center", width=9)
    table.add_column("Description", width=30)

    for p in products:
        stock = "[green]yes[/green]" if p.get("inStock") else "[red]no[/red]"
        table.add_row(
            p.get("id", "N/A"),
            p.get("name", "N/A"),
            f"${p.get('price', 0):.2f}",
            p.get("category", "N/A"),
            stock,
            p.get("description", "")
        )
    console.print(table)


def show_page(result: Dict[str, Any]):
    show_products(result.get("products", []))
    console.print(
        f"[dim]page {result.get('page')} of {result.get('totalPages')} "
        f"({result.get('total')} matching)[/dim]"
    )


def show_stats(stats: Dict[str, int]):
    if not stats:
        console.print("[italic yellow]Catalog is empty[/italic yellow]")
        return

    table = Table(title="📊 Products per category", box=box.ROUNDED, header_style="bold yellow")
    table.add_column("Category", width=20)
    table.add_column("Count", justify="right", width=8)
    for category, count in sorted(stats.items()):
        table.add_row(category, str(count))
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    API and connection errors update status_message and return None.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
            console=console,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)
    except CatalogAPIError as e:
        status_message = f"Error: {e.message} ({e.status_code})"
        console.print(show_status(status_message, False))
        return None
    except Exception as e:
        status_message = f"Error: {e}"
        console.print(show_status(status_message, False))
        return None

    if success_msg:
        status_message = success_msg
        console.print(show_status(success_msg, True))
    return result


# ---------------------------
# Input helpers
# ---------------------------
def get_product_completer(client: CatalogClient):
    global product_cache
    if not product_cache:
        page = try_api(client.list_products, limit=100) or {}
        product_cache = page.get("products", [])

    names = [p.get("name", "") for p in product_cache]
    ids = [p.get("id", "") for p in product_cache]
    return WordCompleter([n for n in (names + ids) if n], ignore_case=True)


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_product_fields(existing: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    existing = existing or {}
    return {
        "name": prompt_with_autocomplete("Product name", default=existing.get("name", "")),
        "price": ask_float("💰 Price", default=existing.get("price", 10.0)),
        "category": prompt_with_autocomplete("🏷️ Category", default=existing.get("category", "")),
        "description": prompt_with_autocomplete("Description", default=existing.get("description", "")),
        "in_stock": Confirm.ask("In stock?", default=existing.get("inStock", True)),
    }


def create_header(client: CatalogClient):
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        f"🛍️ {client.base_url}",
        "[bold blue]Product Catalog CLI[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Main menu
# ---------------------------
def menu(client: CatalogClient):
    global product_cache

    console.clear()
    console.print(create_header(client))

    while True:
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "5", "➕ Create product"),
            ("2", "🔍 Search products", "6", "✏️ Update product"),
            ("3", "ℹ️ Get product by ID", "7", "🗑️ Delete product"),
            ("4", "📊 Category stats", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 8)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            category = prompt_with_autocomplete("Category filter (blank for all)").strip()
            page = IntPrompt.ask("Page", default=1)
            limit = IntPrompt.ask("Per page", default=10)
            result = try_api(client.list_products, category=category or None, page=page, limit=limit)
            if result is not None:
                show_page(result)

        elif choice == "2":
            term = prompt_with_autocomplete("Enter search term")
            res = try_api(client.search_products, term, success_msg=f"Search for '{term}' completed")
            if res is not None:
                show_products(res)

        elif choice == "3":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer(client))
            resp = try_api(client.get_product, pid)
            if resp:
                show_products([resp])

        elif choice == "4":
            stats = try_api(client.stats)
            if stats is not None:
                show_stats(stats)

        elif choice == "5":
            fields = ask_product_fields()
            resp = try_api(
                client.create_product, **fields,
                success_msg=f"Product '{fields['name']}' created"
            )
            if resp:
                show_products([resp])
                product_cache = []

        elif choice == "6":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer(client))
            current = try_api(client.get_product, pid)
            if current:
                fields = ask_product_fields(current)
                resp = try_api(client.update_product, pid, **fields, success_msg=f"Product {pid} updated")
                if resp:
                    show_products([resp])
                    product_cache = []

        elif choice == "7":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer(client))
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                try_api(client.delete_product, pid, success_msg=f"Product {pid} deleted")
                product_cache = []

        elif choice.lower() in ("q", "quit", "exit"):
            console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
            return

        console.print()
        console.rule(style="dim")


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Product catalog CLI")
    parser.add_argument("--base-url", default=os.getenv("CATALOG_URL", "http://127.0.0.1:3000"))
    parser.add_argument("--api-key", default=os.getenv("API_KEY"), help="Sent as x-api-key on writes")
    args = parser.parse_args(argv)

    client = CatalogClient(base_url=args.base_url, api_key=args.api_key)
    try:
        menu(client)
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
