from __future__ import annotations

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from catalog_api.domain.query import QueryResult


def _describe_filters(result: QueryResult) -> str:
    filters = result.echoed_filters.model_dump(by_alias=True, exclude_none=True, mode="json")
    return ", ".join(f"{key}={value}" for key, value in filters.items())


def build_table(result: QueryResult) -> Table:
    """
    Build a rich table for one page of a query result.

    The caption carries the pagination metadata and the effective filters.
    """
    pagination = result.pagination
    caption = (
        f"Page {pagination.current_page}/{pagination.total_pages} │ "
        f"{pagination.total_records} matching product(s)"
    )
    filters = _describe_filters(result)
    if filters:
        caption = f"{caption}\n[dim]{filters}[/dim]"

    table = Table(title="Products", box=box.ROUNDED, caption=caption)
    table.add_column("ID", justify="right", style="cyan", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Category", style="magenta")
    table.add_column("Price", justify="right", style="green")
    table.add_column("In Stock", justify="center")
    table.add_column("Qty", justify="right", style="yellow")
    table.add_column("Updated", style="dim")

    for product in result.data:
        table.add_row(
            str(product.id),
            product.name,
            product.category,
            f"{product.price:,.2f}",
            "[green]yes[/green]" if product.in_stock else "[red]no[/red]",
            f"{product.stock_quantity:,}",
            product.updated_at.strftime("%Y-%m-%d %H:%M"),
        )
    return table


def print_results(result: QueryResult, console: Optional[Console] = None) -> None:
    """Render a query result, or a notice when the page is empty."""
    console = console or Console()
    if not result.data:
        console.print(
            f"[yellow]No products on page {result.pagination.current_page} "
            f"({result.pagination.total_records} matching).[/yellow]"
        )
        return
    console.print(build_table(result))
