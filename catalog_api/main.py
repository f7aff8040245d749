from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Dict, Optional

import typer
import uvicorn

from catalog_api.config import get_settings
from catalog_api.errors import CatalogError
from catalog_api.query.params import parse_query_parameters
from catalog_api.query.pipeline import execute
from catalog_api.reporter import print_results
from catalog_api.store.memory import InMemoryProductStore
from catalog_api.utils.logging import configure_logging

app = typer.Typer(help="Product Catalog API CLI.")


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    seed = settings.seed_file or ("samples" if settings.seed_sample_data else "empty")
    typer.echo(
        f"env={settings.app_env} | listen={settings.host}:{settings.port} | "
        f"api_key={'set' if settings.api_key else 'unset'} | "
        f"max_page_limit={settings.max_page_limit} | seed={seed} | log_level={settings.log_level}"
    )


@app.command()
def serve(
    host: Optional[str] = typer.Option(
        None, "--host", help="Bind address (default from settings)."
    ),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (default from settings)."),
) -> None:
    """
    Serve the HTTP API with uvicorn.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)
    uvicorn.run(
        "catalog_api.api.app:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        log_config=None,
    )


@app.command()
def query(
    search: Optional[str] = typer.Option(None, "--search", "-q", help="Free-text search."),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Exact category."),
    in_stock: Optional[bool] = typer.Option(
        None, "--in-stock/--out-of-stock", help="Filter by stock status."
    ),
    min_price: Optional[float] = typer.Option(None, "--min-price", help="Minimum price."),
    max_price: Optional[float] = typer.Option(None, "--max-price", help="Maximum price."),
    sort_by: Optional[str] = typer.Option(
        None, "--sort-by", "-s", help="Sort field (e.g., price, name, createdAt)."
    ),
    sort_order: str = typer.Option("asc", "--sort-order", help="asc or desc."),
    page: int = typer.Option(1, "--page", help="Page number (1-based)."),
    limit: int = typer.Option(10, "--limit", "-l", help="Page size."),
    seed_file: Optional[Path] = typer.Option(
        None, "--seed-file", help="Query this JSON seed file instead of the configured data."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result envelope."),
) -> None:
    """
    Run one query against the seeded in-memory store and print the result.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)
    if seed_file is not None:
        settings = settings.model_copy(update={"seed_file": seed_file})

    raw: Dict[str, str] = {"sortOrder": sort_order, "page": str(page), "limit": str(limit)}
    optional = {
        "search": search,
        "category": category,
        "inStock": None if in_stock is None else str(in_stock).lower(),
        "minPrice": None if min_price is None else str(min_price),
        "maxPrice": None if max_price is None else str(max_price),
        "sortBy": sort_by,
    }
    raw.update({key: value for key, value in optional.items() if value is not None})

    try:
        store = InMemoryProductStore.from_settings(settings)
        result = execute(
            store.snapshot(), parse_query_parameters(raw, max_limit=settings.max_page_limit)
        )
    except CatalogError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    if as_json:
        typer.echo(json.dumps(result.model_dump(mode="json", by_alias=True), indent=2))
    else:
        print_results(result)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
