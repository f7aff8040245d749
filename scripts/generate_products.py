"""
Seed data generation script for the Product Catalog API.

Writes a deterministic pseudo-random catalog as a JSON array of products
(camelCase keys) that the service loads through SEED_FILE or the CLI's
`query --seed-file`.
"""

from __future__ import annotations

import json
import random
import sys
import time
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any, Dict, List

import typer

app = typer.Typer(help="Generate a synthetic product catalog as a JSON seed file.")

CATEGORIES = ["Electronics", "Accessories", "Home", "Outdoors", "Books"]
ADJECTIVES = ["Wireless", "Compact", "Ergonomic", "Portable", "Premium", "Classic"]
NOUNS = ["Headphones", "Keyboard", "Mouse", "Backpack", "Lamp", "Speaker", "Charger"]
FEATURES = ["long battery life", "noise cancellation", "water resistance", "fast charging"]


def _generate_products(count: int, seed: int) -> List[Dict[str, Any]]:
    rng = random.Random(seed)
    epoch = datetime(2024, 1, 1, tzinfo=UTC)

    products: List[Dict[str, Any]] = []
    for product_id in range(1, count + 1):
        adjective = rng.choice(ADJECTIVES)
        noun = rng.choice(NOUNS)
        stock_quantity = rng.choice([0, rng.randint(1, 500)])
        created_at = epoch + timedelta(minutes=rng.randint(0, 525_600))
        updated_at = created_at + timedelta(minutes=rng.randint(0, 43_200))
        products.append(
            {
                "id": product_id,
                "name": f"{adjective} {noun}",
                "description": f"{adjective} {noun.lower()} with {rng.choice(FEATURES)}",
                "price": round(rng.uniform(1, 1_000), 2),
                "category": rng.choice(CATEGORIES),
                "inStock": stock_quantity > 0,
                "stockQuantity": stock_quantity,
                "createdAt": created_at.isoformat(),
                "updatedAt": updated_at.isoformat(),
            }
        )
    return products


def _write_seed_file(path: Path, products: List[Dict[str, Any]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(products, f, indent=2)


@app.command()
def main(
    count: int = typer.Option(
        1_000,
        "--count",
        "-n",
        help="Number of products to generate.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    output: Path = typer.Option(
        Path("data/products.json"),
        "--output",
        "-o",
        help="Where to write the JSON seed file.",
    ),
) -> None:
    """
    Generate synthetic products and write them as a JSON seed file.
    """
    start = time.perf_counter()
    typer.echo(f"Generating {count:,} products -> {output} (seed={seed})")
    _write_seed_file(output, _generate_products(count, seed))
    duration = time.perf_counter() - start
    typer.echo(f"Seed file written in {duration:.2f}s. Load it with SEED_FILE={output}")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
