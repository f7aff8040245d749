"""
Store package for the Product Catalog API.

Owns the live product collection and hands snapshots to the query engine.
Keep this layer focused on ownership and mutation, decoupled from querying.
"""

from catalog_api.store.abstract import AbstractProductStore, ProductStore, SnapshotSource
from catalog_api.store.memory import InMemoryProductStore
from catalog_api.store.seed import SAMPLE_PRODUCTS, initial_products, load_seed_file

__all__ = [
    "AbstractProductStore",
    "InMemoryProductStore",
    "ProductStore",
    "SAMPLE_PRODUCTS",
    "SnapshotSource",
    "initial_products",
    "load_seed_file",
]
