"""Python client for the live catalog: shared change stream plus reconciled lists."""

from .catalog_client import CatalogClient
from .connection import CatalogConnection, CatalogStreamError, iter_sse_events
from .reconciliation import ListStatus, LiveProductList, ProductListView, reconcile

__all__ = [
    "CatalogClient",
    "CatalogConnection",
    "CatalogStreamError",
    "iter_sse_events",
    "ListStatus",
    "LiveProductList",
    "ProductListView",
    "reconcile",
]
