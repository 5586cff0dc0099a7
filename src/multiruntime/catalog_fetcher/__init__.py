"""
Provider catalog fetching.

This package retrieves the raw upstream catalogs (JSON listings, HTML release
tables) that the catalog normalizers turn into artifacts.
"""

from .fetcher import CatalogFetcher, CATALOG_ENDPOINTS

__all__ = ["CatalogFetcher", "CATALOG_ENDPOINTS"]
