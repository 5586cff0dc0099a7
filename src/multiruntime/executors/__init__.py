"""
Runtime executors.

One executor per supported runtime, created through RuntimeExecutor.create.
"""

from .executor import CatalogCache, RuntimeExecutor, default_catalog_cache
from .java import Java
from .node import Node

__all__ = ["CatalogCache", "RuntimeExecutor", "default_catalog_cache", "Java", "Node"]
