"""
Catalog normalization.

One normalizer per upstream catalog shape. Each turns the raw text returned by
the catalog fetcher into an ordered list of Artifact objects, preserving the
provider's ordering.
"""

from .base import CatalogNormalizer
from .azul import AzulNormalizer, AZUL_ARCHITECTURES
from .node_official import NodeReleaseTableNormalizer
from .node_unofficial import NodeIndexNormalizer
from .node_files import (
    OFFICIAL_SUFFIXES,
    UNOFFICIAL_SUFFIXES,
    official_suffix,
    unofficial_suffix,
)

__all__ = [
    "CatalogNormalizer",
    "AzulNormalizer",
    "AZUL_ARCHITECTURES",
    "NodeReleaseTableNormalizer",
    "NodeIndexNormalizer",
    "OFFICIAL_SUFFIXES",
    "UNOFFICIAL_SUFFIXES",
    "official_suffix",
    "unofficial_suffix",
]
