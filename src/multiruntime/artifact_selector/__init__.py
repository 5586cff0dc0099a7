"""
Artifact selection.

Routes a (runtime, target) pair to exactly one provider and picks one artifact
from that provider's catalog.
"""

from .routing import ProviderRoute, PROVIDER_ROUTES, route
from .selector import (
    ArtifactSelector,
    FirstMatchSelector,
    VersionedListingSelector,
)

__all__ = [
    "ProviderRoute",
    "PROVIDER_ROUTES",
    "route",
    "ArtifactSelector",
    "FirstMatchSelector",
    "VersionedListingSelector",
]
