"""
Runtime models for multiruntime.

This package provides the Pydantic data models shared by every stage of the
resolution pipeline: the target platform, the normalized artifact, version
constraints and the raw upstream catalog records.
"""

from .target import (
    Arch,
    Os,
    TargetDescriptor,
    Variant,
)
from .artifact import (
    Artifact,
    Catalog,
    Download,
    Provider,
    VersionConstraint,
    parse_version,
)
from .catalogs import (
    AzulBundle,
    Lts,
    LtsFlag,
    LtsName,
    NodeRelease,
)

__all__ = [
    # Target
    "Arch",
    "Os",
    "TargetDescriptor",
    "Variant",
    # Artifacts
    "Artifact",
    "Catalog",
    "Download",
    "Provider",
    "VersionConstraint",
    "parse_version",
    # Upstream records
    "AzulBundle",
    "Lts",
    "LtsFlag",
    "LtsName",
    "NodeRelease",
]
