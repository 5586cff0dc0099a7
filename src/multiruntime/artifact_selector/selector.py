"""
Selection strategies.

Both strategies are pure functions of (catalog, target, constraint): they only
filter, keep the catalog order and never fall back to a near match.
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from multiruntime.multiruntime_exceptions import UnsupportedTarget
from multiruntime.runtime_models import Artifact, Catalog, Os, TargetDescriptor, VersionConstraint


class ArtifactSelector(ABC):
    """
    Filters a catalog down to the artifacts usable for a target.
    """

    def check_target(self, target: TargetDescriptor) -> None:
        """
        Fail early for targets this provider never builds for.

        Raises:
            UnsupportedTarget: If the provider has no builds for {target}
        """

    @abstractmethod
    def candidates(
        self,
        catalog: Catalog,
        target: TargetDescriptor,
        constraint: Optional[VersionConstraint] = None,
    ) -> List[Artifact]:
        """Usable artifacts for {target}, in catalog order."""

    def select(
        self,
        catalog: Catalog,
        target: TargetDescriptor,
        constraint: Optional[VersionConstraint] = None,
    ) -> Artifact:
        """
        Returns the first usable artifact.

        Raises:
            UnsupportedTarget: If no artifact is usable for {target}
        """
        candidates = self.candidates(catalog, target, constraint)
        if not candidates:
            requirement = f" matching {constraint}" if constraint is not None else ""
            raise UnsupportedTarget(f"No build{requirement} available for {target}")
        return candidates[0]


class FirstMatchSelector(ArtifactSelector):
    """
    Single-best-match: the first artifact whose os, arch, archive extension and
    libc variant all match the target.
    """

    def candidates(self, catalog, target, constraint=None):
        extension = "zip" if target.os == Os.WINDOWS else "tar.gz"
        return [
            artifact
            for artifact in catalog
            if artifact.os == target.os
            and artifact.arch == target.arch
            and artifact.extension == extension
            and artifact.musl == target.is_musl
        ]


class VersionedListingSelector(ArtifactSelector):
    """
    Versioned listing: artifacts published under the target's file suffix,
    optionally restricted to versions allowed by a constraint. On a listing
    sorted newest first the first candidate is the highest allowed version.
    """

    def __init__(self, suffix_for: Callable[[TargetDescriptor], str]):
        """
        Args:
            suffix_for: Maps a target to its file suffix, raising UnsupportedTarget
                for platforms the provider does not build for
        """
        self.suffix_for = suffix_for

    def check_target(self, target):
        self.suffix_for(target)

    def candidates(self, catalog, target, constraint=None):
        suffix = self.suffix_for(target)
        return [
            artifact
            for artifact in catalog
            if artifact.suffix == suffix and (constraint is None or constraint.allows(artifact.version))
        ]
