"""
Download plans and dependency states.
"""

import pathlib
from typing import Optional

from multiruntime.runtime_models import Artifact


class DownloadStatus:
    """Enumeration of download statuses."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class DownloadPlan:
    """
    A plan to download a specific artifact.

    Captures all information needed to download and extract it.
    """

    def __init__(
            self,
            dependency_key: str,
            artifact: Artifact,
            destination_path: pathlib.Path,
            status: str = DownloadStatus.PENDING,
    ):
        """
        Initialize a download plan.

        Args:
            dependency_key: Unique key for the download, e.g. "node.20.1.0.linux-x64"
            artifact: The chosen artifact
            destination_path: Where to extract the runtime
            status: Current download status
        """
        self.dependency_key = dependency_key
        self.artifact = artifact
        self.url = artifact.url
        self.archive_type = artifact.extension or "tar.gz"
        self.destination_path = pathlib.Path(destination_path)
        self.status = status
        self.error_message: Optional[str] = None

    @classmethod
    def for_artifact(cls, runtime: str, platform_id: str, artifact: Artifact, base_path: pathlib.Path) -> "DownloadPlan":
        """
        Plan the download of {artifact} into its own subdirectory of {base_path}.

        Each runtime gets a disjoint subtree: <base>/<runtime>/<version>-<platform id>
        """
        version = artifact.version.lstrip("vV")
        return cls(
            dependency_key=f"{runtime}.{version}.{platform_id}",
            artifact=artifact,
            destination_path=pathlib.Path(base_path) / runtime / f"{version}-{platform_id}",
        )

    def is_satisfied(self) -> bool:
        """Whether the destination already holds an unpacked runtime."""
        return self.destination_path.is_dir() and any(self.destination_path.iterdir())

    def __repr__(self) -> str:
        return (
            f"DownloadPlan(key={self.dependency_key}, "
            f"status={self.status}, url={self.url})"
        )


class DependencyState:
    """
    Current state of a download.

    Tracks whether a runtime has been downloaded and where it's located.
    """

    def __init__(
            self,
            dependency_key: str,
            download_status: str,
            downloaded_path: Optional[pathlib.Path] = None,
            error_message: Optional[str] = None,
    ):
        self.dependency_key = dependency_key
        self.download_status = download_status
        self.downloaded_path = downloaded_path
        self.error_message = error_message

    def is_downloaded(self) -> bool:
        """Check if the runtime has been successfully downloaded."""
        return self.download_status == DownloadStatus.COMPLETED

    def __repr__(self) -> str:
        return (
            f"DependencyState(key={self.dependency_key}, "
            f"status={self.download_status}, path={self.downloaded_path})"
        )
