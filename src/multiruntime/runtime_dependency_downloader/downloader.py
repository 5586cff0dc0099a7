"""
Dependency downloader implementation.

Handles downloading and extracting chosen runtime artifacts.
"""

import logging
from typing import Callable, Dict, Optional

from multiruntime.multiruntime_exceptions import MultiruntimeException
from multiruntime.multiruntime_logger import MultiruntimeLogger
from multiruntime.multiruntime_utils import FileUtils
from multiruntime.runtime_dependency_downloader.plan import (
    DependencyState,
    DownloadPlan,
    DownloadStatus,
)

ArchiveFetcher = Callable[[MultiruntimeLogger, str, str, str], None]


class DependencyDownloader:
    """
    Downloads and extracts runtime artifacts.

    Executes download plans, manages progress, and records dependency states.
    """

    def __init__(
        self,
        logger: MultiruntimeLogger,
        fetch_archive: Optional[ArchiveFetcher] = None,
    ):
        """
        Initialize the dependency downloader.

        Args:
            logger: Logger for progress and error messages
            fetch_archive: Function downloading {url} and unpacking it into a directory;
                defaults to FileUtils.download_and_extract_archive
        """
        self.logger = logger
        self.fetch_archive = fetch_archive or FileUtils.download_and_extract_archive
        self.dependency_states: Dict[str, DependencyState] = {}

    def download_dependency(self, plan: DownloadPlan) -> DependencyState:
        """
        Download a single artifact, unless its destination is already populated.

        Args:
            plan: The download plan to execute

        Returns:
            The resulting DependencyState

        Raises:
            MultiruntimeException: If the download or the verification failed
        """
        if plan.is_satisfied():
            self.logger.log(f"{plan.dependency_key} already present at {plan.destination_path}", logging.INFO)
            return self.mark_download_completed(plan, success=True)

        try:
            self.logger.log(
                f"Downloading {plan.dependency_key} from {plan.url}",
                logging.INFO,
            )

            plan.status = DownloadStatus.IN_PROGRESS
            plan.destination_path.parent.mkdir(parents=True, exist_ok=True)

            self.fetch_archive(
                self.logger,
                plan.url,
                str(plan.destination_path),
                plan.archive_type,
            )

            if not self._verify_download(plan):
                raise MultiruntimeException(
                    f"Download verification failed for {plan.dependency_key}"
                )

            self.logger.log(
                f"Successfully downloaded {plan.dependency_key} to {plan.destination_path}",
                logging.INFO,
            )
            return self.mark_download_completed(plan, success=True)

        except Exception as e:
            error_msg = f"Failed to download {plan.dependency_key}: {str(e)}"
            self.logger.log(error_msg, logging.ERROR)
            plan.error_message = error_msg
            self.mark_download_completed(plan, success=False)
            if isinstance(e, MultiruntimeException):
                raise
            raise MultiruntimeException(error_msg) from e

    def mark_download_completed(self, plan: DownloadPlan, success: bool = True) -> DependencyState:
        """
        Mark a download plan as completed or failed.

        Args:
            plan: The download plan to mark
            success: Whether the download was successful
        """
        plan.status = DownloadStatus.COMPLETED if success else DownloadStatus.FAILED

        state = DependencyState(
            dependency_key=plan.dependency_key,
            download_status=plan.status,
            downloaded_path=plan.destination_path if success else None,
            error_message=None if success else plan.error_message,
        )
        self.dependency_states[plan.dependency_key] = state
        return state

    def _verify_download(self, plan: DownloadPlan) -> bool:
        """
        Verify that a download was successful.

        Args:
            plan: The download plan to verify

        Returns:
            True if verification passed, False otherwise
        """
        dest_path = plan.destination_path

        if not dest_path.exists():
            self.logger.log(
                f"Destination path does not exist: {dest_path}",
                logging.WARNING,
            )
            return False

        if dest_path.is_dir() and not any(dest_path.iterdir()):
            self.logger.log(
                f"Destination directory is empty: {dest_path}",
                logging.WARNING,
            )
            return False

        return True

    def get_download_summary(self) -> dict:
        """
        Get a summary of download results.

        Returns:
            Dictionary with counts of successful and failed downloads
        """
        states = self.dependency_states.values()
        completed = sum(1 for state in states if state.is_downloaded())
        failed = sum(1 for state in states if state.download_status == DownloadStatus.FAILED)
        return {
            "completed": completed,
            "failed": failed,
            "total": completed + failed,
        }
