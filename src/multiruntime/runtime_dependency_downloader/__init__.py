"""
Runtime dependency downloader.

This package handles:
1. Planning where a chosen artifact is unpacked
2. Downloading and extracting the archive
3. Verifying the extracted directory
4. Tracking the state of every download
"""

from .plan import DownloadPlan, DownloadStatus, DependencyState
from .downloader import DependencyDownloader

__all__ = ["DependencyDownloader", "DownloadPlan", "DownloadStatus", "DependencyState"]
