"""
This file contains various utility functions like host platform detection and
downloading/extracting runtime archives.
"""

import glob
import logging
import os
import platform
import shutil
import tempfile
from typing import Optional

import requests

from multiruntime.multiruntime_exceptions import MultiruntimeException, NetworkError, UnsupportedTarget
from multiruntime.multiruntime_logger import MultiruntimeLogger
from multiruntime.runtime_models.target import ARCH_ALIASES, Os, TargetDescriptor, Variant


class PlatformUtils:
    """
    This class provides utilities for detecting the host platform.
    """

    @staticmethod
    def get_target(override: Optional[str] = None) -> TargetDescriptor:
        """
        Returns the target descriptor for the host, or the parsed override if one is given.

        Raises:
            UnsupportedTarget: If the host operating system or architecture is not supported
        """
        if override:
            return TargetDescriptor.from_platform_id(override)

        system = platform.system()
        if system == "Windows":
            os_name = Os.WINDOWS
        elif system == "Linux":
            os_name = Os.LINUX
        elif system == "Darwin":
            os_name = Os.MAC
        else:
            raise UnsupportedTarget(f"Unknown operating system: {system}")

        machine = platform.machine().lower()
        if machine not in ARCH_ALIASES:
            raise UnsupportedTarget(f"Unknown machine architecture: {machine}")

        variant = Variant.MUSL if os_name == Os.LINUX and PlatformUtils.is_musl() else None
        return TargetDescriptor(os=os_name, arch=ARCH_ALIASES[machine], variant=variant)

    @staticmethod
    def is_musl() -> bool:
        """
        Whether the running Linux system uses musl libc (e.g. Alpine).
        """
        libc, _ = platform.libc_ver()
        if libc == "glibc":
            return False
        return len(glob.glob("/lib/ld-musl-*.so.1")) > 0


class FileUtils:
    """
    Utility functions for downloading and unpacking runtime archives.
    """

    @staticmethod
    def download_file(logger: MultiruntimeLogger, url: str, target_path: str, timeout: float = 300) -> None:
        """
        Downloads the file from the given URL to the given {target_path}
        """
        os.makedirs(os.path.dirname(target_path), exist_ok=True)
        try:
            with requests.get(url, stream=True, timeout=timeout) as response:
                if response.status_code != 200:
                    raise NetworkError(url, f"HTTP {response.status_code}")
                total_size = int(response.headers.get("content-length", 0))
                logger.log(f"Downloading {url} ({total_size} bytes)", logging.INFO)
                with open(target_path, "wb") as f:
                    for chunk in response.iter_content(chunk_size=1024 * 1024):
                        f.write(chunk)
        except requests.RequestException as e:
            raise NetworkError(url, str(e)) from e

    @staticmethod
    def download_and_extract_archive(
        logger: MultiruntimeLogger, url: str, target_path: str, archive_type: str
    ) -> None:
        """
        Downloads the archive from the given URL and unpacks it into {target_path}.

        Archives that wrap everything in a single top-level directory (as JDK and
        Node.js archives do) are flattened so that {target_path} is the runtime root.
        """
        formats = {"zip": "zip", "tar.gz": "gztar", "tgz": "gztar", "tar.xz": "xztar", "tar": "tar"}
        if archive_type not in formats:
            raise MultiruntimeException(f"Unsupported archive type: {archive_type}")

        with tempfile.TemporaryDirectory(dir=os.path.dirname(os.path.abspath(target_path))) as tmp_dir:
            archive_path = os.path.join(tmp_dir, f"archive.{archive_type}")
            FileUtils.download_file(logger, url, archive_path)

            unpack_dir = os.path.join(tmp_dir, "unpacked")
            logger.log(f"Extracting {archive_path} to {target_path}", logging.INFO)
            shutil.unpack_archive(archive_path, unpack_dir, formats[archive_type])

            entries = os.listdir(unpack_dir)
            root = unpack_dir
            if len(entries) == 1 and os.path.isdir(os.path.join(unpack_dir, entries[0])):
                root = os.path.join(unpack_dir, entries[0])

            if os.path.exists(target_path):
                shutil.rmtree(target_path)
            shutil.move(root, target_path)
