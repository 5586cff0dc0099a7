"""
Defines the settings for multiruntime
"""

import os
import pathlib


class MultiruntimeSettings:
    """
    Provides the various settings for multiruntime
    """

    @staticmethod
    def get_global_cache_directory() -> str:
        """
        Returns the cache directory used by multiruntime
        """
        global_cache_directory = os.path.join(str(pathlib.Path.home()), ".multiruntime")
        os.makedirs(global_cache_directory, exist_ok=True)
        return global_cache_directory

    @staticmethod
    def get_runtime_directory() -> str:
        """
        Returns the directory runtimes are unpacked into
        """
        runtime_directory = os.path.join(MultiruntimeSettings.get_global_cache_directory(), "runtimes")
        os.makedirs(runtime_directory, exist_ok=True)
        return runtime_directory
