"""
Provides the Java specific RuntimeExecutor. JDKs come from the Azul Zulu
community bundles.
"""

from pathlib import PurePosixPath

from multiruntime.multiruntime_config import RuntimeName
from multiruntime.executors.executor import RuntimeExecutor
from multiruntime.runtime_models import Os, TargetDescriptor


class Java(RuntimeExecutor):
    """
    Provisions a JDK. Java projects carry no version requirement we read, so the
    first bundle matching the platform in listing order is used.
    """

    name = RuntimeName.JAVA
    commands = ("java",)

    def binary_relative_path(self, target: TargetDescriptor) -> PurePosixPath:
        if target.os == Os.WINDOWS:
            return PurePosixPath("bin/java.exe")
        return PurePosixPath("bin/java")
