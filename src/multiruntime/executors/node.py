"""
Provides the Node.js specific RuntimeExecutor. ``node``, ``npm`` and ``npx``
share one downloaded artifact.
"""

from pathlib import PurePosixPath
from typing import Dict, Optional

from multiruntime.multiruntime_config import RuntimeName
from multiruntime.executors.executor import RuntimeExecutor
from multiruntime.runtime_models import Os, TargetDescriptor, VersionConstraint
from multiruntime.version_constraint import VersionConstraintSource

WINDOWS_BINARIES: Dict[str, str] = {
    "node": "node.exe",
    "npm": "npm.cmd",
    "npx": "npx.cmd",
}

POSIX_BINARIES: Dict[str, str] = {
    "node": "bin/node",
    "npm": "bin/npm",
    "npx": "bin/npx",
}


class Node(RuntimeExecutor):
    """
    Provisions Node.js, honoring the version range of the project's
    package.json ``engines.node`` or ``.nvmrc``.
    """

    name = RuntimeName.NODE
    commands = ("node", "npm", "npx")

    def binary_relative_path(self, target: TargetDescriptor) -> PurePosixPath:
        binaries = WINDOWS_BINARIES if target.os == Os.WINDOWS else POSIX_BINARIES
        return PurePosixPath(binaries[self.command])

    def version_constraint(self) -> Optional[VersionConstraint]:
        return VersionConstraintSource(self.config.project_root, self.logger).resolve()
