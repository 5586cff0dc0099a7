"""
Platform suffixes of the file names published for Node.js builds.

The official listing publishes no per-release file list, so artifact URLs are
synthesized from these suffixes. The unofficial index lists file keys per
release; a release without the key of the target has no build for it.
"""

from typing import Dict, Tuple

from multiruntime.multiruntime_exceptions import UnsupportedTarget
from multiruntime.runtime_models import Arch, Os, TargetDescriptor

OFFICIAL_SUFFIXES: Dict[Tuple[Os, Arch], str] = {
    (Os.WINDOWS, Arch.X86_64): "win-x64.zip",
    (Os.LINUX, Arch.X86_64): "linux-x64.tar.gz",
    (Os.LINUX, Arch.ARM64): "linux-arm64.tar.gz",
    (Os.LINUX, Arch.ARMV7): "linux-armv7l.tar.gz",
    (Os.MAC, Arch.X86_64): "darwin-x64.tar.gz",
    (Os.MAC, Arch.ARM64): "darwin-arm64.tar.gz",
}

# keyed by (os, arch, musl)
UNOFFICIAL_SUFFIXES: Dict[Tuple[Os, Arch, bool], str] = {
    (Os.WINDOWS, Arch.X86_64, False): "win-x64-zip",
    (Os.WINDOWS, Arch.ARM64, False): "win-arm64-zip",
    (Os.LINUX, Arch.X86_64, False): "linux-x64",
    (Os.LINUX, Arch.ARM64, False): "linux-arm64",
    (Os.LINUX, Arch.ARMV7, False): "linux-armv7l",
    (Os.LINUX, Arch.X86_64, True): "linux-x64-musl",
    (Os.LINUX, Arch.ARM64, True): "linux-arm64-musl",
    (Os.LINUX, Arch.ARMV7, True): "linux-armv7l-musl",
}


def official_suffix(target: TargetDescriptor) -> str:
    """
    Suffix of the nodejs.org file for {target}. The libc variant plays no role
    in official builds.

    Raises:
        UnsupportedTarget: If nodejs.org publishes no build for the platform
    """
    key = (target.os, target.arch)
    if key not in OFFICIAL_SUFFIXES:
        raise UnsupportedTarget(f"nodejs.org publishes no build for {target}")
    return OFFICIAL_SUFFIXES[key]


def unofficial_suffix(target: TargetDescriptor) -> str:
    """
    File key of the unofficial-builds index for {target}.

    Raises:
        UnsupportedTarget: If unofficial-builds publishes no build for the platform
    """
    key = (target.os, target.arch, target.os == Os.LINUX and target.is_musl)
    if key not in UNOFFICIAL_SUFFIXES:
        raise UnsupportedTarget(f"unofficial-builds.nodejs.org publishes no build for {target}")
    return UNOFFICIAL_SUFFIXES[key]


def archive_extension(suffix: str) -> str:
    if suffix.endswith("zip"):
        return "zip"
    return "tar.gz"
