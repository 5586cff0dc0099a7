"""
Pydantic model of the platform a runtime is provisioned for.

A TargetDescriptor is created once per invocation, either from host detection
(see PlatformUtils.get_target) or from an override string such as
``linux-x64-musl``, and is never mutated afterwards.
"""

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel

from multiruntime.multiruntime_exceptions import UnsupportedTarget


class Os(str, Enum):
    """Operating systems runtimes are built for."""

    WINDOWS = "windows"
    LINUX = "linux"
    MAC = "mac"


class Arch(str, Enum):
    """CPU architectures runtimes are built for."""

    X86_64 = "x86_64"
    ARM64 = "arm64"
    ARMV7 = "armv7"


class Variant(str, Enum):
    """libc/ABI variants that need a dedicated build."""

    MUSL = "musl"


OS_ALIASES: Dict[str, Os] = {
    "win": Os.WINDOWS,
    "windows": Os.WINDOWS,
    "linux": Os.LINUX,
    "mac": Os.MAC,
    "macos": Os.MAC,
    "osx": Os.MAC,
    "darwin": Os.MAC,
}

ARCH_ALIASES: Dict[str, Arch] = {
    "x64": Arch.X86_64,
    "x86_64": Arch.X86_64,
    "amd64": Arch.X86_64,
    "arm64": Arch.ARM64,
    "aarch64": Arch.ARM64,
    "armv7": Arch.ARMV7,
    "armv7l": Arch.ARMV7,
}

_PLATFORM_ID_OS = {Os.WINDOWS: "win", Os.LINUX: "linux", Os.MAC: "darwin"}
_PLATFORM_ID_ARCH = {Arch.X86_64: "x64", Arch.ARM64: "arm64", Arch.ARMV7: "armv7l"}


class TargetDescriptor(BaseModel):
    """The (os, arch, variant) triple a runtime build must match."""

    os: Os
    arch: Arch
    variant: Optional[Variant] = None

    class Config:
        frozen = True

    @property
    def is_musl(self) -> bool:
        return self.variant == Variant.MUSL

    @property
    def platform_id(self) -> str:
        """
        Short identifier of the target, e.g. ``linux-x64`` or ``linux-arm64-musl``.
        """
        platform_id = f"{_PLATFORM_ID_OS[self.os]}-{_PLATFORM_ID_ARCH[self.arch]}"
        if self.variant is not None:
            platform_id += f"-{self.variant.value}"
        return platform_id

    @classmethod
    def from_platform_id(cls, platform_id: str) -> "TargetDescriptor":
        """
        Parse an override string of the form ``<os>-<arch>[-musl]``.

        Args:
            platform_id: e.g. "linux-x64", "win-arm64", "darwin-arm64", "linux-arm64-musl"

        Returns:
            The parsed TargetDescriptor

        Raises:
            UnsupportedTarget: If a token is not recognized
        """
        parts = platform_id.strip().lower().split("-")
        if len(parts) not in (2, 3):
            raise UnsupportedTarget(f"Cannot parse target '{platform_id}', expected <os>-<arch>[-musl]")

        os_token, arch_token = parts[0], parts[1]
        if os_token not in OS_ALIASES:
            raise UnsupportedTarget(f"Unknown operating system '{os_token}' in target '{platform_id}'")
        if arch_token not in ARCH_ALIASES:
            raise UnsupportedTarget(f"Unknown architecture '{arch_token}' in target '{platform_id}'")

        variant = None
        if len(parts) == 3:
            try:
                variant = Variant(parts[2])
            except ValueError:
                raise UnsupportedTarget(f"Unknown variant '{parts[2]}' in target '{platform_id}'")

        return cls(os=OS_ALIASES[os_token], arch=ARCH_ALIASES[arch_token], variant=variant)

    def __str__(self) -> str:
        return self.platform_id
