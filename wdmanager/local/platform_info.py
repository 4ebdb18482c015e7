import sys
import platform
from enum import Enum
from typing import NamedTuple


class OSKind(Enum):
    LINUX = "linux"
    MAC = "mac"
    WINDOWS = "windows"
    OTHER = "other"


class Arch(Enum):
    X64 = "x64"
    X86 = "x86"
    ARM64 = "arm64"
    OTHER = "other"


class PlatformInfo(NamedTuple):
    """The host operating system and CPU architecture, as consumed by URL resolvers."""
    os_kind: OSKind
    arch: Arch

    @property
    def is_windows(self) -> bool:
        return self.os_kind is OSKind.WINDOWS


_MACHINE_ALIASES = {
    "x86_64": Arch.X64,
    "amd64": Arch.X64,
    "i386": Arch.X86,
    "i686": Arch.X86,
    "x86": Arch.X86,
    "arm64": Arch.ARM64,
    "aarch64": Arch.ARM64,
}


def _detect_os(sys_platform: str) -> OSKind:
    if sys_platform.startswith("linux"):
        return OSKind.LINUX
    if sys_platform == "darwin":
        return OSKind.MAC
    if sys_platform in ("win32", "cygwin"):
        return OSKind.WINDOWS
    return OSKind.OTHER


def detect_platform() -> PlatformInfo:
    """Returns the platform of the running interpreter."""
    os_kind = _detect_os(sys.platform)
    arch = _MACHINE_ALIASES.get(platform.machine().lower(), Arch.OTHER)
    return PlatformInfo(os_kind, arch)
