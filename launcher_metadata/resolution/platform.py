"""
Mapping from the host runtime's platform identifiers to canonical names.

Accepts both sys.platform values ("win32", "linux", "darwin", ...) and
platform.system() values ("Windows", "Linux", "Darwin").
"""
import logging
import platform
import sys
from typing import Optional

from .rules import OsName, TargetEnvironment

logger = logging.getLogger(__name__)

NATIVE_OS_NAMES = {
    "win32": OsName.WINDOWS,
    "cygwin": OsName.WINDOWS,
    "msys": OsName.WINDOWS,
    "windows": OsName.WINDOWS,
    "linux": OsName.LINUX,
    "darwin": OsName.MACOS,
    "macos": OsName.MACOS,
    "osx": OsName.MACOS,
}

# Architecture names as used in rule data
NATIVE_ARCHES = {
    "i386": "x86",
    "i686": "x86",
    "x86": "x86",
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "arm64": "arm64",
    "aarch64": "arm64",
    "armv7l": "arm32",
    "armv6l": "arm32",
}


def canonical_os_name(identifier: Optional[str]) -> Optional[OsName]:
    """
    Map a native platform identifier to a canonical OS name.

    Returns None for unknown identifiers.
    """
    if identifier is None:
        return None
    if isinstance(identifier, OsName):
        return identifier

    key = identifier.strip().lower()
    if key in NATIVE_OS_NAMES:
        return NATIVE_OS_NAMES[key]
    # Older interpreters report "linux2"
    if key.startswith("linux"):
        return OsName.LINUX

    logger.warning("Unrecognised host platform identifier: %s", identifier)
    return None


def canonical_arch(machine: Optional[str]) -> Optional[str]:
    """Map platform.machine() output to the architecture names rules use."""
    if not machine:
        return None
    return NATIVE_ARCHES.get(machine.lower(), machine.lower())


def host_os_version() -> Optional[str]:
    """OS version string of the running machine, as rule version patterns expect it."""
    if sys.platform == "win32":
        return platform.version() or None
    if sys.platform == "darwin":
        return platform.mac_ver()[0] or None
    return platform.release() or None


def host_environment() -> TargetEnvironment:
    """Build a TargetEnvironment describing the running process."""
    return TargetEnvironment(
        os_name=canonical_os_name(sys.platform),
        arch=canonical_arch(platform.machine()),
        os_version=host_os_version(),
    )
