from __future__ import annotations

import platform as _platform
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .errors import UnsupportedPlatformError

TAR_GZ = "tar.gz"
ZIP = "zip"

_MACHINE_ALIASES = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "x64": "x86_64",
    "i386": "x86",
    "i486": "x86",
    "i586": "x86",
    "i686": "x86",
    "x86": "x86",
    "aarch64": "aarch64",
    "arm64": "aarch64",
}

# (system, normalised machine) -> (asset suffix, archive format)
_ASSET_SUFFIXES: Dict[Tuple[str, str], Tuple[str, str]] = {
    ("linux", "x86"): ("linux32.tar.gz", TAR_GZ),
    ("linux", "x86_64"): ("linux64.tar.gz", TAR_GZ),
    ("linux", "aarch64"): ("linux-aarch64.tar.gz", TAR_GZ),
    ("darwin", "x86_64"): ("macos.tar.gz", TAR_GZ),
    ("darwin", "aarch64"): ("macos-aarch64.tar.gz", TAR_GZ),
    ("windows", "x86"): ("win32.zip", ZIP),
    ("windows", "x86_64"): ("win64.zip", ZIP),
    ("windows", "aarch64"): ("win-aarch64.zip", ZIP),
}


@dataclass(frozen=True)
class PlatformTag:
    """Which geckodriver build the current host needs and how it is packaged."""

    system: str
    machine: str
    asset_suffix: str
    archive_format: str
    executable_name: str


def detect_platform(system: Optional[str] = None, machine: Optional[str] = None) -> PlatformTag:
    """
    Map an OS/architecture pair onto a PlatformTag.
    Both values default to what the running interpreter reports.
    """
    system = (system if system is not None else _platform.system()).strip().lower()
    raw_machine = (machine if machine is not None else _platform.machine()).strip().lower()
    arch = _MACHINE_ALIASES.get(raw_machine, raw_machine)

    entry = _ASSET_SUFFIXES.get((system, arch))
    if entry is None:
        raise UnsupportedPlatformError(f"no geckodriver build for {system}/{raw_machine}")

    suffix, archive_format = entry
    executable = "geckodriver.exe" if system == "windows" else "geckodriver"
    return PlatformTag(
        system=system,
        machine=arch,
        asset_suffix=suffix,
        archive_format=archive_format,
        executable_name=executable,
    )
