"""gecko-driver: download, install and run geckodriver for Firefox automation.

Resolves the platform's asset from the upstream release feed, unpacks it into
a local install directory, supervises the running driver process and builds
the ``moz:firefoxOptions`` capability payload.
"""

__version__ = "0.1.0"

from .capabilities import Arg, Capabilities  # noqa: F401
from .config import DriverConfig  # noqa: F401
from .errors import (  # noqa: F401
    ArchiveError,
    DecodeError,
    DriverError,
    NetworkError,
    ReleaseNotFound,
    SpawnError,
    UnsupportedPlatformError,
)
from .install import ArchiveInstaller  # noqa: F401
from .manager import download_latest  # noqa: F401
from .platforms import PlatformTag, detect_platform  # noqa: F401
from .process import DriverHandle, launch, running_driver  # noqa: F401
from .release import ReleaseResolver, resolve_asset_url  # noqa: F401
