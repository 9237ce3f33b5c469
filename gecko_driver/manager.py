from __future__ import annotations

import logging
from pathlib import Path

from aiohttp import ClientSession

from .config import DriverConfig
from .install.installer import ArchiveInstaller
from .release.resolver import ReleaseResolver
from .utils.http import open_session

logger = logging.getLogger(__name__)


async def download_latest(config: DriverConfig | None = None, session: ClientSession | None = None) -> Path:
    """
    Fetch the newest geckodriver release for this platform and install it.
    Returns the path of the installed executable.
    """
    cfg = config or DriverConfig()
    async with open_session(session) as shared:
        url = await ReleaseResolver(cfg, session=shared).resolve_asset_url()
        executable = await ArchiveInstaller(cfg, session=shared).install(url)
    logger.info("geckodriver ready at %s", executable)
    return executable
