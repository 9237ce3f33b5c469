from __future__ import annotations

import asyncio
import logging
import shutil
from pathlib import Path

from aiohttp import ClientSession

from .base import ArchiveExtractor
from .tar_extractor import TarGzExtractor
from .zip_extractor import ZipExtractor
from ..config import DriverConfig
from ..platforms import PlatformTag
from ..utils.http import fetch_bytes, open_session

logger = logging.getLogger(__name__)

_EXTRACTORS = (TarGzExtractor, ZipExtractor)


def extractor_for(platform: PlatformTag) -> ArchiveExtractor:
    """Pick the archive format the platform's release asset is packaged in."""
    for extractor_cls in _EXTRACTORS:
        if extractor_cls.format == platform.archive_format:
            return extractor_cls()
    raise ValueError(f"unknown archive format {platform.archive_format!r}")


class ArchiveInstaller:
    """
    Downloads a release asset and unpacks it over the install directory.

    The install directory is wiped before every extraction, so a reinstall
    never keeps files from the previous one. No locking: callers must not run
    two installs, or an install and a launch, against the same directory at once.
    """
    def __init__(
        self,
        config: DriverConfig | None = None,
        extractor: ArchiveExtractor | None = None,
        session: ClientSession | None = None,
    ) -> None:
        self.config = config or DriverConfig()
        self.extractor = extractor or extractor_for(self.config.platform)
        self._session = session

    @property
    def install_path(self) -> Path:
        return self.config.install_path

    @property
    def executable_path(self) -> Path:
        return self.config.executable_path

    async def download(self, asset_url: str) -> bytes:
        cfg = self.config
        async with open_session(self._session) as session:
            return await fetch_bytes(
                session,
                asset_url,
                timeout=cfg.request_timeout,
                user_agent=cfg.user_agent,
            )

    async def install(self, asset_url: str) -> Path:
        logger.info("downloading %s", asset_url)
        data = await self.download(asset_url)
        await self.unpack(data)
        return self.executable_path

    async def unpack(self, data: bytes) -> None:
        target = self.install_path
        await asyncio.to_thread(self._remove_previous, target)
        await asyncio.to_thread(self.extractor.extract, data, target)
        logger.info("installed geckodriver into %s", target)

    @staticmethod
    def _remove_previous(target: Path) -> None:
        # A missing directory is the normal first-install state.
        shutil.rmtree(target, ignore_errors=True)
