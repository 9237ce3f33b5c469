from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Tuple

from aiohttp import ClientSession

from ..config import DriverConfig
from ..errors import DecodeError, ReleaseNotFound
from ..utils.http import fetch_json, open_session

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Asset:
    """One downloadable file attached to a release."""

    name: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def from_json(cls, raw: Any) -> "Asset":
        if not isinstance(raw, dict):
            raise DecodeError(f"release asset must be an object, got {type(raw).__name__}")
        name = raw.get("name")
        url = raw.get("browser_download_url")
        for key, value in (("name", name), ("browser_download_url", url)):
            if value is not None and not isinstance(value, str):
                raise DecodeError(f"release asset field {key!r} must be a string")
        return cls(name=name, url=url)


@dataclass(frozen=True)
class ReleaseIndex:
    assets: Tuple[Asset, ...] = field(default_factory=tuple)

    @classmethod
    def from_json(cls, payload: Any) -> "ReleaseIndex":
        if not isinstance(payload, dict):
            raise DecodeError("release index must be a JSON object")
        assets = payload.get("assets")
        if not isinstance(assets, list):
            raise DecodeError("release index has no 'assets' list")
        return cls(assets=tuple(Asset.from_json(a) for a in assets))


def select_asset_url(assets: Iterable[Asset], suffix: str) -> str:
    """
    Return the URL of the first asset whose name ends with ``suffix`` (case-insensitive).
    Assets lacking a name or URL are never selected.
    """
    wanted = suffix.lower()
    for asset in assets:
        if not asset.name or not asset.url:
            continue
        if asset.name.lower().endswith(wanted):
            logger.debug("selected asset %s", asset.name)
            return asset.url
    raise ReleaseNotFound(f"release not found for asset suffix {suffix!r}")


class ReleaseResolver:
    """
    Queries the upstream release feed and picks the asset for this platform.
    One HTTP round trip per call, no retries.
    """
    def __init__(self, config: DriverConfig | None = None, session: ClientSession | None = None) -> None:
        self.config = config or DriverConfig()
        self._session = session

    async def fetch_index(self) -> ReleaseIndex:
        cfg = self.config
        async with open_session(self._session) as session:
            payload = await fetch_json(
                session,
                cfg.api_url,
                timeout=cfg.request_timeout,
                user_agent=cfg.user_agent,
            )
        return ReleaseIndex.from_json(payload)

    async def resolve_asset_url(self) -> str:
        index = await self.fetch_index()
        url = select_asset_url(index.assets, self.config.platform.asset_suffix)
        logger.info("resolved geckodriver asset %s", url)
        return url


async def resolve_asset_url(config: DriverConfig | None = None, session: ClientSession | None = None) -> str:
    return await ReleaseResolver(config, session=session).resolve_asset_url()
