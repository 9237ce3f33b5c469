"""Shared fixtures: temp configs and a local release feed."""
from __future__ import annotations

import pytest

from gecko_driver.config import DriverConfig
from tests.support import LINUX64, WIN64, FeedServer


@pytest.fixture
def config(tmp_path) -> DriverConfig:
    return DriverConfig(install_dir=str(tmp_path / "drivers" / "gecko"), platform=LINUX64)


@pytest.fixture
def win_config(tmp_path) -> DriverConfig:
    return DriverConfig(install_dir=str(tmp_path / "drivers" / "gecko"), platform=WIN64)


@pytest.fixture
async def feed():
    server = FeedServer()
    await server.server.start_server()
    yield server
    await server.server.close()


@pytest.fixture
async def unreachable_url():
    server = FeedServer()
    await server.server.start_server()
    url = server.url("/releases/latest")
    await server.server.close()
    return url
