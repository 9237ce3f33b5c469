"""Release index decoding, asset selection and the HTTP round trip against a local feed."""
import json

import pytest

from gecko_driver.errors import DecodeError, NetworkError, ReleaseNotFound
from gecko_driver.release.resolver import Asset, ReleaseIndex, ReleaseResolver, resolve_asset_url, select_asset_url

SAMPLE_INDEX = {
    "assets": [
        {"name": "geckodriver-0.1-linux64.tar.gz", "browser_download_url": "https://x/linux64.tar.gz"},
    ]
}


def test_no_matching_asset_raises_release_not_found():
    assets = [Asset("geckodriver-macos.tar.gz", "https://x/mac"), Asset("geckodriver-win32.zip", "https://x/w")]
    with pytest.raises(ReleaseNotFound):
        select_asset_url(assets, "linux64.tar.gz")


def test_empty_index_raises_release_not_found():
    with pytest.raises(ReleaseNotFound):
        select_asset_url([], "linux64.tar.gz")


def test_first_match_wins():
    assets = [
        Asset("geckodriver-v1-linux64.tar.gz", "https://x/first"),
        Asset("geckodriver-v2-linux64.tar.gz", "https://x/second"),
    ]
    assert select_asset_url(assets, "linux64.tar.gz") == "https://x/first"


def test_suffix_match_is_case_insensitive():
    assets = [Asset("GECKODRIVER-LINUX64.TAR.GZ", "https://x/upper")]
    assert select_asset_url(assets, "linux64.tar.gz") == "https://x/upper"


def test_assets_missing_name_or_url_are_skipped():
    assets = [
        Asset(None, "https://x/no-name"),
        Asset("geckodriver-linux64.tar.gz", None),
        Asset("geckodriver-linux64.tar.gz", ""),
        Asset("geckodriver-linux64.tar.gz", "https://x/ok"),
    ]
    assert select_asset_url(assets, "linux64.tar.gz") == "https://x/ok"


def test_only_incomplete_matches_is_not_found():
    assets = [Asset(None, "https://x/linux64.tar.gz"), Asset("geckodriver-linux64.tar.gz", None)]
    with pytest.raises(ReleaseNotFound):
        select_asset_url(assets, "linux64.tar.gz")


def test_index_decoding_ignores_unknown_fields():
    index = ReleaseIndex.from_json({
        "tag_name": "v0.35.0",
        "assets": [{"name": "a", "browser_download_url": "https://x/a", "size": 10}, {}],
    })
    assert index.assets == (Asset("a", "https://x/a"), Asset(None, None))


@pytest.mark.parametrize("payload", [
    [],
    {"message": "Not Found"},
    {"assets": {"name": "x"}},
    {"assets": ["geckodriver.tar.gz"]},
    {"assets": [{"name": 12, "browser_download_url": "https://x"}]},
])
def test_malformed_index_raises_decode_error(payload):
    with pytest.raises(DecodeError):
        ReleaseIndex.from_json(payload)


@pytest.mark.asyncio
async def test_resolves_linux_asset_from_feed(feed, config):
    config.api_url = feed.serve("/releases/latest", json.dumps(SAMPLE_INDEX))
    assert await ReleaseResolver(config).resolve_asset_url() == "https://x/linux64.tar.gz"


@pytest.mark.asyncio
async def test_same_index_on_windows_is_not_found(feed, win_config):
    win_config.api_url = feed.serve("/releases/latest", json.dumps(SAMPLE_INDEX))
    with pytest.raises(ReleaseNotFound):
        await resolve_asset_url(win_config)


@pytest.mark.asyncio
async def test_sends_user_agent_header(feed, config):
    config.api_url = feed.serve("/releases/latest", json.dumps(SAMPLE_INDEX))
    config.user_agent = "gecko-driver-tests/1.0"
    await resolve_asset_url(config)
    assert len(feed.requests) == 1
    assert feed.requests[0]["User-Agent"] == "gecko-driver-tests/1.0"


@pytest.mark.asyncio
async def test_invalid_json_body_is_decode_error(feed, config):
    config.api_url = feed.serve("/releases/latest", "<html>rate limited</html>")
    with pytest.raises(DecodeError):
        await resolve_asset_url(config)


@pytest.mark.asyncio
async def test_error_status_is_network_error_without_retry(feed, config):
    config.api_url = feed.serve("/releases/latest", "boom", status=503)
    with pytest.raises(NetworkError):
        await resolve_asset_url(config)
    assert len(feed.requests) == 1


@pytest.mark.asyncio
async def test_unreachable_feed_is_network_error(config, unreachable_url):
    config.api_url = unreachable_url
    with pytest.raises(NetworkError):
        await resolve_asset_url(config)
