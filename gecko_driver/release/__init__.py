from .resolver import Asset, ReleaseIndex, ReleaseResolver, resolve_asset_url, select_asset_url  # noqa: F401
