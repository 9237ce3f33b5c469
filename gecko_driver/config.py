from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Dict, Any
from pathlib import Path
import os
import json

from .platforms import PlatformTag, detect_platform

DEFAULT_INSTALL_DIR = "drivers/gecko"
DEFAULT_PORT = 4444
DEFAULT_API_URL = "https://api.github.com/repos/mozilla/geckodriver/releases/latest"
DEFAULT_USER_AGENT = "Mozilla/5.0 (X11; Linux i586; rv:31.0) Gecko/20100101 Firefox/72.0"
DEFAULT_REQUEST_TIMEOUT = 60.0

#: Configuration schema version (increment if breaking changes to config format).
CONFIG_SCHEMA_VERSION = 1


@dataclass
class DriverConfig:
    """
    Where the driver lives, which port it listens on, and where releases come from.
    Passed explicitly to the resolver, installer and supervisor so several
    instances (or tests) can use separate install paths side by side.
    """
    schema_version: int = CONFIG_SCHEMA_VERSION
    install_dir: str = DEFAULT_INSTALL_DIR
    port: int = DEFAULT_PORT
    api_url: str = DEFAULT_API_URL
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    platform: PlatformTag = field(default_factory=detect_platform)

    @property
    def install_path(self) -> Path:
        return Path(self.install_dir)

    @property
    def executable_path(self) -> Path:
        return self.install_path / self.platform.executable_name

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    # ---------- Loaders ----------

    @classmethod
    def from_env(cls) -> "DriverConfig":
        """
        Build config from environment variables (all optional).
        """
        def _get(name: str, default: str) -> str:
            return os.getenv(name, default)

        return cls(
            install_dir=_get("GECKO_INSTALL_DIR", DEFAULT_INSTALL_DIR),
            port=int(_get("GECKO_PORT", str(DEFAULT_PORT))),
            api_url=_get("GECKO_API_URL", DEFAULT_API_URL),
            user_agent=_get("GECKO_USER_AGENT", DEFAULT_USER_AGENT),
            request_timeout=float(_get("GECKO_REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT))),
        )

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> "DriverConfig":
        """
        Load configuration from a JSON file. Supports schema migration for future versions.
        The platform is always detected, never read from the file.
        """
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        data = migrate_config(data)
        data.pop("platform", None)
        return cls(**data)

    # ---------- Validation ----------

    def validate(self) -> None:
        if not str(self.install_dir).strip():
            raise ValueError("install_dir cannot be empty")
        if not 0 <= self.port <= 65535:
            raise ValueError("port must be between 0 and 65535")
        if not self.api_url:
            raise ValueError("api_url cannot be empty")
        if not self.user_agent:
            raise ValueError("user_agent cannot be empty; the release feed rejects anonymous clients")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be > 0")


def migrate_config(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Migrate config dict to the latest schema version.
    Keep this pure and additive. Add migrations here as you bump schema.
    """
    raw.setdefault("schema_version", CONFIG_SCHEMA_VERSION)
    return raw
