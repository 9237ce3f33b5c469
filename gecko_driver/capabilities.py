from __future__ import annotations

import json
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Tuple

OPTIONS_KEY = "moz:firefoxOptions"


class Arg(Enum):
    """Command-line flags passed to Firefox; the value is the literal flag."""

    HEADLESS = "-headless"  # run without any visible UI


@dataclass(frozen=True)
class Capabilities:
    """
    Firefox launch options, serialised under ``moz:firefoxOptions``.
    See https://developer.mozilla.org/en-US/docs/Web/WebDriver/Capabilities/firefoxOptions
    """

    accept_insecure_certs: bool = False
    application_cache_enabled: bool = False
    args: Tuple[Arg, ...] = ()
    use_automation_extension: bool = False

    @classmethod
    def headless(cls, **overrides: Any) -> "Capabilities":
        caps = cls(args=(Arg.HEADLESS,))
        return replace(caps, **overrides) if overrides else caps

    def to_dict(self) -> Dict[str, Any]:
        return {
            "acceptInsecureCerts": self.accept_insecure_certs,
            "applicationCacheEnabled": self.application_cache_enabled,
            "args": [arg.value for arg in self.args],
            "useAutomationExtension": self.use_automation_extension,
        }

    def to_payload(self) -> Dict[str, Dict[str, Any]]:
        """Single-entry mapping ready to merge into a session request."""
        return {OPTIONS_KEY: self.to_dict()}

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_payload(), indent=indent)
