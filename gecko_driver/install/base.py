from __future__ import annotations

from pathlib import Path
from typing import Protocol


class ArchiveExtractor(Protocol):
    """
    Unpacks an in-memory archive into a directory.
    Implementations raise ArchiveError for corrupt input or write failures.
    """
    def extract(self, data: bytes, destination: Path) -> None:
        ...
