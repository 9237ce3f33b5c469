from __future__ import annotations

import io
import logging
import tarfile
import zlib
from pathlib import Path

from ..errors import ArchiveError
from ..platforms import TAR_GZ

logger = logging.getLogger(__name__)


class TarGzExtractor:
    """
    gzip-compressed tarballs, as published for Linux and macOS.
    Uses the "data" extraction filter, which refuses members that would land
    outside the destination (absolute paths, ``..``, escaping links).
    """
    format = TAR_GZ

    def extract(self, data: bytes, destination: Path) -> None:
        try:
            destination.mkdir(parents=True, exist_ok=True)
            with tarfile.open(fileobj=io.BytesIO(data), mode="r:gz") as archive:
                members = archive.getmembers()
                archive.extractall(destination, members=members, filter="data")
        except (tarfile.TarError, EOFError, zlib.error, OSError) as exc:
            raise ArchiveError(f"failed to unpack tarball into {destination}: {exc}") from exc
        logger.debug("unpacked %s tar members into %s", len(members), destination)
