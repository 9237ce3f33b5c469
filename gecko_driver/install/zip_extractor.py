from __future__ import annotations

import io
import logging
import os
import shutil
import stat
import zipfile
import zlib
from pathlib import Path, PurePosixPath
from typing import Optional

from ..errors import ArchiveError
from ..platforms import ZIP

logger = logging.getLogger(__name__)

# ZipInfo.create_system value written by Unix zip tools.
_UNIX_HOST = 3


def sanitize_member_name(name: str) -> Optional[PurePosixPath]:
    """
    Turn a zip entry name into a safe relative path.
    Drops empty, ``.`` and ``..`` components, leading separators and a drive
    letter; returns None when nothing is left.
    """
    parts = []
    for index, part in enumerate(name.replace("\\", "/").split("/")):
        if part in ("", ".", ".."):
            continue
        if index == 0 and len(part) == 2 and part[1] == ":":
            continue
        parts.append(part)
    if not parts:
        return None
    return PurePosixPath(*parts)


def _is_within(path: Path, root: Path) -> bool:
    try:
        path.relative_to(root)
    except ValueError:
        return False
    return True


class ZipExtractor:
    """
    Zip archives, as published for Windows.
    Recreates the directory layout under the destination and reapplies Unix
    permission bits when the entry carries them and the host supports them.
    """
    format = ZIP

    def extract(self, data: bytes, destination: Path) -> None:
        count = 0
        try:
            destination.mkdir(parents=True, exist_ok=True)
            root = destination.resolve()
            with zipfile.ZipFile(io.BytesIO(data)) as archive:
                for info in archive.infolist():
                    if self._extract_member(archive, info, root):
                        count += 1
        except (zipfile.BadZipFile, zipfile.LargeZipFile, EOFError, zlib.error, OSError) as exc:
            raise ArchiveError(f"failed to unpack zip into {destination}: {exc}") from exc
        logger.debug("unpacked %s zip entries into %s", count, destination)

    def _extract_member(self, archive: zipfile.ZipFile, info: zipfile.ZipInfo, root: Path) -> bool:
        relative = sanitize_member_name(info.filename)
        if relative is None:
            logger.debug("skipping zip entry with empty name %r", info.filename)
            return False

        outpath = root.joinpath(*relative.parts)
        if not _is_within(outpath.resolve(), root):
            raise ArchiveError(f"zip entry {info.filename!r} resolves outside {root}")

        if info.filename.endswith("/"):
            outpath.mkdir(parents=True, exist_ok=True)
        else:
            outpath.parent.mkdir(parents=True, exist_ok=True)
            with archive.open(info) as source, outpath.open("wb") as target:
                shutil.copyfileobj(source, target)

        self._apply_permissions(info, outpath)
        return True

    @staticmethod
    def _apply_permissions(info: zipfile.ZipInfo, path: Path) -> None:
        if os.name != "posix" or info.create_system != _UNIX_HOST:
            return
        mode = info.external_attr >> 16
        if not mode:
            return
        os.chmod(path, stat.S_IMODE(mode))
