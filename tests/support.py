"""Archive builders, platform tags and a local release feed server shared by the tests."""
from __future__ import annotations

import io
import stat
import tarfile
import zipfile
from typing import Dict, Iterable, List, Optional, Tuple

from aiohttp import web
from aiohttp.test_utils import TestServer

from gecko_driver.platforms import detect_platform

LINUX64 = detect_platform("Linux", "x86_64")
WIN64 = detect_platform("Windows", "AMD64")


def make_tar_gz(files: Dict[str, bytes], mode: int = 0o755) -> bytes:
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as archive:
        for name, content in files.items():
            info = tarfile.TarInfo(name)
            info.size = len(content)
            info.mode = mode
            archive.addfile(info, io.BytesIO(content))
    return buf.getvalue()


def make_zip(entries: Iterable[Tuple[str, bytes]], unix_mode: Optional[int] = None) -> bytes:
    """Entries ending in "/" become directory records; ``unix_mode`` is stored as Unix external attrs."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for name, content in entries:
            info = zipfile.ZipInfo(name)
            info.compress_type = zipfile.ZIP_DEFLATED
            if unix_mode is not None:
                info.create_system = 3
                kind = stat.S_IFDIR if name.endswith("/") else stat.S_IFREG
                info.external_attr = (kind | unix_mode) << 16
            else:
                info.create_system = 0
                info.external_attr = 0
            archive.writestr(info, content)
    return buf.getvalue()


def snapshot(root) -> List[str]:
    return sorted(p.relative_to(root).as_posix() for p in root.rglob("*"))


class FeedServer:
    """A real aiohttp server that answers configured paths and records request headers."""

    def __init__(self) -> None:
        self._routes: Dict[str, Tuple[int, bytes]] = {}
        self._truncated: Dict[str, Tuple[int, bytes]] = {}
        self.requests: List[Dict[str, str]] = []
        app = web.Application()
        app.router.add_get("/{tail:.*}", self._handle)
        self.server = TestServer(app)

    async def _handle(self, request: web.Request) -> web.StreamResponse:
        self.requests.append(dict(request.headers))
        if request.path in self._truncated:
            return await self._handle_truncated(request)
        entry = self._routes.get(request.path)
        if entry is None:
            return web.Response(status=404, text="not found")
        status, body = entry
        return web.Response(status=status, body=body)

    async def _handle_truncated(self, request: web.Request) -> web.StreamResponse:
        declared, body = self._truncated[request.path]
        resp = web.StreamResponse()
        resp.content_length = declared
        await resp.prepare(request)
        await resp.write(body)
        request.transport.close()
        return resp

    def serve_truncated(self, path: str, body: bytes, declared: int) -> str:
        """Advertise ``declared`` bytes, send ``body`` and drop the connection."""
        self._truncated[path] = (declared, body)
        return self.url(path)

    def serve(self, path: str, body: bytes | str, status: int = 200) -> str:
        if isinstance(body, str):
            body = body.encode("utf-8")
        self._routes[path] = (status, body)
        return self.url(path)

    def url(self, path: str) -> str:
        return str(self.server.make_url(path))
