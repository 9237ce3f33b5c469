from __future__ import annotations

import asyncio
import json
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional
from aiohttp import ClientSession, ClientTimeout
import aiohttp
import logging

from ..errors import DecodeError, NetworkError

logger = logging.getLogger(__name__)


async def fetch_bytes(
    session: ClientSession,
    url: str,
    *,
    timeout: float = 60.0,
    user_agent: Optional[str] = None,
) -> bytes:
    """
    Fetch a URL and return the whole body. Exactly one attempt is made.
    Raises NetworkError on connection failures, timeouts, non-2xx statuses
    and payloads cut short by the server.
    """
    headers: Dict[str, str] = {}
    if user_agent:
        headers["User-Agent"] = user_agent

    try:
        async with session.get(url, headers=headers, timeout=ClientTimeout(total=timeout)) as resp:
            resp.raise_for_status()
            body = await resp.read()
    except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
        raise NetworkError(f"request to {url} failed: {exc!r}") from exc
    logger.debug("fetched %s bytes from %s", len(body), url)
    return body


async def fetch_json(
    session: ClientSession,
    url: str,
    *,
    timeout: float = 60.0,
    user_agent: Optional[str] = None,
) -> Any:
    """
    Fetch a URL and decode its body as JSON regardless of the declared content type.
    """
    body = await fetch_bytes(session, url, timeout=timeout, user_agent=user_agent)
    try:
        return json.loads(body)
    except ValueError as exc:
        raise DecodeError(f"response from {url} is not valid JSON: {exc}") from exc


def create_session() -> ClientSession:
    """
    Create an aiohttp ClientSession.
    """
    # Note: caller is responsible for closing the session (await session.close()).
    return aiohttp.ClientSession()


@asynccontextmanager
async def open_session(session: Optional[ClientSession] = None) -> AsyncIterator[ClientSession]:
    """
    Yield ``session`` untouched, or a fresh one that is closed on exit.
    """
    if session is not None:
        yield session
        return
    owned = create_session()
    try:
        yield owned
    finally:
        await owned.close()
