"""Launch the installed geckodriver and make sure it dies with its handle.

Handles are not shared: whoever receives one from :func:`launch` owns the
process and must release it, ideally through ``with``.
"""
from __future__ import annotations

import logging
import subprocess
from contextlib import contextmanager
from typing import Iterator, List, Optional

from ..config import DriverConfig
from ..errors import SpawnError

logger = logging.getLogger(__name__)

_REAP_TIMEOUT = 5.0


class DriverHandle:
    """Owning wrapper around a running driver process."""

    def __init__(self, process: subprocess.Popen, port: int) -> None:
        self._process = process
        self._port = port
        self._closed = False

    @property
    def pid(self) -> int:
        return self._process.pid

    @property
    def port(self) -> int:
        return self._port

    @property
    def args(self) -> List[str]:
        return list(self._process.args)

    @property
    def returncode(self) -> Optional[int]:
        return self._process.poll()

    @property
    def closed(self) -> bool:
        return self._closed

    def is_running(self) -> bool:
        return self._process.poll() is None

    def wait(self, timeout: Optional[float] = None) -> int:
        return self._process.wait(timeout=timeout)

    def close(self) -> None:
        """
        Kill the process. Only the first call does anything; failures (for
        example a process that already exited) are ignored.
        """
        if self._closed:
            return
        self._closed = True
        try:
            self._process.kill()
        except OSError:
            pass
        try:
            self._process.wait(timeout=_REAP_TIMEOUT)
        except (OSError, subprocess.TimeoutExpired):
            pass
        logger.debug("geckodriver pid %s on port %s released", self._process.pid, self._port)

    def __enter__(self) -> "DriverHandle":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<DriverHandle pid={self._process.pid} port={self._port} {state}>"


def launch(port: Optional[int] = None, config: DriverConfig | None = None) -> DriverHandle:
    """
    Start the installed driver listening on ``port`` (``config.port`` when omitted).

    Returns as soon as the process exists; it may not be accepting
    connections yet. Picking a free port is up to the caller.
    """
    cfg = config or DriverConfig()
    if port is None:
        port = cfg.port
    if isinstance(port, bool) or not isinstance(port, int) or not 0 <= port <= 65535:
        raise ValueError(f"port must be an integer between 0 and 65535, got {port!r}")

    executable = cfg.executable_path
    args = [str(executable), f"-p{port}"]
    try:
        process = subprocess.Popen(args)
    except OSError as exc:
        raise SpawnError(f"cannot start {executable}: {exc}") from exc

    logger.info("started geckodriver pid %s on port %s", process.pid, port)
    return DriverHandle(process, port)


@contextmanager
def running_driver(port: Optional[int] = None, config: DriverConfig | None = None) -> Iterator[DriverHandle]:
    """Yield a launched driver and kill it on every exit path."""
    handle = launch(port, config)
    try:
        yield handle
    finally:
        handle.close()
