from __future__ import annotations

import argparse
import asyncio
import logging
from typing import List

from .. import __version__
from ..capabilities import Arg, Capabilities
from ..config import DriverConfig
from ..errors import ArchiveError, DecodeError, DriverError, NetworkError, ReleaseNotFound, SpawnError
from ..manager import download_latest
from ..process.supervisor import running_driver
from ..release.resolver import resolve_asset_url
from ..utils.logging import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNSUPPORTED_PLATFORM = 2
EXIT_UPSTREAM_UNAVAILABLE = 3
EXIT_CORRUPTED_DOWNLOAD = 4
EXIT_INSTALL_BROKEN = 5


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="gecko-driver", description="Install and run geckodriver")
    p.add_argument("--config", type=str, help="Path to config JSON", default=None)
    p.add_argument("--install-dir", type=str, default=None, help="Install directory (default from config)")
    p.add_argument("--log-level", type=str, default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    sub = p.add_subparsers(dest="command", required=True)
    sub.add_parser("resolve", help="Print the download URL of the latest release for this platform")
    sub.add_parser("install", help="Download and install the latest release")

    run = sub.add_parser("run", help="Run the installed driver until interrupted")
    run.add_argument("--port", type=int, default=None, help="Listening port (default from config)")

    caps = sub.add_parser("capabilities", help="Print the Firefox capability payload as JSON")
    caps.add_argument("--headless", action="store_true", help="Add the -headless flag")
    caps.add_argument("--accept-insecure-certs", action="store_true", help="Trust self-signed certificates")
    caps.add_argument("--indent", type=int, default=None, help="JSON indent")
    return p


def _load_config(args: argparse.Namespace) -> DriverConfig:
    if args.config:
        cfg = DriverConfig.from_file(args.config)
    else:
        cfg = DriverConfig.from_env()

    if args.install_dir:
        cfg.install_dir = args.install_dir
    if getattr(args, "port", None) is not None:
        cfg.port = args.port

    cfg.validate()
    return cfg


def _exit_code_for(exc: DriverError) -> int:
    if isinstance(exc, ReleaseNotFound):
        return EXIT_UNSUPPORTED_PLATFORM
    if isinstance(exc, (NetworkError, DecodeError)):
        return EXIT_UPSTREAM_UNAVAILABLE
    if isinstance(exc, ArchiveError):
        return EXIT_CORRUPTED_DOWNLOAD
    if isinstance(exc, SpawnError):
        return EXIT_INSTALL_BROKEN
    return 1


_HINTS = {
    EXIT_UNSUPPORTED_PLATFORM: "no geckodriver build is published for this platform",
    EXIT_UPSTREAM_UNAVAILABLE: "release feed unavailable, retry later",
    EXIT_CORRUPTED_DOWNLOAD: "downloaded archive was corrupted, retry",
    EXIT_INSTALL_BROKEN: "driver installation missing or broken, run `gecko-driver install`",
}


def _run_driver(cfg: DriverConfig) -> None:
    with running_driver(cfg.port, cfg) as handle:
        logger.info("geckodriver running on port %s (pid %s); Ctrl+C to stop", handle.port, handle.pid)
        try:
            handle.wait()
        except KeyboardInterrupt:
            logger.info("stopping geckodriver")


def run_cli(argv: List[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(args.log_level)

    if args.command == "capabilities":
        caps = Capabilities(
            accept_insecure_certs=args.accept_insecure_certs,
            args=(Arg.HEADLESS,) if args.headless else (),
        )
        print(caps.to_json(indent=args.indent))
        return EXIT_OK

    try:
        cfg = _load_config(args)
        if args.command == "resolve":
            print(asyncio.run(resolve_asset_url(cfg)))
        elif args.command == "install":
            print(asyncio.run(download_latest(cfg)))
        elif args.command == "run":
            _run_driver(cfg)
    except DriverError as exc:
        code = _exit_code_for(exc)
        logger.error("%s (%s)", _HINTS.get(code, "driver error"), exc)
        return code
    return EXIT_OK
