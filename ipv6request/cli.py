#!/usr/bin/env python3
"""
Command-line launcher for the IPv6 request web service.

Runs uvicorn in the foreground on all interfaces, or with ``-d`` re-launches
itself as a detached child bound to the IPv6 loopback address and exits.
SIGINT/SIGTERM stop accepting connections and give in-flight requests
``SHUTDOWN_GRACE_SECONDS`` to finish.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from typing import List, Optional, Sequence

import click
import uvicorn

from ipv6request.settings import get_settings

log = logging.getLogger(__name__)

DAEMON_CHILD_FLAG = "--daemon-child"
DAEMON_FLAGS = ("-d", "--daemon")
LOOPBACK_V6 = "::1"


def configure_logging(level: int = logging.INFO) -> None:
    """Configure logging for the service process."""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def daemon_child_args(argv: Sequence[str]) -> List[str]:
    """Arguments for the background child: same flags minus ``-d``."""
    args = [arg for arg in argv if arg not in DAEMON_FLAGS]
    args.append(DAEMON_CHILD_FLAG)
    return args


def spawn_daemon(argv: Sequence[str]) -> int:
    """Start a detached copy of this program and return its PID."""
    cmd = [sys.executable, "-m", "ipv6request", *daemon_child_args(argv)]
    proc = subprocess.Popen(
        cmd,
        stdin=subprocess.DEVNULL,
        start_new_session=True,
    )
    return proc.pid


def serve(host: str, port: int, *, grace_seconds: int) -> None:
    config = uvicorn.Config(
        "ipv6request.main:app",
        host=host,
        port=port,
        timeout_graceful_shutdown=grace_seconds,
        log_config=None,
    )
    server = uvicorn.Server(config)
    server.run()
    log.info("Server stopped")


@click.command()
@click.option("--port", "-port", "port", type=int, default=None,
              help="Port to listen on (default: PORT setting, 8080)")
@click.option("--host", type=str, default=None,
              help="Interface to bind in foreground mode (default: HOST setting)")
@click.option("-d", "--daemon", is_flag=True,
              help="Run in the background on IPv6 localhost")
@click.option(DAEMON_CHILD_FLAG, "daemon_child", is_flag=True, hidden=True)
@click.option("--verbose", is_flag=True, help="Enable verbose debug logging")
def main(
    port: Optional[int],
    host: Optional[str],
    daemon: bool,
    daemon_child: bool,
    verbose: bool,
) -> None:
    """Serve the 'does my provider support IPv6?' page."""
    settings = get_settings()
    log_level = logging.DEBUG if verbose else getattr(
        logging, settings.log_level.upper(), logging.INFO
    )
    configure_logging(log_level)

    port = port if port is not None else settings.port

    if daemon and not daemon_child:
        pid = spawn_daemon(sys.argv[1:])
        log.info("Started daemon process with PID: %d (IPv6 localhost only)", pid)
        return

    if daemon_child:
        bind = LOOPBACK_V6
        log.info("Daemon server starting on IPv6 localhost port %d", port)
    else:
        bind = host or settings.host
        log.info("Server starting on %s port %d", bind, port)

    serve(bind, port, grace_seconds=settings.shutdown_grace_seconds)


if __name__ == "__main__":
    main()
