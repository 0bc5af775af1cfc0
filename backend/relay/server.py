"""Process Entry Point — load settings, bind a port (with fallback), serve with uvicorn.

Invariants:
    - Missing CLIENT_ID / CONSUMER_SECRET is fatal: names logged, values never, exit 1
    - On EADDRINUSE the next port is tried, up to port_retry_limit extra attempts
    - Any other bind error is fatal
    - uvicorn's access log is disabled (query strings carry userSecret);
      RequestIdMiddleware logs requests instead

Design Decisions:
    - Bind the socket ourselves and hand it to uvicorn: the port that was probed
      is the port that serves, no check-then-bind race
"""

import asyncio
import errno
import logging
import socket
import sys

import uvicorn
from pydantic import ValidationError

from relay.config import Settings, get_settings
from relay.infrastructure.observability import setup_logging
from relay.main import create_app

logger = logging.getLogger(__name__)

ENDPOINTS = (
    ("POST", "register-user"),
    ("POST", "connect-portal-url"),
    ("GET", "list-users"),
    ("DELETE", "delete-user"),
    ("GET", "list-accounts"),
    ("GET", "list-account-holdings"),
)


class PortUnavailableError(RuntimeError):
    """No free port within the retry range."""


def bind_socket(host: str, port: int, retry_limit: int) -> socket.socket:
    """Bind a listening TCP socket on port, or the next free one above it."""
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    for candidate in range(port, port + retry_limit + 1):
        sock = socket.socket(family, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((host, candidate))
        except OSError as e:
            sock.close()
            if e.errno != errno.EADDRINUSE:
                raise
            logger.warning(
                f"Port {candidate} in use, trying {candidate + 1}",
                extra={"port": candidate},
            )
            continue
        sock.listen(socket.SOMAXCONN)
        sock.set_inheritable(True)
        return sock
    raise PortUnavailableError(
        f"No free port in range {port}-{port + retry_limit}",
    )


def load_settings() -> Settings:
    """Load settings or exit: the relay cannot start without SnapTrade credentials."""
    try:
        return get_settings()
    except ValidationError as e:
        fields = ", ".join(
            str(err["loc"][0]).upper() for err in e.errors() if err["loc"]
        )
        logging.basicConfig(level=logging.ERROR)
        logger.critical(f"Invalid or missing configuration: {fields}")
        raise SystemExit(1) from None


def _log_endpoints(settings: Settings, port: int) -> None:
    base = f"http://localhost:{port}{settings.relay_api_prefix}"
    logger.info(f"SnapTrade relay listening on port {port}", extra={"port": port})
    for method, path in ENDPOINTS:
        logger.info(f"  {method:<6} {base}/{path}")


def run() -> None:
    """Start the relay process."""
    settings = load_settings()
    setup_logging(settings.log_level, settings.log_format)

    try:
        sock = bind_socket(settings.host, settings.port, settings.port_retry_limit)
    except (OSError, PortUnavailableError) as e:
        logger.critical(f"Failed to start server: {e}")
        sys.exit(1)

    port = sock.getsockname()[1]
    config = uvicorn.Config(
        create_app(settings),
        log_config=None,
        access_log=False,
        log_level=settings.log_level.lower(),
    )
    _log_endpoints(settings, port)
    try:
        asyncio.run(uvicorn.Server(config).serve(sockets=[sock]))
    finally:
        sock.close()
