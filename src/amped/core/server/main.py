"""Amped server entry point: ``python -m amped.core.server.main``."""

from __future__ import annotations

import logging
from ipaddress import ip_address

from amped.core.config.settings import Settings, get_settings
from amped.core.server.app import create_app

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _is_loopback_host(host: str) -> bool:
    if host == "localhost":
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def _ensure_safe_bind(settings: Settings) -> None:
    """Refuse a network bind that would expose readings beyond this machine."""
    if settings.amped_allow_insecure_bind or _is_loopback_host(settings.amped_host):
        return
    raise RuntimeError(
        f"Refusing to bind Amped server to non-loopback host {settings.amped_host!r} "
        "without an auth layer. Set AMPED_ALLOW_INSECURE_BIND=true to override (unsafe)."
    )


def run() -> None:
    """Start the Amped MCP server on the configured transport."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.amped_log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )

    if settings.amped_transport == "stdio":
        logger.info("Starting Amped Life Impact server on stdio")
        create_app().run(transport="stdio")
        return

    _ensure_safe_bind(settings)
    logger.info(
        "Starting Amped Life Impact server on %s:%d",
        settings.amped_host,
        settings.amped_port,
    )
    create_app().run(
        transport="streamable-http",
        host=settings.amped_host,
        port=settings.amped_port,
    )


if __name__ == "__main__":
    run()
