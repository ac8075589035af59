"""Run the vitalspan MCP server: ``python -m vitalspan.core.server.main``."""

from __future__ import annotations

import logging
from ipaddress import ip_address

from vitalspan.core.config.settings import Settings, get_settings
from vitalspan.core.server.app import SERVER_VERSION, create_app

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _is_loopback_host(host: str) -> bool:
    if host.lower() == "localhost":
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def _configure_logging(level_name: str) -> None:
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)


def _check_bind(settings: Settings) -> None:
    """Raise unless the bind host is loopback or the override is set.

    Raises:
        RuntimeError: On a non-loopback host without
            ``VITALSPAN_ALLOW_INSECURE_BIND``.
    """
    if settings.vitalspan_allow_insecure_bind:
        logger.warning("Insecure bind allowed; %s is reachable without auth", settings.vitalspan_host)
        return
    if not _is_loopback_host(settings.vitalspan_host):
        raise RuntimeError(
            f"Refusing to bind vitalspan to non-loopback host {settings.vitalspan_host!r}: "
            "the server has no auth layer. Set VITALSPAN_ALLOW_INSECURE_BIND=true to override."
        )


def run() -> None:
    """Serve the lifespan impact tools over Streamable HTTP."""
    settings = get_settings()
    _configure_logging(settings.vitalspan_log_level)
    _check_bind(settings)

    server = create_app()
    logger.info(
        "vitalspan %s listening on %s:%d",
        SERVER_VERSION, settings.vitalspan_host, settings.vitalspan_port,
    )
    server.run(
        transport="streamable-http",
        host=settings.vitalspan_host,
        port=settings.vitalspan_port,
    )


if __name__ == "__main__":
    run()
