"""Server entry point — ``python -m rhi.core.server.main``."""

from __future__ import annotations

import logging
from ipaddress import ip_address

from rhi.core.config.settings import get_settings
from rhi.core.server.app import SERVER_NAME, create_app


def _is_loopback_host(host: str) -> bool:
    if host == "localhost":
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def run() -> None:
    """Start the insight MCP server with Streamable HTTP transport."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.rhi_log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    logger = logging.getLogger(__name__)
    if not settings.rhi_allow_insecure_bind and not _is_loopback_host(settings.rhi_host):
        raise RuntimeError(
            "Refusing to bind the insight server to a non-loopback host: it serves "
            "health data and has no auth layer. Set RHI_ALLOW_INSECURE_BIND=true "
            "to override (unsafe)."
        )
    logger.info("Starting %s server on %s:%d", SERVER_NAME, settings.rhi_host, settings.rhi_port)

    mcp = create_app()
    mcp.run(
        transport="streamable-http",
        host=settings.rhi_host,
        port=settings.rhi_port,
    )


if __name__ == "__main__":
    run()
