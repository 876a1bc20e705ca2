"""Entry point for the Proxmox MCP server."""

import argparse
import asyncio
import logging
import sys
from typing import Any

from proxmox_mcp import __version__
from proxmox_mcp.config import LogLevel, ProxmoxConfig


def setup_logging(level: LogLevel) -> None:
    """Configure logging for the server.

    Logs go to stderr; stdout carries the MCP stream.
    """
    logging.basicConfig(
        level=level.value,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="proxmox-mcp",
        description="MCP server for Proxmox VE",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # Connection options
    parser.add_argument(
        "--host",
        default=None,
        help="Proxmox VE host (default: PROXMOX_HOST or localhost)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Proxmox VE API port (default: PROXMOX_PORT or 8006)",
    )
    parser.add_argument(
        "--username",
        default=None,
        help="User name without realm (default: PROXMOX_USERNAME or root)",
    )
    parser.add_argument(
        "--realm",
        default=None,
        help="Authentication realm (default: PROXMOX_REALM or pam)",
    )
    parser.add_argument(
        "--insecure",
        action="store_true",
        help="Do not verify the server TLS certificate",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-request timeout in seconds (default: 30)",
    )

    # Logging
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: INFO)",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> ProxmoxConfig:
    """Build config from args, falling back to environment/defaults."""
    config_kwargs: dict[str, Any] = {}

    if args.host:
        config_kwargs["host"] = args.host

    if args.port:
        config_kwargs["port"] = args.port

    if args.username:
        config_kwargs["username"] = args.username

    if args.realm:
        config_kwargs["realm"] = args.realm

    if args.insecure:
        config_kwargs["verify_ssl"] = False

    if args.timeout:
        config_kwargs["timeout"] = args.timeout

    if args.log_level:
        config_kwargs["log_level"] = LogLevel(args.log_level)

    return ProxmoxConfig(**config_kwargs)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    config = build_config(args)

    setup_logging(config.log_level)

    logger = logging.getLogger(__name__)
    logger.info(f"Starting Proxmox MCP server v{__version__}")

    for warning in config.validate_auth_config():
        logger.warning(warning)

    from proxmox_mcp.server import create_server

    server = create_server(config)
    asyncio.run(server.run())

    return 0


if __name__ == "__main__":
    sys.exit(main())
