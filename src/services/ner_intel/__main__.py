"""
NER Intel Service - CLI Entry Point

Usage:
    python -m src.services.ner_intel [options]

Examples:
    # Start HTTP server on the configured port
    python -m src.services.ner_intel

    # Custom bind address
    python -m src.services.ner_intel --host 127.0.0.1 --port 8090 --log-level debug
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from src.common.logging import configure_sanitized_logging

from .config import NerIntelConfig


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="NER Intel Service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--host",
        default=None,
        help="Host to bind (default: from config or 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind (default: from config or 3000)",
    )
    parser.add_argument(
        "--public-url",
        default=None,
        help="Public base URL advertised in the registration document",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (default: from config or info)",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> NerIntelConfig:
    """Build configuration from args and environment."""
    overrides = {}

    if args.host:
        overrides["host"] = args.host
    if args.port:
        overrides["port"] = args.port
    if args.public_url:
        overrides["public_base_url"] = args.public_url
    if args.log_level:
        overrides["log_level"] = args.log_level.upper()

    return NerIntelConfig(**overrides)


def main() -> None:
    """Main entry point."""
    args = parse_args()
    config = build_config(args)
    configure_sanitized_logging(level=getattr(logging, config.log_level.upper()))
    logger = logging.getLogger(__name__)

    logger.info(f"NER Intel agent running on port {config.port}")

    from .transports.http import run_http_server

    try:
        asyncio.run(run_http_server(config))
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
