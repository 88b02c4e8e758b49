"""
Command-line interface for the Synergy Wholesale exporter.

Builds the exporter configuration from flags, falling back to environment
variables (optionally loaded from a .env file) for the credentials, then
wires the API client, cache and collector together and serves metrics.
"""

import argparse
import os
import sys
from typing import Mapping, Optional

from dotenv import load_dotenv

from . import __version__
from .api_client import SynergyWholesaleClient
from .cache import DomainListCache
from .config import (
    DEFAULT_CACHE_TTL_SECONDS,
    DEFAULT_LISTEN_ADDRESS,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    ExporterConfig,
    LoggingConfig,
    RetryConfig,
    ServerConfig,
)
from .enums import ConfigErrorCode
from .exceptions import ConfigError
from .models import Credentials
from .server import create_registry, parse_listen_address, serve
from .structured_logger import StructuredLogger, create_logger

RESELLER_ID_ENV = "SYNERGY_WHOLESALE_RESELLER_ID"
API_KEY_ENV = "SYNERGY_WHOLESALE_API_KEY"


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="synergy-wholesale-exporter",
        description="Prometheus exporter for Synergy Wholesale domain inventory",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"version: {__version__}",
    )
    parser.add_argument(
        "--reseller-id",
        default="",
        help=f"Synergy Wholesale Reseller ID (env: {RESELLER_ID_ENV})",
    )
    parser.add_argument(
        "--apikey",
        default="",
        help=f"Synergy Wholesale API Key (env: {API_KEY_ENV})",
    )
    parser.add_argument(
        "--address",
        default=DEFAULT_LISTEN_ADDRESS,
        help=f"Listening address for the metrics server (default: {DEFAULT_LISTEN_ADDRESS})",
    )
    parser.add_argument(
        "--ttl",
        type=int,
        default=DEFAULT_CACHE_TTL_SECONDS,
        help=f"Cache TTL value in seconds (default: {DEFAULT_CACHE_TTL_SECONDS})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_REQUEST_TIMEOUT_SECONDS,
        help=f"Upstream request timeout in seconds (default: {DEFAULT_REQUEST_TIMEOUT_SECONDS:g})",
    )
    parser.add_argument(
        "--retries",
        type=int,
        default=0,
        help="Extra upstream attempts on transport errors (default: 0)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output logging in JSON format",
    )
    return parser


def logging_config(args: argparse.Namespace) -> LoggingConfig:
    """Logging settings selected by the --debug and --json flags."""
    return LoggingConfig(
        level="debug" if args.debug else "info",
        output_format="json" if args.json else "text",
    )


def build_config(
    args: argparse.Namespace,
    environ: Optional[Mapping[str, str]] = None,
) -> ExporterConfig:
    """
    Build the exporter configuration from parsed flags and the environment.

    Args:
        args: Parsed command-line arguments
        environ: Environment used for credential fallback (defaults to os.environ)

    Returns:
        The validated ExporterConfig

    Raises:
        ConfigError: If credentials are missing or a value is out of range
    """
    if environ is None:
        environ = os.environ

    reseller_id = args.reseller_id or environ.get(RESELLER_ID_ENV, "")
    if not reseller_id:
        raise ConfigError(
            code=ConfigErrorCode.MISSING_RESELLER_ID.value,
            message="Reseller ID not set!",
            details={"flag": "--reseller-id", "env": RESELLER_ID_ENV},
        )

    api_key = args.apikey or environ.get(API_KEY_ENV, "")
    if not api_key:
        raise ConfigError(
            code=ConfigErrorCode.MISSING_API_KEY.value,
            message="API Key not set!",
            details={"flag": "--apikey", "env": API_KEY_ENV},
        )

    if args.ttl < 0:
        raise ConfigError(
            code=ConfigErrorCode.INVALID_TTL.value,
            message=f"Cache TTL must be non-negative: {args.ttl}",
            details={"ttl": args.ttl},
        )

    # Fail at startup rather than on bind
    parse_listen_address(args.address)

    return ExporterConfig(
        credentials=Credentials(reseller_id=reseller_id, api_key=api_key),
        cache_ttl_seconds=args.ttl,
        request_timeout_seconds=args.timeout,
        retry=RetryConfig(max_retries=max(args.retries, 0)),
        server=ServerConfig(listen_address=args.address),
        logging=logging_config(args),
    )


def create_cache(
    config: ExporterConfig,
    client: SynergyWholesaleClient,
    logger: Optional[StructuredLogger] = None,
) -> DomainListCache:
    """Wire the cache to the listDomains call for the configured account."""

    def fetch():
        if logger:
            logger.info("exporter", "Sending listDomains request to Synergy Wholesale API", {
                "reseller_id": config.credentials.reseller_id,
            })
        return client.list_domains(config.credentials)

    return DomainListCache(
        fetch=fetch,
        ttl_seconds=config.cache_ttl_seconds,
        logger=logger,
    )


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    load_dotenv()

    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except ConfigError as e:
        # No config yet, so log with the flag-selected settings
        startup = logging_config(args)
        logger = create_logger(output_format=startup.output_format, level=startup.level)
        logger.log_error("exporter", e.message, error=e, additional_data=e.details)
        return 1

    logger = create_logger(
        output_format=config.logging.output_format,
        level=config.logging.level,
    )

    with SynergyWholesaleClient(
        timeout=config.request_timeout_seconds,
        retry=config.retry,
        logger=logger,
    ) as client:
        cache = create_cache(config, client, logger)
        registry = create_registry(cache)
        try:
            serve(config.server.listen_address, registry, logger)
        except KeyboardInterrupt:
            logger.info("exporter", "Shutting down")
        except OSError as e:
            logger.log_error("server", "Error starting web server", error=e)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
