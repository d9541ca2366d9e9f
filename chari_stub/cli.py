#!/usr/bin/env python3
"""Run the Chari API stub.

Usage:
    chari-stub                          # settings from the environment
    chari-stub --port 4100 --seed 42    # reproducible fixtures
    chari-stub --log-format json
"""

import argparse
import sys

import uvicorn

from chari_stub.config import ChariStubConfig
from chari_stub.exceptions import ConfigurationError
from chari_stub.logging import get_logger, setup_logging

logger = get_logger("chari_stub.cli")


def build_config(args: argparse.Namespace) -> ChariStubConfig:
    """Environment settings overridden by command-line flags."""
    config = ChariStubConfig.from_env()
    if args.host is not None:
        config.server.host = args.host
    if args.port is not None:
        config.server.port = args.port
    if args.seed is not None:
        config.fixtures.seed = args.seed
    if args.transactions is not None:
        config.fixtures.transactions_per_customer = args.transactions
    if args.log_level is not None:
        config.log_level = args.log_level
    if args.log_format is not None:
        config.log_format = args.log_format
    return config.validate()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Mock Chari mobile-wallet API")
    parser.add_argument("--host", help="Bind address (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Listen port (default: 4000)")
    parser.add_argument("--seed", type=int, help="Seed for generated fixtures")
    parser.add_argument("--transactions", type=int, help="Generated transactions per active customer")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ERROR")
    parser.add_argument("--log-format", choices=["standard", "json"])
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        config = build_config(args)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    setup_logging(config.log_level, config.log_format)

    from chari_stub.api import create_app

    app = create_app(config)
    store = app.state.store

    logger.info("Server running on port %d", config.server.port)
    logger.info("Health check: %s/health", config.server.base_url)
    logger.info("Fixtures loaded: %s", store.summary())
    logger.info("Mock customers available:")
    for phone, customer in sorted(store.customers.items()):
        logger.info("  %s: status=%d (%s)", phone, customer.status, customer.message)

    uvicorn.run(app, host=config.server.host, port=config.server.port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
