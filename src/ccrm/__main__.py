"""Run the CCRM API server."""

from __future__ import annotations

import argparse
import logging

import uvicorn

from ccrm.api import create_app
from ccrm.config import AppConfig
from ccrm.logging import setup_logging

logger = logging.getLogger("ccrm")


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, set up logging and serve the API."""
    parser = argparse.ArgumentParser(prog="ccrm", description="Campus Course & Records Manager")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument(
        "--no-seed", action="store_true", help="Start with empty storage instead of example data"
    )
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level)
    config = AppConfig.from_env()
    logger.info("Starting CCRM API on %s:%d", args.host, args.port)
    uvicorn.run(create_app(config, seed=not args.no_seed), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
