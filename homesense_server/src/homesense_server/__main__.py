"""
Canonical entry point for homesense_server package.

Usage:
    python -m homesense_server --environment development
    python -m homesense_server --environment production --port 8080
"""

import argparse
import logging
import os

import uvicorn
from homesense_core.config.environments import ENVIRONMENT_ENV, get_settings
from homesense_core.config.logs import log_level_name, setup_logging


def run_api_server(args: argparse.Namespace) -> None:
    """Run the FastAPI server."""
    config = get_settings()
    setup_logging(config)
    log = logging.getLogger(__name__)

    # Override with command line arguments
    host = args.host or config.API_HOST
    port = args.port or config.PORT
    reload = args.reload and args.environment != "production"

    log.info("Starting HomeSense server...")
    log.info(f"Environment: {args.environment}")
    log.info(f"Host: {host}")
    log.info(f"Port: {port}")
    log.info(f"Room response format: {config.ROOM_RESPONSE_FORMAT}")
    log.info(f"Reload: {reload}")

    uvicorn.run(
        "homesense_server.adapters.api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=log_level_name(config).lower(),
    )
    return None


def main() -> None:
    """Main entry point for homesense_server."""
    parser = argparse.ArgumentParser(description="HomeSense Server - latest reading per room")
    parser.add_argument(
        "--environment",
        choices=["production", "development", "testing"],
        default="development",
        help="Environment to run in",
    )
    parser.add_argument("--host", help="Host to bind to (overrides config)")
    parser.add_argument("--port", type=int, help="Port to bind to (overrides config)")
    parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload (development only)"
    )

    args = parser.parse_args()

    # Set environment variable for config
    os.environ[ENVIRONMENT_ENV] = args.environment

    run_api_server(args)


if __name__ == "__main__":
    main()
