"""
Canonical entry point for homesense_core package.

This package contains domain models, application services, and configuration.
It does not run anything itself.
"""

import sys

from homesense_core.config.environments import get_settings
from homesense_core.config.settings import local_config_path


def main() -> None:
    """Print the resolved configuration, with the shared secret masked."""
    print("homesense_core - Domain and application layer package")
    print("Use the service packages (homesense_hub, homesense_server) instead.")

    config = get_settings()
    print("\nCurrent configuration:")
    print(f"Environment: {config.ENVIRONMENT.value}")
    print(f"Local override file: {local_config_path()}")
    print(f"API key: {'set' if config.HUB_API_KEY else 'NOT SET'}")
    print(f"Hub -> {config.HUB_SERVER_BASE_URL} as room {config.HUB_ROOM_ID}")
    print(f"Hub target sensor: {config.HUB_TARGET_ADDRESS}")
    print(f"Server: {config.API_HOST}:{config.PORT} ({config.ROOM_RESPONSE_FORMAT})")

    sys.exit(0)


if __name__ == "__main__":
    main()
