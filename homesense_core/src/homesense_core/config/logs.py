import logging

from homesense_core.config.settings import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def log_level_name(config: Settings) -> str:
    return (config.LOG_LEVEL or "INFO").upper()


def setup_logging(config: Settings) -> None:
    """Set up logging configuration."""
    logging.basicConfig(
        level=getattr(logging, log_level_name(config), logging.INFO),
        format=LOG_FORMAT,
    )
    return None
