import os

from homesense_core.config.settings import Environment, Settings

ENVIRONMENT_ENV = "HOMESENSE_ENV"

_DEFAULT_LOG_LEVELS = {
    Environment.PRODUCTION: "WARNING",
    Environment.DEVELOPMENT: "DEBUG",
    Environment.TESTING: "DEBUG",
}


def get_settings() -> Settings:
    """Get settings based on environment."""
    env = Environment(os.getenv(ENVIRONMENT_ENV, Environment.DEVELOPMENT.value).lower())
    settings = Settings(ENVIRONMENT=env)

    if settings.LOG_LEVEL is None:
        settings = settings.model_copy(update={"LOG_LEVEL": _DEFAULT_LOG_LEVELS[env]})
    return settings
