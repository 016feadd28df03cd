# homesense_core/config/settings.py

import os
from enum import Enum
from pathlib import Path
from typing import Literal, Optional, Tuple, Type

from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

LOCAL_CONFIG_ENV = "HOMESENSE_LOCAL_CONFIG"
DEFAULT_LOCAL_CONFIG = "homesense.local.json"


def local_config_path() -> Path:
    return Path(os.getenv(LOCAL_CONFIG_ENV, DEFAULT_LOCAL_CONFIG))


class Environment(str, Enum):
    PRODUCTION = "production"
    DEVELOPMENT = "development"
    TESTING = "testing"


class Settings(BaseSettings):
    """Configuration shared by the hub and the server.

    Values come from, highest priority first: constructor arguments, the local
    override JSON file, the process environment, ``.env``, then the defaults
    below. The environment therefore only fills what the local file leaves out.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment
    ENVIRONMENT: Environment = Environment.DEVELOPMENT

    # Shared secret between hub and server; empty disables uploads and ingestion
    HUB_API_KEY: str = ""

    # Hub
    HUB_SERVER_BASE_URL: str = "http://localhost:3000"
    HUB_ROOM_ID: str = "piramura-room"
    HUB_TARGET_ADDRESS: str = "B0:E9:FE:DC:15:36"
    HUB_UPLOAD_TIMEOUT_SEC: float = 10.0
    HUB_UPLOAD_WORKERS: int = 4

    # Server
    API_HOST: str = "0.0.0.0"
    PORT: int = 3000
    ROOM_RESPONSE_FORMAT: Literal["json", "csv"] = "json"

    # Logging; None means "use the environment's default"
    LOG_LEVEL: Optional[str] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        local_file = JsonConfigSettingsSource(settings_cls, json_file=local_config_path())
        return init_settings, local_file, env_settings, dotenv_settings, file_secret_settings
