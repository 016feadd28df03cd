import logging
from typing import Optional

from fastapi import FastAPI
from homesense_core.config.environments import get_settings
from homesense_core.config.settings import Settings
from homesense_core.domain.ports import RoomStateStore

from homesense_server.adapters.api.routes import router
from homesense_server.adapters.memory.store import InMemoryRoomStateStore

log = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[RoomStateStore] = None,
) -> FastAPI:
    settings = settings or get_settings()

    if not settings.HUB_API_KEY:
        log.warning("HUB_API_KEY is not set; every POST will be answered with 401")

    app = FastAPI(title="HomeSense Server", version="0.1.0")
    app.state.settings = settings
    app.state.store = store or InMemoryRoomStateStore()
    app.include_router(router)
    return app
