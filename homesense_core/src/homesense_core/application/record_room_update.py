# homesense_core/application/record_room_update.py

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from homesense_core.domain.models import RoomState, RoomUpdate, within_bounds
from homesense_core.domain.ports import RoomStateStore

log = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


def record_room_update(
    room_id: str,
    update: RoomUpdate,
    store: RoomStateStore,
    clock: Optional[Callable[[], datetime]] = None,
) -> RoomState:
    if not within_bounds(update.co2_ppm, update.temperature, update.humidity):
        raise ValueError("invalid range")

    state = RoomState(
        room_id=room_id,
        device_address=update.device_address,
        co2_ppm=update.co2_ppm,
        temperature=update.temperature,
        humidity=update.humidity,
        source_time=update.source_timestamp,
        last_updated=(clock or _utcnow)(),
    )
    store.set(room_id, state)

    log.info(
        "[UPDATE] %s CO2=%s temp=%s hum=%s",
        room_id,
        state.co2_ppm,
        state.temperature,
        state.humidity,
    )
    return state
