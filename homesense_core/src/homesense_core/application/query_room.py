# homesense_core/application/query_room.py

import logging
from typing import Optional

from homesense_core.domain.models import RoomState
from homesense_core.domain.ports import RoomStateStore

log = logging.getLogger(__name__)


def get_room_state(room_id: str, store: RoomStateStore) -> Optional[RoomState]:
    state = store.get(room_id)
    log.debug("[GET] %s %s", room_id, "HIT" if state is not None else "MISS")
    return state
