from .query_room import get_room_state
from .record_room_update import record_room_update

__all__ = [
    "get_room_state",
    "record_room_update",
]
