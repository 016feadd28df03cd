import threading
from typing import Dict, List, Optional

from homesense_core.domain.models import RoomState
from homesense_core.domain.ports import RoomStateStore


class InMemoryRoomStateStore(RoomStateStore):
    """Latest RoomState per room, for the lifetime of the process.

    RoomState is immutable, so a reader always gets a complete old or new
    state. Concurrent writers to one room resolve by completion order.
    """

    def __init__(self):
        self._states: Dict[str, RoomState] = {}
        self._lock = threading.Lock()

    def get(self, room_id: str) -> Optional[RoomState]:
        with self._lock:
            return self._states.get(room_id)

    def set(self, room_id: str, state: RoomState) -> None:
        with self._lock:
            self._states[room_id] = state

    def rooms(self) -> List[str]:
        with self._lock:
            return sorted(self._states)
