from typing import Optional, Protocol

from homesense_core.domain.models import RoomState


class RoomStateStore(Protocol):
    def get(self, room_id: str) -> Optional[RoomState]: ...

    def set(self, room_id: str, state: RoomState) -> None: ...
