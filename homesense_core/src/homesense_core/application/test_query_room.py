from datetime import datetime, timezone

from homesense_core.application.query_room import get_room_state
from homesense_core.domain.models import RoomState


class FakeStore:
    def __init__(self, states):
        self.states = states

    def get(self, room_id):
        return self.states.get(room_id)

    def set(self, room_id, state):
        self.states[room_id] = state


def test_get_room_state_returns_stored_state():
    state = RoomState(
        room_id="kitchen",
        device_address="abc",
        co2_ppm=512,
        temperature=20.1,
        humidity=40,
        source_time=None,
        last_updated=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    store = FakeStore({"kitchen": state})

    assert get_room_state("kitchen", store) is state


def test_get_room_state_returns_none_for_unknown_room():
    assert get_room_state("room-never-set", FakeStore({})) is None
