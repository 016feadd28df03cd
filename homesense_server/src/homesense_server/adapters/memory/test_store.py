import threading

from homesense_server.adapters.memory.store import InMemoryRoomStateStore
from homesense_server.utils.factories import RoomStateFactory


def test_set_then_get_returns_equal_state():
    store = InMemoryRoomStateStore()
    state = RoomStateFactory(room_id="room-a")

    store.set("room-a", state)

    assert store.get("room-a") == state


def test_get_unknown_room_returns_none():
    assert InMemoryRoomStateStore().get("room-never-set") is None


def test_set_replaces_existing_state():
    store = InMemoryRoomStateStore()
    first = RoomStateFactory(room_id="room-a", co2_ppm=500)
    second = RoomStateFactory(room_id="room-a", co2_ppm=900)

    store.set("room-a", first)
    store.set("room-a", second)

    assert store.get("room-a") is second
    assert store.rooms() == ["room-a"]


def test_rooms_are_independent():
    store = InMemoryRoomStateStore()
    store.set("kitchen", RoomStateFactory(room_id="kitchen"))
    store.set("bedroom", RoomStateFactory(room_id="bedroom"))

    assert store.get("kitchen").room_id == "kitchen"
    assert store.get("bedroom").room_id == "bedroom"
    assert store.rooms() == ["bedroom", "kitchen"]


def test_concurrent_writers_leave_exactly_one_written_state():
    for n in (2, 8, 64):
        store = InMemoryRoomStateStore()
        states = RoomStateFactory.build_batch(n, room_id="room-a")
        barrier = threading.Barrier(n)

        def write(state):
            barrier.wait()
            store.set("room-a", state)

        threads = [threading.Thread(target=write, args=(s,)) for s in states]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        result = store.get("room-a")
        assert any(result is s for s in states)


def test_readers_never_observe_partial_states():
    store = InMemoryRoomStateStore()
    states = [RoomStateFactory(room_id="room-a", co2_ppm=i, humidity=i % 100) for i in range(200)]
    seen = []
    done = threading.Event()

    def reader():
        while not done.is_set():
            state = store.get("room-a")
            if state is not None:
                seen.append(state)

    def writer():
        for s in states:
            store.set("room-a", s)

    r = threading.Thread(target=reader)
    r.start()
    writer()
    done.set()
    r.join()

    for state in seen:
        assert state.humidity == state.co2_ppm % 100
