import threading
from typing import List, Tuple

from homesense_core.domain.models import Reading

from homesense_hub.scan_listener import ScanListener, ScanState
from homesense_hub.sensing.switchbot import Rejection, SwitchBotCO2Decoder
from homesense_hub.utils.mocks import build_frame

TARGET = "B0:E9:FE:DC:15:36"
SWITCHBOT = 0x0969


class RecordingSink:
    def __init__(self):
        self.calls: List[Tuple[Reading, str]] = []
        self._lock = threading.Lock()

    def send(self, reading: Reading, room_id: str) -> None:
        with self._lock:
            self.calls.append((reading, room_id))


def make_listener(sink=None) -> ScanListener:
    return ScanListener(SwitchBotCO2Decoder(TARGET), sink or RecordingSink(), "piramura-room")


def test_listener_starts_stopped_and_ignores_events():
    sink = RecordingSink()
    listener = make_listener(sink)

    assert listener.state is ScanState.STOPPED
    assert listener.on_advertisement({SWITCHBOT: build_frame()}, -60) == 0
    assert sink.calls == []
    assert listener.latest() is None


def test_start_and_stop_transitions():
    listener = make_listener()
    listener.start()
    assert listener.state is ScanState.SCANNING
    listener.stop()
    assert listener.state is ScanState.STOPPED


def test_decoded_reading_is_stored_and_uploaded():
    sink = RecordingSink()
    listener = make_listener(sink)
    listener.start()

    assert listener.on_advertisement({SWITCHBOT: build_frame(co2=693)}, -58) == 1

    latest = listener.latest()
    assert latest.co2_ppm == 693
    assert latest.room_id == "piramura-room"
    assert sink.calls == [(latest, "piramura-room")]


def test_every_vendor_block_is_considered():
    sink = RecordingSink()
    listener = make_listener(sink)
    listener.start()

    accepted = listener.on_advertisement(
        {
            0x004C: b"\x02\x15" + bytes(20),
            SWITCHBOT: build_frame(co2=800),
        },
        -70,
    )

    assert accepted == 1
    assert listener.rejections[Rejection.WRONG_VENDOR] == 1
    assert sink.calls[0][0].co2_ppm == 800


def test_rejections_are_counted_and_not_uploaded():
    sink = RecordingSink()
    listener = make_listener(sink)
    listener.start()

    listener.on_advertisement({SWITCHBOT: build_frame(length=10)}, -60)
    listener.on_advertisement({SWITCHBOT: build_frame(address="11:22:33:44:55:66")}, -60)

    assert sink.calls == []
    assert listener.rejections[Rejection.TOO_SHORT] == 1
    assert listener.rejections[Rejection.WRONG_DEVICE] == 1
    assert listener.latest() is None


def test_latest_is_overwritten_by_newer_frames():
    listener = make_listener()
    listener.start()

    listener.on_advertisement({SWITCHBOT: build_frame(co2=600)}, -60)
    listener.on_advertisement({SWITCHBOT: build_frame(co2=650)}, -60)

    assert listener.latest().co2_ppm == 650


def test_concurrent_callbacks_produce_consistent_snapshots():
    sink = RecordingSink()
    listener = make_listener(sink)
    listener.start()
    frames = {i: build_frame(co2=1000 + i, humidity=i % 100) for i in range(50)}

    threads = [
        threading.Thread(target=listener.on_advertisement, args=({SWITCHBOT: frame}, -60))
        for frame in frames.values()
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(sink.calls) == 50
    for reading, _room in sink.calls:
        i = int(reading.co2_ppm) - 1000
        assert reading.humidity_pct == i % 100
    assert listener.latest() in [reading for reading, _ in sink.calls]


def test_out_of_range_readings_are_dropped_and_counted():
    sink = RecordingSink()
    listener = make_listener(sink)
    listener.start()

    assert listener.on_advertisement({SWITCHBOT: build_frame(humidity=120)}, -60) == 0
    assert listener.on_advertisement({SWITCHBOT: build_frame(temperature=99.5)}, -60) == 0

    assert sink.calls == []
    assert listener.latest() is None
    assert listener.rejection_counts() == {Rejection.OUT_OF_RANGE: 2}


def test_rejections_from_concurrent_callbacks_are_all_counted():
    listener = make_listener()
    listener.start()
    short = build_frame(length=10)
    barrier = threading.Barrier(16)

    def deliver():
        barrier.wait()
        for _ in range(200):
            listener.on_advertisement({SWITCHBOT: short}, -60)

    threads = [threading.Thread(target=deliver) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert listener.rejection_counts() == {Rejection.TOO_SHORT: 16 * 200}
