import time

from homesense_core.config.settings import Settings

from homesense_hub.hub import bootstrap, shutdown
from homesense_hub.utils.mocks import FakeAdvertisementSource, create_test_frames


class StubUploader:
    def __init__(self):
        self.sent = []
        self.closed = False

    def send(self, reading, room_id):
        self.sent.append((reading, room_id))

    def close(self):
        self.closed = True


def wait_for(predicate, timeout=2.0):
    deadline = time.time() + timeout
    while time.time() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


def test_bootstrap_replays_frames_through_listener_to_uploader():
    settings = Settings(HUB_API_KEY="secret", HUB_ROOM_ID="lab", ENVIRONMENT="testing")
    frames = create_test_frames(5, address=settings.HUB_TARGET_ADDRESS)
    uploader = StubUploader()

    def source_factory(on_advertisement):
        return FakeAdvertisementSource(on_advertisement, frames, interval_s=0.0)

    listener, source, _ = bootstrap(settings, source_factory=source_factory, uploader=uploader)
    assert wait_for(lambda: len(uploader.sent) == 5)
    shutdown(listener, source, uploader)

    assert uploader.closed
    assert [room for _, room in uploader.sent] == ["lab"] * 5
    assert [r.co2_ppm for r, _ in uploader.sent] == [600, 607, 614, 621, 628]
    assert listener.latest().co2_ppm == 628


def test_frames_from_other_sensors_are_not_uploaded():
    settings = Settings(HUB_API_KEY="secret", ENVIRONMENT="testing")
    frames = create_test_frames(3, address="AA:AA:AA:AA:AA:AA")
    uploader = StubUploader()

    def source_factory(on_advertisement):
        return FakeAdvertisementSource(on_advertisement, frames, interval_s=0.0)

    listener, source, _ = bootstrap(settings, source_factory=source_factory, uploader=uploader)
    assert wait_for(lambda: source.delivered == 3)
    shutdown(listener, source, uploader)

    assert uploader.sent == []
    assert listener.latest() is None
