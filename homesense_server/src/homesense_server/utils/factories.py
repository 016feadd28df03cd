from datetime import datetime, timezone

import factory
from homesense_core.domain.models import RoomState


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class RoomStateFactory(factory.Factory):
    class Meta:
        model = RoomState

    room_id = "piramura-room"
    device_address = factory.Sequence(lambda n: f"B0:E9:FE:DC:15:{n % 256:02X}")
    co2_ppm = factory.Sequence(lambda n: 400 + n)
    temperature = 21.8
    humidity = 42
    source_time = None
    last_updated = factory.LazyFunction(_utcnow)
