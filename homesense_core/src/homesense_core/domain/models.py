from dataclasses import dataclass
from datetime import datetime
from typing import Optional

# inclusive (low, high) bounds a reading must satisfy before it may be stored
READING_BOUNDS = {
    "co2_ppm": (0.0, 10000.0),
    "temperature": (-50.0, 60.0),
    "humidity": (0.0, 100.0),
}


def within_bounds(co2_ppm: float, temperature: float, humidity: float) -> bool:
    values = {"co2_ppm": co2_ppm, "temperature": temperature, "humidity": humidity}
    for name, (low, high) in READING_BOUNDS.items():
        if not low <= values[name] <= high:
            return False
    return True


@dataclass(frozen=True)
class Reading:
    device_address: str
    co2_ppm: float
    temperature_c: float
    humidity_pct: float
    source_timestamp: datetime
    room_id: Optional[str] = None

    def is_valid(self) -> bool:
        return within_bounds(self.co2_ppm, self.temperature_c, self.humidity_pct)


@dataclass(frozen=True)
class RoomUpdate:
    """Validated payload pushed by a hub for one room."""

    device_address: str
    co2_ppm: float
    temperature: float
    humidity: float
    source_timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class RoomState:
    room_id: str
    device_address: str
    co2_ppm: float
    temperature: float
    humidity: float
    source_time: Optional[datetime]
    last_updated: datetime  # server wall clock at ingestion, not sensing time
