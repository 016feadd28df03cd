# homesense_server/adapters/api/schemas.py

from datetime import datetime
from typing import Optional

from homesense_core.domain.models import READING_BOUNDS, RoomState, RoomUpdate
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_CO2 = READING_BOUNDS["co2_ppm"]
_TEMPERATURE = READING_BOUNDS["temperature"]
_HUMIDITY = READING_BOUNDS["humidity"]


class RoomUpdateIn(BaseModel):
    """Body of ``POST /api/room/{roomId}``. Numbers are strict: no string coercion."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    device_address: Optional[str] = None
    co2_ppm: float = Field(..., strict=True, ge=_CO2[0], le=_CO2[1])
    temperature: float = Field(..., strict=True, ge=_TEMPERATURE[0], le=_TEMPERATURE[1])
    humidity: float = Field(..., strict=True, ge=_HUMIDITY[0], le=_HUMIDITY[1])
    source_timestamp: Optional[datetime] = None

    def to_domain(self) -> RoomUpdate:
        return RoomUpdate(
            device_address=self.device_address or "",
            co2_ppm=self.co2_ppm,
            temperature=self.temperature,
            humidity=self.humidity,
            source_timestamp=self.source_timestamp,
        )


class RoomStateOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    room_id: str
    device_address: str
    co2_ppm: float
    temperature: float
    humidity: float
    source_time: Optional[datetime] = None
    last_updated: datetime

    @classmethod
    def from_domain(cls, state: RoomState) -> "RoomStateOut":
        return cls(
            room_id=state.room_id,
            device_address=state.device_address,
            co2_ppm=state.co2_ppm,
            temperature=state.temperature,
            humidity=state.humidity,
            source_time=state.source_time,
            last_updated=state.last_updated,
        )


def _number(value: float) -> str:
    # shortest text that round-trips; whole numbers drop the ".0"
    value = float(value)
    return str(int(value)) if value.is_integer() else repr(value)


def render_csv(state: RoomState) -> str:
    """Render ``co2,temperature,humidity``, e.g. ``693,21.8,42``."""
    return ",".join(_number(v) for v in (state.co2_ppm, state.temperature, state.humidity))
