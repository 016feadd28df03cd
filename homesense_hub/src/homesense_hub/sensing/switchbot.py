import logging
import struct
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union

from homesense_core.domain.models import Reading


class Rejection(str, Enum):
    """Reasons an advertisement block does not yield a reading.

    None of these are errors: a scanner sees plenty of traffic that is simply
    not ours. OUT_OF_RANGE is set by callers for frames from our sensor whose
    values fall outside the storable bounds.
    """

    WRONG_VENDOR = "wrong_vendor"
    TOO_SHORT = "too_short"
    WRONG_DEVICE = "wrong_device"
    OUT_OF_RANGE = "out_of_range"


@dataclass(frozen=True)
class SwitchBotCO2Protocol:
    """Layout of the SwitchBot CO2 meter manufacturer data block.

    Attributes:
        company_id: Bluetooth SIG company identifier registered to SwitchBot.
        min_length: Shortest block that carries the full measurement section.
            Shorter blocks from the same vendor are another advertisement
            sub-type.
        address_length: Number of leading bytes holding the device address.
        temperature_fraction_offset: Byte whose low nibble holds tenths of a degree.
        temperature_offset: Byte holding whole degrees (low 7 bits) and the sign bit.
        humidity_offset: Byte whose low 7 bits hold relative humidity in percent.
        co2_offset: Start of the big-endian uint16 CO2 concentration.
        co2_format: ``struct`` format of the CO2 field.
    """

    company_id: int = 0x0969
    min_length: int = 16
    address_length: int = 6
    temperature_fraction_offset: int = 8
    temperature_offset: int = 9
    humidity_offset: int = 10
    co2_offset: int = 13
    co2_format: str = ">H"

    def __post_init__(self) -> None:
        if self.required_length > self.min_length:
            raise ValueError(
                f"min_length={self.min_length} does not cover the measurement block "
                f"({self.required_length} bytes)"
            )

    @property
    def required_length(self) -> int:
        """Bytes needed to read every field."""
        return max(
            self.address_length,
            self.temperature_fraction_offset + 1,
            self.temperature_offset + 1,
            self.humidity_offset + 1,
            self.co2_offset + struct.calcsize(self.co2_format),
        )


def format_address(raw: bytes) -> str:
    """Format raw address bytes as ``AA:BB:CC:DD:EE:FF``."""
    return ":".join(f"{b:02X}" for b in raw)


class SwitchBotCO2Decoder:
    """Decoder for SwitchBot CO2 meter advertisements.

    The decoder is pure: it holds only immutable configuration and turns one
    manufacturer data block into either a :class:`Reading` or a
    :class:`Rejection`. It never raises for foreign or truncated input.

    Attributes:
        target_address: The single device address readings are accepted from.
        protocol: Protocol constants describing the block layout.
    """

    def __init__(self, target_address: str, protocol: Optional[SwitchBotCO2Protocol] = None):
        self.target_address = target_address.strip().upper()
        self.protocol = protocol or SwitchBotCO2Protocol()
        self.logger = logging.getLogger(f"{__name__}.SwitchBotCO2Decoder")

    def _temperature(self, frame: bytes) -> float:
        p = self.protocol
        magnitude = (frame[p.temperature_fraction_offset] & 0x0F) / 10 + (
            frame[p.temperature_offset] & 0x7F
        )
        # the sensor sets the high bit for positive values
        return magnitude if frame[p.temperature_offset] & 0x80 else -magnitude

    def decode(
        self,
        company_id: int,
        data: bytes,
        now: Optional[datetime] = None,
    ) -> Union[Reading, Rejection]:
        """Decode one manufacturer data block.

        Args:
            company_id: Company identifier the block was tagged with.
            data: The block payload, without the company identifier.
            now: Decode time to stamp the reading with. Defaults to UTC now.

        Returns:
            A Reading without a room id, or the Rejection explaining why the
            block was ignored.
        """
        p = self.protocol
        if company_id != p.company_id:
            return Rejection.WRONG_VENDOR

        frame = bytes(data)
        if len(frame) < p.min_length:
            self.logger.debug(f"Ignoring {len(frame)}-byte block (< {p.min_length})")
            return Rejection.TOO_SHORT

        address = format_address(frame[: p.address_length])
        if address != self.target_address:
            return Rejection.WRONG_DEVICE

        (co2,) = struct.unpack_from(p.co2_format, frame, p.co2_offset)
        return Reading(
            device_address=address,
            co2_ppm=co2,
            temperature_c=self._temperature(frame),
            humidity_pct=frame[p.humidity_offset] & 0x7F,
            source_timestamp=now or datetime.now(tz=timezone.utc),
        )
