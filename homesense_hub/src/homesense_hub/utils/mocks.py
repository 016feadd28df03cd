import struct
import threading
from typing import List, Optional

from homesense_hub.scan_listener import AdvertisementHandler
from homesense_hub.sensing.switchbot import SwitchBotCO2Protocol


def build_frame(
    *,
    address: str = "B0:E9:FE:DC:15:36",
    temperature: float = 21.8,
    humidity: int = 42,
    co2: int = 689,
    length: Optional[int] = None,
    protocol: Optional[SwitchBotCO2Protocol] = None,
) -> bytes:
    """Build a SwitchBot CO2 meter manufacturer data block.

    Args:
        address: Device address written into the first bytes.
        temperature: Temperature in degrees C, resolution 0.1.
        humidity: Relative humidity in percent.
        co2: CO2 concentration in ppm.
        length: Truncate or pad the block to this many bytes.
        protocol: Layout to encode with. Defaults to the SwitchBot layout.

    Returns:
        The encoded block.
    """
    p = protocol or SwitchBotCO2Protocol()

    frame = bytearray(max(p.min_length, length or 0))
    frame[: p.address_length] = bytes.fromhex(address.replace(":", ""))
    frame[6] = 0x2A  # sequence number, ignored by the decoder
    frame[7] = 0x64  # battery percent, ignored by the decoder

    whole, tenths = divmod(round(abs(temperature) * 10), 10)
    frame[p.temperature_fraction_offset] = tenths & 0x0F
    frame[p.temperature_offset] = (whole & 0x7F) | (0x80 if temperature >= 0 else 0x00)
    frame[p.humidity_offset] = humidity & 0x7F
    struct.pack_into(p.co2_format, frame, p.co2_offset, co2)

    if length is not None:
        return bytes(frame[:length])
    return bytes(frame)


def create_test_frames(count: int, address: str = "B0:E9:FE:DC:15:36") -> List[bytes]:
    """Create a list of plausible, slowly drifting frames."""
    return [
        build_frame(
            address=address,
            temperature=20.0 + (i % 30) / 10,
            humidity=40 + i % 10,
            co2=600 + 7 * i,
        )
        for i in range(count)
    ]


class FakeAdvertisementSource(threading.Thread):
    """Replays frames to an advertisement callback instead of scanning the radio.

    Quacks like :class:`homesense_hub.scanner.BleakScanThread` so the hub can
    run end to end on a machine without Bluetooth.
    """

    daemon = True

    def __init__(
        self,
        on_advertisement: AdvertisementHandler,
        frames: List[bytes],
        interval_s: float = 1.0,
        company_id: int = SwitchBotCO2Protocol.company_id,
        rssi: int = -60,
    ):
        super().__init__(name="fake-ble-scan")
        self.on_advertisement = on_advertisement
        self.frames = frames
        self.interval_s = interval_s
        self.company_id = company_id
        self.rssi = rssi
        self.delivered = 0
        self.s_stop = threading.Event()

    def stop(self) -> None:
        self.s_stop.set()

    def run(self) -> None:
        for frame in self.frames:
            if self.s_stop.is_set():
                break
            self.on_advertisement({self.company_id: frame}, self.rssi)
            self.delivered += 1
            self.s_stop.wait(self.interval_s)
