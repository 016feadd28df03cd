import logging
import threading
from collections import Counter
from dataclasses import replace
from enum import Enum
from typing import Callable, Dict, Mapping, Optional

from homesense_core.domain.models import Reading

from homesense_hub.sensing.switchbot import Rejection, SwitchBotCO2Decoder
from homesense_hub.uploader import ReadingSink

logger = logging.getLogger(__name__)

AdvertisementHandler = Callable[[Mapping[int, bytes], Optional[int]], int]


class ScanState(str, Enum):
    STOPPED = "stopped"
    SCANNING = "scanning"


class ScanListener:
    """Turns advertisement events into uploaded readings for one room.

    Holds the hub's only shared mutable state, the last decoded reading. The
    lock covers the write and the snapshot taken for upload, never the upload
    itself, so callbacks from several scanner threads stay consistent without
    waiting on the network.
    """

    def __init__(self, decoder: SwitchBotCO2Decoder, sink: ReadingSink, room_id: str):
        self.decoder = decoder
        self.sink = sink
        self.room_id = room_id
        self.rejections: Counter = Counter()
        self._state = ScanState.STOPPED
        self._lock = threading.Lock()
        self._latest: Optional[Reading] = None

    @property
    def state(self) -> ScanState:
        return self._state

    def start(self) -> None:
        logger.info("Scan listener started for room %s", self.room_id)
        self._state = ScanState.SCANNING

    def stop(self) -> None:
        logger.info("Scan listener stopped")
        self._state = ScanState.STOPPED

    def _reject(self, reason: Rejection) -> None:
        with self._lock:
            self.rejections[reason] += 1

    def rejection_counts(self) -> Dict[Rejection, int]:
        with self._lock:
            return dict(self.rejections)

    def latest(self) -> Optional[Reading]:
        with self._lock:
            return self._latest

    def on_advertisement(self, manufacturer_data: Mapping[int, bytes], rssi: Optional[int]) -> int:
        """Handle one advertisement event. Returns how many readings it produced."""
        if self._state is not ScanState.SCANNING:
            return 0

        accepted = 0
        for company_id, data in manufacturer_data.items():
            result = self.decoder.decode(company_id, data)
            if isinstance(result, Rejection):
                self._reject(result)
                continue

            if not result.is_valid():
                logger.debug(
                    "Dropping implausible reading from %s: temp=%sC, hum=%s%%, co2=%sppm",
                    result.device_address,
                    result.temperature_c,
                    result.humidity_pct,
                    result.co2_ppm,
                )
                self._reject(Rejection.OUT_OF_RANGE)
                continue

            logger.debug(
                "MAC=%s, rssi=%s, temp=%sC, hum=%s%%, co2=%sppm",
                result.device_address,
                rssi,
                result.temperature_c,
                result.humidity_pct,
                result.co2_ppm,
            )

            with self._lock:
                self._latest = replace(result, room_id=self.room_id)
                snapshot = self._latest

            self.sink.send(snapshot, self.room_id)
            accepted += 1

        return accepted
