import asyncio
import logging
import threading

from bleak import BleakScanner
from bleak.backends.device import BLEDevice
from bleak.backends.scanner import AdvertisementData

from homesense_hub.scan_listener import AdvertisementHandler

logger = logging.getLogger(__name__)


class BleakScanThread(threading.Thread):
    """Runs a bleak scanner on a private event loop until stopped.

    Every detection is forwarded as ``(manufacturer_data, rssi)``. bleak owns
    adapter reconnection; this thread only starts and stops the scan.
    """

    daemon = True

    def __init__(
        self,
        on_advertisement: AdvertisementHandler,
        scanning_mode: str = "active",
        poll_interval_s: float = 0.5,
    ):
        super().__init__(name="ble-scan")
        self.on_advertisement = on_advertisement
        self.scanning_mode = scanning_mode
        self.poll_interval_s = poll_interval_s
        self.s_stop = threading.Event()

    def stop(self) -> None:
        self.s_stop.set()

    def _on_detect(self, device: BLEDevice, advertisement_data: AdvertisementData) -> None:
        if not advertisement_data.manufacturer_data:
            return
        try:
            self.on_advertisement(advertisement_data.manufacturer_data, advertisement_data.rssi)
        except Exception:
            logger.exception("Advertisement handler failed for %s", device.address)

    async def _scan(self) -> None:
        scanner = BleakScanner(detection_callback=self._on_detect, scanning_mode=self.scanning_mode)
        await scanner.start()
        logger.info("BLE scan started (%s mode)", self.scanning_mode)
        try:
            while not self.s_stop.is_set():
                await asyncio.sleep(self.poll_interval_s)
        finally:
            await scanner.stop()
            logger.info("BLE scan stopped")

    def run(self) -> None:
        asyncio.run(self._scan())
