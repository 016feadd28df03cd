import logging
import signal
import sys
from typing import Callable, Optional, Protocol, Tuple

from homesense_core.config.environments import get_settings
from homesense_core.config.settings import Settings

from .scan_listener import AdvertisementHandler, ScanListener
from .scanner import BleakScanThread
from .sensing.switchbot import SwitchBotCO2Decoder
from .uploader import Uploader

log = logging.getLogger(__name__)


class AdvertisementSource(Protocol):
    def start(self) -> None: ...

    def stop(self) -> None: ...

    def join(self, timeout: Optional[float] = None) -> None: ...


SourceFactory = Callable[[AdvertisementHandler], AdvertisementSource]


def make_uploader(settings: Settings) -> Uploader:
    return Uploader(
        base_url=settings.HUB_SERVER_BASE_URL,
        api_key=settings.HUB_API_KEY,
        timeout=settings.HUB_UPLOAD_TIMEOUT_SEC,
        max_workers=settings.HUB_UPLOAD_WORKERS,
    )


def make_scanner(on_advertisement: AdvertisementHandler) -> AdvertisementSource:
    """Create the BLE scanner. This can be overridden for testing."""
    return BleakScanThread(on_advertisement)


def bootstrap(
    settings: Settings,
    source_factory: SourceFactory = make_scanner,
    uploader: Optional[Uploader] = None,
) -> Tuple[ScanListener, AdvertisementSource, Uploader]:
    log.info(f"Starting hub in {settings.ENVIRONMENT.value} environment")
    log.info(f"Room ID: {settings.HUB_ROOM_ID}")
    log.info(f"Target sensor: {settings.HUB_TARGET_ADDRESS}")
    log.info(f"Server: {settings.HUB_SERVER_BASE_URL}")

    uploader = uploader or make_uploader(settings)
    listener = ScanListener(
        SwitchBotCO2Decoder(settings.HUB_TARGET_ADDRESS),
        uploader,
        settings.HUB_ROOM_ID,
    )
    listener.start()

    source = source_factory(listener.on_advertisement)
    source.start()
    return listener, source, uploader


def shutdown(listener: ScanListener, source: AdvertisementSource, uploader: Uploader) -> None:
    source.stop()
    source.join(timeout=5)
    listener.stop()
    uploader.close()
    log.info(f"Rejected blocks: {listener.rejection_counts()}")


def main(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    listener, source, uploader = bootstrap(settings)

    def sigterm_handler(signum, frame):
        log.info("Received shutdown signal, stopping hub...")
        shutdown(listener, source, uploader)
        sys.exit(0)

    signal.signal(signal.SIGTERM, sigterm_handler)
    signal.signal(signal.SIGINT, sigterm_handler)
    signal.pause()
