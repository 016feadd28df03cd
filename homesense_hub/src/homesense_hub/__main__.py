"""
Canonical entry point for homesense_hub package.

Usage:
    python -m homesense_hub --environment development
    python -m homesense_hub --environment testing --test-mode
"""

import argparse
import logging
import os
import time

from homesense_core.config.environments import ENVIRONMENT_ENV, get_settings
from homesense_core.config.logs import setup_logging
from homesense_core.config.settings import Settings

from homesense_hub.hub import bootstrap, shutdown
from homesense_hub.hub import main as hub_main
from homesense_hub.utils.mocks import FakeAdvertisementSource, create_test_frames


def run_test_hub(config: Settings, interval: float, count: int) -> None:
    """Run the hub against replayed frames instead of the radio."""
    log = logging.getLogger(__name__)

    log.info("Running hub in TEST mode...")
    log.info(f"Interval: {interval}s")
    log.info(f"Frames: {count}")

    frames = create_test_frames(count, address=config.HUB_TARGET_ADDRESS)

    def fake_source_factory(on_advertisement):
        return FakeAdvertisementSource(on_advertisement, frames, interval_s=interval)

    listener, source, uploader = bootstrap(config, source_factory=fake_source_factory)
    try:
        time.sleep(count * interval + 2)
    finally:
        shutdown(listener, source, uploader)

    log.info(f"Test hub completed, last reading: {listener.latest()}")
    return None


def main() -> None:
    """Main entry point for homesense_hub."""
    parser = argparse.ArgumentParser(description="HomeSense Hub: BLE scan -> server upload")
    parser.add_argument(
        "--environment",
        choices=["production", "development", "testing"],
        default="development",
        help="Environment to run in",
    )
    parser.add_argument("--room-id", help="Room ID (overrides config)")
    parser.add_argument("--target-address", help="Sensor MAC address (overrides config)")
    parser.add_argument(
        "--test-mode", action="store_true", help="Replay synthesized frames instead of scanning"
    )
    parser.add_argument(
        "--test-count", type=int, default=10, help="Number of test frames to replay"
    )
    parser.add_argument(
        "--test-interval", type=float, default=1.0, help="Interval between test frames (seconds)"
    )

    args = parser.parse_args()

    # Set environment variable for config
    os.environ[ENVIRONMENT_ENV] = args.environment

    config = get_settings()
    overrides = {}
    if args.room_id:
        overrides["HUB_ROOM_ID"] = args.room_id
    if args.target_address:
        overrides["HUB_TARGET_ADDRESS"] = args.target_address
    if overrides:
        config = config.model_copy(update=overrides)

    setup_logging(config)
    log = logging.getLogger(__name__)

    log.info("Starting HomeSense hub...")
    log.info(f"Environment: {args.environment}")
    if not config.HUB_API_KEY:
        log.warning("HUB_API_KEY is not set; uploads will be skipped")

    if args.test_mode:
        run_test_hub(config, args.test_interval, args.test_count)
    else:
        hub_main(config)


if __name__ == "__main__":
    main()
