import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Any, Dict, Optional, Protocol
from urllib.parse import quote

import requests

from homesense_core.domain.models import Reading

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-Api-Key"


class ReadingSink(Protocol):
    """Anything the scan listener can hand a snapshot to."""

    def send(self, reading: Reading, room_id: str) -> None: ...


def build_payload(reading: Reading) -> Dict[str, Any]:
    return {
        "deviceAddress": reading.device_address,
        "co2Ppm": reading.co2_ppm,
        "temperature": reading.temperature_c,
        "humidity": reading.humidity_pct,
        "sourceTimestamp": (
            reading.source_timestamp.isoformat() if reading.source_timestamp else None
        ),
    }


class Uploader(ReadingSink):
    """Pushes readings to the server's room endpoint.

    ``send`` is fire-and-forget: the POST runs on a worker pool and the caller
    gets no completion signal. Failures are logged and dropped, never retried.
    Uploads may overlap, so an older reading can land after a newer one.
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        max_workers: int = 4,
        session: Optional[requests.Session] = None,
        executor: Optional[Executor] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._session = session or requests.Session()
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="upload"
        )

        if not api_key:
            logger.warning("HUB_API_KEY is not set; readings will not be uploaded")

        logger.info("Initializing uploader: base_url=%s, timeout=%ss", self.base_url, timeout)

    def room_url(self, room_id: str) -> str:
        return f"{self.base_url}/api/room/{quote(room_id, safe='')}"

    def push(self, reading: Reading, room_id: str) -> bool:
        """POST one reading synchronously. Returns True on a 2xx answer."""
        if not self.api_key:
            logger.warning("No API key configured, skipping upload for room %s", room_id)
            return False

        try:
            res = self._session.post(
                self.room_url(room_id),
                json=build_payload(reading),
                headers={API_KEY_HEADER: self.api_key},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("Upload error: %s", e)
            return False

        if not res.ok:
            logger.warning("Upload failed: %s %s", res.status_code, res.reason)
            return False

        logger.debug("Uploaded reading for room %s (%s)", room_id, res.status_code)
        return True

    def _push_logged(self, reading: Reading, room_id: str) -> None:
        try:
            self.push(reading, room_id)
        except Exception:
            logger.exception("Unexpected error while uploading reading for room %s", room_id)

    def send(self, reading: Reading, room_id: str) -> None:
        """Dispatch ``push`` to the worker pool and return immediately."""
        try:
            self._executor.submit(self._push_logged, reading, room_id)
        except RuntimeError as e:
            # the pool refuses new work once close() has shut it down
            logger.warning("Uploader closed, dropping reading for room %s: %s", room_id, e)

    def close(self) -> None:
        logger.info("Closing uploader")
        self._executor.shutdown(wait=False)
        self._session.close()
