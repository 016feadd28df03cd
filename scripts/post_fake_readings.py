"""
Post fake readings to a running HomeSense server.

Usage examples
──────────────
# five readings for the default room, one every two seconds
HUB_API_KEY=... python scripts/post_fake_readings.py --count 5 --interval 2

# a different room on a remote server
python scripts/post_fake_readings.py --base-url https://example.com --room kitchen --api-key ...
"""

import argparse
import os
import random
import time
from datetime import datetime, timezone

import requests

BASE_URL = "http://localhost:3000"
FAKE_DEVICE = "FA:KE:00:00:00:01"


# ─────────────────────────── HTTP helper ────────────────────────────
def post(base_url: str, room: str, api_key: str, payload: dict) -> int:
    r = requests.post(
        f"{base_url.rstrip('/')}/api/room/{room}",
        json=payload,
        headers={"X-Api-Key": api_key},
        timeout=5,
    )
    r.raise_for_status()
    return r.status_code


def fake_payload() -> dict:
    return {
        "deviceAddress": FAKE_DEVICE,
        "co2Ppm": random.randint(420, 1800),
        "temperature": round(random.uniform(16.0, 28.0), 1),
        "humidity": random.randint(30, 65),
        "sourceTimestamp": datetime.now(tz=timezone.utc).isoformat(),
    }


# ───────────────────────────── CLI ─────────────────────────────
def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--base-url", default=BASE_URL)
    parser.add_argument("--room", default="piramura-room")
    parser.add_argument("--api-key", default=os.getenv("HUB_API_KEY", ""))
    parser.add_argument("--count", type=int, default=1)
    parser.add_argument("--interval", type=float, default=1.0)
    args = parser.parse_args()

    if not args.api_key:
        parser.error("an API key is required (--api-key or HUB_API_KEY)")

    for i in range(args.count):
        payload = fake_payload()
        status = post(args.base_url, args.room, args.api_key, payload)
        print(f"{status} {args.room} co2={payload['co2Ppm']} temp={payload['temperature']}")
        if i < args.count - 1:
            time.sleep(args.interval)

    r = requests.get(f"{args.base_url.rstrip('/')}/api/room/{args.room}", timeout=5)
    print(f"GET -> {r.status_code} {r.text}")


if __name__ == "__main__":
    main()
