"""Listen for SwitchBot BLE advertisements and print decoded records.

Usage:
    python examples/listen_advertisements.py --duration 30
    python examples/listen_advertisements.py --model T --all
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections import Counter
from dataclasses import dataclass
from datetime import datetime

from switchbot_ble import Advertisement, AdvertisementScanner


@dataclass
class SeenDevice:
    """Track per-device payload changes."""

    last_payload: bytes = b""
    packets_seen: int = 0
    packets_printed: int = 0


def _timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S")


def _print_advertisement(advertisement: Advertisement) -> None:
    """Print one decoded advertisement."""
    fields = advertisement.data.to_dict()
    for key in ("model", "model_name", "model_friendly_name"):
        fields.pop(key)
    details = " ".join(f"{key}={value}" for key, value in fields.items())
    print(
        f"[{_timestamp()}] {advertisement.data.model_friendly_name} "
        f"({advertisement.address}) rssi={advertisement.rssi} {details}"
    )


async def listen(duration: float, model: str | None, print_all: bool) -> None:
    """Listen for advertisements and print decoded records."""
    seen: dict[str, SeenDevice] = {}
    models_seen: Counter[str] = Counter()

    def callback(device, advertisement: Advertisement) -> None:
        entry = seen.setdefault(advertisement.address, SeenDevice())
        entry.packets_seen += 1

        frame = advertisement.frame
        payload = frame.service_data + frame.manufacturer_data
        if not print_all and payload == entry.last_payload:
            return

        entry.last_payload = payload
        entry.packets_printed += 1
        models_seen[advertisement.data.model_friendly_name] += 1
        _print_advertisement(advertisement)

    print("Listening for SwitchBot advertisements...")
    if duration > 0:
        print(f"Duration: {duration:.1f}s")
    else:
        print("Duration: unlimited (Ctrl+C to stop)")
    print("Mode: printing all packets" if print_all else "Mode: printing only changed payloads")

    async with AdvertisementScanner(callback, model=model):
        if duration > 0:
            await asyncio.sleep(duration)
        else:
            while True:
                await asyncio.sleep(1)

    print("\nSummary:")
    print(f"  devices_seen={len(seen)}")
    print(f"  models_seen={dict(models_seen)}")
    for address, entry in sorted(seen.items()):
        print(
            f"  {address}: packets_seen={entry.packets_seen}, packets_printed={entry.packets_printed}"
        )


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Listen for SwitchBot BLE advertisements and print decoded records."
    )
    parser.add_argument(
        "--duration",
        type=float,
        default=30.0,
        help="Listen duration in seconds (0 = run until Ctrl+C). Default: 30",
    )
    parser.add_argument(
        "--model",
        default=None,
        help="Only print this model discriminator (e.g. H, T, o).",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Print every packet (default: print only changed payloads).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log decode failures and protocol traffic.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)
    try:
        asyncio.run(listen(duration=args.duration, model=args.model, print_all=args.all))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
