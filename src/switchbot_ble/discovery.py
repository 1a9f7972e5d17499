"""Scanning for SwitchBot advertisements."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, Callable

from bleak import BleakScanner

from .const import (
    DEFAULT_DISCOVERY_DURATION,
    MANUFACTURER_ID,
    MAX_DISCOVERY_DURATION,
    MIN_DISCOVERY_DURATION,
    SERVICE_DATA_UUIDS,
)
from .diagnostics import DiagnosticSink, logger_sink
from .exceptions import BLEConnectionError, ConfigurationError
from .models.advertisement import Advertisement, AdvertisementFrame
from .models.enums import SwitchBotModel
from .parsers import DETECTOR_MODEL_ID, decode_frame
from .registry import create_device

if TYPE_CHECKING:
    from bleak.backends.device import BLEDevice
    from bleak.backends.scanner import AdvertisementData

    from .device import SwitchbotDevice

_LOGGER = logging.getLogger(__name__)

AdvertisementCallback = Callable[["BLEDevice", Advertisement], None]


def frame_from_advertisement_data(advertisement_data: AdvertisementData) -> AdvertisementFrame | None:
    """Pick the SwitchBot service data and manufacturer payload, None if absent."""
    service_data = b""
    for uuid in SERVICE_DATA_UUIDS:
        if uuid in advertisement_data.service_data:
            service_data = bytes(advertisement_data.service_data[uuid])
            break
    manufacturer_data = bytes(advertisement_data.manufacturer_data.get(MANUFACTURER_ID, b""))
    if not service_data and not manufacturer_data:
        return None
    return AdvertisementFrame(service_data=service_data, manufacturer_data=manufacturer_data)


class AdvertisementScanner:
    """Decode SwitchBot advertisements while scanning.

    Frames that fail to decode are reported to the sink and skipped; they
    never stop the scan.

    Usage:
        async with AdvertisementScanner(callback, model=SwitchBotModel.METER):
            await asyncio.sleep(30)
    """

    def __init__(
            self,
            callback: AdvertisementCallback | None = None,
            model: SwitchBotModel | str | None = None,
            address: str | None = None,
            sink: DiagnosticSink | None = None,
    ):
        self._callback = callback
        self.model = SwitchBotModel.from_value(model) if model is not None else None
        self.address = address.upper() if address else None
        self._sink = sink or logger_sink(_LOGGER)
        self._scanner: BleakScanner | None = None

    async def __aenter__(self) -> AdvertisementScanner:
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.stop()

    def handle(self, device: BLEDevice, advertisement_data: AdvertisementData) -> Advertisement | None:
        """Decode one detection and pass it to the callback if it matches the filters."""
        if self.address and device.address.upper() != self.address:
            return None
        frame = frame_from_advertisement_data(advertisement_data)
        if frame is None:
            return None

        # A keypad may advertise the leak detector discriminator
        forced = None
        if self.model is SwitchBotModel.KEYPAD and frame.service_data[:1] == bytes([DETECTOR_MODEL_ID]):
            forced = SwitchBotModel.KEYPAD

        record = decode_frame(frame, self._sink, forced)
        if not record:
            return None
        if self.model is not None and record.model is not self.model:
            return None

        advertisement = Advertisement(
            address=device.address,
            data=record,
            rssi=advertisement_data.rssi,
            local_name=advertisement_data.local_name or device.name,
            frame=frame,
        )
        if self._callback is not None:
            self._callback(device, advertisement)
        return advertisement

    async def start(self) -> None:
        """Start scanning.

        Raises:
            BLEConnectionError: If the BLE adapter cannot start scanning
        """
        if self._scanner is not None:
            return
        scanner = BleakScanner(detection_callback=self.handle)
        try:
            await scanner.start()
        except Exception as e:
            raise BLEConnectionError(f"Failed to start scanning: {e}") from e
        self._scanner = scanner
        _LOGGER.debug("Scanning started")

    async def stop(self) -> None:
        """Stop scanning."""
        scanner, self._scanner = self._scanner, None
        if scanner is None:
            return
        try:
            await scanner.stop()
        except Exception as e:
            _LOGGER.warning("Error while stopping scan: %s", e)
        _LOGGER.debug("Scanning stopped")


async def discover_devices(
        duration: float = DEFAULT_DISCOVERY_DURATION,
        model: SwitchBotModel | str | None = None,
        address: str | None = None,
        quick: bool = False,
        sink: DiagnosticSink | None = None,
        **device_kwargs,
) -> list[SwitchbotDevice]:
    """Scan and return one device object per matching peripheral.

    Args:
        duration: Scan duration in seconds (default: 5)
        model: Only return devices of this model
        address: Only return the device with this MAC address
        quick: Stop at the first match
        sink: Optional diagnostic sink for decode failures
        **device_kwargs: Passed to each device class (e.g. key material)

    Returns:
        Device objects in discovery order; ``advertisement`` holds the
        latest decoded advertisement of each

    Raises:
        ValueError: If duration is out of bounds
        BLEConnectionError: If scanning cannot start
    """
    if not MIN_DISCOVERY_DURATION <= duration <= MAX_DISCOVERY_DURATION:
        raise ValueError(
            f"duration must be between {MIN_DISCOVERY_DURATION} and {MAX_DISCOVERY_DURATION} seconds"
        )

    found: dict[str, SwitchbotDevice] = {}
    first_match = asyncio.Event()

    def on_advertisement(ble_device: BLEDevice, advertisement: Advertisement) -> None:
        device = found.get(advertisement.address)
        if device is None:
            try:
                device = create_device(
                    advertisement.model,
                    advertisement.address,
                    ble_device,
                    local_name=advertisement.local_name,
                    **device_kwargs,
                )
            except ConfigurationError as e:
                _LOGGER.warning("Skipping %s: %s", advertisement.address, e)
                return
            found[advertisement.address] = device
            _LOGGER.debug("Discovered %s %s", device.friendly_name, advertisement.address)
        device.advertisement = advertisement
        first_match.set()

    async with AdvertisementScanner(on_advertisement, model=model, address=address, sink=sink):
        if quick:
            with contextlib.suppress(asyncio.TimeoutError):
                await asyncio.wait_for(first_match.wait(), timeout=duration)
        else:
            await asyncio.sleep(duration)

    return list(found.values())
