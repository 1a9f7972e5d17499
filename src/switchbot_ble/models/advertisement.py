"""BLE advertisement data structures."""

from __future__ import annotations

from dataclasses import dataclass, field

from .records import ServiceDataRecord


@dataclass(frozen=True)
class AdvertisementFrame:
    """Raw payloads of one received broadcast.

    Attributes:
        service_data: SwitchBot service data (byte 0 carries the model)
        manufacturer_data: Manufacturer record payload, company id 0x0969
            already stripped (Bleak delivers it as {0x0969: bytes([...])})
    """

    service_data: bytes = b""
    manufacturer_data: bytes = b""


@dataclass(frozen=True)
class DecodeFailure:
    """Advertisement that could not be decoded.

    Returned instead of raised: a malformed frame must never stop scanning.
    """

    parser: str
    reason: str

    def __bool__(self) -> bool:
        return False


@dataclass
class Advertisement:
    """Decoded advertisement of one peripheral, as emitted by the scanner."""

    address: str
    data: ServiceDataRecord
    rssi: int | None = None
    local_name: str | None = None
    frame: AdvertisementFrame = field(default_factory=AdvertisementFrame)

    @property
    def model(self):
        return self.data.model
