"""Protocol constants shared across the package."""

from __future__ import annotations

from typing import Final

# GATT layout of every SwitchBot peripheral
SERVICE_UUID: Final = "cba20d00-224d-11e6-9fb8-0002a5d5c51b"
WRITE_CHAR_UUID: Final = "cba20002-224d-11e6-9fb8-0002a5d5c51b"
NOTIFY_CHAR_UUID: Final = "cba20003-224d-11e6-9fb8-0002a5d5c51b"
DEVICE_NAME_CHAR_UUID: Final = "00002a00-0000-1000-8000-00805f9b34fb"

# Advertisement identifiers
MANUFACTURER_ID: Final = 0x0969  # 2409 decimal
SERVICE_DATA_UUIDS: Final = (
    "0000fd3d-0000-1000-8000-00805f9b34fb",
    "00000d00-0000-1000-8000-00805f9b34fb",
)

# Timeouts in seconds
COMMAND_TIMEOUT: Final = 3.0
CONNECT_TIMEOUT: Final = 10.0
READ_TIMEOUT: Final = 3.0

# Discovery bounds in seconds
DEFAULT_DISCOVERY_DURATION: Final = 5.0
MIN_DISCOVERY_DURATION: Final = 0.001
MAX_DISCOVERY_DURATION: Final = 60.0

DEFAULT_MAX_ATTEMPTS: Final = 4
