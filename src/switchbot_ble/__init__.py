"""SwitchBot BLE Protocol Package.

Pure Python package for decoding SwitchBot BLE advertisements and sending
commands to SwitchBot devices, including the encrypted lock and relay channel.
"""

from .const import MANUFACTURER_ID, SERVICE_UUID
from .device import SwitchbotDevice
from .devices import (
    BlindTilt,
    Bot,
    CeilingLight,
    CeilingLightPro,
    ColorBulb,
    Curtain,
    Curtain3,
    EncryptedDevice,
    Humidifier,
    Humidifier2,
    Lock,
    LockInfo,
    LockPro,
    PlugMini,
    PlugMiniJP,
    PowerReading,
    RelaySwitch1,
    RelaySwitch1PM,
    StripLight,
)
from .discovery import AdvertisementScanner, discover_devices
from .exceptions import (
    BLEConnectionError,
    BLETimeoutError,
    ConfigurationError,
    InvalidResponseError,
    ProtocolError,
    SwitchbotError,
)
from .models import (
    Advertisement,
    AdvertisementFrame,
    DecodeFailure,
    DoorState,
    LockResult,
    LockStatus,
    SwitchBotModel,
)
from .parsers import PARSERS, decode, decode_frame
from .registry import DeviceSpec, create_device, resolve
from .transport import ConnectionState

__version__ = "0.1.0"

__all__ = [
    # Main API
    "SwitchbotDevice",
    "discover_devices",
    "AdvertisementScanner",
    "decode",
    "decode_frame",
    "PARSERS",
    "resolve",
    "create_device",
    "DeviceSpec",
    "ConnectionState",
    # Devices
    "BlindTilt",
    "Bot",
    "CeilingLight",
    "CeilingLightPro",
    "ColorBulb",
    "Curtain",
    "Curtain3",
    "EncryptedDevice",
    "Humidifier",
    "Humidifier2",
    "Lock",
    "LockInfo",
    "LockPro",
    "PlugMini",
    "PlugMiniJP",
    "PowerReading",
    "RelaySwitch1",
    "RelaySwitch1PM",
    "StripLight",
    # Exceptions
    "SwitchbotError",
    "BLEConnectionError",
    "BLETimeoutError",
    "ProtocolError",
    "InvalidResponseError",
    "ConfigurationError",
    # Models
    "Advertisement",
    "AdvertisementFrame",
    "DecodeFailure",
    "DoorState",
    "LockResult",
    "LockStatus",
    "SwitchBotModel",
    # Constants
    "SERVICE_UUID",
    "MANUFACTURER_ID",
]
