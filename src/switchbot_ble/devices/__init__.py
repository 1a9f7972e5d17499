"""Per-family SwitchBot device classes."""

from .base import EncryptedDevice, StateDevice
from .bot import Bot
from .curtain import BlindTilt, Curtain, Curtain3
from .humidifier import Humidifier, Humidifier2
from .light import CeilingLight, CeilingLightPro, ColorBulb, StripLight
from .lock import Lock, LockInfo, LockPro
from .plug import PlugMini, PlugMiniJP
from .relay import PowerReading, RelaySwitch1, RelaySwitch1PM

__all__ = [
    "EncryptedDevice",
    "StateDevice",
    "Bot",
    "BlindTilt",
    "Curtain",
    "Curtain3",
    "Humidifier",
    "Humidifier2",
    "CeilingLight",
    "CeilingLightPro",
    "ColorBulb",
    "StripLight",
    "Lock",
    "LockInfo",
    "LockPro",
    "PlugMini",
    "PlugMiniJP",
    "PowerReading",
    "RelaySwitch1",
    "RelaySwitch1PM",
]
