"""BLE transport layer."""

from .channel import CommandChannel
from .connection import BLEConnection, ConnectionState

__all__ = ["BLEConnection", "CommandChannel", "ConnectionState"]
