"""Exceptions raised by the SwitchBot BLE package."""

from __future__ import annotations


class SwitchbotError(Exception):
    """Base exception for all SwitchBot BLE errors."""


class BLEConnectionError(SwitchbotError):
    """Connecting, writing or subscribing through the BLE stack failed."""


class BLETimeoutError(SwitchbotError):
    """No notification arrived within the command timeout."""


class ProtocolError(SwitchbotError):
    """Device answered with a status or length outside the accepted set.

    Attributes:
        response: Raw response bytes, kept for diagnostics
    """

    def __init__(self, message: str, response: bytes = b""):
        super().__init__(message)
        self.response = bytes(response)


class InvalidResponseError(ProtocolError):
    """Response structure could not be interpreted."""


class ConfigurationError(SwitchbotError):
    """Encryption key or key id is missing or malformed."""
