"""BLE connection management."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import TYPE_CHECKING, Callable

from bleak import BleakClient, BleakScanner
from bleak_retry_connector import BleakClientWithServiceCache, establish_connection

from ..const import (
    CONNECT_TIMEOUT,
    DEFAULT_MAX_ATTEMPTS,
    NOTIFY_CHAR_UUID,
    READ_TIMEOUT,
    WRITE_CHAR_UUID,
)
from ..exceptions import BLEConnectionError, BLETimeoutError

if TYPE_CHECKING:
    from bleak.backends.device import BLEDevice

_LOGGER = logging.getLogger(__name__)

NotificationHandler = Callable[[bytes], None]


class ConnectionState(str, Enum):
    """Lifecycle of one peripheral connection."""
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    DISCONNECTING = "disconnecting"


class BLEConnection:
    """Manages the BLE connection to one SwitchBot peripheral.

    Features:
    - Automatic retry logic with bleak-retry-connector
    - Service caching for faster reconnections
    - Context manager for automatic cleanup
    - Notifications from the notify characteristic forwarded to a handler

    The connection never reconnects on its own: a peripheral that drops the
    link moves the state back to DISCONNECTED and the owner decides.
    """

    def __init__(
            self,
            mac_address: str,
            ble_device: BLEDevice | None = None,
            timeout: float = CONNECT_TIMEOUT,
            max_attempts: int = DEFAULT_MAX_ATTEMPTS,
            use_services_cache: bool = True,
    ):
        """Initialize BLE connection manager.

        Args:
            mac_address: Device MAC address
            ble_device: Optional BLEDevice, e.g. from a previous scan
            timeout: Connection timeout in seconds (default: 10)
            max_attempts: Maximum connection attempts for bleak-retry-connector (default: 4)
            use_services_cache: Enable GATT service caching for faster reconnections (default: True)
        """
        self.mac_address = mac_address
        self.ble_device = ble_device
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.use_services_cache = use_services_cache

        self.state = ConnectionState.DISCONNECTED
        self.notification_handler: NotificationHandler | None = None
        self._client: BleakClient | None = None
        self._connect_lock = asyncio.Lock()

    async def __aenter__(self) -> BLEConnection:
        """Connect to device (context manager entry)."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Disconnect from device (context manager exit)."""
        await self.disconnect()

    async def connect(self) -> None:
        """Establish BLE connection and subscribe to the notify characteristic.

        Raises:
            BLEConnectionError: If connection fails
            BLETimeoutError: If connection times out
        """
        async with self._connect_lock:
            # Concurrent callers wait here and reuse the first connection
            if self.is_connected:
                return
            await self._establish()

    async def _establish(self) -> None:
        self.state = ConnectionState.CONNECTING
        try:
            _LOGGER.debug(
                "Connecting to %s with bleak-retry-connector (max_attempts=%d)",
                self.mac_address,
                self.max_attempts
            )

            if self.ble_device:
                device = self.ble_device
            else:
                device = await BleakScanner.find_device_by_address(
                    self.mac_address,
                    timeout=self.timeout
                )
                if device is None:
                    raise BLEConnectionError(
                        f"Device {self.mac_address} not found during scan"
                    )

            self._client = await establish_connection(
                client_class=BleakClientWithServiceCache,
                device=device,
                name=device.name or self.mac_address,
                disconnected_callback=self._on_disconnected,
                max_attempts=self.max_attempts,
                use_services_cache=self.use_services_cache,
                timeout=self.timeout,
            )

            await self._client.start_notify(NOTIFY_CHAR_UUID, self._notification_callback)

        except asyncio.TimeoutError as e:
            await self._abort_connect()
            raise BLETimeoutError(
                f"Connection timeout after {self.timeout}s"
            ) from e
        except BLEConnectionError:
            await self._abort_connect()
            raise
        except Exception as e:
            await self._abort_connect()
            raise BLEConnectionError(
                f"Failed to connect: {e}"
            ) from e

        self.state = ConnectionState.CONNECTED
        _LOGGER.info("Connected to %s", self.mac_address)

    async def _abort_connect(self) -> None:
        client, self._client = self._client, None
        self.state = ConnectionState.DISCONNECTED
        if client is not None and client.is_connected:
            try:
                await client.disconnect()
            except Exception as e:
                _LOGGER.warning("Error while aborting connection to %s: %s", self.mac_address, e)

    async def disconnect(self) -> None:
        """Disconnect from device."""
        if self._client is None:
            self.state = ConnectionState.DISCONNECTED
            return

        self.state = ConnectionState.DISCONNECTING
        try:
            if self._client.is_connected:
                _LOGGER.debug("Disconnecting from %s", self.mac_address)
                await self._client.disconnect()
        except Exception as e:
            _LOGGER.warning("Error during disconnect: %s", e)
        finally:
            self._client = None
            self.state = ConnectionState.DISCONNECTED
            _LOGGER.info("Disconnected from %s", self.mac_address)

    def _on_disconnected(self, client: BleakClient) -> None:
        if self.state is not ConnectionState.DISCONNECTING:
            _LOGGER.info("%s dropped the connection", self.mac_address)
        self.state = ConnectionState.DISCONNECTED

    def _notification_callback(self, sender, data: bytearray) -> None:
        """Forward a notification to the registered handler.

        Args:
            sender: Characteristic that sent notification
            data: Notification data
        """
        if self.notification_handler is None:
            _LOGGER.debug("No handler for notification 0x%s", bytes(data).hex())
            return
        self.notification_handler(bytes(data))

    async def write(self, data: bytes) -> None:
        """Write a command frame to the write characteristic.

        Args:
            data: Command bytes to write

        Raises:
            BLEConnectionError: If not connected or write fails
        """
        if not self.is_connected:
            raise BLEConnectionError("Not connected")

        try:
            await self._client.write_gatt_char(
                WRITE_CHAR_UUID,
                data,
                response=True,  # Wait for write confirmation
            )
        except Exception as e:
            raise BLEConnectionError(f"Write failed: {e}") from e

    async def read_char(self, uuid: str, timeout: float = READ_TIMEOUT) -> bytes:
        """Read a characteristic value.

        Raises:
            BLEConnectionError: If not connected or the read fails
            BLETimeoutError: If the read does not complete within timeout
        """
        if not self.is_connected:
            raise BLEConnectionError("Not connected")

        try:
            data = await asyncio.wait_for(
                self._client.read_gatt_char(uuid),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            raise BLETimeoutError(
                f"No value read from {uuid} within {timeout}s"
            ) from e
        except Exception as e:
            raise BLEConnectionError(f"Read failed: {e}") from e
        return bytes(data)

    @property
    def is_connected(self) -> bool:
        """Check if currently connected to device."""
        return (
            self._client is not None
            and self._client.is_connected
            and self.state is ConnectionState.CONNECTED
        )
