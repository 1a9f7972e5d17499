"""Base SwitchBot BLE device class."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .const import (
    COMMAND_TIMEOUT,
    CONNECT_TIMEOUT,
    DEFAULT_MAX_ATTEMPTS,
    DEVICE_NAME_CHAR_UUID,
)
from .diagnostics import DiagnosticSink, logger_sink
from .exceptions import InvalidResponseError
from .models.enums import SwitchBotModel, get_friendly_name, get_model_name
from .transport import BLEConnection, CommandChannel, ConnectionState

if TYPE_CHECKING:
    from bleak.backends.device import BLEDevice

    from .models.advertisement import Advertisement
    from .protocol.responses import ResponseCheck

_LOGGER = logging.getLogger(__name__)


class SwitchbotDevice:
    """SwitchBot BLE peripheral.

    Connection state machine:
        DISCONNECTED -> CONNECTING -> CONNECTED -> DISCONNECTING -> DISCONNECTED

    A command issued while disconnected connects first. Nothing reconnects
    implicitly after a disconnect or a dropped link.

    Usage:
        async with SwitchbotDevice("AA:BB:CC:DD:EE:FF") as device:
            name = await device.get_device_name()
    """

    model: SwitchBotModel = SwitchBotModel.UNKNOWN

    def __init__(
            self,
            address: str,
            ble_device: BLEDevice | None = None,
            local_name: str | None = None,
            timeout: float = COMMAND_TIMEOUT,
            connect_timeout: float = CONNECT_TIMEOUT,
            max_attempts: int = DEFAULT_MAX_ATTEMPTS,
            sink: DiagnosticSink | None = None,
    ):
        """Initialize SwitchBot device.

        Args:
            address: Device MAC address
            ble_device: Optional BLEDevice from a previous scan
            local_name: Advertised local name, if known
            timeout: Command response timeout in seconds (default: 3)
            connect_timeout: Connection timeout in seconds (default: 10)
            max_attempts: Maximum connection attempts (default: 4)
            sink: Optional diagnostic sink, defaults to this module's logger
        """
        self.address = address
        self.ble_device = ble_device
        self.local_name = local_name or (ble_device.name if ble_device is not None else None)
        self.timeout = timeout
        self.advertisement: Advertisement | None = None
        self._sink = sink or logger_sink(_LOGGER)

        self._connection = BLEConnection(
            address, ble_device, timeout=connect_timeout, max_attempts=max_attempts
        )
        self._channel = CommandChannel(self._connection, self._sink)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.address!r})"

    async def __aenter__(self) -> SwitchbotDevice:
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.disconnect()

    @property
    def state(self) -> ConnectionState:
        """Current connection state."""
        return self._connection.state

    @property
    def is_connected(self) -> bool:
        return self._connection.is_connected

    @property
    def model_name(self) -> str:
        return get_model_name(self.model)

    @property
    def friendly_name(self) -> str:
        return get_friendly_name(self.model)

    async def connect(self) -> None:
        """Connect to the peripheral.

        Raises:
            BLEConnectionError: If connection fails
            BLETimeoutError: If connection times out
        """
        await self._connection.connect()

    async def disconnect(self) -> None:
        """Disconnect from the peripheral."""
        await self._connection.disconnect()

    async def get_device_name(self) -> str:
        """Read the GAP device name characteristic.

        Raises:
            InvalidResponseError: If the name is not valid UTF-8
        """
        await self._ensure_connected()
        data = await self._connection.read_char(DEVICE_NAME_CHAR_UUID)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidResponseError(
                f"Device name is not valid UTF-8: 0x{data.hex()}", data
            ) from e

    async def _ensure_connected(self) -> None:
        if self.state is not ConnectionState.CONNECTED:
            _LOGGER.debug("%s not connected, connecting before command", self.address)
            await self.connect()

    async def _command(
            self,
            data: bytes,
            check: ResponseCheck | None = None,
            timeout: float | None = None,
    ) -> bytes:
        """Send one command frame and return the validated response."""
        await self._ensure_connected()
        return await self._channel.send(
            data,
            timeout=self.timeout if timeout is None else timeout,
            check=check,
        )
