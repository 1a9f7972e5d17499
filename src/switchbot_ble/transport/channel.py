"""Request/response exchange over the write/notify characteristic pair."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ..const import COMMAND_TIMEOUT
from ..diagnostics import DiagnosticSink, logger_sink
from ..exceptions import BLETimeoutError

if TYPE_CHECKING:
    from ..protocol.responses import ResponseCheck
    from .connection import BLEConnection

_LOGGER = logging.getLogger(__name__)


class CommandChannel:
    """One command in flight per peripheral.

    ``send`` holds a per-peripheral lock for the whole write/wait cycle and
    opens a single response slot. A notification resolves the open slot;
    one arriving while no slot is open (e.g. the late answer to a command
    that already timed out) is dropped, so it can never be taken as the
    answer to the next command.

    Usage:
        channel = CommandChannel(connection)
        response = await channel.send(bytes([0x57, 0x01, 0x00]), check=BOT_RESPONSE)
    """

    def __init__(self, connection: BLEConnection, sink: DiagnosticSink | None = None):
        self._connection = connection
        self._sink = sink or logger_sink(_LOGGER)
        self._lock = asyncio.Lock()
        self._pending: asyncio.Future[bytes] | None = None
        connection.notification_handler = self.handle_notification

    @property
    def busy(self) -> bool:
        """True while a command is waiting for its response."""
        return self._pending is not None

    def handle_notification(self, data: bytes) -> None:
        """Resolve the open response slot, or drop the notification."""
        pending = self._pending
        if pending is None or pending.done():
            self._sink("debug", f"Dropping unsolicited notification 0x{bytes(data).hex()}")
            return
        pending.set_result(bytes(data))

    async def send(
            self,
            data: bytes,
            timeout: float = COMMAND_TIMEOUT,
            check: ResponseCheck | None = None,
    ) -> bytes:
        """Write one command frame and wait for its notification.

        Args:
            data: Command frame
            timeout: Seconds to wait for the response (default: 3)
            check: Optional response rule validated before returning

        Returns:
            Raw response bytes

        Raises:
            BLEConnectionError: If the write fails
            BLETimeoutError: If no notification arrives within timeout
            ProtocolError: If ``check`` rejects the response
        """
        async with self._lock:
            self._pending = asyncio.get_running_loop().create_future()
            try:
                self._sink("debug", f"Sending 0x{data.hex()}")
                await self._connection.write(data)
                response = await asyncio.wait_for(self._pending, timeout=timeout)
            except asyncio.TimeoutError as e:
                self._sink("warning", f"No response to 0x{data.hex()} within {timeout}s")
                raise BLETimeoutError(
                    f"No response received within {timeout}s"
                ) from e
            finally:
                self._pending = None

        self._sink("debug", f"Received 0x{response.hex()}")
        if check is not None:
            check.validate(response)
        return response
