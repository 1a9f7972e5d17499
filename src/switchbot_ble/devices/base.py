"""Shared device bases: read/set state families and the encryption overlay."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, ClassVar

from ..device import SwitchbotDevice
from ..exceptions import ProtocolError
from ..models.enums import LockResult
from ..protocol.commands import build_set_state_command
from ..protocol.encryption import EncryptionSession, build_unencrypted_frame
from ..protocol.responses import ResponseCheck, is_on_from_state_response

if TYPE_CHECKING:
    from bleak.backends.device import BLEDevice

_LOGGER = logging.getLogger(__name__)


class StateDevice(SwitchbotDevice):
    """Family with ``read_state``/``set_state`` frames and 2-byte replies.

    Replies are ``[x, state]`` with state 0x80 for on and 0x00 for off;
    any other state byte is a device error.
    """

    READ_STATE: ClassVar[bytes] = b""
    SET_STATE: ClassVar[bytes] = b""

    async def read_state(self) -> bool:
        """Return True if the device is on."""
        return await self._operate(self.READ_STATE)

    async def set_state(self, payload: bytes) -> bool:
        """Send a set_state payload and return the resulting on state."""
        return await self._operate(build_set_state_command(self.SET_STATE, payload))

    async def _operate(self, data: bytes) -> bool:
        response = await self._command(data)
        return is_on_from_state_response(response)


class EncryptedDevice(SwitchbotDevice):
    """Device whose commands go through the AES-128-CTR overlay.

    The IV is negotiated with an unencrypted request the first time an
    encrypted command is sent, then reused for every later command of this
    object. ``set_key`` drops the cached IV.
    """

    RESPONSE: ClassVar[ResponseCheck]
    IV_RESPONSE: ClassVar[ResponseCheck]

    def __init__(
            self,
            address: str,
            ble_device: BLEDevice | None = None,
            key_id: str | None = None,
            encryption_key: str | None = None,
            **kwargs,
    ):
        """Initialize an encrypted device.

        Args:
            address: Device MAC address
            ble_device: Optional BLEDevice from a previous scan
            key_id: Two hex chars identifying the key
            encryption_key: 32 hex chars (16-byte AES key)
            **kwargs: Passed to SwitchbotDevice

        Raises:
            ConfigurationError: If key_id or encryption_key is missing or malformed
        """
        super().__init__(address, ble_device, **kwargs)
        self._session = EncryptionSession.from_hex(key_id, encryption_key)
        self._iv_lock = asyncio.Lock()

    @property
    def key_id(self) -> str:
        return self._session.key_id

    def set_key(self, key_id: str, encryption_key: str) -> None:
        """Replace the key and forget the negotiated IV."""
        self._session = EncryptionSession.from_hex(key_id, encryption_key)

    async def _plain_command(self, key: str, check: ResponseCheck | None = None) -> bytes:
        """Send a hex command key unencrypted (``key[0:2] 000000 key[2:]``)."""
        return await self._command(build_unencrypted_frame(key), check)

    async def _ensure_iv(self) -> bytes:
        if self._session.iv is not None:
            return self._session.iv
        async with self._iv_lock:
            session = self._session
            if session.iv is None:
                response = await self._command(session.iv_request(), self.IV_RESPONSE)
                session.accept_iv(response)
                _LOGGER.debug("%s: IV negotiated for key id %s", self.address, session.key_id)
            return session.iv

    async def _encrypted_command(self, key: str) -> bytes:
        """Send an encrypted command and return status byte + decrypted payload.

        Raises:
            ProtocolError: If the status byte is not accepted
        """
        await self._ensure_iv()
        response = await self._command(self._session.encrypt_command(key))
        self.RESPONSE.validate(response)
        return self._session.decrypt_response(response)


def lock_result(response: bytes) -> LockResult:
    """Map an already validated lock response to its LockResult."""
    try:
        return LockResult(response[0])
    except ValueError as e:
        raise ProtocolError(f"The device returned an error: 0x{response.hex()}", response) from e
