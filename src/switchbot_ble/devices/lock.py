"""Lock and Lock Pro."""

from __future__ import annotations

from dataclasses import dataclass

from ..encoding import bit, bits
from ..exceptions import InvalidResponseError
from ..models.enums import LockResult, LockStatus, SwitchBotModel, lock_status_from_code
from ..protocol.commands import LockCommand, LockProCommand
from ..protocol.responses import LOCK_RESPONSE
from .base import EncryptedDevice, lock_result


@dataclass(frozen=True)
class LockInfo:
    """State returned by the lock info command."""

    calibration: bool
    status: LockStatus
    door_open: bool
    unclosed_alarm: bool
    unlocked_alarm: bool


def parse_lock_info(response: bytes) -> LockInfo:
    """Decode ``[status][flags][alarms]...`` (payload already decrypted).

    Raises:
        InvalidResponseError: If fewer than 3 bytes are present
    """
    if len(response) < 3:
        raise InvalidResponseError(
            f"Lock info needs 3 bytes, got {len(response)}: 0x{response.hex()}", response
        )
    flags, alarms = response[1], response[2]
    return LockInfo(
        calibration=bit(flags, 0b10000000),
        status=lock_status_from_code(bits(flags, 0b01110000)),
        door_open=bit(flags, 0b00000100),
        unclosed_alarm=bit(alarms, 0b00100000),
        unlocked_alarm=bit(alarms, 0b00010000),
    )


class Lock(EncryptedDevice):
    """Smart Lock. Every command is encrypted; status 0x01 and 0x06 are success.

    Usage:
        async with Lock(mac, key_id="ff", encryption_key=key) as lock:
            result = await lock.unlock()
    """

    model = SwitchBotModel.LOCK
    RESPONSE = LOCK_RESPONSE
    IV_RESPONSE = LOCK_RESPONSE
    COMMANDS = LockCommand

    async def lock(self) -> LockResult:
        return lock_result(await self._encrypted_command(self.COMMANDS.LOCK.value))

    async def unlock(self) -> LockResult:
        return lock_result(await self._encrypted_command(self.COMMANDS.UNLOCK.value))

    async def unlock_no_unlatch(self) -> LockResult:
        """Unlock without pulling the latch."""
        return lock_result(await self._encrypted_command(self.COMMANDS.UNLOCK_NO_UNLATCH.value))

    async def info(self) -> LockInfo:
        return parse_lock_info(await self._encrypted_command(self.COMMANDS.LOCK_INFO.value))

    async def enable_notifications(self) -> LockResult:
        return lock_result(await self._encrypted_command(self.COMMANDS.ENABLE_NOTIFICATIONS.value))

    async def disable_notifications(self) -> LockResult:
        return lock_result(await self._encrypted_command(self.COMMANDS.DISABLE_NOTIFICATIONS.value))


class LockPro(Lock):
    model = SwitchBotModel.LOCK_PRO
    COMMANDS = LockProCommand
