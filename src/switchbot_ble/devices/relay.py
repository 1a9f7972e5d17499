"""Relay Switch 1 (Plus) and Relay Switch 1PM."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..encoding import u16be
from ..exceptions import InvalidResponseError
from ..models.enums import SwitchBotModel
from ..protocol.commands import RelayCommand
from ..protocol.encryption import ENCRYPTION_KEY_LENGTH, KEY_ID_LENGTH
from ..protocol.responses import RELAY_RESPONSE
from .base import EncryptedDevice

if TYPE_CHECKING:
    from bleak.backends.device import BLEDevice

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PowerReading:
    """Raw voltage and current as reported by the 1PM."""

    voltage: int
    current: int


def keys_from_local_name(local_name: str | None) -> tuple[str, str]:
    """Derive ``(key_id, encryption_key)`` from an advertised local name.

    The key id is the last two characters, the key the first 32.
    """
    name = local_name or ""
    return name[-KEY_ID_LENGTH:], name[:ENCRYPTION_KEY_LENGTH]


class RelaySwitch1(EncryptedDevice):
    """Relay Switch 1 / 1 Plus.

    Without an explicit key id and encryption key, both are derived from
    the advertised local name.
    """

    model = SwitchBotModel.RELAY_SWITCH_1
    RESPONSE = RELAY_RESPONSE
    IV_RESPONSE = RELAY_RESPONSE

    def __init__(
            self,
            address: str,
            ble_device: BLEDevice | None = None,
            key_id: str | None = None,
            encryption_key: str | None = None,
            **kwargs,
    ):
        if key_id is None and encryption_key is None:
            local_name = kwargs.get("local_name") or (
                ble_device.name if ble_device is not None else None
            )
            key_id, encryption_key = keys_from_local_name(local_name)
        super().__init__(address, ble_device, key_id, encryption_key, **kwargs)
        self.is_on: bool | None = None

    async def turn_on(self) -> bool:
        await self._encrypted_command(RelayCommand.TURN_ON.value)
        self.is_on = True
        return True

    async def turn_off(self) -> bool:
        await self._encrypted_command(RelayCommand.TURN_OFF.value)
        self.is_on = False
        return False

    async def toggle(self) -> None:
        await self._encrypted_command(RelayCommand.TOGGLE.value)
        # State after a toggle is only known from the next advertisement
        self.is_on = None


class RelaySwitch1PM(RelaySwitch1):
    model = SwitchBotModel.RELAY_SWITCH_1PM

    async def get_voltage_and_current(self) -> PowerReading:
        """Read voltage and current.

        Raises:
            InvalidResponseError: If the decrypted response is shorter than 13 bytes
        """
        response = await self._encrypted_command(RelayCommand.GET_VOLTAGE_AND_CURRENT.value)
        if len(response) < 13:
            raise InvalidResponseError(
                f"Voltage/current response too short: 0x{response.hex()}", response
            )
        reading = PowerReading(voltage=u16be(response, 9), current=u16be(response, 11))
        _LOGGER.debug("%s: %s", self.address, reading)
        return reading
