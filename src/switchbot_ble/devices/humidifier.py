"""Humidifier and Humidifier 2."""

from __future__ import annotations

from ..device import SwitchbotDevice
from ..models.enums import SwitchBotModel
from ..protocol.commands import (
    HUMIDIFIER_DECREASE,
    HUMIDIFIER_INCREASE,
    HUMIDIFIER_SET_AUTO_MODE,
    HUMIDIFIER_SET_MANUAL_MODE,
    HUMIDIFIER_TURN_OFF,
    HUMIDIFIER_TURN_ON,
    build_humidifier_level_command,
)
from ..protocol.responses import HUMIDIFIER_RESPONSE


class Humidifier(SwitchbotDevice):
    """Humidifier. Responses are 3 bytes with status 0x01 or 0x05."""

    model = SwitchBotModel.HUMIDIFIER

    async def turn_on(self) -> None:
        await self._command(HUMIDIFIER_TURN_ON, HUMIDIFIER_RESPONSE)

    async def turn_off(self) -> None:
        await self._command(HUMIDIFIER_TURN_OFF, HUMIDIFIER_RESPONSE)

    async def increase(self) -> None:
        await self._command(HUMIDIFIER_INCREASE, HUMIDIFIER_RESPONSE)

    async def decrease(self) -> None:
        await self._command(HUMIDIFIER_DECREASE, HUMIDIFIER_RESPONSE)

    async def set_auto_mode(self) -> None:
        await self._command(HUMIDIFIER_SET_AUTO_MODE, HUMIDIFIER_RESPONSE)

    async def set_manual_mode(self) -> None:
        await self._command(HUMIDIFIER_SET_MANUAL_MODE, HUMIDIFIER_RESPONSE)

    async def percentage(self, level: int) -> None:
        """Set the humidifier level.

        Args:
            level: Target level 0-100

        Raises:
            ValueError: If level is outside 0-100; nothing is sent
        """
        command = build_humidifier_level_command(level)
        await self._command(command, HUMIDIFIER_RESPONSE)


class Humidifier2(Humidifier):
    model = SwitchBotModel.HUMIDIFIER2
