"""SwitchBot Bot (WoHand)."""

from __future__ import annotations

from ..device import SwitchbotDevice
from ..models.enums import SwitchBotModel
from ..protocol.commands import BOT_DOWN, BOT_PRESS, BOT_TURN_OFF, BOT_TURN_ON, BOT_UP
from ..protocol.responses import BOT_RESPONSE


class Bot(SwitchbotDevice):
    """Bot in press mode (``press``) or switch mode (``turn_on``/``turn_off``).

    Every command answers with ``[status, x, x]``; 0x01 and 0x05 are success.
    """

    model = SwitchBotModel.BOT

    async def press(self) -> None:
        await self._command(BOT_PRESS, BOT_RESPONSE)

    async def turn_on(self) -> None:
        await self._command(BOT_TURN_ON, BOT_RESPONSE)

    async def turn_off(self) -> None:
        await self._command(BOT_TURN_OFF, BOT_RESPONSE)

    async def down(self) -> None:
        await self._command(BOT_DOWN, BOT_RESPONSE)

    async def up(self) -> None:
        await self._command(BOT_UP, BOT_RESPONSE)
