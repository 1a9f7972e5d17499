"""Plug Mini (US and JP)."""

from __future__ import annotations

from ..models.enums import SwitchBotModel
from ..protocol.commands import (
    PLUG_READ_STATE,
    PLUG_SET_STATE,
    PLUG_TOGGLE,
    PLUG_TURN_OFF,
    PLUG_TURN_ON,
)
from .base import StateDevice


class PlugMini(StateDevice):
    """Plug Mini. Every command returns the resulting on state."""

    model = SwitchBotModel.PLUG_MINI_US
    READ_STATE = PLUG_READ_STATE
    SET_STATE = PLUG_SET_STATE

    async def turn_on(self) -> bool:
        return await self.set_state(PLUG_TURN_ON)

    async def turn_off(self) -> bool:
        return await self.set_state(PLUG_TURN_OFF)

    async def toggle(self) -> bool:
        return await self.set_state(PLUG_TOGGLE)


class PlugMiniJP(PlugMini):
    model = SwitchBotModel.PLUG_MINI_JP
