"""Curtain, Curtain 3 and Blind Tilt motors."""

from __future__ import annotations

from ..device import SwitchbotDevice
from ..models.enums import SwitchBotModel
from ..protocol.commands import MOTOR_PAUSE, MotorMode, build_run_to_position_command
from ..protocol.responses import CURTAIN_RESPONSE


class Curtain(SwitchbotDevice):
    """Curtain motor. Position 0 is fully open, 100 fully closed."""

    model = SwitchBotModel.CURTAIN

    async def open(self, mode: MotorMode | int = MotorMode.DEFAULT) -> None:
        await self.run_to_pos(0, mode)

    async def close(self, mode: MotorMode | int = MotorMode.DEFAULT) -> None:
        await self.run_to_pos(100, mode)

    async def pause(self) -> None:
        await self._command(MOTOR_PAUSE, CURTAIN_RESPONSE)

    async def run_to_pos(self, percent: int, mode: MotorMode | int = MotorMode.DEFAULT) -> None:
        """Move to ``percent`` (0-100).

        Raises:
            ValueError: If percent is outside 0-100 or mode is unknown
        """
        await self._command(build_run_to_position_command(percent, mode), CURTAIN_RESPONSE)


class Curtain3(Curtain):
    model = SwitchBotModel.CURTAIN3


class BlindTilt(SwitchbotDevice):
    """Blind Tilt motor. 50 is slats open, 0 and 100 the two closed ends."""

    model = SwitchBotModel.BLIND_TILT

    async def open(self, mode: MotorMode | int = MotorMode.DEFAULT) -> None:
        await self.run_to_pos(50, mode)

    async def close_up(self, mode: MotorMode | int = MotorMode.DEFAULT) -> None:
        await self.run_to_pos(100, mode)

    async def close_down(self, mode: MotorMode | int = MotorMode.DEFAULT) -> None:
        await self.run_to_pos(0, mode)

    async def pause(self) -> None:
        await self._command(MOTOR_PAUSE, CURTAIN_RESPONSE)

    async def run_to_pos(self, percent: int, mode: MotorMode | int = MotorMode.DEFAULT) -> None:
        await self._command(build_run_to_position_command(percent, mode), CURTAIN_RESPONSE)
