"""Color Bulb, Ceiling Light and Strip Light."""

from __future__ import annotations

from ..encoding import clamp
from ..models.enums import SwitchBotModel
from ..protocol.commands import (
    BULB_READ_STATE,
    BULB_SET_STATE,
    LIGHT_TURN_OFF,
    LIGHT_TURN_ON,
    STRIP_READ_STATE,
    STRIP_SET_STATE,
    build_brightness_payload,
    build_color_temperature_payload,
    build_rgb_payload,
)
from .base import StateDevice


def _level(name: str, value: int | float, high: int) -> int:
    """Coerce a numeric argument into 0..high, clamping out-of-range values."""
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise TypeError(f"The type of target {name} is incorrect: {type(value).__name__}")
    return int(clamp(round(value), 0, high))


class _Light(StateDevice):

    async def turn_on(self) -> bool:
        return await self.set_state(LIGHT_TURN_ON)

    async def turn_off(self) -> bool:
        return await self.set_state(LIGHT_TURN_OFF)

    async def set_brightness(self, brightness: int) -> bool:
        """Set brightness in percent; values outside 0-100 are clamped.

        Raises:
            TypeError: If brightness is not a number
        """
        return await self.set_state(build_brightness_payload(_level("brightness", brightness, 100)))


class ColorBulb(_Light):
    model = SwitchBotModel.COLOR_BULB
    READ_STATE = BULB_READ_STATE
    SET_STATE = BULB_SET_STATE

    async def set_color_temperature(self, color_temperature: int) -> bool:
        """Set color temperature in percent (0 warm, 100 cold), clamped."""
        value = _level("color_temperature", color_temperature, 100)
        return await self.set_state(build_color_temperature_payload(value))

    async def set_rgb(self, brightness: int, red: int, green: int, blue: int) -> bool:
        """Set brightness (0-100) and color (0-255 each), clamped.

        Raises:
            TypeError: If any argument is not a number
        """
        return await self.set_state(
            build_rgb_payload(
                _level("brightness", brightness, 100),
                _level("red", red, 255),
                _level("green", green, 255),
                _level("blue", blue, 255),
            )
        )


class CeilingLight(_Light):
    model = SwitchBotModel.CEILING_LIGHT
    READ_STATE = BULB_READ_STATE
    SET_STATE = BULB_SET_STATE

    async def set_color_temperature(self, color_temperature: int) -> bool:
        value = _level("color_temperature", color_temperature, 100)
        return await self.set_state(build_color_temperature_payload(value))


class CeilingLightPro(CeilingLight):
    model = SwitchBotModel.CEILING_LIGHT_PRO


class StripLight(_Light):
    model = SwitchBotModel.STRIP_LIGHT
    READ_STATE = STRIP_READ_STATE
    SET_STATE = STRIP_SET_STATE

    async def set_rgb(self, brightness: int, red: int, green: int, blue: int) -> bool:
        return await self.set_state(
            build_rgb_payload(
                _level("brightness", brightness, 100),
                _level("red", red, 255),
                _level("green", green, 255),
                _level("blue", blue, 255),
            )
        )
