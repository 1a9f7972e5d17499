"""BLE command frames for SwitchBot devices.

Frames are ``[0x57][command class][sub-command...][payload...]``. Families
that go through the encryption overlay (locks, relays) keep their commands
as hex strings because the overlay splits them at the first byte.
"""

from __future__ import annotations

from enum import Enum
from typing import Final

COMMAND_HEADER: Final = 0x57

# Bot
BOT_PRESS: Final = bytes([0x57, 0x01, 0x00])
BOT_TURN_ON: Final = bytes([0x57, 0x01, 0x01])
BOT_TURN_OFF: Final = bytes([0x57, 0x01, 0x02])
BOT_DOWN: Final = bytes([0x57, 0x01, 0x03])
BOT_UP: Final = bytes([0x57, 0x01, 0x04])

# Humidifier
HUMIDIFIER_HEADER: Final = bytes([0x57, 0x01])
HUMIDIFIER_TURN_ON: Final = HUMIDIFIER_HEADER + bytes([0x01, 0x01])
HUMIDIFIER_TURN_OFF: Final = HUMIDIFIER_HEADER + bytes([0x01, 0x02])
HUMIDIFIER_INCREASE: Final = HUMIDIFIER_HEADER + bytes([0x01, 0x03])
HUMIDIFIER_DECREASE: Final = HUMIDIFIER_HEADER + bytes([0x01, 0x04])
HUMIDIFIER_SET_AUTO_MODE: Final = HUMIDIFIER_HEADER + bytes([0x01, 0x05])
HUMIDIFIER_SET_MANUAL_MODE: Final = HUMIDIFIER_HEADER + bytes([0x01, 0x06])
HUMIDIFIER_SET_LEVEL: Final = HUMIDIFIER_HEADER + bytes([0x01, 0x07])

# Curtain and Blind Tilt motor
MOTOR_HEADER: Final = bytes([0x57, 0x0F, 0x45, 0x01])
MOTOR_PAUSE: Final = MOTOR_HEADER + bytes([0x00, 0xFF])
MOTOR_RUN_TO_POS: Final = 0x05


class MotorMode(int, Enum):
    """Curtain/Blind Tilt run mode."""
    PERFORMANCE = 0x00
    SILENT = 0x01
    DEFAULT = 0xFF


# Color Bulb and Ceiling Light
BULB_READ_STATE: Final = bytes([0x57, 0x0F, 0x48, 0x01])
BULB_SET_STATE: Final = bytes([0x57, 0x0F, 0x47, 0x01])

# Strip Light
STRIP_READ_STATE: Final = bytes([0x57, 0x0F, 0x4A, 0x01])
STRIP_SET_STATE: Final = bytes([0x57, 0x0F, 0x49, 0x01])

# Plug Mini
PLUG_READ_STATE: Final = bytes([0x57, 0x0F, 0x51, 0x01])
PLUG_SET_STATE: Final = bytes([0x57, 0x0F, 0x50, 0x01])

# set_state payloads
LIGHT_TURN_ON: Final = bytes([0x01, 0x01])
LIGHT_TURN_OFF: Final = bytes([0x01, 0x02])
LIGHT_BRIGHTNESS: Final = bytes([0x02, 0x14])
LIGHT_COLOR_TEMPERATURE: Final = bytes([0x02, 0x17])
LIGHT_RGB: Final = bytes([0x02, 0x12])
PLUG_TURN_ON: Final = bytes([0x01, 0x80])
PLUG_TURN_OFF: Final = bytes([0x01, 0x00])
PLUG_TOGGLE: Final = bytes([0x02, 0x80])

# Encryption handshake, shared by locks and relays
COMMAND_GET_CK_IV: Final = "570f2103"


class LockCommand(str, Enum):
    """Lock command keys (hex)."""
    LOCK_INFO = "570f4f8101"
    UNLOCK = "570f4e01011080"
    UNLOCK_NO_UNLATCH = "570f4e010110a0"
    LOCK = "570f4e01011000"
    ENABLE_NOTIFICATIONS = "570e01001e00008101"
    DISABLE_NOTIFICATIONS = "570e00"


class LockProCommand(str, Enum):
    """Lock Pro command keys (hex)."""
    LOCK_INFO = "570f4f8102"
    UNLOCK = "570f4e0101000080"
    UNLOCK_NO_UNLATCH = "570f4e01010000a0"
    LOCK = "570f4e0101000000"
    ENABLE_NOTIFICATIONS = "570e01001e00008101"
    DISABLE_NOTIFICATIONS = "570e00"


class RelayCommand(str, Enum):
    """Relay Switch command keys (hex)."""
    TURN_OFF = "570f70010000"
    TURN_ON = "570f70010100"
    TOGGLE = "570f70010200"
    GET_VOLTAGE_AND_CURRENT = "570f7106000000"


def _check_range(name: str, value: int, low: int, high: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"The type of {name} is incorrect: {type(value).__name__}")
    if value < low or value > high:
        raise ValueError(f"{name} must be between {low} and {high}")


def build_humidifier_level_command(level: int) -> bytes:
    """Build command to set humidifier level.

    Args:
        level: Target level 0-100

    Returns:
        Command bytes: 57 01 01 07 <level>

    Raises:
        ValueError: If level is outside 0-100
    """
    if not isinstance(level, int) or isinstance(level, bool) or level < 0 or level > 100:
        raise ValueError("Level must be between 0 and 100")
    return HUMIDIFIER_SET_LEVEL + bytes([level])


def build_run_to_position_command(percent: int, mode: MotorMode | int = MotorMode.DEFAULT) -> bytes:
    """Build command to move a curtain or blind tilt to a position.

    Format:
        [57 0f 45 01][05][mode][position]

    Raises:
        ValueError: If percent is outside 0-100 or mode is unknown
    """
    _check_range("position", percent, 0, 100)
    mode = MotorMode(mode)
    return MOTOR_HEADER + bytes([MOTOR_RUN_TO_POS, mode.value, percent])


def build_set_state_command(base: bytes, payload: bytes) -> bytes:
    """Append a set_state payload to a family's set_state header."""
    return base + payload


def build_brightness_payload(brightness: int) -> bytes:
    """Payload for set_state: brightness 0-100."""
    _check_range("brightness", brightness, 0, 100)
    return LIGHT_BRIGHTNESS + bytes([brightness])


def build_color_temperature_payload(color_temperature: int) -> bytes:
    """Payload for set_state: color temperature percentage 0-100."""
    _check_range("color_temperature", color_temperature, 0, 100)
    return LIGHT_COLOR_TEMPERATURE + bytes([color_temperature])


def build_rgb_payload(brightness: int, red: int, green: int, blue: int) -> bytes:
    """Payload for set_state: brightness 0-100 and RGB 0-255 each."""
    _check_range("brightness", brightness, 0, 100)
    for name, value in (("red", red), ("green", green), ("blue", blue)):
        _check_range(name, value, 0, 255)
    return LIGHT_RGB + bytes([brightness, red, green, blue])
