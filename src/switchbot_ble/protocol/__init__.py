"""SwitchBot BLE protocol implementation."""

from .commands import (
    COMMAND_GET_CK_IV,
    COMMAND_HEADER,
    LockCommand,
    LockProCommand,
    MotorMode,
    RelayCommand,
    build_brightness_payload,
    build_color_temperature_payload,
    build_humidifier_level_command,
    build_rgb_payload,
    build_run_to_position_command,
    build_set_state_command,
)
from .encryption import EncryptionSession, build_unencrypted_frame, decrypt, encrypt
from .responses import (
    BOT_RESPONSE,
    CURTAIN_RESPONSE,
    HUMIDIFIER_RESPONSE,
    LOCK_RESPONSE,
    RELAY_RESPONSE,
    STATE_RESPONSE,
    ResponseCheck,
    is_on_from_state_response,
)

__all__ = [
    "COMMAND_HEADER",
    "COMMAND_GET_CK_IV",
    "LockCommand",
    "LockProCommand",
    "MotorMode",
    "RelayCommand",
    "build_brightness_payload",
    "build_color_temperature_payload",
    "build_humidifier_level_command",
    "build_rgb_payload",
    "build_run_to_position_command",
    "build_set_state_command",
    "EncryptionSession",
    "build_unencrypted_frame",
    "encrypt",
    "decrypt",
    "ResponseCheck",
    "BOT_RESPONSE",
    "CURTAIN_RESPONSE",
    "HUMIDIFIER_RESPONSE",
    "LOCK_RESPONSE",
    "RELAY_RESPONSE",
    "STATE_RESPONSE",
    "is_on_from_state_response",
]
