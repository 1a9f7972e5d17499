"""Test command frame constants and builders."""

import pytest

from switchbot_ble.protocol.commands import (
    BOT_PRESS,
    BULB_SET_STATE,
    HUMIDIFIER_TURN_ON,
    MOTOR_PAUSE,
    PLUG_SET_STATE,
    PLUG_TURN_ON,
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


class TestFrames:
    """Family headers reproduced bit-for-bit."""

    def test_bot_press(self):
        assert BOT_PRESS.hex() == "570100"

    def test_humidifier_turn_on(self):
        assert HUMIDIFIER_TURN_ON.hex() == "57010101"

    def test_motor_pause(self):
        assert MOTOR_PAUSE.hex() == "570f450100ff"

    def test_lock_family_header(self):
        for command in (LockCommand.LOCK, LockCommand.UNLOCK, LockProCommand.UNLOCK_NO_UNLATCH):
            assert command.value.startswith("570f4e")

    def test_relay_family_header(self):
        for command in (RelayCommand.TURN_ON, RelayCommand.TURN_OFF, RelayCommand.TOGGLE):
            assert command.value.startswith("570f70")

    def test_plug_turn_on(self):
        assert build_set_state_command(PLUG_SET_STATE, PLUG_TURN_ON).hex() == "570f50010180"


class TestHumidifierLevel:
    """Test humidifier level command."""

    def test_level(self):
        assert build_humidifier_level_command(42).hex() == "570101072a"

    def test_bounds_accepted(self):
        assert build_humidifier_level_command(0)[-1] == 0
        assert build_humidifier_level_command(100)[-1] == 100

    @pytest.mark.parametrize("level", [-1, 101, 255])
    def test_out_of_range(self, level):
        with pytest.raises(ValueError, match="Level must be between 0 and 100"):
            build_humidifier_level_command(level)


class TestRunToPosition:
    """Test curtain/blind tilt run-to-position command."""

    def test_default_mode(self):
        assert build_run_to_position_command(30).hex() == "570f450105ff1e"

    def test_silent_mode(self):
        assert build_run_to_position_command(100, MotorMode.SILENT).hex() == "570f4501050164"

    def test_out_of_range(self):
        with pytest.raises(ValueError):
            build_run_to_position_command(101)

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            build_run_to_position_command(50, 7)


class TestLightPayloads:
    """Test set_state payloads for lights."""

    def test_brightness_payload_carries_value(self):
        assert build_brightness_payload(80) == bytes([0x02, 0x14, 80])

    def test_color_temperature_payload(self):
        assert build_color_temperature_payload(10) == bytes([0x02, 0x17, 10])

    def test_rgb_payload(self):
        payload = build_rgb_payload(50, 255, 0, 128)
        assert build_set_state_command(BULB_SET_STATE, payload).hex() == "570f4701021232ff0080"

    def test_rgb_component_out_of_range(self):
        with pytest.raises(ValueError, match="red"):
            build_rgb_payload(50, 256, 0, 0)

    def test_non_integer_rejected(self):
        with pytest.raises(TypeError):
            build_brightness_payload("50")
