"""Test model enums and conversions."""

from switchbot_ble.models.enums import (
    DoorState,
    LockResult,
    LockStatus,
    SwitchBotModel,
    door_state_from_code,
    get_friendly_name,
    get_model_name,
    lock_status_from_code,
)


class TestSwitchBotModel:
    """Test discriminator lookup."""

    def test_from_character(self):
        assert SwitchBotModel.from_value("H") is SwitchBotModel.BOT
        assert SwitchBotModel.from_value("$") is SwitchBotModel.LOCK_PRO

    def test_from_byte_masks_high_bit(self):
        assert SwitchBotModel.from_value(0x54) is SwitchBotModel.METER
        assert SwitchBotModel.from_value(0xD4) is SwitchBotModel.METER

    def test_unknown(self):
        assert SwitchBotModel.from_value("~") is SwitchBotModel.UNKNOWN
        assert SwitchBotModel.from_value(0x00) is SwitchBotModel.UNKNOWN

    def test_every_model_named(self):
        for model in SwitchBotModel:
            assert get_model_name(model)
            assert get_friendly_name(model)


class TestLockStatus:
    """Lock status lookup is total."""

    def test_named_codes(self):
        assert lock_status_from_code(0) is LockStatus.LOCKED
        assert lock_status_from_code(1) is LockStatus.UNLOCKED
        assert lock_status_from_code(6) is LockStatus.NOT_FULLY_LOCKED

    def test_every_three_bit_code_maps(self):
        statuses = [lock_status_from_code(code) for code in range(8)]

        assert all(isinstance(status, LockStatus) for status in statuses)
        assert statuses[7] is LockStatus.UNKNOWN

    def test_out_of_range_code(self):
        assert lock_status_from_code(42) is LockStatus.UNKNOWN


class TestLockResult:
    def test_values(self):
        assert LockResult.ERROR == 0
        assert LockResult.SUCCESS == 1
        assert LockResult.SUCCESS_LOW_BATTERY == 6


class TestDoorState:
    def test_codes(self):
        assert door_state_from_code(0) is DoorState.CLOSE
        assert door_state_from_code(1) is DoorState.OPEN
        assert door_state_from_code(2) is DoorState.TIMEOUT_NOT_CLOSED
        assert DoorState.TIMEOUT_NOT_CLOSED.value == "timeout no closed"
