"""Test the model registry."""

import pytest

from switchbot_ble import (
    Bot,
    ConfigurationError,
    Humidifier2,
    Lock,
    RelaySwitch1PM,
    SwitchbotDevice,
    create_device,
    resolve,
)
from switchbot_ble.models.enums import SwitchBotModel
from switchbot_ble.registry import REGISTRY

ADDRESS = "AA:BB:CC:DD:EE:FF"


class TestResolve:
    def test_bot(self):
        spec = resolve("H")

        assert spec.model is SwitchBotModel.BOT
        assert spec.model_name == "WoHand"
        assert spec.friendly_name == "Bot"
        assert spec.encrypted is False
        assert spec.device_class is Bot
        assert "press" in spec.commands

    def test_resolve_by_raw_byte(self):
        """Raw service data byte 0, high bit masked."""
        assert resolve(0x6F | 0x80).device_class is Lock

    def test_encrypted_families(self):
        encrypted = {model for model, spec in REGISTRY.items() if spec.encrypted}

        assert encrypted == {
            SwitchBotModel.LOCK,
            SwitchBotModel.LOCK_PRO,
            SwitchBotModel.RELAY_SWITCH_1,
            SwitchBotModel.RELAY_SWITCH_1PM,
        }

    def test_unknown_model_gets_minimal_spec(self):
        spec = resolve("~")

        assert spec.model is SwitchBotModel.UNKNOWN
        assert spec.device_class is SwitchbotDevice
        assert spec.commands == ("connect", "disconnect", "get_device_name")

    def test_sensor_has_no_commands(self):
        assert resolve(SwitchBotModel.METER).commands == ("connect", "disconnect", "get_device_name")

    @pytest.mark.parametrize("model", list(REGISTRY))
    def test_listed_commands_exist(self, model):
        spec = REGISTRY[model]
        for command in spec.commands:
            assert callable(getattr(spec.device_class, command)), (model, command)

    def test_every_model_registered(self):
        assert set(REGISTRY) == {m for m in SwitchBotModel if m is not SwitchBotModel.UNKNOWN}


class TestCreateDevice:
    def test_plain_device(self):
        device = create_device("E", ADDRESS)

        assert isinstance(device, Humidifier2)
        assert device.address == ADDRESS

    def test_sensor_keeps_model(self):
        device = create_device(SwitchBotModel.CONTACT_SENSOR, ADDRESS)

        assert type(device) is SwitchbotDevice
        assert device.model is SwitchBotModel.CONTACT_SENSOR
        assert device.friendly_name == "Contact Sensor"

    def test_encrypted_device_with_keys(self):
        device = create_device("<", ADDRESS, key_id="0a", encryption_key="ff" * 16)

        assert isinstance(device, RelaySwitch1PM)
        assert device.key_id == "0a"

    def test_encrypted_device_without_keys(self):
        with pytest.raises(ConfigurationError):
            create_device("o", ADDRESS)
