"""Model discriminator to device class and command set."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from .device import SwitchbotDevice
from .devices import (
    BlindTilt,
    Bot,
    CeilingLight,
    CeilingLightPro,
    ColorBulb,
    Curtain,
    Curtain3,
    EncryptedDevice,
    Humidifier,
    Humidifier2,
    Lock,
    LockPro,
    PlugMini,
    PlugMiniJP,
    RelaySwitch1,
    RelaySwitch1PM,
    StripLight,
)
from .models.enums import SwitchBotModel, get_friendly_name, get_model_name

if TYPE_CHECKING:
    from bleak.backends.device import BLEDevice

_BASE_COMMANDS: Final = ("connect", "disconnect", "get_device_name")


@dataclass(frozen=True)
class DeviceSpec:
    """What a model can do.

    Attributes:
        model: Model discriminator
        model_name: Firmware model name (e.g. "WoHand")
        friendly_name: Human readable name (e.g. "Bot")
        encrypted: True if commands go through the encryption overlay
        device_class: Class to instantiate for this model
        commands: Names of the command methods the class exposes
    """

    model: SwitchBotModel
    model_name: str
    friendly_name: str
    encrypted: bool
    device_class: type[SwitchbotDevice]
    commands: tuple[str, ...] = field(default=_BASE_COMMANDS)


def _spec(model: SwitchBotModel, device_class: type[SwitchbotDevice], *commands: str) -> DeviceSpec:
    return DeviceSpec(
        model=model,
        model_name=get_model_name(model),
        friendly_name=get_friendly_name(model),
        encrypted=issubclass(device_class, EncryptedDevice),
        device_class=device_class,
        commands=_BASE_COMMANDS + commands,
    )


_BOT = ("press", "turn_on", "turn_off", "down", "up")
_CURTAIN = ("open", "close", "pause", "run_to_pos")
_BLIND_TILT = ("open", "close_up", "close_down", "pause", "run_to_pos")
_HUMIDIFIER = (
    "turn_on", "turn_off", "increase", "decrease",
    "set_auto_mode", "set_manual_mode", "percentage",
)
_BULB = (
    "read_state", "set_state", "turn_on", "turn_off",
    "set_brightness", "set_color_temperature", "set_rgb",
)
_CEILING = (
    "read_state", "set_state", "turn_on", "turn_off",
    "set_brightness", "set_color_temperature",
)
_STRIP = ("read_state", "set_state", "turn_on", "turn_off", "set_brightness", "set_rgb")
_PLUG = ("read_state", "set_state", "turn_on", "turn_off", "toggle")
_LOCK = (
    "lock", "unlock", "unlock_no_unlatch", "info",
    "enable_notifications", "disable_notifications",
)
_RELAY = ("turn_on", "turn_off", "toggle")

REGISTRY: Final[dict[SwitchBotModel, DeviceSpec]] = {
    spec.model: spec
    for spec in (
        _spec(SwitchBotModel.BOT, Bot, *_BOT),
        _spec(SwitchBotModel.CURTAIN, Curtain, *_CURTAIN),
        _spec(SwitchBotModel.CURTAIN3, Curtain3, *_CURTAIN),
        _spec(SwitchBotModel.BLIND_TILT, BlindTilt, *_BLIND_TILT),
        _spec(SwitchBotModel.HUMIDIFIER, Humidifier, *_HUMIDIFIER),
        _spec(SwitchBotModel.HUMIDIFIER2, Humidifier2, *_HUMIDIFIER),
        _spec(SwitchBotModel.COLOR_BULB, ColorBulb, *_BULB),
        _spec(SwitchBotModel.CEILING_LIGHT, CeilingLight, *_CEILING),
        _spec(SwitchBotModel.CEILING_LIGHT_PRO, CeilingLightPro, *_CEILING),
        _spec(SwitchBotModel.STRIP_LIGHT, StripLight, *_STRIP),
        _spec(SwitchBotModel.PLUG_MINI_US, PlugMini, *_PLUG),
        _spec(SwitchBotModel.PLUG_MINI_JP, PlugMiniJP, *_PLUG),
        _spec(SwitchBotModel.LOCK, Lock, *_LOCK),
        _spec(SwitchBotModel.LOCK_PRO, LockPro, *_LOCK),
        _spec(SwitchBotModel.RELAY_SWITCH_1, RelaySwitch1, *_RELAY),
        _spec(SwitchBotModel.RELAY_SWITCH_1PM, RelaySwitch1PM, *_RELAY, "get_voltage_and_current"),
        # Sensors only advertise; a connection is good for the device name only
        _spec(SwitchBotModel.METER, SwitchbotDevice),
        _spec(SwitchBotModel.METER_PLUS, SwitchbotDevice),
        _spec(SwitchBotModel.METER_PRO, SwitchbotDevice),
        _spec(SwitchBotModel.METER_PRO_CO2, SwitchbotDevice),
        _spec(SwitchBotModel.OUTDOOR_METER, SwitchbotDevice),
        _spec(SwitchBotModel.HUB2, SwitchbotDevice),
        _spec(SwitchBotModel.MOTION_SENSOR, SwitchbotDevice),
        _spec(SwitchBotModel.CONTACT_SENSOR, SwitchbotDevice),
        _spec(SwitchBotModel.LEAK, SwitchbotDevice),
        _spec(SwitchBotModel.KEYPAD, SwitchbotDevice),
    )
}

_UNKNOWN_SPEC: Final = _spec(SwitchBotModel.UNKNOWN, SwitchbotDevice)


def resolve(model: SwitchBotModel | str | int) -> DeviceSpec:
    """Look up a model; unknown discriminators get the base spec, never an error."""
    if not isinstance(model, SwitchBotModel):
        model = SwitchBotModel.from_value(model)
    return REGISTRY.get(model, _UNKNOWN_SPEC)


def create_device(
        model: SwitchBotModel | str | int,
        address: str,
        ble_device: BLEDevice | None = None,
        **kwargs,
) -> SwitchbotDevice:
    """Instantiate the device class registered for ``model``.

    Keyword arguments are passed to the class, e.g. ``key_id`` and
    ``encryption_key`` for locks.

    Raises:
        ConfigurationError: If an encrypted model is given bad key material
    """
    spec = resolve(model)
    device = spec.device_class(address, ble_device, **kwargs)
    if spec.device_class is SwitchbotDevice:
        device.model = spec.model
    return device
