from __future__ import annotations

from enum import Enum
from typing import Final


class SwitchBotModel(str, Enum):
    """Model discriminators, the low 7 bits of service data byte 0."""
    BOT = "H"
    CURTAIN = "c"
    CURTAIN3 = "{"
    HUMIDIFIER = "e"
    HUMIDIFIER2 = "E"
    METER = "T"
    METER_PLUS = "i"
    METER_PRO = "4"
    METER_PRO_CO2 = "5"
    HUB2 = "v"
    OUTDOOR_METER = "w"
    MOTION_SENSOR = "s"
    CONTACT_SENSOR = "d"
    COLOR_BULB = "u"
    STRIP_LIGHT = "r"
    PLUG_MINI_US = "g"
    PLUG_MINI_JP = "j"
    LOCK = "o"
    LOCK_PRO = "$"
    CEILING_LIGHT = "q"
    CEILING_LIGHT_PRO = "n"
    BLIND_TILT = "x"
    LEAK = "&"
    KEYPAD = "y"
    RELAY_SWITCH_1 = ";"
    RELAY_SWITCH_1PM = "<"
    UNKNOWN = "Unknown"

    @classmethod
    def from_value(cls, value: str | int) -> SwitchBotModel:
        """Resolve a discriminator character or raw byte, UNKNOWN if unmapped."""
        if isinstance(value, int):
            value = chr(value & 0b01111111)
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class LockStatus(str, Enum):
    """Lock bolt state reported in advertisements and info responses."""
    LOCKED = "LOCKED"
    UNLOCKED = "UNLOCKED"
    LOCKING = "LOCKING"
    UNLOCKING = "UNLOCKING"
    LOCKING_STOP = "LOCKING_STOP"
    UNLOCKING_STOP = "UNLOCKING_STOP"
    NOT_FULLY_LOCKED = "NOT_FULLY_LOCKED"  # EU lock type only
    UNKNOWN = "UNKNOWN"


class DoorState(str, Enum):
    """Contact sensor hall-effect state."""
    CLOSE = "close"
    OPEN = "open"
    TIMEOUT_NOT_CLOSED = "timeout no closed"


class LockResult(int, Enum):
    """Lock command result codes (byte 0 of the response)."""
    ERROR = 0x00
    SUCCESS = 0x01
    SUCCESS_LOW_BATTERY = 0x06


MODEL_NAMES: Final[dict[SwitchBotModel, str]] = {
    SwitchBotModel.BOT: "WoHand",
    SwitchBotModel.CURTAIN: "WoCurtain",
    SwitchBotModel.CURTAIN3: "WoCurtain3",
    SwitchBotModel.HUMIDIFIER: "WoHumi",
    SwitchBotModel.HUMIDIFIER2: "WoHumi2",
    SwitchBotModel.METER: "WoSensorTH",
    SwitchBotModel.METER_PLUS: "WoSensorTHPlus",
    SwitchBotModel.METER_PRO: "WoSensorTHP",
    SwitchBotModel.METER_PRO_CO2: "WoSensorTHPc",
    SwitchBotModel.HUB2: "WoHub2",
    SwitchBotModel.OUTDOOR_METER: "WoIOSensorTH",
    SwitchBotModel.MOTION_SENSOR: "WoMotion",
    SwitchBotModel.CONTACT_SENSOR: "WoContact",
    SwitchBotModel.COLOR_BULB: "WoBulb",
    SwitchBotModel.STRIP_LIGHT: "WoStrip",
    SwitchBotModel.PLUG_MINI_US: "WoPlugMini",
    SwitchBotModel.PLUG_MINI_JP: "WoPlugMini",
    SwitchBotModel.LOCK: "WoSmartLock",
    SwitchBotModel.LOCK_PRO: "WoSmartLockPro",
    SwitchBotModel.CEILING_LIGHT: "WoCeilingLight",
    SwitchBotModel.CEILING_LIGHT_PRO: "WoCeilingLightPro",
    SwitchBotModel.BLIND_TILT: "WoBlindTilt",
    SwitchBotModel.LEAK: "WoLeakDetector",
    SwitchBotModel.KEYPAD: "WoKeypad",
    SwitchBotModel.RELAY_SWITCH_1: "WoRelaySwitch1Plus",
    SwitchBotModel.RELAY_SWITCH_1PM: "WoRelaySwitch1PM",
    SwitchBotModel.UNKNOWN: "Unknown",
}

MODEL_FRIENDLY_NAMES: Final[dict[SwitchBotModel, str]] = {
    SwitchBotModel.BOT: "Bot",
    SwitchBotModel.CURTAIN: "Curtain",
    SwitchBotModel.CURTAIN3: "Curtain 3",
    SwitchBotModel.HUMIDIFIER: "Humidifier",
    SwitchBotModel.HUMIDIFIER2: "Humidifier2",
    SwitchBotModel.METER: "Meter",
    SwitchBotModel.METER_PLUS: "Meter Plus",
    SwitchBotModel.METER_PRO: "Meter Pro",
    SwitchBotModel.METER_PRO_CO2: "Meter Pro CO2",
    SwitchBotModel.HUB2: "Hub 2",
    SwitchBotModel.OUTDOOR_METER: "Outdoor Meter",
    SwitchBotModel.MOTION_SENSOR: "Motion Sensor",
    SwitchBotModel.CONTACT_SENSOR: "Contact Sensor",
    SwitchBotModel.COLOR_BULB: "Color Bulb",
    SwitchBotModel.STRIP_LIGHT: "Strip Light",
    SwitchBotModel.PLUG_MINI_US: "Plug Mini",
    SwitchBotModel.PLUG_MINI_JP: "Plug Mini",
    SwitchBotModel.LOCK: "Lock",
    SwitchBotModel.LOCK_PRO: "Lock Pro",
    SwitchBotModel.CEILING_LIGHT: "Ceiling Light",
    SwitchBotModel.CEILING_LIGHT_PRO: "Ceiling Light Pro",
    SwitchBotModel.BLIND_TILT: "Blind Tilt",
    SwitchBotModel.LEAK: "Water Detector",
    SwitchBotModel.KEYPAD: "Keypad",
    SwitchBotModel.RELAY_SWITCH_1: "Relay Switch 1",
    SwitchBotModel.RELAY_SWITCH_1PM: "Relay Switch 1PM",
    SwitchBotModel.UNKNOWN: "Unknown",
}

_LOCK_STATUS_CODES: Final[dict[int, LockStatus]] = {
    0b000: LockStatus.LOCKED,
    0b001: LockStatus.UNLOCKED,
    0b010: LockStatus.LOCKING,
    0b011: LockStatus.UNLOCKING,
    0b100: LockStatus.LOCKING_STOP,
    0b101: LockStatus.UNLOCKING_STOP,
    0b110: LockStatus.NOT_FULLY_LOCKED,
}

_DOOR_STATES: Final[dict[int, DoorState]] = {
    0: DoorState.CLOSE,
    1: DoorState.OPEN,
}


def get_model_name(model: SwitchBotModel) -> str:
    """Get the firmware model name (e.g. "WoHand")."""
    return MODEL_NAMES.get(model, MODEL_NAMES[SwitchBotModel.UNKNOWN])


def get_friendly_name(model: SwitchBotModel) -> str:
    """Get the human readable model name (e.g. "Bot")."""
    return MODEL_FRIENDLY_NAMES.get(model, MODEL_FRIENDLY_NAMES[SwitchBotModel.UNKNOWN])


def lock_status_from_code(code: int) -> LockStatus:
    """Map a 3-bit lock status field to LockStatus.

    Every input maps to a member; codes outside the table give UNKNOWN.
    """
    return _LOCK_STATUS_CODES.get(code, LockStatus.UNKNOWN)


def door_state_from_code(code: int) -> DoorState:
    """Map the 2-bit contact sensor hall state to DoorState."""
    return _DOOR_STATES.get(code, DoorState.TIMEOUT_NOT_CLOSED)
