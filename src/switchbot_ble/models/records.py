"""Decoded service data records, one shape per device family.

Every record carries the model discriminator and both display names so a
caller can switch on ``record.model`` without knowing which parser ran.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Union

from .enums import DoorState, LockStatus, SwitchBotModel


@dataclass(frozen=True)
class BaseRecord:
    model: SwitchBotModel
    model_name: str
    model_friendly_name: str

    def to_dict(self) -> dict[str, Any]:
        """Return the record as a plain dict (enums kept as members)."""
        return asdict(self)


@dataclass(frozen=True)
class BotData(BaseRecord):
    mode: bool  # True = switch mode, False = press mode
    state: bool
    battery: int


@dataclass(frozen=True)
class CurtainData(BaseRecord):
    calibration: bool
    battery: int
    in_motion: bool
    position: int
    light_level: int
    device_chain: int


@dataclass(frozen=True)
class BlindTiltData(BaseRecord):
    calibration: bool
    battery: int
    in_motion: bool
    tilt: int
    light_level: int


@dataclass(frozen=True)
class HumidifierData(BaseRecord):
    on_state: bool
    auto_mode: bool
    percentage: int
    humidity: int


@dataclass(frozen=True)
class MeterData(BaseRecord):
    celsius: float
    fahrenheit: float
    fahrenheit_mode: bool
    humidity: int
    battery: int


@dataclass(frozen=True)
class MeterProCO2Data(MeterData):
    co2: int


@dataclass(frozen=True)
class Hub2Data(BaseRecord):
    celsius: float
    fahrenheit: float
    fahrenheit_mode: bool
    humidity: int
    light_level: int


@dataclass(frozen=True)
class MotionSensorData(BaseRecord):
    tested: bool
    movement: bool
    battery: int
    led: int
    iot: int
    sense_distance: int
    light_level: int
    is_light: bool


@dataclass(frozen=True)
class ContactSensorData(BaseRecord):
    tested: bool
    movement: bool
    battery: int
    contact_open: bool
    contact_timeout: bool
    is_light: bool
    button_count: int
    door_state: DoorState


@dataclass(frozen=True)
class LightData(BaseRecord):
    """Color Bulb and Ceiling Light state."""

    power: int
    red: int
    green: int
    blue: int
    color_temperature: int
    state: bool
    brightness: int
    delay: bool
    preset: bool
    color_mode: int
    speed: int
    loop_index: int


@dataclass(frozen=True)
class StripLightData(BaseRecord):
    sequence_number: int
    state: bool
    brightness: int
    delay: bool
    preset: bool
    color_mode: int
    speed: int
    loop_index: int


@dataclass(frozen=True)
class PlugMiniData(BaseRecord):
    state: bool | None  # None when the state byte is neither 0x00 nor 0x80
    delay: bool
    timer: bool
    sync_utc_time: bool
    wifi_rssi: int
    overload: bool
    current_power: float  # W


@dataclass(frozen=True)
class LockData(BaseRecord):
    battery: int
    calibration: bool
    status: LockStatus
    update_from_secondary_lock: bool
    door_open: bool
    double_lock_mode: bool
    unclosed_alarm: bool
    unlocked_alarm: bool
    auto_lock_paused: bool
    night_latch: bool


@dataclass(frozen=True)
class LeakData(BaseRecord):
    leak: bool
    tampered: bool
    battery: int
    low_battery: bool


@dataclass(frozen=True)
class KeypadData(BaseRecord):
    event: bool
    tampered: bool
    battery: int
    low_battery: bool


@dataclass(frozen=True)
class RelaySwitchData(BaseRecord):
    mode: bool  # always True, kept for compatibility
    state: bool
    sequence_number: int


@dataclass(frozen=True)
class RelaySwitchPMData(RelaySwitchData):
    power: float  # W
    voltage: float
    current: float


ServiceDataRecord = Union[
    BotData,
    CurtainData,
    BlindTiltData,
    HumidifierData,
    MeterData,
    MeterProCO2Data,
    Hub2Data,
    MotionSensorData,
    ContactSensorData,
    LightData,
    StripLightData,
    PlugMiniData,
    LockData,
    LeakData,
    KeypadData,
    RelaySwitchData,
    RelaySwitchPMData,
]
