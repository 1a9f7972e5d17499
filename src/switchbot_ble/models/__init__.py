"""Data models for SwitchBot devices."""

from .advertisement import Advertisement, AdvertisementFrame, DecodeFailure
from .enums import (
    DoorState,
    LockResult,
    LockStatus,
    SwitchBotModel,
    door_state_from_code,
    get_friendly_name,
    get_model_name,
    lock_status_from_code,
)
from .records import (
    BaseRecord,
    BlindTiltData,
    BotData,
    ContactSensorData,
    CurtainData,
    Hub2Data,
    HumidifierData,
    KeypadData,
    LeakData,
    LightData,
    LockData,
    MeterData,
    MeterProCO2Data,
    MotionSensorData,
    PlugMiniData,
    RelaySwitchData,
    RelaySwitchPMData,
    ServiceDataRecord,
    StripLightData,
)

__all__ = [
    "Advertisement",
    "AdvertisementFrame",
    "DecodeFailure",
    "DoorState",
    "LockResult",
    "LockStatus",
    "SwitchBotModel",
    "door_state_from_code",
    "get_friendly_name",
    "get_model_name",
    "lock_status_from_code",
    "BaseRecord",
    "BlindTiltData",
    "BotData",
    "ContactSensorData",
    "CurtainData",
    "Hub2Data",
    "HumidifierData",
    "KeypadData",
    "LeakData",
    "LightData",
    "LockData",
    "MeterData",
    "MeterProCO2Data",
    "MotionSensorData",
    "PlugMiniData",
    "RelaySwitchData",
    "RelaySwitchPMData",
    "ServiceDataRecord",
    "StripLightData",
]
