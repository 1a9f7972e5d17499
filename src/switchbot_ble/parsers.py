"""Advertisement decoding: one pure parser per device family.

Each parser takes the service data, the manufacturer data (company id
stripped) and a diagnostic sink, checks its own length preconditions before
touching any byte, and returns either a record or a DecodeFailure.
``decode`` picks the parser from the model discriminator in service data
byte 0.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Callable, Final

from .diagnostics import DiagnosticSink, logger_sink
from .encoding import bit, bits, clamp, percent, u16be
from .models.advertisement import AdvertisementFrame, DecodeFailure
from .models.enums import (
    SwitchBotModel,
    door_state_from_code,
    get_friendly_name,
    get_model_name,
    lock_status_from_code,
)
from .models.records import (
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

_LOGGER = logging.getLogger(__name__)
_DEFAULT_SINK = logger_sink(_LOGGER)

ParseResult = ServiceDataRecord | DecodeFailure
Parser = Callable[[bytes, bytes, DiagnosticSink], ParseResult]

DETECTOR_MODEL_ID: Final = 0x26

# Humidifier quick gear codes 1/2/3 and the humidity they stand for
_HUMIDIFIER_QUICK_GEAR: Final[dict[int, int]] = {101: 33, 102: 66, 103: 100}


def _names(model: SwitchBotModel) -> dict[str, Any]:
    return {
        "model": model,
        "model_name": get_model_name(model),
        "model_friendly_name": get_friendly_name(model),
    }


def _fail(sink: DiagnosticSink, parser: str, reason: str) -> DecodeFailure:
    sink("debug", f"[{parser}] {reason}")
    return DecodeFailure(parser=parser, reason=reason)


def _temperature(decimal_byte: int, integer_byte: int) -> tuple[float, float]:
    """Decode the sign/integer + tenths temperature pair used by all meters.

    Returns:
        (celsius, fahrenheit), both rounded to one decimal
    """
    sign = 1 if bit(integer_byte, 0b10000000) else -1
    celsius = sign * ((integer_byte & 0b01111111) + (decimal_byte & 0b00001111) / 10)
    fahrenheit = celsius * 9 / 5 + 32
    return round(celsius, 1), round(fahrenheit, 1)


def parse_bot(service_data: bytes, manufacturer_data: bytes, sink: DiagnosticSink) -> ParseResult:
    if len(service_data) != 3:
        return _fail(sink, "parse_bot", f"Buffer length {len(service_data)} !== 3!")

    byte1 = service_data[1]
    return BotData(
        **_names(SwitchBotModel.BOT),
        mode=bit(byte1, 0b10000000),
        # 0 = on, 1 = off
        state=not bit(byte1, 0b01000000),
        battery=percent(service_data[2]),
    )


def parse_curtain(
        service_data: bytes,
        manufacturer_data: bytes,
        sink: DiagnosticSink,
        model: SwitchBotModel = SwitchBotModel.CURTAIN,
) -> ParseResult:
    if len(service_data) not in (5, 6):
        return _fail(
            sink, "parse_curtain", f"Buffer length {len(service_data)} !== 5 or 6!"
        )

    byte3 = service_data[3]
    byte4 = service_data[4]
    return CurtainData(
        **_names(model),
        calibration=bit(service_data[1], 0b01000000),
        battery=percent(service_data[2]),
        in_motion=bit(byte3, 0b10000000),
        position=percent(byte3),
        light_level=bits(byte4, 0b11110000),
        device_chain=bits(byte4, 0b00000111),
    )


def parse_blind_tilt(service_data: bytes, manufacturer_data: bytes, sink: DiagnosticSink) -> ParseResult:
    if len(service_data) not in (5, 6):
        return _fail(
            sink, "parse_blind_tilt", f"Buffer length {len(service_data)} !== 5 or 6!"
        )

    byte3 = service_data[3]
    return BlindTiltData(
        **_names(SwitchBotModel.BLIND_TILT),
        calibration=bit(service_data[1], 0b00000001),
        battery=percent(service_data[2]),
        in_motion=bit(byte3, 0b10000000),
        tilt=percent(byte3),
        light_level=bits(service_data[4], 0b11110000),
    )


def parse_humidifier(
        service_data: bytes,
        manufacturer_data: bytes,
        sink: DiagnosticSink,
        model: SwitchBotModel = SwitchBotModel.HUMIDIFIER,
) -> ParseResult:
    if len(service_data) != 8:
        return _fail(sink, "parse_humidifier", f"Buffer length {len(service_data)} !== 8!")

    byte4 = service_data[4]
    auto_mode = bit(byte4, 0b10000000)
    # 0-100 %, 101/102/103 are quick gears 1/2/3
    level = byte4 & 0b01111111
    if auto_mode:
        humidity = 0
    else:
        humidity = _HUMIDIFIER_QUICK_GEAR.get(level, int(clamp(level, 0, 100)))

    return HumidifierData(
        **_names(model),
        on_state=bit(service_data[1], 0b10000000),
        auto_mode=auto_mode,
        percentage=0 if auto_mode else level,
        humidity=humidity,
    )


def parse_meter(
        service_data: bytes,
        manufacturer_data: bytes,
        sink: DiagnosticSink,
        model: SwitchBotModel = SwitchBotModel.METER,
) -> ParseResult:
    if len(service_data) != 6:
        return _fail(sink, "parse_meter", f"Buffer length {len(service_data)} !== 6!")

    byte5 = service_data[5]
    celsius, fahrenheit = _temperature(service_data[3], service_data[4])
    return MeterData(
        **_names(model),
        celsius=celsius,
        fahrenheit=fahrenheit,
        fahrenheit_mode=bit(byte5, 0b10000000),
        humidity=percent(byte5),
        battery=percent(service_data[2]),
    )


def parse_meter_pro(
        service_data: bytes,
        manufacturer_data: bytes,
        sink: DiagnosticSink,
        model: SwitchBotModel = SwitchBotModel.METER_PRO,
) -> ParseResult:
    """Parse Meter Pro and Outdoor Meter frames.

    Battery comes from service data, temperature and humidity from
    manufacturer data bytes 8-10.
    """
    if len(service_data) < 3:
        return _fail(
            sink, "parse_meter_pro", f"Service Data Buffer length {len(service_data)} < 3!"
        )
    if len(manufacturer_data) < 11:
        return _fail(
            sink,
            "parse_meter_pro",
            f"Manufacturer Data Buffer length {len(manufacturer_data)} < 11!",
        )

    byte10 = manufacturer_data[10]
    celsius, fahrenheit = _temperature(manufacturer_data[8], manufacturer_data[9])
    return MeterData(
        **_names(model),
        celsius=celsius,
        fahrenheit=fahrenheit,
        fahrenheit_mode=bit(byte10, 0b10000000),
        humidity=percent(byte10),
        battery=percent(service_data[2]),
    )


def parse_meter_pro_co2(service_data: bytes, manufacturer_data: bytes, sink: DiagnosticSink) -> ParseResult:
    if len(service_data) < 3:
        return _fail(
            sink, "parse_meter_pro_co2", f"Service Data Buffer length {len(service_data)} < 3!"
        )
    if len(manufacturer_data) < 15:
        return _fail(
            sink,
            "parse_meter_pro_co2",
            f"Manufacturer Data Buffer length {len(manufacturer_data)} < 15!",
        )

    byte10 = manufacturer_data[10]
    celsius, fahrenheit = _temperature(manufacturer_data[8], manufacturer_data[9])
    return MeterProCO2Data(
        **_names(SwitchBotModel.METER_PRO_CO2),
        celsius=celsius,
        fahrenheit=fahrenheit,
        fahrenheit_mode=bit(byte10, 0b10000000),
        humidity=percent(byte10),
        battery=percent(service_data[2]),
        co2=u16be(manufacturer_data, 13),
    )


def parse_hub2(service_data: bytes, manufacturer_data: bytes, sink: DiagnosticSink) -> ParseResult:
    if len(manufacturer_data) < 16:
        return _fail(
            sink, "parse_hub2", f"Manufacturer Data Buffer length {len(manufacturer_data)} < 16!"
        )

    byte15 = manufacturer_data[15]
    celsius, fahrenheit = _temperature(manufacturer_data[13], manufacturer_data[14])
    return Hub2Data(
        **_names(SwitchBotModel.HUB2),
        celsius=celsius,
        fahrenheit=fahrenheit,
        fahrenheit_mode=bit(byte15, 0b10000000),
        humidity=percent(byte15),
        light_level=bits(manufacturer_data[12], 0b00011111),
    )


def parse_motion_sensor(service_data: bytes, manufacturer_data: bytes, sink: DiagnosticSink) -> ParseResult:
    if len(service_data) != 6:
        return _fail(sink, "parse_motion_sensor", f"Buffer length {len(service_data)} !== 6!")

    byte1 = service_data[1]
    byte5 = service_data[5]
    return MotionSensorData(
        **_names(SwitchBotModel.MOTION_SENSOR),
        tested=bit(byte1, 0b10000000),
        movement=bit(byte1, 0b01000000),
        battery=percent(service_data[2]),
        led=bits(byte5, 0b00100000),
        iot=bits(byte5, 0b00010000),
        sense_distance=bits(byte5, 0b00001100),
        light_level=bits(byte5, 0b00000011),
        is_light=bit(byte5, 0b00000010),
    )


def parse_contact_sensor(service_data: bytes, manufacturer_data: bytes, sink: DiagnosticSink) -> ParseResult:
    if len(service_data) != 9:
        return _fail(sink, "parse_contact_sensor", f"Buffer length {len(service_data)} !== 9!")

    byte1 = service_data[1]
    byte3 = service_data[3]
    return ContactSensorData(
        **_names(SwitchBotModel.CONTACT_SENSOR),
        tested=bit(byte1, 0b10000000),
        movement=bit(byte1, 0b01000000),
        battery=percent(service_data[2]),
        contact_open=bit(byte3, 0b00000010),
        contact_timeout=bit(byte3, 0b00000100),
        is_light=bit(byte3, 0b00000001),
        button_count=bits(service_data[8], 0b00001111),
        door_state=door_state_from_code(bits(byte3, 0b00000110)),
    )


def parse_light(
        service_data: bytes,
        manufacturer_data: bytes,
        sink: DiagnosticSink,
        model: SwitchBotModel = SwitchBotModel.COLOR_BULB,
) -> ParseResult:
    """Parse Color Bulb and Ceiling Light (Pro) manufacturer data.

    Layout (13 bytes):
    - [1]: power and light status
    - [3-5]: red, green, blue
    - [6]: color temperature
    - [7]: bit7 on/off, bits 0-6 brightness
    - [8]: bit7 delay, bit3 preset, bits 0-2 color mode
    - [9]: bits 0-6 speed
    - [10]: loop index (bits 1-7)
    """
    if len(manufacturer_data) != 13:
        return _fail(sink, "parse_light", f"Buffer length {len(manufacturer_data)} !== 13!")

    byte7 = manufacturer_data[7]
    byte8 = manufacturer_data[8]
    return LightData(
        **_names(model),
        power=manufacturer_data[1],
        red=manufacturer_data[3],
        green=manufacturer_data[4],
        blue=manufacturer_data[5],
        color_temperature=manufacturer_data[6],
        state=bit(byte7, 0b10000000),
        brightness=percent(byte7),
        delay=bit(byte8, 0b10000000),
        preset=bit(byte8, 0b00001000),
        color_mode=bits(byte8, 0b00000111),
        speed=manufacturer_data[9] & 0b01111111,
        loop_index=manufacturer_data[10] & 0b11111110,
    )


def parse_strip_light(service_data: bytes, manufacturer_data: bytes, sink: DiagnosticSink) -> ParseResult:
    if len(manufacturer_data) < 11:
        return _fail(
            sink, "parse_strip_light", f"Buffer length {len(manufacturer_data)} < 11!"
        )

    byte7 = manufacturer_data[7]
    byte8 = manufacturer_data[8]
    return StripLightData(
        **_names(SwitchBotModel.STRIP_LIGHT),
        sequence_number=manufacturer_data[6],
        state=bit(byte7, 0b10000000),
        brightness=percent(byte7),
        delay=bit(byte8, 0b10000000),
        preset=bit(byte8, 0b00001000),
        color_mode=bits(byte8, 0b00000111),
        speed=manufacturer_data[9] & 0b01111111,
        loop_index=manufacturer_data[10] & 0b11111110,
    )


def parse_plug_mini(
        service_data: bytes,
        manufacturer_data: bytes,
        sink: DiagnosticSink,
        model: SwitchBotModel = SwitchBotModel.PLUG_MINI_US,
) -> ParseResult:
    if len(manufacturer_data) < 12:
        return _fail(
            sink, "parse_plug_mini", f"Buffer length {len(manufacturer_data)} should be 12"
        )

    state_byte = manufacturer_data[7]  # 0x00 = off, 0x80 = on
    byte8 = manufacturer_data[8]
    byte10 = manufacturer_data[10]
    if state_byte == 0x80:
        state: bool | None = True
    elif state_byte == 0x00:
        state = False
    else:
        state = None

    return PlugMiniData(
        **_names(model),
        state=state,
        delay=bit(byte8, 0b00000001),
        timer=bit(byte8, 0b00000010),
        sync_utc_time=bit(byte8, 0b00000100),
        wifi_rssi=manufacturer_data[9],
        overload=bit(byte10, 0b10000000),
        current_power=(((byte10 & 0b01111111) << 8) + manufacturer_data[11]) / 10,
    )


def parse_lock(service_data: bytes, manufacturer_data: bytes, sink: DiagnosticSink) -> ParseResult:
    if len(service_data) < 3:
        return _fail(sink, "parse_lock", f"Service Data Buffer length {len(service_data)} < 3!")
    if len(manufacturer_data) < 11:
        return _fail(sink, "parse_lock", f"Buffer length {len(manufacturer_data)} is too short!")

    byte7 = manufacturer_data[7]
    byte8 = manufacturer_data[8]
    return LockData(
        **_names(SwitchBotModel.LOCK),
        battery=percent(service_data[2]),
        calibration=bit(byte7, 0b10000000),
        status=lock_status_from_code(bits(byte7, 0b01110000)),
        update_from_secondary_lock=bit(byte7, 0b00001000),
        door_open=bit(byte7, 0b00000100),
        double_lock_mode=bit(byte8, 0b10000000),
        unclosed_alarm=bit(byte8, 0b00100000),
        unlocked_alarm=bit(byte8, 0b00010000),
        auto_lock_paused=bit(byte8, 0b00000010),
        night_latch=bit(manufacturer_data[9], 0b00000001),
    )


def parse_lock_pro(service_data: bytes, manufacturer_data: bytes, sink: DiagnosticSink) -> ParseResult:
    if len(service_data) < 3:
        return _fail(
            sink, "parse_lock_pro", f"Service Data Buffer length {len(service_data)} < 3!"
        )
    if len(manufacturer_data) < 12:
        return _fail(
            sink, "parse_lock_pro", f"Buffer length {len(manufacturer_data)} is too short!"
        )

    byte7 = manufacturer_data[7]
    byte8 = manufacturer_data[8]
    byte11 = manufacturer_data[11]
    return LockData(
        **_names(SwitchBotModel.LOCK_PRO),
        battery=percent(service_data[2]),
        calibration=bit(byte7, 0b10000000),
        status=lock_status_from_code(bits(byte7, 0b00111000)),
        # Secondary lock and double lock mode are not supported on Lock Pro
        update_from_secondary_lock=False,
        door_open=bit(byte8, 0b01000000),
        double_lock_mode=False,
        unclosed_alarm=bit(byte11, 0b10000000),
        unlocked_alarm=bit(byte11, 0b01000000),
        auto_lock_paused=bit(byte8, 0b00100000),
        night_latch=bit(manufacturer_data[9], 0b00000001),
    )


def _parse_detector(
        parser: str,
        service_data: bytes,
        manufacturer_data: bytes,
        sink: DiagnosticSink,
        accepted_ids: tuple[int, ...],
) -> tuple[bool, bool, int, bool] | DecodeFailure:
    """Shared layout of the keypad and water leak detector frames.

    Returns:
        (event, tampered, battery, low_battery) or a DecodeFailure
    """
    if len(service_data) < 3:
        return _fail(sink, parser, f"Service Data Buffer length {len(service_data)} < 3!")
    if len(manufacturer_data) < 2:
        return _fail(
            sink, parser, f"Manufacturer Data Buffer length {len(manufacturer_data)} < 2!"
        )

    model_id = service_data[0]
    if model_id not in accepted_ids:
        return _fail(sink, parser, f"Model ID {model_id} !== 0x{DETECTOR_MODEL_ID:02x}!")

    event_flags = service_data[1]
    battery_info = service_data[2]
    return (
        bit(event_flags, 0b00000001),
        bit(event_flags, 0b00000010),
        percent(battery_info),
        bit(battery_info, 0b10000000),
    )


def parse_leak(service_data: bytes, manufacturer_data: bytes, sink: DiagnosticSink) -> ParseResult:
    fields = _parse_detector(
        "parse_leak", service_data, manufacturer_data, sink, (DETECTOR_MODEL_ID,)
    )
    if isinstance(fields, DecodeFailure):
        return fields

    leak, tampered, battery, low_battery = fields
    return LeakData(
        **_names(SwitchBotModel.LEAK),
        leak=leak,
        tampered=tampered,
        battery=battery,
        low_battery=low_battery,
    )


def parse_keypad(service_data: bytes, manufacturer_data: bytes, sink: DiagnosticSink) -> ParseResult:
    fields = _parse_detector(
        "parse_keypad",
        service_data,
        manufacturer_data,
        sink,
        (DETECTOR_MODEL_ID, ord(SwitchBotModel.KEYPAD.value)),
    )
    if isinstance(fields, DecodeFailure):
        return fields

    event, tampered, battery, low_battery = fields
    return KeypadData(
        **_names(SwitchBotModel.KEYPAD),
        event=event,
        tampered=tampered,
        battery=battery,
        low_battery=low_battery,
    )


def parse_relay_switch(service_data: bytes, manufacturer_data: bytes, sink: DiagnosticSink) -> ParseResult:
    if len(service_data) < 8:
        return _fail(sink, "parse_relay_switch", f"Buffer length {len(service_data)} < 8!")
    if len(manufacturer_data) < 8:
        return _fail(
            sink,
            "parse_relay_switch",
            f"Manufacturer Data Buffer length {len(manufacturer_data)} < 8!",
        )

    return RelaySwitchData(
        **_names(SwitchBotModel.RELAY_SWITCH_1),
        mode=True,
        state=bit(manufacturer_data[7], 0b10000000),
        sequence_number=manufacturer_data[6],
    )


def parse_relay_switch_pm(service_data: bytes, manufacturer_data: bytes, sink: DiagnosticSink) -> ParseResult:
    if len(service_data) < 8:
        return _fail(sink, "parse_relay_switch_pm", f"Buffer length {len(service_data)} < 8!")
    if len(manufacturer_data) < 12:
        return _fail(
            sink,
            "parse_relay_switch_pm",
            f"Manufacturer Data Buffer length {len(manufacturer_data)} < 12!",
        )

    return RelaySwitchPMData(
        **_names(SwitchBotModel.RELAY_SWITCH_1PM),
        mode=True,
        state=bit(manufacturer_data[7], 0b10000000),
        sequence_number=manufacturer_data[6],
        power=u16be(manufacturer_data, 10) / 10,
        voltage=0.0,
        current=0.0,
    )


PARSERS: Final[dict[SwitchBotModel, Parser]] = {
    SwitchBotModel.BOT: parse_bot,
    SwitchBotModel.CURTAIN: parse_curtain,
    SwitchBotModel.CURTAIN3: partial(parse_curtain, model=SwitchBotModel.CURTAIN3),
    SwitchBotModel.BLIND_TILT: parse_blind_tilt,
    SwitchBotModel.HUMIDIFIER: parse_humidifier,
    SwitchBotModel.HUMIDIFIER2: partial(parse_humidifier, model=SwitchBotModel.HUMIDIFIER2),
    SwitchBotModel.METER: parse_meter,
    SwitchBotModel.METER_PLUS: partial(parse_meter, model=SwitchBotModel.METER_PLUS),
    SwitchBotModel.METER_PRO: parse_meter_pro,
    SwitchBotModel.METER_PRO_CO2: parse_meter_pro_co2,
    SwitchBotModel.OUTDOOR_METER: partial(parse_meter_pro, model=SwitchBotModel.OUTDOOR_METER),
    SwitchBotModel.HUB2: parse_hub2,
    SwitchBotModel.MOTION_SENSOR: parse_motion_sensor,
    SwitchBotModel.CONTACT_SENSOR: parse_contact_sensor,
    SwitchBotModel.COLOR_BULB: parse_light,
    SwitchBotModel.CEILING_LIGHT: partial(parse_light, model=SwitchBotModel.CEILING_LIGHT),
    SwitchBotModel.CEILING_LIGHT_PRO: partial(parse_light, model=SwitchBotModel.CEILING_LIGHT_PRO),
    SwitchBotModel.STRIP_LIGHT: parse_strip_light,
    SwitchBotModel.PLUG_MINI_US: parse_plug_mini,
    SwitchBotModel.PLUG_MINI_JP: partial(parse_plug_mini, model=SwitchBotModel.PLUG_MINI_JP),
    SwitchBotModel.LOCK: parse_lock,
    SwitchBotModel.LOCK_PRO: parse_lock_pro,
    SwitchBotModel.LEAK: parse_leak,
    SwitchBotModel.KEYPAD: parse_keypad,
    SwitchBotModel.RELAY_SWITCH_1: parse_relay_switch,
    SwitchBotModel.RELAY_SWITCH_1PM: parse_relay_switch_pm,
}


def decode(
        service_data: bytes | None,
        manufacturer_data: bytes | None = None,
        sink: DiagnosticSink | None = None,
        model: SwitchBotModel | str | None = None,
) -> ParseResult:
    """Decode one advertisement into a typed record.

    Failures are returned, never raised, so callers can keep scanning.

    Args:
        service_data: SwitchBot service data, model discriminator in byte 0
        manufacturer_data: Manufacturer data with the company id stripped
        sink: Diagnostic sink, defaults to this module's logger
        model: Force a parser instead of reading the discriminator

    Returns:
        Decoded record, or DecodeFailure naming the parser and the reason
    """
    sink = sink or _DEFAULT_SINK
    service_data = bytes(service_data or b"")
    manufacturer_data = bytes(manufacturer_data or b"")

    if model is None:
        if not service_data:
            return _fail(sink, "decode", "Service data is empty")
        resolved = SwitchBotModel.from_value(service_data[0])
        if resolved is SwitchBotModel.UNKNOWN:
            return _fail(
                sink,
                "decode",
                f"Unknown model discriminator 0x{service_data[0] & 0b01111111:02x}",
            )
    else:
        resolved = SwitchBotModel.from_value(model)

    parser = PARSERS.get(resolved)
    if parser is None:
        return _fail(sink, "decode", f"No parser for model {resolved.value!r}")
    return parser(service_data, manufacturer_data, sink)


def decode_frame(
        frame: AdvertisementFrame,
        sink: DiagnosticSink | None = None,
        model: SwitchBotModel | str | None = None,
) -> ParseResult:
    """Decode an AdvertisementFrame, optionally forcing the parser for ``model``."""
    return decode(frame.service_data, frame.manufacturer_data, sink, model)
