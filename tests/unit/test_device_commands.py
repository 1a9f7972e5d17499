"""Test plain (unencrypted) device commands."""

from __future__ import annotations

import asyncio

import pytest

from switchbot_ble import BlindTilt, Bot, CeilingLight, ColorBulb, Curtain, Humidifier, PlugMini, StripLight
from switchbot_ble.exceptions import InvalidResponseError, ProtocolError
from switchbot_ble.protocol.commands import MotorMode
from switchbot_ble.transport import CommandChannel, ConnectionState

ADDRESS = "AA:BB:CC:DD:EE:FF"


class _FakeConnection:
    def __init__(self, responses: list[bytes]):
        self._responses = responses[:]
        self.written: list[bytes] = []
        self.state = ConnectionState.CONNECTED
        self.notification_handler = None

    @property
    def is_connected(self) -> bool:
        return self.state is ConnectionState.CONNECTED

    async def connect(self) -> None:
        self.state = ConnectionState.CONNECTED

    async def disconnect(self) -> None:
        self.state = ConnectionState.DISCONNECTED

    async def write(self, data: bytes) -> None:
        self.written.append(data)
        if not self._responses:
            raise RuntimeError("No fake responses left")
        asyncio.get_running_loop().call_soon(self.notification_handler, self._responses.pop(0))


def _attach(device, responses: list[bytes]) -> _FakeConnection:
    fake = _FakeConnection(responses)
    device._connection = fake  # Inject fake connection
    device._channel = CommandChannel(fake)
    return fake


class TestBot:
    @pytest.mark.asyncio
    async def test_press(self) -> None:
        bot = Bot(ADDRESS)
        fake = _attach(bot, [b"\x01\xff\x00"])

        await bot.press()

        assert fake.written == [bytes.fromhex("570100")]

    @pytest.mark.asyncio
    async def test_switch_commands(self) -> None:
        bot = Bot(ADDRESS)
        fake = _attach(bot, [b"\x01\xff\x00"] * 4)

        await bot.turn_on()
        await bot.turn_off()
        await bot.down()
        await bot.up()

        assert [frame.hex() for frame in fake.written] == ["570101", "570102", "570103", "570104"]

    @pytest.mark.asyncio
    async def test_error_status(self) -> None:
        bot = Bot(ADDRESS)
        _attach(bot, [b"\x02\xff\x00"])

        with pytest.raises(ProtocolError, match="0x02ff00"):
            await bot.press()


class TestHumidifier:
    @pytest.mark.asyncio
    async def test_percentage(self) -> None:
        humidifier = Humidifier(ADDRESS)
        fake = _attach(humidifier, [b"\x01\x00\x00"])

        await humidifier.percentage(42)

        assert fake.written == [bytes.fromhex("570101072a")]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("level", [101, -1])
    async def test_percentage_out_of_range_writes_nothing(self, level) -> None:
        humidifier = Humidifier(ADDRESS)
        fake = _attach(humidifier, [b"\x01\x00\x00"])
        fake.state = ConnectionState.DISCONNECTED

        with pytest.raises(ValueError, match="Level must be between 0 and 100"):
            await humidifier.percentage(level)

        assert fake.written == []
        assert fake.state is ConnectionState.DISCONNECTED

    @pytest.mark.asyncio
    async def test_busy_code_accepted(self) -> None:
        humidifier = Humidifier(ADDRESS)
        fake = _attach(humidifier, [b"\x05\x00\x00"])

        await humidifier.set_auto_mode()

        assert fake.written == [bytes.fromhex("57010105")]

    @pytest.mark.asyncio
    async def test_response_must_be_three_bytes(self) -> None:
        humidifier = Humidifier(ADDRESS)
        _attach(humidifier, [b"\x01\x00"])

        with pytest.raises(InvalidResponseError):
            await humidifier.turn_on()


class TestMotors:
    @pytest.mark.asyncio
    async def test_curtain_open_close(self) -> None:
        curtain = Curtain(ADDRESS)
        fake = _attach(curtain, [b"\x01\x00\x00"] * 3)

        await curtain.open()
        await curtain.close(MotorMode.SILENT)
        await curtain.pause()

        assert [frame.hex() for frame in fake.written] == [
            "570f450105ff00",
            "570f4501050164",
            "570f450100ff",
        ]

    @pytest.mark.asyncio
    async def test_blind_tilt_positions(self) -> None:
        blind = BlindTilt(ADDRESS)
        fake = _attach(blind, [b"\x01\x00\x00"] * 3)

        await blind.open()
        await blind.close_up()
        await blind.close_down()

        assert [frame[-1] for frame in fake.written] == [50, 100, 0]

    @pytest.mark.asyncio
    async def test_run_to_pos_out_of_range(self) -> None:
        curtain = Curtain(ADDRESS)
        fake = _attach(curtain, [])

        with pytest.raises(ValueError):
            await curtain.run_to_pos(120)

        assert fake.written == []


class TestLights:
    @pytest.mark.asyncio
    async def test_turn_on_returns_state(self) -> None:
        bulb = ColorBulb(ADDRESS)
        fake = _attach(bulb, [b"\x01\x80"])

        assert await bulb.turn_on() is True
        assert fake.written == [bytes.fromhex("570f47010101")]

    @pytest.mark.asyncio
    async def test_read_state_off(self) -> None:
        bulb = ColorBulb(ADDRESS)
        fake = _attach(bulb, [b"\x01\x00"])

        assert await bulb.read_state() is False
        assert fake.written == [bytes.fromhex("570f4801")]

    @pytest.mark.asyncio
    async def test_brightness_clamped(self) -> None:
        bulb = ColorBulb(ADDRESS)
        fake = _attach(bulb, [b"\x01\x80"])

        await bulb.set_brightness(150)

        assert fake.written == [bytes.fromhex("570f4701021464")]

    @pytest.mark.asyncio
    async def test_brightness_type_checked(self) -> None:
        bulb = ColorBulb(ADDRESS)
        fake = _attach(bulb, [])

        with pytest.raises(TypeError):
            await bulb.set_brightness("bright")

        assert fake.written == []

    @pytest.mark.asyncio
    async def test_rgb_clamped(self) -> None:
        bulb = ColorBulb(ADDRESS)
        fake = _attach(bulb, [b"\x01\x80"])

        await bulb.set_rgb(50, 300, -5, 128)

        assert fake.written == [bytes.fromhex("570f4701021232ff0080")]

    @pytest.mark.asyncio
    async def test_ceiling_light_brightness_carries_value(self) -> None:
        light = CeilingLight(ADDRESS)
        fake = _attach(light, [b"\x01\x80"])

        await light.set_brightness(30)

        assert fake.written == [bytes.fromhex("570f470102141e")]

    @pytest.mark.asyncio
    async def test_strip_light_uses_its_header(self) -> None:
        strip = StripLight(ADDRESS)
        fake = _attach(strip, [b"\x01\x80"])

        await strip.turn_off()

        assert fake.written == [bytes.fromhex("570f49010102")]

    @pytest.mark.asyncio
    async def test_state_error(self) -> None:
        bulb = ColorBulb(ADDRESS)
        _attach(bulb, [b"\x57\x01"])

        with pytest.raises(ProtocolError, match="The device returned an error: 0x5701"):
            await bulb.turn_on()


class TestPlugMini:
    @pytest.mark.asyncio
    async def test_toggle(self) -> None:
        plug = PlugMini(ADDRESS)
        fake = _attach(plug, [b"\x01\x00"])

        assert await plug.toggle() is False
        assert fake.written == [bytes.fromhex("570f50010280")]

    @pytest.mark.asyncio
    async def test_turn_on(self) -> None:
        plug = PlugMini(ADDRESS)
        fake = _attach(plug, [b"\x01\x80"])

        assert await plug.turn_on() is True
        assert fake.written == [bytes.fromhex("570f50010180")]

    @pytest.mark.asyncio
    async def test_set_state_appends_payload_to_header(self) -> None:
        plug = PlugMini(ADDRESS)
        fake = _attach(plug, [b"\x01\x00"])

        assert await plug.set_state(bytes([0x01, 0x00])) is False
        assert fake.written == [bytes.fromhex("570f50010100")]
