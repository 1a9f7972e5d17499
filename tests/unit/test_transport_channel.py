"""Test the single-slot command channel."""

from __future__ import annotations

import asyncio

import pytest

from switchbot_ble.exceptions import BLEConnectionError, BLETimeoutError, ProtocolError
from switchbot_ble.protocol.responses import BOT_RESPONSE
from switchbot_ble.transport import CommandChannel


class _FakeConnection:
    """Answers each write with the next scripted notification (None = silence)."""

    def __init__(self, responses: list[bytes | None], delay: float = 0.0):
        self._responses = responses[:]
        self._delay = delay
        self.written: list[bytes] = []
        self.notification_handler = None

    async def write(self, data: bytes) -> None:
        self.written.append(data)
        if not self._responses:
            raise RuntimeError("No fake responses left")
        response = self._responses.pop(0)
        if response is not None:
            loop = asyncio.get_running_loop()
            loop.call_later(self._delay, self.notification_handler, response)


class _FailingConnection:
    notification_handler = None

    async def write(self, data: bytes) -> None:
        raise BLEConnectionError("Write failed: gone")


class _RecordingSink:
    def __init__(self):
        self.messages: list[tuple[str, str]] = []

    def __call__(self, level: str, message: str) -> None:
        self.messages.append((level, message))


@pytest.mark.asyncio
async def test_send_returns_notification() -> None:
    """send should write the frame and return the matching notification."""
    fake = _FakeConnection([b"\x01\xff\x00"])
    channel = CommandChannel(fake)

    response = await channel.send(b"\x57\x01\x00", check=BOT_RESPONSE)

    assert fake.written == [b"\x57\x01\x00"]
    assert response == b"\x01\xff\x00"
    assert not channel.busy


@pytest.mark.asyncio
async def test_send_validates_response() -> None:
    fake = _FakeConnection([b"\x03\xff\x00"])
    channel = CommandChannel(fake)

    with pytest.raises(ProtocolError):
        await channel.send(b"\x57\x01\x00", check=BOT_RESPONSE)


@pytest.mark.asyncio
async def test_timeout_raises_and_frees_slot() -> None:
    fake = _FakeConnection([None])
    channel = CommandChannel(fake)

    with pytest.raises(BLETimeoutError):
        await channel.send(b"\x57\x01\x00", timeout=0.01)

    assert not channel.busy


@pytest.mark.asyncio
async def test_late_response_not_attributed_to_next_command() -> None:
    """A notification for a timed-out command is dropped, not handed to the next one."""
    fake = _FakeConnection([None, b"\x05\x00\x00"])
    sink = _RecordingSink()
    channel = CommandChannel(fake, sink)

    with pytest.raises(BLETimeoutError):
        await channel.send(b"\x57\x01\x01", timeout=0.01)

    # The answer to the first command shows up after its timeout
    channel.handle_notification(b"\x01\xff\x00")

    response = await channel.send(b"\x57\x01\x02", timeout=1.0)

    assert response == b"\x05\x00\x00"
    assert any("Dropping" in message for _, message in sink.messages)


@pytest.mark.asyncio
async def test_concurrent_sends_are_serialized() -> None:
    """Two callers on one peripheral never have two commands in flight."""
    fake = _FakeConnection([b"\x01\x00\x00", b"\x01\x01\x01"], delay=0.01)
    channel = CommandChannel(fake)
    in_flight = 0
    max_in_flight = 0
    original_write = fake.write

    async def counting_write(data: bytes) -> None:
        nonlocal in_flight, max_in_flight
        in_flight += 1
        max_in_flight = max(max_in_flight, in_flight)
        await original_write(data)

    def counting_handler(data: bytes) -> None:
        nonlocal in_flight
        in_flight -= 1
        channel.handle_notification(data)

    fake.write = counting_write
    fake.notification_handler = counting_handler

    first, second = await asyncio.gather(
        channel.send(b"\x57\x01\x01"),
        channel.send(b"\x57\x01\x02"),
    )

    assert max_in_flight == 1
    assert first == b"\x01\x00\x00"
    assert second == b"\x01\x01\x01"
    assert fake.written == [b"\x57\x01\x01", b"\x57\x01\x02"]


@pytest.mark.asyncio
async def test_write_failure_propagates_and_frees_slot() -> None:
    channel = CommandChannel(_FailingConnection())

    with pytest.raises(BLEConnectionError):
        await channel.send(b"\x57\x01\x00")

    assert not channel.busy


def test_unsolicited_notification_dropped() -> None:
    sink = _RecordingSink()
    channel = CommandChannel(_FakeConnection([]), sink)

    channel.handle_notification(b"\x01")

    assert sink.messages == [("debug", "Dropping unsolicited notification 0x01")]
