"""BLE response validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from ..exceptions import InvalidResponseError, ProtocolError


@dataclass(frozen=True)
class ResponseCheck:
    """Accepted shape of a device family's response.

    Attributes:
        accepted: Status codes treated as success
        status_offset: Index of the status byte (0 for most families)
        length: Exact response length, if the family fixes one
        min_length: Minimum response length
    """

    accepted: frozenset[int] = field(default_factory=frozenset)
    status_offset: int = 0
    length: int | None = None
    min_length: int = 1

    def validate(self, data: bytes) -> int:
        """Validate a response and return its status code.

        Raises:
            InvalidResponseError: If the length is wrong
            ProtocolError: If the status code is not accepted
        """
        if self.length is not None and len(data) != self.length:
            raise InvalidResponseError(
                f"Expecting a {self.length}-byte response, got instead: 0x{data.hex()}",
                data,
            )
        if len(data) < max(self.min_length, self.status_offset + 1):
            raise InvalidResponseError(
                f"Response too short: {len(data)} bytes (0x{data.hex()})",
                data,
            )

        code = data[self.status_offset]
        if code not in self.accepted:
            raise ProtocolError(f"The device returned an error: 0x{data.hex()}", data)
        return code


# Bot and humidifier: [status, ...] with 0x01 ok, 0x05 ok (busy/already in state)
BOT_RESPONSE: Final = ResponseCheck(accepted=frozenset({0x01, 0x05}), length=3)
HUMIDIFIER_RESPONSE: Final = BOT_RESPONSE
CURTAIN_RESPONSE: Final = ResponseCheck(accepted=frozenset({0x01}), length=3)
# Bulb, strip, ceiling light and plug: [0x57?, state] with 0x80 = on, 0x00 = off
STATE_RESPONSE: Final = ResponseCheck(
    accepted=frozenset({0x00, 0x80}), status_offset=1, length=2
)
LOCK_RESPONSE: Final = ResponseCheck(accepted=frozenset({0x01, 0x06}), min_length=3)
RELAY_RESPONSE: Final = ResponseCheck(accepted=frozenset({0x01}))


def is_on_from_state_response(data: bytes) -> bool:
    """Validate a 2-byte state response and return the on/off state."""
    return STATE_RESPONSE.validate(data) == 0x80
