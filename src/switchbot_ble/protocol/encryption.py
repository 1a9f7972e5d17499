"""Encryption overlay for locks and relay switches.

Encrypted frame:  [cmd byte][key id:1][iv[0:2]][AES-128-CTR(command tail)]
Encrypted reply:  [status][3 header bytes][AES-128-CTR(payload)]

The IV is requested once per device object with an unencrypted
``57 000000 0f2103 <key id>`` exchange and then reused for every command
of that object. The protocol gives no per-message nonce at this layer;
reconnecting with a fresh device object is the only way to get a new IV.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

from Crypto.Cipher import AES

from ..exceptions import ConfigurationError, InvalidResponseError
from .commands import COMMAND_GET_CK_IV

KEY_ID_LENGTH: Final = 2  # hex chars
ENCRYPTION_KEY_LENGTH: Final = 32  # hex chars, 16 bytes
IV_LENGTH: Final = 16
RESPONSE_HEADER_LENGTH: Final = 4

_HEX_RE = re.compile(r"^[0-9a-fA-F]*$")


def encrypt(key: bytes, iv: bytes, data: bytes) -> bytes:
    """AES-128-CTR encrypt ``data``; the 128-bit counter starts at ``iv``.

    A new cipher is created per call, so every payload starts at the same
    keystream offset. Empty input returns empty output without touching
    the cipher.
    """
    if not data:
        return b""
    cipher = AES.new(key, AES.MODE_CTR, nonce=b"", initial_value=iv)
    return cipher.encrypt(data)


def decrypt(key: bytes, iv: bytes, data: bytes) -> bytes:
    """Inverse of ``encrypt`` (CTR mode is its own inverse)."""
    if not data:
        return b""
    cipher = AES.new(key, AES.MODE_CTR, nonce=b"", initial_value=iv)
    return cipher.decrypt(data)


def build_unencrypted_frame(key: str) -> bytes:
    """Build the plain lock/relay frame: key[0:2] + 000000 + key[2:]."""
    return bytes.fromhex(f"{key[:2]}000000{key[2:]}")


@dataclass
class EncryptionSession:
    """Key material and cached IV owned by exactly one device object.

    Attributes:
        key_id: Two hex chars identifying the pre-shared key
        key: 16-byte pre-shared key
        iv: Initialization vector, None until negotiated
    """

    key_id: str
    key: bytes
    iv: bytes | None = None

    @classmethod
    def from_hex(cls, key_id: str | None, encryption_key: str | None) -> EncryptionSession:
        """Validate and build a session from hex strings.

        Raises:
            ConfigurationError: If key id or key is missing or malformed
        """
        if not key_id:
            raise ConfigurationError("key_id is missing")
        if len(key_id) != KEY_ID_LENGTH or not _HEX_RE.match(key_id):
            raise ConfigurationError("key_id is invalid")
        if not encryption_key:
            raise ConfigurationError("encryption_key is missing")
        if len(encryption_key) != ENCRYPTION_KEY_LENGTH or not _HEX_RE.match(encryption_key):
            raise ConfigurationError("encryption_key is invalid")
        return cls(key_id=key_id.lower(), key=bytes.fromhex(encryption_key))

    @property
    def ready(self) -> bool:
        return self.iv is not None

    def iv_request(self) -> bytes:
        """Unencrypted frame asking the device for its IV."""
        return build_unencrypted_frame(f"{COMMAND_GET_CK_IV}{self.key_id}")

    def accept_iv(self, response: bytes) -> bytes:
        """Cache the IV carried after the 4-byte header of ``response``.

        Raises:
            InvalidResponseError: If the response does not carry 16 IV bytes
        """
        iv = bytes(response[RESPONSE_HEADER_LENGTH:])
        if len(iv) != IV_LENGTH:
            raise InvalidResponseError(
                f"IV response carries {len(iv)} bytes (need {IV_LENGTH}): 0x{bytes(response).hex()}",
                response,
            )
        self.iv = iv
        return iv

    def _require_iv(self) -> bytes:
        if self.iv is None:
            raise RuntimeError("IV not negotiated")
        return self.iv

    def encrypt_command(self, key: str) -> bytes:
        """Build the encrypted wire frame for a hex command key."""
        iv = self._require_iv()
        payload = encrypt(self.key, iv, bytes.fromhex(key[2:]))
        return bytes.fromhex(key[:2] + self.key_id + iv[:2].hex()) + payload

    def decrypt_response(self, response: bytes) -> bytes:
        """Keep the status byte, decrypt everything after the 4-byte header."""
        iv = self._require_iv()
        return bytes(response[:1]) + decrypt(
            self.key, iv, bytes(response[RESPONSE_HEADER_LENGTH:])
        )
