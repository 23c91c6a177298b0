"""Public keys and the base58 text form used to display them."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
PUBKEY_LENGTH = 32
MAX_BASE58_LENGTH = 44
PROGRAM_ID_TEXT = "recr1L3PCGKLbckBqMNcJhuuyU1zgo8nBhfLVsJNwr5"

_INDEX = {char: value for value, char in enumerate(ALPHABET)}


def encode_base58(data: bytes) -> str:
    """Encode bytes as base58 text, keeping leading zero bytes as '1'."""
    raw = bytes(data)
    stripped = raw.lstrip(b"\0")
    zeros = len(raw) - len(stripped)
    number = int.from_bytes(stripped, "big")
    digits = []
    while number:
        number, remainder = divmod(number, 58)
        digits.append(ALPHABET[remainder])
    return "1" * zeros + "".join(reversed(digits))


def decode_base58(text: str) -> bytes:
    """Decode base58 text into bytes; raise ValueError on a bad character."""
    stripped = text.lstrip("1")
    zeros = len(text) - len(stripped)
    number = 0
    for char in stripped:
        try:
            number = number * 58 + _INDEX[char]
        except KeyError:
            raise ValueError(f"invalid base58 character {char!r}") from None
    body = number.to_bytes((number.bit_length() + 7) // 8, "big")
    return b"\0" * zeros + body


@dataclass(frozen=True)
class Pubkey:
    """A 32-byte account address."""

    key: bytes

    def __post_init__(self) -> None:
        raw = bytes(self.key)
        if len(raw) != PUBKEY_LENGTH:
            raise ValueError(
                f"public key must be {PUBKEY_LENGTH} bytes, got {len(raw)}"
            )
        object.__setattr__(self, "key", raw)

    def to_bytes(self) -> bytes:
        """Return the raw 32 bytes of the key."""
        return self.key

    def __bytes__(self) -> bytes:
        return self.key

    def __str__(self) -> str:
        return encode_base58(self.key)


def parse_pubkey(text: str) -> Pubkey:
    """Parse a base58 public key string."""
    if len(text) > MAX_BASE58_LENGTH:
        raise ValueError("public key string is too long")
    raw = decode_base58(text)
    if len(raw) != PUBKEY_LENGTH:
        raise ValueError(
            f"public key must decode to {PUBKEY_LENGTH} bytes, got {len(raw)}"
        )
    return Pubkey(raw)


@lru_cache(maxsize=None)
def program_id() -> Pubkey:
    """Return the address of the record program."""
    return parse_pubkey(PROGRAM_ID_TEXT)