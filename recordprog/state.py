"""Header stored at the start of every record account."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from recordprog.errors import ProgramError, ProgramErrorKind
from recordprog.pubkey import PUBKEY_LENGTH, Pubkey

CURRENT_VERSION = 1
WRITABLE_START_INDEX = 1 + PUBKEY_LENGTH


@dataclass
class RecordData:
    """Record header: a version byte followed by the authority's key."""

    version: int
    authority: Pubkey

    CURRENT_VERSION: ClassVar[int] = CURRENT_VERSION
    WRITABLE_START_INDEX: ClassVar[int] = WRITABLE_START_INDEX
    SIZE: ClassVar[int] = WRITABLE_START_INDEX

    def __post_init__(self) -> None:
        if not 0 <= self.version <= 0xFF:
            raise ValueError("version must fit in one byte")

    def is_initialized(self) -> bool:
        """True once the header carries the current version."""
        return self.version == CURRENT_VERSION

    def pack(self) -> bytes:
        """Return the header's byte layout."""
        return bytes([self.version]) + self.authority.to_bytes()


def unpack_record_data(data: bytes) -> RecordData:
    """Read a header from exactly WRITABLE_START_INDEX bytes."""
    raw = bytes(data)
    if len(raw) != WRITABLE_START_INDEX:
        raise ProgramError(ProgramErrorKind.INVALID_ARGUMENT)
    return RecordData(version=raw[0], authority=Pubkey(raw[1:]))