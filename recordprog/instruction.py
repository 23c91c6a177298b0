"""Record program instructions and their wire format."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from recordprog.errors import ProgramError, ProgramErrorKind
from recordprog.pubkey import Pubkey, program_id

_U64 = struct.Struct("<Q")
_U32 = struct.Struct("<I")
_U64_MAX = 2**64 - 1


def _invalid_data() -> ProgramError:
    return ProgramError(ProgramErrorKind.INVALID_INSTRUCTION_DATA)


def _check_u64(name: str, value: int) -> None:
    if not 0 <= value <= _U64_MAX:
        raise ValueError(f"{name} must fit in an unsigned 64-bit integer")


@dataclass(frozen=True)
class Initialize:
    """Create a new record; accounts: record (writable), authority."""


@dataclass(frozen=True)
class Write:
    """Write data into a record at an offset; accounts: record, signing authority."""

    offset: int
    data: bytes

    def __post_init__(self) -> None:
        _check_u64("offset", self.offset)
        raw = bytes(self.data)
        if len(raw) > 0xFFFFFFFF:
            raise ValueError("data is too long")
        object.__setattr__(self, "data", raw)


@dataclass(frozen=True)
class SetAuthority:
    """Hand a record to a new authority; accounts: record, signer, new authority."""


@dataclass(frozen=True)
class CloseAccount:
    """Close a record and drain its lamports; accounts: record, signer, receiver."""


@dataclass(frozen=True)
class Reallocate:
    """Grow a record to hold data_length bytes past the header."""

    data_length: int

    def __post_init__(self) -> None:
        _check_u64("data_length", self.data_length)


RecordInstruction = Initialize | Write | SetAuthority | CloseAccount | Reallocate

_BARE_TAGS = {Initialize: 0, SetAuthority: 2, CloseAccount: 3}
_BARE_BY_TAG = {tag: kind for kind, tag in _BARE_TAGS.items()}


def pack_instruction(instruction: RecordInstruction) -> bytes:
    """Serialize an instruction to bytes."""
    match instruction:
        case Write(offset=offset, data=data):
            return b"\x01" + _U64.pack(offset) + _U32.pack(len(data)) + data
        case Reallocate(data_length=data_length):
            return b"\x04" + _U64.pack(data_length)
    tag = _BARE_TAGS.get(type(instruction))
    if tag is None:
        raise TypeError(f"not a record instruction: {instruction!r}")
    return bytes([tag])


def _read_u64(rest: bytes) -> int:
    if len(rest) < _U64.size:
        raise _invalid_data()
    return _U64.unpack_from(rest)[0]


def unpack_instruction(data: bytes) -> RecordInstruction:
    """Parse bytes into an instruction; raise ProgramError on bad input."""
    raw = bytes(data)
    if not raw:
        raise _invalid_data()
    tag, rest = raw[0], raw[1:]
    if tag in _BARE_BY_TAG:
        return _BARE_BY_TAG[tag]()
    if tag == 1:
        offset = _read_u64(rest)
        if len(rest) < _U64.size + _U32.size:
            raise _invalid_data()
        (length,) = _U32.unpack_from(rest, _U64.size)
        payload = rest[_U64.size + _U32.size :]
        if len(payload) < length:
            raise _invalid_data()
        return Write(offset=offset, data=payload[:length])
    if tag == 4:
        return Reallocate(data_length=_read_u64(rest))
    raise _invalid_data()


@dataclass(frozen=True)
class AccountMeta:
    """An account referenced by an instruction."""

    pubkey: Pubkey
    is_signer: bool
    is_writable: bool


@dataclass(frozen=True)
class Instruction:
    """A program call: target program, accounts and data."""

    program_id: Pubkey
    accounts: tuple[AccountMeta, ...]
    data: bytes = field(default=b"")

    def __post_init__(self) -> None:
        object.__setattr__(self, "accounts", tuple(self.accounts))
        object.__setattr__(self, "data", bytes(self.data))


def _build(
    instruction: RecordInstruction,
    record_account: Pubkey,
    second: Pubkey,
    *,
    signed: bool = True,
    third: AccountMeta | None = None,
) -> Instruction:
    accounts = [
        AccountMeta(record_account, is_signer=False, is_writable=True),
        AccountMeta(second, is_signer=signed, is_writable=False),
    ]
    if third is not None:
        accounts.append(third)
    return Instruction(program_id(), tuple(accounts), pack_instruction(instruction))


def initialize(record_account: Pubkey, authority: Pubkey) -> Instruction:
    """Build an Initialize instruction."""
    return _build(Initialize(), record_account, authority, signed=False)


def write(record_account: Pubkey, signer: Pubkey, offset: int, data: bytes) -> Instruction:
    """Build a Write instruction."""
    return _build(Write(offset=offset, data=data), record_account, signer)


def set_authority(
    record_account: Pubkey, signer: Pubkey, new_authority: Pubkey
) -> Instruction:
    """Build a SetAuthority instruction."""
    third = AccountMeta(new_authority, is_signer=False, is_writable=False)
    return _build(SetAuthority(), record_account, signer, third=third)


def close_account(record_account: Pubkey, signer: Pubkey, receiver: Pubkey) -> Instruction:
    """Build a CloseAccount instruction."""
    third = AccountMeta(receiver, is_signer=False, is_writable=True)
    return _build(CloseAccount(), record_account, signer, third=third)


def reallocate(record_account: Pubkey, signer: Pubkey, data_length: int) -> Instruction:
    """Build a Reallocate instruction."""
    return _build(Reallocate(data_length=data_length), record_account, signer)